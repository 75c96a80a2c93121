"""ui.streamlit_app

Streamlit UI for the pipeline decision tracer:
- Dashboard: record totals, good/bad run entry points, recent decision records
- Detail view (?trace=<ref>): the reconstructed run, one expander per step
- Debug mode shows raw step JSON and how the run was stitched together
"""

from __future__ import annotations

import json
from datetime import datetime

import pandas as pd
import streamlit as st

from xray.config import Settings
from xray.contracts.models import StepExplanation, StoredRecord
from xray.env_loader import load_env
from xray.errors import MalformedRecord, NotFound, StorageError
from xray.main import TraceService, build_service
from ui.components import (
    evaluations_frame,
    is_fallback,
    run_title,
    selected_competitor,
    status_badge_html,
    step_title,
)
from ui.ui_theme import css


def _init_state(settings: Settings):
    if "debug" not in st.session_state:
        st.session_state.debug = settings.default_debug


def _open_trace(ref: str):
    st.query_params["trace"] = ref
    st.rerun()


def _fmt_ts(ms: int) -> str:
    return datetime.fromtimestamp(ms / 1000).strftime("%Y-%m-%d %H:%M:%S")


def _render_dashboard(service: TraceService):
    try:
        listing = service.listing()
        recent = service.recent_runs()
    except StorageError:
        st.error("Unable to load traces.")
        return

    c1, c2, c3 = st.columns(3)
    c1.metric("Total Traces", listing.total_records)
    c2.metric("Successful Runs", listing.good.count)
    c3.metric("Failed Runs", listing.bad.count)

    runs = [
        ("Good Run", "Normal price → successful competitor found", "success", listing.good),
        ("Bad Run", "Low reference price → no competitor found", "warning", listing.bad),
    ]
    cols = st.columns(2)
    for col, (name, description, badge, entry) in zip(cols, runs):
        with col.container(border=True):
            st.markdown(f"#### {name} {status_badge_html(badge)}", unsafe_allow_html=True)
            st.caption(description)
            if entry.has_data:
                if st.button("View Decision Trail →", key=f"open_{badge}", width="stretch"):
                    _open_trace(entry.ref)
            else:
                st.info("No trace data available. Run `xray generate-fixtures` first.")

    if recent:
        st.markdown("### Recent decision records")
        df = pd.DataFrame(
            [
                {
                    "Completed": _fmt_ts(r.timestamp),
                    "Status": r.status,
                    "Price class": r.outcome,
                    "Reference price": r.price,
                    "Qualified": r.qualified_count,
                    "Ref": r.ref,
                }
                for r in recent
            ]
        )
        st.dataframe(df, width="stretch", hide_index=True)
        choice = st.selectbox("Open run", options=[r.ref for r in recent], index=None, placeholder="Pick a decision record")
        if choice:
            _open_trace(choice)


def _render_step(entry: StoredRecord, debug: bool):
    rec = entry.record
    with st.expander(step_title(rec), expanded=False):
        st.markdown(status_badge_html(rec.status), unsafe_allow_html=True)
        expl = StepExplanation.from_metadata(rec.metadata)

        if expl.reasoning:
            st.markdown("**Reasoning**")
            st.caption(expl.reasoning)

        if expl.evaluations is not None:
            st.markdown("**Candidate Evaluations**")
            if expl.evaluations:
                st.dataframe(evaluations_frame(expl.evaluations), width="stretch", hide_index=True)
                st.caption(f"{expl.qualified_count} qualified out of {len(expl.evaluations)} evaluated")
            else:
                st.caption("No candidate evaluations recorded.")

        title = selected_competitor(rec.output)
        if title:
            st.markdown("**Selected Competitor**")
            st.markdown(f"##### {title}")
        if is_fallback(rec.output):
            st.error("No competitor found: fallback triggered")

        if debug:
            st.code(json.dumps(rec.to_dict(), indent=2, default=str), language="json")


def _render_detail(service: TraceService, ref: str):
    if st.button("← Back to Dashboard"):
        st.query_params.clear()
        st.rerun()

    try:
        detail = service.reconstruct(ref)
    except (NotFound, MalformedRecord):
        st.warning("No such trace.")
        return
    except StorageError:
        st.error("Unable to load traces.")
        return

    view = detail.view
    st.markdown(f"## Trace: {run_title(view.is_bad)}")
    st.caption("Full decision pipeline for competitor selection")

    if st.session_state.debug:
        st.caption(
            f"mode={view.mode} · price class={view.outcome} · "
            f"decision record={view.target.id if view.target else '-'} · steps={len(view.steps)}"
        )

    if not detail.steps:
        st.info("No steps found near this record.")
    for entry in detail.steps:
        _render_step(entry, st.session_state.debug)


def main():
    load_env()
    settings = Settings.load()
    _init_state(settings)

    st.set_page_config(page_title="X-Ray", page_icon="🔎", layout="wide")
    st.markdown(css(), unsafe_allow_html=True)

    st.markdown(
        "<div class='xray-header'><span class='xray-badge'>🔎 X-Ray</span>"
        "<b>Pipeline Decision Tracer</b>"
        "<span class='xray-muted'>Why did the pipeline produce this output?</span></div>",
        unsafe_allow_html=True,
    )

    with st.sidebar:
        st.markdown("### Settings")
        st.session_state.debug = st.toggle("Debug mode", value=st.session_state.debug)
        st.caption(f"Store: {settings.store_backend}")

    try:
        service = build_service(settings)
    except StorageError:
        st.error("Unable to load traces.")
        return

    try:
        ref = st.query_params.get("trace")
        if ref:
            _render_detail(service, ref)
        else:
            _render_dashboard(service)
    finally:
        service.store.close()


if __name__ == "__main__":
    main()
