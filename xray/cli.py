"""xray.cli

Command line entry point.

Usage:
  xray generate-fixtures     # clear the store, record one good and one bad run
  xray serve [--port 8501]   # start the Streamlit dashboard
"""

from __future__ import annotations

import argparse
import subprocess
import sys

from xray.config import Settings
from xray.demo.pipeline import RUN_GAP_MS, generate_fixtures, load_products
from xray.env_loader import load_env
from xray.errors import ConfigError, StorageError
from xray.logging_utils import build_logger
from xray.main import build_tracer
from xray.paths import streamlit_app_path


def _generate(settings: Settings) -> int:
    logger = build_logger(settings.log_dir)
    catalog = load_products(settings.products_path)
    try:
        tracer = build_tracer(settings)
    except (StorageError, ConfigError) as e:
        logger.error("Cannot open record store: %s", e)
        return 1

    try:
        generate_fixtures(
            tracer, catalog=catalog, logger=logger,
            run_gap_ms=max(RUN_GAP_MS, 4 * settings.anchor_window_ms),
        )
    except StorageError as e:
        logger.error("Fixture generation failed: %s", e)
        return 1
    finally:
        tracer.store.close()
    logger.info("Fixtures written")
    return 0


def _serve(port: int | None) -> int:
    cmd = [sys.executable, "-m", "streamlit", "run", str(streamlit_app_path())]
    if port:
        cmd += ["--server.port", str(port)]
    return subprocess.call(cmd)


def main(argv: list[str] | None = None) -> int:
    load_env()  # load .env if present
    ap = argparse.ArgumentParser(prog="xray", description="Pipeline decision tracer")
    sub = ap.add_subparsers(dest="command", required=True)
    sub.add_parser("generate-fixtures", help="Clear the store and record one good and one bad sample run")
    serve = sub.add_parser("serve", help="Start the dashboard")
    serve.add_argument("--port", type=int, default=None)
    args = ap.parse_args(argv)

    if args.command == "generate-fixtures":
        return _generate(Settings.load())
    return _serve(args.port)


if __name__ == "__main__":
    raise SystemExit(main())
