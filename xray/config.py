"""xray.config

Centralized configuration for the application.

Uses environment variables (optionally from a .env file, see `xray.env_loader`).
"""

from __future__ import annotations
from dataclasses import dataclass
import os

from xray.correlation.engine import CorrelationPolicy
from xray.paths import data_dir, traces_dir


def _env(name: str, default: str | None = None) -> str | None:
    val = os.getenv(name)
    return val if val is not None else default


def _env_bool(name: str, default: bool = False) -> bool:
    v = os.getenv(name)
    if v is None:
        return default
    return v.strip().lower() in ("1", "true", "yes", "y", "on")


def _env_int(name: str, default: int) -> int:
    v = os.getenv(name)
    if v is None:
        return default
    try:
        return int(v)
    except ValueError:
        return default


def _env_float(name: str, default: float) -> float:
    v = os.getenv(name)
    if v is None:
        return default
    try:
        return float(v)
    except ValueError:
        return default


@dataclass(frozen=True)
class Settings:
    """Application settings loaded from environment variables."""

    # Record store
    store_backend: str  # json|sqlite
    traces_dir: str
    sqlite_path: str

    # Correlation
    decision_service: str
    decision_operation: str
    price_threshold: float
    anchor_window_ms: int
    stitch_window_ms: int

    # Demo pipeline
    products_path: str

    # UI / logging
    default_debug: bool
    log_dir: str

    @staticmethod
    def load() -> "Settings":
        return Settings(
            store_backend=(_env("XRAY_STORE_BACKEND", "json") or "json").strip().lower(),
            traces_dir=_env("XRAY_TRACES_DIR", str(traces_dir())) or str(traces_dir()),
            sqlite_path=_env("XRAY_SQLITE_PATH", str(data_dir() / "traces.db")) or str(data_dir() / "traces.db"),
            decision_service=_env("XRAY_DECISION_SERVICE", "ranking-service") or "ranking-service",
            decision_operation=_env("XRAY_DECISION_OPERATION", "filter_and_rank") or "filter_and_rank",
            price_threshold=_env_float("XRAY_PRICE_THRESHOLD", 10.0),
            anchor_window_ms=_env_int("XRAY_ANCHOR_WINDOW_MS", 15000),
            stitch_window_ms=_env_int("XRAY_STITCH_WINDOW_MS", 3000),
            products_path=_env("XRAY_PRODUCTS_PATH", str(data_dir() / "dummy_products.json")) or str(data_dir() / "dummy_products.json"),
            default_debug=_env_bool("UI_DEFAULT_DEBUG", False),
            log_dir=_env("LOG_DIR", "logs") or "logs",
        )

    def correlation_policy(self) -> CorrelationPolicy:
        return CorrelationPolicy(
            decision_service=self.decision_service,
            decision_operation=self.decision_operation,
            price_threshold=self.price_threshold,
            anchor_window_ms=self.anchor_window_ms,
            stitch_window_ms=self.stitch_window_ms,
        )
