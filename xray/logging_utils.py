"""xray.logging_utils

One named logger per process: a rotating `xray.log` under LOG_DIR for
post-mortems of fixture runs, plus console output so `xray generate-fixtures`
shows each saved record as it happens.
"""

from __future__ import annotations
import logging
from logging.handlers import RotatingFileHandler
from pathlib import Path

_FORMAT = "%(asctime)s %(levelname)s %(name)s %(message)s"


def build_logger(log_dir: str, name: str = "xray", level: int | str = logging.INFO) -> logging.Logger:
    """Return `name`, attaching handlers only on first use (Streamlit reruns the script)."""
    logger = logging.getLogger(name)
    logger.setLevel(level)
    if logger.handlers:
        return logger

    fmt = logging.Formatter(_FORMAT)
    handlers: list[logging.Handler] = [logging.StreamHandler()]
    Path(log_dir).mkdir(parents=True, exist_ok=True)
    handlers.append(
        RotatingFileHandler(str(Path(log_dir) / "xray.log"), maxBytes=2_000_000, backupCount=5, encoding="utf-8")
    )
    for h in handlers:
        h.setFormatter(fmt)
        logger.addHandler(h)
    return logger
