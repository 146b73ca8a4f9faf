# loan_planner/core/logs.py
from __future__ import annotations

import logging
import os
import sys
from logging.handlers import RotatingFileHandler

ROOT_LOGGER_NAME = "loan_planner"
_FORMAT = "%(asctime)s %(levelname)s %(name)s %(message)s"
_DATEFMT = "(%Y-%m-%d %H:%M:%S)"


def debug_enabled() -> bool:
    return os.getenv("LOANPLAN_DEBUG", "").strip().lower() in {"1", "true", "yes", "on"}


def configure_logging(debug: bool | None = None) -> logging.Logger:
    """
    Attach handlers to the package logger (idempotent).

    - stderr handler at WARNING, or DEBUG when debug is on
    - rotating file handler when LOANPLAN_LOG_FILE is set (best effort)
    """
    if debug is None:
        debug = debug_enabled()

    logger = logging.getLogger(ROOT_LOGGER_NAME)
    logger.setLevel(logging.DEBUG if debug else logging.WARNING)

    # Avoid duplicate handlers if called again from tests/REPL
    if logger.handlers:
        return logger

    formatter = logging.Formatter(fmt=_FORMAT, datefmt=_DATEFMT)

    stream = logging.StreamHandler(sys.stderr)
    stream.setFormatter(formatter)
    logger.addHandler(stream)

    log_path = os.getenv("LOANPLAN_LOG_FILE", "").strip()
    if log_path:
        try:
            parent = os.path.dirname(log_path)
            if parent:
                os.makedirs(parent, exist_ok=True)
            handler = RotatingFileHandler(log_path, maxBytes=1_000_000, backupCount=3, encoding="utf-8")
            handler.setFormatter(formatter)
            logger.addHandler(handler)
        except OSError as exc:
            # stderr logging keeps working without the file
            logger.warning("could not open log file %s: %s", log_path, exc)

    return logger


__all__ = ["ROOT_LOGGER_NAME", "configure_logging", "debug_enabled"]
