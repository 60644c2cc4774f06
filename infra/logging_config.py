# infra/logging_config.py
from __future__ import annotations
import logging
import os
from logging.handlers import RotatingFileHandler
from pathlib import Path

from infra.operational_support import TraceIdLogFilter
from infra.path import user_data_dir


def _log_level() -> int:
    name = os.getenv("PM_LOG_LEVEL", "INFO").strip().upper()
    level = logging.getLevelName(name)
    return level if isinstance(level, int) else logging.INFO


def setup_logging(log_dir: Path | None = None) -> Path:
    """
    Configure root logging: a rotating file under the per-user data dir
    and a console handler. Both carry the current trace id.
    """
    log_dir = log_dir or (user_data_dir() / "logs")
    log_dir.mkdir(parents=True, exist_ok=True)
    log_file = log_dir / "schedule.log"

    logger = logging.getLogger()
    logger.setLevel(_log_level())

    # Re-running setup must not stack handlers
    for handler in list(logger.handlers):
        if getattr(handler, "_schedule_handler", False):
            logger.removeHandler(handler)
            handler.close()

    trace_filter = TraceIdLogFilter()

    file_handler = RotatingFileHandler(
        log_file,
        maxBytes=1_000_000,  # 1 MB per file
        backupCount=5,
        encoding="utf-8",
    )
    file_handler.addFilter(trace_filter)
    file_handler.setFormatter(
        logging.Formatter("%(asctime)s [%(levelname)s] trace=%(trace_id)s %(name)s - %(message)s")
    )
    file_handler._schedule_handler = True
    logger.addHandler(file_handler)

    console = logging.StreamHandler()
    console.addFilter(trace_filter)
    console.setFormatter(logging.Formatter("%(levelname)s [trace=%(trace_id)s]: %(message)s"))
    console._schedule_handler = True
    logger.addHandler(console)

    logger.info("Logging initialized. Log file at %s", log_file)
    return log_file


__all__ = ["setup_logging"]
