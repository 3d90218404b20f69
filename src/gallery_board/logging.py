"""Logging initialization using loguru."""

from __future__ import annotations

import sys
from pathlib import Path

from loguru import logger


def init_logging(level: str = "INFO", log_dir: str | Path | None = None) -> None:
    """Log to stderr, and to rotating files under ``log_dir`` when given."""
    logger.remove()
    logger.add(sys.stderr, level=level, backtrace=False, diagnose=False)
    if log_dir is None:
        return
    log_path = Path(log_dir)
    log_path.mkdir(parents=True, exist_ok=True)
    logger.add(
        str(log_path / "gallery_{time:YYYYMMDD}.log"),
        rotation="10 MB",
        retention="10 days",
        backtrace=False,
        diagnose=False,
        level=level,
    )
