"""Runtime settings, read from the environment."""

from __future__ import annotations

import os
from dataclasses import dataclass
from pathlib import Path

FALSY = {"0", "false", "no", "off"}


@dataclass(frozen=True)
class Settings:
    data_dir: Path
    secret_key: str = "dev-change-me"
    log_level: str = "INFO"
    log_dir: Path | None = None
    strict_urls: bool = True


def load_settings(environ=None) -> Settings:
    env = os.environ if environ is None else environ
    data_dir = env.get("GALLERY_DATA_DIR") or str(Path.home() / ".gallery_board")
    log_dir = env.get("GALLERY_LOG_DIR")
    return Settings(
        data_dir=Path(data_dir).expanduser(),
        secret_key=env.get("FLASK_SECRET", "dev-change-me"),
        log_level=(env.get("GALLERY_LOG_LEVEL") or "INFO").upper(),
        log_dir=Path(log_dir).expanduser() if log_dir else None,
        strict_urls=(env.get("GALLERY_STRICT_URLS", "1").strip().lower() not in FALSY),
    )
