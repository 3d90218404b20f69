"""Key/value persistence used by the item store.

The store only needs two operations: read a string by key (``None`` when
absent) and write a string by key.
"""

from __future__ import annotations

import os
import re
import tempfile
from pathlib import Path

from loguru import logger

KEY_RE = re.compile(r"^[A-Za-z0-9][A-Za-z0-9._\-]*$")


class MemoryStorage:
    """In-process storage; contents vanish with the process."""

    def __init__(self, initial=None):
        self._data = dict(initial or {})

    def get(self, key: str) -> str | None:
        return self._data.get(key)

    def set(self, key: str, value: str) -> None:
        self._data[key] = value

    def __contains__(self, key):
        return key in self._data


class FileStorage:
    """One UTF-8 file per key inside ``directory``."""

    def __init__(self, directory: str | Path):
        self.directory = Path(directory)

    def _path(self, key: str) -> Path:
        if not KEY_RE.match(key):
            raise ValueError(f"invalid storage key: {key!r}")
        return self.directory / key

    def get(self, key: str) -> str | None:
        path = self._path(key)
        try:
            with open(path, encoding="utf-8") as f:
                return f.read()
        except FileNotFoundError:
            return None
        except (OSError, UnicodeDecodeError) as e:
            logger.warning("Could not read {}: {}", path, e)
            return None

    def set(self, key: str, value: str) -> None:
        path = self._path(key)
        self.directory.mkdir(parents=True, exist_ok=True)
        fd, tmp = tempfile.mkstemp(prefix=f".{key}.", suffix=".tmp", dir=self.directory)
        try:
            with os.fdopen(fd, "w", encoding="utf-8", newline="") as f:
                f.write(value)
            os.replace(tmp, path)
        except BaseException:
            try:
                os.unlink(tmp)
            except OSError:
                pass
            raise

    def __contains__(self, key):
        return self._path(key).exists()
