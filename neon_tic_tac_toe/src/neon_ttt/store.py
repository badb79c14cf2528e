"""
Key-value persistence for the session record.

A Store holds string values under string keys, like the browser's
localStorage. The session layer depends on the Store protocol only.
"""

import contextlib
import json
import logging
import os
import tempfile
from typing import Dict, Optional, Protocol

logger = logging.getLogger(__name__)


# PUBLIC_INTERFACE
class Store(Protocol):
    """Synchronous key-value capability."""

    def load(self, key: str) -> Optional[str]:
        ...

    def save(self, key: str, value: str) -> None:
        ...


# PUBLIC_INTERFACE
class MemoryStore:
    """Dict-backed store for tests and throwaway sessions."""

    def __init__(self, data: Optional[Dict[str, str]] = None):
        self.data: Dict[str, str] = dict(data or {})

    def load(self, key: str) -> Optional[str]:
        return self.data.get(key)

    def save(self, key: str, value: str) -> None:
        self.data[key] = value


# PUBLIC_INTERFACE
class JsonFileStore:
    """
    Store backed by one JSON object file mapping keys to string values.

    Each save rewrites the whole file through a temp file and os.replace, so a
    reader never sees a half-written slot.
    """

    def __init__(self, path: str):
        self.path = path

    def _read_all(self) -> Dict[str, str]:
        try:
            with open(self.path, "r", encoding="utf-8") as fh:
                data = json.load(fh)
        except FileNotFoundError:
            return {}
        except ValueError:
            # JSONDecodeError and UnicodeDecodeError both land here.
            logger.warning("Store file %s is not valid JSON; starting empty", self.path)
            return {}
        if not isinstance(data, dict):
            logger.warning("Store file %s does not hold a JSON object; starting empty", self.path)
            return {}
        return data

    def load(self, key: str) -> Optional[str]:
        value = self._read_all().get(key)
        return value if isinstance(value, str) else None

    def save(self, key: str, value: str) -> None:
        data = self._read_all()
        data[key] = value
        directory = os.path.dirname(os.path.abspath(self.path))
        os.makedirs(directory, exist_ok=True)
        fd, tmp_path = tempfile.mkstemp(dir=directory, prefix=".neon_ttt-", suffix=".tmp")
        try:
            fh = os.fdopen(fd, "w", encoding="utf-8")
        except BaseException:
            os.close(fd)
            with contextlib.suppress(OSError):
                os.unlink(tmp_path)
            raise
        try:
            with fh:
                json.dump(data, fh, indent=2, sort_keys=True)
            os.replace(tmp_path, self.path)
        except BaseException:
            with contextlib.suppress(OSError):
                os.unlink(tmp_path)
            raise
        logger.debug("Saved %s to %s", key, self.path)
