"""
Local Store - a keyed JSON blob on disk.

The client's equivalent of browser local storage. Every set/remove is
written to disk before it returns, so a crash never loses an acknowledged
change. No debouncing and no cross-process coordination.
"""

import json
import logging
import os
from pathlib import Path
from typing import Any, Dict, List, Optional, Union

logger = logging.getLogger(__name__)


def default_store_path() -> Path:
    """~/.campusnav/state.json unless CAMPUSNAV_STATE overrides it."""
    override = os.environ.get("CAMPUSNAV_STATE")
    if override:
        return Path(override)
    return Path.home() / ".campusnav" / "state.json"


class LocalStore:
    """
    Key/value store persisted as one JSON object.

    path=None keeps everything in memory (tests, throwaway sessions).
    """

    def __init__(self, path: Optional[Union[str, Path]] = None):
        self.path = Path(path) if path is not None else None
        self._data: Dict[str, Any] = self._read()

    def _read(self) -> Dict[str, Any]:
        if self.path is None or not self.path.exists():
            return {}
        try:
            data = json.loads(self.path.read_text(encoding="utf-8"))
        except (OSError, json.JSONDecodeError, UnicodeDecodeError) as e:
            logger.warning("Ignoring unreadable local state %s: %s", self.path, e)
            return {}
        return data if isinstance(data, dict) else {}

    def _write(self) -> None:
        if self.path is None:
            return
        self.path.parent.mkdir(parents=True, exist_ok=True)
        tmp = self.path.with_suffix(self.path.suffix + ".tmp")
        tmp.write_text(json.dumps(self._data, indent=2, ensure_ascii=False), encoding="utf-8")
        tmp.replace(self.path)

    def get(self, key: str, default: Any = None) -> Any:
        return self._data.get(key, default)

    def set(self, key: str, value: Any) -> None:
        self._data[key] = value
        self._write()

    def remove(self, key: str) -> None:
        if key in self._data:
            del self._data[key]
            self._write()

    def keys(self) -> List[str]:
        return list(self._data)

    def clear(self) -> None:
        self._data = {}
        self._write()


def open_store(path: Optional[Union[str, Path]] = None) -> LocalStore:
    """Store at `path`, or at the default per-user location."""
    return LocalStore(path if path is not None else default_store_path())
