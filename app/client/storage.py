"""
Persistent key/value storage for client state.

Mirrors browser localStorage: string keys, string values, synchronous
reads and writes. Backed by a JSON file, or by memory when no path is given.
"""
import json
import logging
from pathlib import Path
from typing import Dict, Optional, Union

logger = logging.getLogger(__name__)

DEFAULT_STORAGE_PATH = Path.home() / ".daily_counter" / "local_storage.json"

# Keys shared with the dashboard
USER_ID_KEY = "userId"
LOCAL_COUNT_KEY = "localCount"
LAST_SYNCED_COUNT_KEY = "lastSyncedCount"
SESSION_KEYS = (USER_ID_KEY, LOCAL_COUNT_KEY, LAST_SYNCED_COUNT_KEY)


class LocalStore:
    def __init__(self, path: Optional[Union[str, Path]] = DEFAULT_STORAGE_PATH):
        self.path = Path(path) if path else None
        self._items: Dict[str, str] = self._load()

    def _load(self) -> Dict[str, str]:
        if self.path is None or not self.path.exists():
            return {}
        try:
            data = json.loads(self.path.read_text(encoding="utf-8"))
        except (OSError, ValueError) as e:
            logger.warning(f"Ignoring unreadable storage file {self.path}: {e}")
            return {}
        if not isinstance(data, dict):
            logger.warning(f"Ignoring storage file {self.path}: expected an object, got {type(data).__name__}")
            return {}
        return {str(k): str(v) for k, v in data.items()}

    def _save(self) -> None:
        if self.path is None:
            return
        self.path.parent.mkdir(parents=True, exist_ok=True)
        self.path.write_text(json.dumps(self._items, indent=2), encoding="utf-8")

    def get_item(self, key: str) -> Optional[str]:
        return self._items.get(key)

    def set_item(self, key: str, value) -> None:
        self._items[key] = str(value)
        self._save()

    def remove_item(self, key: str) -> None:
        if self._items.pop(key, None) is not None:
            self._save()

    def clear(self) -> None:
        self._items = {}
        self._save()

    def get_int(self, key: str, default: int = 0) -> int:
        """Read an integer value the way parseInt(x || '0') would."""
        value = self.get_item(key)
        try:
            return int(value) if value else default
        except ValueError:
            return default
