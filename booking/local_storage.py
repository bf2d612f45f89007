"""Client-side key/value storage kept in a JSON file.

Stands in for the browser's localStorage: string keys map to string values,
and the whole mapping is rewritten on every change. A file that can't be
read as such a mapping counts as empty and is replaced on the next write.
"""
import json
from pathlib import Path
from typing import Dict, Optional, Union

from booking.logging_config import get_logger

logger = get_logger(__name__)


class LocalStorage:
    """Persistent string key/value store."""

    def __init__(self, path: Union[str, Path]):
        self.path = Path(path)

    def _load(self) -> Dict[str, str]:
        if not self.path.exists():
            return {}
        try:
            with open(self.path, 'r', encoding='utf-8') as f:
                items = json.load(f)
        except (OSError, ValueError) as e:
            logger.warning("local_storage_unreadable", path=str(self.path), error=str(e))
            return {}

        if not isinstance(items, dict):
            logger.warning("local_storage_unreadable", path=str(self.path),
                           error=f"expected an object, got {type(items).__name__}")
            return {}
        return items

    def _dump(self, items: Dict[str, str]) -> None:
        self.path.parent.mkdir(parents=True, exist_ok=True)
        with open(self.path, 'w', encoding='utf-8') as f:
            json.dump(items, f, indent=2, ensure_ascii=False)

    def get_item(self, key: str) -> Optional[str]:
        return self._load().get(key)

    def set_item(self, key: str, value: str) -> None:
        items = self._load()
        items[key] = value
        self._dump(items)

    def remove_item(self, key: str) -> None:
        items = self._load()
        if items.pop(key, None) is not None:
            self._dump(items)
