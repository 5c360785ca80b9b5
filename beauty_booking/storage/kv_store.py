"""
JSON key-value store backed by one file per key.
Every read goes to disk; every write is atomic and immediately durable.
"""

import json
import shutil
import tempfile
from pathlib import Path
from typing import Any, List

from ..utils.exceptions import StorageError
from ..utils.logger import get_logger

logger = get_logger(__name__)


class JsonFileStore:
    """Key-value store persisting JSON values under a data directory"""

    def __init__(self, data_dir: Path):
        self.data_dir = Path(data_dir)
        self.data_dir.mkdir(exist_ok=True, parents=True)

    def _path(self, key: str) -> Path:
        return self.data_dir / f"{key}.json"

    def get(self, key: str, default: Any = None) -> Any:
        """Return the value stored under key, or default when missing, corrupt or null"""
        path = self._path(key)
        if not path.exists():
            return default
        try:
            with open(path, "r", encoding="utf-8") as f:
                value = json.load(f)
        except (json.JSONDecodeError, UnicodeDecodeError, OSError) as e:
            logger.warning("Unreadable store entry, using default", key=key, error=str(e))
            return default
        return default if value is None else value

    def set(self, key: str, value: Any) -> None:
        """Atomically replace the value stored under key"""
        path = self._path(key)
        payload = json.dumps(value, indent=2, ensure_ascii=False)
        tf = tempfile.NamedTemporaryFile(
            mode="w", dir=str(self.data_dir), delete=False, encoding="utf-8", suffix=".tmp"
        )
        temp_path = Path(tf.name)

        try:
            with tf:
                tf.write(payload)
            shutil.move(str(temp_path), str(path))
        except Exception as e:
            if temp_path.exists():
                temp_path.unlink()
            raise StorageError(f"Failed to save {key}: {e}")

    def ensure(self, key: str, value: Any) -> None:
        """Seed key with value unless it already holds something truthy"""
        if not self.get(key):
            self.set(key, value)

    def get_list(self, key: str) -> List[Any]:
        """Return the list stored under key, or [] when missing or not a list"""
        value = self.get(key, [])
        if not isinstance(value, list):
            logger.warning("Store entry is not a list, using empty list", key=key, type=type(value).__name__)
            return []
        return value
