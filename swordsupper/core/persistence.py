import json
import os
import time
import logging
import uuid
from typing import Any, Callable, Optional

DATA_DIR = "data"
STORE_DIR = os.path.join(DATA_DIR, "store")
logger = logging.getLogger(__name__)

ErrorHook = Callable[[str, Exception], None]


class LocalStore:
    """
    Durable key/value store. Each key is an independent JSON file in `store_dir`.
    Writes never raise: a failed write is logged, reported to `on_error` and the
    caller keeps working with its in-memory state.
    """

    def __init__(self, store_dir: str = STORE_DIR, on_error: Optional[ErrorHook] = None):
        self.store_dir = store_dir
        self.on_error = on_error
        try:
            os.makedirs(self.store_dir, exist_ok=True)
        except OSError as e:
            # Reads fall back to defaults and writes fail until the directory exists
            logger.error(f"Error creating store directory {self.store_dir}: {e}")
            self._report(self.store_dir, e)

    def _path(self, key: str) -> str:
        return os.path.join(self.store_dir, f"{key}.json")

    def get(self, key: str, default: Any = None) -> Any:
        """Returns the decoded value for `key`, or `default` if absent or unreadable."""
        filepath = self._path(key)
        if not os.path.exists(filepath):
            return default
        try:
            with open(filepath, 'r', encoding='utf-8') as f:
                return json.load(f)
        except Exception as e:
            logger.error(f"Error reading store key {key}: {e}")
            return default

    def set(self, key: str, value: Any) -> bool:
        """Serializes `value` to JSON under `key`. Returns False if the write failed."""
        filepath = self._path(key)
        # Use UUID to prevent collisions if multiple saves run concurrently
        temp_filepath = filepath + f".{uuid.uuid4()}.tmp"

        try:
            payload = json.dumps(value, indent=2)
            with open(temp_filepath, 'w', encoding='utf-8') as f:
                f.write(payload)
                f.flush()
                os.fsync(f.fileno())

            # Retry logic for Windows file locking issues
            max_retries = 3
            for attempt in range(max_retries):
                try:
                    os.replace(temp_filepath, filepath)
                    break
                except PermissionError:
                    if attempt < max_retries - 1:
                        time.sleep(0.1)
                    else:
                        raise
            return True
        except Exception as e:
            logger.error(f"Error saving store key {key}: {e}")
            if os.path.exists(temp_filepath):
                try:
                    os.remove(temp_filepath)
                except OSError:
                    pass
            self._report(key, e)
            return False

    def remove(self, key: str):
        filepath = self._path(key)
        try:
            if os.path.exists(filepath):
                os.remove(filepath)
        except OSError as e:
            logger.error(f"Error removing store key {key}: {e}")
            self._report(key, e)

    def _report(self, key: str, error: Exception):
        if not self.on_error:
            return
        try:
            self.on_error(key, error)
        except Exception as hook_error:
            logger.error(f"Persistence error hook failed: {hook_error}")
