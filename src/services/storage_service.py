"""Key-value storage used to hand registrations over to the checkout page."""
import json
import logging
import os
import tempfile
import time
from contextlib import contextmanager
from typing import Dict, Optional

from src.utils.exceptions import FileWriteError

logger = logging.getLogger(__name__)


class KeyValueStore:
    """Minimal string key-value interface (mirrors browser local storage)."""

    def put(self, key: str, blob: str) -> None:
        raise NotImplementedError

    def get(self, key: str) -> Optional[str]:
        raise NotImplementedError

    def remove(self, key: str) -> None:
        raise NotImplementedError


class MemoryKeyValueStore(KeyValueStore):
    """Process-local store, lost when the process exits."""

    def __init__(self):
        self._data: Dict[str, str] = {}

    def put(self, key: str, blob: str) -> None:
        self._data[key] = blob

    def get(self, key: str) -> Optional[str]:
        return self._data.get(key)

    def remove(self, key: str) -> None:
        self._data.pop(key, None)


class JsonFileKeyValueStore(KeyValueStore):
    """
    Store backed by a single JSON object on disk.

    Writes go through a read-modify-write under ``lock_file`` so the
    checkout page, running in another Streamlit session, sees a complete
    file.

    Raises:
        json.JSONDecodeError: If the file holds malformed JSON
        FileWriteError: If the file can't be written
        TimeoutError: If the lock can't be acquired
    """

    def __init__(self, file_path: str, lock_timeout: float = 5.0):
        self.file_path = file_path
        self.lock_timeout = lock_timeout

    def _read(self) -> Dict[str, str]:
        if not os.path.exists(self.file_path):
            return {}
        with open(self.file_path, "r", encoding="utf-8") as f:
            return json.load(f)

    def _write(self, data: Dict[str, str]) -> None:
        """Replace the file atomically via a temp file in the same directory."""
        dir_path = os.path.dirname(self.file_path) or "."
        fd, temp_path = tempfile.mkstemp(dir=dir_path, prefix=".tmp_", suffix=".json")
        try:
            with os.fdopen(fd, "w", encoding="utf-8") as f:
                json.dump(data, f, ensure_ascii=False, indent=2)
            os.replace(temp_path, self.file_path)
        except OSError as e:
            if os.path.exists(temp_path):
                os.remove(temp_path)
            raise FileWriteError(f"Failed to write {self.file_path}: {e}") from e

    def put(self, key: str, blob: str) -> None:
        with lock_file(self.file_path, self.lock_timeout):
            data = self._read()
            data[key] = blob
            self._write(data)
        logger.debug("Stored key %s in %s", key, self.file_path)

    def get(self, key: str) -> Optional[str]:
        return self._read().get(key)

    def remove(self, key: str) -> None:
        if not os.path.exists(self.file_path):
            return
        with lock_file(self.file_path, self.lock_timeout):
            data = self._read()
            if data.pop(key, None) is not None:
                self._write(data)


@contextmanager
def lock_file(file_path: str, timeout: float = 5.0):
    """
    Hold ``<file_path>.lock`` for the duration of the block.

    The lock file is created with O_EXCL, which works the same on every
    platform and doesn't need the target file to exist yet.

    Raises:
        TimeoutError: If the lock isn't acquired within ``timeout`` seconds
    """
    dir_path = os.path.dirname(file_path)
    if dir_path:
        os.makedirs(dir_path, exist_ok=True)

    lock_path = f"{file_path}.lock"
    deadline = time.monotonic() + timeout
    while True:
        try:
            fd = os.open(lock_path, os.O_CREAT | os.O_EXCL | os.O_WRONLY)
            break
        except FileExistsError:
            if time.monotonic() > deadline:
                raise TimeoutError(f"Could not acquire lock on {file_path} within {timeout}s")
            time.sleep(0.05)

    try:
        yield
    finally:
        os.close(fd)
        os.remove(lock_path)
