"""Key-value registration store persisted as a JSON file."""
import json
import logging
import os
import shutil
import sys
import tempfile
import threading
import time
from contextlib import contextmanager
from typing import Any, Dict, Optional

from src.utils.exceptions import StorageError

if sys.platform == "win32":
    import msvcrt
else:
    import fcntl

logger = logging.getLogger(__name__)

PARTICIPANTS_KEY = "eventParticipants"
COUNTER_KEY = "participantIdCounter"


def load_json(file_path: str) -> Dict[str, Any]:
    """
    Load and parse a JSON object file with UTF-8 encoding.

    Args:
        file_path: Path to JSON file

    Returns:
        dict: Parsed JSON content

    Raises:
        FileNotFoundError: If file doesn't exist
        json.JSONDecodeError: If JSON is malformed
        ValueError: If the top-level value is not an object
    """
    if not os.path.exists(file_path):
        raise FileNotFoundError(f"File not found: {file_path}")

    with open(file_path, "r", encoding="utf-8") as f:
        try:
            data = json.load(f)
        except json.JSONDecodeError as e:
            raise json.JSONDecodeError(
                f"Malformed JSON in {file_path}: {e.msg}",
                e.doc,
                e.pos
            )

    if not isinstance(data, dict):
        raise ValueError(f"Expected a JSON object in {file_path}")

    return data


def save_json(file_path: str, data: Dict[str, Any], backup: bool = True) -> None:
    """
    Save data to a JSON file atomically with UTF-8 encoding.

    Args:
        file_path: Path to JSON file
        data: Dictionary to save
        backup: If True, copy the previous file to <file_path>.backup first

    Raises:
        IOError: If the backup or the write fails
    """
    dir_path = os.path.dirname(file_path)
    if dir_path:
        os.makedirs(dir_path, exist_ok=True)

    if backup and os.path.exists(file_path):
        try:
            shutil.copy2(file_path, f"{file_path}.backup")
        except OSError as e:
            raise IOError(f"Failed to create backup: {e}") from e

    temp_fd, temp_path = tempfile.mkstemp(
        dir=dir_path or ".",
        prefix=".tmp_",
        suffix=".json"
    )

    try:
        with os.fdopen(temp_fd, "w", encoding="utf-8") as f:
            json.dump(data, f, ensure_ascii=False, indent=2)
            f.flush()
            os.fsync(f.fileno())
        os.replace(temp_path, file_path)
    except (OSError, TypeError, ValueError) as e:
        if os.path.exists(temp_path):
            os.remove(temp_path)
        raise IOError(f"Failed to write file {file_path}: {e}") from e


@contextmanager
def lock_file(file_path: str, timeout: float = 5.0):
    """
    Hold an exclusive advisory lock on <file_path>.lock.

    The lock lives in a sidecar file so the data file can be locked
    before it exists.

    Usage:
        with lock_file('data/event_registrations.json'):
            save_json('data/event_registrations.json', document)

    Raises:
        TimeoutError: If unable to acquire lock within timeout
    """
    lock_path = f"{file_path}.lock"
    dir_path = os.path.dirname(lock_path)
    if dir_path:
        os.makedirs(dir_path, exist_ok=True)

    lock_fd = open(lock_path, "a+")
    start_time = time.time()
    try:
        while True:
            try:
                if sys.platform == "win32":
                    msvcrt.locking(lock_fd.fileno(), msvcrt.LK_NBLCK, 1)
                else:
                    fcntl.flock(lock_fd.fileno(), fcntl.LOCK_EX | fcntl.LOCK_NB)
                break
            except OSError:
                if time.time() - start_time > timeout:
                    raise TimeoutError(f"Could not acquire lock on {file_path} within {timeout}s")
                time.sleep(0.05)

        yield

    finally:
        try:
            if sys.platform == "win32":
                msvcrt.locking(lock_fd.fileno(), msvcrt.LK_UNLCK, 1)
            else:
                fcntl.flock(lock_fd.fileno(), fcntl.LOCK_UN)
        except OSError:
            logger.warning("Failed to release lock on %s", file_path)
        lock_fd.close()


class MemoryStore:
    """Key-value store kept in a dict; nothing survives the process."""

    def __init__(self, initial: Optional[Dict[str, Any]] = None):
        self._data: Dict[str, Any] = json.loads(json.dumps(initial or {}))
        self._lock = threading.RLock()

    def get(self, key: str, default: Any = None) -> Any:
        """Return a copy of the stored value, or default if absent."""
        if key not in self._data:
            return default
        return json.loads(json.dumps(self._data[key]))

    def set_many(self, entries: Dict[str, Any]) -> None:
        """Overwrite the given entries."""
        with self._lock:
            for key, value in entries.items():
                self._data[key] = json.loads(json.dumps(value))

    @contextmanager
    def transaction(self):
        """Hold the store exclusively for a read-modify-write sequence."""
        with self._lock:
            yield


class JsonFileStore(MemoryStore):
    """
    Key-value store persisted as a single JSON object on disk.

    Several stores (one per browser session) may share one file. Inside
    transaction() the file is locked and re-read, so get() sees writes
    made by other stores and set_many() never overwrites them.
    """

    def __init__(self, file_path: str, backup: bool = True):
        super().__init__()
        self.file_path = file_path
        self.backup = backup
        self._in_transaction = False
        self.reload()

    def reload(self) -> None:
        """Re-read the document from disk; a missing file is an empty store."""
        if os.path.exists(self.file_path):
            self._data = load_json(self.file_path)
            logger.debug("Loaded registration store from %s", self.file_path)
        else:
            self._data = {}

    @contextmanager
    def transaction(self):
        """
        Lock the file and reload it before the caller reads and writes.

        Usage:
            with store.transaction():
                counter = store.get(COUNTER_KEY, 1)
                store.set_many({COUNTER_KEY: counter + 1})

        Raises:
            StorageError: If the lock cannot be acquired
        """
        with self._lock:
            try:
                with lock_file(self.file_path):
                    self._in_transaction = True
                    try:
                        self.reload()
                        yield
                    finally:
                        self._in_transaction = False
            except TimeoutError as e:
                logger.error(f"Failed to lock registration store: {e}")
                raise StorageError(str(e)) from e

    def set_many(self, entries: Dict[str, Any]) -> None:
        """
        Overwrite the given entries and write the whole document to disk.

        Raises:
            StorageError: If the file cannot be written; the cached
                document is left as it was before the call
        """
        with self._lock:
            if self._in_transaction:
                self._write(entries)
            else:
                with self.transaction():
                    self._write(entries)

    def _write(self, entries: Dict[str, Any]) -> None:
        document = json.loads(json.dumps(self._data))
        document.update(json.loads(json.dumps(entries)))

        try:
            save_json(self.file_path, document, backup=self.backup)
        except IOError as e:
            logger.error(f"Failed to persist registration store: {e}")
            raise StorageError(str(e)) from e

        self._data = document
