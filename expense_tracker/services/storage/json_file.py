"""
JSON File Storage Implementation

DESIGN DECISION: A single JSON file is used as the default blob store because:
1. No database setup required
2. Users can open and back up their data with any text editor
3. A personal expense list is small (a few hundred records at most)

TRADEOFFS:
- The whole file is rewritten on every save (fine at this size)
- No concurrent-writer protection (one app instance owns the file)

Writes go to a temporary file first and are moved into place with
os.replace(), so a crash mid-write never leaves a truncated file.
"""

import json
import os
from pathlib import Path
from typing import Optional, Union

import structlog
from tenacity import (
    retry,
    retry_if_exception_type,
    stop_after_attempt,
    wait_exponential,
)

from expense_tracker.services.storage.interface import (
    BlobStoreInterface,
    StorageReadError,
    StorageWriteError,
)


logger = structlog.get_logger(__name__)


class JsonFileBlobStore(BlobStoreInterface):
    """
    Key-value blob store backed by one JSON object on disk.

    The file maps each key to its string value.
    A missing file is an empty store.
    """

    def __init__(self, path: Union[str, Path], write_attempts: int = 3):
        self._path = Path(path).expanduser()
        self._write_attempts = write_attempts

    @property
    def path(self) -> Path:
        return self._path

    def _read_all(self) -> dict[str, str]:
        """Load the whole file. Missing file means empty store."""
        try:
            with open(self._path, "r", encoding="utf-8") as f:
                data = json.load(f)
        except FileNotFoundError:
            return {}
        except (OSError, json.JSONDecodeError) as e:
            raise StorageReadError(f"Failed to read {self._path}: {e}")

        if not isinstance(data, dict):
            raise StorageReadError(
                f"Unexpected content in {self._path}: expected an object"
            )
        return data

    def _write_all(self, data: dict[str, str]) -> None:
        """Write the whole file atomically, retrying transient OS errors."""
        retrying = retry(
            stop=stop_after_attempt(self._write_attempts),
            wait=wait_exponential(multiplier=0.1, min=0.1, max=2),
            retry=retry_if_exception_type(OSError),
            reraise=True,
        )
        try:
            retrying(self._replace_file)(data)
        except OSError as e:
            raise StorageWriteError(f"Failed to write {self._path}: {e}")

    def _replace_file(self, data: dict[str, str]) -> None:
        self._path.parent.mkdir(parents=True, exist_ok=True)
        tmp = self._path.with_suffix(self._path.suffix + ".tmp")
        try:
            with open(tmp, "w", encoding="utf-8") as f:
                json.dump(data, f, indent=2, ensure_ascii=False)
            os.replace(tmp, self._path)
        except OSError:
            logger.warning("blob_write_retry", path=str(self._path))
            tmp.unlink(missing_ok=True)
            raise

    def get(self, key: str) -> Optional[str]:
        value = self._read_all().get(key)
        if value is not None and not isinstance(value, str):
            raise StorageReadError(f"Value under '{key}' is not a string")
        return value

    def set(self, key: str, value: str) -> None:
        try:
            data = self._read_all()
        except StorageReadError as e:
            # A corrupt file is overwritten rather than blocking every save
            logger.warning("blob_file_unreadable", path=str(self._path), error=str(e))
            data = {}
        data[key] = value
        self._write_all(data)

    def remove(self, key: str) -> None:
        try:
            data = self._read_all()
        except StorageReadError as e:
            logger.warning("blob_file_unreadable", path=str(self._path), error=str(e))
            data = {}
        if key not in data:
            return
        del data[key]
        self._write_all(data)
