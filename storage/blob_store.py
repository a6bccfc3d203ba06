# storage/blob_store.py

"""
Key-value blob stores holding serialized collections.

A blob store maps a string key to a single string value and is read and written
synchronously. `RecordStore` keeps its whole collection under one key and
overwrites it after every mutation.

Implementations:
- `InMemoryBlobStore`: dictionary backed, nothing survives the process.
- `JsonFileBlobStore`: one `<key>.json` file per key inside a directory.
"""

from __future__ import annotations

import logging
import os
import tempfile
from abc import ABC, abstractmethod

from core.config import AppConfig, validate_storage_key

logger = logging.getLogger(__name__)


class BlobStore(ABC):

    @abstractmethod
    def get(self, key: str) -> str | None:
        """
        Returns the stored value for `key`, or None if nothing is stored.

        Raises:
            OSError: If the underlying medium cannot be read.
        """

    @abstractmethod
    def set(self, key: str, value: str) -> None:
        """
        Stores `value` under `key`, replacing any previous value.

        Raises:
            OSError: If the underlying medium cannot be written.
        """

    @abstractmethod
    def remove(self, key: str) -> None:
        """
        Deletes `key`. Removing a missing key is a no-op.
        """


class InMemoryBlobStore(BlobStore):

    def __init__(self, initial: dict[str, str] | None = None):
        self._blobs: dict[str, str] = dict(initial or {})

    def get(self, key: str) -> str | None:
        return self._blobs.get(key)

    def set(self, key: str, value: str) -> None:
        self._blobs[key] = value

    def remove(self, key: str) -> None:
        self._blobs.pop(key, None)

    def __contains__(self, key: str) -> bool:
        return key in self._blobs


class JsonFileBlobStore(BlobStore):
    """
    Stores each key as `<dir_path>/<key>.json`.

    Writes go to a temporary file in the same directory which then replaces the
    target, so a reader never sees a partially written blob.
    """

    def __init__(self, dir_path: str):
        self._dir_path = dir_path

    @property
    def dir_path(self) -> str:
        return self._dir_path

    def path_for(self, key: str) -> str:
        """
        Maps a key to its file path.

        Raises:
            ValueError: If the key is blank or contains anything other than letters, digits, '-', '_' or '.'.
        """
        validate_storage_key(key)

        return os.path.join(self._dir_path, f"{key}.json")

    def get(self, key: str) -> str | None:
        path = self.path_for(key)

        if not os.path.exists(path):
            return None

        with open(path, "r", encoding="utf-8") as f:
            return f.read()

    def set(self, key: str, value: str) -> None:
        path = self.path_for(key)
        os.makedirs(self._dir_path, exist_ok=True)

        fd, tmp_path = tempfile.mkstemp(dir=self._dir_path, suffix=".tmp")

        try:
            with os.fdopen(fd, "w", encoding="utf-8") as f:
                f.write(value)
            os.replace(tmp_path, path)

        except BaseException:
            if os.path.exists(tmp_path):
                os.remove(tmp_path)
            raise

        logger.debug("Wrote %d characters to %s", len(value), path)

    def remove(self, key: str) -> None:
        path = self.path_for(key)

        try:
            os.remove(path)
        except FileNotFoundError:
            pass


def create_blob_store(config: AppConfig) -> BlobStore:
    """
    Builds the blob store selected by `config.storage_backend`.

    Raises:
        ValueError: If the backend is not recognized.
    """
    if config.storage_backend == "file":
        return JsonFileBlobStore(config.data_dir)

    if config.storage_backend == "memory":
        return InMemoryBlobStore()

    raise ValueError(f"Unsupported storage backend: {config.storage_backend}")
