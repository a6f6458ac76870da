from __future__ import annotations

import logging
import os
import tempfile

from abc import ABC, abstractmethod
from pathlib import Path
from typing import Dict, List, Optional

from dayflow.core.exceptions import PersistenceError

logger = logging.getLogger(__name__)


class BlobStore(ABC):
    """Durable string-valued key-value storage."""

    @abstractmethod
    def get(self, key: str) -> Optional[str]:
        """
        Returns the value stored under `key`, or None if there is none.

        Raises:
            PersistenceError: If the value exists but cannot be read.
        """
        pass

    @abstractmethod
    def set(self, key: str, value: str) -> None:
        """
        Stores `value` under `key`. The write has been applied once this returns.

        Raises:
            PersistenceError: If the value cannot be written.
        """
        pass

    @abstractmethod
    def delete(self, key: str) -> None:
        pass

    @abstractmethod
    def keys(self) -> List[str]:
        pass


class MemoryBlobStore(BlobStore):
    """A BlobStore that lives only as long as the process."""

    def __init__(self, initial: Dict[str, str] | None = None):
        self._data: Dict[str, str] = dict(initial or {})

    def get(self, key: str) -> Optional[str]:
        return self._data.get(key)

    def set(self, key: str, value: str) -> None:
        self._data[key] = value

    def delete(self, key: str) -> None:
        self._data.pop(key, None)

    def keys(self) -> List[str]:
        return sorted(self._data)


class FileBlobStore(BlobStore):
    """
    Stores each key as a file in a directory.

    Writes go to a temporary file in the same directory which is fsynced and then
    renamed over the target, so a reader never sees a half-written value.
    """

    def __init__(self, directory: Path):
        self.directory = Path(directory)

    def path_for(self, key: str) -> Path:
        if not key or "/" in key or "\\" in key or key.startswith("."):
            raise ValueError(f"Invalid storage key: {key!r}")
        return self.directory / key

    def get(self, key: str) -> Optional[str]:
        path = self.path_for(key)
        try:
            return path.read_text(encoding="utf-8")
        except FileNotFoundError:
            return None
        except OSError as e:
            raise PersistenceError(f"Could not read {path}: {e}") from e

    def set(self, key: str, value: str) -> None:
        path = self.path_for(key)
        tmp_name = None
        try:
            self.directory.mkdir(parents=True, exist_ok=True)
            fd, tmp_name = tempfile.mkstemp(prefix=f".{key}.", suffix=".tmp", dir=self.directory)
            with os.fdopen(fd, "w", encoding="utf-8") as f:
                f.write(value)
                f.flush()
                os.fsync(f.fileno())
            os.replace(tmp_name, path)
            tmp_name = None
        except OSError as e:
            raise PersistenceError(f"Could not write {path}: {e}") from e
        finally:
            if tmp_name is not None:
                try:
                    os.unlink(tmp_name)
                except OSError:
                    logger.warning("Could not remove temporary file %s", tmp_name)
        logger.debug("Wrote %d bytes to %s", len(value), path)

    def delete(self, key: str) -> None:
        path = self.path_for(key)
        try:
            path.unlink(missing_ok=True)
        except OSError as e:
            raise PersistenceError(f"Could not delete {path}: {e}") from e

    def keys(self) -> List[str]:
        if not self.directory.exists():
            return []
        return sorted(p.name for p in self.directory.iterdir()
                      if p.is_file() and not p.name.startswith("."))
