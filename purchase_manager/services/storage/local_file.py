"""
Local File Storage Implementation

DESIGN DECISION: A single JSON file holding {key: string} is used as the
desktop equivalent of browser-local storage because:
1. It survives restarts, like localStorage survives page reloads
2. No database setup required
3. The user can copy or back up one file

TRADEOFFS:
- The whole mapping is rewritten on every set (fine for personal use)
- No locking; only one process is expected to use a file at a time
"""

import json
import os
import tempfile
from pathlib import Path
from typing import Optional

import structlog

from purchase_manager.services.storage.interface import (
    StorageError,
    StorageProviderInterface,
)


logger = structlog.get_logger(__name__)


class JsonFileStorageProvider(StorageProviderInterface):
    """
    Stores string values in one JSON object on disk.

    Writes go to a temporary file in the same directory that then replaces
    the original, so a crash mid-write leaves the previous file intact.
    """

    def __init__(self, path: str):
        self._path = Path(path)

    @property
    def path(self) -> Path:
        return self._path

    def _read_mapping(self) -> dict[str, str]:
        """Read the backing file. A missing file is an empty mapping."""
        try:
            raw = self._path.read_text(encoding="utf-8")
        except FileNotFoundError:
            return {}
        except OSError as e:
            raise StorageError(f"Could not read storage file {self._path}: {e}") from e

        try:
            mapping = json.loads(raw)
        except json.JSONDecodeError as e:
            raise StorageError(f"Storage file {self._path} is not valid JSON: {e}") from e

        if not isinstance(mapping, dict):
            raise StorageError(f"Storage file {self._path} does not hold a JSON object")
        return mapping

    def get(self, key: str) -> Optional[str]:
        value = self._read_mapping().get(key)
        if value is None:
            return None
        if not isinstance(value, str):
            raise StorageError(f"Value under {key!r} is not a string")
        return value

    def set(self, key: str, value: str) -> None:
        try:
            mapping = self._read_mapping()
        except StorageError as e:
            # An unreadable file would otherwise block every future write
            logger.warning("storage_file_reset", path=str(self._path), error=str(e))
            mapping = {}

        mapping[key] = value

        try:
            self._path.parent.mkdir(parents=True, exist_ok=True)
            fd, tmp_name = tempfile.mkstemp(
                dir=self._path.parent,
                prefix=f".{self._path.name}.",
                suffix=".tmp",
            )
            try:
                with os.fdopen(fd, "w", encoding="utf-8") as fh:
                    json.dump(mapping, fh, ensure_ascii=False)
                os.replace(tmp_name, self._path)
            except BaseException:
                Path(tmp_name).unlink(missing_ok=True)
                raise
        except OSError as e:
            raise StorageError(f"Could not write storage file {self._path}: {e}") from e
