"""JSON file key-value storage for op state and config."""

import json
import logging
from pathlib import Path
from typing import Any

from ..errors import KVStoreError
from ..values import JsonValue

logger = logging.getLogger(__name__)


class KVFile:
    """Key-value mapping persisted as a single JSON object.

    No handle is kept between calls: every get/set rereads the file, so
    changes made by other processes are visible. Writes replace the whole
    file and are not locked, the last writer wins.
    """

    def __init__(self, path: str | Path):
        """Initialize store backed by the given file.

        Args:
            path: JSON file holding the mapping. Created on first set.
        """
        self.path = Path(path)

    def _load(self) -> dict[str, Any]:
        """Read the backing file, returning an empty mapping if it is missing."""
        if not self.path.exists():
            return {}

        try:
            contents = self.path.read_text(encoding="utf-8")
        except (OSError, UnicodeDecodeError) as e:
            raise KVStoreError(f"Failed to read {self.path}: {e}", str(self.path), e) from e

        try:
            data = json.loads(contents)
        except json.JSONDecodeError as e:
            raise KVStoreError(f"Invalid JSON in {self.path}: {e}", str(self.path), e) from e

        if not isinstance(data, dict):
            raise KVStoreError(
                f"Expected a JSON object in {self.path}, got {type(data).__name__}",
                str(self.path),
            )
        return data

    def get(self, key: str) -> JsonValue | None:
        """Look up a key.

        Args:
            key: Key to look up

        Returns:
            Tagged value if the key is present, None otherwise

        Raises:
            KVStoreError: If the file exists but cannot be read or parsed
        """
        data = self._load()
        if key not in data:
            logger.debug(f"{self.path}: no value for {key!r}")
            return None
        return JsonValue.from_python(data[key])

    def set(self, key: str, value: Any) -> None:
        """Store a value, preserving every other key in the file.

        Args:
            key: Key to store under
            value: JSON-compatible Python data or a JsonValue

        Raises:
            KVStoreError: If the file cannot be read, the value cannot be
                serialized, or the file cannot be written
        """
        data = self._load()
        if isinstance(value, JsonValue):
            value = value.to_python()
        data[key] = value

        # Serialize before opening for write so a bad value never truncates the file
        try:
            contents = json.dumps(data)
        except (TypeError, ValueError) as e:
            raise KVStoreError(
                f"Value for {key!r} is not JSON serializable: {e}", str(self.path), e
            ) from e

        try:
            self.path.write_text(contents, encoding="utf-8")
        except OSError as e:
            raise KVStoreError(f"Failed to write {self.path}: {e}", str(self.path), e) from e

        logger.debug(f"{self.path}: stored {key!r}")

    def all(self) -> dict[str, Any]:
        """Return the whole mapping as plain data."""
        return self._load()
