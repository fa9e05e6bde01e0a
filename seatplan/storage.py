"""Snapshot storage backend interface and implementations."""

import logging
from abc import ABC, abstractmethod
from pathlib import Path

logger = logging.getLogger(__name__)


class SnapshotBackend(ABC):
    """Abstract base class for snapshot storage.

    A backend stores opaque JSON strings by key. Implement this interface to
    keep projects somewhere else (e.g. a database).
    """

    @abstractmethod
    def get(self, key: str) -> str | None:
        """Get a stored snapshot by key.

        Args:
            key: Storage key (project name)

        Returns:
            The stored JSON string, or None if not found
        """
        pass

    @abstractmethod
    def set(self, key: str, data: str) -> None:
        """Store a snapshot under a key, replacing any previous one.

        Args:
            key: Storage key (project name)
            data: JSON string
        """
        pass

    @abstractmethod
    def delete(self, key: str) -> None:
        """Delete a stored snapshot by key."""
        pass

    @abstractmethod
    def keys(self) -> list[str]:
        """List stored keys."""
        pass


class NullBackend(SnapshotBackend):
    """No-op backend that never stores anything."""

    def get(self, key: str) -> str | None:
        return None

    def set(self, key: str, data: str) -> None:
        pass

    def delete(self, key: str) -> None:
        pass

    def keys(self) -> list[str]:
        return []


class MemoryBackend(SnapshotBackend):
    """In-memory backend (no persistence).

    Stored snapshots are lost when the process exits.
    """

    def __init__(self):
        self._data: dict[str, str] = {}

    def get(self, key: str) -> str | None:
        return self._data.get(key)

    def set(self, key: str, data: str) -> None:
        self._data[key] = data
        logger.debug(f"Stored snapshot in memory: {key}")

    def delete(self, key: str) -> None:
        self._data.pop(key, None)

    def keys(self) -> list[str]:
        return sorted(self._data)


class FileBackend(SnapshotBackend):
    """File-based backend.

    Stores each snapshot as ``<key>.json`` in a directory.
    """

    def __init__(self, storage_dir: str | Path = ".seatplan"):
        """Initialize file backend.

        Args:
            storage_dir: Directory to store snapshot files (relative or absolute)
        """
        self.storage_dir = Path(storage_dir).expanduser().resolve()
        self.storage_dir.mkdir(parents=True, exist_ok=True)
        logger.debug(f"File backend initialized at: {self.storage_dir}")

    def _get_path(self, key: str) -> Path:
        """Get file path for a key."""
        # Sanitize key for filesystem
        safe_key = key.replace("/", "_").replace("\\", "_")
        return self.storage_dir / f"{safe_key}.json"

    def get(self, key: str) -> str | None:
        path = self._get_path(key)
        if not path.exists():
            return None

        logger.debug(f"Read snapshot {key} from {path}")
        return path.read_text(encoding="utf-8")

    def set(self, key: str, data: str) -> None:
        path = self._get_path(key)
        path.write_text(data, encoding="utf-8")
        logger.debug(f"Stored snapshot {key} at {path}")

    def delete(self, key: str) -> None:
        self._get_path(key).unlink(missing_ok=True)
        logger.debug(f"Deleted snapshot: {key}")

    def keys(self) -> list[str]:
        return sorted(path.stem for path in self.storage_dir.glob("*.json"))
