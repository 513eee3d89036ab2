"""
Application ports - abstract interfaces for external dependencies.

The services only see a storage port that reads and writes whole
JSON-serializable values under a named key; every backend implements
the same contract (last write wins, no partial writes, no cross-key
transactions).
"""

from abc import ABC, abstractmethod
from typing import Any, Optional


class StoragePort(ABC):
    """Abstract key/value storage for JSON-serializable blobs."""

    name: str = "abstract"

    @property
    def available(self) -> bool:
        """Whether a live storage environment backs this adapter."""
        return True

    async def initialize(self) -> None:
        """Prepare the backend (tables, connections)."""
        return None

    async def close(self) -> None:
        """Release backend resources."""
        return None

    @abstractmethod
    async def read(self, key: str) -> Optional[Any]:
        """Return the value stored under ``key`` or None if never written."""
        pass

    @abstractmethod
    async def write(self, key: str, value: Any) -> None:
        """Replace the value stored under ``key``."""
        pass
