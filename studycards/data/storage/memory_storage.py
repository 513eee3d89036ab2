"""In-memory storage adapter."""

import json
from typing import Any, Dict, Optional

from studycards.application.ports import StoragePort
from studycards.infra.config.logging_config import get_logger


class MemoryStorage(StoragePort):
    """Process-local storage holding each value as serialized JSON text.

    Values are serialized on write and parsed on read, so callers never
    share mutable objects with the store.
    """

    name = "memory"

    def __init__(self, initial: Optional[Dict[str, Any]] = None) -> None:
        self._blobs: Dict[str, str] = {}
        self.write_count = 0
        self._log = get_logger("storage.memory")
        for key, value in (initial or {}).items():
            self._blobs[key] = json.dumps(value, ensure_ascii=False)

    async def read(self, key: str) -> Optional[Any]:
        raw = self._blobs.get(key)
        if raw is None:
            return None
        return json.loads(raw)

    async def write(self, key: str, value: Any) -> None:
        self._blobs[key] = json.dumps(value, ensure_ascii=False)
        self.write_count += 1
        self._log.debug("storage.write", key=key, size=len(self._blobs[key]))

    def raw(self, key: str) -> Optional[str]:
        """Serialized text currently stored under ``key``."""
        return self._blobs.get(key)
