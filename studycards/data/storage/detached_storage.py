"""Storage adapter for contexts with no live storage environment."""

from typing import Any, Optional

from studycards.application.ports import StoragePort
from studycards.domain.exceptions import StorageUnavailableException


class DetachedStorage(StoragePort):
    """Reads find nothing and writes fail with StorageUnavailableException."""

    name = "detached"

    @property
    def available(self) -> bool:
        return False

    async def read(self, key: str) -> Optional[Any]:
        return None

    async def write(self, key: str, value: Any) -> None:
        raise StorageUnavailableException("no storage environment", key=key)
