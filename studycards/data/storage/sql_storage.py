"""
Local persistent storage adapter backed by a SQL key-value table.
"""

import json
from datetime import datetime
from typing import Any, Optional

from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import (
    AsyncEngine,
    AsyncSession,
    async_sessionmaker,
    create_async_engine,
)

from studycards.application.ports import StoragePort
from studycards.data.models.base import Base
from studycards.data.models.kv_entry_model import KeyValueEntryModel
from studycards.domain.exceptions import StorageUnavailableException
from studycards.infra.config.logging_config import get_logger


class SqlStorage(StoragePort):
    """Stores each key as one row of the ``kv_store`` table.

    Every write runs in its own transaction, so a value is either fully
    replaced or left untouched.
    """

    name = "sql"

    def __init__(
        self,
        database_url: str,
        echo: bool = False,
        engine: Optional[AsyncEngine] = None,
    ) -> None:
        self._engine = engine or create_async_engine(
            database_url, echo=echo, pool_pre_ping=True
        )
        self._session_factory = async_sessionmaker(
            self._engine, class_=AsyncSession, expire_on_commit=False
        )
        self._log = get_logger("storage.sql")

    async def initialize(self) -> None:
        """Create the key-value table if it does not exist."""
        try:
            async with self._engine.begin() as conn:
                await conn.run_sync(Base.metadata.create_all)
        except SQLAlchemyError as e:
            self._log.error("storage.initialize.error", error=str(e))
            raise StorageUnavailableException(f"database initialization failed: {e}")
        self._log.info("storage.initialized", url=str(self._engine.url))

    async def close(self) -> None:
        await self._engine.dispose()
        self._log.info("storage.closed")

    async def read(self, key: str) -> Optional[Any]:
        try:
            async with self._session_factory() as session:
                entry = await session.get(KeyValueEntryModel, key)
                raw = entry.value if entry is not None else None
        except SQLAlchemyError as e:
            self._log.error("storage.read.error", key=key, error=str(e))
            raise StorageUnavailableException(str(e), key=key)

        if raw is None:
            return None
        return json.loads(raw)

    async def write(self, key: str, value: Any) -> None:
        payload = json.dumps(value, ensure_ascii=False)
        try:
            async with self._session_factory() as session:
                async with session.begin():
                    entry = await session.get(KeyValueEntryModel, key)
                    if entry is None:
                        session.add(KeyValueEntryModel(key=key, value=payload))
                    else:
                        entry.value = payload
                        entry.updated_at = datetime.utcnow()
        except SQLAlchemyError as e:
            self._log.error("storage.write.error", key=key, error=str(e))
            raise StorageUnavailableException(str(e), key=key)

        self._log.debug("storage.write", key=key, size=len(payload))
