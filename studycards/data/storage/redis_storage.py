"""
Remote storage adapter backed by Redis hashes.

Each top-level key becomes one hash, which gives the tree layout of the
remote database:

* a list of records (``decks``) is stored with one field per record id,
  so ``<prefix>decks`` / ``f:<deck id>`` holds a single deck;
* an object (``userProgress``) is stored with one field per member, so
  ``<prefix>userProgress`` / ``f:<user id>`` holds that user's deck map;
* anything else is stored whole in a single field.

Reserved fields record the original shape and the list order. A write
replaces the whole hash inside one MULTI/EXEC transaction.
"""

import json
from typing import Any, Dict, Optional

import redis.asyncio as redis
from redis.exceptions import RedisError

from studycards.application.ports import StoragePort
from studycards.domain.exceptions import StorageUnavailableException
from studycards.infra.config.logging_config import get_logger

SHAPE_FIELD = "__shape__"
ORDER_FIELD = "__order__"
VALUE_FIELD = "__value__"

SHAPE_LIST = "list"
SHAPE_OBJECT = "object"
SHAPE_VALUE = "value"

# Data fields carry this prefix so ids and user ids can never shadow the
# reserved fields above.
DATA_PREFIX = "f:"


def _dumps(value: Any) -> str:
    return json.dumps(value, ensure_ascii=False)


def data_field(key: str) -> str:
    return f"{DATA_PREFIX}{key}"


def encode_tree(value: Any) -> Dict[str, str]:
    """Flatten a JSON value into hash fields."""
    if isinstance(value, list) and all(
        isinstance(item, dict) and isinstance(item.get("id"), str) for item in value
    ):
        mapping = {data_field(item["id"]): _dumps(item) for item in value}
        mapping[ORDER_FIELD] = _dumps([item["id"] for item in value])
        mapping[SHAPE_FIELD] = SHAPE_LIST
        return mapping

    if isinstance(value, dict):
        mapping = {data_field(str(k)): _dumps(v) for k, v in value.items()}
        mapping[SHAPE_FIELD] = SHAPE_OBJECT
        return mapping

    return {SHAPE_FIELD: SHAPE_VALUE, VALUE_FIELD: _dumps(value)}


def decode_tree(fields: Dict[str, str]) -> Any:
    """Rebuild the JSON value written by :func:`encode_tree`."""
    shape = fields.get(SHAPE_FIELD, SHAPE_OBJECT)

    if shape == SHAPE_VALUE:
        return json.loads(fields[VALUE_FIELD])

    if shape == SHAPE_LIST:
        order = json.loads(fields.get(ORDER_FIELD, "[]"))
        return [
            json.loads(fields[data_field(item_id)])
            for item_id in order
            if data_field(item_id) in fields
        ]

    return {
        k[len(DATA_PREFIX):]: json.loads(v)
        for k, v in fields.items()
        if k.startswith(DATA_PREFIX)
    }


class RedisStorage(StoragePort):
    name = "redis"

    def __init__(self, client: redis.Redis, key_prefix: str = "") -> None:
        self._client = client
        self._prefix = key_prefix
        self._log = get_logger("storage.redis")

    def _path(self, key: str) -> str:
        return f"{self._prefix}{key}"

    async def initialize(self) -> None:
        """Check that the Redis server answers."""
        try:
            await self._client.ping()
        except RedisError as e:
            self._log.error("storage.initialize.error", error=str(e))
            raise StorageUnavailableException(f"Redis initialization failed: {e}")
        self._log.info("storage.initialized", prefix=self._prefix)

    async def close(self) -> None:
        await self._client.aclose()
        self._log.info("storage.closed")

    async def read(self, key: str) -> Optional[Any]:
        path = self._path(key)
        try:
            fields = await self._client.hgetall(path)
        except RedisError as e:
            self._log.error("storage.read.error", key=path, error=str(e))
            raise StorageUnavailableException(str(e), key=key)

        if not fields:
            return None
        return decode_tree(fields)

    async def write(self, key: str, value: Any) -> None:
        path = self._path(key)
        mapping = encode_tree(value)
        try:
            async with self._client.pipeline(transaction=True) as pipe:
                pipe.delete(path)
                pipe.hset(path, mapping=mapping)
                await pipe.execute()
        except RedisError as e:
            self._log.error("storage.write.error", key=path, error=str(e))
            raise StorageUnavailableException(str(e), key=key)

        self._log.debug("storage.write", key=path, fields=len(mapping))
