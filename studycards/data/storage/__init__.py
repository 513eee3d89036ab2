"""Storage adapters implementing the storage port."""

from .detached_storage import DetachedStorage
from .memory_storage import MemoryStorage
from .redis_storage import RedisStorage
from .sql_storage import SqlStorage

__all__ = ["DetachedStorage", "MemoryStorage", "RedisStorage", "SqlStorage"]
