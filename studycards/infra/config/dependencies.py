"""
FastAPI dependency injection configuration.

One storage adapter is built per process from settings; services are
process-wide singletons sharing it, so each service's write lock guards
its storage key for every request.
"""

from typing import Optional

from studycards.application.ports import StoragePort
from studycards.application.services import (
    DeckService,
    ProgressService,
    StudySessionService,
)
from studycards.data.storage import (
    DetachedStorage,
    MemoryStorage,
    RedisStorage,
    SqlStorage,
)
from studycards.infra.config.logging_config import get_logger
from studycards.infra.config.settings import Settings, get_settings
from studycards.infra.messaging.redis_client import get_redis_client

_storage: Optional[StoragePort] = None
_deck_service: Optional[DeckService] = None
_progress_service: Optional[ProgressService] = None
_study_session_service: Optional[StudySessionService] = None


def build_storage(settings: Settings) -> StoragePort:
    """Create the storage adapter selected by ``STORAGE_BACKEND``."""
    backend = settings.storage_backend
    if backend == "memory":
        storage: StoragePort = MemoryStorage()
    elif backend == "sql":
        storage = SqlStorage(settings.database_url, echo=settings.debug_sql)
    elif backend == "redis":
        storage = RedisStorage(
            get_redis_client(settings.redis_url), key_prefix=settings.redis_key_prefix
        )
    elif backend == "detached":
        storage = DetachedStorage()
    else:
        raise ValueError(f"Unknown storage backend: {backend}")

    get_logger("infra.dependencies").info("storage.build", backend=storage.name)
    return storage


def get_storage() -> StoragePort:
    global _storage
    if _storage is None:
        _storage = build_storage(get_settings())
    return _storage


def get_deck_service() -> DeckService:
    global _deck_service
    if _deck_service is None:
        decks_key, _ = get_settings().storage_keys()
        _deck_service = DeckService(get_storage(), decks_key=decks_key)
    return _deck_service


def get_progress_service() -> ProgressService:
    global _progress_service
    if _progress_service is None:
        _, progress_key = get_settings().storage_keys()
        _progress_service = ProgressService(get_storage(), progress_key=progress_key)
    return _progress_service


def get_study_session_service() -> StudySessionService:
    global _study_session_service
    if _study_session_service is None:
        _study_session_service = StudySessionService(
            get_deck_service(), get_progress_service()
        )
    return _study_session_service


def reset_dependencies() -> None:
    """Forget the process-wide adapter and services."""
    global _storage, _deck_service, _progress_service, _study_session_service
    _storage = None
    _deck_service = None
    _progress_service = None
    _study_session_service = None
