"""
Progress service: per-user, per-deck study progress.

All records live in one nested ``{user_id: {deck_id: record}}`` map
stored apart from the deck collection.
"""

import asyncio
from typing import Any, Dict, Iterable, Mapping, Optional

from studycards.application.ports import StoragePort
from studycards.application.services._fields import normalize_fields
from studycards.domain.entities import UserProgress
from studycards.domain.exceptions import StorageUnavailableException
from studycards.domain.identifiers import Clock, now_ms
from studycards.infra.config.logging_config import get_logger

DEFAULT_PROGRESS_KEY = "study-cards-progress"

WRITABLE_FIELDS = {"cards_learned", "total_study_sessions", "last_studied", "deck_id"}


class ProgressService:
    def __init__(
        self,
        storage: StoragePort,
        progress_key: str = DEFAULT_PROGRESS_KEY,
        clock: Clock = now_ms,
    ) -> None:
        self._storage = storage
        self._key = progress_key
        self._clock = clock
        self._lock = asyncio.Lock()
        self._log = get_logger("service.progress")

    async def _load_all(self) -> Dict[str, Dict[str, Any]]:
        return await self._storage.read(self._key) or {}

    async def get(self, user_id: str, deck_id: str) -> Optional[UserProgress]:
        """Progress of ``user_id`` on ``deck_id``, or None if never studied."""
        record = (await self._load_all()).get(user_id, {}).get(deck_id)
        if record is None:
            return None
        return UserProgress.model_validate({"deckId": deck_id, **record})

    def _base_record(
        self, deck_id: str, current: Optional[Dict[str, Any]], now: int
    ) -> UserProgress:
        if current is None:
            return UserProgress(deck_id=deck_id, last_studied=now)
        return UserProgress.model_validate({"deckId": deck_id, **current})

    async def update(self, user_id: str, deck_id: str, fields: Mapping[str, Any]) -> None:
        """Create or merge a progress record; ``last_studied`` is always refreshed.

        Raises:
            StorageUnavailableException: if no storage environment exists.
            ValueError: on unknown fields or a decreasing session counter.
        """
        changes = normalize_fields(UserProgress, fields)
        unknown = set(changes) - WRITABLE_FIELDS
        if unknown:
            raise ValueError(f"Unknown progress fields: {sorted(unknown)}")

        if not self._storage.available:
            raise StorageUnavailableException("no storage environment", key=self._key)

        async with self._lock:
            all_progress = await self._load_all()
            user_records = all_progress.setdefault(user_id, {})
            now = self._clock()

            current = user_records.get(deck_id)
            base = self._base_record(deck_id, current, now)

            sessions = changes.get("total_study_sessions", base.total_study_sessions)
            if sessions < base.total_study_sessions:
                raise ValueError("total_study_sessions cannot decrease")

            record = UserProgress.model_validate(
                {**base.model_dump(), **changes, "deck_id": deck_id, "last_studied": now}
            )
            user_records[deck_id] = record.to_storage()
            await self._storage.write(self._key, all_progress)

        self._log.info(
            "progress.update",
            user_id=user_id,
            deck_id=deck_id,
            created=current is None,
            cards_learned=len(record.cards_learned),
        )

    async def record_session(
        self,
        user_id: str,
        deck_id: str,
        studied: Iterable[str],
        learned: Iterable[str],
    ) -> UserProgress:
        """Count one finished session and fold its cards into the record.

        Cards studied in the session take their learned state from it;
        cards learned earlier and not studied again are kept.
        """
        if not self._storage.available:
            raise StorageUnavailableException("no storage environment", key=self._key)

        studied_ids = set(studied)
        learned_ids = list(learned)

        async with self._lock:
            all_progress = await self._load_all()
            user_records = all_progress.setdefault(user_id, {})
            now = self._clock()
            base = self._base_record(deck_id, user_records.get(deck_id), now)

            kept = [
                card_id
                for card_id in base.cards_learned
                if card_id not in studied_ids or card_id in learned_ids
            ]
            record = UserProgress(
                deck_id=deck_id,
                cards_learned=[*kept, *learned_ids],
                last_studied=now,
                total_study_sessions=base.total_study_sessions + 1,
            )
            user_records[deck_id] = record.to_storage()
            await self._storage.write(self._key, all_progress)

        self._log.info(
            "progress.session",
            user_id=user_id,
            deck_id=deck_id,
            sessions=record.total_study_sessions,
            cards_learned=len(record.cards_learned),
        )
        return record
