"""
Study session service.

Drives one pass through a deck: toggles cards learned as the user goes
and, on finish, hands the session to ``ProgressService.record_session``,
which counts it and merges its cards under the progress lock.
"""

from studycards.application.services.deck_service import DeckService
from studycards.application.services.progress_service import ProgressService
from studycards.domain.entities import (
    Deck,
    DeckProgressSummary,
    StudySession,
    UserProgress,
)
from studycards.domain.exceptions import DeckNotFoundException
from studycards.domain.identifiers import Clock, now_ms
from studycards.infra.config.logging_config import get_logger


class StudySessionService:
    def __init__(
        self,
        deck_service: DeckService,
        progress_service: ProgressService,
        clock: Clock = now_ms,
    ) -> None:
        self._decks = deck_service
        self._progress = progress_service
        self._clock = clock
        self._log = get_logger("service.study_session")

    async def _deck(self, deck_id: str) -> Deck:
        deck = await self._decks.get_by_id(deck_id)
        if deck is None:
            raise DeckNotFoundException(deck_id)
        return deck

    async def start(self, user_id: str, deck_id: str) -> StudySession:
        await self._deck(deck_id)
        session = StudySession(deck_id=deck_id, start_time=self._clock())
        self._log.info("session.start", user_id=user_id, deck_id=deck_id)
        return session

    async def toggle_learned(self, session: StudySession, card_id: str) -> bool:
        """Flip a card's learned flag and record it in the session.

        Returns the card's new learned state. Unknown cards are left alone
        and reported as not learned.
        """
        learned = await self._decks.toggle_card_learned(session.deck_id, card_id)
        if learned is None:
            return False

        session.mark_studied(card_id)
        session.set_learned(card_id, learned)
        return learned

    async def finish(self, user_id: str, session: StudySession) -> UserProgress:
        """Close the session and merge it into the user's progress."""
        if session.end_time is None:
            session.end_time = self._clock()

        progress = await self._progress.record_session(
            user_id,
            session.deck_id,
            studied=session.cards_studied,
            learned=session.cards_learned,
        )
        self._log.info(
            "session.finish",
            user_id=user_id,
            deck_id=session.deck_id,
            studied=len(session.cards_studied),
            learned=len(progress.cards_learned),
        )
        return progress

    @staticmethod
    def summarize(deck: Deck) -> DeckProgressSummary:
        return DeckProgressSummary.from_deck(deck)
