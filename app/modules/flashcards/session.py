"""Browsing session: the public operations a UI drives.

A ``StudySession`` owns the in-memory view state (active set, cards,
navigation, in-flight flag, last error) and merges generated batches into
the ``SetStore``. Generation errors leave cards, position and store exactly
as they were; only ``last_error`` changes.
"""

from __future__ import annotations

from typing import Optional

from app.core.config import settings
from app.core.logging import get_logger
from app.modules.flashcards.errors import (
    GenerationError,
    GenerationInProgressError,
    InvalidSubjectError,
    NoActiveSetError,
    SetNotFoundError,
)
from app.modules.flashcards.generator import FlashcardsGenerator
from app.modules.flashcards.models.flashcards import (
    Flashcard,
    FlashcardSet,
    SessionState,
)
from app.modules.flashcards.navigation import NavigationController, Scheduler
from app.modules.flashcards.store import SetStore

logger = get_logger(__name__)


class StudySession:
    def __init__(
        self,
        store: SetStore,
        generator: FlashcardsGenerator,
        *,
        switch_seconds: Optional[float] = None,
        scheduler: Optional[Scheduler] = None,
    ) -> None:
        self.store = store
        self.generator = generator
        self.active_subject: Optional[str] = None
        self.cards: list[Flashcard] = []
        self.generation_in_flight = False
        self.last_error: Optional[str] = None
        if switch_seconds is None:
            switch_seconds = settings.flashcards.switch_seconds
        self.nav = NavigationController(
            switch_seconds=switch_seconds, scheduler=scheduler
        )

    # Generation ---------------------------------------------------------
    async def _generate(self, subject: str, previous: list[str]) -> list[Flashcard]:
        if self.generation_in_flight:
            logger.info("Rejected generation for %r: another one is running", subject)
            raise GenerationInProgressError("A generation request is already running")
        self.generation_in_flight = True
        self.last_error = None
        try:
            return await self.generator.generate(subject, previous)
        except GenerationError as e:
            self.last_error = str(e) or "An error occurred."
            logger.warning(
                "Generation for %r failed (%s): %s", subject, e.kind, self.last_error,
                extra={"subject": subject},
            )
            raise
        finally:
            self.generation_in_flight = False

    async def submit_new_subject(self, text: str) -> FlashcardSet:
        """Generate a first batch for ``text`` and start browsing it."""
        if not text or not text.strip():
            raise InvalidSubjectError("Subject must not be blank")
        cards = await self._generate(text, [])
        subject = self.store.add(text, cards)
        self._load(subject, cards)
        return FlashcardSet(subject=subject, flashcards=list(cards))

    async def add_more(self) -> list[Flashcard]:
        """Append a continuation batch to the active set and jump to it."""
        if self.active_subject is None or not self.cards:
            raise NoActiveSetError("No flashcard set is being browsed")
        subject = self.active_subject
        base = list(self.cards)
        new_cards = await self._generate(subject, [c.question for c in base])

        updated = base + new_cards
        if not self.store.update(subject, updated):
            # Set was deleted while the batch was being generated
            self.last_error = f"Flashcard set {subject!r} no longer exists"
            logger.warning(
                "Dropped %d generated cards: %s", len(new_cards), self.last_error,
                extra={"subject": subject},
            )
            raise SetNotFoundError(self.last_error)
        if self.active_subject == subject:
            self.cards = updated
            self.nav.reset(len(updated), index=len(base))
        return new_cards

    # Stored sets --------------------------------------------------------
    def list_sets(self) -> list[FlashcardSet]:
        return self.store.list()

    def select_stored_set(self, subject: str) -> FlashcardSet:
        found = self.store.get(subject)
        if found is None:
            raise SetNotFoundError(f"No stored set named {subject!r}")
        self.last_error = None
        self._load(found.subject, found.flashcards)
        return found

    def delete_stored_set(self, subject: str) -> None:
        self.store.remove(subject)
        if self.active_subject == subject:
            self.back_to_entry()

    def _load(self, subject: str, cards: list[Flashcard]) -> None:
        self.active_subject = subject
        self.cards = list(cards)
        self.nav.reset(len(self.cards))

    def back_to_entry(self) -> None:
        """Discard the browsing state; stored sets are untouched."""
        self.nav.clear()
        self.active_subject = None
        self.cards = []
        self.last_error = None

    # Navigation ---------------------------------------------------------
    def next(self) -> None:
        self.nav.next()

    def prev(self) -> None:
        self.nav.prev()

    def go_to(self, index: int) -> None:
        self.nav.go_to(index)

    def toggle_reveal(self) -> None:
        if self.cards:
            self.nav.toggle_reveal()

    @property
    def current_card(self) -> Optional[Flashcard]:
        if not self.cards:
            return None
        return self.cards[self.nav.current_index]

    def snapshot(self) -> SessionState:
        card = self.current_card
        progress = None
        if card is not None:
            progress = f"Flashcard {self.nav.current_index + 1} of {len(self.cards)}"
        return SessionState(
            active_subject=self.active_subject,
            cards=list(self.cards),
            current_index=self.nav.current_index,
            revealed=self.nav.revealed,
            switching=self.nav.switching,
            generation_in_flight=self.generation_in_flight,
            last_error=self.last_error,
            current_card=card,
            progress=progress,
        )

    def close(self) -> None:
        """Tear down timers; the session must not be used afterwards."""
        self.nav.close()
