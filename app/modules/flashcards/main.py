"""Wiring of store, generator and session from settings.

Used by the API layer and the CLI so both share the same defaults.
"""

from __future__ import annotations

from typing import Optional

from app.core.config import settings
from app.modules.flashcards.generator import FlashcardsGenerator, TextService
from app.modules.flashcards.navigation import Scheduler
from app.modules.flashcards.session import StudySession
from app.modules.flashcards.store import JsonFileBackend, SetStore, StorageBackend


def create_store(backend: Optional[StorageBackend] = None) -> SetStore:
    backend = backend or JsonFileBackend(settings.flashcards.store_path)
    return SetStore(backend, key=settings.flashcards.store_key)


def create_session(
    *,
    store: Optional[SetStore] = None,
    text_service: Optional[TextService] = None,
    scheduler: Optional[Scheduler] = None,
) -> StudySession:
    """Build a session with settings-driven defaults for anything not given."""
    return StudySession(
        store or create_store(),
        FlashcardsGenerator(text_service),
        scheduler=scheduler,
    )
