"""Flashcards module exports."""

from .models.flashcards import Flashcard, FlashcardSet, SessionState
from .generator import FlashcardsGenerator, parse_flashcards, filter_flashcards
from .store import SetStore
from .session import StudySession
from .main import create_session

__all__ = [
    "Flashcard",
    "FlashcardSet",
    "SessionState",
    "FlashcardsGenerator",
    "parse_flashcards",
    "filter_flashcards",
    "SetStore",
    "StudySession",
    "create_session",
]
