"""Pydantic models for flashcards, stored sets and browsing-session snapshots."""

from typing import Optional

from pydantic import BaseModel, ConfigDict, Field


class Flashcard(BaseModel):
    """Simple question/answer flashcard."""

    model_config = ConfigDict(frozen=True)

    question: str
    answer: str


class FlashcardSet(BaseModel):
    """A subject-keyed set of flashcards as kept in the durable store."""

    subject: str
    flashcards: list[Flashcard] = Field(default_factory=list)


class SessionState(BaseModel):
    """Read-only snapshot of a browsing session handed to the UI layer."""

    active_subject: Optional[str] = None
    cards: list[Flashcard] = Field(default_factory=list)
    current_index: int = 0
    revealed: bool = False
    switching: bool = False
    generation_in_flight: bool = False
    last_error: Optional[str] = None
    current_card: Optional[Flashcard] = None
    progress: Optional[str] = None
