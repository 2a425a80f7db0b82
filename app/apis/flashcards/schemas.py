from __future__ import annotations

from pydantic import BaseModel, Field

from app.modules.flashcards.models.flashcards import Flashcard


class SubjectRequest(BaseModel):
    subject: str = Field(..., description="Subject or topic")


class GoToRequest(BaseModel):
    index: int = Field(..., description="Zero-based card position")


class FlashcardSetSummary(BaseModel):
    subject: str
    total_flashcards: int


class AddMoreResponse(BaseModel):
    added: list[Flashcard] = Field(default_factory=list)
    total_flashcards: int


class ErrorResponse(BaseModel):
    detail: str
    kind: str | None = None
