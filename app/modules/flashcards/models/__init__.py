from .flashcards import Flashcard, FlashcardSet, SessionState

__all__ = [
    "Flashcard",
    "FlashcardSet",
    "SessionState",
]
