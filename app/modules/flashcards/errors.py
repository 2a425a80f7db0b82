"""Error taxonomy for flashcard generation, storage and browsing."""

from __future__ import annotations


class FlashcardsError(Exception):
    """Base class for all flashcards errors."""


class GenerationError(FlashcardsError):
    """A generation call failed; session and store are left untouched."""

    kind = "generation"


class TransportError(GenerationError):
    """The text service was unreachable or answered with a failure."""

    kind = "transport"


class ParseError(GenerationError):
    """The service response contained no ``Q: ... A: ...`` units."""

    kind = "parse"


class FilterExhaustedError(GenerationError):
    """Cards were parsed but none passed the question length filter."""

    kind = "filter"


class StoreReadError(FlashcardsError):
    """The durable value could not be read or decoded."""


class GenerationInProgressError(FlashcardsError):
    """Another generation call is still outstanding for this session."""


class InvalidSubjectError(FlashcardsError, ValueError):
    """Subject text is blank."""


class NoActiveSetError(FlashcardsError):
    """The operation needs a set being browsed."""


class SetNotFoundError(FlashcardsError, KeyError):
    """No stored set has the requested subject."""

    def __str__(self) -> str:
        return str(self.args[0]) if self.args else "Set not found"
