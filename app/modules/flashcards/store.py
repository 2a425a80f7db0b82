"""Durable storage of flashcard sets keyed by subject.

The whole collection lives in a single named value (a JSON-encoded list of
``{subject, flashcards}`` records). Every mutation is a full
read-modify-write of that value. Anything unreadable is treated as an empty
store.
"""

from __future__ import annotations

import json
import threading
from pathlib import Path
from typing import Optional, Protocol, Sequence

from pydantic import TypeAdapter, ValidationError

from app.core.logging import get_logger
from app.modules.flashcards.errors import StoreReadError
from app.modules.flashcards.models.flashcards import Flashcard, FlashcardSet
from app.modules.flashcards.naming import unique_subject_name

logger = get_logger(__name__)

_SETS = TypeAdapter(list[FlashcardSet])


class StorageBackend(Protocol):
    """Named string values, one per key."""

    def get_item(self, key: str) -> Optional[str]: ...

    def set_item(self, key: str, value: str) -> None: ...


class MemoryBackend:
    """Process-local backend, mostly for tests."""

    def __init__(self, initial: Optional[dict[str, str]] = None) -> None:
        self.items: dict[str, str] = dict(initial or {})

    def get_item(self, key: str) -> Optional[str]:
        return self.items.get(key)

    def set_item(self, key: str, value: str) -> None:
        self.items[key] = value


class JsonFileBackend:
    """Keeps named values in one JSON object on disk."""

    def __init__(self, path: str | Path) -> None:
        self.path = Path(path)

    def _read_all(self) -> dict[str, str]:
        if not self.path.exists():
            return {}
        try:
            data = json.loads(self.path.read_text(encoding="utf-8"))
        except (OSError, ValueError) as e:
            raise StoreReadError(f"Cannot read {self.path}: {e}") from e
        if not isinstance(data, dict):
            raise StoreReadError(f"Unexpected content in {self.path}")
        return data

    def get_item(self, key: str) -> Optional[str]:
        value = self._read_all().get(key)
        if value is not None and not isinstance(value, str):
            raise StoreReadError(f"Value {key!r} in {self.path} is not a string")
        return value

    def set_item(self, key: str, value: str) -> None:
        try:
            data = self._read_all()
        except StoreReadError:
            # A corrupted file is overwritten rather than preserved
            data = {}
        data[key] = value
        self.path.parent.mkdir(parents=True, exist_ok=True)
        tmp = self.path.with_suffix(self.path.suffix + ".tmp")
        tmp.write_text(json.dumps(data, ensure_ascii=False), encoding="utf-8")
        tmp.replace(self.path)


class SetStore:
    """Subject-keyed flashcard sets, most recently added first."""

    def __init__(self, backend: StorageBackend, key: str = "ai_flashcard_sets") -> None:
        self.backend = backend
        self.key = key
        self._lock = threading.RLock()

    def _read(self) -> list[FlashcardSet]:
        raw = self.backend.get_item(self.key)
        if not raw:
            return []
        try:
            return _SETS.validate_json(raw)
        except ValidationError as e:
            raise StoreReadError(f"Stored value {self.key!r} is malformed") from e

    def _write(self, sets: list[FlashcardSet]) -> None:
        self.backend.set_item(self.key, _SETS.dump_json(sets).decode("utf-8"))

    def list(self) -> list[FlashcardSet]:
        with self._lock:
            try:
                return self._read()
            except StoreReadError as e:
                logger.warning("Treating flashcard store as empty: %s", e)
                return []

    def get(self, subject: str) -> Optional[FlashcardSet]:
        for s in self.list():
            if s.subject == subject:
                return s
        return None

    def add(self, subject: str, cards: Sequence[Flashcard]) -> str:
        """Store ``cards`` under a deduplicated subject and return that subject."""
        with self._lock:
            sets = self.list()
            final_subject = unique_subject_name(subject, sets)
            sets.insert(0, FlashcardSet(subject=final_subject, flashcards=list(cards)))
            self._write(sets)
        logger.info(
            "Added set %r with %d cards", final_subject, len(cards),
            extra={"subject": final_subject},
        )
        return final_subject

    def update(self, subject: str, cards: Sequence[Flashcard]) -> bool:
        """Replace the cards of ``subject``; returns False when no such set exists."""
        with self._lock:
            sets = self.list()
            for s in sets:
                if s.subject == subject:
                    s.flashcards = list(cards)
                    break
            else:
                return False
            self._write(sets)
        logger.info(
            "Updated set %r to %d cards", subject, len(cards),
            extra={"subject": subject},
        )
        return True

    def remove(self, subject: str) -> None:
        with self._lock:
            sets = self.list()
            kept = [s for s in sets if s.subject != subject]
            if len(kept) == len(sets):
                return
            self._write(kept)
        logger.info("Removed set %r", subject, extra={"subject": subject})
