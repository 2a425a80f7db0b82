"""Subject label deduplication for stored flashcard sets."""

from __future__ import annotations

import re
from typing import Iterable

from app.modules.flashcards.models.flashcards import FlashcardSet


def unique_subject_name(base: str, existing: Iterable[FlashcardSet]) -> str:
    """Return ``base`` or ``base(n)`` so that no stored subject collides.

    Any stored ``base`` or ``base(k)`` forces a suffix; the new suffix is one
    more than the largest ``k`` taken (a bare ``base`` counts as 0).
    """
    pattern = re.compile(rf"{re.escape(base)}(?:\(([0-9]+)\))?")
    taken = False
    max_index = 0
    for s in existing:
        m = pattern.fullmatch(s.subject)
        if not m:
            continue
        taken = True
        if m.group(1) is not None:
            max_index = max(max_index, int(m.group(1)))

    if not taken:
        return base
    return f"{base}({max_index + 1})"
