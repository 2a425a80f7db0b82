"""Flashcard generator using pydantic-ai and the Gemini provider.

The model is asked for plain text in a fixed ``Q: ... A: ...`` grammar, which
is parsed and length-filtered here. Imports for the LLM provider are kept
lazy to avoid import-time errors when credentials are missing.
"""

from __future__ import annotations

import re
from typing import Any, Optional, Protocol, Sequence

import httpx
from pydantic_ai import Agent
from pydantic_ai.exceptions import AgentRunError, UserError

from app.core.config import settings
from app.core.logging import get_logger
from app.modules.flashcards.errors import (
    FilterExhaustedError,
    ParseError,
    TransportError,
)
from app.modules.flashcards.models.flashcards import Flashcard

logger = get_logger(__name__)

CARD_PATTERN = re.compile(r"Q:\s*(.+?)\s*A:\s*(.+?)(?=Q:|\Z)", re.DOTALL)

FORMAT_RULES = (
    "Q: [question] (question must be less than {max_words} words)\n"
    "A: [answer] (answer must be less than {max_words} words)\n\n"
    "Only output the flashcards in this format."
)


def build_prompt(
    subject: str,
    previous_questions: Sequence[str] = (),
    *,
    count: int = 5,
    max_words: int = 30,
) -> str:
    """Build the initial or continuation prompt for ``subject``."""
    rules = FORMAT_RULES.format(max_words=max_words)
    if not previous_questions:
        return (
            f'Generate {count} flashcards about "{subject}". For each flashcard, '
            "provide a question and its answer in the following format:\n\n"
            f"{rules}"
        )
    prev = "\n".join(f"Q{i}: {q}" for i, q in enumerate(previous_questions, start=1))
    return (
        f'Generate {count} additional flashcards about "{subject}". '
        "Do not repeat any of these questions:\n\n"
        f"{prev}\n\n"
        "For each new flashcard, provide a question and its answer in the "
        "following format:\n\n"
        f"{rules}"
    )


def parse_flashcards(text: str) -> list[Flashcard]:
    """Extract every ``Q: <question> A: <answer>`` unit from ``text``.

    Each answer runs up to the next ``Q:`` marker or the end of the text.
    """
    cards = []
    for m in CARD_PATTERN.finditer(text or ""):
        q = m.group(1).strip()
        a = m.group(2).strip()
        if q and a:
            cards.append(Flashcard(question=q, answer=a))
    return cards


def filter_flashcards(cards: Sequence[Flashcard], max_words: int = 30) -> list[Flashcard]:
    """Drop cards whose question has ``max_words`` or more words."""
    kept = [c for c in cards if len(c.question.split()) < max_words]
    if len(kept) != len(cards):
        logger.debug("Dropped %d over-long cards", len(cards) - len(kept))
    return kept


class TextService(Protocol):
    """Opaque prompt-in, text-out generation service."""

    async def complete(self, prompt: str) -> str: ...


def _build_google_model(model_name: str):
    """Build the Google Gemini model provider (lazy import)."""
    from pydantic_ai.models.google import GoogleModel
    from pydantic_ai.providers.google import GoogleProvider

    provider = GoogleProvider(api_key=settings.gemini_api_key)
    return GoogleModel(model_name, provider=provider)


class AgentTextService:
    """TextService backed by a plain-text pydantic-ai agent."""

    def __init__(self, model: Any = None, *, model_name: Optional[str] = None) -> None:
        self._model = model
        self.model_name = model_name or settings.flashcards.model_name

    def _build_agent(self) -> Agent[None, str]:
        model = self._model or _build_google_model(self.model_name)
        return Agent(model, output_type=str)

    async def complete(self, prompt: str) -> str:
        try:
            agent = self._build_agent()
            res = await agent.run(prompt)
        except (AgentRunError, UserError, httpx.HTTPError) as e:
            raise TransportError(f"Failed to fetch flashcards: {e}") from e
        return res.output or ""


class FlashcardsGenerator:
    """Prompt, call, parse and filter one batch of flashcards."""

    def __init__(
        self,
        text_service: Optional[TextService] = None,
        *,
        batch_size: Optional[int] = None,
        max_words: Optional[int] = None,
    ) -> None:
        self.text_service = text_service or AgentTextService()
        self.batch_size = batch_size or settings.flashcards.batch_size
        self.max_words = max_words or settings.flashcards.max_words

    async def generate(
        self, subject: str, previous_questions: Sequence[str] = ()
    ) -> list[Flashcard]:
        """Return a non-empty batch of new cards or raise a GenerationError."""
        prompt = build_prompt(
            subject,
            previous_questions,
            count=self.batch_size,
            max_words=self.max_words,
        )
        mode = "continuation" if previous_questions else "initial"
        logger.info(
            "Requesting %s flashcards for %r", mode, subject, extra={"subject": subject}
        )
        text = await self.text_service.complete(prompt)

        cards = parse_flashcards(text)
        if not cards:
            raise ParseError("Could not parse flashcards from the response.")

        filtered = filter_flashcards(cards, self.max_words)
        if not filtered:
            raise FilterExhaustedError(
                f"Could not parse flashcards with questions under {self.max_words} "
                "words from the response."
            )
        logger.info(
            "Generated %d flashcards for %r", len(filtered), subject,
            extra={"subject": subject},
        )
        return filtered
