import pytest

from app.modules.flashcards.generator import FlashcardsGenerator
from app.modules.flashcards.session import StudySession
from app.modules.flashcards.store import MemoryBackend, SetStore


FIVE_CARDS = "\n".join(
    f"Q: Question {i}?\nA: Answer {i}." for i in range(1, 6)
)


class ScriptedTextService:
    """Returns queued replies in order; exceptions in the queue are raised."""

    def __init__(self, *replies):
        self.replies = list(replies)
        self.prompts = []
        self.gate = None

    async def complete(self, prompt):
        self.prompts.append(prompt)
        if self.gate is not None:
            await self.gate.wait()
        reply = self.replies.pop(0)
        if isinstance(reply, BaseException):
            raise reply
        return reply


class ManualHandle:
    def __init__(self, delay, callback):
        self.delay = delay
        self.callback = callback
        self.cancelled = False

    def cancel(self):
        self.cancelled = True


class ManualScheduler:
    """Collects scheduled callbacks so tests decide when time passes."""

    def __init__(self):
        self.handles = []

    def __call__(self, delay, callback):
        handle = ManualHandle(delay, callback)
        self.handles.append(handle)
        return handle

    @property
    def pending(self):
        return [h for h in self.handles if not h.cancelled]

    def fire_all(self):
        for h in self.pending:
            h.cancelled = True
            h.callback()


@pytest.fixture
def backend():
    return MemoryBackend()


@pytest.fixture
def store(backend):
    return SetStore(backend, key="ai_flashcard_sets")


@pytest.fixture
def scheduler():
    return ManualScheduler()


@pytest.fixture
def text_service():
    return ScriptedTextService()


@pytest.fixture
def session(store, text_service, scheduler):
    s = StudySession(
        store,
        FlashcardsGenerator(text_service, batch_size=5, max_words=30),
        switch_seconds=0.22,
        scheduler=scheduler,
    )
    yield s
    s.close()


@pytest.fixture
def five_cards():
    return FIVE_CARDS
