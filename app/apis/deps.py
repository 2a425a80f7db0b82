from __future__ import annotations

from fastapi import Request

from app.modules.flashcards.session import StudySession


def get_study_session(request: Request) -> StudySession:
    """Resolve the app-wide browsing session created in the lifespan hook."""
    return request.app.state.study_session
