from __future__ import annotations

from typing import Annotated

from fastapi import APIRouter, Depends, HTTPException, status
from fastapi.responses import JSONResponse

from app.apis.deps import get_study_session
from app.core.config import settings
from app.modules.flashcards.errors import (
    GenerationError,
    GenerationInProgressError,
    InvalidSubjectError,
    NoActiveSetError,
    SetNotFoundError,
)
from app.modules.flashcards.models.flashcards import FlashcardSet, SessionState
from app.modules.flashcards.session import StudySession
from .schemas import (
    AddMoreResponse,
    ErrorResponse,
    FlashcardSetSummary,
    GoToRequest,
    SubjectRequest,
)


router = APIRouter(prefix=f"/{settings.app.version}/flashcards", tags=["flashcards"])

Session = Annotated[StudySession, Depends(get_study_session)]


def _generation_failed(e: GenerationError) -> JSONResponse:
    return JSONResponse(
        status_code=status.HTTP_502_BAD_GATEWAY,
        content=ErrorResponse(detail=str(e), kind=e.kind).model_dump(),
    )


@router.get("/sets", response_model=list[FlashcardSetSummary])
async def list_sets(session: Session) -> list[FlashcardSetSummary]:
    return [
        FlashcardSetSummary(subject=s.subject, total_flashcards=len(s.flashcards))
        for s in session.list_sets()
    ]


@router.post("/sets/select", response_model=SessionState)
async def select_set(req: SubjectRequest, session: Session) -> SessionState:
    try:
        session.select_stored_set(req.subject)
    except SetNotFoundError as e:
        raise HTTPException(status_code=404, detail=str(e))
    return session.snapshot()


@router.delete("/sets/{subject:path}", status_code=status.HTTP_204_NO_CONTENT)
async def delete_set(subject: str, session: Session) -> None:
    session.delete_stored_set(subject)


@router.post(
    "/generate",
    response_model=FlashcardSet,
    status_code=status.HTTP_201_CREATED,
    responses={502: {"model": ErrorResponse}},
)
async def generate(req: SubjectRequest, session: Session):
    try:
        return await session.submit_new_subject(req.subject)
    except InvalidSubjectError as e:
        raise HTTPException(status_code=422, detail=str(e))
    except GenerationInProgressError as e:
        raise HTTPException(status_code=409, detail=str(e))
    except GenerationError as e:
        return _generation_failed(e)


@router.post(
    "/more", response_model=AddMoreResponse, responses={502: {"model": ErrorResponse}}
)
async def add_more(session: Session):
    try:
        added = await session.add_more()
    except (NoActiveSetError, SetNotFoundError) as e:
        raise HTTPException(status_code=404, detail=str(e))
    except GenerationInProgressError as e:
        raise HTTPException(status_code=409, detail=str(e))
    except GenerationError as e:
        return _generation_failed(e)
    return AddMoreResponse(added=added, total_flashcards=len(session.cards))


@router.get("/session", response_model=SessionState)
async def get_session_state(session: Session) -> SessionState:
    return session.snapshot()


@router.post("/next", response_model=SessionState)
async def next_card(session: Session) -> SessionState:
    session.next()
    return session.snapshot()


@router.post("/prev", response_model=SessionState)
async def prev_card(session: Session) -> SessionState:
    session.prev()
    return session.snapshot()


@router.post("/goto", response_model=SessionState)
async def go_to_card(req: GoToRequest, session: Session) -> SessionState:
    session.go_to(req.index)
    return session.snapshot()


@router.post("/flip", response_model=SessionState)
async def flip_card(session: Session) -> SessionState:
    session.toggle_reveal()
    return session.snapshot()


@router.post("/back", response_model=SessionState)
async def back_to_entry(session: Session) -> SessionState:
    session.back_to_entry()
    return session.snapshot()
