"""Catalog API endpoint.

GET /api/catalog - Questions, sessions and positions for the form
"""

from __future__ import annotations

from fastapi import APIRouter, Query

from qame.catalog import get_catalog
from qame.models.domain import Question, Session
from qame.models.types import (
    CatalogDetail,
    EventDetail,
    QuestionDetail,
    SessionDetail,
    SpeakerDetail,
)

router = APIRouter()


def _question_detail(question: Question) -> QuestionDetail:
    return QuestionDetail(id=question.id, text=question.text, category=question.category)


def _session_detail(session: Session) -> SessionDetail:
    return SessionDetail(
        id=session.id,
        day=session.day,
        title=session.title,
        speakers=[
            SpeakerDetail(id=s.id, name=s.name, topic=s.topic, role=s.role)
            for s in session.speakers
        ],
    )


@router.get("/catalog", response_model=CatalogDetail)
def get_form_catalog(day: int | None = Query(default=None, ge=1, le=3)) -> CatalogDetail:
    """Get the form catalog.

    Args:
        day: Optional day filter for the session list.

    Returns:
        CatalogDetail with event details, questions and sessions.
    """
    catalog = get_catalog()
    sessions = catalog.sessions_for_day(day) if day is not None else catalog.sessions

    return CatalogDetail(
        event=EventDetail(
            title=catalog.event.title,
            date=catalog.event.date,
            venue=catalog.event.venue,
            organizer=catalog.event.organizer,
        )
        if catalog.event
        else None,
        positions=list(catalog.positions),
        program_questions=[_question_detail(q) for q in catalog.program_questions],
        venue_questions=[_question_detail(q) for q in catalog.venue_questions],
        meal_questions=[_question_detail(q) for q in catalog.meal_questions],
        session_questions=[_question_detail(q) for q in catalog.session_questions],
        sessions=[_session_detail(s) for s in sessions],
    )
