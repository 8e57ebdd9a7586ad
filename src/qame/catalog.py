"""Question catalog for the evaluation form.

The default catalog describes the February 2026 complaint-management
seminar. A deployment can point ``QAME_CATALOG_PATH`` at a JSON file
with the same shape to replace it.
"""

from __future__ import annotations

import json
import logging
import os
from functools import lru_cache
from pathlib import Path

from pydantic import BaseModel, ValidationError

from qame.models.domain import (
    EventDetails,
    GeneralCategory,
    Question,
    QuestionCatalog,
    Session,
    Speaker,
    category_for_id,
)

logger = logging.getLogger(__name__)

CATALOG_PATH_ENV = "QAME_CATALOG_PATH"

EVENT_DETAILS = EventDetails(
    title="Complaint Management at the School Level Cum MANCOM Meeting",
    date="February 11-13, 2026",
    venue="Development Academy of the Philippines (DAP) Tagaytay City",
    organizer="Schools Division Office of Quezon City",
)

POSITIONS: tuple[str, ...] = (
    "Master Teacher I",
    "Master Teacher II",
    "Master Teacher III",
    "Master Teacher IV",
    "Master Teacher V",
    "Principal I",
    "Principal II",
    "Principal III",
    "Principal IV",
    "Public School District Supervisor",
    "Education Program Supervisor",
    "Assistant School Division Superintendent",
    "School Division Superintendent",
)

PROGRAM_QUESTIONS: tuple[Question, ...] = (
    Question("pm1", "Registration process was systematic and efficient.", "program_management"),
    Question("pm2", "The seminar objectives were clearly met.", "program_management"),
    Question("pm3", "The secretariat/program management team was helpful.", "program_management"),
    Question("pm4", "The activity started and ended on time.", "program_management"),
)

VENUE_QUESTIONS: tuple[Question, ...] = (
    Question("v1", "The venue (DAP Tagaytay) was conducive to learning.", "venue"),
    Question("v2", "The accommodation was clean and comfortable.", "venue"),
    Question("v3", "The sound system and audio-visual equipment worked well.", "venue"),
)

MEAL_QUESTIONS: tuple[Question, ...] = (
    Question("m1", "Meals were served on time.", "meals"),
    Question("m2", "Food quality and taste were satisfactory.", "meals"),
    Question("m3", "Food quantity was sufficient.", "meals"),
)

SESSION_QUESTIONS: tuple[Question, ...] = (
    Question("sq1", "The speaker demonstrated mastery of the topic.", "session"),
    Question("sq2", "The topic was relevant to my role/function.", "session"),
    Question("sq3", "The presentation materials were clear and readable.", "session"),
    Question("sq4", "Time management was observed.", "session"),
)

SESSIONS: tuple[Session, ...] = (
    # Day 1
    Session(
        "d1-s1",
        1,
        "Session 1: Application of Procurement Law in the School Setting",
        (Speaker("spk-1", "Atty. Ruhjen S. Osmeña", "Procurement Law"),),
    ),
    Session(
        "d1-s2",
        1,
        "Session 2: Restorative Justice and Victimology",
        (Speaker("spk-2", "Dr. Janette S. Padua", "Restorative Justice"),),
    ),
    Session(
        "d1-s3",
        1,
        "Session 3: Salient Features of DepEd Order 49, s. 2006",
        (Speaker("spk-3", "Atty. Hiede S. Manginga", "DepEd Order 49"),),
    ),
    # Day 2
    Session(
        "d2-s4",
        2,
        "Session 4: Proper Handling of Child Protection Concerns",
        (Speaker("spk-4", "Atty. Ruhjen S. Osmeña", "Child Protection"),),
    ),
    Session(
        "d2-s5",
        2,
        "Session 5: Legal Matters that School Heads Should Know",
        (Speaker("spk-5", "Atty. Analiza G. Esperanza", "Legal Matters"),),
    ),
    Session(
        "d2-s6",
        2,
        "Session 6: PTA Common Issues and Concerns (DO 13, s. 2022)",
        (Speaker("spk-6", "Atty. Katherine Mae M. Hoggang", "PTA Issues"),),
    ),
    # Day 3
    Session(
        "d3-s7",
        3,
        "Session 7: Grievance and Mediation",
        (Speaker("spk-7", "Atty. Jean N. Litusquen", "Grievance and Mediation"),),
    ),
    Session(
        "d3-mancom",
        3,
        "Management Committee Meeting",
        (Speaker("spk-8", "Carleen S. Sedilla, CESO V", "SDS Address / MANCOM"),),
    ),
)

DEFAULT_CATALOG = QuestionCatalog(
    program_questions=PROGRAM_QUESTIONS,
    venue_questions=VENUE_QUESTIONS,
    meal_questions=MEAL_QUESTIONS,
    session_questions=SESSION_QUESTIONS,
    sessions=SESSIONS,
    positions=POSITIONS,
    event=EVENT_DETAILS,
)


# ============================================================================
# JSON catalog loading
# ============================================================================


class _QuestionFile(BaseModel):
    id: str
    text: str
    category: GeneralCategory | None = None


class _SpeakerFile(BaseModel):
    id: str
    name: str
    topic: str
    role: str | None = None


class _SessionFile(BaseModel):
    id: str
    day: int
    title: str
    speakers: list[_SpeakerFile] = []


class _EventFile(BaseModel):
    title: str
    date: str
    venue: str
    organizer: str


class _CatalogFile(BaseModel):
    program_questions: list[_QuestionFile]
    venue_questions: list[_QuestionFile]
    meal_questions: list[_QuestionFile]
    session_questions: list[_QuestionFile]
    sessions: list[_SessionFile]
    positions: list[str] = []
    event: _EventFile | None = None


def _general_question(raw: _QuestionFile) -> Question:
    """Build a general question, falling back to the id-prefix category."""
    category = raw.category or category_for_id(raw.id)
    return Question(id=raw.id, text=raw.text, category=category)


def catalog_from_dict(data: dict) -> QuestionCatalog:
    """Build a catalog from a parsed JSON document.

    Args:
        data: Mapping with program/venue/meal/session questions and sessions.

    Returns:
        Immutable QuestionCatalog.

    Raises:
        ValueError: If the document is malformed or ids are duplicated.
    """
    try:
        parsed = _CatalogFile.model_validate(data)
    except ValidationError as e:
        raise ValueError(f"Invalid question catalog: {e}") from e

    general = [
        _general_question(q)
        for q in parsed.program_questions + parsed.venue_questions + parsed.meal_questions
    ]
    catalog = QuestionCatalog(
        program_questions=tuple(q for q in general if q.category == "program_management"),
        venue_questions=tuple(q for q in general if q.category == "venue"),
        meal_questions=tuple(q for q in general if q.category == "meals"),
        session_questions=tuple(
            Question(id=q.id, text=q.text, category="session") for q in parsed.session_questions
        ),
        sessions=tuple(
            Session(
                id=s.id,
                day=s.day,
                title=s.title,
                speakers=tuple(
                    Speaker(id=sp.id, name=sp.name, topic=sp.topic, role=sp.role)
                    for sp in s.speakers
                ),
            )
            for s in parsed.sessions
        ),
        positions=tuple(parsed.positions),
        event=EventDetails(**parsed.event.model_dump()) if parsed.event else None,
    )
    _check_unique_ids(catalog)
    return catalog


def _check_unique_ids(catalog: QuestionCatalog) -> None:
    """Reject catalogs whose question or session ids collide."""
    for label, ids in (
        ("general question", [q.id for q in catalog.general_questions]),
        ("session question", [q.id for q in catalog.session_questions]),
        ("session", [s.id for s in catalog.sessions]),
    ):
        seen: set[str] = set()
        for item_id in ids:
            if item_id in seen:
                raise ValueError(f"Duplicate {label} id in catalog: {item_id}")
            seen.add(item_id)


def load_catalog(path: Path) -> QuestionCatalog:
    """Load a catalog from a JSON file.

    Raises:
        ValueError: If the file is not valid JSON or not a valid catalog.
    """
    try:
        data = json.loads(Path(path).read_text(encoding="utf-8"))
    except json.JSONDecodeError as e:
        raise ValueError(f"Catalog file {path} is not valid JSON: {e}") from e
    return catalog_from_dict(data)


@lru_cache(maxsize=1)
def get_catalog() -> QuestionCatalog:
    """Return the deployment catalog.

    Uses ``QAME_CATALOG_PATH`` when set, otherwise the built-in catalog.
    """
    override = os.environ.get(CATALOG_PATH_ENV)
    if override:
        logger.info(f"Loading question catalog from {override}")
        return load_catalog(Path(override))
    return DEFAULT_CATALOG
