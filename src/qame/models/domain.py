"""Domain models for QAME.

Pure Python dataclasses representing domain entities.
These models are independent of SQLAlchemy and used throughout
the application for clean separation from the database layer.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime
from typing import Any, Literal


# ============================================================================
# Question Catalog Domain
# ============================================================================

QuestionCategory = Literal["program_management", "venue", "meals", "session"]
GeneralCategory = Literal["program_management", "venue", "meals"]

DAYS: tuple[int, ...] = (1, 2, 3)


def category_for_id(question_id: str) -> GeneralCategory:
    """Derive a general question category from its id prefix.

    Only used when a catalog arrives without explicit categories.
    Prefixes are checked in order: "pm", then "m"; anything else is venue.
    """
    if question_id.startswith("pm"):
        return "program_management"
    if question_id.startswith("m"):
        return "meals"
    return "venue"


@dataclass(frozen=True)
class Question:
    """A single Likert-scale question."""

    id: str
    text: str
    category: QuestionCategory


@dataclass(frozen=True)
class Speaker:
    """Speaker presenting a session."""

    id: str
    name: str
    topic: str
    role: str | None = None


@dataclass(frozen=True)
class Session:
    """A talk scheduled on one event day."""

    id: str
    day: int
    title: str
    speakers: tuple[Speaker, ...] = ()


@dataclass(frozen=True)
class EventDetails:
    """Descriptive event metadata shown on the form and report."""

    title: str
    date: str
    venue: str
    organizer: str


@dataclass(frozen=True)
class QuestionCatalog:
    """Static question configuration for one deployment."""

    program_questions: tuple[Question, ...]
    venue_questions: tuple[Question, ...]
    meal_questions: tuple[Question, ...]
    session_questions: tuple[Question, ...]
    sessions: tuple[Session, ...]
    positions: tuple[str, ...] = ()
    event: EventDetails | None = None

    @property
    def general_questions(self) -> tuple[Question, ...]:
        """Program, venue and meal questions in display order."""
        return self.program_questions + self.venue_questions + self.meal_questions

    def sessions_for_day(self, day: int) -> tuple[Session, ...]:
        """Sessions scheduled on *day*."""
        return tuple(s for s in self.sessions if s.day == day)


# ============================================================================
# Submission Domain
# ============================================================================


@dataclass
class SubmissionEntity:
    """Domain model for one stored evaluation.

    Fields mirror the store record and are intentionally loosely typed:
    values are coerced during aggregation, not on read.
    """

    submission_id: str
    name: str | None = None
    email: str | None = None
    sex: str | None = None
    position: str | None = None
    school: str | None = None
    selected_day: Any = None
    general_ratings: dict[str, Any] | None = field(default_factory=dict)
    session_ratings: dict[str, Any] | None = field(default_factory=dict)
    strengths: str | None = None
    improvements: str | None = None
    created_at: datetime | None = None


# ============================================================================
# Access Domain
# ============================================================================


@dataclass
class AccessCodeEntity:
    """Domain model for an admin access code."""

    code: str
    label: str | None = None
    active: bool = True
