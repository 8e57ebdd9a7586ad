"""Evaluation submission intake.

Checks a completed form against the question catalog, then builds
and stores one record for it.
Domain logic is pure - database operations go through repo.
"""

from __future__ import annotations

import logging
import uuid
from dataclasses import dataclass, field

from sqlalchemy.exc import SQLAlchemyError

from qame.db import repo
from qame.db.repo import DbSession
from qame.models.domain import QuestionCatalog, SubmissionEntity

logger = logging.getLogger(__name__)


class SubmissionStoreError(RuntimeError):
    """Raised when a submission could not be persisted."""


class SubmissionRejectedError(ValueError):
    """Raised when a submission does not fit the question catalog."""

    def __init__(self, problems: list[str]):
        super().__init__("; ".join(problems))
        self.problems = problems


@dataclass
class SubmissionInput:
    """Input for evaluation submission."""

    email: str
    selected_day: int
    name: str = ""
    sex: str = ""
    position: str = ""
    school: str = ""
    general_ratings: dict[str, int] = field(default_factory=dict)
    session_ratings: dict[str, dict[str, int]] = field(default_factory=dict)
    strengths: str = ""
    improvements: str = ""


@dataclass
class SubmissionResult:
    """Result of evaluation submission."""

    submission_id: str
    success: bool


def check_against_catalog(
    submission_input: SubmissionInput,
    catalog: QuestionCatalog,
) -> None:
    """Reject a submission the form could not have produced.

    Every general question must be answered, and only sessions held on
    the selected day may be rated. Pure function - no database access.

    Raises:
        SubmissionRejectedError: Listing every problem found.
    """
    problems: list[str] = []

    general_ids = [q.id for q in catalog.general_questions]
    missing = [qid for qid in general_ids if qid not in submission_input.general_ratings]
    if missing:
        problems.append(f"missing general ratings: {', '.join(missing)}")
    unknown = sorted(set(submission_input.general_ratings) - set(general_ids))
    if unknown:
        problems.append(f"unknown general questions: {', '.join(unknown)}")

    day_sessions = {s.id for s in catalog.sessions_for_day(submission_input.selected_day)}
    all_sessions = {s.id for s in catalog.sessions}
    session_question_ids = {q.id for q in catalog.session_questions}
    for session_id, answers in submission_input.session_ratings.items():
        if session_id not in all_sessions:
            problems.append(f"unknown session: {session_id}")
            continue
        if session_id not in day_sessions:
            problems.append(
                f"session {session_id} is not held on day {submission_input.selected_day}"
            )
        unknown_questions = sorted(set(answers) - session_question_ids)
        if unknown_questions:
            problems.append(f"unknown questions for {session_id}: {', '.join(unknown_questions)}")

    if problems:
        raise SubmissionRejectedError(problems)


def submit_evaluation(
    session: DbSession,
    submission_input: SubmissionInput,
) -> SubmissionResult:
    """Store a completed evaluation.

    Args:
        session: Database session.
        submission_input: Evaluation data.

    Returns:
        SubmissionResult with the new submission ID.

    Raises:
        SubmissionStoreError: If the store rejects the record.
    """
    entity = _create_submission_entity(submission_input)

    try:
        repo.create_submission(session, entity)
        repo.commit(session)
    except SQLAlchemyError as e:
        repo.rollback(session)
        logger.error(f"Failed to store submission {entity.submission_id}: {e}")
        raise SubmissionStoreError("Failed to store evaluation") from e

    logger.info(f"Stored submission {entity.submission_id} for day {entity.selected_day}")
    return SubmissionResult(submission_id=entity.submission_id, success=True)


def _create_submission_entity(submission_input: SubmissionInput) -> SubmissionEntity:
    """Create submission entity from input.

    Pure function - no database access. Nested mappings are copied so
    the stored record does not alias the caller's dicts.
    """
    return SubmissionEntity(
        submission_id=str(uuid.uuid4()),
        name=submission_input.name,
        email=submission_input.email,
        sex=submission_input.sex,
        position=submission_input.position,
        school=submission_input.school,
        selected_day=submission_input.selected_day,
        general_ratings=dict(submission_input.general_ratings),
        session_ratings={
            session_id: dict(answers)
            for session_id, answers in submission_input.session_ratings.items()
        },
        strengths=submission_input.strengths,
        improvements=submission_input.improvements,
    )
