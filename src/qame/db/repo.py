"""Repository pattern for database operations.

Encapsulates all SQLAlchemy queries, keeping domain logic pure.
Returns domain models (not SQLAlchemy entities) to external callers.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

from sqlalchemy import func
from sqlalchemy.orm import Session

from qame.db.schema import AccessCode, Evaluation
from qame.models.domain import AccessCodeEntity, SubmissionEntity

if TYPE_CHECKING:
    from sqlalchemy.orm import Session as DbSession
else:
    DbSession = Session

# Re-export for external use
__all__ = ["DbSession"]


# ============================================================================
# Converters: SQLAlchemy -> Domain
# ============================================================================


def _evaluation_to_entity(row: Evaluation) -> SubmissionEntity:
    """Convert SQLAlchemy Evaluation to domain entity."""
    return SubmissionEntity(
        submission_id=row.submission_id,
        name=row.name,
        email=row.email,
        sex=row.sex,
        position=row.position,
        school=row.school,
        selected_day=row.selected_day,
        general_ratings=row.general_ratings,
        session_ratings=row.session_ratings,
        strengths=row.strengths,
        improvements=row.improvements,
        created_at=row.created_at,
    )


def _access_code_to_entity(row: AccessCode) -> AccessCodeEntity:
    """Convert SQLAlchemy AccessCode to domain entity."""
    return AccessCodeEntity(code=row.code, label=row.label, active=row.active)


# ============================================================================
# Submission Repository
# ============================================================================


def create_submission(session: DbSession, entity: SubmissionEntity) -> SubmissionEntity:
    """Create a new submission."""
    row = Evaluation(
        submission_id=entity.submission_id,
        name=entity.name,
        email=entity.email,
        sex=entity.sex,
        position=entity.position,
        school=entity.school,
        selected_day=entity.selected_day,
        general_ratings=entity.general_ratings,
        session_ratings=entity.session_ratings,
        strengths=entity.strengths,
        improvements=entity.improvements,
    )
    session.add(row)
    return entity


def get_submission(session: DbSession, submission_id: str) -> SubmissionEntity | None:
    """Get submission by ID."""
    row = session.query(Evaluation).filter(Evaluation.submission_id == submission_id).first()
    return _evaluation_to_entity(row) if row else None


def get_all_submissions(session: DbSession) -> list[SubmissionEntity]:
    """Get every stored submission. No ordering is guaranteed."""
    rows = session.query(Evaluation).all()
    return [_evaluation_to_entity(r) for r in rows]


def count_submissions(session: DbSession) -> int:
    """Count stored submissions."""
    return session.query(func.count(Evaluation.submission_id)).scalar() or 0


# ============================================================================
# Access Code Repository
# ============================================================================


def get_active_access_codes(session: DbSession) -> list[AccessCodeEntity]:
    """Get all active access codes."""
    rows = session.query(AccessCode).filter(AccessCode.active.is_(True)).all()
    return [_access_code_to_entity(r) for r in rows]


def create_access_code(session: DbSession, entity: AccessCodeEntity) -> AccessCodeEntity:
    """Create a new access code."""
    session.add(AccessCode(code=entity.code, label=entity.label, active=entity.active))
    return entity


# ============================================================================
# Batch Operations
# ============================================================================


def commit(session: DbSession) -> None:
    """Commit current transaction."""
    session.commit()


def rollback(session: DbSession) -> None:
    """Roll back current transaction."""
    session.rollback()
