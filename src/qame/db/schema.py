"""Database schema for QAME.

One row per completed evaluation, plus the admin access-code table.
Rating mappings are stored as JSON exactly as submitted.
"""

from datetime import datetime, timezone

from sqlalchemy import JSON, Boolean, DateTime, Integer, String, Text
from sqlalchemy.orm import DeclarativeBase, Mapped, mapped_column


class Base(DeclarativeBase):
    """Base class for all models."""

    pass


class Evaluation(Base):
    """A respondent's submitted evaluation (append-only)."""

    __tablename__ = "evaluations"

    submission_id: Mapped[str] = mapped_column(String(64), primary_key=True)
    name: Mapped[str | None] = mapped_column(String(256), nullable=True)
    email: Mapped[str | None] = mapped_column(String(256), nullable=True)
    sex: Mapped[str | None] = mapped_column(String(16), nullable=True)
    position: Mapped[str | None] = mapped_column(String(128), nullable=True)
    school: Mapped[str | None] = mapped_column(String(256), nullable=True)
    selected_day: Mapped[int | None] = mapped_column(Integer, nullable=True)
    general_ratings: Mapped[dict | None] = mapped_column(JSON, nullable=True)
    session_ratings: Mapped[dict | None] = mapped_column(JSON, nullable=True)
    strengths: Mapped[str | None] = mapped_column(Text, nullable=True)
    improvements: Mapped[str | None] = mapped_column(Text, nullable=True)
    created_at: Mapped[datetime] = mapped_column(
        DateTime, nullable=False, default=lambda: datetime.now(timezone.utc)
    )


class AccessCode(Base):
    """Shared secret that unlocks the results dashboard."""

    __tablename__ = "access_codes"

    code: Mapped[str] = mapped_column(String(128), primary_key=True)
    label: Mapped[str | None] = mapped_column(String(128), nullable=True)
    active: Mapped[bool] = mapped_column(Boolean, nullable=False, default=True)
    created_at: Mapped[datetime] = mapped_column(
        DateTime, nullable=False, default=lambda: datetime.now(timezone.utc)
    )
