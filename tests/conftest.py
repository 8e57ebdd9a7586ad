"""Shared pytest fixtures for qame tests."""

import pytest
from sqlalchemy import create_engine
from sqlalchemy.orm import sessionmaker

from qame.db.schema import Base
from qame.models.domain import Question, QuestionCatalog, Session, Speaker


@pytest.fixture
def engine():
    """Create an in-memory SQLite engine for testing."""
    engine = create_engine("sqlite:///:memory:", echo=False)
    Base.metadata.create_all(engine)
    return engine


@pytest.fixture
def session(engine):
    """Create a database session for testing."""
    Session = sessionmaker(bind=engine)
    session = Session()
    yield session
    session.close()


@pytest.fixture
def catalog() -> QuestionCatalog:
    """Small catalog: two program, one venue, one meal question, two sessions."""
    return QuestionCatalog(
        program_questions=(
            Question("pm1", "Registration was efficient.", "program_management"),
            Question("pm2", "Objectives were met.", "program_management"),
        ),
        venue_questions=(Question("v1", "Venue was conducive.", "venue"),),
        meal_questions=(Question("m1", "Meals were satisfactory.", "meals"),),
        session_questions=(
            Question("sq1", "Speaker mastery.", "session"),
            Question("sq2", "Topic relevance.", "session"),
        ),
        sessions=(
            Session("d1-s1", 1, "Session 1", (Speaker("spk-1", "Speaker One", "Topic A"),)),
            Session("d2-s2", 2, "Session 2", (Speaker("spk-2", "Speaker Two", "Topic B"),)),
        ),
        positions=("Principal I", "Master Teacher I"),
    )
