"""Tests for database schema and repository."""

import pytest

from qame.db import repo
from qame.db.schema import AccessCode, Evaluation
from qame.models.domain import AccessCodeEntity, SubmissionEntity


class TestSubmissionRepository:
    """Evaluation rows round-trip through the repository."""

    def test_create_and_fetch(self, session):
        """Nested rating mappings survive the JSON columns."""
        entity = SubmissionEntity(
            submission_id="sub-001",
            name="Juan Dela Cruz",
            email="juan@example.org",
            sex="Male",
            position="Principal I",
            school="QC High School",
            selected_day=2,
            general_ratings={"pm1": 4, "v1": 3},
            session_ratings={"d2-s4": {"sq1": 5, "sq2": 4}},
            strengths="Great speakers",
            improvements="",
        )
        repo.create_submission(session, entity)
        repo.commit(session)

        fetched = repo.get_submission(session, "sub-001")
        assert fetched is not None
        assert fetched.general_ratings == {"pm1": 4, "v1": 3}
        assert fetched.session_ratings == {"d2-s4": {"sq1": 5, "sq2": 4}}
        assert fetched.selected_day == 2
        assert fetched.created_at is not None

    def test_get_missing_submission(self, session):
        """Unknown ids return None."""
        assert repo.get_submission(session, "missing") is None

    def test_get_all_and_count(self, session):
        """get_all_submissions returns every row."""
        for i in range(3):
            repo.create_submission(session, SubmissionEntity(submission_id=f"sub-{i}"))
        repo.commit(session)

        assert repo.count_submissions(session) == 3
        ids = {s.submission_id for s in repo.get_all_submissions(session)}
        assert ids == {"sub-0", "sub-1", "sub-2"}

    def test_raw_rows_with_loose_values(self, session):
        """Rows written by other clients keep their raw values."""
        session.add(
            Evaluation(
                submission_id="legacy",
                general_ratings={"pm1": "4", "v1": "n/a"},
                session_ratings=None,
            )
        )
        session.commit()

        fetched = repo.get_submission(session, "legacy")
        assert fetched.general_ratings == {"pm1": "4", "v1": "n/a"}
        assert fetched.session_ratings is None


class TestAccessCodeRepository:
    """Access code rows."""

    def test_only_active_codes_returned(self, session):
        """Inactive codes are filtered out."""
        repo.create_access_code(session, AccessCodeEntity(code="open-sesame", label="admin"))
        session.add(AccessCode(code="retired", active=False))
        repo.commit(session)

        codes = repo.get_active_access_codes(session)
        assert [c.code for c in codes] == ["open-sesame"]
        assert codes[0].label == "admin"


class TestSessionManagement:
    """Engine/session helpers in qame.db.session."""

    def test_init_db_and_context_manager(self, tmp_path):
        """init_db creates tables; get_db_session commits on exit."""
        from qame.db.session import get_db_session, init_db

        db_path = tmp_path / "nested" / "qame.db"
        init_db(db_path)
        assert db_path.exists()

        with get_db_session(db_path) as session:
            repo.create_access_code(session, AccessCodeEntity(code="abc"))

        with get_db_session(db_path) as session:
            assert [c.code for c in repo.get_active_access_codes(session)] == ["abc"]

    def test_context_manager_rolls_back(self, tmp_path):
        """An exception inside the block discards pending writes."""
        from qame.db.session import get_db_session, init_db

        db_path = tmp_path / "qame.db"
        init_db(db_path)

        with pytest.raises(RuntimeError):
            with get_db_session(db_path) as session:
                repo.create_submission(session, SubmissionEntity(submission_id="lost"))
                raise RuntimeError("boom")

        with get_db_session(db_path) as session:
            assert repo.count_submissions(session) == 0

    def test_db_path_from_env(self, monkeypatch, tmp_path):
        """QAME_DB_PATH sets the default location."""
        from qame.db.session import DB_PATH_ENV, default_db_path

        monkeypatch.setenv(DB_PATH_ENV, str(tmp_path / "env.db"))
        assert default_db_path() == tmp_path / "env.db"
