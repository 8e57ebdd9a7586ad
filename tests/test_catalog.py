"""Tests for the question catalog."""

import json

import pytest

from qame.catalog import (
    CATALOG_PATH_ENV,
    DEFAULT_CATALOG,
    catalog_from_dict,
    get_catalog,
    load_catalog,
)
from qame.models.domain import category_for_id


def minimal_catalog_dict() -> dict:
    return {
        "program_questions": [{"id": "pm1", "text": "Registration"}],
        "venue_questions": [{"id": "v1", "text": "Venue"}],
        "meal_questions": [{"id": "m1", "text": "Meals"}],
        "session_questions": [{"id": "sq1", "text": "Mastery"}],
        "sessions": [
            {
                "id": "d1-s1",
                "day": 1,
                "title": "Opening",
                "speakers": [{"id": "spk-1", "name": "A. Speaker", "topic": "Intro"}],
            }
        ],
    }


class TestCategoryForId:
    """Id-prefix fallback rule."""

    @pytest.mark.parametrize(
        ("question_id", "category"),
        [
            ("pm1", "program_management"),
            ("pmx", "program_management"),
            ("m1", "meals"),
            ("meal2", "meals"),
            ("v1", "venue"),
            ("g1", "venue"),
            ("p1", "venue"),
        ],
    )
    def test_prefix_rule(self, question_id, category):
        """pm is checked before m; anything else is venue."""
        assert category_for_id(question_id) == category


class TestDefaultCatalog:
    """Built-in catalog."""

    def test_categories_match_prefix_rule(self):
        """Every general question's tag agrees with the prefix rule."""
        for question in DEFAULT_CATALOG.general_questions:
            assert question.category == category_for_id(question.id)

    def test_sessions_cover_three_days(self):
        """Each event day has at least one session."""
        for day in (1, 2, 3):
            assert DEFAULT_CATALOG.sessions_for_day(day)

    def test_ids_unique(self):
        """Question and session ids are unique."""
        general_ids = [q.id for q in DEFAULT_CATALOG.general_questions]
        session_ids = [s.id for s in DEFAULT_CATALOG.sessions]
        assert len(general_ids) == len(set(general_ids))
        assert len(session_ids) == len(set(session_ids))


class TestCatalogFromDict:
    """JSON catalog parsing."""

    def test_prefix_fallback_when_category_missing(self):
        """Questions without a category are tagged by prefix."""
        catalog = catalog_from_dict(minimal_catalog_dict())
        assert [q.category for q in catalog.general_questions] == [
            "program_management",
            "venue",
            "meals",
        ]
        assert catalog.session_questions[0].category == "session"
        assert catalog.sessions[0].speakers[0].name == "A. Speaker"

    def test_explicit_category_regroups_question(self):
        """An explicit category moves a question to that group."""
        data = minimal_catalog_dict()
        data["venue_questions"].append({"id": "snacks", "text": "Snacks", "category": "meals"})
        catalog = catalog_from_dict(data)
        assert {q.id for q in catalog.meal_questions} == {"m1", "snacks"}
        assert [q.id for q in catalog.venue_questions] == ["v1"]

    def test_duplicate_ids_rejected(self):
        """Colliding ids raise ValueError."""
        data = minimal_catalog_dict()
        data["meal_questions"].append({"id": "pm1", "text": "Dup"})
        with pytest.raises(ValueError, match="Duplicate"):
            catalog_from_dict(data)

    def test_missing_section_rejected(self):
        """A document without sessions is invalid."""
        data = minimal_catalog_dict()
        del data["sessions"]
        with pytest.raises(ValueError, match="Invalid question catalog"):
            catalog_from_dict(data)


class TestLoadCatalog:
    """Loading from disk and environment."""

    def test_load_from_file(self, tmp_path):
        """A JSON file loads into a catalog."""
        path = tmp_path / "catalog.json"
        path.write_text(json.dumps(minimal_catalog_dict()))
        catalog = load_catalog(path)
        assert catalog.sessions[0].id == "d1-s1"

    def test_invalid_json(self, tmp_path):
        """Malformed JSON raises ValueError."""
        path = tmp_path / "catalog.json"
        path.write_text("{not json")
        with pytest.raises(ValueError, match="not valid JSON"):
            load_catalog(path)

    def test_env_override(self, tmp_path, monkeypatch):
        """QAME_CATALOG_PATH replaces the default catalog."""
        path = tmp_path / "catalog.json"
        path.write_text(json.dumps(minimal_catalog_dict()))
        monkeypatch.setenv(CATALOG_PATH_ENV, str(path))
        get_catalog.cache_clear()
        try:
            assert get_catalog().sessions[0].title == "Opening"
        finally:
            monkeypatch.delenv(CATALOG_PATH_ENV)
            get_catalog.cache_clear()

    def test_default_without_env(self, monkeypatch):
        """Without the env var the built-in catalog is used."""
        monkeypatch.delenv(CATALOG_PATH_ENV, raising=False)
        get_catalog.cache_clear()
        assert get_catalog() is DEFAULT_CATALOG
