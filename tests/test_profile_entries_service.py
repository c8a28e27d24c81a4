"""Tests for the generic profile entry service."""

from __future__ import annotations

import pytest

import cv_composer.data.db as db_module
from cv_composer.data.models import CVDocument, CVSelection
from cv_composer.services.profile_entries import (
    create_profile_entry,
    delete_profile_entry,
    get_motivation_vision,
    list_profile_entries,
    update_profile_entry,
    upsert_motivation_vision,
)
from cv_composer.services.users import create_user


@pytest.fixture
def username(tmp_db) -> str:
    create_user("ada")
    return "ada"


def test_create_and_list_skill_categories(username):
    create_profile_entry(username, "skill_category", {"category": "Tools", "display_order": 1})
    created = create_profile_entry(
        username,
        "skill_category",
        {"category": "Languages", "skills": ["Python", "SQL"], "display_order": 0},
    )

    assert created["skills"] == ["Python", "SQL"]
    entries = list_profile_entries(username, "skill_category")
    assert [entry["category"] for entry in entries] == ["Languages", "Tools"]


def test_reference_relationship_field(username):
    created = create_profile_entry(
        username,
        "reference",
        {"name": "Charles", "title": "Inventor", "company": "Analytical", "relationship": "Mentor"},
    )

    assert created["relationship"] == "Mentor"
    updated = update_profile_entry(username, "reference", created["id"], {"relationship": "Friend"})
    assert updated["relationship"] == "Friend"


@pytest.mark.parametrize(
    ("kind", "data"),
    [
        ("certification", {"name": "CKA"}),
        ("project", {"role": "Lead"}),
        ("key_competence", {"title": "Focus", "display_order": -2}),
    ],
)
def test_invalid_entries_are_rejected(username, kind, data):
    assert create_profile_entry(username, kind, data) is None


def test_unknown_kind_raises(username):
    with pytest.raises(ValueError):
        list_profile_entries(username, "hobby")


def test_missing_user(tmp_db):
    assert list_profile_entries("ghost", "project") is None
    assert create_profile_entry("ghost", "project", {"name": "X"}) is None
    assert delete_profile_entry("ghost", "project", 1) is False


def test_delete_drops_selections(username):
    project = create_profile_entry(username, "project", {"name": "Engine"})
    with db_module.get_session() as session:
        document = CVDocument(user_id=project["user_id"], name="CV")
        session.add(document)
        session.flush()
        session.add(
            CVSelection(document_id=document.id, kind="project", master_entity_id=project["id"])
        )
        # Same ID under another kind must survive.
        session.add(
            CVSelection(document_id=document.id, kind="education", master_entity_id=project["id"])
        )

    assert delete_profile_entry(username, "project", project["id"]) is True
    assert list_profile_entries(username, "project") == []
    with db_module.get_session() as session:
        assert [row.kind for row in session.query(CVSelection).all()] == ["education"]


def test_highlights_have_no_selections(username):
    highlight = create_profile_entry(username, "highlight", {"title": "Turing Award"})

    assert highlight["highlight_type"] == "achievement"
    assert delete_profile_entry(username, "highlight", highlight["id"]) is True


def test_motivation_vision_upsert(username):
    assert get_motivation_vision(username) is None

    upsert_motivation_vision(username, {"vision": "Poetical science", "passions": ["math"]})
    result = upsert_motivation_vision(username, {"mission": "Publish the notes"})

    assert result["vision"] == "Poetical science"
    assert result["mission"] == "Publish the notes"
    assert result["passions"] == ["math"]
