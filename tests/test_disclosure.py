"""Tests for the disclosure filter."""

from __future__ import annotations

import pytest

from cv_composer.constants import PLACEHOLDER_NAME, EntityKind, LayoutMode, PrivacyLevel
from cv_composer.core import compose_document, get_display_name, redact
from cv_composer.core.records import ContactProfile, ReferenceEntry, WorkExperienceEntry

CONTACT = ContactProfile(
    user_id=1,
    first_name="  Grace ",
    last_name="Hopper",
    email="grace@example.com",
    phone="+1 555 0100",
    location="Arlington, VA",
    linkedin_url="https://linkedin.com/in/grace",
    github_url="https://github.com/grace",
    website_url="https://grace.dev",
)


@pytest.fixture
def resolved(store):
    store.add_document(
        document_id=1,
        user_id=1,
        name="Backend CV",
        layout_mode=LayoutMode.TWO_COLUMN,
        layout_config={
            "mode": "two-column",
            "pages": [
                {"sidebar": ["photo", "contact", "skills"], "main": ["header", "experience"]},
                {"sidebar": [], "main": ["references"]},
            ],
        },
    )
    store.add_entries(
        WorkExperienceEntry(id=1, user_id=1, company="Navy", title="Rear Admiral"),
        ReferenceEntry(
            id=2,
            user_id=1,
            name="Howard Aiken",
            title="Professor",
            company="Harvard",
            email="aiken@example.com",
            phone="+1 555 0199",
        ),
    )
    return compose_document(store, 1)


def test_exposed_fields_only_shrink_as_privacy_increases(resolved):
    exposed = [
        redact(resolved, CONTACT, level).profile.exposed_fields()
        for level in (PrivacyLevel.NONE, PrivacyLevel.PERSONAL, PrivacyLevel.FULL)
    ]

    assert exposed[0] >= exposed[1] >= exposed[2]
    assert exposed[0] == {
        "display_name",
        "location",
        "email",
        "phone",
        "linkedin_url",
        "github_url",
        "website_url",
    }
    assert exposed[1] == {"display_name", "location"}
    assert exposed[2] == {"display_name"}


def test_none_shows_full_name_and_contact(resolved):
    profile = redact(resolved, CONTACT, PrivacyLevel.NONE).profile

    assert profile.display_name == "Grace Hopper"
    assert profile.email == "grace@example.com"
    assert profile.show_privacy_badge is False


def test_full_anonymizes_whatever_the_profile_holds(resolved):
    public_cv = redact(resolved, CONTACT, PrivacyLevel.FULL)

    assert public_cv.profile.display_name == PLACEHOLDER_NAME
    assert public_cv.profile.show_privacy_badge is True
    assert public_cv.title is None
    sidebar = [section for page in public_cv.pages for section in page.sidebar]
    assert "photo" not in sidebar
    assert "contact" not in sidebar
    assert "skills" in sidebar


def test_personal_with_blank_names_uses_placeholder(resolved):
    blank = ContactProfile(user_id=1, first_name="  ", last_name=None, location="Paris")

    profile = redact(resolved, blank, PrivacyLevel.PERSONAL).profile

    assert profile.display_name == PLACEHOLDER_NAME
    assert profile.location == "Paris"
    assert profile.show_privacy_badge is False


def test_unknown_privacy_level_is_treated_as_full(resolved, caplog):
    with caplog.at_level("WARNING"):
        public_cv = redact(resolved, CONTACT, "public")

    assert public_cv.privacy_level is PrivacyLevel.FULL
    assert public_cv.profile.exposed_fields() == {"display_name"}
    assert redact(resolved, CONTACT, None).privacy_level is PrivacyLevel.FULL


def test_missing_profile_exposes_nothing(resolved):
    profile = redact(resolved, None, PrivacyLevel.NONE).profile

    assert profile.exposed_fields() == {"display_name"}
    assert profile.display_name == PLACEHOLDER_NAME


@pytest.mark.parametrize("level", [PrivacyLevel.PERSONAL, PrivacyLevel.FULL])
def test_reference_contact_details_are_stripped(resolved, level):
    public_cv = redact(resolved, CONTACT, level)

    (reference,) = public_cv.sections[EntityKind.REFERENCE]
    assert "email" not in reference.details
    assert "phone" not in reference.details
    assert reference.details["name"] == "Howard Aiken"


def test_reference_contact_details_are_kept_without_privacy(resolved):
    (reference,) = redact(resolved, CONTACT, PrivacyLevel.NONE).sections[EntityKind.REFERENCE]

    assert reference.details["email"] == "aiken@example.com"
    assert reference.details["phone"] == "+1 555 0199"


def test_content_sections_survive_redaction(resolved):
    public_cv = redact(resolved, CONTACT, PrivacyLevel.FULL)

    experience = public_cv.sections[EntityKind.WORK_EXPERIENCE]
    assert [item.details["company"] for item in experience] == ["Navy"]


def test_display_name_variants():
    assert get_display_name("none", CONTACT) == "Grace Hopper"
    assert get_display_name("personal", ContactProfile(user_id=1, last_name="Hopper")) == "Hopper"
    assert get_display_name("full", CONTACT) == PLACEHOLDER_NAME
    assert get_display_name("none", None) == PLACEHOLDER_NAME


@pytest.mark.parametrize("level", list(PrivacyLevel))
def test_entries_never_carry_owner_or_storage_fields(resolved, level):
    public_cv = redact(resolved, CONTACT, level)

    for items in public_cv.sections.values():
        for item in items:
            assert "user_id" not in item.details
            assert "id" not in item.details
            assert "display_order" not in item.details


def test_entry_fields_not_listed_for_the_kind_stay_private(resolved):
    (job,) = redact(resolved, CONTACT, PrivacyLevel.NONE).sections[EntityKind.WORK_EXPERIENCE]

    assert set(job.details) == {
        "company",
        "title",
        "location",
        "start_date",
        "end_date",
        "is_current",
    }
    assert "bullets" not in job.details
