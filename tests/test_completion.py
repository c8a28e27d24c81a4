"""Tests for the profile completion calculator."""

from __future__ import annotations

from dataclasses import replace

import pytest

from cv_composer.constants import TOTAL_PROFILE_SECTIONS, ProfileSection
from cv_composer.core import calculate_completion
from cv_composer.core.completion import is_motivation_vision_complete
from cv_composer.core.records import (
    CertificationEntry,
    EducationEntry,
    HighlightEntry,
    KeyCompetenceEntry,
    MotivationVisionEntry,
    ProfileSnapshot,
    ProjectEntry,
    ReferenceEntry,
    SkillCategoryEntry,
    WorkExperienceEntry,
)


def _full_snapshot() -> ProfileSnapshot:
    return ProfileSnapshot(
        motivation_vision=MotivationVisionEntry(user_id=1, vision="Build tools people love"),
        highlights=(HighlightEntry(id=1, user_id=1, title="Award", highlight_type="award"),),
        projects=(ProjectEntry(id=1, user_id=1, name="Compiler"),),
        work_experiences=(WorkExperienceEntry(id=1, user_id=1, company="Acme", title="Dev"),),
        educations=(EducationEntry(id=1, user_id=1, institution="MIT", degree="BSc"),),
        skills=(SkillCategoryEntry(id=1, user_id=1, category="Languages"),),
        key_competences=(KeyCompetenceEntry(id=1, user_id=1, title="Leadership"),),
        certifications=(CertificationEntry(id=1, user_id=1, name="CKA", issuer="CNCF"),),
        references=(ReferenceEntry(id=1, user_id=1, name="Ada", title="CTO", company="Acme"),),
    )


def test_three_of_nine_sections_is_33_percent():
    snapshot = ProfileSnapshot(
        projects=(ProjectEntry(id=1, user_id=1, name="Compiler"),),
        work_experiences=(
            WorkExperienceEntry(id=1, user_id=1, company="Acme", title="Dev"),
            WorkExperienceEntry(id=2, user_id=1, company="Initech", title="Dev"),
        ),
        skills=(SkillCategoryEntry(id=1, user_id=1, category="Languages"),),
    )

    result = calculate_completion(snapshot)

    assert result.completed_sections == 3
    assert result.total_sections == 9
    assert result.percentage == 33
    assert result.by_key()[ProfileSection.WORK_EXPERIENCES].count == 2


def test_empty_profile_is_zero_and_full_profile_is_hundred():
    assert calculate_completion(ProfileSnapshot()).percentage == 0
    assert calculate_completion(_full_snapshot()).percentage == 100


@pytest.mark.parametrize(("completed", "expected"), [(1, 11), (2, 22), (5, 56), (7, 78), (8, 89)])
def test_percentage_uses_fixed_total(completed, expected):
    snapshot = _full_snapshot()
    fields = [
        "highlights",
        "projects",
        "work_experiences",
        "educations",
        "skills",
        "key_competences",
        "certifications",
        "references",
    ]
    cleared = {name: () for name in fields[completed:]}
    snapshot = replace(snapshot, motivation_vision=None, **cleared)

    assert calculate_completion(snapshot).percentage == expected


def test_every_section_is_reported_in_fixed_order():
    result = calculate_completion(ProfileSnapshot())

    assert len(result.sections) == TOTAL_PROFILE_SECTIONS
    assert result.sections[0].key is ProfileSection.MOTIVATION_VISION
    assert all(not section.is_complete for section in result.sections)


def test_section_share_of_total():
    result = calculate_completion(_full_snapshot())

    assert sum(section.percentage for section in result.sections) == pytest.approx(100)


@pytest.mark.parametrize(
    ("fields", "complete"),
    [
        ({"vision": "Grow"}, True),
        ({"mission": "Ship"}, True),
        ({"career_goals": "Lead"}, True),
        ({"purpose": "Only purpose", "passions": ("music",)}, False),
        ({"vision": "   ", "mission": ""}, False),
    ],
)
def test_motivation_vision_needs_a_key_field(fields, complete):
    assert is_motivation_vision_complete(MotivationVisionEntry(user_id=1, **fields)) is complete


def test_missing_motivation_vision_is_incomplete():
    assert is_motivation_vision_complete(None) is False
