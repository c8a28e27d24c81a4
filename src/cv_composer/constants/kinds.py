"""Closed enumerations for profile entity kinds and CV layout sections.

Sidebar and main sections are separate enumerations. ``education`` and
``skills`` exist in both, so placement is always read from the layout
configuration rather than inferred from the section itself.
"""

from __future__ import annotations

from enum import StrEnum


class EntityKind(StrEnum):
    """Kinds of master profile entities that a CV can curate."""

    WORK_EXPERIENCE = "work_experience"
    EDUCATION = "education"
    SKILL_CATEGORY = "skill_category"
    KEY_COMPETENCE = "key_competence"
    PROJECT = "project"
    CERTIFICATION = "certification"
    REFERENCE = "reference"


class DisplayMode(StrEnum):
    """How much of a work experience entry is rendered."""

    SIMPLE = "simple"  # header only
    WITH_DESCRIPTION = "with_description"  # header + description
    CUSTOM = "custom"  # header + description + selected bullets


class LayoutMode(StrEnum):
    SINGLE_COLUMN = "single-column"
    TWO_COLUMN = "two-column"


class SidebarSection(StrEnum):
    """Sections that may be placed in the sidebar of a two-column page."""

    PHOTO = "photo"
    CONTACT = "contact"
    SKILLS = "skills"
    LANGUAGES = "languages"
    EDUCATION = "education"
    CERTIFICATIONS = "certifications"


class MainSection(StrEnum):
    """Sections that may be placed in the main column of a page."""

    HEADER = "header"
    PROFILE = "profile"
    EXPERIENCE = "experience"
    EDUCATION = "education"
    SKILLS = "skills"
    KEY_COMPETENCES = "keyCompetences"
    PROJECTS = "projects"
    REFERENCES = "references"


# Layout sections backed by master entities. Sections missing here
# (header, profile, photo, contact, languages) are rendered from the
# owner profile and need no entity resolution.
SECTION_ENTITY_KINDS: dict[str, EntityKind] = {
    "experience": EntityKind.WORK_EXPERIENCE,
    "education": EntityKind.EDUCATION,
    "skills": EntityKind.SKILL_CATEGORY,
    "keyCompetences": EntityKind.KEY_COMPETENCE,
    "projects": EntityKind.PROJECT,
    "certifications": EntityKind.CERTIFICATION,
    "references": EntityKind.REFERENCE,
}
