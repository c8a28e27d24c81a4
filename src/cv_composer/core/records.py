"""Immutable records exchanged with the persistence collaborator.

Stores hand these out instead of ORM rows, so resolution never touches a
database session and can run against an in-memory fake.
"""

from __future__ import annotations

from collections.abc import Mapping
from dataclasses import dataclass
from datetime import date, datetime
from typing import Any, ClassVar

from cv_composer.constants import DisplayMode, EntityKind, LayoutMode


@dataclass(frozen=True, kw_only=True)
class MasterEntry:
    """Fields shared by every master profile entity."""

    kind: ClassVar[EntityKind]

    id: int
    user_id: int
    display_order: int | None = None


@dataclass(frozen=True, kw_only=True)
class WorkExperienceEntry(MasterEntry):
    kind: ClassVar[EntityKind] = EntityKind.WORK_EXPERIENCE

    company: str
    title: str
    location: str | None = None
    start_date: date | None = None
    end_date: date | None = None
    is_current: bool = False
    description: str | None = None
    bullets: tuple[str, ...] = ()


@dataclass(frozen=True, kw_only=True)
class EducationEntry(MasterEntry):
    kind: ClassVar[EntityKind] = EntityKind.EDUCATION

    institution: str
    degree: str
    field_of_study: str | None = None
    grade: str | None = None
    start_date: date | None = None
    end_date: date | None = None
    is_current: bool = False
    description: str | None = None


@dataclass(frozen=True, kw_only=True)
class SkillCategoryEntry(MasterEntry):
    kind: ClassVar[EntityKind] = EntityKind.SKILL_CATEGORY

    category: str
    skills: tuple[str, ...] = ()


@dataclass(frozen=True, kw_only=True)
class KeyCompetenceEntry(MasterEntry):
    kind: ClassVar[EntityKind] = EntityKind.KEY_COMPETENCE

    title: str
    description: str | None = None


@dataclass(frozen=True, kw_only=True)
class ProjectEntry(MasterEntry):
    kind: ClassVar[EntityKind] = EntityKind.PROJECT

    name: str
    role: str | None = None
    description: str | None = None
    outcome: str | None = None
    technologies: tuple[str, ...] = ()
    url: str | None = None
    start_date: date | None = None
    end_date: date | None = None
    is_current: bool = False


@dataclass(frozen=True, kw_only=True)
class CertificationEntry(MasterEntry):
    kind: ClassVar[EntityKind] = EntityKind.CERTIFICATION

    name: str
    issuer: str
    issued_on: date | None = None
    expiry_date: date | None = None
    credential_id: str | None = None
    url: str | None = None


@dataclass(frozen=True, kw_only=True)
class ReferenceEntry(MasterEntry):
    kind: ClassVar[EntityKind] = EntityKind.REFERENCE

    name: str
    title: str
    company: str
    relationship: str | None = None
    email: str | None = None
    phone: str | None = None
    quote: str | None = None


@dataclass(frozen=True, kw_only=True)
class HighlightEntry:
    id: int
    user_id: int
    title: str
    highlight_type: str
    description: str | None = None
    metric: str | None = None
    display_order: int | None = None


@dataclass(frozen=True, kw_only=True)
class MotivationVisionEntry:
    user_id: int
    vision: str | None = None
    mission: str | None = None
    career_goals: str | None = None
    purpose: str | None = None
    what_drives_you: str | None = None
    why_this_field: str | None = None
    passions: tuple[str, ...] = ()


ENTRY_TYPES: dict[EntityKind, type[MasterEntry]] = {
    EntityKind.WORK_EXPERIENCE: WorkExperienceEntry,
    EntityKind.EDUCATION: EducationEntry,
    EntityKind.SKILL_CATEGORY: SkillCategoryEntry,
    EntityKind.KEY_COMPETENCE: KeyCompetenceEntry,
    EntityKind.PROJECT: ProjectEntry,
    EntityKind.CERTIFICATION: CertificationEntry,
    EntityKind.REFERENCE: ReferenceEntry,
}


@dataclass(frozen=True, kw_only=True)
class SelectionOverride:
    """Per-document customization of one master entity.

    ``selected_indices`` holds bullet indices for work experience and skill
    indices for skill categories; ``None`` means no filtering. A missing
    ``display_mode`` on a work experience row means ``custom``.
    """

    master_entity_id: int
    is_selected: bool = True
    is_favorite: bool = False
    display_order: int | None = None
    description_override: str | None = None
    selected_indices: tuple[int, ...] | None = None
    display_mode: DisplayMode | None = None
    id: int | None = None


@dataclass(frozen=True, kw_only=True)
class DocumentRecord:
    id: int
    user_id: int
    name: str
    language: str = "en"
    layout_mode: LayoutMode = LayoutMode.SINGLE_COLUMN
    # Raw stored layout (parsed and validated by the layout resolver).
    layout_config: Mapping[str, Any] | None = None


@dataclass(frozen=True, kw_only=True)
class ShareLinkRecord:
    id: int
    token: str
    document_id: int
    user_id: int
    # Stored value, coerced by the disclosure filter (unknown -> full).
    privacy_level: str | None
    is_active: bool = True
    expires_at: datetime | None = None
    view_count: int = 0
    last_viewed_at: datetime | None = None


@dataclass(frozen=True, kw_only=True)
class ContactProfile:
    user_id: int
    first_name: str | None = None
    last_name: str | None = None
    email: str | None = None
    phone: str | None = None
    location: str | None = None
    linkedin_url: str | None = None
    github_url: str | None = None
    website_url: str | None = None


@dataclass(frozen=True, kw_only=True)
class ProfileSnapshot:
    """Everything the completion calculator looks at for one user."""

    motivation_vision: MotivationVisionEntry | None = None
    highlights: tuple[HighlightEntry, ...] = ()
    projects: tuple[ProjectEntry, ...] = ()
    work_experiences: tuple[WorkExperienceEntry, ...] = ()
    educations: tuple[EducationEntry, ...] = ()
    skills: tuple[SkillCategoryEntry, ...] = ()
    key_competences: tuple[KeyCompetenceEntry, ...] = ()
    certifications: tuple[CertificationEntry, ...] = ()
    references: tuple[ReferenceEntry, ...] = ()
