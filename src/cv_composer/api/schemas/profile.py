"""Pydantic schemas for the remaining master profile collections.

Each collection has its own create schema; the generic profile route picks
one by kind and validates the body against it.
"""

from __future__ import annotations

from datetime import date, datetime

from pydantic import BaseModel, Field

from cv_composer.constants import ProfileSection


class SkillCategoryCreateRequest(BaseModel):
    category: str = Field(..., min_length=1)
    skills: list[str] = Field(default_factory=list)
    display_order: int | None = Field(None, ge=0)


class KeyCompetenceCreateRequest(BaseModel):
    title: str = Field(..., min_length=1)
    description: str | None = None
    display_order: int | None = Field(None, ge=0)


class ProjectCreateRequest(BaseModel):
    name: str = Field(..., min_length=1)
    role: str | None = None
    description: str | None = None
    outcome: str | None = None
    technologies: list[str] = Field(default_factory=list)
    url: str | None = None
    start_date: date | None = None
    end_date: date | None = None
    is_current: bool = False
    display_order: int | None = Field(None, ge=0)


class CertificationCreateRequest(BaseModel):
    name: str = Field(..., min_length=1)
    issuer: str = Field(..., min_length=1)
    issued_on: date | None = None
    expiry_date: date | None = None
    credential_id: str | None = None
    url: str | None = None
    display_order: int | None = Field(None, ge=0)


class ReferenceCreateRequest(BaseModel):
    name: str = Field(..., min_length=1)
    title: str = Field(..., min_length=1)
    company: str = Field(..., min_length=1)
    relationship: str | None = Field(None, description="How the reference knows the user")
    email: str | None = None
    phone: str | None = None
    quote: str | None = None
    display_order: int | None = Field(None, ge=0)


class HighlightCreateRequest(BaseModel):
    highlight_type: str = Field("achievement", description="e.g. achievement, award, metric")
    title: str = Field(..., min_length=1)
    description: str | None = None
    metric: str | None = None
    display_order: int | None = Field(None, ge=0)


PROFILE_ENTRY_SCHEMAS: dict[str, type[BaseModel]] = {
    "skill_category": SkillCategoryCreateRequest,
    "key_competence": KeyCompetenceCreateRequest,
    "project": ProjectCreateRequest,
    "certification": CertificationCreateRequest,
    "reference": ReferenceCreateRequest,
    "highlight": HighlightCreateRequest,
}


class MotivationVisionRequest(BaseModel):
    """Only provided fields are written."""

    vision: str | None = None
    mission: str | None = None
    career_goals: str | None = None
    purpose: str | None = None
    what_drives_you: str | None = None
    why_this_field: str | None = None
    passions: list[str] | None = None


class MotivationVisionResponse(BaseModel):
    user_id: int
    vision: str | None = None
    mission: str | None = None
    career_goals: str | None = None
    purpose: str | None = None
    what_drives_you: str | None = None
    why_this_field: str | None = None
    passions: list[str] = Field(default_factory=list)
    updated_at: datetime


class ContactProfileRequest(BaseModel):
    first_name: str | None = None
    last_name: str | None = None
    email: str | None = None
    phone: str | None = None
    location: str | None = None
    linkedin_url: str | None = None
    github_url: str | None = None
    website_url: str | None = None


class ContactProfileResponse(ContactProfileRequest):
    id: int
    user_id: int
    updated_at: datetime


class SectionCompletionResponse(BaseModel):
    key: ProfileSection
    count: int
    is_complete: bool
    percentage: float


class ProfileCompletionResponse(BaseModel):
    sections: list[SectionCompletionResponse]
    completed_sections: int
    total_sections: int
    percentage: int
