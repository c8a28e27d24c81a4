"""Pydantic schemas for education API endpoints."""

from __future__ import annotations

from datetime import date, datetime

from pydantic import BaseModel, ConfigDict, Field


class EducationResponse(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: int
    user_id: int
    institution: str
    degree: str
    field_of_study: str | None = None
    grade: str | None = None
    start_date: date | None = None
    end_date: date | None = None
    description: str | None = None
    is_current: bool = False
    display_order: int | None = None
    updated_at: datetime


class EducationCreateRequest(BaseModel):
    institution: str = Field(..., min_length=1, description="School or university name")
    degree: str = Field(..., min_length=1, description="Degree or qualification")
    field_of_study: str | None = Field(None, description="Major or field of study")
    grade: str | None = Field(None, description="Final grade, free text (e.g. '3.8 GPA')")
    start_date: date | None = Field(None, description="Start date (ISO format)")
    end_date: date | None = Field(None, description="End date (ISO format, None if current)")
    description: str | None = Field(None, description="Notes, thesis, achievements")
    is_current: bool = Field(False, description="Whether currently enrolled")
    display_order: int | None = Field(None, ge=0, description="Default position on CVs")


class EducationUpdateRequest(BaseModel):
    """All fields are optional; only provided fields are updated."""

    institution: str | None = Field(None, min_length=1)
    degree: str | None = Field(None, min_length=1)
    field_of_study: str | None = None
    grade: str | None = None
    start_date: date | None = None
    end_date: date | None = None
    description: str | None = None
    is_current: bool | None = None
    display_order: int | None = Field(None, ge=0)
