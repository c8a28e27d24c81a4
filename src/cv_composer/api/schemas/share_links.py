"""Pydantic schemas for share links and the public CV view."""

from __future__ import annotations

from datetime import datetime
from typing import Any

from pydantic import BaseModel, Field

from cv_composer.api.schemas.cvs import PageLayoutSchema
from cv_composer.constants import DisplayMode, EntityKind, LayoutMode, PrivacyLevel
from cv_composer.core import PublicCV, PublicItem


class ShareLinkCreateRequest(BaseModel):
    privacy_level: PrivacyLevel = Field(
        PrivacyLevel.PERSONAL,
        description="none shows all contact details, personal hides them, full anonymizes",
    )
    expires_at: datetime | None = Field(None, description="Link stops working after this time")


class ShareLinkUpdateRequest(BaseModel):
    """Only provided fields are updated."""

    privacy_level: PrivacyLevel | None = None
    is_active: bool | None = None
    expires_at: datetime | None = None


class ShareLinkResponse(BaseModel):
    id: int
    document_id: int
    token: str
    privacy_level: str
    is_active: bool
    expires_at: datetime | None = None
    view_count: int
    last_viewed_at: datetime | None = None
    created_at: datetime


class PublicProfileResponse(BaseModel):
    display_name: str
    location: str | None = None
    email: str | None = None
    phone: str | None = None
    linkedin_url: str | None = None
    github_url: str | None = None
    website_url: str | None = None
    show_privacy_badge: bool = False


class PublicItemResponse(BaseModel):
    kind: EntityKind
    details: dict[str, Any]
    description: str | None = None
    items: list[str] | None = None
    display_mode: DisplayMode | None = None
    is_favorite: bool = False

    @classmethod
    def from_item(cls, item: PublicItem) -> PublicItemResponse:
        return cls(
            kind=item.kind,
            details=dict(item.details),
            description=item.description,
            items=list(item.items) if item.items is not None else None,
            display_mode=item.display_mode,
            is_favorite=item.is_favorite,
        )


class PublicCVResponse(BaseModel):
    privacy_level: PrivacyLevel
    title: str | None = None
    language: str
    mode: LayoutMode
    pages: list[PageLayoutSchema]
    sections: dict[EntityKind, list[PublicItemResponse]]
    profile: PublicProfileResponse

    @classmethod
    def from_public_cv(cls, public_cv: PublicCV) -> PublicCVResponse:
        profile = public_cv.profile
        return cls(
            privacy_level=public_cv.privacy_level,
            title=public_cv.title,
            language=public_cv.language,
            mode=public_cv.mode,
            pages=[PageLayoutSchema.from_page(page) for page in public_cv.pages],
            sections={
                kind: [PublicItemResponse.from_item(item) for item in items]
                for kind, items in public_cv.sections.items()
            },
            profile=PublicProfileResponse(
                display_name=profile.display_name,
                location=profile.location,
                email=profile.email,
                phone=profile.phone,
                linkedin_url=profile.linkedin_url,
                github_url=profile.github_url,
                website_url=profile.website_url,
                show_privacy_badge=profile.show_privacy_badge,
            ),
        )
