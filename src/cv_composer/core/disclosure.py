"""Disclosure filter applied before a CV leaves the system.

The public projection is built up from nothing: each privacy level adds
the fields it allows. A profile or entry field that is not listed here is
never exposed, whatever the level. Unknown privacy levels are treated as
``full``.

    none      full name, location, email, phone and links
    personal  full name and location
    full      placeholder name only, plus the private badge flag

Reference contact details (third-party data) are only exposed under ``none``.
"""

from __future__ import annotations

import logging
from collections.abc import Mapping
from dataclasses import dataclass, fields
from typing import Any

from cv_composer.constants import (
    PLACEHOLDER_NAME,
    DisplayMode,
    EntityKind,
    LayoutMode,
    PrivacyLevel,
    SidebarSection,
)
from cv_composer.core.composition import ResolvedItem
from cv_composer.core.documents import ResolvedDocument
from cv_composer.core.layout import PageLayout
from cv_composer.core.records import ContactProfile

logger = logging.getLogger(__name__)

__all__ = [
    "PublicCV",
    "PublicItem",
    "PublicProfile",
    "coerce_privacy_level",
    "get_display_name",
    "redact",
]

# Sidebar sections that only carry owner identity.
_IDENTITY_SIDEBAR_SECTIONS = frozenset({SidebarSection.PHOTO, SidebarSection.CONTACT})

# Entry fields shown on a shared CV at every level. Descriptions, bullets and
# skills are not listed; they come from the resolved item.
_PUBLIC_ENTRY_FIELDS: dict[EntityKind, tuple[str, ...]] = {
    EntityKind.WORK_EXPERIENCE: (
        "company",
        "title",
        "location",
        "start_date",
        "end_date",
        "is_current",
    ),
    EntityKind.EDUCATION: (
        "institution",
        "degree",
        "field_of_study",
        "grade",
        "start_date",
        "end_date",
        "is_current",
    ),
    EntityKind.SKILL_CATEGORY: ("category",),
    EntityKind.KEY_COMPETENCE: ("title",),
    EntityKind.PROJECT: (
        "name",
        "role",
        "outcome",
        "technologies",
        "url",
        "start_date",
        "end_date",
        "is_current",
    ),
    EntityKind.CERTIFICATION: (
        "name",
        "issuer",
        "issued_on",
        "expiry_date",
        "credential_id",
        "url",
    ),
    EntityKind.REFERENCE: ("name", "title", "company", "relationship", "quote"),
}

# Added on top of the base fields only under privacy level ``none``.
_UNRESTRICTED_ENTRY_FIELDS: dict[EntityKind, tuple[str, ...]] = {
    EntityKind.REFERENCE: ("email", "phone"),
}


@dataclass(frozen=True, kw_only=True)
class PublicItem:
    """One entry of a shared CV, holding only allow-listed fields.

    Attributes:
        kind: Entity kind of the entry.
        details: Allow-listed entry fields for the privacy level.
        description: Effective description.
        items: Effective bullets or skills.
        display_mode: Work experience display mode, ``None`` for other kinds.
        is_favorite: Favorite flag, for highlighting.
    """

    kind: EntityKind
    details: Mapping[str, Any]
    description: str | None = None
    items: tuple[str, ...] | None = None
    display_mode: DisplayMode | None = None
    is_favorite: bool = False


@dataclass(frozen=True, kw_only=True)
class PublicProfile:
    display_name: str
    location: str | None = None
    email: str | None = None
    phone: str | None = None
    linkedin_url: str | None = None
    github_url: str | None = None
    website_url: str | None = None
    show_privacy_badge: bool = False

    def exposed_fields(self) -> frozenset[str]:
        """Names of the owner fields that carry a value."""
        return frozenset(
            f.name
            for f in fields(self)
            if f.name != "show_privacy_badge" and getattr(self, f.name) is not None
        )


@dataclass(frozen=True, kw_only=True)
class PublicCV:
    """Redacted projection of a resolved document, safe to render publicly."""

    privacy_level: PrivacyLevel
    title: str | None
    language: str
    mode: LayoutMode
    pages: tuple[PageLayout, ...]
    sections: Mapping[EntityKind, tuple[PublicItem, ...]]
    profile: PublicProfile


def coerce_privacy_level(value: PrivacyLevel | str | None) -> PrivacyLevel:
    """Map a stored privacy level to the enum, falling back to ``full``."""
    try:
        return PrivacyLevel(value)
    except ValueError:
        logger.warning("Unknown privacy level %r, applying full privacy", value)
        return PrivacyLevel.FULL


def get_display_name(
    privacy_level: PrivacyLevel | str | None, profile: ContactProfile | None
) -> str:
    """Name shown on a shared CV.

    ``full`` always yields the placeholder. Otherwise the trimmed first and
    last name are joined, falling back to whichever part exists, then to
    the placeholder when both are blank.
    """
    if coerce_privacy_level(privacy_level) is PrivacyLevel.FULL or profile is None:
        return PLACEHOLDER_NAME
    parts = [(part or "").strip() for part in (profile.first_name, profile.last_name)]
    name = " ".join(part for part in parts if part)
    return name or PLACEHOLDER_NAME


def _public_profile(level: PrivacyLevel, profile: ContactProfile | None) -> PublicProfile:
    display_name = get_display_name(level, profile)
    if level is PrivacyLevel.FULL or profile is None:
        return PublicProfile(
            display_name=display_name, show_privacy_badge=level is PrivacyLevel.FULL
        )
    if level is PrivacyLevel.PERSONAL:
        return PublicProfile(display_name=display_name, location=profile.location)
    return PublicProfile(
        display_name=display_name,
        location=profile.location,
        email=profile.email,
        phone=profile.phone,
        linkedin_url=profile.linkedin_url,
        github_url=profile.github_url,
        website_url=profile.website_url,
    )


def _public_item(item: ResolvedItem, level: PrivacyLevel) -> PublicItem:
    allowed = _PUBLIC_ENTRY_FIELDS.get(item.kind, ())
    if level is PrivacyLevel.NONE:
        allowed += _UNRESTRICTED_ENTRY_FIELDS.get(item.kind, ())
    return PublicItem(
        kind=item.kind,
        details={name: getattr(item.entry, name) for name in allowed},
        description=item.description,
        items=item.items,
        display_mode=item.display_mode,
        is_favorite=item.is_favorite,
    )


def _redact_pages(pages: tuple[PageLayout, ...], level: PrivacyLevel) -> tuple[PageLayout, ...]:
    if level is not PrivacyLevel.FULL:
        return pages
    return tuple(
        PageLayout(
            sidebar=tuple(s for s in page.sidebar if s not in _IDENTITY_SIDEBAR_SECTIONS),
            main=page.main,
        )
        for page in pages
    )


def redact(
    resolved: ResolvedDocument,
    profile: ContactProfile | None,
    privacy_level: PrivacyLevel | str | None,
) -> PublicCV:
    """Project a resolved document and its owner's profile for public viewing.

    Args:
        resolved: Output of ``compose_document``.
        profile: Owner contact profile; may be ``None`` (nothing to expose).
        privacy_level: Level from the share link; unknown values mean ``full``.
    """
    level = coerce_privacy_level(privacy_level)
    sections = {
        kind: tuple(_public_item(item, level) for item in items)
        for kind, items in resolved.sections.items()
    }
    return PublicCV(
        privacy_level=level,
        title=None if level is PrivacyLevel.FULL else resolved.document.name,
        language=resolved.document.language,
        mode=resolved.layout.mode,
        pages=_redact_pages(resolved.layout.pages, level),
        sections=sections,
        profile=_public_profile(level, profile),
    )
