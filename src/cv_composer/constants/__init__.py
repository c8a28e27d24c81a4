from __future__ import annotations

from cv_composer.constants.kinds import (
    SECTION_ENTITY_KINDS,
    DisplayMode,
    EntityKind,
    LayoutMode,
    MainSection,
    SidebarSection,
)
from cv_composer.constants.privacy import PLACEHOLDER_NAME, SHARE_TOKEN_BYTES, PrivacyLevel
from cv_composer.constants.profile_sections import (
    COMPLETION_RULES_VERSION,
    MOTIVATION_VISION_KEY_FIELDS,
    PROFILE_SECTIONS,
    TOTAL_PROFILE_SECTIONS,
    ProfileSection,
)

__all__ = [
    "COMPLETION_RULES_VERSION",
    "DisplayMode",
    "EntityKind",
    "LayoutMode",
    "MainSection",
    "MOTIVATION_VISION_KEY_FIELDS",
    "PLACEHOLDER_NAME",
    "PROFILE_SECTIONS",
    "PrivacyLevel",
    "ProfileSection",
    "SECTION_ENTITY_KINDS",
    "SHARE_TOKEN_BYTES",
    "SidebarSection",
    "TOTAL_PROFILE_SECTIONS",
]
