"""CV content composition and disclosure engine.

Every entry point takes the persistence collaborator (a ``ProfileStore``)
explicitly; nothing here reads global configuration.
"""

from __future__ import annotations

from cv_composer.core.completion import (
    ProfileCompletion,
    SectionCompletion,
    calculate_completion,
)
from cv_composer.core.composition import ResolvedItem, resolve_entries, resolve_section
from cv_composer.core.disclosure import (
    PublicCV,
    PublicItem,
    PublicProfile,
    coerce_privacy_level,
    get_display_name,
    redact,
)
from cv_composer.core.documents import ResolvedDocument, compose_document
from cv_composer.core.exceptions import (
    CompositionError,
    LayoutConfigError,
    NotFoundError,
    SelectionValidationError,
    SelectionWriteError,
    ShareLinkUnavailableError,
)
from cv_composer.core.layout import (
    LayoutConfig,
    PageLayout,
    get_default_layout,
    parse_layout_config,
    resolve_layout,
    resolve_layout_config,
    single_page_layout,
    validate_layout,
)
from cv_composer.core.selection_writer import reset_selections, upsert_selections
from cv_composer.core.sharing import open_shared_cv
from cv_composer.core.store import ProfileStore, require_document

__all__ = [
    "CompositionError",
    "LayoutConfig",
    "LayoutConfigError",
    "NotFoundError",
    "PageLayout",
    "ProfileCompletion",
    "ProfileStore",
    "PublicCV",
    "PublicItem",
    "PublicProfile",
    "ResolvedDocument",
    "ResolvedItem",
    "SectionCompletion",
    "SelectionValidationError",
    "SelectionWriteError",
    "ShareLinkUnavailableError",
    "calculate_completion",
    "coerce_privacy_level",
    "compose_document",
    "get_default_layout",
    "get_display_name",
    "open_shared_cv",
    "parse_layout_config",
    "redact",
    "require_document",
    "reset_selections",
    "resolve_entries",
    "resolve_layout",
    "resolve_layout_config",
    "resolve_section",
    "single_page_layout",
    "upsert_selections",
    "validate_layout",
]
