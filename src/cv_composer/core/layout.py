"""Layout resolver: which sections a CV shows, where, and on which page.

Stored layouts are validated, never repaired. An unknown section name or
a section placed twice is a ``LayoutConfigError``, since silently fixing
either would drop or duplicate content.
"""

from __future__ import annotations

from collections.abc import Mapping, Sequence
from dataclasses import dataclass
from enum import StrEnum
from typing import Any, TypeVar

from cv_composer.constants import LayoutMode, MainSection, SidebarSection
from cv_composer.core.exceptions import LayoutConfigError
from cv_composer.core.records import DocumentRecord

__all__ = [
    "DEFAULT_SINGLE_COLUMN_LAYOUT",
    "DEFAULT_TWO_COLUMN_LAYOUT",
    "LayoutConfig",
    "PageLayout",
    "get_default_layout",
    "parse_layout_config",
    "resolve_layout",
    "resolve_layout_config",
    "single_page_layout",
    "validate_layout",
]

_SectionT = TypeVar("_SectionT", bound=StrEnum)


@dataclass(frozen=True)
class PageLayout:
    """Sections of one page. An empty sidebar means a full-width page."""

    sidebar: tuple[SidebarSection, ...] = ()
    main: tuple[MainSection, ...] = ()

    @property
    def sections(self) -> tuple[str, ...]:
        return (*self.sidebar, *self.main)

    def to_dict(self) -> dict[str, list[str]]:
        return {
            "sidebar": [str(section) for section in self.sidebar],
            "main": [str(section) for section in self.main],
        }


@dataclass(frozen=True)
class LayoutConfig:
    mode: LayoutMode
    pages: tuple[PageLayout, ...]

    @property
    def sections(self) -> tuple[str, ...]:
        """Every placed section, page by page, sidebar before main."""
        return tuple(section for page in self.pages for section in page.sections)

    def to_dict(self) -> dict[str, Any]:
        return {"mode": str(self.mode), "pages": [page.to_dict() for page in self.pages]}


DEFAULT_SINGLE_COLUMN_LAYOUT = LayoutConfig(
    mode=LayoutMode.SINGLE_COLUMN,
    pages=(
        PageLayout(main=(MainSection.HEADER, MainSection.PROFILE, MainSection.EXPERIENCE)),
        PageLayout(main=(MainSection.EDUCATION, MainSection.SKILLS, MainSection.KEY_COMPETENCES)),
    ),
)

DEFAULT_TWO_COLUMN_LAYOUT = LayoutConfig(
    mode=LayoutMode.TWO_COLUMN,
    pages=(
        PageLayout(
            sidebar=(
                SidebarSection.PHOTO,
                SidebarSection.CONTACT,
                SidebarSection.SKILLS,
                SidebarSection.LANGUAGES,
            ),
            main=(MainSection.HEADER, MainSection.PROFILE, MainSection.KEY_COMPETENCES),
        ),
        PageLayout(
            sidebar=(SidebarSection.EDUCATION, SidebarSection.CERTIFICATIONS),
            main=(MainSection.EXPERIENCE,),
        ),
    ),
)

_SINGLE_PAGE_SINGLE_COLUMN_LAYOUT = LayoutConfig(
    mode=LayoutMode.SINGLE_COLUMN,
    pages=(
        PageLayout(
            main=(
                MainSection.HEADER,
                MainSection.PROFILE,
                MainSection.EXPERIENCE,
                MainSection.EDUCATION,
                MainSection.SKILLS,
                MainSection.KEY_COMPETENCES,
            )
        ),
    ),
)

_SINGLE_PAGE_TWO_COLUMN_LAYOUT = LayoutConfig(
    mode=LayoutMode.TWO_COLUMN,
    pages=(
        PageLayout(
            sidebar=(
                SidebarSection.PHOTO,
                SidebarSection.CONTACT,
                SidebarSection.SKILLS,
                SidebarSection.LANGUAGES,
                SidebarSection.EDUCATION,
            ),
            main=(
                MainSection.HEADER,
                MainSection.PROFILE,
                MainSection.EXPERIENCE,
                MainSection.KEY_COMPETENCES,
            ),
        ),
    ),
)


def get_default_layout(mode: LayoutMode) -> LayoutConfig:
    """Return the built-in two-page layout for ``mode``."""
    if LayoutMode(mode) is LayoutMode.TWO_COLUMN:
        return DEFAULT_TWO_COLUMN_LAYOUT
    return DEFAULT_SINGLE_COLUMN_LAYOUT


def single_page_layout(mode: LayoutMode) -> LayoutConfig:
    """Return the built-in one-page layout for ``mode``."""
    if LayoutMode(mode) is LayoutMode.TWO_COLUMN:
        return _SINGLE_PAGE_TWO_COLUMN_LAYOUT
    return _SINGLE_PAGE_SINGLE_COLUMN_LAYOUT


def _parse_sections(
    raw: Any, section_type: type[_SectionT], region: str, page_number: int
) -> tuple[_SectionT, ...]:
    if raw is None:
        return ()
    if isinstance(raw, str) or not isinstance(raw, Sequence):
        raise LayoutConfigError(f"Page {page_number}: '{region}' must be a list of sections")
    sections = []
    for value in raw:
        try:
            sections.append(section_type(value))
        except ValueError:
            raise LayoutConfigError(
                f"Page {page_number}: unknown {region} section {value!r}"
            ) from None
    return tuple(sections)


def parse_layout_config(raw: Mapping[str, Any]) -> LayoutConfig:
    """Build a validated ``LayoutConfig`` from its stored JSON form.

    Raises:
        LayoutConfigError: If the mode or any section name is unknown, or
            the result fails ``validate_layout``.
    """
    if not isinstance(raw, Mapping):
        raise LayoutConfigError("Layout configuration must be an object")

    try:
        mode = LayoutMode(raw.get("mode"))
    except ValueError:
        raise LayoutConfigError(f"Unknown layout mode {raw.get('mode')!r}") from None

    raw_pages = raw.get("pages")
    if isinstance(raw_pages, str) or not isinstance(raw_pages, Sequence):
        raise LayoutConfigError("Layout configuration must contain a list of pages")

    pages = []
    for number, raw_page in enumerate(raw_pages, start=1):
        if not isinstance(raw_page, Mapping):
            raise LayoutConfigError(f"Page {number} must be an object")
        pages.append(
            PageLayout(
                sidebar=_parse_sections(raw_page.get("sidebar"), SidebarSection, "sidebar", number),
                main=_parse_sections(raw_page.get("main"), MainSection, "main", number),
            )
        )

    return validate_layout(LayoutConfig(mode=mode, pages=tuple(pages)))


def validate_layout(config: LayoutConfig) -> LayoutConfig:
    """Check the structural rules of a layout and return it unchanged.

    Raises:
        LayoutConfigError: If there are no pages, a single-column page has a
            sidebar, or a section appears more than once anywhere.
    """
    if not config.pages:
        raise LayoutConfigError("Layout configuration has no pages")

    seen: dict[str, int] = {}
    for number, page in enumerate(config.pages, start=1):
        if config.mode is LayoutMode.SINGLE_COLUMN and page.sidebar:
            raise LayoutConfigError(f"Page {number}: single-column layouts cannot have a sidebar")
        for section in page.sections:
            key = str(section)
            if key in seen:
                raise LayoutConfigError(
                    f"Section '{key}' is placed more than once (pages {seen[key]} and {number})"
                )
            seen[key] = number

    return config


def resolve_layout_config(document: DocumentRecord) -> LayoutConfig:
    """Return the document's stored layout, or the default for its mode."""
    if document.layout_config is None:
        return get_default_layout(document.layout_mode)
    return parse_layout_config(document.layout_config)


def resolve_layout(document: DocumentRecord) -> tuple[PageLayout, ...]:
    """Return the ordered pages of a document's layout.

    Raises:
        LayoutConfigError: If the stored layout is invalid.
    """
    return resolve_layout_config(document).pages
