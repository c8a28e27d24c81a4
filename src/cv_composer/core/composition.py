"""Composition resolver: merges master entities with per-document overrides.

One generic routine handles every entity kind. Kind-specific behavior is
limited to a merge function that derives the effective description and
item list (bullets or skills) from an entry and its override, plus the
date fallback used to order entries that carry no display order at all.

Overrides are opt-out: an entity without an override row is included with
default settings, and a row with ``is_selected = False`` removes the entity
before ordering. Override rows whose entity no longer exists are ignored.
"""

from __future__ import annotations

import logging
import math
from collections.abc import Callable, Iterable, Sequence
from dataclasses import dataclass
from typing import Any, Generic, TypeVar, assert_never

from cv_composer.constants import DisplayMode, EntityKind
from cv_composer.core.records import (
    EducationEntry,
    KeyCompetenceEntry,
    MasterEntry,
    ProjectEntry,
    SelectionOverride,
    SkillCategoryEntry,
    WorkExperienceEntry,
)
from cv_composer.core.store import ProfileStore, require_document

logger = logging.getLogger(__name__)

__all__ = [
    "ResolvedItem",
    "resolve_entries",
    "resolve_section",
]

EntryT = TypeVar("EntryT", bound=MasterEntry)


@dataclass(frozen=True, kw_only=True)
class ResolvedItem(Generic[EntryT]):
    """Document-specific view of one master entity.

    Attributes:
        entry: The untouched master entity with all of its fields.
        is_selected: False only in editor views that keep deselected items.
        is_favorite: Favorite flag from the override (default False).
        display_order: The ordering key that placed this item, if any.
        description: Effective description (override if set, else base).
        items: Effective bullets (work experience) or skills (skill category),
            already index-filtered. ``None`` when the kind has no item list
            or the display mode hides it.
        display_mode: Work experience display mode, ``None`` for other kinds.
        has_override: Whether a stored override row was applied.
    """

    entry: EntryT
    is_selected: bool = True
    is_favorite: bool = False
    display_order: int | None = None
    description: str | None = None
    items: tuple[str, ...] | None = None
    display_mode: DisplayMode | None = None
    has_override: bool = False

    @property
    def id(self) -> int:
        return self.entry.id

    @property
    def kind(self) -> EntityKind:
        return self.entry.kind


@dataclass(frozen=True)
class _Content:
    description: str | None
    items: tuple[str, ...] | None
    display_mode: DisplayMode | None = None


def _filter_indices(values: Sequence[str], indices: Sequence[int] | None) -> tuple[str, ...]:
    """Keep the values at ``indices`` in their original order; ``None`` keeps all."""
    if indices is None:
        return tuple(values)
    wanted = set(indices)
    return tuple(value for index, value in enumerate(values) if index in wanted)


def _effective_description(base: str | None, override: SelectionOverride) -> str | None:
    if override.description_override is not None:
        return override.description_override
    return base


def _merge_work_experience(entry: WorkExperienceEntry, override: SelectionOverride) -> _Content:
    mode = DisplayMode(override.display_mode or DisplayMode.CUSTOM)
    if mode is DisplayMode.SIMPLE:
        return _Content(None, None, mode)
    description = _effective_description(entry.description, override)
    if mode is DisplayMode.WITH_DESCRIPTION:
        return _Content(description, None, mode)
    if mode is DisplayMode.CUSTOM:
        bullets = _filter_indices(entry.bullets, override.selected_indices)
        return _Content(description, bullets, mode)
    assert_never(mode)


def _merge_described(
    entry: EducationEntry | ProjectEntry | KeyCompetenceEntry, override: SelectionOverride
) -> _Content:
    return _Content(_effective_description(entry.description, override), None)


def _merge_skill_category(entry: SkillCategoryEntry, override: SelectionOverride) -> _Content:
    return _Content(None, _filter_indices(entry.skills, override.selected_indices))


def _merge_plain(entry: MasterEntry, override: SelectionOverride) -> _Content:
    return _Content(None, None)


_MERGERS: dict[EntityKind, Callable[[Any, SelectionOverride], _Content]] = {
    EntityKind.WORK_EXPERIENCE: _merge_work_experience,
    EntityKind.EDUCATION: _merge_described,
    EntityKind.PROJECT: _merge_described,
    EntityKind.KEY_COMPETENCE: _merge_described,
    EntityKind.SKILL_CATEGORY: _merge_skill_category,
    EntityKind.CERTIFICATION: _merge_plain,
    EntityKind.REFERENCE: _merge_plain,
}

# Kinds whose unordered entries fall back to newest start date first.
_DATED_KINDS = frozenset({EntityKind.WORK_EXPERIENCE, EntityKind.EDUCATION})


def _sort_key(
    position: int, entry: MasterEntry, override: SelectionOverride | None, dated: bool
) -> tuple:
    # An explicit override order wins ties against an entity's own order.
    if override is not None and override.display_order is not None:
        return (0, override.display_order, 0, 0, position)
    if entry.display_order is not None:
        return (0, entry.display_order, 1, 0, position)
    date_rank: float = 0
    if dated:
        start = getattr(entry, "start_date", None)
        date_rank = -start.toordinal() if start is not None else math.inf
    return (1, 0, 1, date_rank, position)


def resolve_entries(
    kind: EntityKind,
    entries: Sequence[EntryT],
    overrides: Iterable[SelectionOverride],
    *,
    include_deselected: bool = False,
) -> list[ResolvedItem[EntryT]]:
    """Merge ``entries`` with their ``overrides`` into an ordered list.

    Args:
        kind: Entity kind of every entry.
        entries: Master entities in storage order (used as the tie-breaker).
        overrides: Override rows for one document and this kind.
        include_deselected: Keep deselected entities (flagged
            ``is_selected=False``) instead of dropping them.

    Returns:
        Resolved items sorted by override order, else entity order, else the
        kind's fallback, with storage order breaking ties.
    """
    merge = _MERGERS[kind]
    dated = kind in _DATED_KINDS
    by_entity = {override.master_entity_id: override for override in overrides}

    known_ids = {entry.id for entry in entries}
    orphaned = sorted(set(by_entity) - known_ids)
    if orphaned:
        logger.info("Ignoring %d orphaned %s selection(s): %s", len(orphaned), kind, orphaned)

    keyed: list[tuple[tuple, ResolvedItem[EntryT]]] = []
    for position, entry in enumerate(entries):
        stored = by_entity.get(entry.id)
        if stored is not None and not stored.is_selected and not include_deselected:
            continue

        override = stored or SelectionOverride(master_entity_id=entry.id)
        content = merge(entry, override)
        if override.display_order is not None:
            order = override.display_order
        else:
            order = entry.display_order

        item = ResolvedItem(
            entry=entry,
            is_selected=override.is_selected,
            is_favorite=override.is_favorite,
            display_order=order,
            description=content.description,
            items=content.items,
            display_mode=content.display_mode,
            has_override=stored is not None,
        )
        keyed.append((_sort_key(position, entry, stored, dated), item))

    keyed.sort(key=lambda pair: pair[0])
    return [item for _, item in keyed]


def resolve_section(
    store: ProfileStore,
    document_id: int,
    kind: EntityKind,
    *,
    user_id: int | None = None,
    include_deselected: bool = False,
) -> list[ResolvedItem]:
    """Resolve one section of a document against its owner's master profile.

    Raises:
        NotFoundError: If the document does not exist (or is not the user's).
    """
    document = require_document(store, document_id, user_id)
    entries = store.get_master_entities(document.user_id, kind)
    overrides = store.get_selections(document.id, kind)
    return resolve_entries(kind, entries, overrides, include_deselected=include_deselected)
