"""Composition of a whole CV document: layout first, then each section."""

from __future__ import annotations

import logging
from collections.abc import Mapping
from dataclasses import dataclass

from cv_composer.constants import SECTION_ENTITY_KINDS, EntityKind
from cv_composer.core.composition import ResolvedItem, resolve_entries
from cv_composer.core.layout import LayoutConfig, resolve_layout_config
from cv_composer.core.records import DocumentRecord
from cv_composer.core.store import ProfileStore, require_document

logger = logging.getLogger(__name__)

__all__ = ["ResolvedDocument", "compose_document"]


@dataclass(frozen=True, kw_only=True)
class ResolvedDocument:
    """A document with its layout and the resolved items of every placed section."""

    document: DocumentRecord
    layout: LayoutConfig
    sections: Mapping[EntityKind, tuple[ResolvedItem, ...]]

    def section(self, kind: EntityKind) -> tuple[ResolvedItem, ...]:
        return self.sections.get(kind, ())


def compose_document(
    store: ProfileStore, document_id: int, *, user_id: int | None = None
) -> ResolvedDocument:
    """Resolve the layout of a document and every entity-backed section in it.

    Sections that are not placed anywhere in the layout are not resolved.

    Raises:
        NotFoundError: If the document does not exist (or is not the user's).
        LayoutConfigError: If the stored layout is invalid.
    """
    document = require_document(store, document_id, user_id)
    layout = resolve_layout_config(document)

    sections: dict[EntityKind, tuple[ResolvedItem, ...]] = {}
    for section in layout.sections:
        kind = SECTION_ENTITY_KINDS.get(section)
        if kind is None:
            continue
        entries = store.get_master_entities(document.user_id, kind)
        overrides = store.get_selections(document.id, kind)
        sections[kind] = tuple(resolve_entries(kind, entries, overrides))

    logger.debug(
        "Composed document %s with %d page(s) and sections %s",
        document.id,
        len(layout.pages),
        sorted(sections),
    )
    return ResolvedDocument(document=document, layout=layout, sections=sections)
