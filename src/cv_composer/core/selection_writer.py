"""Bulk writer for per-document selection overrides.

A batch is written with replace semantics per row: every field of the
stored row is taken from the supplied override, nothing is merged with
what was there before. The store commits the batch in one transaction, and
any failure surfaces as a single ``SelectionWriteError``.
"""

from __future__ import annotations

import logging
from collections.abc import Iterable
from dataclasses import replace

from cv_composer.constants import DisplayMode, EntityKind
from cv_composer.core.exceptions import SelectionValidationError, SelectionWriteError
from cv_composer.core.records import SelectionOverride
from cv_composer.core.store import ProfileStore, require_document

logger = logging.getLogger(__name__)

__all__ = ["normalize_override", "reset_selections", "upsert_selections"]

_DESCRIPTION_KINDS = frozenset(
    {
        EntityKind.WORK_EXPERIENCE,
        EntityKind.EDUCATION,
        EntityKind.PROJECT,
        EntityKind.KEY_COMPETENCE,
    }
)
_INDEXED_KINDS = frozenset({EntityKind.WORK_EXPERIENCE, EntityKind.SKILL_CATEGORY})


def normalize_override(kind: EntityKind, override: SelectionOverride) -> SelectionOverride:
    """Validate an override against its kind and fill in kind defaults.

    Indices are de-duplicated keeping their first occurrence, and work
    experience rows without a display mode get ``custom``.

    Raises:
        SelectionValidationError: If a field is not supported by ``kind`` or
            an index or order is negative.
    """
    if override.description_override is not None and kind not in _DESCRIPTION_KINDS:
        raise SelectionValidationError(f"{kind} selections do not support description_override")

    if override.display_order is not None and override.display_order < 0:
        raise SelectionValidationError("display_order must be non-negative")

    indices = override.selected_indices
    if indices is not None:
        if kind not in _INDEXED_KINDS:
            raise SelectionValidationError(f"{kind} selections do not support selected indices")
        if any(index < 0 for index in indices):
            raise SelectionValidationError("selected indices must be non-negative")
        indices = tuple(dict.fromkeys(indices))

    display_mode = override.display_mode
    if kind is EntityKind.WORK_EXPERIENCE:
        display_mode = display_mode or DisplayMode.CUSTOM
    elif display_mode is not None:
        raise SelectionValidationError(f"{kind} selections do not support display_mode")

    return replace(override, selected_indices=indices, display_mode=display_mode)


def upsert_selections(
    store: ProfileStore,
    document_id: int,
    kind: EntityKind,
    overrides: Iterable[SelectionOverride],
    *,
    user_id: int | None = None,
) -> list[SelectionOverride]:
    """Insert or replace override rows for one document and kind.

    When the batch names the same entity twice the later row wins.

    Returns:
        The committed rows as stored.

    Raises:
        NotFoundError: If the document does not exist (or is not the user's).
        SelectionValidationError: If any row is invalid; nothing is written.
        SelectionWriteError: If the store fails or commits fewer rows than
            requested.
    """
    require_document(store, document_id, user_id)

    rows: dict[int, SelectionOverride] = {}
    for override in overrides:
        rows.pop(override.master_entity_id, None)
        rows[override.master_entity_id] = normalize_override(kind, override)

    if not rows:
        return []

    try:
        committed = store.upsert_selections(document_id, kind, list(rows.values()))
    except Exception as exc:
        logger.warning(
            "Bulk upsert of %d %s selection(s) for document %s failed: %s",
            len(rows),
            kind,
            document_id,
            exc,
        )
        raise SelectionWriteError(document_id, kind, len(rows)) from exc

    if len(committed) != len(rows):
        logger.warning(
            "Store committed %d of %d %s selection(s) for document %s",
            len(committed),
            len(rows),
            kind,
            document_id,
        )
        raise SelectionWriteError(document_id, kind, len(rows))

    return committed


def reset_selections(
    store: ProfileStore, document_id: int, kind: EntityKind, *, user_id: int | None = None
) -> int:
    """Drop every override of ``kind`` for a document, restoring defaults.

    Returns:
        Number of rows removed.
    """
    require_document(store, document_id, user_id)
    removed = store.delete_selections(document_id, kind)
    logger.info("Reset %d %s selection(s) for document %s", removed, kind, document_id)
    return removed
