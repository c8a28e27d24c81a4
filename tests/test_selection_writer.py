"""Tests for the bulk selection writer."""

from __future__ import annotations

import pytest

from cv_composer.constants import DisplayMode, EntityKind
from cv_composer.core import (
    NotFoundError,
    SelectionValidationError,
    SelectionWriteError,
    reset_selections,
    upsert_selections,
)
from cv_composer.core.records import SelectionOverride
from cv_composer.core.selection_writer import normalize_override


@pytest.fixture
def document(store):
    return store.add_document(document_id=1, user_id=1)


def _rows(*entity_ids: int, **fields) -> list[SelectionOverride]:
    return [SelectionOverride(master_entity_id=entity_id, **fields) for entity_id in entity_ids]


def test_failure_on_second_row_is_one_error_and_nothing_is_stored(store, document):
    store.fail_on_row = 2

    with pytest.raises(SelectionWriteError) as exc_info:
        upsert_selections(store, 1, EntityKind.PROJECT, _rows(10, 11, 12))

    assert exc_info.value.row_count == 3
    assert isinstance(exc_info.value.__cause__, RuntimeError)
    assert store.get_selections(1, EntityKind.PROJECT) == []


def test_short_commit_is_reported_as_failure(store, document):
    store.drop_last_row = True

    with pytest.raises(SelectionWriteError):
        upsert_selections(store, 1, EntityKind.PROJECT, _rows(10, 11))


def test_upsert_replaces_every_field_of_existing_row(store, document):
    upsert_selections(
        store,
        1,
        EntityKind.PROJECT,
        [SelectionOverride(master_entity_id=10, is_favorite=True, description_override="Old")],
    )

    upsert_selections(
        store, 1, EntityKind.PROJECT, [SelectionOverride(master_entity_id=10, display_order=3)]
    )

    (stored,) = store.get_selections(1, EntityKind.PROJECT)
    assert stored.display_order == 3
    assert stored.is_favorite is False
    assert stored.description_override is None


def test_upsert_is_idempotent(store, document):
    rows = _rows(10, 11, display_order=1)

    first = upsert_selections(store, 1, EntityKind.PROJECT, rows)
    second = upsert_selections(store, 1, EntityKind.PROJECT, rows)

    assert [row.id for row in first] == [row.id for row in second]
    assert len(store.get_selections(1, EntityKind.PROJECT)) == 2


def test_later_row_for_same_entity_wins(store, document):
    committed = upsert_selections(
        store,
        1,
        EntityKind.KEY_COMPETENCE,
        [
            SelectionOverride(master_entity_id=10, display_order=1),
            SelectionOverride(master_entity_id=11),
            SelectionOverride(master_entity_id=10, display_order=5),
        ],
    )

    assert [(row.master_entity_id, row.display_order) for row in committed] == [
        (11, None),
        (10, 5),
    ]


def test_empty_batch_writes_nothing(store, document):
    assert upsert_selections(store, 1, EntityKind.PROJECT, []) == []


def test_invalid_row_aborts_whole_batch(store, document):
    rows = [
        SelectionOverride(master_entity_id=10),
        SelectionOverride(master_entity_id=11, display_mode=DisplayMode.SIMPLE),
    ]

    with pytest.raises(SelectionValidationError):
        upsert_selections(store, 1, EntityKind.EDUCATION, rows)

    assert store.get_selections(1, EntityKind.EDUCATION) == []


def test_unknown_document_is_not_found(store):
    with pytest.raises(NotFoundError):
        upsert_selections(store, 42, EntityKind.PROJECT, _rows(1))


def test_document_of_other_user_is_not_found(store, document):
    with pytest.raises(NotFoundError):
        upsert_selections(store, 1, EntityKind.PROJECT, _rows(1), user_id=2)


@pytest.mark.parametrize(
    ("kind", "override"),
    [
        (EntityKind.CERTIFICATION, SelectionOverride(master_entity_id=1, description_override="x")),
        (EntityKind.REFERENCE, SelectionOverride(master_entity_id=1, selected_indices=(0,))),
        (
            EntityKind.PROJECT,
            SelectionOverride(master_entity_id=1, display_mode=DisplayMode.CUSTOM),
        ),
        (EntityKind.PROJECT, SelectionOverride(master_entity_id=1, display_order=-1)),
        (EntityKind.WORK_EXPERIENCE, SelectionOverride(master_entity_id=1, selected_indices=(-1,))),
    ],
)
def test_normalize_rejects_unsupported_fields(kind, override):
    with pytest.raises(SelectionValidationError):
        normalize_override(kind, override)


def test_normalize_defaults_work_experience_to_custom_and_dedupes_indices():
    normalized = normalize_override(
        EntityKind.WORK_EXPERIENCE,
        SelectionOverride(master_entity_id=1, selected_indices=(2, 0, 2)),
    )

    assert normalized.display_mode is DisplayMode.CUSTOM
    assert normalized.selected_indices == (2, 0)


def test_reset_removes_only_that_kind(store, document):
    upsert_selections(store, 1, EntityKind.PROJECT, _rows(10, 11))
    upsert_selections(store, 1, EntityKind.SKILL_CATEGORY, _rows(20))

    assert reset_selections(store, 1, EntityKind.PROJECT) == 2
    assert store.get_selections(1, EntityKind.PROJECT) == []
    assert len(store.get_selections(1, EntityKind.SKILL_CATEGORY)) == 1
