"""Tests for the composition resolver."""

from __future__ import annotations

from datetime import date

import pytest

from cv_composer.constants import DisplayMode, EntityKind
from cv_composer.core import NotFoundError, resolve_entries, resolve_section
from cv_composer.core.records import (
    CertificationEntry,
    EducationEntry,
    KeyCompetenceEntry,
    SelectionOverride,
    SkillCategoryEntry,
    WorkExperienceEntry,
)


def _job(entry_id: int, **fields) -> WorkExperienceEntry:
    fields.setdefault("company", f"Company {entry_id}")
    fields.setdefault("title", "Engineer")
    return WorkExperienceEntry(id=entry_id, user_id=1, **fields)


def _competence(entry_id: int, order: int | None = None) -> KeyCompetenceEntry:
    return KeyCompetenceEntry(
        id=entry_id, user_id=1, title=f"Competence {entry_id}", display_order=order
    )


def _ids(items) -> list[int]:
    return [item.id for item in items]


def test_override_order_moves_entry_ahead_of_unchanged_one():
    a = _competence(1, order=0)
    b = _competence(2, order=1)
    overrides = [SelectionOverride(master_entity_id=2, display_order=0)]

    resolved = resolve_entries(EntityKind.KEY_COMPETENCE, [a, b], overrides)

    assert _ids(resolved) == [2, 1]
    assert resolved[0].display_order == 0
    assert resolved[1].has_override is False
    assert resolved[1].display_order == 0


def test_entries_without_overrides_are_included_with_defaults():
    entries = [_competence(1), _competence(2)]

    resolved = resolve_entries(EntityKind.KEY_COMPETENCE, entries, [])

    assert _ids(resolved) == [1, 2]
    assert all(item.is_selected and not item.is_favorite for item in resolved)


def test_deselected_entries_are_dropped_before_ordering():
    entries = [_competence(1, 0), _competence(2, 1), _competence(3, 2)]
    overrides = [SelectionOverride(master_entity_id=2, is_selected=False, display_order=0)]

    assert _ids(resolve_entries(EntityKind.KEY_COMPETENCE, entries, overrides)) == [1, 3]


def test_editor_view_keeps_deselected_entries_flagged():
    entries = [_competence(1), _competence(2)]
    overrides = [SelectionOverride(master_entity_id=1, is_selected=False)]

    resolved = resolve_entries(
        EntityKind.KEY_COMPETENCE, entries, overrides, include_deselected=True
    )

    assert _ids(resolved) == [1, 2]
    assert [item.is_selected for item in resolved] == [False, True]


def test_orphaned_overrides_are_ignored(caplog):
    overrides = [SelectionOverride(master_entity_id=99, display_order=0)]

    with caplog.at_level("INFO"):
        resolved = resolve_entries(EntityKind.KEY_COMPETENCE, [_competence(1)], overrides)

    assert _ids(resolved) == [1]
    assert "orphaned" in caplog.text


def test_work_experience_without_order_falls_back_to_newest_start_date():
    entries = [
        _job(1, start_date=date(2015, 1, 1)),
        _job(2, start_date=None),
        _job(3, start_date=date(2021, 3, 1)),
        _job(4, start_date=date(2018, 5, 1), display_order=0),
    ]

    resolved = resolve_entries(EntityKind.WORK_EXPERIENCE, entries, [])

    assert _ids(resolved) == [4, 3, 1, 2]


def test_equal_orders_keep_storage_order():
    entries = [_competence(1, 1), _competence(2, 1), _competence(3, 1)]

    assert _ids(resolve_entries(EntityKind.KEY_COMPETENCE, entries, [])) == [1, 2, 3]


class TestWorkExperienceDisplayModes:
    entry = _job(
        1,
        description="Built the billing platform",
        bullets=("Led five engineers", "Cut latency 40%", "Shipped v2"),
    )

    def _resolve(self, **override):
        overrides = [SelectionOverride(master_entity_id=1, **override)] if override else []
        return resolve_entries(EntityKind.WORK_EXPERIENCE, [self.entry], overrides)[0]

    def test_default_is_custom_with_every_bullet(self):
        item = self._resolve()
        assert item.display_mode is DisplayMode.CUSTOM
        assert item.description == "Built the billing platform"
        assert item.items == ("Led five engineers", "Cut latency 40%", "Shipped v2")

    def test_simple_hides_description_and_bullets(self):
        item = self._resolve(display_mode=DisplayMode.SIMPLE, description_override="ignored")
        assert item.description is None
        assert item.items is None

    def test_with_description_uses_override_text(self):
        item = self._resolve(
            display_mode=DisplayMode.WITH_DESCRIPTION, description_override="Tailored"
        )
        assert item.description == "Tailored"
        assert item.items is None

    def test_custom_keeps_selected_bullets_in_original_order(self):
        item = self._resolve(display_mode=DisplayMode.CUSTOM, selected_indices=(2, 0))
        assert item.items == ("Led five engineers", "Shipped v2")

    def test_out_of_range_indices_are_skipped(self):
        item = self._resolve(selected_indices=(1, 7))
        assert item.items == ("Cut latency 40%",)

    def test_master_entry_is_untouched(self):
        item = self._resolve(description_override="Tailored", selected_indices=(0,))
        assert item.entry.description == "Built the billing platform"
        assert len(item.entry.bullets) == 3

    @pytest.mark.parametrize(
        ("stored", "expected"),
        [
            ("simple", DisplayMode.SIMPLE),
            ("with_description", DisplayMode.WITH_DESCRIPTION),
            ("custom", DisplayMode.CUSTOM),
        ],
    )
    def test_plain_string_modes_from_a_store(self, stored, expected):
        item = self._resolve(display_mode=stored)
        assert item.display_mode is expected
        assert (item.items is None) == (expected is not DisplayMode.CUSTOM)


def test_skill_category_indices_filter_skills():
    category = SkillCategoryEntry(
        id=1, user_id=1, category="Languages", skills=("Python", "Go", "Rust")
    )
    overrides = [SelectionOverride(master_entity_id=1, selected_indices=(0, 2))]

    item = resolve_entries(EntityKind.SKILL_CATEGORY, [category], overrides)[0]

    assert item.items == ("Python", "Rust")
    assert item.display_mode is None


def test_education_description_override():
    education = EducationEntry(
        id=1, user_id=1, institution="ETH", degree="MSc", description="Thesis on compilers"
    )
    overrides = [SelectionOverride(master_entity_id=1, description_override="Distinction")]

    item = resolve_entries(EntityKind.EDUCATION, [education], overrides)[0]

    assert item.description == "Distinction"
    assert item.items is None


def test_certifications_support_common_fields_only():
    certs = [
        CertificationEntry(id=1, user_id=1, name="CKA", issuer="CNCF"),
        CertificationEntry(id=2, user_id=1, name="AWS SA", issuer="AWS"),
    ]
    overrides = [SelectionOverride(master_entity_id=2, display_order=0, is_favorite=True)]

    resolved = resolve_entries(EntityKind.CERTIFICATION, certs, overrides)

    assert _ids(resolved) == [2, 1]
    assert resolved[0].is_favorite is True
    assert resolved[0].description is None


def test_resolve_section_reads_owner_entities_and_document_overrides(store):
    store.add_document(document_id=5, user_id=1)
    store.add_entries(_competence(1, 0), _competence(2, 1))
    store.add_entries(KeyCompetenceEntry(id=3, user_id=2, title="Someone else's"))
    store.add_selection(
        5, EntityKind.KEY_COMPETENCE, SelectionOverride(master_entity_id=1, is_selected=False)
    )

    resolved = resolve_section(store, 5, EntityKind.KEY_COMPETENCE)

    assert _ids(resolved) == [2]


def test_resolve_section_rejects_document_of_another_user(store):
    store.add_document(document_id=5, user_id=1)

    with pytest.raises(NotFoundError):
        resolve_section(store, 5, EntityKind.KEY_COMPETENCE, user_id=2)

    with pytest.raises(NotFoundError):
        resolve_section(store, 404, EntityKind.KEY_COMPETENCE)
