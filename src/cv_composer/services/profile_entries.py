"""Generic CRUD for the simpler master profile collections.

Skill categories, key competences, projects, certifications, references
and highlights share one implementation driven by a per-kind field table,
plus get/upsert for the singleton motivation & vision section.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Any

from sqlalchemy import select
from sqlalchemy.orm import Session

from cv_composer.constants import EntityKind
from cv_composer.data.db import get_session
from cv_composer.data.models import (
    Certification,
    CVDocument,
    CVSelection,
    Highlight,
    KeyCompetence,
    MotivationVision,
    Project,
    Reference,
    SkillCategory,
)
from cv_composer.services.users import get_user_by_username
from cv_composer.utils.json_fields import dump_list, load_text_list

logger = logging.getLogger(__name__)

__all__ = [
    "PROFILE_ENTRY_KINDS",
    "create_profile_entry",
    "delete_profile_entry",
    "drop_entity_selections",
    "get_motivation_vision",
    "list_profile_entries",
    "update_profile_entry",
    "upsert_motivation_vision",
]


@dataclass(frozen=True)
class _EntryKindInfo:
    model: type
    required: tuple[str, ...]
    fields: tuple[str, ...]
    list_fields: tuple[str, ...] = ()
    entity_kind: EntityKind | None = None


PROFILE_ENTRY_KINDS: dict[str, _EntryKindInfo] = {
    "skill_category": _EntryKindInfo(
        model=SkillCategory,
        required=("category",),
        fields=("category", "skills", "display_order"),
        list_fields=("skills",),
        entity_kind=EntityKind.SKILL_CATEGORY,
    ),
    "key_competence": _EntryKindInfo(
        model=KeyCompetence,
        required=("title",),
        fields=("title", "description", "display_order"),
        entity_kind=EntityKind.KEY_COMPETENCE,
    ),
    "project": _EntryKindInfo(
        model=Project,
        required=("name",),
        fields=(
            "name",
            "role",
            "description",
            "outcome",
            "technologies",
            "url",
            "start_date",
            "end_date",
            "is_current",
            "display_order",
        ),
        list_fields=("technologies",),
        entity_kind=EntityKind.PROJECT,
    ),
    "certification": _EntryKindInfo(
        model=Certification,
        required=("name", "issuer"),
        fields=(
            "name",
            "issuer",
            "issued_on",
            "expiry_date",
            "credential_id",
            "url",
            "display_order",
        ),
        entity_kind=EntityKind.CERTIFICATION,
    ),
    "reference": _EntryKindInfo(
        model=Reference,
        required=("name", "title", "company"),
        fields=(
            "name",
            "title",
            "company",
            "relationship",
            "email",
            "phone",
            "quote",
            "display_order",
        ),
        entity_kind=EntityKind.REFERENCE,
    ),
    "highlight": _EntryKindInfo(
        model=Highlight,
        required=("title",),
        fields=("highlight_type", "title", "description", "metric", "display_order"),
    ),
}

# Field names whose ORM attribute is named differently.
_ATTRIBUTE_NAMES = {"relationship": "relationship_to_user"}

_MOTIVATION_FIELDS = (
    "vision",
    "mission",
    "career_goals",
    "purpose",
    "what_drives_you",
    "why_this_field",
    "passions",
)


def drop_entity_selections(
    session: Session, user_id: int, kind: EntityKind, entity_id: int
) -> int:
    """Delete the selections of all the user's CVs that point at one entity.

    Returns:
        Number of selection rows removed.
    """
    document_ids = select(CVDocument.id).where(CVDocument.user_id == user_id)
    return (
        session.query(CVSelection)
        .filter(
            CVSelection.kind == str(kind),
            CVSelection.master_entity_id == entity_id,
            CVSelection.document_id.in_(document_ids),
        )
        .delete(synchronize_session=False)
    )


def _entry_to_dict(info: _EntryKindInfo, row: Any) -> dict:
    result: dict[str, Any] = {"id": row.id, "user_id": row.user_id}
    for field in info.fields:
        value = getattr(row, _ATTRIBUTE_NAMES.get(field, field))
        if field in info.list_fields:
            value = list(load_text_list(value))
        result[field] = value
    result["updated_at"] = row.updated_at
    return result


def _apply_entry_updates(info: _EntryKindInfo, row: Any, data: dict) -> None:
    for field in info.fields:
        if field not in data:
            continue
        value = data[field]
        if field in info.list_fields:
            value = dump_list(value)
        setattr(row, _ATTRIBUTE_NAMES.get(field, field), value)


def _validate_entry_data(data: dict) -> str | None:
    display_order = data.get("display_order")
    if display_order is not None and display_order < 0:
        return "display_order must be non-negative"
    return None


def _get_kind_info(kind: str) -> _EntryKindInfo:
    try:
        return PROFILE_ENTRY_KINDS[kind]
    except KeyError:
        raise ValueError(f"Unknown profile entry kind {kind!r}") from None


def list_profile_entries(username: str, kind: str) -> list[dict] | None:
    """List a user's entries of ``kind`` ordered by display_order, then ID.

    Returns:
        List of entry dictionaries, or None if the user was not found

    Raises:
        ValueError: If ``kind`` is not a known profile entry kind.
    """
    info = _get_kind_info(kind)
    model = info.model
    try:
        with get_session() as session:
            user = get_user_by_username(session, username)
            if not user:
                return None
            rows = (
                session.query(model)
                .filter(model.user_id == user.id)
                .order_by(model.display_order.is_(None), model.display_order, model.id)
                .all()
            )
            return [_entry_to_dict(info, row) for row in rows]
    except Exception:
        logger.exception("Failed to list %s entries for %s", kind, username)
        return None


def create_profile_entry(username: str, kind: str, data: dict) -> dict | None:
    """Create a profile entry of ``kind``.

    Returns:
        The created entry, or None if required fields are missing,
        validation failed or the user was not found
    """
    info = _get_kind_info(kind)
    missing = [field for field in info.required if not data.get(field)]
    if missing:
        logger.warning("Cannot create %s: missing %s", kind, ", ".join(missing))
        return None

    validation_error = _validate_entry_data(data)
    if validation_error:
        logger.warning("Validation failed for %s: %s", kind, validation_error)
        return None

    try:
        with get_session() as session:
            user = get_user_by_username(session, username)
            if not user:
                return None
            row = info.model(user_id=user.id)
            _apply_entry_updates(info, row, data)
            session.add(row)
            session.flush()
            return _entry_to_dict(info, row)
    except Exception:
        logger.exception("Failed to create %s for %s", kind, username)
        return None


def update_profile_entry(username: str, kind: str, entry_id: int, data: dict) -> dict | None:
    """Update the given fields of a profile entry.

    Returns:
        The updated entry, or None if not found or validation failed
    """
    info = _get_kind_info(kind)
    validation_error = _validate_entry_data(data)
    if validation_error:
        logger.warning("Validation failed for %s update: %s", kind, validation_error)
        return None
    if any(field in data and not data[field] for field in info.required):
        logger.warning("Cannot clear required fields of %s", kind)
        return None

    try:
        with get_session() as session:
            user = get_user_by_username(session, username)
            if not user:
                return None
            row = (
                session.query(info.model)
                .filter(info.model.id == entry_id, info.model.user_id == user.id)
                .first()
            )
            if not row:
                return None
            _apply_entry_updates(info, row, data)
            session.flush()
            return _entry_to_dict(info, row)
    except Exception:
        logger.exception("Failed to update %s %d for %s", kind, entry_id, username)
        return None


def delete_profile_entry(username: str, kind: str, entry_id: int) -> bool:
    """Delete a profile entry and any CV selections pointing at it.

    Returns:
        True if deleted, False otherwise
    """
    info = _get_kind_info(kind)
    try:
        with get_session() as session:
            user = get_user_by_username(session, username)
            if not user:
                return False
            row = (
                session.query(info.model)
                .filter(info.model.id == entry_id, info.model.user_id == user.id)
                .first()
            )
            if not row:
                return False
            session.delete(row)
            if info.entity_kind is not None:
                drop_entity_selections(session, user.id, info.entity_kind, entry_id)
            return True
    except Exception:
        logger.exception("Failed to delete %s %d for %s", kind, entry_id, username)
        return False


def _motivation_to_dict(row: MotivationVision) -> dict:
    result: dict[str, Any] = {"user_id": row.user_id}
    for field in _MOTIVATION_FIELDS:
        result[field] = getattr(row, field)
    result["passions"] = list(load_text_list(row.passions))
    result["updated_at"] = row.updated_at
    return result


def get_motivation_vision(username: str) -> dict | None:
    """Get the user's motivation & vision section, or None if never saved."""
    try:
        with get_session() as session:
            user = get_user_by_username(session, username)
            if not user:
                return None
            row = (
                session.query(MotivationVision).filter(MotivationVision.user_id == user.id).first()
            )
            return _motivation_to_dict(row) if row else None
    except Exception:
        logger.exception("Failed to get motivation & vision for %s", username)
        return None


def upsert_motivation_vision(username: str, data: dict) -> dict | None:
    """Create or update the motivation & vision section with the given fields."""
    try:
        with get_session() as session:
            user = get_user_by_username(session, username)
            if not user:
                return None
            row = (
                session.query(MotivationVision).filter(MotivationVision.user_id == user.id).first()
            )
            if row is None:
                row = MotivationVision(user_id=user.id)
                session.add(row)
            for field in _MOTIVATION_FIELDS:
                if field in data:
                    value = data[field]
                    setattr(row, field, dump_list(value) if field == "passions" else value)
            session.flush()
            return _motivation_to_dict(row)
    except Exception:
        logger.exception("Failed to save motivation & vision for %s", username)
        return None
