"""Work experience service for managing the master work history.

This service provides CRUD operations for WorkExperience data, used by
the REST API. CV documents never edit these rows; they override them
through selections.
"""

from __future__ import annotations

import logging
from datetime import date
from typing import TypedDict

from sqlalchemy.orm import Session

from cv_composer.constants import EntityKind
from cv_composer.data.db import get_session
from cv_composer.data.models import WorkExperience
from cv_composer.services.profile_entries import drop_entity_selections
from cv_composer.services.users import get_user_by_username
from cv_composer.utils.json_fields import dump_list, load_text_list

logger = logging.getLogger(__name__)

__all__ = [
    "WorkExperienceData",
    "get_work_experiences",
    "get_work_experience",
    "create_work_experience",
    "update_work_experience",
    "delete_work_experience",
]

# Fields that can be updated on WorkExperience
_WORK_EXP_FIELDS = (
    "company",
    "title",
    "location",
    "start_date",
    "end_date",
    "description",
    "is_current",
    "display_order",
)


class WorkExperienceData(TypedDict, total=False):
    """TypedDict for work experience data."""

    company: str
    title: str
    location: str
    start_date: date
    end_date: date
    description: str
    bullets: list[str]
    is_current: bool
    display_order: int


def _work_exp_to_dict(work_exp: WorkExperience) -> dict:
    """Convert a WorkExperience model to a dictionary.

    Args:
        work_exp: WorkExperience model instance

    Returns:
        Dictionary with work experience data; bullets decoded to a list
    """
    return {
        "id": work_exp.id,
        "user_id": work_exp.user_id,
        "company": work_exp.company,
        "title": work_exp.title,
        "location": work_exp.location,
        "start_date": work_exp.start_date,
        "end_date": work_exp.end_date,
        "description": work_exp.description,
        "bullets": list(load_text_list(work_exp.bullets)),
        "is_current": work_exp.is_current,
        "display_order": work_exp.display_order,
        "updated_at": work_exp.updated_at,
    }


def _get_work_exp_by_id(session: Session, user_id: int, work_exp_id: int) -> WorkExperience | None:
    """Get a work experience by ID, ensuring it belongs to the user."""
    return (
        session.query(WorkExperience)
        .filter(WorkExperience.id == work_exp_id, WorkExperience.user_id == user_id)
        .first()
    )


def _validate_work_exp_data(work_exp_data: WorkExperienceData) -> str | None:
    """Validate work experience data.

    Args:
        work_exp_data: Dictionary containing work experience fields

    Returns:
        Error message if validation fails, None if valid
    """
    start_date = work_exp_data.get("start_date")
    end_date = work_exp_data.get("end_date")
    is_current = work_exp_data.get("is_current", False)
    display_order = work_exp_data.get("display_order")

    if start_date and end_date and end_date < start_date:
        return "end_date cannot be before start_date"

    if is_current and end_date:
        return "end_date must be None when is_current is True"

    if display_order is not None and display_order < 0:
        return "display_order must be non-negative"

    return None


def _apply_work_exp_updates(work_exp: WorkExperience, work_exp_data: WorkExperienceData) -> None:
    """Apply updates from work_exp_data to a WorkExperience model."""
    for field in _WORK_EXP_FIELDS:
        if field in work_exp_data:
            setattr(work_exp, field, work_exp_data[field])

    if "bullets" in work_exp_data:
        work_exp.bullets = dump_list(work_exp_data["bullets"])

    # Auto-clear end_date if is_current is set to True
    if work_exp_data.get("is_current") is True:
        work_exp.end_date = None


def get_work_experiences(username: str) -> list[dict] | None:
    """Get all work experiences for a user in default CV order.

    Entries with a display_order come first (ascending), the rest newest first.

    Args:
        username: Username of the user

    Returns:
        List of work experience dictionaries, or None if user not found
    """
    try:
        with get_session() as session:
            user = get_user_by_username(session, username)
            if not user:
                return None

            work_exps = (
                session.query(WorkExperience)
                .filter(WorkExperience.user_id == user.id)
                .order_by(
                    WorkExperience.display_order.is_(None),
                    WorkExperience.display_order,
                    WorkExperience.start_date.desc(),
                    WorkExperience.id,
                )
                .all()
            )

            return [_work_exp_to_dict(w) for w in work_exps]

    except Exception:
        logger.exception("Failed to get work experiences for %s", username)
        return None


def get_work_experience(username: str, work_exp_id: int) -> dict | None:
    """Get a specific work experience by ID.

    Args:
        username: Username of the user
        work_exp_id: ID of the work experience

    Returns:
        Dictionary with work experience data, or None if not found
    """
    try:
        with get_session() as session:
            user = get_user_by_username(session, username)
            if not user:
                return None

            work_exp = _get_work_exp_by_id(session, user.id, work_exp_id)
            if not work_exp:
                return None

            return _work_exp_to_dict(work_exp)

    except Exception:
        logger.exception("Failed to get work experience %d for %s", work_exp_id, username)
        return None


def create_work_experience(username: str, work_exp_data: WorkExperienceData) -> dict | None:
    """Create a new work experience entry.

    Args:
        username: Username of the user
        work_exp_data: Dictionary containing work experience fields.
                       Must include 'company' and 'title'.

    Returns:
        Dictionary with created work experience data, or None if creation failed
    """
    if "company" not in work_exp_data or "title" not in work_exp_data:
        return None

    validation_error = _validate_work_exp_data(work_exp_data)
    if validation_error:
        logger.warning("Validation failed for work experience: %s", validation_error)
        return None

    try:
        with get_session() as session:
            user = get_user_by_username(session, username)
            if not user:
                return None

            new_work_exp = WorkExperience(
                user_id=user.id,
                company=work_exp_data["company"],
                title=work_exp_data["title"],
            )
            _apply_work_exp_updates(new_work_exp, work_exp_data)

            session.add(new_work_exp)
            session.commit()

            return _work_exp_to_dict(new_work_exp)

    except Exception:
        logger.exception("Failed to create work experience for %s", username)
        return None


def update_work_experience(
    username: str, work_exp_id: int, work_exp_data: WorkExperienceData
) -> dict | None:
    """Update an existing work experience entry.

    Args:
        username: Username of the user
        work_exp_id: ID of the work experience to update
        work_exp_data: Dictionary containing fields to update

    Returns:
        Dictionary with updated work experience data, or None if update failed
    """
    try:
        with get_session() as session:
            user = get_user_by_username(session, username)
            if not user:
                return None

            work_exp = _get_work_exp_by_id(session, user.id, work_exp_id)
            if not work_exp:
                return None

            # Merge existing values with updates for validation
            new_is_current = work_exp_data.get("is_current", work_exp.is_current)
            effective_end_date = (
                None if new_is_current else work_exp_data.get("end_date", work_exp.end_date)
            )
            merged_data: WorkExperienceData = {
                "start_date": work_exp_data.get("start_date", work_exp.start_date),
                "end_date": effective_end_date,
                "is_current": new_is_current,
            }
            if "display_order" in work_exp_data:
                merged_data["display_order"] = work_exp_data["display_order"]
            validation_error = _validate_work_exp_data(merged_data)
            if validation_error:
                logger.warning("Validation failed for work experience update: %s", validation_error)
                return None

            _apply_work_exp_updates(work_exp, work_exp_data)
            session.commit()

            return _work_exp_to_dict(work_exp)

    except Exception:
        logger.exception("Failed to update work experience %d for %s", work_exp_id, username)
        return None


def delete_work_experience(username: str, work_exp_id: int) -> bool:
    """Delete a work experience entry and the CV selections that point at it.

    Args:
        username: Username of the user
        work_exp_id: ID of the work experience to delete

    Returns:
        True if deleted successfully, False otherwise
    """
    try:
        with get_session() as session:
            user = get_user_by_username(session, username)
            if not user:
                return False

            work_exp = _get_work_exp_by_id(session, user.id, work_exp_id)
            if not work_exp:
                return False

            session.delete(work_exp)
            drop_entity_selections(session, user.id, EntityKind.WORK_EXPERIENCE, work_exp_id)
            session.commit()
            return True

    except Exception:
        logger.exception("Failed to delete work experience %d for %s", work_exp_id, username)
        return False
