"""Education service for managing the master education history.

This service provides CRUD operations for Education data.
"""

from __future__ import annotations

import logging
from datetime import date
from typing import TypedDict

from sqlalchemy.orm import Session

from cv_composer.constants import EntityKind
from cv_composer.data.db import get_session
from cv_composer.data.models import Education
from cv_composer.services.profile_entries import drop_entity_selections
from cv_composer.services.users import get_user_by_username

logger = logging.getLogger(__name__)

__all__ = [
    "EducationData",
    "get_educations",
    "get_education",
    "create_education",
    "update_education",
    "delete_education",
]

_EDUCATION_FIELDS = (
    "institution",
    "degree",
    "field_of_study",
    "grade",
    "start_date",
    "end_date",
    "description",
    "is_current",
    "display_order",
)


class EducationData(TypedDict, total=False):
    """TypedDict for education data."""

    institution: str
    degree: str
    field_of_study: str
    grade: str
    start_date: date
    end_date: date
    description: str
    is_current: bool
    display_order: int


def _education_to_dict(education: Education) -> dict:
    return {
        "id": education.id,
        "user_id": education.user_id,
        "institution": education.institution,
        "degree": education.degree,
        "field_of_study": education.field_of_study,
        "grade": education.grade,
        "start_date": education.start_date,
        "end_date": education.end_date,
        "description": education.description,
        "is_current": education.is_current,
        "display_order": education.display_order,
        "updated_at": education.updated_at,
    }


def _get_education_by_id(session: Session, user_id: int, education_id: int) -> Education | None:
    return (
        session.query(Education)
        .filter(Education.id == education_id, Education.user_id == user_id)
        .first()
    )


def _validate_education_data(education_data: EducationData) -> str | None:
    """Validate education data.

    Returns:
        Error message if validation fails, None if valid
    """
    start_date = education_data.get("start_date")
    end_date = education_data.get("end_date")
    display_order = education_data.get("display_order")

    if start_date and end_date and end_date < start_date:
        return "end_date cannot be before start_date"

    if education_data.get("is_current") and end_date:
        return "end_date must be None when is_current is True"

    if display_order is not None and display_order < 0:
        return "display_order must be non-negative"

    return None


def _apply_education_updates(education: Education, education_data: EducationData) -> None:
    for field in _EDUCATION_FIELDS:
        if field in education_data:
            setattr(education, field, education_data[field])

    if education_data.get("is_current") is True:
        education.end_date = None


def get_educations(username: str) -> list[dict] | None:
    """Get all education entries for a user.

    Ordered by display_order (unset last), then most recent start date.

    Args:
        username: Username of the user

    Returns:
        List of education dictionaries, or None if user not found
    """
    try:
        with get_session() as session:
            user = get_user_by_username(session, username)
            if not user:
                return None

            educations = (
                session.query(Education)
                .filter(Education.user_id == user.id)
                .order_by(
                    Education.display_order.is_(None),
                    Education.display_order,
                    Education.start_date.desc(),
                    Education.id,
                )
                .all()
            )
            return [_education_to_dict(e) for e in educations]

    except Exception:
        logger.exception("Failed to get educations for %s", username)
        return None


def get_education(username: str, education_id: int) -> dict | None:
    """Get a specific education entry by ID, or None if not found."""
    try:
        with get_session() as session:
            user = get_user_by_username(session, username)
            if not user:
                return None

            education = _get_education_by_id(session, user.id, education_id)
            return _education_to_dict(education) if education else None

    except Exception:
        logger.exception("Failed to get education %d for %s", education_id, username)
        return None


def create_education(username: str, education_data: EducationData) -> dict | None:
    """Create a new education entry.

    Args:
        username: Username of the user
        education_data: Education fields. Must include 'institution' and 'degree'.

    Returns:
        Dictionary with created education data, or None if creation failed
    """
    if "institution" not in education_data or "degree" not in education_data:
        return None

    validation_error = _validate_education_data(education_data)
    if validation_error:
        logger.warning("Validation failed for education: %s", validation_error)
        return None

    try:
        with get_session() as session:
            user = get_user_by_username(session, username)
            if not user:
                return None

            education = Education(
                user_id=user.id,
                institution=education_data["institution"],
                degree=education_data["degree"],
            )
            _apply_education_updates(education, education_data)

            session.add(education)
            session.commit()
            return _education_to_dict(education)

    except Exception:
        logger.exception("Failed to create education for %s", username)
        return None


def update_education(
    username: str, education_id: int, education_data: EducationData
) -> dict | None:
    """Update an existing education entry.

    Returns:
        Dictionary with updated education data, or None if update failed
    """
    try:
        with get_session() as session:
            user = get_user_by_username(session, username)
            if not user:
                return None

            education = _get_education_by_id(session, user.id, education_id)
            if not education:
                return None

            new_is_current = education_data.get("is_current", education.is_current)
            merged_data: EducationData = {
                "start_date": education_data.get("start_date", education.start_date),
                "end_date": (
                    None
                    if new_is_current
                    else education_data.get("end_date", education.end_date)
                ),
                "is_current": new_is_current,
            }
            if "display_order" in education_data:
                merged_data["display_order"] = education_data["display_order"]
            validation_error = _validate_education_data(merged_data)
            if validation_error:
                logger.warning("Validation failed for education update: %s", validation_error)
                return None

            _apply_education_updates(education, education_data)
            session.commit()
            return _education_to_dict(education)

    except Exception:
        logger.exception("Failed to update education %d for %s", education_id, username)
        return None


def delete_education(username: str, education_id: int) -> bool:
    """Delete an education entry and the CV selections that point at it.

    Returns:
        True if deleted successfully, False otherwise
    """
    try:
        with get_session() as session:
            user = get_user_by_username(session, username)
            if not user:
                return False

            education = _get_education_by_id(session, user.id, education_id)
            if not education:
                return False

            session.delete(education)
            drop_entity_selections(session, user.id, EntityKind.EDUCATION, education_id)
            session.commit()
            return True

    except Exception:
        logger.exception("Failed to delete education %d for %s", education_id, username)
        return False
