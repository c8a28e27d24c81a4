"""User profile service for the contact details shown on CVs.

Share links decide how much of this record a public viewer sees.
"""

from __future__ import annotations

import logging
from typing import TypedDict

from sqlalchemy.orm import Session

from cv_composer.data.db import get_session
from cv_composer.data.models import UserProfile
from cv_composer.services.users import get_user_by_username

logger = logging.getLogger(__name__)

__all__ = [
    "UserProfileData",
    "get_user_profile",
    "upsert_user_profile",
    "delete_user_profile",
]

_PROFILE_FIELDS = (
    "first_name",
    "last_name",
    "email",
    "phone",
    "location",
    "linkedin_url",
    "github_url",
    "website_url",
)


class UserProfileData(TypedDict, total=False):
    """TypedDict for user profile data."""

    first_name: str
    last_name: str
    email: str
    phone: str
    location: str
    linkedin_url: str
    github_url: str
    website_url: str


def _profile_to_dict(profile: UserProfile) -> dict:
    result = {"id": profile.id, "user_id": profile.user_id}
    for field in _PROFILE_FIELDS:
        result[field] = getattr(profile, field)
    result["updated_at"] = profile.updated_at
    return result


def _get_profile_by_user_id(session: Session, user_id: int) -> UserProfile | None:
    return session.query(UserProfile).filter(UserProfile.user_id == user_id).first()


def get_user_profile(username: str) -> dict | None:
    """Get a user's contact profile.

    Returns:
        Dictionary with profile data, or None if user or profile not found
    """
    try:
        with get_session() as session:
            user = get_user_by_username(session, username)
            if not user:
                return None

            profile = _get_profile_by_user_id(session, user.id)
            return _profile_to_dict(profile) if profile else None

    except Exception:
        logger.exception("Failed to get user profile for %s", username)
        return None


def upsert_user_profile(username: str, profile_data: UserProfileData) -> dict | None:
    """Create or update a user profile in a single transaction.

    Only the fields present in ``profile_data`` are written.

    Returns:
        Dictionary with profile data, or None if operation failed
    """
    try:
        with get_session() as session:
            user = get_user_by_username(session, username)
            if not user:
                return None

            profile = _get_profile_by_user_id(session, user.id)
            if profile is None:
                profile = UserProfile(user_id=user.id)
                session.add(profile)

            for field in _PROFILE_FIELDS:
                if field in profile_data:
                    setattr(profile, field, profile_data[field])

            session.commit()
            return _profile_to_dict(profile)

    except Exception:
        logger.exception("Failed to upsert user profile for %s", username)
        return None


def delete_user_profile(username: str) -> bool:
    """Delete a user's profile.

    Returns:
        True if deleted successfully, False otherwise
    """
    try:
        with get_session() as session:
            user = get_user_by_username(session, username)
            if not user:
                return False

            profile = _get_profile_by_user_id(session, user.id)
            if not profile:
                return False

            session.delete(profile)
            session.commit()
            return True

    except Exception:
        logger.exception("Failed to delete user profile for %s", username)
        return False
