"""User lookup helpers shared by the services and API routes.

Accounts are created by the authentication layer; ``create_user`` exists
for setup scripts and tests.
"""

from __future__ import annotations

import logging

from sqlalchemy.orm import Session

from cv_composer.data.db import get_session
from cv_composer.data.models import User

logger = logging.getLogger(__name__)

__all__ = ["create_user", "get_user_by_username", "get_user_id"]


def get_user_by_username(session: Session, username: str) -> User | None:
    """Get a user by username."""
    return session.query(User).filter(User.username == username).first()


def get_user_id(username: str) -> int | None:
    """Return the ID of ``username``, or None if no such user exists."""
    with get_session() as session:
        user = get_user_by_username(session, username)
        return user.id if user else None


def create_user(username: str) -> int | None:
    """Create a user account and return its ID.

    Returns:
        The new user ID, or None if the username is empty or taken.
    """
    username_clean = username.strip()
    if not username_clean:
        return None

    try:
        with get_session() as session:
            if get_user_by_username(session, username_clean):
                return None
            user = User(username=username_clean)
            session.add(user)
            session.flush()
            return user.id
    except Exception:
        logger.exception("Failed to create user %s", username_clean)
        return None
