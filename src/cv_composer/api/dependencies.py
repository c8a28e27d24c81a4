"""Shared dependencies for API routes."""

from __future__ import annotations

from typing import Annotated

from fastapi import Header, HTTPException, Path, status

from cv_composer.core import ProfileStore
from cv_composer.data.store import SqlProfileStore
from cv_composer.services.users import get_user_id


def get_current_username(
    x_username: Annotated[
        str | None,
        Header(
            description=(
                "Username of the caller, as vouched for by the authentication "
                "layer in front of this API."
            )
        ),
    ] = None,
) -> str:
    """Identify the caller from the X-Username header.

    Authentication is not handled here: a trusted proxy or gateway is
    expected to verify the user and set the header.

    Raises:
        HTTPException: If authentication is missing (401).
    """
    if not x_username:
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Missing authentication. Please provide X-Username header.",
        )
    return x_username


def verify_user_access(current_username: str, username: str) -> int:
    """Check the caller acts on their own data and return the user's ID.

    Raises:
        HTTPException: 403 if no permission, 404 if user not found.
    """
    if current_username != username:
        raise HTTPException(
            status_code=status.HTTP_403_FORBIDDEN,
            detail="You can only access your own profile and CVs",
        )
    user_id = get_user_id(username)
    if user_id is None:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail=f"User '{username}' not found",
        )
    return user_id


def get_profile_store() -> ProfileStore:
    """Persistence collaborator for the composition engine."""
    return SqlProfileStore()


UsernamePath = Annotated[str, Path(description="Username")]
