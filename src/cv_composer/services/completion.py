"""Profile completion for a user, computed from the stored master profile."""

from __future__ import annotations

from cv_composer.core.completion import ProfileCompletion, calculate_completion
from cv_composer.data.store import SqlProfileStore
from cv_composer.services.users import get_user_id

__all__ = ["get_profile_completion"]


def get_profile_completion(username: str) -> ProfileCompletion | None:
    """Return the completion summary, or None if the user does not exist."""
    user_id = get_user_id(username)
    if user_id is None:
        return None
    return calculate_completion(SqlProfileStore().get_profile_snapshot(user_id))
