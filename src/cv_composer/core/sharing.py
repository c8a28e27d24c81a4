"""Public access to a CV through a share token."""

from __future__ import annotations

import logging
from datetime import UTC, datetime

from cv_composer.constants import PrivacyLevel
from cv_composer.core.disclosure import PublicCV, coerce_privacy_level, redact
from cv_composer.core.documents import compose_document
from cv_composer.core.exceptions import NotFoundError, ShareLinkUnavailableError
from cv_composer.core.records import ShareLinkRecord
from cv_composer.core.store import ProfileStore

logger = logging.getLogger(__name__)

__all__ = ["check_share_link", "open_shared_cv"]


def check_share_link(link: ShareLinkRecord, now: datetime) -> None:
    """Raise ``ShareLinkUnavailableError`` if the link is inactive or expired."""
    if not link.is_active:
        raise ShareLinkUnavailableError(link.token, "inactive")
    expires_at = link.expires_at
    if expires_at is not None:
        # SQLite hands back naive datetimes; they are stored as UTC.
        if expires_at.tzinfo is None:
            expires_at = expires_at.replace(tzinfo=UTC)
        if expires_at < now:
            raise ShareLinkUnavailableError(link.token, "expired")


def open_shared_cv(store: ProfileStore, token: str, *, now: datetime | None = None) -> PublicCV:
    """Resolve and redact the CV behind a share token, counting the view.

    The owner's contact profile is not even loaded under full privacy.
    The view counter is approximate: concurrent views may race.

    Raises:
        NotFoundError: If the token or its document does not exist.
        ShareLinkUnavailableError: If the link is inactive or expired.
        LayoutConfigError: If the document's stored layout is invalid.
    """
    now = now or datetime.now(UTC)
    link = store.get_share_link(token)
    if link is None:
        raise NotFoundError("Share link", token)
    check_share_link(link, now)

    level = coerce_privacy_level(link.privacy_level)
    resolved = compose_document(store, link.document_id)
    profile = None
    if level is not PrivacyLevel.FULL:
        profile = store.get_contact_profile(resolved.document.user_id)

    public_cv = redact(resolved, profile, level)
    store.increment_view_count(link.id, now)
    logger.info("Served shared CV %s at privacy level %s", link.document_id, level)
    return public_cv
