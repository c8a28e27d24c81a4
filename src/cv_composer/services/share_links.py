"""Share link service: owner-side management of public CV links.

Public access through a token lives in ``core.sharing``; this module only
creates, lists, updates and deletes links.
"""

from __future__ import annotations

import logging
import secrets
from datetime import datetime
from typing import TypedDict

from sqlalchemy.orm import Session

from cv_composer.constants import SHARE_TOKEN_BYTES, PrivacyLevel
from cv_composer.data.db import get_session
from cv_composer.data.models import CVDocument, ShareLink
from cv_composer.services.users import get_user_by_username

logger = logging.getLogger(__name__)

__all__ = [
    "ShareLinkData",
    "create_share_link",
    "delete_share_link",
    "generate_share_token",
    "list_share_links",
    "update_share_link",
]

_MAX_TOKEN_ATTEMPTS = 5


class ShareLinkData(TypedDict, total=False):
    """TypedDict for share link data."""

    privacy_level: str
    is_active: bool
    expires_at: datetime | None


def generate_share_token() -> str:
    """Return a fresh URL-safe token."""
    return secrets.token_urlsafe(SHARE_TOKEN_BYTES)


def _link_to_dict(link: ShareLink) -> dict:
    return {
        "id": link.id,
        "document_id": link.document_id,
        "token": link.token,
        "privacy_level": link.privacy_level,
        "is_active": link.is_active,
        "expires_at": link.expires_at,
        "view_count": link.view_count,
        "last_viewed_at": link.last_viewed_at,
        "created_at": link.created_at,
    }


def _is_valid_privacy_level(value: str | None) -> bool:
    return value in {level.value for level in PrivacyLevel}


def _unused_token(session: Session) -> str:
    for _ in range(_MAX_TOKEN_ATTEMPTS):
        token = generate_share_token()
        if not session.query(ShareLink.id).filter(ShareLink.token == token).first():
            return token
    raise RuntimeError("Could not generate an unused share token")


def _get_link_by_id(session: Session, user_id: int, link_id: int) -> ShareLink | None:
    return (
        session.query(ShareLink)
        .filter(ShareLink.id == link_id, ShareLink.user_id == user_id)
        .first()
    )


def create_share_link(
    username: str,
    document_id: int,
    privacy_level: str = PrivacyLevel.PERSONAL,
    expires_at: datetime | None = None,
) -> dict | None:
    """Create an active share link for one of the user's documents.

    Returns:
        The created link, or None if the privacy level is unknown or the
        user or document was not found
    """
    if not _is_valid_privacy_level(privacy_level):
        logger.warning("Refusing share link with unknown privacy level %r", privacy_level)
        return None

    try:
        with get_session() as session:
            user = get_user_by_username(session, username)
            if not user:
                return None
            document = (
                session.query(CVDocument)
                .filter(CVDocument.id == document_id, CVDocument.user_id == user.id)
                .first()
            )
            if not document:
                return None

            link = ShareLink(
                user_id=user.id,
                document_id=document.id,
                token=_unused_token(session),
                privacy_level=str(privacy_level),
                expires_at=expires_at,
            )
            session.add(link)
            session.commit()
            logger.info("Created %s share link for document %d", privacy_level, document_id)
            return _link_to_dict(link)

    except Exception:
        logger.exception("Failed to create share link for document %d", document_id)
        return None


def list_share_links(username: str, document_id: int) -> list[dict] | None:
    """List the links of a document, newest first, or None if not found."""
    try:
        with get_session() as session:
            user = get_user_by_username(session, username)
            if not user:
                return None
            links = (
                session.query(ShareLink)
                .filter(ShareLink.user_id == user.id, ShareLink.document_id == document_id)
                .order_by(ShareLink.created_at.desc(), ShareLink.id.desc())
                .all()
            )
            return [_link_to_dict(link) for link in links]

    except Exception:
        logger.exception("Failed to list share links for document %d", document_id)
        return None


def update_share_link(username: str, link_id: int, link_data: ShareLinkData) -> dict | None:
    """Activate or deactivate a link, change its privacy level or expiry.

    Returns:
        The updated link, or None if not found or the privacy level is unknown
    """
    if "privacy_level" in link_data and not _is_valid_privacy_level(link_data["privacy_level"]):
        logger.warning("Refusing unknown privacy level %r", link_data["privacy_level"])
        return None

    try:
        with get_session() as session:
            user = get_user_by_username(session, username)
            if not user:
                return None
            link = _get_link_by_id(session, user.id, link_id)
            if not link:
                return None

            for field in ("privacy_level", "is_active", "expires_at"):
                if field in link_data:
                    setattr(link, field, link_data[field])
            session.commit()
            return _link_to_dict(link)

    except Exception:
        logger.exception("Failed to update share link %d", link_id)
        return None


def delete_share_link(username: str, link_id: int) -> bool:
    """Delete a share link; its token stops resolving immediately."""
    try:
        with get_session() as session:
            user = get_user_by_username(session, username)
            if not user:
                return False
            link = _get_link_by_id(session, user.id, link_id)
            if not link:
                return False
            session.delete(link)
            session.commit()
            return True

    except Exception:
        logger.exception("Failed to delete share link %d", link_id)
        return False
