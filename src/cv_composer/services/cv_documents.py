"""CV document service: the tailored documents built from a master profile.

Layout writes are validated before anything is stored; an invalid layout
raises ``LayoutConfigError`` instead of returning None, so callers can
report what is wrong with it.
"""

from __future__ import annotations

import json
import logging
from collections.abc import Mapping
from typing import Any, TypedDict

from sqlalchemy.orm import Session

from cv_composer.constants import LayoutMode
from cv_composer.core.exceptions import LayoutConfigError
from cv_composer.core.layout import LayoutConfig, get_default_layout, parse_layout_config
from cv_composer.data.db import get_session
from cv_composer.data.models import CVDocument
from cv_composer.services.users import get_user_by_username

logger = logging.getLogger(__name__)

__all__ = [
    "CVDocumentData",
    "create_cv_document",
    "delete_cv_document",
    "get_cv_document",
    "get_cv_layout",
    "list_cv_documents",
    "set_cv_layout",
    "update_cv_document",
]

_DOCUMENT_FIELDS = ("name", "language", "is_archived")


class CVDocumentData(TypedDict, total=False):
    """TypedDict for CV document data."""

    name: str
    language: str
    layout_mode: str
    layout_config: dict[str, Any] | None
    is_archived: bool


def _document_to_dict(document: CVDocument) -> dict:
    return {
        "id": document.id,
        "user_id": document.user_id,
        "name": document.name,
        "language": document.language,
        "layout_mode": document.layout_mode,
        "has_custom_layout": document.layout_config is not None,
        "is_archived": document.is_archived,
        "created_at": document.created_at,
        "updated_at": document.updated_at,
    }


def _get_document_by_id(session: Session, user_id: int, document_id: int) -> CVDocument | None:
    return (
        session.query(CVDocument)
        .filter(CVDocument.id == document_id, CVDocument.user_id == user_id)
        .first()
    )


def _parse_mode(value: str) -> LayoutMode:
    try:
        return LayoutMode(value)
    except ValueError:
        raise LayoutConfigError(f"Unknown layout mode {value!r}") from None


def _store_layout(document: CVDocument, config: LayoutConfig | None) -> None:
    if config is None:
        document.layout_config = None
        return
    document.layout_mode = str(config.mode)
    document.layout_config = json.dumps(config.to_dict())


def create_cv_document(username: str, document_data: CVDocumentData) -> dict | None:
    """Create a CV document, optionally with a custom layout.

    Returns:
        The created document, or None if the user was not found

    Raises:
        LayoutConfigError: If the layout mode or configuration is invalid.
    """
    mode = _parse_mode(document_data.get("layout_mode") or LayoutMode.SINGLE_COLUMN)
    raw_layout = document_data.get("layout_config")
    config = parse_layout_config(raw_layout) if raw_layout is not None else None

    try:
        with get_session() as session:
            user = get_user_by_username(session, username)
            if not user:
                return None

            document = CVDocument(user_id=user.id, layout_mode=str(mode))
            for field in _DOCUMENT_FIELDS:
                if document_data.get(field) is not None:
                    setattr(document, field, document_data[field])
            _store_layout(document, config)

            session.add(document)
            session.commit()
            logger.info("Created CV document %d for %s", document.id, username)
            return _document_to_dict(document)

    except Exception:
        logger.exception("Failed to create CV document for %s", username)
        return None


def list_cv_documents(username: str, include_archived: bool = False) -> list[dict] | None:
    """List a user's CV documents, most recently updated first."""
    try:
        with get_session() as session:
            user = get_user_by_username(session, username)
            if not user:
                return None

            query = session.query(CVDocument).filter(CVDocument.user_id == user.id)
            if not include_archived:
                query = query.filter(CVDocument.is_archived.is_(False))
            documents = query.order_by(CVDocument.updated_at.desc(), CVDocument.id.desc()).all()
            return [_document_to_dict(d) for d in documents]

    except Exception:
        logger.exception("Failed to list CV documents for %s", username)
        return None


def get_cv_document(username: str, document_id: int) -> dict | None:
    """Get one of the user's CV documents, or None if not found."""
    try:
        with get_session() as session:
            user = get_user_by_username(session, username)
            if not user:
                return None
            document = _get_document_by_id(session, user.id, document_id)
            return _document_to_dict(document) if document else None

    except Exception:
        logger.exception("Failed to get CV document %d for %s", document_id, username)
        return None


def update_cv_document(
    username: str, document_id: int, document_data: CVDocumentData
) -> dict | None:
    """Update name, language, archive flag or layout mode of a document.

    Switching the layout mode drops a stored layout of the other mode, so
    the document falls back to the default layout of its new mode.

    Raises:
        LayoutConfigError: If the layout mode is unknown.
    """
    new_mode = None
    if document_data.get("layout_mode") is not None:
        new_mode = _parse_mode(document_data["layout_mode"])

    try:
        with get_session() as session:
            user = get_user_by_username(session, username)
            if not user:
                return None
            document = _get_document_by_id(session, user.id, document_id)
            if not document:
                return None

            for field in _DOCUMENT_FIELDS:
                if field in document_data:
                    setattr(document, field, document_data[field])

            if new_mode is not None and str(new_mode) != document.layout_mode:
                document.layout_mode = str(new_mode)
                if document.layout_config is not None:
                    logger.info(
                        "Layout mode of document %d changed to %s, custom layout dropped",
                        document_id,
                        new_mode,
                    )
                    document.layout_config = None

            session.commit()
            return _document_to_dict(document)

    except Exception:
        logger.exception("Failed to update CV document %d for %s", document_id, username)
        return None


def delete_cv_document(username: str, document_id: int) -> bool:
    """Delete a document with its selections and share links.

    Returns:
        True if deleted successfully, False otherwise
    """
    try:
        with get_session() as session:
            user = get_user_by_username(session, username)
            if not user:
                return False
            document = _get_document_by_id(session, user.id, document_id)
            if not document:
                return False

            session.delete(document)
            session.commit()
            return True

    except Exception:
        logger.exception("Failed to delete CV document %d for %s", document_id, username)
        return False


def _layout_to_dict(config: LayoutConfig, is_default: bool) -> dict:
    return {**config.to_dict(), "is_default": is_default}


def get_cv_layout(username: str, document_id: int) -> dict | None:
    """Return the effective layout of a document.

    Raises:
        LayoutConfigError: If the stored layout is invalid.
    """
    with get_session() as session:
        user = get_user_by_username(session, username)
        if not user:
            return None
        document = _get_document_by_id(session, user.id, document_id)
        if not document:
            return None
        mode = _parse_mode(document.layout_mode)
        raw_layout = document.layout_config

    if raw_layout is None:
        return _layout_to_dict(get_default_layout(mode), is_default=True)
    try:
        stored = json.loads(raw_layout)
    except json.JSONDecodeError as exc:
        raise LayoutConfigError(f"Stored layout of document {document_id} is not JSON") from exc
    return _layout_to_dict(parse_layout_config(stored), is_default=False)


def set_cv_layout(
    username: str, document_id: int, raw_layout: Mapping[str, Any] | None
) -> dict | None:
    """Validate and store a layout; ``None`` restores the default layout.

    The document's layout mode follows the mode of the stored layout.

    Returns:
        The effective layout, or None if the document was not found

    Raises:
        LayoutConfigError: If the layout is invalid. Nothing is stored.
    """
    config = parse_layout_config(raw_layout) if raw_layout is not None else None

    with get_session() as session:
        user = get_user_by_username(session, username)
        if not user:
            return None
        document = _get_document_by_id(session, user.id, document_id)
        if not document:
            return None

        _store_layout(document, config)
        mode = _parse_mode(document.layout_mode)

    if config is None:
        return _layout_to_dict(get_default_layout(mode), is_default=True)
    return _layout_to_dict(config, is_default=False)
