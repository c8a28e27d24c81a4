"""Exceptions raised by the composition and disclosure engine."""

from __future__ import annotations


class CompositionError(Exception):
    """Base class for engine errors."""


class NotFoundError(CompositionError):
    """A document, entity, profile or share link does not exist."""

    def __init__(self, what: str, identifier: object) -> None:
        super().__init__(f"{what} {identifier!r} not found")
        self.what = what
        self.identifier = identifier


class LayoutConfigError(CompositionError):
    """A stored layout configuration is malformed or places a section twice."""


class SelectionValidationError(CompositionError, ValueError):
    """Override rows carry fields the entity kind does not support."""


class SelectionWriteError(CompositionError):
    """A bulk selection upsert failed; no row of the batch was committed."""

    def __init__(self, document_id: int, kind: str, row_count: int) -> None:
        super().__init__(
            f"Failed to save {row_count} {kind} selection(s) for document {document_id}"
        )
        self.document_id = document_id
        self.kind = kind
        self.row_count = row_count


class ShareLinkUnavailableError(CompositionError):
    """The share link exists but is inactive or expired."""

    def __init__(self, token: str, reason: str) -> None:
        super().__init__(f"Share link {token!r} is {reason}")
        self.token = token
        self.reason = reason
