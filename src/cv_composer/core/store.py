"""Interface of the persistence collaborator consumed by the engine."""

from __future__ import annotations

from collections.abc import Sequence
from datetime import datetime
from typing import Protocol

from cv_composer.constants import EntityKind
from cv_composer.core.exceptions import NotFoundError
from cv_composer.core.records import (
    ContactProfile,
    DocumentRecord,
    MasterEntry,
    ProfileSnapshot,
    SelectionOverride,
    ShareLinkRecord,
)


class ProfileStore(Protocol):
    """Storage operations the engine relies on.

    Lookups return ``None`` for absent rows; any other failure is raised,
    so "not found" is always distinguishable from a storage error.
    """

    def get_document(self, document_id: int) -> DocumentRecord | None: ...

    def get_master_entities(self, user_id: int, kind: EntityKind) -> list[MasterEntry]: ...

    def get_selections(self, document_id: int, kind: EntityKind) -> list[SelectionOverride]: ...

    def upsert_selections(
        self, document_id: int, kind: EntityKind, rows: Sequence[SelectionOverride]
    ) -> list[SelectionOverride]:
        """Insert or replace all rows in one transaction, or raise and write nothing."""
        ...

    def delete_selections(self, document_id: int, kind: EntityKind) -> int: ...

    def get_share_link(self, token: str) -> ShareLinkRecord | None: ...

    def increment_view_count(self, share_link_id: int, viewed_at: datetime) -> None: ...

    def get_contact_profile(self, user_id: int) -> ContactProfile | None: ...

    def get_profile_snapshot(self, user_id: int) -> ProfileSnapshot: ...


def require_document(
    store: ProfileStore, document_id: int, user_id: int | None = None
) -> DocumentRecord:
    """Fetch a document, scoped to ``user_id`` when one is given.

    A document owned by someone else is reported exactly like a missing one.

    Raises:
        NotFoundError: If the document does not exist or is not owned by the user.
    """
    document = store.get_document(document_id)
    if document is None or (user_id is not None and document.user_id != user_id):
        raise NotFoundError("CV document", document_id)
    return document
