from __future__ import annotations

from collections.abc import Sequence
from dataclasses import replace
from datetime import datetime
from pathlib import Path

import pytest
from sqlalchemy.orm import sessionmaker

import cv_composer.data.db as app_db
from cv_composer.constants import EntityKind
from cv_composer.core.records import (
    ContactProfile,
    DocumentRecord,
    HighlightEntry,
    MasterEntry,
    MotivationVisionEntry,
    ProfileSnapshot,
    SelectionOverride,
    ShareLinkRecord,
)
from cv_composer.data.db import Base, create_db_engine, init_db


class InMemoryProfileStore:
    """Dictionary-backed ``ProfileStore`` for engine tests.

    ``fail_on_row`` makes the n-th row (1-based) of the next bulk upsert
    raise, after which nothing of that batch is kept.
    """

    def __init__(self) -> None:
        self.documents: dict[int, DocumentRecord] = {}
        self.entities: dict[tuple[int, EntityKind], list[MasterEntry]] = {}
        self.selections: dict[tuple[int, EntityKind], dict[int, SelectionOverride]] = {}
        self.share_links: dict[str, ShareLinkRecord] = {}
        self.contacts: dict[int, ContactProfile] = {}
        self.highlights: dict[int, list[HighlightEntry]] = {}
        self.motivation: dict[int, MotivationVisionEntry] = {}
        self.fail_on_row: int | None = None
        self.drop_last_row = False
        self.contact_lookups = 0
        self._next_selection_id = 1

    # Fixture helpers

    def add_document(self, document_id: int = 1, user_id: int = 1, **fields) -> DocumentRecord:
        name = fields.pop("name", "CV")
        document = DocumentRecord(id=document_id, user_id=user_id, name=name, **fields)
        self.documents[document_id] = document
        return document

    def add_entries(self, *entries: MasterEntry) -> None:
        for entry in entries:
            self.entities.setdefault((entry.user_id, entry.kind), []).append(entry)

    def add_selection(
        self, document_id: int, kind: EntityKind, override: SelectionOverride
    ) -> None:
        self.selections.setdefault((document_id, kind), {})[override.master_entity_id] = override

    def add_share_link(self, token: str = "tok", document_id: int = 1, **fields) -> ShareLinkRecord:
        link = ShareLinkRecord(
            id=fields.pop("id", len(self.share_links) + 1),
            token=token,
            document_id=document_id,
            user_id=fields.pop("user_id", 1),
            privacy_level=fields.pop("privacy_level", "personal"),
            **fields,
        )
        self.share_links[token] = link
        return link

    # ProfileStore

    def get_document(self, document_id: int) -> DocumentRecord | None:
        return self.documents.get(document_id)

    def get_master_entities(self, user_id: int, kind: EntityKind) -> list[MasterEntry]:
        return list(self.entities.get((user_id, kind), []))

    def get_selections(self, document_id: int, kind: EntityKind) -> list[SelectionOverride]:
        return list(self.selections.get((document_id, kind), {}).values())

    def upsert_selections(
        self, document_id: int, kind: EntityKind, rows: Sequence[SelectionOverride]
    ) -> list[SelectionOverride]:
        staged = dict(self.selections.get((document_id, kind), {}))
        stored = []
        for number, row in enumerate(rows, start=1):
            if number == self.fail_on_row:
                raise RuntimeError("disk I/O error")
            existing = staged.get(row.master_entity_id)
            row_id = existing.id if existing is not None else self._next_selection_id
            if existing is None:
                self._next_selection_id += 1
            saved = replace(row, id=row_id)
            staged[row.master_entity_id] = saved
            stored.append(saved)
        self.selections[(document_id, kind)] = staged
        if self.drop_last_row:
            return stored[:-1]
        return stored

    def delete_selections(self, document_id: int, kind: EntityKind) -> int:
        return len(self.selections.pop((document_id, kind), {}))

    def get_share_link(self, token: str) -> ShareLinkRecord | None:
        return self.share_links.get(token)

    def increment_view_count(self, share_link_id: int, viewed_at: datetime) -> None:
        for token, link in self.share_links.items():
            if link.id == share_link_id:
                self.share_links[token] = replace(
                    link, view_count=link.view_count + 1, last_viewed_at=viewed_at
                )

    def get_contact_profile(self, user_id: int) -> ContactProfile | None:
        self.contact_lookups += 1
        return self.contacts.get(user_id)

    def get_profile_snapshot(self, user_id: int) -> ProfileSnapshot:
        def entries(kind: EntityKind) -> tuple:
            return tuple(self.entities.get((user_id, kind), []))

        return ProfileSnapshot(
            motivation_vision=self.motivation.get(user_id),
            highlights=tuple(self.highlights.get(user_id, [])),
            projects=entries(EntityKind.PROJECT),
            work_experiences=entries(EntityKind.WORK_EXPERIENCE),
            educations=entries(EntityKind.EDUCATION),
            skills=entries(EntityKind.SKILL_CATEGORY),
            key_competences=entries(EntityKind.KEY_COMPETENCE),
            certifications=entries(EntityKind.CERTIFICATION),
            references=entries(EntityKind.REFERENCE),
        )


@pytest.fixture
def store() -> InMemoryProfileStore:
    return InMemoryProfileStore()


@pytest.fixture
def tmp_db(monkeypatch: pytest.MonkeyPatch, tmp_path: Path):
    """Point the session factory at a fresh SQLite file."""
    engine = create_db_engine(f"sqlite:///{(tmp_path / 'test.db').as_posix()}")
    import cv_composer.data.models  # noqa: F401

    Base.metadata.create_all(bind=engine)
    monkeypatch.setattr(app_db, "_engine", engine)
    monkeypatch.setattr(
        app_db, "_SessionLocal", sessionmaker(bind=engine, autoflush=False, expire_on_commit=False)
    )
    yield engine
    engine.dispose()


@pytest.fixture
def api_db(monkeypatch: pytest.MonkeyPatch, tmp_path: Path) -> None:
    """Use a temporary SQLite DB for API tests."""
    db_path = tmp_path / "api.db"
    monkeypatch.setenv("DB_URL", f"sqlite:///{db_path.as_posix()}")
    app_db._engine = None
    app_db._SessionLocal = None
    init_db()
    yield
    # Dispose engine to release connections
    if app_db._engine is not None:
        app_db._engine.dispose()
        app_db._engine = None
        app_db._SessionLocal = None


@pytest.fixture(autouse=True)
def _api_db_for_api_tests(request: pytest.FixtureRequest) -> None:
    """Automatically use the api_db fixture for tests in API test files."""
    test_file_path = Path(str(request.node.fspath))
    if "api" in test_file_path.stem.lower():
        request.getfixturevalue("api_db")
