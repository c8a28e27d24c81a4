"""SQLAlchemy implementation of the engine's persistence collaborator.

Every method opens its own transactional session and returns immutable
records, never ORM instances, so callers cannot lazy-load or mutate rows
outside the session.
"""

from __future__ import annotations

import json
import logging
from collections.abc import Callable, Sequence
from contextlib import AbstractContextManager
from datetime import datetime
from typing import Any

from sqlalchemy.orm import Session

from cv_composer.constants import DisplayMode, EntityKind, LayoutMode
from cv_composer.core.exceptions import LayoutConfigError
from cv_composer.core.records import (
    CertificationEntry,
    ContactProfile,
    DocumentRecord,
    EducationEntry,
    HighlightEntry,
    KeyCompetenceEntry,
    MasterEntry,
    MotivationVisionEntry,
    ProfileSnapshot,
    ProjectEntry,
    ReferenceEntry,
    SelectionOverride,
    ShareLinkRecord,
    SkillCategoryEntry,
    WorkExperienceEntry,
)
from cv_composer.data.db import get_session
from cv_composer.data.models import (
    Certification,
    CVDocument,
    CVSelection,
    Education,
    Highlight,
    KeyCompetence,
    MotivationVision,
    Project,
    Reference,
    ShareLink,
    SkillCategory,
    UserProfile,
    WorkExperience,
)
from cv_composer.utils.json_fields import dump_list, load_indices, load_text_list

logger = logging.getLogger(__name__)

__all__ = ["ENTITY_MODELS", "SqlProfileStore", "to_entry"]


def _work_experience_entry(row: WorkExperience) -> WorkExperienceEntry:
    return WorkExperienceEntry(
        id=row.id,
        user_id=row.user_id,
        display_order=row.display_order,
        company=row.company,
        title=row.title,
        location=row.location,
        start_date=row.start_date,
        end_date=row.end_date,
        is_current=row.is_current,
        description=row.description,
        bullets=load_text_list(row.bullets),
    )


def _education_entry(row: Education) -> EducationEntry:
    return EducationEntry(
        id=row.id,
        user_id=row.user_id,
        display_order=row.display_order,
        institution=row.institution,
        degree=row.degree,
        field_of_study=row.field_of_study,
        grade=row.grade,
        start_date=row.start_date,
        end_date=row.end_date,
        is_current=row.is_current,
        description=row.description,
    )


def _skill_category_entry(row: SkillCategory) -> SkillCategoryEntry:
    return SkillCategoryEntry(
        id=row.id,
        user_id=row.user_id,
        display_order=row.display_order,
        category=row.category,
        skills=load_text_list(row.skills),
    )


def _key_competence_entry(row: KeyCompetence) -> KeyCompetenceEntry:
    return KeyCompetenceEntry(
        id=row.id,
        user_id=row.user_id,
        display_order=row.display_order,
        title=row.title,
        description=row.description,
    )


def _project_entry(row: Project) -> ProjectEntry:
    return ProjectEntry(
        id=row.id,
        user_id=row.user_id,
        display_order=row.display_order,
        name=row.name,
        role=row.role,
        description=row.description,
        outcome=row.outcome,
        technologies=load_text_list(row.technologies),
        url=row.url,
        start_date=row.start_date,
        end_date=row.end_date,
        is_current=row.is_current,
    )


def _certification_entry(row: Certification) -> CertificationEntry:
    return CertificationEntry(
        id=row.id,
        user_id=row.user_id,
        display_order=row.display_order,
        name=row.name,
        issuer=row.issuer,
        issued_on=row.issued_on,
        expiry_date=row.expiry_date,
        credential_id=row.credential_id,
        url=row.url,
    )


def _reference_entry(row: Reference) -> ReferenceEntry:
    return ReferenceEntry(
        id=row.id,
        user_id=row.user_id,
        display_order=row.display_order,
        name=row.name,
        title=row.title,
        company=row.company,
        relationship=row.relationship_to_user,
        email=row.email,
        phone=row.phone,
        quote=row.quote,
    )


# ORM model and record converter for each master entity kind.
ENTITY_MODELS: dict[EntityKind, tuple[type, Callable[[Any], MasterEntry]]] = {
    EntityKind.WORK_EXPERIENCE: (WorkExperience, _work_experience_entry),
    EntityKind.EDUCATION: (Education, _education_entry),
    EntityKind.SKILL_CATEGORY: (SkillCategory, _skill_category_entry),
    EntityKind.KEY_COMPETENCE: (KeyCompetence, _key_competence_entry),
    EntityKind.PROJECT: (Project, _project_entry),
    EntityKind.CERTIFICATION: (Certification, _certification_entry),
    EntityKind.REFERENCE: (Reference, _reference_entry),
}


def to_entry(kind: EntityKind, row: Any) -> MasterEntry:
    """Convert an ORM row of ``kind`` to its immutable record."""
    _, convert = ENTITY_MODELS[kind]
    return convert(row)


def _selection_record(row: CVSelection) -> SelectionOverride:
    return SelectionOverride(
        id=row.id,
        master_entity_id=row.master_entity_id,
        is_selected=row.is_selected,
        is_favorite=row.is_favorite,
        display_order=row.display_order,
        description_override=row.description_override,
        selected_indices=load_indices(row.selected_indices),
        display_mode=DisplayMode(row.display_mode) if row.display_mode else None,
    )


def _apply_selection(row: CVSelection, override: SelectionOverride) -> None:
    """Overwrite every override field of ``row``; nothing is merged."""
    row.is_selected = override.is_selected
    row.is_favorite = override.is_favorite
    row.display_order = override.display_order
    row.description_override = override.description_override
    row.selected_indices = dump_list(override.selected_indices)
    row.display_mode = str(override.display_mode) if override.display_mode else None


def _document_record(row: CVDocument) -> DocumentRecord:
    try:
        layout_mode = LayoutMode(row.layout_mode)
    except ValueError:
        raise LayoutConfigError(f"Unknown layout mode {row.layout_mode!r}") from None

    layout_config = None
    if row.layout_config is not None:
        try:
            layout_config = json.loads(row.layout_config)
        except json.JSONDecodeError as exc:
            raise LayoutConfigError(f"Stored layout of document {row.id} is not JSON") from exc

    return DocumentRecord(
        id=row.id,
        user_id=row.user_id,
        name=row.name,
        language=row.language,
        layout_mode=layout_mode,
        layout_config=layout_config,
    )


def _share_link_record(row: ShareLink) -> ShareLinkRecord:
    return ShareLinkRecord(
        id=row.id,
        token=row.token,
        document_id=row.document_id,
        user_id=row.user_id,
        privacy_level=row.privacy_level,
        is_active=row.is_active,
        expires_at=row.expires_at,
        view_count=row.view_count,
        last_viewed_at=row.last_viewed_at,
    )


class SqlProfileStore:
    """``ProfileStore`` backed by the application database.

    Args:
        session_scope: Factory for a transactional session context manager;
            defaults to ``data.db.get_session``.
    """

    def __init__(
        self, session_scope: Callable[[], AbstractContextManager[Session]] = get_session
    ) -> None:
        self._session_scope = session_scope

    def get_document(self, document_id: int) -> DocumentRecord | None:
        with self._session_scope() as session:
            row = session.get(CVDocument, document_id)
            return _document_record(row) if row else None

    def get_master_entities(self, user_id: int, kind: EntityKind) -> list[MasterEntry]:
        model, convert = ENTITY_MODELS[kind]
        with self._session_scope() as session:
            rows = session.query(model).filter(model.user_id == user_id).order_by(model.id).all()
            return [convert(row) for row in rows]

    def get_selections(self, document_id: int, kind: EntityKind) -> list[SelectionOverride]:
        with self._session_scope() as session:
            rows = (
                session.query(CVSelection)
                .filter(CVSelection.document_id == document_id, CVSelection.kind == str(kind))
                .order_by(CVSelection.id)
                .all()
            )
            return [_selection_record(row) for row in rows]

    def upsert_selections(
        self, document_id: int, kind: EntityKind, rows: Sequence[SelectionOverride]
    ) -> list[SelectionOverride]:
        with self._session_scope() as session:
            stored: list[CVSelection] = []
            for override in rows:
                row = (
                    session.query(CVSelection)
                    .filter(
                        CVSelection.document_id == document_id,
                        CVSelection.kind == str(kind),
                        CVSelection.master_entity_id == override.master_entity_id,
                    )
                    .first()
                )
                if row is None:
                    row = CVSelection(
                        document_id=document_id,
                        kind=str(kind),
                        master_entity_id=override.master_entity_id,
                    )
                    session.add(row)
                _apply_selection(row, override)
                stored.append(row)

            session.flush()
            logger.debug(
                "Upserted %d %s selection(s) for document %s", len(stored), kind, document_id
            )
            return [_selection_record(row) for row in stored]

    def delete_selections(self, document_id: int, kind: EntityKind) -> int:
        with self._session_scope() as session:
            return (
                session.query(CVSelection)
                .filter(CVSelection.document_id == document_id, CVSelection.kind == str(kind))
                .delete(synchronize_session=False)
            )

    def get_share_link(self, token: str) -> ShareLinkRecord | None:
        with self._session_scope() as session:
            row = session.query(ShareLink).filter(ShareLink.token == token).first()
            return _share_link_record(row) if row else None

    def increment_view_count(self, share_link_id: int, viewed_at: datetime) -> None:
        with self._session_scope() as session:
            # Single UPDATE so concurrent views do not overwrite each other.
            session.query(ShareLink).filter(ShareLink.id == share_link_id).update(
                {
                    ShareLink.view_count: ShareLink.view_count + 1,
                    ShareLink.last_viewed_at: viewed_at,
                },
                synchronize_session=False,
            )

    def get_contact_profile(self, user_id: int) -> ContactProfile | None:
        with self._session_scope() as session:
            row = session.query(UserProfile).filter(UserProfile.user_id == user_id).first()
            if row is None:
                return None
            return ContactProfile(
                user_id=row.user_id,
                first_name=row.first_name,
                last_name=row.last_name,
                email=row.email,
                phone=row.phone,
                location=row.location,
                linkedin_url=row.linkedin_url,
                github_url=row.github_url,
                website_url=row.website_url,
            )

    def get_profile_snapshot(self, user_id: int) -> ProfileSnapshot:
        entries = {kind: tuple(self.get_master_entities(user_id, kind)) for kind in EntityKind}
        with self._session_scope() as session:
            highlights = (
                session.query(Highlight)
                .filter(Highlight.user_id == user_id)
                .order_by(Highlight.id)
                .all()
            )
            motivation = (
                session.query(MotivationVision).filter(MotivationVision.user_id == user_id).first()
            )
            highlight_entries = tuple(
                HighlightEntry(
                    id=row.id,
                    user_id=row.user_id,
                    title=row.title,
                    highlight_type=row.highlight_type,
                    description=row.description,
                    metric=row.metric,
                    display_order=row.display_order,
                )
                for row in highlights
            )
            motivation_entry = None
            if motivation is not None:
                motivation_entry = MotivationVisionEntry(
                    user_id=motivation.user_id,
                    vision=motivation.vision,
                    mission=motivation.mission,
                    career_goals=motivation.career_goals,
                    purpose=motivation.purpose,
                    what_drives_you=motivation.what_drives_you,
                    why_this_field=motivation.why_this_field,
                    passions=load_text_list(motivation.passions),
                )

        return ProfileSnapshot(
            motivation_vision=motivation_entry,
            highlights=highlight_entries,
            projects=entries[EntityKind.PROJECT],
            work_experiences=entries[EntityKind.WORK_EXPERIENCE],
            educations=entries[EntityKind.EDUCATION],
            skills=entries[EntityKind.SKILL_CATEGORY],
            key_competences=entries[EntityKind.KEY_COMPETENCE],
            certifications=entries[EntityKind.CERTIFICATION],
            references=entries[EntityKind.REFERENCE],
        )
