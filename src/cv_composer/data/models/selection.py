"""CVSelection model: per-document override of one master profile entity.

One table serves every entity kind. ``master_entity_id`` deliberately has
no foreign key: it points into a different table per kind, and a row left
behind by a deleted entity is ignored at resolution time.
"""

from __future__ import annotations

from datetime import UTC, datetime
from typing import TYPE_CHECKING

from sqlalchemy import Boolean, DateTime, ForeignKey, Integer, String, Text, UniqueConstraint
from sqlalchemy.orm import Mapped, mapped_column, relationship

from cv_composer.data.db import Base

if TYPE_CHECKING:
    from cv_composer.data.models.cv_document import CVDocument


class CVSelection(Base):
    """Selection and editorial override of a master entity in one CV.

    Attributes:
        document_id: CV document the override belongs to.
        kind: Entity kind (see ``EntityKind``).
        master_entity_id: ID of the entity in its kind's table.
        is_selected: False removes the entity from the CV.
        is_favorite: Marks the entity as a favorite in the editor.
        display_order: Position override; None keeps the entity's own order.
        description_override: Replaces the entity's description in this CV.
        selected_indices: JSON array of bullet/skill indices; None keeps all.
        display_mode: Work experience only: simple, with_description or custom.
    """

    __tablename__ = "CVSelection"
    __table_args__ = (
        UniqueConstraint(
            "document_id", "kind", "master_entity_id", name="uq_cvselection_document_entity"
        ),
    )

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    document_id: Mapped[int] = mapped_column(
        Integer,
        ForeignKey("CVDocument.id", ondelete="CASCADE"),
        nullable=False,
        index=True,
    )
    kind: Mapped[str] = mapped_column(String(32), nullable=False)
    master_entity_id: Mapped[int] = mapped_column(Integer, nullable=False)

    is_selected: Mapped[bool] = mapped_column(Boolean, nullable=False, default=True)
    is_favorite: Mapped[bool] = mapped_column(Boolean, nullable=False, default=False)
    display_order: Mapped[int | None] = mapped_column(Integer, nullable=True)
    description_override: Mapped[str | None] = mapped_column(Text, nullable=True)
    selected_indices: Mapped[str | None] = mapped_column(Text, nullable=True)  # JSON array
    display_mode: Mapped[str | None] = mapped_column(String(32), nullable=True)

    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), nullable=False, default=lambda: datetime.now(UTC)
    )
    updated_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        nullable=False,
        default=lambda: datetime.now(UTC),
        onupdate=lambda: datetime.now(UTC),
    )

    document: Mapped[CVDocument] = relationship("CVDocument", back_populates="selections")
