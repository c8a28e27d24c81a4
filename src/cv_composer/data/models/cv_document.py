"""CVDocument model: one curated CV built from the master profile.

The document stores only presentation choices. Content comes from the
master profile, narrowed and reordered by CVSelection rows.
"""

from __future__ import annotations

from datetime import UTC, datetime
from typing import TYPE_CHECKING

from sqlalchemy import Boolean, DateTime, ForeignKey, Integer, String, Text
from sqlalchemy.orm import Mapped, mapped_column, relationship

from cv_composer.data.db import Base

if TYPE_CHECKING:
    from cv_composer.data.models.selection import CVSelection
    from cv_composer.data.models.share_link import ShareLink
    from cv_composer.data.models.user import User


class CVDocument(Base):
    """A CV document.

    Attributes:
        id: Auto-incrementing primary key.
        user_id: Owner of the document and of the master profile it draws on.
        name: Document title shown in the dashboard.
        language: Content language code.
        layout_mode: "single-column" or "two-column"; picks the default layout.
        layout_config: JSON layout (mode + pages), None to use the default.
        is_archived: Hidden from the dashboard but kept for share links.
    """

    __tablename__ = "CVDocument"

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    user_id: Mapped[int] = mapped_column(
        Integer,
        ForeignKey("users.id", ondelete="CASCADE"),
        nullable=False,
        index=True,
    )

    name: Mapped[str] = mapped_column(String(255), nullable=False, default="My CV")
    language: Mapped[str] = mapped_column(String(8), nullable=False, default="en")
    layout_mode: Mapped[str] = mapped_column(String(16), nullable=False, default="single-column")
    layout_config: Mapped[str | None] = mapped_column(Text, nullable=True)  # JSON object
    is_archived: Mapped[bool] = mapped_column(Boolean, nullable=False, default=False)

    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), nullable=False, default=lambda: datetime.now(UTC)
    )
    updated_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        nullable=False,
        default=lambda: datetime.now(UTC),
        onupdate=lambda: datetime.now(UTC),
    )

    # Relationships
    user: Mapped[User] = relationship("User", back_populates="cv_documents")
    selections: Mapped[list[CVSelection]] = relationship(
        "CVSelection", back_populates="document", cascade="all, delete-orphan"
    )
    share_links: Mapped[list[ShareLink]] = relationship(
        "ShareLink", back_populates="document", cascade="all, delete-orphan"
    )
