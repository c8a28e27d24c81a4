"""ShareLink model: a tokenized public link to one CV document."""

from __future__ import annotations

from datetime import UTC, datetime
from typing import TYPE_CHECKING

from sqlalchemy import Boolean, DateTime, ForeignKey, Integer, String
from sqlalchemy.orm import Mapped, mapped_column, relationship, validates

from cv_composer.data.db import Base

if TYPE_CHECKING:
    from cv_composer.data.models.cv_document import CVDocument


class ShareLink(Base):
    """Public link to a CV.

    Attributes:
        token: Unique, unguessable URL token.
        privacy_level: "none", "personal" or "full" (full = anonymized).
        is_active: Inactive links are refused.
        expires_at: Links are refused after this moment (None = never). Stored
            in UTC, since SQLite drops the offset of aware values.
        view_count: Approximate number of public views.
        last_viewed_at: Time of the most recent public view.
    """

    __tablename__ = "ShareLink"

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    user_id: Mapped[int] = mapped_column(
        Integer,
        ForeignKey("users.id", ondelete="CASCADE"),
        nullable=False,
        index=True,
    )
    document_id: Mapped[int] = mapped_column(
        Integer,
        ForeignKey("CVDocument.id", ondelete="CASCADE"),
        nullable=False,
        index=True,
    )

    token: Mapped[str] = mapped_column(String(64), unique=True, nullable=False, index=True)
    privacy_level: Mapped[str] = mapped_column(String(16), nullable=False, default="personal")
    is_active: Mapped[bool] = mapped_column(Boolean, nullable=False, default=True)
    expires_at: Mapped[datetime | None] = mapped_column(DateTime(timezone=True), nullable=True)
    view_count: Mapped[int] = mapped_column(Integer, nullable=False, default=0)
    last_viewed_at: Mapped[datetime | None] = mapped_column(DateTime(timezone=True), nullable=True)

    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), nullable=False, default=lambda: datetime.now(UTC)
    )
    updated_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        nullable=False,
        default=lambda: datetime.now(UTC),
        onupdate=lambda: datetime.now(UTC),
    )

    document: Mapped[CVDocument] = relationship("CVDocument", back_populates="share_links")

    @validates("expires_at")
    def validate_expires_at(self, key: str, value: datetime | None) -> datetime | None:
        """Convert aware expiry times to UTC; naive values are taken as UTC."""
        if value is not None and value.tzinfo is not None:
            return value.astimezone(UTC)
        return value
