"""MotivationVision model: the singleton "motivation & vision" profile section."""

from __future__ import annotations

from datetime import UTC, datetime
from typing import TYPE_CHECKING

from sqlalchemy import DateTime, ForeignKey, Integer, Text
from sqlalchemy.orm import Mapped, mapped_column, relationship

from cv_composer.data.db import Base

if TYPE_CHECKING:
    from cv_composer.data.models.user import User


class MotivationVision(Base):
    """One row per user; every text field is optional."""

    __tablename__ = "MotivationVision"

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    user_id: Mapped[int] = mapped_column(
        Integer,
        ForeignKey("users.id", ondelete="CASCADE"),
        nullable=False,
        unique=True,
        index=True,
    )

    vision: Mapped[str | None] = mapped_column(Text, nullable=True)
    mission: Mapped[str | None] = mapped_column(Text, nullable=True)
    career_goals: Mapped[str | None] = mapped_column(Text, nullable=True)
    purpose: Mapped[str | None] = mapped_column(Text, nullable=True)
    what_drives_you: Mapped[str | None] = mapped_column(Text, nullable=True)
    why_this_field: Mapped[str | None] = mapped_column(Text, nullable=True)
    passions: Mapped[str | None] = mapped_column(Text, nullable=True)  # JSON array

    updated_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        nullable=False,
        default=lambda: datetime.now(UTC),
        onupdate=lambda: datetime.now(UTC),
    )

    user: Mapped[User] = relationship("User", back_populates="motivation_vision")
