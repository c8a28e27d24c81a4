"""Education model for storing user educational history.

This model stores master education entries that CV documents select from.
It has a 1:many relationship with the User model.
"""

from __future__ import annotations

from datetime import UTC, date, datetime
from typing import TYPE_CHECKING

from sqlalchemy import Boolean, CheckConstraint, Date, DateTime, ForeignKey, Integer, String, Text
from sqlalchemy.orm import Mapped, mapped_column, relationship, validates

from cv_composer.data.db import Base

if TYPE_CHECKING:
    from cv_composer.data.models.user import User


class Education(Base):
    """Education entry in a user's master profile.

    Attributes:
        id: Auto-incrementing primary key.
        user_id: Foreign key to users table.
        institution: Name of school/university.
        degree: Degree type (e.g., Bachelor of Science, Master of Arts).
        field_of_study: Major/field of study.
        grade: Final grade as written on the diploma (e.g. "1.3", "3.8 GPA").
        start_date: Start date of education.
        end_date: End date of education (None if current).
        description: Thesis, focus areas or other free text.
        is_current: Whether the user is currently enrolled.
        display_order: Default position in CVs (lower first); None falls back to date.
        updated_at: UTC timestamp when the record was last updated.
    """

    __tablename__ = "Education"
    __table_args__ = (
        CheckConstraint("display_order >= 0", name="ck_education_display_order_positive"),
    )

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    user_id: Mapped[int] = mapped_column(
        Integer,
        ForeignKey("users.id", ondelete="CASCADE"),
        nullable=False,
        index=True,
    )

    institution: Mapped[str] = mapped_column(String(255), nullable=False)
    degree: Mapped[str] = mapped_column(String(255), nullable=False)
    field_of_study: Mapped[str | None] = mapped_column(String(255), nullable=True)
    grade: Mapped[str | None] = mapped_column(String(64), nullable=True)
    start_date: Mapped[date | None] = mapped_column(Date, nullable=True)
    end_date: Mapped[date | None] = mapped_column(Date, nullable=True)
    description: Mapped[str | None] = mapped_column(Text, nullable=True)
    is_current: Mapped[bool] = mapped_column(Boolean, nullable=False, default=False)
    display_order: Mapped[int | None] = mapped_column(Integer, nullable=True)

    updated_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        nullable=False,
        default=lambda: datetime.now(UTC),
        onupdate=lambda: datetime.now(UTC),
    )

    # Relationships
    user: Mapped[User] = relationship("User", back_populates="education_entries")

    @validates("display_order")
    def validate_display_order(self, key: str, value: int | None) -> int | None:
        """Validate display_order is non-negative."""
        if value is not None and value < 0:
            raise ValueError("display_order must be non-negative")
        return value
