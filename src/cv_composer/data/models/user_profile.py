"""UserProfile model for storing user contact and personal information.

This model stores CV-related personal data separately from authentication.
It has a 1:1 relationship with the User model. These are the only fields
the public share view can ever disclose, and only those the disclosure
filter explicitly passes through.
"""

from __future__ import annotations

from datetime import UTC, datetime
from typing import TYPE_CHECKING

from sqlalchemy import DateTime, ForeignKey, Integer, String
from sqlalchemy.orm import Mapped, mapped_column, relationship

from cv_composer.data.db import Base

if TYPE_CHECKING:
    from cv_composer.data.models.user import User


class UserProfile(Base):
    """User profile with contact and personal information.

    Attributes:
        id: Auto-incrementing primary key.
        user_id: Foreign key to users table (unique, 1:1 relationship).
        first_name: User's first name.
        last_name: User's last name.
        email: Contact email address.
        phone: Phone number.
        location: Free-form location (e.g. "Berlin, Germany").
        linkedin_url: LinkedIn profile URL.
        github_url: GitHub profile URL.
        website_url: Personal website URL.
        updated_at: UTC timestamp when the profile was last updated.
    """

    __tablename__ = "UserProfile"

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    user_id: Mapped[int] = mapped_column(
        Integer,
        ForeignKey("users.id", ondelete="CASCADE"),
        nullable=False,
        unique=True,
        index=True,
    )

    first_name: Mapped[str | None] = mapped_column(String(128), nullable=True)
    last_name: Mapped[str | None] = mapped_column(String(128), nullable=True)
    email: Mapped[str | None] = mapped_column(String(255), nullable=True)
    phone: Mapped[str | None] = mapped_column(String(32), nullable=True)
    location: Mapped[str | None] = mapped_column(String(255), nullable=True)
    linkedin_url: Mapped[str | None] = mapped_column(String(255), nullable=True)
    github_url: Mapped[str | None] = mapped_column(String(255), nullable=True)
    website_url: Mapped[str | None] = mapped_column(String(255), nullable=True)

    updated_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        nullable=False,
        default=lambda: datetime.now(UTC),
        onupdate=lambda: datetime.now(UTC),
    )

    # Relationships
    user: Mapped[User] = relationship("User", back_populates="profile")
