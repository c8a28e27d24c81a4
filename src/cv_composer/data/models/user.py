"""User account model.

Authentication is handled outside this package; the users table only
anchors ownership of profile data, CV documents and share links.
"""

from __future__ import annotations

from datetime import UTC, datetime
from typing import TYPE_CHECKING

from sqlalchemy import DateTime, Integer, String
from sqlalchemy.orm import Mapped, mapped_column, relationship

from cv_composer.data.db import Base

if TYPE_CHECKING:
    from cv_composer.data.models.certification import Certification
    from cv_composer.data.models.cv_document import CVDocument
    from cv_composer.data.models.education import Education
    from cv_composer.data.models.highlight import Highlight
    from cv_composer.data.models.key_competence import KeyCompetence
    from cv_composer.data.models.motivation_vision import MotivationVision
    from cv_composer.data.models.project import Project
    from cv_composer.data.models.reference import Reference
    from cv_composer.data.models.skill_category import SkillCategory
    from cv_composer.data.models.user_profile import UserProfile
    from cv_composer.data.models.work_experience import WorkExperience


class User(Base):
    """Application user account.

    Attributes:
        id: Auto-incrementing primary key.
        username: Unique handle supplied by the authentication layer.
        created_at: UTC timestamp when the account was created.
    """

    __tablename__ = "users"

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    username: Mapped[str] = mapped_column(String(128), unique=True, nullable=False, index=True)
    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), nullable=False, default=lambda: datetime.now(UTC)
    )

    profile: Mapped[UserProfile | None] = relationship(
        "UserProfile", back_populates="user", uselist=False, cascade="all, delete-orphan"
    )
    motivation_vision: Mapped[MotivationVision | None] = relationship(
        "MotivationVision", back_populates="user", uselist=False, cascade="all, delete-orphan"
    )
    work_experiences: Mapped[list[WorkExperience]] = relationship(
        "WorkExperience", back_populates="user", cascade="all, delete-orphan"
    )
    education_entries: Mapped[list[Education]] = relationship(
        "Education", back_populates="user", cascade="all, delete-orphan"
    )
    skill_categories: Mapped[list[SkillCategory]] = relationship(
        "SkillCategory", back_populates="user", cascade="all, delete-orphan"
    )
    key_competences: Mapped[list[KeyCompetence]] = relationship(
        "KeyCompetence", back_populates="user", cascade="all, delete-orphan"
    )
    projects: Mapped[list[Project]] = relationship(
        "Project", back_populates="user", cascade="all, delete-orphan"
    )
    certifications: Mapped[list[Certification]] = relationship(
        "Certification", back_populates="user", cascade="all, delete-orphan"
    )
    references: Mapped[list[Reference]] = relationship(
        "Reference", back_populates="user", cascade="all, delete-orphan"
    )
    highlights: Mapped[list[Highlight]] = relationship(
        "Highlight", back_populates="user", cascade="all, delete-orphan"
    )
    cv_documents: Mapped[list[CVDocument]] = relationship(
        "CVDocument", back_populates="user", cascade="all, delete-orphan"
    )
