"""ORM models package for database tables.

This package provides SQLAlchemy ORM models representing database tables:
- User / UserProfile: account anchor and contact details
- WorkExperience, Education, SkillCategory, KeyCompetence, Project,
  Certification, Reference: master profile entities that CVs select from
- Highlight / MotivationVision: profile sections counted for completion
- CVDocument: a curated CV with its layout
- CVSelection: per-document overrides of master entities
- ShareLink: tokenized public links to a CV

All models inherit from the shared Base declarative class defined in data.db.
"""

from cv_composer.data.db import Base
from cv_composer.data.models.certification import Certification
from cv_composer.data.models.cv_document import CVDocument
from cv_composer.data.models.education import Education
from cv_composer.data.models.highlight import Highlight
from cv_composer.data.models.key_competence import KeyCompetence
from cv_composer.data.models.motivation_vision import MotivationVision
from cv_composer.data.models.project import Project
from cv_composer.data.models.reference import Reference
from cv_composer.data.models.selection import CVSelection
from cv_composer.data.models.share_link import ShareLink
from cv_composer.data.models.skill_category import SkillCategory
from cv_composer.data.models.user import User
from cv_composer.data.models.user_profile import UserProfile
from cv_composer.data.models.work_experience import WorkExperience

__all__ = [
    "Base",
    "CVDocument",
    "CVSelection",
    "Certification",
    "Education",
    "Highlight",
    "KeyCompetence",
    "MotivationVision",
    "Project",
    "Reference",
    "ShareLink",
    "SkillCategory",
    "User",
    "UserProfile",
    "WorkExperience",
]
