"""Fixed section list used by the profile completion calculator.

The total is versioned on purpose: adding a section type means adding it
here and bumping ``COMPLETION_RULES_VERSION``.
"""

from __future__ import annotations

from enum import StrEnum

COMPLETION_RULES_VERSION = 1


class ProfileSection(StrEnum):
    MOTIVATION_VISION = "motivationVision"
    HIGHLIGHTS = "highlights"
    PROJECTS = "projects"
    WORK_EXPERIENCES = "workExperiences"
    EDUCATIONS = "educations"
    SKILLS = "skills"
    KEY_COMPETENCES = "keyCompetences"
    CERTIFICATIONS = "certifications"
    REFERENCES = "references"


PROFILE_SECTIONS: tuple[ProfileSection, ...] = (
    ProfileSection.MOTIVATION_VISION,
    ProfileSection.HIGHLIGHTS,
    ProfileSection.PROJECTS,
    ProfileSection.WORK_EXPERIENCES,
    ProfileSection.EDUCATIONS,
    ProfileSection.SKILLS,
    ProfileSection.KEY_COMPETENCES,
    ProfileSection.CERTIFICATIONS,
    ProfileSection.REFERENCES,
)

TOTAL_PROFILE_SECTIONS = 9

# Motivation & vision counts as complete when any of these is filled in.
MOTIVATION_VISION_KEY_FIELDS = ("vision", "mission", "career_goals")
