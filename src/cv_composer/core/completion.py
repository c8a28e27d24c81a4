"""Profile completion calculator.

Completeness is computed from the master profile alone. The section list
and the total are fixed constants, so the overall percentage never depends
on which sections happen to have data.
"""

from __future__ import annotations

import math
from dataclasses import dataclass

from cv_composer.constants import (
    MOTIVATION_VISION_KEY_FIELDS,
    PROFILE_SECTIONS,
    TOTAL_PROFILE_SECTIONS,
    ProfileSection,
)
from cv_composer.core.records import MotivationVisionEntry, ProfileSnapshot

__all__ = [
    "ProfileCompletion",
    "SectionCompletion",
    "calculate_completion",
    "is_motivation_vision_complete",
]


@dataclass(frozen=True)
class SectionCompletion:
    key: ProfileSection
    count: int
    is_complete: bool
    percentage: float  # share of the overall total this section contributes


@dataclass(frozen=True)
class ProfileCompletion:
    sections: tuple[SectionCompletion, ...]
    completed_sections: int
    total_sections: int
    percentage: int

    def by_key(self) -> dict[ProfileSection, SectionCompletion]:
        return {section.key: section for section in self.sections}


def is_motivation_vision_complete(entry: MotivationVisionEntry | None) -> bool:
    """True when any of vision, mission or career goals has non-blank text."""
    if entry is None:
        return False
    return any((getattr(entry, name) or "").strip() for name in MOTIVATION_VISION_KEY_FIELDS)


def _section_count(snapshot: ProfileSnapshot, section: ProfileSection) -> int:
    if section is ProfileSection.MOTIVATION_VISION:
        return 1 if is_motivation_vision_complete(snapshot.motivation_vision) else 0
    if section is ProfileSection.HIGHLIGHTS:
        return len(snapshot.highlights)
    if section is ProfileSection.PROJECTS:
        return len(snapshot.projects)
    if section is ProfileSection.WORK_EXPERIENCES:
        return len(snapshot.work_experiences)
    if section is ProfileSection.EDUCATIONS:
        return len(snapshot.educations)
    if section is ProfileSection.SKILLS:
        return len(snapshot.skills)
    if section is ProfileSection.KEY_COMPETENCES:
        return len(snapshot.key_competences)
    if section is ProfileSection.CERTIFICATIONS:
        return len(snapshot.certifications)
    if section is ProfileSection.REFERENCES:
        return len(snapshot.references)
    raise ValueError(f"No completion rule for section {section!r}")


def calculate_completion(snapshot: ProfileSnapshot) -> ProfileCompletion:
    """Compute per-section and overall completion for one master profile.

    Every section is complete once it has at least one entry, except
    motivation & vision which needs one of its key fields filled in.
    The overall percentage is rounded half up.
    """
    share = 100 / TOTAL_PROFILE_SECTIONS
    sections = []
    for key in PROFILE_SECTIONS:
        count = _section_count(snapshot, key)
        is_complete = count >= 1
        sections.append(
            SectionCompletion(
                key=key,
                count=count,
                is_complete=is_complete,
                percentage=share if is_complete else 0.0,
            )
        )

    completed = sum(1 for section in sections if section.is_complete)
    return ProfileCompletion(
        sections=tuple(sections),
        completed_sections=completed,
        total_sections=TOTAL_PROFILE_SECTIONS,
        percentage=math.floor(100 * completed / TOTAL_PROFILE_SECTIONS + 0.5),
    )
