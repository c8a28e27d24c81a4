"""Route handlers for the API."""

from cv_composer.api.routes import (
    cvs,
    educations,
    health,
    profile,
    public,
    share_links,
    work_experiences,
)

__all__ = [
    "health",
    "work_experiences",
    "educations",
    "profile",
    "cvs",
    "share_links",
    "public",
]
