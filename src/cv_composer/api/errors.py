"""Translation of engine exceptions into HTTP errors."""

from __future__ import annotations

from fastapi import HTTPException, status
from sqlalchemy.exc import IntegrityError

from cv_composer.core import (
    CompositionError,
    LayoutConfigError,
    NotFoundError,
    SelectionValidationError,
    SelectionWriteError,
    ShareLinkUnavailableError,
)


def to_http_exception(exc: CompositionError) -> HTTPException:
    """Map an engine exception to the status code the API reports for it."""
    if isinstance(exc, NotFoundError):
        code = status.HTTP_404_NOT_FOUND
    elif isinstance(exc, LayoutConfigError | SelectionValidationError):
        code = status.HTTP_422_UNPROCESSABLE_ENTITY
    elif isinstance(exc, SelectionWriteError):
        # A constraint violation is a conflict; anything else is our fault.
        if isinstance(exc.__cause__, IntegrityError):
            code = status.HTTP_409_CONFLICT
        else:
            code = status.HTTP_500_INTERNAL_SERVER_ERROR
    elif isinstance(exc, ShareLinkUnavailableError):
        code = status.HTTP_410_GONE
    else:
        code = status.HTTP_500_INTERNAL_SERVER_ERROR
    return HTTPException(status_code=code, detail=str(exc))
