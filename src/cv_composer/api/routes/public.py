"""Public, unauthenticated access to shared CVs."""

from __future__ import annotations

from typing import Annotated

from fastapi import APIRouter, Depends, Path

from cv_composer.api.dependencies import get_profile_store
from cv_composer.api.errors import to_http_exception
from cv_composer.api.schemas.share_links import PublicCVResponse
from cv_composer.core import CompositionError, ProfileStore, open_shared_cv

router = APIRouter(prefix="/public", tags=["public"])


@router.get("/cv/{token}", response_model=PublicCVResponse)
def view_shared_cv(
    token: Annotated[str, Path(description="Share token")],
    store: Annotated[ProfileStore, Depends(get_profile_store)],
) -> PublicCVResponse:
    """The redacted CV behind a share link. Every successful call counts a view.

    Unknown tokens are 404, inactive or expired links 410.
    """
    try:
        public_cv = open_shared_cv(store, token)
    except CompositionError as exc:
        raise to_http_exception(exc) from exc
    return PublicCVResponse.from_public_cv(public_cv)
