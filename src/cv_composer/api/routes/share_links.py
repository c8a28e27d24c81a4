"""Share link routes: owners manage the public links of their CVs."""

from __future__ import annotations

from typing import Annotated

from fastapi import APIRouter, Depends, HTTPException, Path, status

from cv_composer.api.dependencies import UsernamePath, get_current_username, verify_user_access
from cv_composer.api.schemas.share_links import (
    ShareLinkCreateRequest,
    ShareLinkResponse,
    ShareLinkUpdateRequest,
)
from cv_composer.services.cv_documents import get_cv_document
from cv_composer.services.share_links import (
    create_share_link,
    delete_share_link,
    list_share_links,
    update_share_link,
)

router = APIRouter(prefix="/users", tags=["share-links"])

LinkPath = Annotated[int, Path(description="Share link ID")]


def _require_document(username: str, document_id: int) -> None:
    if not get_cv_document(username, document_id):
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail=f"CV document {document_id} not found",
        )


@router.post(
    "/{username}/cvs/{document_id}/share-links",
    response_model=ShareLinkResponse,
    status_code=status.HTTP_201_CREATED,
)
def create_link(
    username: UsernamePath,
    document_id: Annotated[int, Path(description="CV document ID")],
    data: ShareLinkCreateRequest,
    current_username: Annotated[str, Depends(get_current_username)],
) -> ShareLinkResponse:
    """Create a public link. The default privacy level hides contact details."""
    verify_user_access(current_username, username)
    _require_document(username, document_id)

    result = create_share_link(username, document_id, data.privacy_level, data.expires_at)
    if not result:
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail="Failed to create share link",
        )
    return ShareLinkResponse(**result)


@router.get(
    "/{username}/cvs/{document_id}/share-links",
    response_model=list[ShareLinkResponse],
)
def list_links(
    username: UsernamePath,
    document_id: Annotated[int, Path(description="CV document ID")],
    current_username: Annotated[str, Depends(get_current_username)],
) -> list[ShareLinkResponse]:
    verify_user_access(current_username, username)
    _require_document(username, document_id)

    return [ShareLinkResponse(**r) for r in list_share_links(username, document_id) or []]


@router.patch("/{username}/share-links/{link_id}", response_model=ShareLinkResponse)
def update_link(
    username: UsernamePath,
    link_id: LinkPath,
    data: ShareLinkUpdateRequest,
    current_username: Annotated[str, Depends(get_current_username)],
) -> ShareLinkResponse:
    """Toggle a link, change its privacy level or expiry."""
    verify_user_access(current_username, username)

    update_data = data.model_dump(exclude_unset=True)
    if update_data.get("privacy_level") is None:
        update_data.pop("privacy_level", None)
    if update_data.get("is_active") is None:
        update_data.pop("is_active", None)

    result = update_share_link(username, link_id, update_data)
    if not result:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail=f"Share link {link_id} not found",
        )
    return ShareLinkResponse(**result)


@router.delete("/{username}/share-links/{link_id}", status_code=status.HTTP_204_NO_CONTENT)
def delete_link(
    username: UsernamePath,
    link_id: LinkPath,
    current_username: Annotated[str, Depends(get_current_username)],
) -> None:
    verify_user_access(current_username, username)

    if not delete_share_link(username, link_id):
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail=f"Share link {link_id} not found",
        )
