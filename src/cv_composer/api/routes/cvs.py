"""CV document routes: documents, layouts and per-section selections."""

from __future__ import annotations

from typing import Annotated

from fastapi import APIRouter, Depends, HTTPException, Path, Query, status

from cv_composer.api.dependencies import (
    UsernamePath,
    get_current_username,
    get_profile_store,
    verify_user_access,
)
from cv_composer.api.errors import to_http_exception
from cv_composer.api.schemas.cvs import (
    CVCreateRequest,
    CVResponse,
    CVUpdateRequest,
    LayoutResponse,
    LayoutUpdateRequest,
    ResolvedDocumentResponse,
    ResolvedItemResponse,
    SelectionResponse,
    SelectionsUpdateRequest,
)
from cv_composer.constants import EntityKind
from cv_composer.core import (
    CompositionError,
    ProfileStore,
    compose_document,
    reset_selections,
    resolve_section,
    upsert_selections,
)
from cv_composer.services.cv_documents import (
    create_cv_document,
    delete_cv_document,
    get_cv_document,
    get_cv_layout,
    list_cv_documents,
    set_cv_layout,
    update_cv_document,
)

router = APIRouter(prefix="/users", tags=["cvs"])

DocumentPath = Annotated[int, Path(description="CV document ID")]
StoreDep = Annotated[ProfileStore, Depends(get_profile_store)]


def _document_not_found(document_id: int) -> HTTPException:
    return HTTPException(
        status_code=status.HTTP_404_NOT_FOUND,
        detail=f"CV document {document_id} not found",
    )


@router.get("/{username}/cvs", response_model=list[CVResponse])
def list_cvs(
    username: UsernamePath,
    current_username: Annotated[str, Depends(get_current_username)],
    include_archived: Annotated[bool, Query(description="Include archived documents")] = False,
) -> list[CVResponse]:
    verify_user_access(current_username, username)

    results = list_cv_documents(username, include_archived=include_archived)
    return [CVResponse(**r) for r in results or []]


@router.post("/{username}/cvs", response_model=CVResponse, status_code=status.HTTP_201_CREATED)
def create_cv(
    username: UsernamePath,
    data: CVCreateRequest,
    current_username: Annotated[str, Depends(get_current_username)],
) -> CVResponse:
    """Create a CV document, optionally with a custom layout."""
    verify_user_access(current_username, username)

    try:
        result = create_cv_document(username, data.model_dump())
    except CompositionError as exc:
        raise to_http_exception(exc) from exc
    if not result:
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail="Failed to create CV document",
        )
    return CVResponse(**result)


@router.get("/{username}/cvs/{document_id}", response_model=ResolvedDocumentResponse)
def get_cv(
    username: UsernamePath,
    document_id: DocumentPath,
    current_username: Annotated[str, Depends(get_current_username)],
    store: StoreDep,
) -> ResolvedDocumentResponse:
    """The fully resolved document: layout plus every placed section."""
    user_id = verify_user_access(current_username, username)

    try:
        resolved = compose_document(store, document_id, user_id=user_id)
    except CompositionError as exc:
        raise to_http_exception(exc) from exc
    return ResolvedDocumentResponse.from_resolved(resolved)


@router.patch("/{username}/cvs/{document_id}", response_model=CVResponse)
def update_cv(
    username: UsernamePath,
    document_id: DocumentPath,
    data: CVUpdateRequest,
    current_username: Annotated[str, Depends(get_current_username)],
) -> CVResponse:
    """Rename, archive or switch the layout mode of a document."""
    verify_user_access(current_username, username)

    try:
        result = update_cv_document(username, document_id, data.model_dump(exclude_unset=True))
    except CompositionError as exc:
        raise to_http_exception(exc) from exc
    if not result:
        raise _document_not_found(document_id)
    return CVResponse(**result)


@router.delete("/{username}/cvs/{document_id}", status_code=status.HTTP_204_NO_CONTENT)
def delete_cv(
    username: UsernamePath,
    document_id: DocumentPath,
    current_username: Annotated[str, Depends(get_current_username)],
) -> None:
    verify_user_access(current_username, username)

    if not delete_cv_document(username, document_id):
        raise _document_not_found(document_id)


@router.get("/{username}/cvs/{document_id}/layout", response_model=LayoutResponse)
def get_layout(
    username: UsernamePath,
    document_id: DocumentPath,
    current_username: Annotated[str, Depends(get_current_username)],
) -> LayoutResponse:
    verify_user_access(current_username, username)

    try:
        result = get_cv_layout(username, document_id)
    except CompositionError as exc:
        raise to_http_exception(exc) from exc
    if result is None:
        raise _document_not_found(document_id)
    return LayoutResponse(**result)


@router.put("/{username}/cvs/{document_id}/layout", response_model=LayoutResponse)
def put_layout(
    username: UsernamePath,
    document_id: DocumentPath,
    data: LayoutUpdateRequest,
    current_username: Annotated[str, Depends(get_current_username)],
) -> LayoutResponse:
    """Replace the page layout; a null layout restores the default."""
    verify_user_access(current_username, username)

    try:
        result = set_cv_layout(username, document_id, data.layout_config)
    except CompositionError as exc:
        raise to_http_exception(exc) from exc
    if result is None:
        raise _document_not_found(document_id)
    return LayoutResponse(**result)


@router.get(
    "/{username}/cvs/{document_id}/sections/{kind}",
    response_model=list[ResolvedItemResponse],
)
def get_section(
    username: UsernamePath,
    document_id: DocumentPath,
    kind: EntityKind,
    current_username: Annotated[str, Depends(get_current_username)],
    store: StoreDep,
    include_deselected: Annotated[
        bool, Query(description="Also return deselected items, for the editor")
    ] = False,
) -> list[ResolvedItemResponse]:
    """One section of the document, resolved against the master profile."""
    user_id = verify_user_access(current_username, username)

    try:
        items = resolve_section(
            store, document_id, kind, user_id=user_id, include_deselected=include_deselected
        )
    except CompositionError as exc:
        raise to_http_exception(exc) from exc
    return [ResolvedItemResponse.from_item(item) for item in items]


@router.put(
    "/{username}/cvs/{document_id}/sections/{kind}",
    response_model=list[SelectionResponse],
)
def put_section_selections(
    username: UsernamePath,
    document_id: DocumentPath,
    kind: EntityKind,
    data: SelectionsUpdateRequest,
    current_username: Annotated[str, Depends(get_current_username)],
    store: StoreDep,
) -> list[SelectionResponse]:
    """Save override rows for a section. The whole batch succeeds or none of it."""
    user_id = verify_user_access(current_username, username)

    try:
        committed = upsert_selections(
            store,
            document_id,
            kind,
            [selection.to_override() for selection in data.selections],
            user_id=user_id,
        )
    except CompositionError as exc:
        raise to_http_exception(exc) from exc
    return [SelectionResponse.from_override(row) for row in committed]


@router.delete("/{username}/cvs/{document_id}/sections/{kind}")
def reset_section_selections(
    username: UsernamePath,
    document_id: DocumentPath,
    kind: EntityKind,
    current_username: Annotated[str, Depends(get_current_username)],
    store: StoreDep,
) -> dict[str, int]:
    """Drop every override of the section so it falls back to the master profile."""
    user_id = verify_user_access(current_username, username)

    try:
        removed = reset_selections(store, document_id, kind, user_id=user_id)
    except CompositionError as exc:
        raise to_http_exception(exc) from exc
    return {"removed": removed}
