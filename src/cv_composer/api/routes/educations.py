"""Education routes for the API."""

from __future__ import annotations

from typing import Annotated

from fastapi import APIRouter, Depends, HTTPException, Path, status

from cv_composer.api.dependencies import UsernamePath, get_current_username, verify_user_access
from cv_composer.api.schemas.educations import (
    EducationCreateRequest,
    EducationResponse,
    EducationUpdateRequest,
)
from cv_composer.services.education import (
    create_education,
    delete_education,
    get_education,
    get_educations,
    update_education,
)

router = APIRouter(prefix="/users", tags=["educations"])

_INVALID_DATES_DETAIL = (
    "Check that dates are valid and end_date is not set when is_current is True."
)


@router.get(
    "/{username}/educations",
    response_model=list[EducationResponse],
)
def list_educations(
    username: UsernamePath,
    current_username: Annotated[str, Depends(get_current_username)],
) -> list[EducationResponse]:
    """List all education entries for a user in default CV order."""
    verify_user_access(current_username, username)

    results = get_educations(username)
    if results is None:
        return []

    return [EducationResponse(**r) for r in results]


@router.get(
    "/{username}/educations/{education_id}",
    response_model=EducationResponse,
)
def get_education_by_id(
    username: UsernamePath,
    education_id: Annotated[int, Path(description="Education ID")],
    current_username: Annotated[str, Depends(get_current_username)],
) -> EducationResponse:
    """Get a specific education entry by ID."""
    verify_user_access(current_username, username)

    result = get_education(username, education_id)
    if not result:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail=f"Education {education_id} not found",
        )

    return EducationResponse(**result)


@router.post(
    "/{username}/educations",
    response_model=EducationResponse,
    status_code=status.HTTP_201_CREATED,
)
def create_education_endpoint(
    username: UsernamePath,
    data: EducationCreateRequest,
    current_username: Annotated[str, Depends(get_current_username)],
) -> EducationResponse:
    """Create a new education entry."""
    verify_user_access(current_username, username)

    result = create_education(username, data.model_dump())
    if not result:
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail=f"Failed to create education. {_INVALID_DATES_DETAIL}",
        )

    return EducationResponse(**result)


@router.patch(
    "/{username}/educations/{education_id}",
    response_model=EducationResponse,
)
def update_education_endpoint(
    username: UsernamePath,
    education_id: Annotated[int, Path(description="Education ID")],
    data: EducationUpdateRequest,
    current_username: Annotated[str, Depends(get_current_username)],
) -> EducationResponse:
    """Update an existing education entry. Only provided fields are updated."""
    verify_user_access(current_username, username)

    result = update_education(username, education_id, data.model_dump(exclude_unset=True))
    if not result:
        if not get_education(username, education_id):
            raise HTTPException(
                status_code=status.HTTP_404_NOT_FOUND,
                detail=f"Education {education_id} not found",
            )
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail=f"Failed to update education. {_INVALID_DATES_DETAIL}",
        )

    return EducationResponse(**result)


@router.delete(
    "/{username}/educations/{education_id}",
    status_code=status.HTTP_204_NO_CONTENT,
)
def delete_education_endpoint(
    username: UsernamePath,
    education_id: Annotated[int, Path(description="Education ID")],
    current_username: Annotated[str, Depends(get_current_username)],
) -> None:
    """Delete an education entry and its overrides on every CV."""
    verify_user_access(current_username, username)

    if not delete_education(username, education_id):
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail=f"Education {education_id} not found",
        )
