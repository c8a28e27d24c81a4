"""Work experience routes for the API."""

from __future__ import annotations

from typing import Annotated

from fastapi import APIRouter, Depends, HTTPException, Path, status

from cv_composer.api.dependencies import UsernamePath, get_current_username, verify_user_access
from cv_composer.api.schemas.work_experiences import (
    WorkExperienceCreateRequest,
    WorkExperienceResponse,
    WorkExperienceUpdateRequest,
)
from cv_composer.services.work_experience import (
    create_work_experience,
    delete_work_experience,
    get_work_experience,
    get_work_experiences,
    update_work_experience,
)

router = APIRouter(prefix="/users", tags=["work-experiences"])

_INVALID_DATES_DETAIL = (
    "Check that dates are valid and end_date is not set when is_current is True."
)


@router.get(
    "/{username}/work-experiences",
    response_model=list[WorkExperienceResponse],
)
def list_work_experiences(
    username: UsernamePath,
    current_username: Annotated[str, Depends(get_current_username)],
) -> list[WorkExperienceResponse]:
    """List all work experiences for a user in default CV order."""
    verify_user_access(current_username, username)

    results = get_work_experiences(username)
    if results is None:
        return []

    return [WorkExperienceResponse(**r) for r in results]


@router.get(
    "/{username}/work-experiences/{work_exp_id}",
    response_model=WorkExperienceResponse,
)
def get_work_experience_by_id(
    username: UsernamePath,
    work_exp_id: Annotated[int, Path(description="Work experience ID")],
    current_username: Annotated[str, Depends(get_current_username)],
) -> WorkExperienceResponse:
    """Get a specific work experience by ID."""
    verify_user_access(current_username, username)

    result = get_work_experience(username, work_exp_id)
    if not result:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail=f"Work experience {work_exp_id} not found",
        )

    return WorkExperienceResponse(**result)


@router.post(
    "/{username}/work-experiences",
    response_model=WorkExperienceResponse,
    status_code=status.HTTP_201_CREATED,
)
def create_work_experience_endpoint(
    username: UsernamePath,
    data: WorkExperienceCreateRequest,
    current_username: Annotated[str, Depends(get_current_username)],
) -> WorkExperienceResponse:
    """Create a new work experience entry."""
    verify_user_access(current_username, username)

    result = create_work_experience(username, data.model_dump())
    if not result:
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail=f"Failed to create work experience. {_INVALID_DATES_DETAIL}",
        )

    return WorkExperienceResponse(**result)


@router.patch(
    "/{username}/work-experiences/{work_exp_id}",
    response_model=WorkExperienceResponse,
)
def update_work_experience_endpoint(
    username: UsernamePath,
    work_exp_id: Annotated[int, Path(description="Work experience ID")],
    data: WorkExperienceUpdateRequest,
    current_username: Annotated[str, Depends(get_current_username)],
) -> WorkExperienceResponse:
    """Update an existing work experience entry. Only provided fields are updated."""
    verify_user_access(current_username, username)

    result = update_work_experience(username, work_exp_id, data.model_dump(exclude_unset=True))
    if not result:
        if not get_work_experience(username, work_exp_id):
            raise HTTPException(
                status_code=status.HTTP_404_NOT_FOUND,
                detail=f"Work experience {work_exp_id} not found",
            )
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail=f"Failed to update work experience. {_INVALID_DATES_DETAIL}",
        )

    return WorkExperienceResponse(**result)


@router.delete(
    "/{username}/work-experiences/{work_exp_id}",
    status_code=status.HTTP_204_NO_CONTENT,
)
def delete_work_experience_endpoint(
    username: UsernamePath,
    work_exp_id: Annotated[int, Path(description="Work experience ID")],
    current_username: Annotated[str, Depends(get_current_username)],
) -> None:
    """Delete a work experience entry and its overrides on every CV."""
    verify_user_access(current_username, username)

    if not delete_work_experience(username, work_exp_id):
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail=f"Work experience {work_exp_id} not found",
        )
