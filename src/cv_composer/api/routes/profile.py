"""Master profile routes beyond work experience and education."""

from __future__ import annotations

from typing import Annotated, Any

from fastapi import APIRouter, Body, Depends, HTTPException, Path, status
from pydantic import ValidationError

from cv_composer.api.dependencies import UsernamePath, get_current_username, verify_user_access
from cv_composer.api.schemas.profile import (
    PROFILE_ENTRY_SCHEMAS,
    ContactProfileRequest,
    ContactProfileResponse,
    MotivationVisionRequest,
    MotivationVisionResponse,
    ProfileCompletionResponse,
    SectionCompletionResponse,
)
from cv_composer.services.completion import get_profile_completion
from cv_composer.services.profile_entries import (
    PROFILE_ENTRY_KINDS,
    create_profile_entry,
    delete_profile_entry,
    get_motivation_vision,
    list_profile_entries,
    upsert_motivation_vision,
)
from cv_composer.services.user_profile import get_user_profile, upsert_user_profile

router = APIRouter(prefix="/users", tags=["profile"])

KindPath = Annotated[
    str, Path(description=f"One of: {', '.join(PROFILE_ENTRY_KINDS)}")
]


def _check_kind(kind: str) -> None:
    if kind not in PROFILE_ENTRY_KINDS:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail=f"Unknown profile section '{kind}'",
        )


@router.get("/{username}/profile/completion", response_model=ProfileCompletionResponse)
def get_completion(
    username: UsernamePath,
    current_username: Annotated[str, Depends(get_current_username)],
) -> ProfileCompletionResponse:
    """Completion of the master profile across its nine sections."""
    verify_user_access(current_username, username)

    completion = get_profile_completion(username)
    if completion is None:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND, detail=f"User '{username}' not found"
        )
    return ProfileCompletionResponse(
        sections=[
            SectionCompletionResponse(
                key=s.key, count=s.count, is_complete=s.is_complete, percentage=s.percentage
            )
            for s in completion.sections
        ],
        completed_sections=completion.completed_sections,
        total_sections=completion.total_sections,
        percentage=completion.percentage,
    )


@router.get("/{username}/profile/contact", response_model=ContactProfileResponse)
def get_contact(
    username: UsernamePath,
    current_username: Annotated[str, Depends(get_current_username)],
) -> ContactProfileResponse:
    verify_user_access(current_username, username)

    result = get_user_profile(username)
    if not result:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND, detail="Contact profile not set up yet"
        )
    return ContactProfileResponse(**result)


@router.put("/{username}/profile/contact", response_model=ContactProfileResponse)
def put_contact(
    username: UsernamePath,
    data: ContactProfileRequest,
    current_username: Annotated[str, Depends(get_current_username)],
) -> ContactProfileResponse:
    """Create or update contact details. Only provided fields are written."""
    verify_user_access(current_username, username)

    result = upsert_user_profile(username, data.model_dump(exclude_unset=True))
    if not result:
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail="Failed to save contact profile",
        )
    return ContactProfileResponse(**result)


@router.get("/{username}/profile/motivation-vision", response_model=MotivationVisionResponse)
def get_motivation(
    username: UsernamePath,
    current_username: Annotated[str, Depends(get_current_username)],
) -> MotivationVisionResponse:
    verify_user_access(current_username, username)

    result = get_motivation_vision(username)
    if not result:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND, detail="Motivation & vision not set up yet"
        )
    return MotivationVisionResponse(**result)


@router.put("/{username}/profile/motivation-vision", response_model=MotivationVisionResponse)
def put_motivation(
    username: UsernamePath,
    data: MotivationVisionRequest,
    current_username: Annotated[str, Depends(get_current_username)],
) -> MotivationVisionResponse:
    verify_user_access(current_username, username)

    result = upsert_motivation_vision(username, data.model_dump(exclude_unset=True))
    if not result:
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail="Failed to save motivation & vision",
        )
    return MotivationVisionResponse(**result)


@router.get("/{username}/profile/{kind}")
def list_entries(
    username: UsernamePath,
    kind: KindPath,
    current_username: Annotated[str, Depends(get_current_username)],
) -> list[dict[str, Any]]:
    """List the user's entries of one profile section."""
    verify_user_access(current_username, username)
    _check_kind(kind)

    return list_profile_entries(username, kind) or []


@router.post("/{username}/profile/{kind}", status_code=status.HTTP_201_CREATED)
def create_entry(
    username: UsernamePath,
    kind: KindPath,
    body: Annotated[dict[str, Any], Body()],
    current_username: Annotated[str, Depends(get_current_username)],
) -> dict[str, Any]:
    """Create an entry; the body is validated against the section's schema."""
    verify_user_access(current_username, username)
    _check_kind(kind)

    try:
        data = PROFILE_ENTRY_SCHEMAS[kind].model_validate(body)
    except ValidationError as exc:
        raise HTTPException(
            status_code=status.HTTP_422_UNPROCESSABLE_ENTITY,
            detail=exc.errors(include_url=False, include_context=False),
        ) from exc

    result = create_profile_entry(username, kind, data.model_dump(mode="python"))
    if not result:
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST, detail=f"Failed to create {kind} entry"
        )
    return result


@router.delete("/{username}/profile/{kind}/{entry_id}", status_code=status.HTTP_204_NO_CONTENT)
def delete_entry(
    username: UsernamePath,
    kind: KindPath,
    entry_id: Annotated[int, Path(description="Entry ID")],
    current_username: Annotated[str, Depends(get_current_username)],
) -> None:
    """Delete an entry and its overrides on every CV."""
    verify_user_access(current_username, username)
    _check_kind(kind)

    if not delete_profile_entry(username, kind, entry_id):
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND, detail=f"{kind} entry {entry_id} not found"
        )
