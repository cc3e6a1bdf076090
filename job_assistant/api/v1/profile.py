"""Profile API router.

Endpoints:
- GET /profile/{user_id} - Profile plus isCompleted.
- POST /profile - Merge a partial profile update; returns profile plus isCompleted.
"""

from fastapi import APIRouter, Request

from job_assistant.api.deps import PathUserId, ProfileServiceDep
from job_assistant.core.config import settings
from job_assistant.core.rate_limiting import limiter
from job_assistant.schemas.profile import ProfileResponse, UpsertProfileRequest

router = APIRouter()


@router.get("/{user_id}", response_model_exclude_none=True)
async def get_profile(
    user_id: PathUserId,
    service: ProfileServiceDep,
) -> ProfileResponse:
    """Return the account's profile (empty profile for new users)."""
    profile = await service.get_profile(user_id)
    return ProfileResponse.from_record(
        profile, is_completed=service.is_completed(profile)
    )


@router.post("", response_model_exclude_none=True)
@limiter.limit(settings.rate_limit_writes)
async def upsert_profile(
    request: Request,  # noqa: ARG001 - required by @limiter.limit()
    body: UpsertProfileRequest,
    service: ProfileServiceDep,
) -> ProfileResponse:
    """Merge the supplied fields into the account's profile.

    Omitted fields keep their stored value; employmentTypes, when sent,
    replaces the stored list.
    """
    profile = await service.upsert_profile(body.to_patch())
    return ProfileResponse.from_record(
        profile, is_completed=service.is_completed(profile)
    )
