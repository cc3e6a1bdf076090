"""Shared dependencies for API endpoints.

Services are created once per application by create_app() and stored on
app.state, so every app instance (and every test app) owns its caches.
"""

from typing import Annotated

from fastapi import Depends, Path, Request

from job_assistant.core.errors import APIError
from job_assistant.schemas.onboarding import MAX_USER_ID_LENGTH
from job_assistant.services.onboarding_service import OnboardingService
from job_assistant.services.profile_service import ProfileService


def get_onboarding_service(request: Request) -> OnboardingService:
    """Return the app's OnboardingService."""
    return request.app.state.onboarding_service


def get_profile_service(request: Request) -> ProfileService:
    """Return the app's ProfileService."""
    return request.app.state.profile_service


def get_path_user_id(
    user_id: Annotated[str, Path(min_length=1, max_length=MAX_USER_ID_LENGTH)],
) -> str:
    """Return the account id from the URL path.

    Raises:
        APIError: 400 VALIDATION_ERROR when the id is only whitespace
            (e.g., "/onboarding/%20").
    """
    if not user_id.strip():
        raise APIError(
            "VALIDATION_ERROR",
            "Request validation failed",
            status_code=400,
            details=[
                {
                    "loc": ["path", "user_id"],
                    "msg": "userId must not be blank",
                    "type": "value_error",
                }
            ],
        )
    return user_id


OnboardingServiceDep = Annotated[OnboardingService, Depends(get_onboarding_service)]
ProfileServiceDep = Annotated[ProfileService, Depends(get_profile_service)]
PathUserId = Annotated[str, Depends(get_path_user_id)]
