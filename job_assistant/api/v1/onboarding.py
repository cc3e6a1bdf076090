"""Onboarding API router.

Endpoints:
- GET /onboarding/{user_id} - Current onboarding state.
- POST /onboarding/initialize - Ensure a stored state row exists.
- POST /onboarding/sync - Derive state from progress signals.
- POST /onboarding/step - Move to an explicit wizard step.
"""

from fastapi import APIRouter, Request

from job_assistant.api.deps import OnboardingServiceDep, PathUserId
from job_assistant.core.config import settings
from job_assistant.core.rate_limiting import limiter
from job_assistant.schemas.onboarding import (
    InitializeOnboardingRequest,
    OnboardingStateResponse,
    SyncOnboardingRequest,
    UpdateOnboardingStepRequest,
)

router = APIRouter()


@router.post("/initialize", response_model_exclude_none=True)
@limiter.limit(settings.rate_limit_writes)
async def initialize_onboarding(
    request: Request,  # noqa: ARG001 - required by @limiter.limit()
    body: InitializeOnboardingRequest,
    service: OnboardingServiceDep,
) -> OnboardingStateResponse:
    """Ensure an onboarding row exists for the account and return its state."""
    state = await service.initialize(body.user_id)
    return OnboardingStateResponse.from_state(state)


@router.post("/sync", response_model_exclude_none=True)
@limiter.limit(settings.rate_limit_writes)
async def sync_onboarding(
    request: Request,  # noqa: ARG001 - required by @limiter.limit()
    body: SyncOnboardingRequest,
    service: OnboardingServiceDep,
) -> OnboardingStateResponse:
    """Recompute onboarding state from profile/resume/subscription signals."""
    state = await service.sync_by_signals(body.user_id, body.to_signals())
    return OnboardingStateResponse.from_state(state)


@router.post("/step", response_model_exclude_none=True)
@limiter.limit(settings.rate_limit_writes)
async def update_onboarding_step(
    request: Request,  # noqa: ARG001 - required by @limiter.limit()
    body: UpdateOnboardingStepRequest,
    service: OnboardingServiceDep,
) -> OnboardingStateResponse:
    """Move the account to a wizard step.

    isCompleted, when sent, is stored as-is; otherwise it follows the step.
    """
    state = await service.update_step(
        body.user_id,
        body.current_step,
        profile_skipped=body.profile_skipped,
        is_completed=body.is_completed,
        email=str(body.email) if body.email is not None else None,
    )
    return OnboardingStateResponse.from_state(state)


@router.get("/{user_id}", response_model_exclude_none=True)
async def get_onboarding_state(
    user_id: PathUserId,
    service: OnboardingServiceDep,
) -> OnboardingStateResponse:
    """Return the account's onboarding state (step 1 default for new users)."""
    state = await service.get_state(user_id)
    return OnboardingStateResponse.from_state(state)
