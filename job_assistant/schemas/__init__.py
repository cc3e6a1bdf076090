"""Pydantic request/response schemas for API endpoints."""

from job_assistant.schemas.onboarding import (
    InitializeOnboardingRequest,
    OnboardingStateResponse,
    SyncOnboardingRequest,
    UpdateOnboardingStepRequest,
)
from job_assistant.schemas.profile import ProfileResponse, UpsertProfileRequest

__all__ = [
    # Onboarding
    "InitializeOnboardingRequest",
    "OnboardingStateResponse",
    "SyncOnboardingRequest",
    "UpdateOnboardingStepRequest",
    # Profile
    "ProfileResponse",
    "UpsertProfileRequest",
]
