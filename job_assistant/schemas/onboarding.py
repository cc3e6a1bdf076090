"""Onboarding request/response schemas.

Wire format is camelCase (userId, currentStep, ...). Requests are validated
before the service runs: strict booleans, a strict integer step in 1-4, and
bounded user ids.
"""

from datetime import datetime
from typing import Annotated

from pydantic import (
    BaseModel,
    ConfigDict,
    EmailStr,
    Field,
    StrictBool,
    StrictInt,
    StringConstraints,
    field_validator,
)
from pydantic.alias_generators import to_camel

from job_assistant.services.onboarding_state import (
    FIRST_STEP,
    LAST_STEP,
    OnboardingState,
    ProgressSignals,
)

MAX_USER_ID_LENGTH = 128
MAX_EMAIL_LENGTH = 254

UserId = Annotated[
    str,
    StringConstraints(strict=True, min_length=1, max_length=MAX_USER_ID_LENGTH),
]
"""Opaque account id from the auth provider."""

_CAMEL_CONFIG = ConfigDict(
    extra="forbid",
    alias_generator=to_camel,
    populate_by_name=True,
)


# =============================================================================
# Requests
# =============================================================================


class InitializeOnboardingRequest(BaseModel):
    """Request body for POST /onboarding/initialize."""

    model_config = _CAMEL_CONFIG

    user_id: UserId


class SyncOnboardingRequest(BaseModel):
    """Request body for POST /onboarding/sync.

    Attributes:
        user_id: Account id.
        profile_completed: Profile completeness signal.
        resume_uploaded: Resume upload signal.
        subscription_active: Active subscription signal.
        profile_skipped: Skip flag; omitted keeps the stored flag.
    """

    model_config = _CAMEL_CONFIG

    user_id: UserId
    profile_completed: StrictBool
    resume_uploaded: StrictBool
    subscription_active: StrictBool
    profile_skipped: StrictBool | None = None

    def to_signals(self) -> ProgressSignals:
        return ProgressSignals(
            profile_completed=self.profile_completed,
            resume_uploaded=self.resume_uploaded,
            subscription_active=self.subscription_active,
            profile_skipped=self.profile_skipped,
        )


class UpdateOnboardingStepRequest(BaseModel):
    """Request body for POST /onboarding/step.

    Attributes:
        user_id: Account id.
        current_step: Step to move to (1-4).
        profile_skipped: New skip flag; omitted keeps the stored flag.
        is_completed: Explicit completion flag; omitted infers it from the step.
        email: Email recorded with the completion record.
    """

    model_config = _CAMEL_CONFIG

    user_id: UserId
    current_step: StrictInt = Field(ge=FIRST_STEP, le=LAST_STEP)
    profile_skipped: StrictBool | None = None
    is_completed: StrictBool | None = None
    email: EmailStr | None = None

    @field_validator("email", mode="before")
    @classmethod
    def check_email_length(cls, value: object) -> object:
        if isinstance(value, str) and len(value) > MAX_EMAIL_LENGTH:
            msg = f"email must be at most {MAX_EMAIL_LENGTH} characters"
            raise ValueError(msg)
        return value


# =============================================================================
# Responses
# =============================================================================


class OnboardingStateResponse(BaseModel):
    """Onboarding state as returned by every /onboarding endpoint."""

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)

    user_id: str
    current_step: int
    is_completed: bool
    profile_skipped: bool
    updated_at: datetime | None = None

    @classmethod
    def from_state(cls, state: OnboardingState) -> "OnboardingStateResponse":
        return cls(
            user_id=state.user_id,
            current_step=state.current_step,
            is_completed=state.is_completed,
            profile_skipped=state.profile_skipped,
            updated_at=state.updated_at,
        )
