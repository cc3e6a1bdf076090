"""Onboarding state types and the signal-driven state deriver.

The wizard has four steps:
1. Target role
2. Profile details (skippable)
3. Optional links
4. Employment preferences

Completion is gated by three signals supplied by collaborators: profile
completeness (profile service), resume upload (resume service), and an
active subscription (billing). derive_state() turns those signals into
the canonical {step, completed, skipped} tuple.
"""

from dataclasses import dataclass
from datetime import datetime

FIRST_STEP = 1
LAST_STEP = 4


@dataclass(frozen=True)
class OnboardingState:
    """Wizard progress for one account.

    Attributes:
        user_id: Opaque account id from the auth provider.
        current_step: Wizard step, always within FIRST_STEP..LAST_STEP.
        is_completed: True once the user has finished onboarding.
        profile_skipped: Sticky flag set when profile details were skipped.
        updated_at: Last write time, only ever set by the database.
    """

    user_id: str
    current_step: int = FIRST_STEP
    is_completed: bool = False
    profile_skipped: bool = False
    updated_at: datetime | None = None


@dataclass(frozen=True)
class ProgressSignals:
    """Boolean progress facts reported by collaborators.

    profile_skipped is None when the caller did not send it; the sync
    operation then carries the previously cached flag forward.
    """

    profile_completed: bool
    resume_uploaded: bool
    subscription_active: bool
    profile_skipped: bool | None = None


def default_state(user_id: str) -> OnboardingState:
    """State for an account with no cached or stored progress."""
    return OnboardingState(user_id=user_id)


def clamp_step(value: int) -> int:
    """Clamp a requested step into FIRST_STEP..LAST_STEP."""
    if value <= FIRST_STEP:
        return FIRST_STEP
    if value >= LAST_STEP:
        return LAST_STEP
    return value


def derive_state(user_id: str, signals: ProgressSignals) -> OnboardingState:
    """Compute the canonical onboarding state from progress signals.

    Rules are a strict precedence chain; the first match wins:

    1. Profile skipped and not completed -> step 2, skipped.
    2. Profile not completed -> step 1, skip flag reset to False.
    3. Resume not uploaded -> step 2.
    4. Subscription not active -> step 3.
    5. Otherwise -> step 4, completed.

    Rules 3-5 carry the incoming skip flag (False when absent).

    Args:
        user_id: Account the state belongs to.
        signals: Progress signals for the account.

    Returns:
        Derived OnboardingState (never carries updated_at).
    """
    skipped = bool(signals.profile_skipped)

    if skipped and not signals.profile_completed:
        return OnboardingState(
            user_id=user_id, current_step=2, is_completed=False, profile_skipped=True
        )
    if not signals.profile_completed:
        return OnboardingState(
            user_id=user_id, current_step=1, is_completed=False, profile_skipped=False
        )
    if not signals.resume_uploaded:
        return OnboardingState(
            user_id=user_id, current_step=2, is_completed=False, profile_skipped=skipped
        )
    if not signals.subscription_active:
        return OnboardingState(
            user_id=user_id, current_step=3, is_completed=False, profile_skipped=skipped
        )
    return OnboardingState(
        user_id=user_id,
        current_step=LAST_STEP,
        is_completed=True,
        profile_skipped=skipped,
    )
