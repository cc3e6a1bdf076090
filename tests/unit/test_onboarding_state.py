"""Tests for the onboarding state deriver and step clamping."""

import pytest

from job_assistant.services.onboarding_state import (
    FIRST_STEP,
    LAST_STEP,
    OnboardingState,
    ProgressSignals,
    clamp_step,
    default_state,
    derive_state,
)

_USER = "user_1"


def _signals(
    profile_completed: bool = False,
    resume_uploaded: bool = False,
    subscription_active: bool = False,
    profile_skipped: bool | None = None,
) -> ProgressSignals:
    return ProgressSignals(
        profile_completed=profile_completed,
        resume_uploaded=resume_uploaded,
        subscription_active=subscription_active,
        profile_skipped=profile_skipped,
    )


class TestDefaultState:
    """Tests for the step-1 default."""

    def test_default_state_starts_at_first_step(self):
        """New accounts start at step 1, incomplete, not skipped."""
        state = default_state(_USER)
        assert state == OnboardingState(
            user_id=_USER,
            current_step=FIRST_STEP,
            is_completed=False,
            profile_skipped=False,
        )
        assert state.updated_at is None


class TestClampStep:
    """Tests for clamp_step()."""

    @pytest.mark.parametrize(
        ("requested", "expected"),
        [(-3, 1), (0, 1), (1, 1), (2, 2), (3, 3), (4, 4), (5, 4), (99, 4)],
    )
    def test_clamps_into_wizard_range(self, requested, expected):
        """Out-of-range steps are pulled to the nearest bound."""
        assert clamp_step(requested) == expected


class TestDeriveState:
    """Tests for the precedence chain in derive_state()."""

    def test_everything_done_completes_at_last_step(self):
        """All three signals true -> step 4, completed."""
        state = derive_state(_USER, _signals(True, True, True))
        assert state.current_step == LAST_STEP
        assert state.is_completed is True
        assert state.profile_skipped is False

    def test_missing_subscription_stops_at_step_3(self):
        """Profile and resume done, no subscription -> step 3."""
        state = derive_state(_USER, _signals(True, True, False))
        assert (state.current_step, state.is_completed) == (3, False)

    def test_missing_resume_stops_at_step_2(self):
        """Profile done, resume missing -> step 2, even if subscribed."""
        state = derive_state(_USER, _signals(True, False, True))
        assert (state.current_step, state.is_completed) == (2, False)

    def test_incomplete_profile_returns_step_1(self):
        """Incomplete profile without skip -> step 1 regardless of other signals."""
        state = derive_state(_USER, _signals(False, True, True))
        assert (state.current_step, state.is_completed) == (1, False)
        assert state.profile_skipped is False

    def test_skipped_incomplete_profile_moves_to_step_2(self):
        """Skipping an incomplete profile -> step 2 with the skip flag set."""
        state = derive_state(_USER, _signals(False, False, False, True))
        assert state.current_step == 2
        assert state.is_completed is False
        assert state.profile_skipped is True

    def test_skip_rule_wins_over_subscription(self):
        """The skip rule applies before any other signal is considered."""
        state = derive_state(_USER, _signals(False, True, True, True))
        assert (state.current_step, state.profile_skipped) == (2, True)

    def test_skip_flag_carried_once_profile_completed(self):
        """After the profile is completed the skip flag is still reported."""
        state = derive_state(_USER, _signals(True, True, False, True))
        assert state.current_step == 3
        assert state.profile_skipped is True

    def test_skip_flag_carried_on_completion(self):
        """A completed account keeps its skip flag."""
        state = derive_state(_USER, _signals(True, True, True, True))
        assert state.is_completed is True
        assert state.profile_skipped is True

    def test_absent_skip_flag_is_false(self):
        """None for profile_skipped is treated as False."""
        state = derive_state(_USER, _signals(True, False, False, None))
        assert state.profile_skipped is False

    def test_derived_state_has_no_timestamp(self):
        """updated_at is only ever set by the database."""
        state = derive_state(_USER, _signals(True, True, True))
        assert state.updated_at is None

    def test_only_last_step_is_completed(self):
        """is_completed is true exactly when the step is 4."""
        for profile in (False, True):
            for resume in (False, True):
                for subscription in (False, True):
                    for skipped in (None, False, True):
                        state = derive_state(
                            _USER, _signals(profile, resume, subscription, skipped)
                        )
                        assert FIRST_STEP <= state.current_step <= LAST_STEP
                        assert state.is_completed == (
                            state.current_step == LAST_STEP
                        )
