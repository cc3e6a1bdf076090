"""Onboarding state service: reads, signal sync, initialization, step updates.

Every write goes to the service's cache first and then to persistence (when
configured). A missing onboarding_states table is not fatal: the operation
logs a warning and answers from the cache. Any other persistence failure
propagates to the caller unchanged; the cache keeps the new state either way.

Step updates are caller-driven: any step 1-4 may be requested in any order.
"""

from dataclasses import replace

import structlog

from job_assistant.repositories.errors import StoreError
from job_assistant.repositories.store import PersistenceAdapter
from job_assistant.services.onboarding_state import (
    LAST_STEP,
    OnboardingState,
    ProgressSignals,
    clamp_step,
    default_state,
    derive_state,
)
from job_assistant.services.state_cache import InMemoryStateCache, StateCache

logger = structlog.get_logger()


class OnboardingService:
    """Computes and persists onboarding progress per account.

    Args:
        store: Persistence adapter; checked with is_configured() per call.
        cache: Cache owned by this instance. Defaults to an in-memory dict.
    """

    def __init__(
        self,
        store: PersistenceAdapter,
        cache: StateCache[OnboardingState] | None = None,
    ) -> None:
        self._store = store
        self._cache: StateCache[OnboardingState] = (
            cache if cache is not None else InMemoryStateCache()
        )

    @property
    def cache(self) -> StateCache[OnboardingState]:
        return self._cache

    def _cached_or_default(self, user_id: str) -> OnboardingState:
        cached = self._cache.get(user_id)
        return cached if cached is not None else default_state(user_id)

    async def _persist(
        self, state: OnboardingState, operation: str
    ) -> tuple[OnboardingState, bool]:
        """Upsert state, answering from memory if the table is missing.

        Returns:
            (result, saved): the stored row when the store returns one, else
            state; saved is False when the write was skipped for a missing
            table.

        Raises:
            StoreError: For any failure other than a missing table.
        """
        try:
            row = await self._store.upsert_onboarding_state(state)
        except StoreError as exc:
            if not exc.is_table_missing:
                raise
            logger.warning(
                "Onboarding table missing; state kept in memory only",
                operation=operation,
                table=exc.table,
                user_id=state.user_id,
            )
            return state, False
        return (row if row is not None else state), True

    async def get_state(self, user_id: str) -> OnboardingState:
        """Return the current state for an account.

        A stored row wins over the cache and refreshes it. With no row, no
        store, or a missing table, the cached state (or the step-1 default)
        is returned; a synthesized default is never written to the cache.

        Raises:
            StoreError: For store failures other than a missing table.
        """
        if not self._store.is_configured():
            return self._cached_or_default(user_id)

        try:
            row = await self._store.get_onboarding_state(user_id)
        except StoreError as exc:
            if not exc.is_table_missing:
                raise
            logger.warning(
                "Onboarding table missing; falling back to in-memory state",
                operation="get_state",
                table=exc.table,
                user_id=user_id,
            )
            return self._cached_or_default(user_id)

        if row is None:
            return self._cached_or_default(user_id)

        self._cache.set(user_id, row)
        return row

    async def sync_by_signals(
        self, user_id: str, signals: ProgressSignals
    ) -> OnboardingState:
        """Derive state from progress signals and save it.

        The skip flag is only changed when the signals carry one; otherwise
        the cached flag is carried into the derivation.

        Raises:
            StoreError: For store failures other than a missing table.
        """
        existing = self._cached_or_default(user_id)
        if signals.profile_skipped is None:
            signals = replace(signals, profile_skipped=existing.profile_skipped)

        derived = derive_state(user_id, signals)
        self._cache.set(user_id, derived)

        if not self._store.is_configured():
            return derived

        result, _ = await self._persist(derived, "sync_by_signals")
        return result

    async def initialize(self, user_id: str) -> OnboardingState:
        """Ensure a stored row exists for the account without changing it.

        Raises:
            StoreError: For store failures other than a missing table.
        """
        existing = await self.get_state(user_id)

        if not self._store.is_configured():
            self._cache.set(user_id, existing)
            return existing

        result, _ = await self._persist(existing, "initialize")
        return result

    async def update_step(
        self,
        user_id: str,
        current_step: int,
        *,
        profile_skipped: bool | None = None,
        is_completed: bool | None = None,
        email: str | None = None,
    ) -> OnboardingState:
        """Move an account to a wizard step.

        The step is clamped into 1-4. When is_completed is not supplied it is
        inferred from the step (step 4 completes, anything lower does not).
        A supplied is_completed is always honored, even "step 4 but not
        completed".

        On a successful save of a completed step-4 state the completion is
        also recorded for the account (re-recorded on every such update).

        Args:
            user_id: Account id.
            current_step: Requested step.
            profile_skipped: New skip flag, or None to keep the current one.
            is_completed: Explicit completion flag, or None to infer it.
            email: Email stored with the completion record.

        Raises:
            StoreError: For store failures other than a missing onboarding
                table, including failures of the completion write.
        """
        current = await self.get_state(user_id)
        step = clamp_step(current_step)

        if is_completed is not None:
            completed = is_completed
        else:
            completed = step == LAST_STEP

        if profile_skipped is None:
            profile_skipped = current.profile_skipped

        next_state = OnboardingState(
            user_id=user_id,
            current_step=step,
            is_completed=completed,
            profile_skipped=profile_skipped,
            updated_at=current.updated_at,
        )
        self._cache.set(user_id, next_state)

        if not self._store.is_configured():
            return next_state

        result, saved = await self._persist(next_state, "update_step")

        if saved and next_state.is_completed and next_state.current_step == LAST_STEP:
            await self._store.record_onboarding_completion(user_id, email)
            logger.info("Onboarding completion recorded", user_id=user_id)

        return result
