"""Profile service: read and merge-update wizard profiles.

Unlike onboarding state, profile operations do not absorb a missing
profiles table: every store error propagates to the caller.
"""

from job_assistant.repositories.store import PersistenceAdapter
from job_assistant.services.profile_record import (
    ProfilePatch,
    ProfileRecord,
    apply_profile_patch,
    default_profile,
    is_profile_completed,
)
from job_assistant.services.state_cache import InMemoryStateCache, StateCache


class ProfileService:
    """Loads and updates profiles through the cache and persistence store.

    Args:
        store: Persistence adapter; checked with is_configured() per call.
        cache: Cache owned by this instance. Defaults to an in-memory dict.
    """

    def __init__(
        self,
        store: PersistenceAdapter,
        cache: StateCache[ProfileRecord] | None = None,
    ) -> None:
        self._store = store
        self._cache: StateCache[ProfileRecord] = (
            cache if cache is not None else InMemoryStateCache()
        )

    @property
    def cache(self) -> StateCache[ProfileRecord]:
        return self._cache

    @staticmethod
    def is_completed(profile: ProfileRecord) -> bool:
        return is_profile_completed(profile)

    async def get_profile(self, user_id: str) -> ProfileRecord:
        """Return the stored profile, else the cached one, else an empty one.

        Raises:
            StoreError: For any store failure.
        """
        cached = self._cache.get(user_id)
        if not self._store.is_configured():
            return cached if cached is not None else default_profile(user_id)

        row = await self._store.get_profile(user_id)
        if row is None:
            return cached if cached is not None else default_profile(user_id)

        self._cache.set(user_id, row)
        return row

    async def upsert_profile(self, patch: ProfilePatch) -> ProfileRecord:
        """Merge a partial update into the profile and save it.

        Raises:
            StoreError: For any store failure; the cache already holds the
                merged profile when the write fails.
        """
        current = await self.get_profile(patch.user_id)
        merged = apply_profile_patch(current, patch)
        self._cache.set(patch.user_id, merged)

        if not self._store.is_configured():
            return merged

        row = await self._store.upsert_profile(merged)
        return row if row is not None else merged
