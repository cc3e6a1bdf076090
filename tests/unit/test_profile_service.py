"""Tests for ProfileService."""

import pytest

from job_assistant.repositories.errors import StoreError, StoreErrorKind
from job_assistant.services.profile_record import ProfilePatch, ProfileRecord
from job_assistant.services.profile_service import ProfileService
from tests.conftest import TEST_USER_ID, FakeStore


@pytest.fixture
def service(store: FakeStore) -> ProfileService:
    return ProfileService(store)


@pytest.fixture
def memory_service(unconfigured_store: FakeStore) -> ProfileService:
    return ProfileService(unconfigured_store)


class TestGetProfile:
    """Tests for ProfileService.get_profile()."""

    async def test_new_user_gets_empty_profile(self, service):
        profile = await service.get_profile(TEST_USER_ID)
        assert profile == ProfileRecord(user_id=TEST_USER_ID)
        assert service.cache.get(TEST_USER_ID) is None

    async def test_stored_row_is_cached(self, service, store):
        """A stored row is returned and refreshes the cache."""
        stored = ProfileRecord(user_id=TEST_USER_ID, target_role="Engineer")
        store.profiles[TEST_USER_ID] = stored

        assert await service.get_profile(TEST_USER_ID) == stored
        assert service.cache.get(TEST_USER_ID) == stored

    async def test_absent_row_uses_cache(self, service):
        cached = ProfileRecord(user_id=TEST_USER_ID, city="London")
        service.cache.set(TEST_USER_ID, cached)
        assert await service.get_profile(TEST_USER_ID) == cached

    async def test_cache_only_mode(self, memory_service, unconfigured_store):
        """Without persistence the store is never touched."""
        await memory_service.get_profile(TEST_USER_ID)
        assert unconfigured_store.calls == []

    async def test_missing_table_propagates(self, service, store):
        """Profiles get no missing-table recovery."""
        store.fail("get_profile", StoreErrorKind.TABLE_MISSING)
        with pytest.raises(StoreError) as exc_info:
            await service.get_profile(TEST_USER_ID)
        assert exc_info.value.is_table_missing


class TestUpsertProfile:
    """Tests for ProfileService.upsert_profile()."""

    async def test_merges_and_persists(self, service, store):
        """The merged profile is stored and the stored row returned."""
        profile = await service.upsert_profile(
            ProfilePatch(
                user_id=TEST_USER_ID,
                first_name=" Ada ",
                last_name="Lovelace",
                target_role="Engineer",
            )
        )

        assert profile.name == "Ada Lovelace"
        assert profile.created_at is not None
        assert store.profiles[TEST_USER_ID] == profile
        assert service.is_completed(profile) is True

    async def test_successive_patches_accumulate(self, service):
        """Later patches keep fields set by earlier ones."""
        await service.upsert_profile(
            ProfilePatch(user_id=TEST_USER_ID, target_role="Engineer")
        )
        profile = await service.upsert_profile(
            ProfilePatch(user_id=TEST_USER_ID, employment_types=["full-time"])
        )

        assert profile.target_role == "Engineer"
        assert profile.employment_types == ("full-time",)

    async def test_created_at_is_kept(self, service):
        """Updating a stored profile keeps its creation time."""
        first = await service.upsert_profile(
            ProfilePatch(user_id=TEST_USER_ID, city="Paris")
        )
        second = await service.upsert_profile(
            ProfilePatch(user_id=TEST_USER_ID, city="London")
        )
        assert second.created_at == first.created_at

    async def test_cache_only_mode(self, memory_service, unconfigured_store):
        """Without persistence the merged profile lives in the cache."""
        await memory_service.upsert_profile(
            ProfilePatch(user_id=TEST_USER_ID, target_role="Engineer")
        )
        profile = await memory_service.get_profile(TEST_USER_ID)

        assert profile.target_role == "Engineer"
        assert unconfigured_store.calls == []

    async def test_write_failure_propagates_after_caching(self, service, store):
        """Write failures reach the caller; the cache holds the merge."""
        store.fail("upsert_profile", StoreErrorKind.TABLE_MISSING)

        with pytest.raises(StoreError):
            await service.upsert_profile(
                ProfilePatch(user_id=TEST_USER_ID, city="London")
            )

        cached = service.cache.get(TEST_USER_ID)
        assert cached is not None
        assert cached.city == "London"
