"""Shared test fixtures.

FakeStore is an in-memory PersistenceAdapter. Tests flip `configured` to
simulate a missing DATABASE_URL and register failures per operation to
simulate a missing table or an unavailable database.
"""

from collections.abc import AsyncGenerator, Iterator
from dataclasses import replace
from datetime import UTC, datetime

import pytest
import pytest_asyncio
from fastapi import FastAPI
from httpx import ASGITransport, AsyncClient

from job_assistant.core.rate_limiting import limiter
from job_assistant.main import create_app
from job_assistant.repositories.errors import StoreError, StoreErrorKind
from job_assistant.repositories.store import (
    ONBOARDING_TABLE,
    PROFILES_TABLE,
    USERS_TABLE,
)
from job_assistant.services.onboarding_state import OnboardingState
from job_assistant.services.profile_record import ProfileRecord

TEST_USER_ID = "user_2abcDEF123"
OTHER_USER_ID = "user_2zyxWVU987"

_OPERATION_TABLES = {
    "get_onboarding_state": ONBOARDING_TABLE,
    "upsert_onboarding_state": ONBOARDING_TABLE,
    "record_onboarding_completion": USERS_TABLE,
    "get_profile": PROFILES_TABLE,
    "upsert_profile": PROFILES_TABLE,
}


class FakeStore:
    """In-memory PersistenceAdapter with injectable failures.

    Attributes:
        configured: Value returned by is_configured().
        states: Stored onboarding rows keyed by user id.
        profiles: Stored profile rows keyed by user id.
        completions: (clerk_user_id, email) per recorded completion.
        calls: Names of every store operation invoked, in order.
    """

    def __init__(self, *, configured: bool = True) -> None:
        self.configured = configured
        self.states: dict[str, OnboardingState] = {}
        self.profiles: dict[str, ProfileRecord] = {}
        self.completions: list[tuple[str, str | None]] = []
        self.calls: list[str] = []
        self._failures: dict[str, StoreError] = {}

    def fail(
        self, operation: str, kind: StoreErrorKind = StoreErrorKind.OTHER
    ) -> StoreError:
        """Make every later call to `operation` raise a StoreError."""
        table = _OPERATION_TABLES[operation]
        error = StoreError(kind, table, f'relation "{table}" failure ({kind.value})')
        self._failures[operation] = error
        return error

    def heal(self) -> None:
        self._failures.clear()

    def _enter(self, operation: str) -> None:
        self.calls.append(operation)
        error = self._failures.get(operation)
        if error is not None:
            raise error

    def is_configured(self) -> bool:
        return self.configured

    async def get_onboarding_state(self, user_id: str) -> OnboardingState | None:
        self._enter("get_onboarding_state")
        return self.states.get(user_id)

    async def upsert_onboarding_state(
        self, state: OnboardingState
    ) -> OnboardingState | None:
        self._enter("upsert_onboarding_state")
        stored = replace(state, updated_at=datetime.now(UTC))
        self.states[state.user_id] = stored
        return stored

    async def record_onboarding_completion(
        self, clerk_user_id: str, email: str | None = None
    ) -> None:
        self._enter("record_onboarding_completion")
        self.completions.append((clerk_user_id, email))

    async def get_profile(self, user_id: str) -> ProfileRecord | None:
        self._enter("get_profile")
        return self.profiles.get(user_id)

    async def upsert_profile(self, profile: ProfileRecord) -> ProfileRecord | None:
        self._enter("upsert_profile")
        now = datetime.now(UTC)
        existing = self.profiles.get(profile.user_id)
        created_at = existing.created_at if existing is not None else now
        stored = replace(profile, created_at=created_at, updated_at=now)
        self.profiles[profile.user_id] = stored
        return stored


@pytest.fixture(autouse=True)
def reset_rate_limiter() -> Iterator[None]:
    """Clear the shared in-memory rate limit counters around each test."""
    limiter.reset()
    yield
    limiter.reset()


@pytest.fixture
def store() -> FakeStore:
    """Configured in-memory store."""
    return FakeStore()


@pytest.fixture
def unconfigured_store() -> FakeStore:
    """Store that reports no persistence configured."""
    return FakeStore(configured=False)


@pytest.fixture
def app(store: FakeStore) -> FastAPI:
    """Application wired to the in-memory store."""
    return create_app(store=store)


@pytest_asyncio.fixture
async def client(app: FastAPI) -> AsyncGenerator[AsyncClient, None]:
    """Async HTTP client for API tests.

    Unhandled exceptions are turned into 500 responses instead of being
    re-raised into the test.
    """
    transport = ASGITransport(app=app, raise_app_exceptions=False)
    async with AsyncClient(transport=transport, base_url="http://test") as ac:
        yield ac
