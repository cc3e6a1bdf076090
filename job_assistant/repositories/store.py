"""Persistence adapter used by the onboarding and profile services.

PersistenceAdapter is the contract services depend on; SqlPersistenceStore
implements it over PostgreSQL. Each operation runs in its own session and
transaction, maps ORM rows to domain records, and raises StoreError for
any database failure.

is_configured() is evaluated on every call so a store built without a
database URL simply reports "not configured" and is never touched.
"""

from collections.abc import Awaitable, Callable
from typing import Protocol, TypeVar

from sqlalchemy.exc import DBAPIError
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker

from job_assistant.core.config import Settings
from job_assistant.core.database import get_session_factory, session_scope
from job_assistant.models import OnboardingStateRow, ProfileRow, UserRow
from job_assistant.repositories.errors import (
    StoreError,
    StoreErrorKind,
    classify_db_error,
)
from job_assistant.repositories.onboarding_state_repository import (
    OnboardingStateRepository,
)
from job_assistant.repositories.profile_repository import ProfileRepository
from job_assistant.repositories.user_repository import UserRepository
from job_assistant.services.onboarding_state import OnboardingState
from job_assistant.services.profile_record import ProfileRecord

R = TypeVar("R")

ONBOARDING_TABLE = OnboardingStateRow.__tablename__
PROFILES_TABLE = ProfileRow.__tablename__
USERS_TABLE = UserRow.__tablename__


class PersistenceAdapter(Protocol):
    """What the services need from persistence."""

    def is_configured(self) -> bool: ...

    async def get_onboarding_state(self, user_id: str) -> OnboardingState | None: ...

    async def upsert_onboarding_state(
        self, state: OnboardingState
    ) -> OnboardingState | None: ...

    async def record_onboarding_completion(
        self, clerk_user_id: str, email: str | None = None
    ) -> None: ...

    async def get_profile(self, user_id: str) -> ProfileRecord | None: ...

    async def upsert_profile(self, profile: ProfileRecord) -> ProfileRecord | None: ...


def _state_from_row(row: OnboardingStateRow) -> OnboardingState:
    return OnboardingState(
        user_id=row.user_id,
        current_step=row.current_step,
        is_completed=bool(row.is_completed),
        profile_skipped=bool(row.profile_skipped),
        updated_at=row.updated_at,
    )


def _profile_from_row(row: ProfileRow) -> ProfileRecord:
    return ProfileRecord(
        user_id=row.user_id,
        name=row.name or "",
        first_name=row.first_name or "",
        last_name=row.last_name or "",
        target_role=row.target_role or "",
        years_exp=row.years_exp or "",
        country=row.country or "",
        city=row.city or "",
        linkedin_url=row.linkedin_url or "",
        portfolio_url=row.portfolio_url or "",
        allow_linkedin_analysis=bool(row.allow_linkedin_analysis),
        employment_types=tuple(row.employment_types or ()),
        profile_skipped=bool(row.profile_skipped),
        created_at=row.created_at,
        updated_at=row.updated_at,
    )


class SqlPersistenceStore:
    """PersistenceAdapter backed by PostgreSQL through SQLAlchemy.

    Args:
        config: Settings read on every is_configured() call.
        session_factory: Explicit factory (tests); otherwise one is built
            lazily from config.database_url on first use.
    """

    def __init__(
        self,
        config: Settings,
        session_factory: async_sessionmaker[AsyncSession] | None = None,
    ) -> None:
        self._config = config
        self._session_factory = session_factory

    def is_configured(self) -> bool:
        return self._session_factory is not None or self._config.persistence_configured

    def _factory(self) -> async_sessionmaker[AsyncSession]:
        if self._session_factory is None:
            if not self._config.persistence_configured:
                msg = "Persistence is not configured (DATABASE_URL is empty)"
                raise StoreError(StoreErrorKind.OTHER, "", msg)
            self._session_factory = get_session_factory(self._config.database_url)
        return self._session_factory

    async def _run(
        self, table: str, operation: Callable[[AsyncSession], Awaitable[R]]
    ) -> R:
        try:
            async with session_scope(self._factory()) as session:
                return await operation(session)
        except DBAPIError as exc:
            kind = classify_db_error(exc, table)
            raise StoreError(kind, table, str(exc.orig or exc)) from exc

    # -------------------------------------------------------------------------
    # Onboarding state
    # -------------------------------------------------------------------------

    async def get_onboarding_state(self, user_id: str) -> OnboardingState | None:
        async def _get(session: AsyncSession) -> OnboardingState | None:
            row = await OnboardingStateRepository.get_by_user_id(session, user_id)
            return _state_from_row(row) if row is not None else None

        return await self._run(ONBOARDING_TABLE, _get)

    async def upsert_onboarding_state(
        self, state: OnboardingState
    ) -> OnboardingState | None:
        async def _upsert(session: AsyncSession) -> OnboardingState | None:
            row = await OnboardingStateRepository.upsert(
                session,
                user_id=state.user_id,
                current_step=state.current_step,
                is_completed=state.is_completed,
                profile_skipped=state.profile_skipped,
            )
            return _state_from_row(row) if row is not None else None

        return await self._run(ONBOARDING_TABLE, _upsert)

    async def record_onboarding_completion(
        self, clerk_user_id: str, email: str | None = None
    ) -> None:
        async def _record(session: AsyncSession) -> None:
            await UserRepository.upsert_onboarding_completion(
                session, clerk_user_id=clerk_user_id, email=email
            )

        await self._run(USERS_TABLE, _record)

    # -------------------------------------------------------------------------
    # Profiles
    # -------------------------------------------------------------------------

    async def get_profile(self, user_id: str) -> ProfileRecord | None:
        async def _get(session: AsyncSession) -> ProfileRecord | None:
            row = await ProfileRepository.get_by_user_id(session, user_id)
            return _profile_from_row(row) if row is not None else None

        return await self._run(PROFILES_TABLE, _get)

    async def upsert_profile(self, profile: ProfileRecord) -> ProfileRecord | None:
        async def _upsert(session: AsyncSession) -> ProfileRecord | None:
            row = await ProfileRepository.upsert(
                session,
                profile.user_id,
                name=profile.name,
                first_name=profile.first_name,
                last_name=profile.last_name,
                target_role=profile.target_role,
                years_exp=profile.years_exp,
                country=profile.country,
                city=profile.city,
                linkedin_url=profile.linkedin_url,
                portfolio_url=profile.portfolio_url,
                allow_linkedin_analysis=profile.allow_linkedin_analysis,
                employment_types=list(profile.employment_types),
                profile_skipped=profile.profile_skipped,
            )
            return _profile_from_row(row) if row is not None else None

        return await self._run(PROFILES_TABLE, _upsert)
