"""Repository for onboarding_states operations.

One row per account, keyed by the auth provider's user id.
"""

from sqlalchemy import func, select
from sqlalchemy.dialects.postgresql import insert
from sqlalchemy.ext.asyncio import AsyncSession

from job_assistant.models.onboarding_state import OnboardingStateRow


class OnboardingStateRepository:
    """Stateless repository for OnboardingStateRow operations.

    All methods are static. Pass an AsyncSession for every call so the
    caller controls transaction boundaries.
    """

    @staticmethod
    async def get_by_user_id(
        db: AsyncSession, user_id: str
    ) -> OnboardingStateRow | None:
        """Fetch the onboarding row for an account.

        Args:
            db: Async database session.
            user_id: Opaque account id.

        Returns:
            OnboardingStateRow if found, None otherwise.
        """
        stmt = select(OnboardingStateRow).where(OnboardingStateRow.user_id == user_id)
        result = await db.execute(stmt)
        return result.scalar_one_or_none()

    @staticmethod
    async def upsert(
        db: AsyncSession,
        *,
        user_id: str,
        current_step: int,
        is_completed: bool,
        profile_skipped: bool,
    ) -> OnboardingStateRow | None:
        """Insert or update the onboarding row for an account.

        Args:
            db: Async database session.
            user_id: Opaque account id (conflict target).
            current_step: Wizard step, 1-4.
            is_completed: Completion flag.
            profile_skipped: Skip flag.

        Returns:
            The stored row as returned by the database.
        """
        values = {
            "current_step": current_step,
            "is_completed": is_completed,
            "profile_skipped": profile_skipped,
        }
        stmt = (
            insert(OnboardingStateRow)
            .values(user_id=user_id, **values)
            .on_conflict_do_update(
                index_elements=[OnboardingStateRow.user_id],
                set_={**values, "updated_at": func.now()},
            )
            .returning(OnboardingStateRow)
            .execution_options(populate_existing=True)
        )
        result = await db.scalars(stmt)
        return result.first()
