"""Repository for users (onboarding completion records)."""

from sqlalchemy import func, select
from sqlalchemy.dialects.postgresql import insert
from sqlalchemy.ext.asyncio import AsyncSession

from job_assistant.models.user import UserRow


class UserRepository:
    """Stateless repository for UserRow operations."""

    @staticmethod
    async def get_by_clerk_user_id(
        db: AsyncSession, clerk_user_id: str
    ) -> UserRow | None:
        """Fetch a completion record by account id.

        Args:
            db: Async database session.
            clerk_user_id: Account id from the auth provider.

        Returns:
            UserRow if found, None otherwise.
        """
        stmt = select(UserRow).where(UserRow.clerk_user_id == clerk_user_id)
        result = await db.execute(stmt)
        return result.scalar_one_or_none()

    @staticmethod
    async def upsert_onboarding_completion(
        db: AsyncSession,
        *,
        clerk_user_id: str,
        email: str | None = None,
    ) -> UserRow | None:
        """Record that an account completed onboarding.

        Safe to call repeatedly: each call refreshes onboarding_completed_at
        and overwrites email. The address is stored trimmed but otherwise as
        received; a blank or missing email is written as NULL.

        Args:
            db: Async database session.
            clerk_user_id: Account id from the auth provider.
            email: Email address sent by the client, if any.

        Returns:
            The stored completion record.
        """
        email_value = (email or "").strip() or None
        stmt = insert(UserRow).values(clerk_user_id=clerk_user_id, email=email_value)
        stmt = (
            stmt.on_conflict_do_update(
                index_elements=[UserRow.clerk_user_id],
                set_={
                    "email": stmt.excluded.email,
                    "onboarding_completed_at": func.now(),
                    "updated_at": func.now(),
                },
            )
            .returning(UserRow)
            .execution_options(populate_existing=True)
        )
        result = await db.scalars(stmt)
        return result.first()
