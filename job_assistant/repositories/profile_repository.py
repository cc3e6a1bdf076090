"""Repository for profiles operations."""

from sqlalchemy import func, select
from sqlalchemy.dialects.postgresql import insert
from sqlalchemy.ext.asyncio import AsyncSession

from job_assistant.models.profile import ProfileRow

# Columns written by upsert(). Security: never add 'id', 'user_id',
# 'created_at' or 'updated_at' (key and server-managed timestamps).
_WRITABLE_FIELDS: frozenset[str] = frozenset(
    {
        "name",
        "first_name",
        "last_name",
        "target_role",
        "years_exp",
        "country",
        "city",
        "linkedin_url",
        "portfolio_url",
        "allow_linkedin_analysis",
        "employment_types",
        "profile_skipped",
    }
)


class ProfileRepository:
    """Stateless repository for ProfileRow operations."""

    @staticmethod
    async def get_by_user_id(db: AsyncSession, user_id: str) -> ProfileRow | None:
        """Fetch the profile row for an account, or None."""
        stmt = select(ProfileRow).where(ProfileRow.user_id == user_id)
        result = await db.execute(stmt)
        return result.scalar_one_or_none()

    @staticmethod
    async def upsert(
        db: AsyncSession,
        user_id: str,
        **fields: str | bool | list[str],
    ) -> ProfileRow | None:
        """Insert or update the profile row for an account.

        Args:
            db: Async database session.
            user_id: Opaque account id (conflict target).
            **fields: Column values to write.

        Returns:
            The stored row as returned by the database.

        Raises:
            ValueError: If an unknown field name is passed.
        """
        unknown = set(fields) - _WRITABLE_FIELDS
        if unknown:
            msg = f"Unknown fields: {', '.join(sorted(unknown))}"
            raise ValueError(msg)

        stmt = (
            insert(ProfileRow)
            .values(user_id=user_id, **fields)
            .on_conflict_do_update(
                index_elements=[ProfileRow.user_id],
                set_={**fields, "updated_at": func.now()},
            )
            .returning(ProfileRow)
            .execution_options(populate_existing=True)
        )
        result = await db.scalars(stmt)
        return result.first()
