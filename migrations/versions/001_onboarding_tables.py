"""Create onboarding_states, profiles and users tables.

Revision ID: 001_onboarding_tables
Revises:
Create Date: 2026-10-19

- onboarding_states: wizard progress, one row per account.
- profiles: wizard profile details, one row per account.
- users: onboarding completion records keyed by the auth provider id.
- update_updated_at_column(): trigger function keeping updated_at current
  on every UPDATE, attached to all three tables.
"""

from collections.abc import Sequence

import sqlalchemy as sa
from alembic import op
from sqlalchemy.dialects.postgresql import JSONB, UUID

revision: str = "001_onboarding_tables"
down_revision: str | None = None
branch_labels: str | Sequence[str] | None = None
depends_on: str | Sequence[str] | None = None

_TABLES = ("onboarding_states", "profiles", "users")


def _id_column() -> sa.Column:
    return sa.Column(
        "id",
        UUID(as_uuid=True),
        server_default=sa.text("gen_random_uuid()"),
        primary_key=True,
    )


def _updated_at_column() -> sa.Column:
    return sa.Column(
        "updated_at",
        sa.DateTime(timezone=True),
        server_default=sa.func.now(),
        nullable=False,
    )


def _timestamp_columns() -> list[sa.Column]:
    return [
        sa.Column(
            "created_at",
            sa.DateTime(timezone=True),
            server_default=sa.func.now(),
            nullable=False,
        ),
        _updated_at_column(),
    ]


def upgrade() -> None:
    op.execute('CREATE EXTENSION IF NOT EXISTS "pgcrypto"')

    # =========================================================================
    # onboarding_states
    # =========================================================================
    op.create_table(
        "onboarding_states",
        _id_column(),
        sa.Column("user_id", sa.Text(), nullable=False),
        sa.Column(
            "current_step", sa.Integer(), server_default=sa.text("1"), nullable=False
        ),
        sa.Column(
            "is_completed",
            sa.Boolean(),
            server_default=sa.text("false"),
            nullable=False,
        ),
        sa.Column(
            "profile_skipped",
            sa.Boolean(),
            server_default=sa.text("false"),
            nullable=False,
        ),
        _updated_at_column(),
        sa.UniqueConstraint("user_id", name="uq_onboarding_states_user_id"),
        sa.CheckConstraint(
            "current_step BETWEEN 1 AND 4",
            name="ck_onboarding_states_current_step",
        ),
    )

    # =========================================================================
    # profiles
    # =========================================================================
    op.create_table(
        "profiles",
        _id_column(),
        sa.Column("user_id", sa.Text(), nullable=False),
        sa.Column("name", sa.Text(), nullable=True),
        sa.Column("first_name", sa.Text(), nullable=True),
        sa.Column("last_name", sa.Text(), nullable=True),
        sa.Column("target_role", sa.Text(), nullable=True),
        sa.Column("years_exp", sa.Text(), nullable=True),
        sa.Column("country", sa.Text(), nullable=True),
        sa.Column("city", sa.Text(), nullable=True),
        sa.Column("linkedin_url", sa.Text(), nullable=True),
        sa.Column("portfolio_url", sa.Text(), nullable=True),
        sa.Column(
            "allow_linkedin_analysis",
            sa.Boolean(),
            server_default=sa.text("false"),
            nullable=False,
        ),
        sa.Column(
            "employment_types",
            JSONB(),
            server_default=sa.text("'[]'::jsonb"),
            nullable=False,
        ),
        sa.Column(
            "profile_skipped",
            sa.Boolean(),
            server_default=sa.text("false"),
            nullable=False,
        ),
        *_timestamp_columns(),
        sa.UniqueConstraint("user_id", name="uq_profiles_user_id"),
    )

    # =========================================================================
    # users
    # =========================================================================
    op.create_table(
        "users",
        _id_column(),
        sa.Column("clerk_user_id", sa.Text(), nullable=False),
        sa.Column("email", sa.String(254), nullable=True),
        sa.Column(
            "onboarding_completed_at",
            sa.DateTime(timezone=True),
            server_default=sa.func.now(),
            nullable=False,
        ),
        *_timestamp_columns(),
        sa.UniqueConstraint("clerk_user_id", name="uq_users_clerk_user_id"),
    )

    # =========================================================================
    # updated_at triggers
    # =========================================================================
    op.execute(
        """
        CREATE OR REPLACE FUNCTION update_updated_at_column()
        RETURNS trigger
        LANGUAGE plpgsql
        AS $$
        BEGIN
            NEW.updated_at = now();
            RETURN NEW;
        END;
        $$
        """
    )
    for table in _TABLES:
        op.execute(
            f"""
            CREATE TRIGGER trg_{table}_updated_at
            BEFORE UPDATE ON {table}
            FOR EACH ROW EXECUTE FUNCTION update_updated_at_column()
            """
        )


def downgrade() -> None:
    for table in _TABLES:
        op.execute(f"DROP TRIGGER IF EXISTS trg_{table}_updated_at ON {table}")
    op.execute("DROP FUNCTION IF EXISTS update_updated_at_column()")
    op.drop_table("users")
    op.drop_table("profiles")
    op.drop_table("onboarding_states")
