"""Profile model - wizard profile details, one row per account."""

import uuid

from sqlalchemy import Boolean, Text, text
from sqlalchemy.dialects.postgresql import JSONB, UUID
from sqlalchemy.orm import Mapped, mapped_column

from job_assistant.models.base import Base, TimestampMixin

_DEFAULT_EMPTY_JSONB = text("'[]'::jsonb")


class ProfileRow(Base, TimestampMixin):
    """Persisted profile.

    Attributes:
        id: UUID primary key.
        user_id: Opaque account id from the auth provider (unique).
        name: Display name; derived from first/last name unless set explicitly.
        first_name: Given name.
        last_name: Family name.
        target_role: Role the user is looking for.
        years_exp: Free-text years of experience (e.g., "3-5").
        country: Country of residence.
        city: City of residence.
        linkedin_url: LinkedIn profile URL.
        portfolio_url: Portfolio/personal site URL.
        allow_linkedin_analysis: Consent to analyze the LinkedIn profile.
        employment_types: JSONB list of tags (e.g., ["full-time", "remote"]).
        profile_skipped: User chose to skip profile details.
    """

    __tablename__ = "profiles"

    id: Mapped[uuid.UUID] = mapped_column(
        UUID(as_uuid=True),
        primary_key=True,
        server_default=text("gen_random_uuid()"),
    )
    user_id: Mapped[str] = mapped_column(
        Text(),
        unique=True,
        nullable=False,
    )
    name: Mapped[str | None] = mapped_column(Text(), nullable=True)
    first_name: Mapped[str | None] = mapped_column(Text(), nullable=True)
    last_name: Mapped[str | None] = mapped_column(Text(), nullable=True)
    target_role: Mapped[str | None] = mapped_column(Text(), nullable=True)
    years_exp: Mapped[str | None] = mapped_column(Text(), nullable=True)
    country: Mapped[str | None] = mapped_column(Text(), nullable=True)
    city: Mapped[str | None] = mapped_column(Text(), nullable=True)
    linkedin_url: Mapped[str | None] = mapped_column(Text(), nullable=True)
    portfolio_url: Mapped[str | None] = mapped_column(Text(), nullable=True)
    allow_linkedin_analysis: Mapped[bool] = mapped_column(
        Boolean,
        nullable=False,
        server_default=text("false"),
    )
    employment_types: Mapped[list[str]] = mapped_column(
        JSONB,
        nullable=False,
        server_default=_DEFAULT_EMPTY_JSONB,
    )
    profile_skipped: Mapped[bool] = mapped_column(
        Boolean,
        nullable=False,
        server_default=text("false"),
    )
