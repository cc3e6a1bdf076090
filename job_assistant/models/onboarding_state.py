"""Onboarding state model - one row per account.

Keyed by the auth provider's opaque user id (text, not a FK: accounts live
in the external auth service).
"""

import uuid

from sqlalchemy import Boolean, CheckConstraint, Integer, Text, text
from sqlalchemy.dialects.postgresql import UUID
from sqlalchemy.orm import Mapped, mapped_column

from job_assistant.models.base import Base, UpdatedAtMixin


class OnboardingStateRow(Base, UpdatedAtMixin):
    """Persisted wizard progress.

    Attributes:
        id: UUID primary key.
        user_id: Opaque account id from the auth provider (unique).
        current_step: Wizard step, 1-4.
        is_completed: Whether onboarding has been completed.
        profile_skipped: Sticky flag set when the user skipped profile details.
    """

    __tablename__ = "onboarding_states"

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
    current_step: Mapped[int] = mapped_column(
        Integer,
        nullable=False,
        server_default=text("1"),
    )
    is_completed: Mapped[bool] = mapped_column(
        Boolean,
        nullable=False,
        server_default=text("false"),
    )
    profile_skipped: Mapped[bool] = mapped_column(
        Boolean,
        nullable=False,
        server_default=text("false"),
    )

    __table_args__ = (
        CheckConstraint(
            "current_step BETWEEN 1 AND 4",
            name="ck_onboarding_states_current_step",
        ),
    )
