"""User model - onboarding completion record.

Written when an account finishes the wizard. Keyed by the auth provider's
account id (clerk_user_id); the auth service remains the source of truth
for identity.
"""

import uuid
from datetime import datetime

from sqlalchemy import String, Text, func, text
from sqlalchemy.dialects.postgresql import UUID
from sqlalchemy.orm import Mapped, mapped_column

from job_assistant.models.base import Base, TimestampMixin


class UserRow(Base, TimestampMixin):
    """Account that has completed onboarding.

    Attributes:
        id: UUID primary key.
        clerk_user_id: Account id from the auth provider (unique).
        email: Email captured at completion time, if the client sent one.
        onboarding_completed_at: Last time a completing step update was saved.
    """

    __tablename__ = "users"

    id: Mapped[uuid.UUID] = mapped_column(
        UUID(as_uuid=True),
        primary_key=True,
        server_default=text("gen_random_uuid()"),
    )
    clerk_user_id: Mapped[str] = mapped_column(
        Text(),
        unique=True,
        nullable=False,
    )
    email: Mapped[str | None] = mapped_column(
        String(254),
        nullable=True,
    )
    onboarding_completed_at: Mapped[datetime] = mapped_column(
        server_default=func.now(),
        nullable=False,
    )
