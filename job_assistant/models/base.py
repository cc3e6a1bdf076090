"""SQLAlchemy base classes and common mixins.

Defines the declarative base and the timestamp mixins. onboarding_states
carries only updated_at; profiles and users carry both timestamps.
"""

from datetime import datetime

from sqlalchemy import DateTime, func
from sqlalchemy.orm import DeclarativeBase, Mapped, mapped_column


class Base(DeclarativeBase):
    """Base class for all ORM models."""

    type_annotation_map = {
        datetime: DateTime(timezone=True),
    }


class UpdatedAtMixin:
    """Mixin that adds an updated_at column.

    Attributes:
        updated_at: Timestamp when the record was last modified. Updated
            automatically by the database on each update.
    """

    updated_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        server_default=func.now(),
        onupdate=func.now(),
        nullable=False,
    )


class TimestampMixin(UpdatedAtMixin):
    """Mixin that adds created_at and updated_at columns.

    Attributes:
        created_at: Timestamp when the record was created. Set automatically
            by the database on insert.
    """

    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        server_default=func.now(),
        nullable=False,
    )
