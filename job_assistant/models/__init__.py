"""SQLAlchemy ORM models for the Job Assistant API.

All models are exported from this module for convenient imports:
    from job_assistant.models import OnboardingStateRow, ProfileRow, UserRow

- onboarding_state.py: OnboardingStateRow (wizard progress)
- profile.py: ProfileRow (wizard profile details)
- user.py: UserRow (onboarding completion record)
"""

from job_assistant.models.base import Base
from job_assistant.models.onboarding_state import OnboardingStateRow
from job_assistant.models.profile import ProfileRow
from job_assistant.models.user import UserRow

__all__ = [
    "Base",
    "OnboardingStateRow",
    "ProfileRow",
    "UserRow",
]
