"""API router aggregator.

Mounted by create_app() under settings.api_prefix (empty by default, so
the wizard client calls /onboarding/... and /profile directly).
"""

from fastapi import APIRouter

from job_assistant.api.v1 import onboarding, profile

router = APIRouter()

# =============================================================================
# Onboarding
# =============================================================================

router.include_router(onboarding.router, prefix="/onboarding", tags=["onboarding"])

# =============================================================================
# Profile
# =============================================================================

router.include_router(profile.router, prefix="/profile", tags=["profile"])
