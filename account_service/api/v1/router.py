"""API router aggregator.

All endpoint routers are included here and mounted under /api.
"""

from fastapi import APIRouter

from account_service.api.v1 import auth, profile, users

router = APIRouter()

# =============================================================================
# Authentication
# =============================================================================

router.include_router(auth.router, prefix="/auth", tags=["auth"])

# =============================================================================
# Users
# =============================================================================

router.include_router(users.router, prefix="/users", tags=["users"])
router.include_router(profile.router, prefix="/profile", tags=["profile"])
