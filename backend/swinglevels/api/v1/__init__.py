"""
API v1 Router

All API endpoints.
"""

from fastapi import APIRouter

from swinglevels.api.v1.endpoints import levels

router = APIRouter()

# Include all endpoint routers
router.include_router(levels.router, prefix="/levels", tags=["Support & Resistance"])
