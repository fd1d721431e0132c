"""
API Routes - Combines all route modules into single router.
"""

from fastapi import APIRouter

from campusnav.api.routes.auth_routes import router as auth_router
from campusnav.api.routes.building_routes import router as building_router
from campusnav.api.routes.schedule_routes import router as schedule_router

# Main API router
api_router = APIRouter()

# Include all sub-routers
api_router.include_router(auth_router)
api_router.include_router(building_router)
api_router.include_router(schedule_router)
