"""
Building Routes

GET /buildings - All campus buildings, sorted by name
"""

from typing import Optional

from fastapi import APIRouter, Depends

from campusnav.core.auth import get_optional_user
from campusnav.core.config import get_settings
from campusnav.core.errors import Unauthorized
from campusnav.services.building_service import get_building_catalog
from campusnav.schemas.schemas import BuildingListResponse

router = APIRouter(prefix="/buildings", tags=["Buildings"])


@router.get("", response_model=BuildingListResponse)
async def list_buildings(user: Optional[dict] = Depends(get_optional_user)):
    """
    List buildings for the map.

    Public by default; a token is accepted but not needed unless
    BUILDINGS_REQUIRE_AUTH is set.
    """
    if get_settings().buildings_require_auth and user is None:
        raise Unauthorized("Unauthorized")
    return BuildingListResponse(buildings=get_building_catalog().list_buildings())
