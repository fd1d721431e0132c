"""
Schedule Routes

GET /schedule - Current user's schedule (courses with meetings)
POST /schedule - Replace the current user's whole schedule
"""

from fastapi import APIRouter, Depends

from campusnav.core.auth import get_current_user
from campusnav.services.schedule_service import get_schedule_service
from campusnav.schemas.schemas import (
    ScheduleResponse, ScheduleReplaceRequest, SuccessResponse
)

router = APIRouter(prefix="/schedule", tags=["Schedule"])


@router.get("", response_model=ScheduleResponse)
async def fetch_schedule(user: dict = Depends(get_current_user)):
    """Get the current user's schedule. Empty list if nothing saved yet."""
    courses = get_schedule_service().fetch_schedule(user["user_id"])
    return ScheduleResponse(courses=courses)


@router.post("", response_model=SuccessResponse)
async def replace_schedule(payload: ScheduleReplaceRequest, user: dict = Depends(get_current_user)):
    """
    Replace the schedule wholesale.

    Every existing course and meeting is deleted and the posted ones are
    inserted in one transaction. Meetings missing a start or end time are
    dropped; a course without a title rejects the whole request.
    """
    get_schedule_service().replace_schedule(user["user_id"], payload.courses)
    return SuccessResponse(success=True)
