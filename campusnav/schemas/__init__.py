"""
Schemas module - Request/Response schemas for API endpoints.
"""

from campusnav.schemas.schemas import (
    Weekday, WEEKDAY_TOKENS,
    RegisterRequest, LoginRequest, UserResponse, AuthResponse,
    BuildingResponse, BuildingListResponse,
    MeetingResponse, CourseResponse, ScheduleResponse, ScheduleReplaceRequest,
    SuccessResponse,
)
