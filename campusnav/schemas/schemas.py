"""
Pydantic Schemas - Request/Response Validation

All API request and response schemas in one file for simplicity.

Request bodies are deliberately loose (optional fields, Any payloads):
the services decide the order in which problems are reported, and
replace-all schedule validation happens inside the transaction.
"""

from pydantic import BaseModel, ConfigDict, Field
from typing import Optional, List, Any
from enum import Enum


# ============================================================
# ENUMS
# ============================================================

class Weekday(str, Enum):
    sun = "Sun"
    mon = "Mon"
    tue = "Tue"
    wed = "Wed"
    thu = "Thu"
    fri = "Fri"
    sat = "Sat"


WEEKDAY_TOKENS = [d.value for d in Weekday]


class CamelModel(BaseModel):
    """Wire models use camelCase; Python code uses snake_case."""

    model_config = ConfigDict(populate_by_name=True)


# ============================================================
# AUTH SCHEMAS
# ============================================================

class RegisterRequest(CamelModel):
    email: Optional[str] = None
    password: Optional[str] = None
    confirm_password: Optional[str] = Field(None, alias="confirmPassword")


class LoginRequest(BaseModel):
    email: Optional[str] = None
    password: Optional[str] = None


class UserResponse(BaseModel):
    id: int
    email: str


class AuthResponse(BaseModel):
    message: str
    user: UserResponse
    token: str


# ============================================================
# BUILDING SCHEMAS
# ============================================================

class BuildingResponse(BaseModel):
    id: int
    name: str
    building_code: Optional[str] = None
    address: Optional[str] = None
    latitude: Optional[float] = None
    longitude: Optional[float] = None
    description: Optional[str] = None


class BuildingListResponse(BaseModel):
    buildings: List[BuildingResponse]


# ============================================================
# SCHEDULE SCHEMAS
# ============================================================

class MeetingResponse(CamelModel):
    id: int
    days: List[str] = []
    start_time: str = Field(..., alias="startTime")
    end_time: str = Field(..., alias="endTime")
    room: Optional[str] = None


class CourseResponse(CamelModel):
    id: int
    title: str
    building_id: Optional[int] = Field(None, alias="buildingId")
    building_code: Optional[str] = Field(None, alias="buildingCode")
    meetings: List[MeetingResponse] = []


class ScheduleResponse(BaseModel):
    courses: List[CourseResponse]


class ScheduleReplaceRequest(BaseModel):
    # Checked by the schedule service so a non-list is a 400 with a clear message
    courses: Any = None


# ============================================================
# GENERIC
# ============================================================

class SuccessResponse(BaseModel):
    success: bool = True
