"""
Draft schedule models and the legacy-shape migration.

Locally stored courses come in two shapes:

- LegacyCourse: days/startTime/endTime sit directly on the course
- DraftCourse: a `meetings` list, each meeting with its own days/times

StoredCourse is the tagged union of the two; the tag is whether the raw
record has a `meetings` list. migrate() turns a LegacyCourse into a
DraftCourse with exactly one meeting and is a no-op on a DraftCourse.
"""

import uuid
from typing import Annotated, Any, List, Optional, Union

from pydantic import BaseModel, ConfigDict, Discriminator, Field, Tag, TypeAdapter


def new_id() -> str:
    return str(uuid.uuid4())


class DraftModel(BaseModel):
    # extra="allow": unknown fields from older clients survive a round trip
    model_config = ConfigDict(populate_by_name=True, validate_assignment=True, extra="allow")


class DraftMeeting(DraftModel):
    id: Union[int, str] = Field(default_factory=new_id)
    days: List[str] = []
    start_time: str = Field("", alias="startTime")
    end_time: str = Field("", alias="endTime")
    room: Optional[str] = None


class DraftCourse(DraftModel):
    id: Union[int, str] = Field(default_factory=new_id)
    title: str = ""
    building_id: Optional[int] = Field(None, alias="buildingId")
    building_code: Optional[str] = Field(None, alias="buildingCode")
    meetings: List[DraftMeeting] = []

    def meeting(self, meeting_id: Union[int, str]) -> DraftMeeting:
        for m in self.meetings:
            if m.id == meeting_id:
                return m
        raise KeyError(f"No meeting {meeting_id!r} in course {self.id!r}")


class LegacyCourse(DraftModel):
    id: Union[int, str] = Field(default_factory=new_id)
    title: str = ""
    building_id: Optional[int] = Field(None, alias="buildingId")
    building_code: Optional[str] = Field(None, alias="buildingCode")
    # Loosely typed: old clients wrote whatever they had
    days: Any = None
    start_time: Any = Field(None, alias="startTime")
    end_time: Any = Field(None, alias="endTime")


def _stored_course_tag(value: Any) -> str:
    if isinstance(value, dict):
        return "current" if isinstance(value.get("meetings"), list) else "legacy"
    return "legacy" if isinstance(value, LegacyCourse) else "current"


StoredCourse = Annotated[
    Union[
        Annotated[DraftCourse, Tag("current")],
        Annotated[LegacyCourse, Tag("legacy")],
    ],
    Discriminator(_stored_course_tag),
]

_stored_course = TypeAdapter(StoredCourse)
_stored_courses = TypeAdapter(List[StoredCourse])


def migrate_record(raw: Any) -> DraftCourse:
    """One stored record, parsed and migrated. Raises pydantic.ValidationError."""
    return migrate(_stored_course.validate_python(raw))


def parse_stored_courses(raw: Any) -> List[Union[DraftCourse, LegacyCourse]]:
    """Validate a stored courses array. Raises pydantic.ValidationError on junk."""
    return _stored_courses.validate_python(raw)


def migrate(course: Union[DraftCourse, LegacyCourse]) -> DraftCourse:
    """
    LegacyCourse -> DraftCourse with one synthesized meeting.

    The flat day/time fields move into the meeting and are gone from the
    course. A DraftCourse is returned as-is.
    """
    if isinstance(course, DraftCourse):
        return course

    meeting = DraftMeeting(
        days=course.days if isinstance(course.days, list) else [],
        start_time=course.start_time if isinstance(course.start_time, str) else "",
        end_time=course.end_time if isinstance(course.end_time, str) else "",
    )
    extras = {k: v for k, v in (course.model_extra or {}).items() if k != "meetings"}
    return DraftCourse(
        id=course.id,
        title=course.title,
        building_id=course.building_id,
        building_code=course.building_code,
        meetings=[meeting],
        **extras,
    )


def migrate_courses(raw: Any) -> List[DraftCourse]:
    """Parse a stored courses array and migrate every legacy entry."""
    return [migrate(c) for c in parse_stored_courses(raw)]


def dump_courses(courses: List[DraftCourse]) -> List[dict]:
    """Wire/storage form: camelCase dicts."""
    return [c.model_dump(by_alias=True, mode="json") for c in courses]
