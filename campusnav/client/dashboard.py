"""
Dashboard derivations: today's classes and building lookups for the map.

Pure functions over draft courses and building dicts as returned by
GET /api/buildings.
"""

from datetime import date
from typing import List, Optional, Tuple

from campusnav.client.models import DraftCourse, DraftMeeting
from campusnav.schemas.schemas import WEEKDAY_TOKENS



def weekday_token(day: Optional[date] = None) -> str:
    """Sun..Sat for `day` (local date by default)."""
    day = day or date.today()
    # date.weekday(): Monday == 0
    return WEEKDAY_TOKENS[(day.weekday() + 1) % 7]


def parse_time_minutes(value: str) -> Optional[int]:
    """Minutes since midnight for "HH:MM"; None when it does not parse."""
    try:
        hours, minutes = value.split(":")[:2]
        return int(hours) * 60 + int(minutes)
    except (AttributeError, ValueError):
        return None


def todays_meetings(courses: List[DraftCourse], today: Optional[str] = None) -> List[Tuple[DraftCourse, DraftMeeting]]:
    """
    (course, meeting) pairs meeting on `today`, earliest start first.

    Wall-clock times, no timezone handling. Ties keep schedule order;
    unparseable start times go last.
    """
    today = today or weekday_token()
    pairs = [
        (course, meeting)
        for course in courses
        for meeting in course.meetings
        if today in meeting.days
    ]

    def sort_key(pair):
        minutes = parse_time_minutes(pair[1].start_time)
        return (minutes is None, minutes or 0)

    return sorted(pairs, key=sort_key)


def find_building_for_course(course: DraftCourse, buildings: List[dict]) -> Optional[dict]:
    """Match on building id first, then on code (case-insensitive)."""
    if course.building_id is not None:
        for b in buildings:
            if b.get("id") == course.building_id:
                return b
    if course.building_code:
        code = course.building_code.lower()
        for b in buildings:
            if (b.get("building_code") or "").lower() == code:
                return b
    return None


def search_buildings(buildings: List[dict], term: str) -> List[dict]:
    """Case-insensitive substring match on name or code. Empty term matches all."""
    term = (term or "").strip().lower()
    if not term:
        return list(buildings)
    return [
        b for b in buildings
        if term in (b.get("name") or "").lower()
        or term in (b.get("building_code") or "").lower()
    ]


def _is_number(value) -> bool:
    return isinstance(value, (int, float)) and not isinstance(value, bool)


def has_valid_coordinates(building: dict) -> bool:
    """Numeric latitude in [-90, 90] and longitude in [-180, 180]."""
    lat = building.get("latitude")
    lon = building.get("longitude")
    if not _is_number(lat) or not _is_number(lon):
        return False
    return -90 <= lat <= 90 and -180 <= lon <= 180


def partition_buildings(buildings: List[dict]) -> Tuple[List[dict], List[dict]]:
    """
    Split into (mappable, invalid) for the map view.

    Nothing is dropped: every input building lands in exactly one list.
    """
    mappable, invalid = [], []
    for b in buildings:
        (mappable if has_valid_coordinates(b) else invalid).append(b)
    return mappable, invalid
