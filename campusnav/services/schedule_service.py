"""
Schedule Service - fetch and replace a user's whole schedule.

A schedule is every course a user owns plus each course's meetings.
It is only ever written as one unit:

    BEGIN
      DELETE meetings of the user's courses
      DELETE the user's courses
      INSERT each incoming course, then its meetings
    COMMIT

A course with a missing/empty title aborts the whole replace and the
transaction rolls back, so the previously saved schedule is untouched.
Meetings without a start or end time are skipped, not rejected.

There is no version check: two concurrent replaces from the same user
end with whichever committed last.
"""

import logging
from typing import Any, List, Optional

from sqlalchemy import text
from sqlalchemy.exc import SQLAlchemyError

from campusnav.core.errors import ValidationFailed, PersistenceError
from campusnav.db.database import get_db_session
from campusnav.schemas.schemas import WEEKDAY_TOKENS

logger = logging.getLogger(__name__)

COURSES_MUST_BE_LIST = "Invalid payload: courses must be an array"
TITLE_REQUIRED = "Course title is required"


# ============================================================
# HELPERS: day sets and times
# ============================================================

def normalize_days(days: Any) -> List[str]:
    """
    Keep known weekday tokens, first occurrence wins.

    Anything that is not a list becomes an empty day set.
    """
    if not isinstance(days, list):
        return []
    out: List[str] = []
    for d in days:
        if isinstance(d, str) and d in WEEKDAY_TOKENS and d not in out:
            out.append(d)
    return out


def encode_days(days: List[str]) -> str:
    return ",".join(days)


def decode_days(value: Optional[str]) -> List[str]:
    if not value:
        return []
    return [d for d in value.split(",") if d]


def format_time(value: Any) -> str:
    """HH:MM from whatever the driver hands back ("09:00", "09:00:00", time objects)."""
    if value is None:
        return ""
    return str(value)[:5]


def _time_or_none(value: Any) -> Optional[str]:
    """Non-empty time string cut to HH:MM ("09:00:00" -> "09:00"), else None."""
    if isinstance(value, str) and value.strip():
        return format_time(value.strip())
    return None


# ============================================================
# SCHEDULE SERVICE
# ============================================================

class ScheduleService:
    """
    Schedule store access. One schedule per user, keyed by user id.
    """

    def fetch_schedule(self, user_id: int) -> List[dict]:
        """
        Courses in creation order, each with its meetings in creation order.

        An empty list is a normal answer for a user who never saved.
        """
        with get_db_session() as db:
            course_rows = db.execute(
                text("""
                    SELECT c.id, c.title, c.building_id, b.code AS building_code
                    FROM courses c
                    LEFT JOIN buildings b ON b.id = c.building_id
                    WHERE c.user_id = :user_id
                    ORDER BY c.id
                """),
                {"user_id": user_id}
            ).fetchall()

            meeting_rows = db.execute(
                text("""
                    SELECT m.id, m.course_id, m.days, m.start_time, m.end_time, m.room
                    FROM meetings m
                    JOIN courses c ON c.id = m.course_id
                    WHERE c.user_id = :user_id
                    ORDER BY m.course_id, m.id
                """),
                {"user_id": user_id}
            ).fetchall()

        meetings_by_course = {}
        for m in meeting_rows:
            meetings_by_course.setdefault(m[1], []).append({
                "id": m[0],
                "days": decode_days(m[2]),
                "startTime": format_time(m[3]),
                "endTime": format_time(m[4]),
                "room": m[5] or None,
            })

        return [
            {
                "id": c[0],
                "title": c[1],
                "buildingId": c[2],
                "buildingCode": c[3],
                "meetings": meetings_by_course.get(c[0], []),
            }
            for c in course_rows
        ]

    def replace_schedule(self, user_id: int, courses: Any) -> dict:
        """
        Replace the user's schedule with `courses` (list of course dicts).

        Returns {"courses": n, "meetings": n, "skipped_meetings": n}.
        Raises ValidationFailed (nothing changed) or PersistenceError
        (rolled back).
        """
        if not isinstance(courses, list):
            raise ValidationFailed(COURSES_MUST_BE_LIST)

        stats = {"courses": 0, "meetings": 0, "skipped_meetings": 0}
        try:
            with get_db_session() as db:
                self._delete_schedule(db, user_id)
                for course in courses:
                    # Raising here rolls back the deletes above as well
                    course_id = self._insert_course(db, user_id, course)
                    stats["courses"] += 1
                    for meeting in self._meetings_of(course):
                        if self._insert_meeting(db, course_id, meeting):
                            stats["meetings"] += 1
                        else:
                            stats["skipped_meetings"] += 1
        except ValidationFailed:
            logger.info("Schedule replace for user %s rejected and rolled back", user_id)
            raise
        except SQLAlchemyError as e:
            logger.error("Schedule replace for user %s failed: %s", user_id, e)
            raise PersistenceError("Failed to save schedule")

        logger.info(
            "Replaced schedule for user %s: %d courses, %d meetings (%d skipped)",
            user_id, stats["courses"], stats["meetings"], stats["skipped_meetings"]
        )
        return stats

    def _delete_schedule(self, db, user_id: int) -> None:
        """Children first, then parents."""
        db.execute(
            text("""
                DELETE FROM meetings
                WHERE course_id IN (SELECT id FROM courses WHERE user_id = :user_id)
            """),
            {"user_id": user_id}
        )
        db.execute(
            text("DELETE FROM courses WHERE user_id = :user_id"),
            {"user_id": user_id}
        )

    def _insert_course(self, db, user_id: int, course: Any) -> int:
        title = course.get("title") if isinstance(course, dict) else None
        if not isinstance(title, str) or not title:
            raise ValidationFailed(TITLE_REQUIRED)

        building_id = course.get("buildingId")
        # bool is an int subclass; true/false are not building ids
        if not isinstance(building_id, int) or isinstance(building_id, bool):
            building_id = None

        row = db.execute(
            text("""
                INSERT INTO courses (user_id, title, building_id)
                VALUES (:user_id, :title, :building_id)
                RETURNING id
            """),
            {"user_id": user_id, "title": title, "building_id": building_id}
        ).fetchone()
        return row[0]

    def _meetings_of(self, course: dict) -> list:
        meetings = course.get("meetings")
        if not isinstance(meetings, list):
            return []
        return [m for m in meetings if isinstance(m, dict)]

    def _insert_meeting(self, db, course_id: int, meeting: dict) -> bool:
        """Insert one meeting. Returns False when it was skipped for missing times."""
        start_time = _time_or_none(meeting.get("startTime"))
        end_time = _time_or_none(meeting.get("endTime"))
        if not start_time or not end_time:
            return False

        room = meeting.get("room")
        db.execute(
            text("""
                INSERT INTO meetings (course_id, days, start_time, end_time, room)
                VALUES (:course_id, :days, :start_time, :end_time, :room)
            """),
            {
                "course_id": course_id,
                "days": encode_days(normalize_days(meeting.get("days"))),
                "start_time": start_time,
                "end_time": end_time,
                "room": room if isinstance(room, str) and room else None,
            }
        )
        return True


# ============================================================
# CONVENIENCE FUNCTIONS
# ============================================================

def get_schedule_service() -> ScheduleService:
    """Get schedule service instance."""
    return ScheduleService()
