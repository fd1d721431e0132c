"""
Schedule Editor - the client's working copy of the schedule.

The draft is the source of truth for the session. Every mutation is
written through to the LocalStore before the method returns. The server
is consulted once on load and written to only by save(), which replaces
the server copy wholesale.

Load rules:
- server has courses -> they become the draft (local-only work is dropped)
- server has none, or cannot be asked -> keep the local draft
- local records in the old flat shape are migrated on the way in
"""

import logging
from typing import List, Optional, Tuple, Union

from pydantic import ValidationError

from campusnav.client.api_client import ApiError, CampusNavClient
from campusnav.client.local_store import LocalStore
from campusnav.client.models import (
    DraftCourse, DraftMeeting, dump_courses, migrate_courses, migrate_record
)
from campusnav.schemas.schemas import WEEKDAY_TOKENS

logger = logging.getLogger(__name__)

DRAFT_KEY = "schedule:courses"

COURSE_FIELDS = {"title", "building_id", "building_code"}
MEETING_FIELDS = {"days", "start_time", "end_time", "room"}

Id = Union[int, str]


class ScheduleEditor:
    def __init__(self, store: LocalStore, client: CampusNavClient):
        self.store = store
        self.client = client
        self.courses: List[DraftCourse] = []
        self.last_error: Optional[str] = None

    # ------------------------------------------------------------
    # Load / save
    # ------------------------------------------------------------

    def load_local(self) -> Tuple[List[DraftCourse], bool]:
        """
        Read the stored draft, migrating legacy records one at a time.

        Returns (courses, intact). Records that fail validation are logged
        and skipped; intact is False when anything was skipped or the blob
        was not a list.
        """
        raw = self.store.get(DRAFT_KEY)
        if raw is None:
            return [], True
        if not isinstance(raw, list):
            logger.warning("Ignoring local schedule: expected a list, got %s", type(raw).__name__)
            return [], False

        courses, intact = [], True
        for index, record in enumerate(raw):
            try:
                courses.append(migrate_record(record))
            except ValidationError as e:
                logger.warning("Skipping unreadable local course #%d: %s", index, e)
                intact = False
        return courses, intact

    def load(self) -> List[DraftCourse]:
        """
        Build the draft from local storage and the server.

        A fetch failure is kept in last_error and the local draft is used.
        A partly unreadable local blob is left on disk as-is until the
        next edit.
        """
        self.last_error = None
        self.courses, local_intact = self.load_local()
        adopted_server = False

        if self.client.is_authenticated:
            try:
                server_courses = self.client.fetch_schedule()
            except ApiError as e:
                logger.warning("Schedule fetch failed, using local draft: %s", e.message)
                self.last_error = e.message
                server_courses = []
            if server_courses:
                self.courses = migrate_courses(server_courses)
                adopted_server = True

        if adopted_server or local_intact:
            self._persist()
        return self.courses

    def save(self) -> None:
        """Replace the server schedule with the draft. Raises ApiError on failure."""
        self.last_error = None
        try:
            self.client.replace_schedule(self.payload())
        except ApiError as e:
            self.last_error = e.message
            raise

    def payload(self) -> List[dict]:
        return dump_courses(self.courses)

    def _persist(self) -> None:
        self.store.set(DRAFT_KEY, dump_courses(self.courses))

    # ------------------------------------------------------------
    # Courses
    # ------------------------------------------------------------

    def course(self, course_id: Id) -> DraftCourse:
        for c in self.courses:
            if c.id == course_id:
                return c
        raise KeyError(f"No course {course_id!r}")

    def add_course(self, title: str = "", building_id: Optional[int] = None) -> DraftCourse:
        """New course at the top of the list, with one empty meeting."""
        course = DraftCourse(title=title, building_id=building_id, meetings=[DraftMeeting()])
        self.courses.insert(0, course)
        self._persist()
        return course

    def remove_course(self, course_id: Id) -> None:
        self.course(course_id)
        self.courses = [c for c in self.courses if c.id != course_id]
        self._persist()

    def update_course(self, course_id: Id, **changes) -> DraftCourse:
        unknown = set(changes) - COURSE_FIELDS
        if unknown:
            raise ValueError(f"Cannot update course fields: {sorted(unknown)}")
        course = self.course(course_id)
        for name, value in changes.items():
            setattr(course, name, value)
        self._persist()
        return course

    # ------------------------------------------------------------
    # Meetings
    # ------------------------------------------------------------

    def add_meeting(self, course_id: Id) -> DraftMeeting:
        course = self.course(course_id)
        meeting = DraftMeeting()
        course.meetings = course.meetings + [meeting]
        self._persist()
        return meeting

    def remove_meeting(self, course_id: Id, meeting_id: Id) -> None:
        course = self.course(course_id)
        course.meeting(meeting_id)
        course.meetings = [m for m in course.meetings if m.id != meeting_id]
        self._persist()

    def update_meeting(self, course_id: Id, meeting_id: Id, **changes) -> DraftMeeting:
        unknown = set(changes) - MEETING_FIELDS
        if unknown:
            raise ValueError(f"Cannot update meeting fields: {sorted(unknown)}")
        meeting = self.course(course_id).meeting(meeting_id)
        for name, value in changes.items():
            setattr(meeting, name, value)
        self._persist()
        return meeting

    def toggle_day(self, course_id: Id, meeting_id: Id, day: str) -> List[str]:
        """Add `day` if absent, remove it if present. Returns the new day list."""
        if day not in WEEKDAY_TOKENS:
            raise ValueError(f"Unknown day {day!r}; expected one of {WEEKDAY_TOKENS}")
        meeting = self.course(course_id).meeting(meeting_id)
        if day in meeting.days:
            meeting.days = [d for d in meeting.days if d != day]
        else:
            meeting.days = meeting.days + [day]
        self._persist()
        return meeting.days
