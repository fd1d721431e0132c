"""
Client module - talks to the CampusNav API and keeps the schedule draft.

- LocalStore / ClientSession: persisted client state (token, user, draft)
- CampusNavClient: HTTP API client
- ScheduleEditor: editable draft with load fallback and replace-all save
- dashboard: today's meetings and building helpers for the map
"""

from campusnav.client.local_store import LocalStore, open_store
from campusnav.client.session import ClientSession
from campusnav.client.api_client import ApiError, CampusNavClient
from campusnav.client.models import DraftCourse, DraftMeeting, LegacyCourse, migrate, migrate_courses
from campusnav.client.editor import ScheduleEditor

__all__ = [
    "LocalStore", "open_store", "ClientSession",
    "ApiError", "CampusNavClient",
    "DraftCourse", "DraftMeeting", "LegacyCourse", "migrate", "migrate_courses",
    "ScheduleEditor",
]
