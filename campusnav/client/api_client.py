"""
CampusNav API client.

Thin httpx wrapper over the REST API. Failures raise ApiError with the
server's short message. No retries: a failed call is reported once and
left to the caller.
"""

import logging
from typing import List, Optional

import httpx

from campusnav.client.session import ClientSession
from campusnav.client.local_store import LocalStore

logger = logging.getLogger(__name__)

DEFAULT_BASE_URL = "http://localhost:8000"


class ApiError(Exception):
    """A request failed. `status_code` is None when the server was never reached."""

    def __init__(self, message: str, status_code: Optional[int] = None):
        super().__init__(message)
        self.message = message
        self.status_code = status_code


class CampusNavClient:
    """
    Usage:
        client = CampusNavClient(session=ClientSession(open_store()))
        client.login("me@go.minnstate.edu", "secret")
        courses = client.fetch_schedule()
    """

    def __init__(
        self,
        base_url: str = DEFAULT_BASE_URL,
        session: Optional[ClientSession] = None,
        http: Optional[httpx.Client] = None,
    ):
        self.session = session or ClientSession(LocalStore())
        # Any httpx.Client works here, including a FastAPI TestClient
        self.http = http or httpx.Client(base_url=base_url)

    # ------------------------------------------------------------
    # Transport
    # ------------------------------------------------------------

    def _request(self, method: str, path: str, json: Optional[dict] = None,
                 auth: bool = False, fallback_error: str = "Request failed") -> dict:
        headers = self.session.auth_headers() if auth else {}
        try:
            response = self.http.request(method, f"/api{path}", json=json, headers=headers)
        except httpx.HTTPError as e:
            logger.warning("%s %s failed: %s", method, path, e)
            raise ApiError(f"{fallback_error}: server unreachable")

        try:
            data = response.json()
        except ValueError:
            data = {}

        if response.status_code >= 400:
            message = data.get("error") if isinstance(data, dict) else None
            raise ApiError(message or fallback_error, response.status_code)
        return data

    # ------------------------------------------------------------
    # Auth
    # ------------------------------------------------------------

    def register(self, email: str, password: str, confirm_password: str) -> dict:
        """Register and start a session. Returns the user."""
        data = self._request(
            "POST", "/register",
            json={"email": email, "password": password, "confirmPassword": confirm_password},
            fallback_error="Registration failed",
        )
        self.session.start(data["token"], data["user"])
        return data["user"]

    def login(self, email: str, password: str) -> dict:
        """Login and start a session. Returns the user."""
        data = self._request(
            "POST", "/login",
            json={"email": email, "password": password},
            fallback_error="Login failed",
        )
        self.session.start(data["token"], data["user"])
        return data["user"]

    def logout(self) -> None:
        self.session.clear()

    @property
    def is_authenticated(self) -> bool:
        return self.session.is_authenticated

    # ------------------------------------------------------------
    # Buildings
    # ------------------------------------------------------------

    def list_buildings(self) -> List[dict]:
        # Token is sent when present; the server decides if it needs it
        data = self._request("GET", "/buildings", auth=True, fallback_error="Failed to load buildings")
        return data.get("buildings", [])

    # ------------------------------------------------------------
    # Schedule
    # ------------------------------------------------------------

    def fetch_schedule(self) -> List[dict]:
        data = self._request("GET", "/schedule", auth=True, fallback_error="Failed to fetch schedule")
        courses = data.get("courses")
        return courses if isinstance(courses, list) else []

    def replace_schedule(self, courses: List[dict]) -> bool:
        """Send the whole schedule. The server drops everything it had before."""
        data = self._request(
            "POST", "/schedule", json={"courses": courses}, auth=True,
            fallback_error="Failed to save schedule",
        )
        return bool(data.get("success"))

    def close(self) -> None:
        self.http.close()
