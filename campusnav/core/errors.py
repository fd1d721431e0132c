"""
Domain errors.

Services raise these; the API layer turns them into {"error": message}
responses with the matching status code.
"""


class CampusNavError(Exception):
    """Base error carrying a client-safe message and an HTTP status."""

    http_status = 500

    def __init__(self, message: str):
        super().__init__(message)
        self.message = message


class ValidationFailed(CampusNavError):
    """Bad input. Always raised before anything is persisted."""

    http_status = 400


class Unauthorized(CampusNavError):
    """Missing/invalid token or wrong credentials. Message stays generic."""

    http_status = 401


class PersistenceError(CampusNavError):
    """Database unreachable or integrity failure. Transaction already rolled back."""

    http_status = 500
