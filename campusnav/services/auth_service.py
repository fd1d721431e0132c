"""
Auth Service - registration and login against the users table.

Validation happens in a fixed order and every failure is raised before
anything is written. Login failures share one message so callers cannot
tell an unknown email from a wrong password.
"""

import logging
from typing import Optional

from sqlalchemy import text
from sqlalchemy.exc import IntegrityError, SQLAlchemyError

from campusnav.core.auth import hash_password, verify_password, create_access_token
from campusnav.core.config import get_settings
from campusnav.core.errors import ValidationFailed, Unauthorized, PersistenceError
from campusnav.db.database import get_db_session

logger = logging.getLogger(__name__)

ALL_FIELDS_REQUIRED = "All fields are required"
PASSWORDS_DO_NOT_MATCH = "Passwords do not match"
WRONG_EMAIL_DOMAIN = "Please use your institutional email address"
EMAIL_TAKEN = "User already exists with this email"
INVALID_CREDENTIALS = "Invalid email or password"


class AuthService:
    """Credential store access plus token issuing."""

    def __init__(self, email_suffix: Optional[str] = None):
        self.email_suffix = email_suffix or get_settings().institution_email_suffix

    def register(self, email: Optional[str], password: Optional[str], confirm_password: Optional[str]) -> dict:
        """
        Create a user and return {"user": {...}, "token": ...}.

        Order: fields present, passwords match, institutional suffix,
        email unused, then hash + insert + token.
        """
        if not email or not password or not confirm_password:
            raise ValidationFailed(ALL_FIELDS_REQUIRED)

        if password != confirm_password:
            raise ValidationFailed(PASSWORDS_DO_NOT_MATCH)

        if not email.endswith(self.email_suffix):
            raise ValidationFailed(WRONG_EMAIL_DOMAIN)

        if self.get_user_by_email(email):
            raise ValidationFailed(EMAIL_TAKEN)

        password_hash = hash_password(password)
        try:
            with get_db_session() as db:
                row = db.execute(
                    text("""
                        INSERT INTO users (email, password_hash)
                        VALUES (:email, :password_hash)
                        RETURNING id, email
                    """),
                    {"email": email, "password_hash": password_hash}
                ).fetchone()
        except IntegrityError:
            # Lost a race with another registration for the same email
            raise ValidationFailed(EMAIL_TAKEN)
        except SQLAlchemyError as e:
            logger.error("Registration failed for %s: %s", email, e)
            raise PersistenceError("Internal server error")

        user = {"id": row[0], "email": row[1]}
        logger.info("Registered user %s", user["id"])
        return {"user": user, "token": create_access_token(user["id"], user["email"])}

    def login(self, email: Optional[str], password: Optional[str]) -> dict:
        """Check credentials and return {"user": {...}, "token": ...}."""
        if not email or not password:
            raise ValidationFailed(ALL_FIELDS_REQUIRED)

        try:
            with get_db_session() as db:
                row = db.execute(
                    text("SELECT id, email, password_hash FROM users WHERE email = :email"),
                    {"email": email}
                ).fetchone()
        except SQLAlchemyError as e:
            logger.error("Login lookup failed: %s", e)
            raise PersistenceError("Internal server error")

        if not row or not verify_password(password, row[2]):
            logger.info("Rejected login attempt")
            raise Unauthorized(INVALID_CREDENTIALS)

        user = {"id": row[0], "email": row[1]}
        return {"user": user, "token": create_access_token(user["id"], user["email"])}

    def get_user(self, user_id: int) -> Optional[dict]:
        with get_db_session() as db:
            row = db.execute(
                text("SELECT id, email FROM users WHERE id = :id"),
                {"id": user_id}
            ).fetchone()
        return {"id": row[0], "email": row[1]} if row else None

    def get_user_by_email(self, email: str) -> Optional[dict]:
        with get_db_session() as db:
            row = db.execute(
                text("SELECT id, email FROM users WHERE email = :email"),
                {"email": email}
            ).fetchone()
        return {"id": row[0], "email": row[1]} if row else None


# ============================================================
# CONVENIENCE FUNCTIONS
# ============================================================

def get_auth_service() -> AuthService:
    """Get auth service instance."""
    return AuthService()
