"""
Authentication Utility - JWT and Password handling.

Provides:
- Password hashing with bcrypt
- JWT token creation/verification
- FastAPI dependencies for protected routes
"""

from datetime import datetime, timedelta
from typing import Optional

from jose import JWTError, jwt
from passlib.context import CryptContext
from fastapi import Depends
from fastapi.security import HTTPBearer, HTTPAuthorizationCredentials

from campusnav.core.config import get_settings
from campusnav.core.errors import Unauthorized

settings = get_settings()

UNAUTHORIZED_MESSAGE = "Unauthorized"

# Password hashing
pwd_context = CryptContext(schemes=["bcrypt"], deprecated="auto")

# Bearer token extractor. Missing headers are handled in authenticate()
# so every failure gets the same 401.
bearer_scheme = HTTPBearer(auto_error=False)


def hash_password(password: str) -> str:
    """Hash password with bcrypt."""
    return pwd_context.hash(password)


def verify_password(plain_password: str, hashed_password: str) -> bool:
    """Verify password against hash."""
    return pwd_context.verify(plain_password, hashed_password)


def create_access_token(user_id: int, email: str, expires_delta: Optional[timedelta] = None) -> str:
    """Create JWT access token carrying the user id and email."""
    expire = datetime.utcnow() + (expires_delta or timedelta(minutes=settings.jwt_expire_minutes))
    to_encode = {"sub": str(user_id), "email": email, "exp": expire}
    return jwt.encode(to_encode, settings.jwt_secret_key, algorithm=settings.jwt_algorithm)


def decode_token(token: str) -> Optional[dict]:
    """Decode and verify JWT token. Returns None for bad signature or expiry."""
    try:
        return jwt.decode(token, settings.jwt_secret_key, algorithms=[settings.jwt_algorithm])
    except JWTError:
        return None


def authenticate(token: Optional[str]) -> dict:
    """
    Resolve a bearer token to {"user_id", "email"}.

    Missing, malformed, forged and expired tokens all raise the same
    Unauthorized error.
    """
    if not token:
        raise Unauthorized(UNAUTHORIZED_MESSAGE)

    payload = decode_token(token)
    if not payload:
        raise Unauthorized(UNAUTHORIZED_MESSAGE)

    user_id = payload.get("sub")
    try:
        user_id = int(user_id)
    except (TypeError, ValueError):
        raise Unauthorized(UNAUTHORIZED_MESSAGE)

    return {"user_id": user_id, "email": payload.get("email")}


async def get_current_user(
    credentials: Optional[HTTPAuthorizationCredentials] = Depends(bearer_scheme),
) -> dict:
    """
    FastAPI dependency - Get current authenticated user.

    Usage:
        @router.get("/protected")
        async def route(user: dict = Depends(get_current_user)):
            return user
    """
    if credentials is None or credentials.scheme.lower() != "bearer":
        raise Unauthorized(UNAUTHORIZED_MESSAGE)
    return authenticate(credentials.credentials)


async def get_optional_user(
    credentials: Optional[HTTPAuthorizationCredentials] = Depends(bearer_scheme),
) -> Optional[dict]:
    """Dependency for public routes: the user when a valid token is sent, else None."""
    if credentials is None:
        return None
    try:
        return authenticate(credentials.credentials)
    except Unauthorized:
        return None
