"""
Authentication Routes

POST /register - Register new user, returns user + JWT token
POST /login - Login and get JWT token
GET /me - Get current user info
"""

from fastapi import APIRouter, Depends

from campusnav.core.auth import get_current_user
from campusnav.core.errors import Unauthorized
from campusnav.services.auth_service import get_auth_service
from campusnav.schemas.schemas import (
    RegisterRequest, LoginRequest, AuthResponse, UserResponse
)

router = APIRouter(tags=["Authentication"])


@router.post("/register", response_model=AuthResponse, status_code=201)
async def register(request: RegisterRequest):
    """
    Register a new account with an institutional email.

    The response already carries a token; no separate login needed.
    """
    result = get_auth_service().register(
        request.email, request.password, request.confirm_password
    )
    return AuthResponse(message="User registered successfully", **result)


@router.post("/login", response_model=AuthResponse)
async def login(request: LoginRequest):
    """
    Login and receive JWT access token.

    Include token in requests: Authorization: Bearer <token>
    """
    result = get_auth_service().login(request.email, request.password)
    return AuthResponse(message="Login successful", **result)


@router.get("/me", response_model=UserResponse)
async def get_me(user: dict = Depends(get_current_user)):
    """Get current authenticated user's info."""
    row = get_auth_service().get_user(user["user_id"])
    if not row:
        # Token outlived its user
        raise Unauthorized("Unauthorized")
    return UserResponse(**row)
