# ---------------------------------------------------------------------------
# Author  : Kyle <kyle@hacking-linux.com>
# Version : 20260206v1
# ---------------------------------------------------------------------------
"""
Auth endpoints – register, login, logout, current-session info.

The session is carried in an HTTP-only cookie; the response bodies never
contain the token or the password hash.
"""

from fastapi import APIRouter, Depends, Response, status
from sqlalchemy.orm import Session

from database import get_db
from core.security import Identity, SessionManager, get_session_manager, require_user
from auth import service
from auth.schemas import (
    AuthResponse,
    IdentityResponse,
    LoginRequest,
    MessageResponse,
    RegisterRequest,
    UserResponse,
)

router = APIRouter(prefix="/api/auth", tags=["auth"])


# ---------------------------------------------------------------------------
# POST /api/auth/register
# ---------------------------------------------------------------------------


@router.post("/register", response_model=AuthResponse, status_code=status.HTTP_201_CREATED)
def register(body: RegisterRequest, db: Session = Depends(get_db)):
    """Create an account.  Does not log the new user in."""
    user = service.register(db, body.email, body.password)
    return AuthResponse(
        message="User created successfully",
        user=UserResponse.model_validate(user),
    )


# ---------------------------------------------------------------------------
# POST /api/auth/login
# ---------------------------------------------------------------------------


@router.post("/login", response_model=AuthResponse)
def login(
    body: LoginRequest,
    response: Response,
    db: Session = Depends(get_db),
    sessions: SessionManager = Depends(get_session_manager),
):
    """Verify credentials and start a session cookie."""
    user = service.authenticate(db, body.email, body.password)
    sessions.set_cookie(response, sessions.create(user.id, user.email))
    return AuthResponse(
        message="Login successful",
        user=UserResponse.model_validate(user),
    )


# ---------------------------------------------------------------------------
# POST /api/auth/logout
# ---------------------------------------------------------------------------


@router.post("/logout", response_model=MessageResponse)
def logout(response: Response, sessions: SessionManager = Depends(get_session_manager)):
    """Expire the session cookie.  Succeeds even without a valid session."""
    sessions.invalidate(response)
    return MessageResponse(message="Logout successful")


# ---------------------------------------------------------------------------
# GET /api/auth/me
# ---------------------------------------------------------------------------


@router.get("/me", response_model=IdentityResponse)
def me(identity: Identity = Depends(require_user)):
    """Return the identity held by the session cookie."""
    return IdentityResponse(id=identity.user_id, email=identity.email)
