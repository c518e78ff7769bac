# ---------------------------------------------------------------------------
# Author  : Kyle <kyle@hacking-linux.com>
# Version : 20260206v1
# ---------------------------------------------------------------------------
"""
Central security module.  All cryptographic primitives and auth guards live
here.  No other module should touch raw crypto directly.

Responsibilities
----------------
1. Password hashing / verification          (passlib pbkdf2_sha256)
2. Session tokens carried in a cookie       (PyJWT / HS256)
3. FastAPI dependency guards                (get_current_identity, require_user)
"""

from dataclasses import dataclass
from datetime import datetime, timedelta, timezone
from typing import Optional

import jwt as _jwt        # PyJWT
from passlib.hash import pbkdf2_sha256 as _pbkdf2  # pure Python, no binary deps
from fastapi import Cookie, Depends, Request, Response

from core.config import settings
from core.errors import InternalError, Unauthorized

# ---------------------------------------------------------------------------
# 1.  pbkdf2_sha256 – password hashing
# ---------------------------------------------------------------------------
# Each hash gets its own random salt, embedded in the hash string together
# with the round count, so no separate salt column is needed.
# ---------------------------------------------------------------------------


def hash_password(plain: str) -> str:
    """
    Hash a plaintext password with PBKDF2-SHA256.

    Returns the full passlib hash string, e.g. ``"$pbkdf2-sha256$600000$..."``.
    """
    return _pbkdf2.using(rounds=settings.password_hash_rounds).hash(plain)


def verify_password(plain: str, stored_hash: str) -> bool:
    """
    Constant-time verification of a plaintext password against a hash
    produced by :func:`hash_password`.

    A mismatch is ``False``.  A stored hash that passlib cannot parse is a
    data problem, not a bad login, and raises :class:`InternalError`.
    """
    try:
        return _pbkdf2.verify(plain, stored_hash)
    except (ValueError, TypeError) as exc:
        raise InternalError("Stored password hash is malformed") from exc


# ---------------------------------------------------------------------------
# 2.  Session tokens
# ---------------------------------------------------------------------------

SESSION_COOKIE_NAME = "auth-session"
_ALGORITHM = "HS256"


@dataclass(frozen=True)
class Identity:
    """The authenticated caller, as recovered from a session token."""

    user_id: int
    email: str


class SessionManager:
    """
    Issues, resolves and revokes session tokens.

    The token is a signed JWT holding the user id and email, so there is no
    server-side session table: revocation means overwriting the client's
    cookie with an expired one.
    """

    def __init__(self, secret_key: str, max_age: timedelta, secure: bool = False):
        self._secret_key = secret_key
        self.max_age = max_age
        self.secure = secure

    def create(self, user_id: int, email: str) -> str:
        now = datetime.now(timezone.utc)
        payload = {
            "sub": email,
            "user_id": user_id,
            "iat": now,
            "exp": now + self.max_age,
        }
        return _jwt.encode(payload, self._secret_key, algorithm=_ALGORITHM)

    def resolve(self, token: Optional[str]) -> Optional[Identity]:
        """
        Return the identity carried by *token*, or ``None`` when the token is
        missing, malformed, expired, tampered with or lacks the expected
        claims.
        """
        if not token:
            return None
        try:
            payload = _jwt.decode(
                token,
                self._secret_key,
                algorithms=[_ALGORITHM],
                options={"require": ["exp", "sub"]},
            )
        except _jwt.InvalidTokenError:
            return None

        user_id = payload.get("user_id")
        email = payload.get("sub")
        if not isinstance(user_id, int) or isinstance(user_id, bool) or not isinstance(email, str):
            return None
        return Identity(user_id=user_id, email=email)

    def set_cookie(self, response: Response, token: str) -> None:
        response.set_cookie(
            key=SESSION_COOKIE_NAME,
            value=token,
            max_age=int(self.max_age.total_seconds()),
            path="/",
            secure=self.secure,
            httponly=True,
            samesite="lax",
        )

    def invalidate(self, response: Response) -> str:
        """
        Overwrite the client's session cookie with an empty, already expired
        value.  Safe to call when no session exists.
        """
        response.delete_cookie(
            key=SESSION_COOKIE_NAME,
            path="/",
            secure=self.secure,
            httponly=True,
            samesite="lax",
        )
        return ""


# ---------------------------------------------------------------------------
# 3.  FastAPI dependency guards
# ---------------------------------------------------------------------------


def get_session_manager(request: Request) -> SessionManager:
    """Dependency: the SessionManager built at startup (see main.py)."""
    return request.app.state.session_manager


def get_current_identity(
    session_token: Optional[str] = Cookie(default=None, alias=SESSION_COOKIE_NAME),
    manager: SessionManager = Depends(get_session_manager),
) -> Optional[Identity]:
    """Dependency: the caller's identity, or None for anonymous requests."""
    return manager.resolve(session_token)


def require_user(identity: Optional[Identity] = Depends(get_current_identity)) -> Identity:
    """
    Dependency: reject anonymous callers with 401 before the handler runs.
    Returns the resolved :class:`Identity`.
    """
    if identity is None:
        raise Unauthorized("Authentication required")
    return identity


# -- IP Address extraction ----------------------------------------------------


def get_client_ip(request: Request) -> str:
    """
    Extract the client IP address from the request.
    Checks X-Forwarded-For header first (for proxies), then falls back to client host.
    """
    forwarded = request.headers.get("X-Forwarded-For")
    if forwarded:
        # X-Forwarded-For can contain multiple IPs, take the first (original client)
        return forwarded.split(",")[0].strip()

    if request.client:
        return request.client.host

    return "unknown"
