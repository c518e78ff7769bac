# ---------------------------------------------------------------------------
# Author  : Kyle <kyle@hacking-linux.com>
# Version : 20260206v1
# ---------------------------------------------------------------------------
"""
Account operations – registration and credential verification.

Security notes
--------------
* ``authenticate`` raises the *same* error whether the email doesn't exist or
  the password is wrong.  This prevents user-enumeration attacks.
* Plaintext passwords never leave this module; only the passlib hash is
  persisted.
"""

import re

from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session

from core.errors import Conflict, InvalidInput, Unauthorized
from core.logger import logger
from core.security import hash_password, verify_password
from models.user import User

_EMAIL_RE = re.compile(r"[a-zA-Z0-9._%+-]+@[a-zA-Z0-9.-]+\.[a-zA-Z]{2,}")
_MIN_PASSWORD_LENGTH = 6

# Generic message used for both "no such email" and "wrong password"
_LOGIN_FAIL = "Invalid credentials"


def _validate_registration(email: str, password: str) -> None:
    if not _EMAIL_RE.fullmatch(email):
        raise InvalidInput("Invalid email format")
    # Counted in characters, not encoded bytes
    if len(password) < _MIN_PASSWORD_LENGTH:
        raise InvalidInput(f"Password must be at least {_MIN_PASSWORD_LENGTH} characters long")


def register(db: Session, email: str, password: str) -> User:
    """Create a new account and return the stored row."""
    _validate_registration(email, password)

    if db.query(User.id).filter(User.email == email).first():
        raise Conflict("User already exists")

    user = User(email=email, password_hash=hash_password(password))
    db.add(user)
    try:
        db.commit()
    except IntegrityError:
        # Lost a race against a concurrent registration of the same email
        db.rollback()
        raise Conflict("User already exists")
    db.refresh(user)

    logger.info("Registered user id=%d email=%s", user.id, user.email)
    return user


def authenticate(db: Session, email: str, password: str) -> User:
    """Return the user owning *email* if *password* matches."""
    user = db.query(User).filter(User.email == email).first()

    # Unified failure path – no information leaks about whether the email exists
    if not user or not verify_password(password, user.password_hash):
        logger.info("Failed login for email=%s", email)
        raise Unauthorized(_LOGIN_FAIL)

    logger.info("User id=%d logged in", user.id)
    return user
