# ---------------------------------------------------------------------------
# Author  : Kyle <kyle@hacking-linux.com>
# Version : 20260206v1
# ---------------------------------------------------------------------------
"""
Development sample data – one user and a handful of todos.

Runs at startup when SEED_DATA=true, or on demand via bin/seed_data.py.
Never enable it against a production database.
"""

from sqlalchemy.orm import Session

from core.logger import logger
from core.security import hash_password
from models.todo import Todo
from models.user import User

TEST_USER_EMAIL = "test@example.com"
TEST_USER_PASSWORD = "password123"

# (title, description, priority, completed)
_TEST_TODOS = [
    ("Complete project setup", "Set up the initial project structure and configurations", 3, True),
    ("Implement authentication", "Create user registration and login functionality", 3, False),
    ("Build Todo CRUD", "Implement create, read, update, delete operations for todos", 2, False),
    ("Design UI/UX", "Create responsive and intuitive user interface", 2, False),
    ("Write tests", "Add unit and integration tests", 1, False),
]


def insert_test_data(db: Session) -> bool:
    """
    Insert the sample user and todos.  Returns False without touching the
    database when the sample user already exists.
    """
    if db.query(User.id).filter(User.email == TEST_USER_EMAIL).first():
        logger.info("Test data already exists, skipping insertion")
        return False

    user = User(email=TEST_USER_EMAIL, password_hash=hash_password(TEST_USER_PASSWORD))
    db.add(user)
    db.flush()  # get user.id before adding the todos

    for title, description, priority, completed in _TEST_TODOS:
        db.add(Todo(
            user_id=user.id,
            title=title,
            description=description,
            priority=priority,
            completed=completed,
        ))
    db.commit()

    logger.info("Test data inserted for %s", TEST_USER_EMAIL)
    return True
