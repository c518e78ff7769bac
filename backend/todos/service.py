# ---------------------------------------------------------------------------
# Author  : Kyle <kyle@hacking-linux.com>
# Version : 20260206v1
# ---------------------------------------------------------------------------
"""
Todo operations, always scoped to the owning user.

Ownership invariants
--------------------
* Every query and every write filters on ``(id, user_id)`` together.
* Update and toggle first load the row to tell "missing" (404) apart from
  "someone else's" (403), then issue a write that repeats the owner
  predicate.  If the row vanished in between, the write touches zero rows
  and the caller gets 404.
* Delete is a single conditional statement and only ever reports 404, so a
  non-owner cannot discover the existence of other users' todos.
"""

from datetime import datetime, timedelta, timezone
from typing import List, Optional

from sqlalchemy import not_
from sqlalchemy.orm import Session

from database import utcnow
from core.errors import Forbidden, InvalidInput, NotFound
from core.logger import logger
from models.todo import Todo

DEFAULT_PRIORITY = 1


def _normalise_priority(priority: Optional[int]) -> int:
    return priority or DEFAULT_PRIORITY


def _require_title(title: Optional[str]) -> str:
    if not title:
        raise InvalidInput("Title is required")
    return title


def _next_timestamp(previous: Optional[datetime]) -> datetime:
    """
    Current UTC time, nudged forward if needed so that it is strictly later
    than *previous*.
    """
    now = utcnow()
    if previous is None:
        return now
    # SQLite hands back naive datetimes; they were stored as UTC
    if previous.tzinfo is None:
        previous = previous.replace(tzinfo=timezone.utc)
    if now <= previous:
        now = previous + timedelta(microseconds=1)
    return now


def _own_todo(db: Session, todo_id: int, owner_id: int) -> Todo:
    """
    Load a Todo by ID and verify it belongs to *owner_id*.

    Raises NotFound if the todo does not exist, Forbidden if it belongs to
    someone else.
    """
    todo = db.query(Todo).filter(Todo.id == todo_id).first()
    if not todo:
        raise NotFound("Todo not found")
    if todo.user_id != owner_id:
        raise Forbidden("Access denied")
    return todo


def _owned(db: Session, todo_id: int, owner_id: int):
    return db.query(Todo).filter(Todo.id == todo_id, Todo.user_id == owner_id)


def _apply(db: Session, todo: Todo, values: dict) -> Todo:
    """Write *values* to *todo* under the owner predicate and return the fresh row."""
    affected = _owned(db, todo.id, todo.user_id).update(values, synchronize_session=False)
    if affected == 0:
        db.rollback()
        raise NotFound("Todo not found")
    db.commit()
    db.refresh(todo)
    return todo


def list_todos(db: Session, owner_id: int) -> List[Todo]:
    """All todos of *owner_id*, newest first."""
    return (
        db.query(Todo)
        .filter(Todo.user_id == owner_id)
        .order_by(Todo.created_at.desc(), Todo.id.desc())
        .all()
    )


def create_todo(
    db: Session,
    owner_id: int,
    title: str,
    description: Optional[str] = "",
    priority: Optional[int] = 0,
) -> Todo:
    todo = Todo(
        user_id=owner_id,
        title=_require_title(title),
        description=description or "",
        priority=_normalise_priority(priority),
        completed=False,
    )
    db.add(todo)
    db.commit()
    db.refresh(todo)

    logger.info("User id=%d created todo id=%d", owner_id, todo.id)
    return todo


def update_todo(
    db: Session,
    owner_id: int,
    todo_id: int,
    title: str,
    description: Optional[str],
    priority: Optional[int],
) -> Todo:
    """Replace title, description and priority of an owned todo."""
    todo = _own_todo(db, todo_id, owner_id)
    title = _require_title(title)

    todo = _apply(
        db,
        todo,
        {
            Todo.title: title,
            Todo.description: description or "",
            Todo.priority: _normalise_priority(priority),
            Todo.updated_at: _next_timestamp(todo.updated_at),
        },
    )
    logger.info("User id=%d updated todo id=%d", owner_id, todo_id)
    return todo


def toggle_todo(db: Session, owner_id: int, todo_id: int) -> Todo:
    """Flip the completed flag of an owned todo."""
    todo = _own_todo(db, todo_id, owner_id)

    # Flipped in SQL so two concurrent toggles cannot both write the same value
    todo = _apply(
        db,
        todo,
        {
            Todo.completed: not_(Todo.completed),
            Todo.updated_at: _next_timestamp(todo.updated_at),
        },
    )
    logger.info("User id=%d toggled todo id=%d to completed=%s", owner_id, todo_id, todo.completed)
    return todo


def delete_todo(db: Session, owner_id: int, todo_id: int) -> None:
    affected = _owned(db, todo_id, owner_id).delete(synchronize_session=False)
    if affected == 0:
        db.rollback()
        raise NotFound("Todo not found or unauthorized")
    db.commit()
    logger.info("User id=%d deleted todo id=%d", owner_id, todo_id)
