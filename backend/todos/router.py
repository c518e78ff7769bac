# ---------------------------------------------------------------------------
# Author  : Kyle <kyle@hacking-linux.com>
# Version : 20260206v1
# ---------------------------------------------------------------------------
"""
Todo endpoints – CRUD plus the completed-flag toggle.

Every handler depends on ``require_user``: anonymous requests are rejected
with 401 before any of the code below runs, and the resolved identity is
handed in as a parameter.  Ownership checks live in ``todos.service``.
"""

from typing import List

from fastapi import APIRouter, Depends, status
from sqlalchemy.orm import Session

from database import get_db
from core.security import Identity, require_user
from auth.schemas import MessageResponse
from todos import service
from todos.schemas import TodoCreate, TodoResponse, TodoUpdate

router = APIRouter(prefix="/api/todos", tags=["todos"])


# ---------------------------------------------------------------------------
# GET /api/todos  – list the current user's todos
# ---------------------------------------------------------------------------


@router.get("", response_model=List[TodoResponse])
def list_todos(
    identity: Identity = Depends(require_user),
    db: Session = Depends(get_db),
):
    """Newest first.  An empty list when the user has no todos."""
    return service.list_todos(db, identity.user_id)


# ---------------------------------------------------------------------------
# POST /api/todos  – create a todo
# ---------------------------------------------------------------------------


@router.post("", response_model=TodoResponse, status_code=status.HTTP_201_CREATED)
def create_todo(
    body: TodoCreate,
    identity: Identity = Depends(require_user),
    db: Session = Depends(get_db),
):
    return service.create_todo(
        db,
        identity.user_id,
        title=body.title,
        description=body.description,
        priority=body.priority,
    )


# ---------------------------------------------------------------------------
# PUT /api/todos/{id}  – replace title, description and priority
# ---------------------------------------------------------------------------


@router.put("/{todo_id}", response_model=TodoResponse)
def update_todo(
    todo_id: int,
    body: TodoUpdate,
    identity: Identity = Depends(require_user),
    db: Session = Depends(get_db),
):
    return service.update_todo(
        db,
        identity.user_id,
        todo_id,
        title=body.title,
        description=body.description,
        priority=body.priority,
    )


# ---------------------------------------------------------------------------
# DELETE /api/todos/{id}
# ---------------------------------------------------------------------------


@router.delete("/{todo_id}", response_model=MessageResponse)
def delete_todo(
    todo_id: int,
    identity: Identity = Depends(require_user),
    db: Session = Depends(get_db),
):
    service.delete_todo(db, identity.user_id, todo_id)
    return MessageResponse(message="Todo deleted successfully")


# ---------------------------------------------------------------------------
# PATCH /api/todos/{id}/toggle  – flip the completed flag
# ---------------------------------------------------------------------------


@router.patch("/{todo_id}/toggle", response_model=TodoResponse)
def toggle_todo(
    todo_id: int,
    identity: Identity = Depends(require_user),
    db: Session = Depends(get_db),
):
    return service.toggle_todo(db, identity.user_id, todo_id)
