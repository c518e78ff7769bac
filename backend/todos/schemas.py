# ---------------------------------------------------------------------------
# Author  : Kyle <kyle@hacking-linux.com>
# Version : 20260206v1
# ---------------------------------------------------------------------------
"""Pydantic request / response models for the todo endpoints."""

from datetime import datetime
from typing import Optional

from pydantic import BaseModel


# -- Requests --------------------------------------------------------------
# Null, empty and zero values are accepted here and handled by
# todos.service (rejected and defaulted to 1, respectively).


class TodoCreate(BaseModel):
    title: Optional[str] = ""
    description: Optional[str] = ""
    priority: Optional[int] = 0


class TodoUpdate(BaseModel):
    title: Optional[str] = ""
    description: Optional[str] = ""
    priority: Optional[int] = 0


# -- Responses -------------------------------------------------------------


class TodoResponse(BaseModel):
    id: int
    user_id: int
    title: str
    description: str
    completed: bool
    priority: int
    created_at: datetime
    updated_at: datetime

    model_config = {"from_attributes": True}
