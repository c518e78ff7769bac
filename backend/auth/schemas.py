# ---------------------------------------------------------------------------
# Author  : Kyle <kyle@hacking-linux.com>
# Version : 20260206v1
# ---------------------------------------------------------------------------
"""Pydantic request / response models for the auth endpoints."""

from datetime import datetime

from pydantic import BaseModel


# -- Requests --------------------------------------------------------------
# Email format and password length are checked by auth.service so that the
# client receives a specific message rather than a generic validation error.


class RegisterRequest(BaseModel):
    email: str
    password: str


class LoginRequest(BaseModel):
    email: str
    password: str


# -- Responses -------------------------------------------------------------
# password_hash is deliberately absent from every response model.


class UserResponse(BaseModel):
    id: int
    email: str
    created_at: datetime

    model_config = {"from_attributes": True}


class AuthResponse(BaseModel):
    message: str
    user: UserResponse


class MessageResponse(BaseModel):
    message: str


class IdentityResponse(BaseModel):
    id: int
    email: str
