"""Pydantic schemas for registration, login and the public user shape."""

import uuid
from datetime import datetime
from typing import Optional

from pydantic import BaseModel, Field


class RegisterRequest(BaseModel):
    username: str = Field(..., min_length=3, max_length=50)
    email: str = Field(..., min_length=3, max_length=255, pattern=r"^[^@\s]+@[^@\s]+$")
    password: str = Field(..., min_length=6)
    phone: Optional[str] = Field(None, max_length=30)
    is_seller: bool = False
    img: Optional[str] = None
    country: Optional[str] = Field(None, max_length=100)
    description: Optional[str] = None


class LoginRequest(BaseModel):
    username: str = Field(..., min_length=1)
    password: str = Field(..., min_length=1)


class UserRead(BaseModel):
    """Everything about a user except the password hash."""
    id: uuid.UUID
    username: str
    email: str
    phone: Optional[str] = None
    is_seller: bool
    img: Optional[str] = None
    country: Optional[str] = None
    description: Optional[str] = None
    created_at: datetime

    model_config = {"from_attributes": True}


class AuthResponse(BaseModel):
    token: str
    user: UserRead
