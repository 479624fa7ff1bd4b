"""Pydantic schemas for communities, posts and likes.

Learn: none of the Create schemas declare a user/owner field. Pydantic
ignores unknown keys, so a client sending {"user_id": "..."} cannot choose
who owns what it creates — the owner is always the requester.
"""

import uuid
from datetime import datetime
from typing import Optional

from pydantic import BaseModel, Field


# ─── Communities ────────────────────────────────────────

class CommunityCreate(BaseModel):
    name: str = Field(..., min_length=1, max_length=100)
    description: str = ""


class CommunityUpdate(BaseModel):
    name: Optional[str] = Field(None, min_length=1, max_length=100)
    description: Optional[str] = None


class CommunityRead(BaseModel):
    id: uuid.UUID
    owner_id: uuid.UUID
    name: str
    description: str
    created_at: datetime

    model_config = {"from_attributes": True}


# ─── Posts ──────────────────────────────────────────────

class PostCreate(BaseModel):
    community_id: uuid.UUID
    title: str = Field(..., min_length=1, max_length=200)
    content: str = Field(..., min_length=1)
    link: str = ""
    image: str = ""
    video: str = ""
    audio: str = ""


class PostUpdate(BaseModel):
    """Partial update. Empty strings count as "not provided"."""
    title: Optional[str] = Field(None, max_length=200)
    content: Optional[str] = None
    link: Optional[str] = None


class PostRead(BaseModel):
    id: uuid.UUID
    community_id: uuid.UUID
    user_id: uuid.UUID
    title: str
    content: str
    link: str
    image: str
    video: str
    audio: str
    created_at: datetime
    updated_at: datetime

    model_config = {"from_attributes": True}


class PostAuthor(BaseModel):
    """Public profile of a post's author. No email, phone or password."""
    id: uuid.UUID
    username: str
    img: Optional[str] = None
    country: Optional[str] = None
    is_seller: bool

    model_config = {"from_attributes": True}


class PostWithAuthor(PostRead):
    author: Optional[PostAuthor] = None


class PostDetail(PostWithAuthor):
    like_count: int = 0


# ─── Likes ──────────────────────────────────────────────

class LikeRead(BaseModel):
    id: uuid.UUID
    post_id: uuid.UUID
    user_id: uuid.UUID
    created_at: datetime

    model_config = {"from_attributes": True}


class MessageResponse(BaseModel):
    message: str
