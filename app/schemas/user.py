"""Pydantic schemas for user profiles, lookup records and chat filter settings."""

from __future__ import annotations

from datetime import datetime
from typing import Literal, Optional

from pydantic import BaseModel, Field

Visibility = Literal["public", "private"]

# -----------------------------------------------------------------------------
# Directory (public lookup record)
# -----------------------------------------------------------------------------


class UserRef(BaseModel):
    """Snapshot of a user's public lookup record."""

    uid: str
    display_name: str
    texting_id: str
    photo_url: Optional[str] = None
    visibility: Visibility = "private"

    model_config = {"from_attributes": True}


# -----------------------------------------------------------------------------
# Profile
# -----------------------------------------------------------------------------


class ChatFilters(BaseModel):
    """Viewer-side filter settings."""

    block_links: bool = False
    block_profanity: bool = False


class ProfileCreate(BaseModel):
    """Schema for creating the caller's profile."""

    display_name: Optional[str] = Field(default=None, max_length=256)
    photo_url: Optional[str] = None


class ProfileUpdate(BaseModel):
    """Schema for updating a profile. All fields optional."""

    display_name: Optional[str] = Field(default=None, min_length=1, max_length=256)
    photo_url: Optional[str] = None
    visibility: Optional[Visibility] = None


class TextingIdUpdate(BaseModel):
    texting_id: str


class ProfileRead(BaseModel):
    """The caller's own profile."""

    uid: str
    display_name: str
    display_name_is_set: bool
    texting_id: str
    texting_id_is_set: bool
    photo_url: Optional[str] = None
    visibility: Visibility
    chat_filters: ChatFilters = Field(default_factory=ChatFilters)
    created_at: datetime
    updated_at: datetime

    model_config = {"from_attributes": True}
