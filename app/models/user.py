"""User profile and its public lookup record."""

from __future__ import annotations

from sqlalchemy import Boolean, Column, String, Text

from app.db import Base
from app.models.mixins import JSONType, TimestampMixin


class User(Base, TimestampMixin):
    """Private profile of a user; holds the viewer's chat filter settings."""

    __tablename__ = "users"

    uid = Column(String(128), primary_key=True)
    display_name = Column(String(256), nullable=False)
    display_name_is_set = Column(Boolean, nullable=False, default=False)
    texting_id = Column(String(9), nullable=False)
    texting_id_is_set = Column(Boolean, nullable=False, default=False)
    photo_url = Column(Text, nullable=True)
    visibility = Column(String(16), nullable=False, default="private")
    chat_filters = Column(JSONType, nullable=False, default=dict)


class UserLookup(Base):
    """Public lookup record used for discovery (exact id/name match, prefix search)."""

    __tablename__ = "user_lookups"

    uid = Column(String(128), primary_key=True)
    display_name = Column(String(256), nullable=False, index=True)
    texting_id = Column(String(9), nullable=False, unique=True, index=True)
    photo_url = Column(Text, nullable=True)
    visibility = Column(String(16), nullable=False, default="private")
