"""ConnectionRequest model: one row per unordered pair of users in the handshake."""

from __future__ import annotations

import uuid
from datetime import datetime, timezone

from sqlalchemy import (
    CheckConstraint,
    Column,
    DateTime,
    Index,
    String,
    UniqueConstraint,
    Uuid,
)

from app.db import Base


class ConnectionRequest(Base):
    """
    A pending handshake from one user to another.

    The pair is also stored canonically as (pair_low, pair_high) so the unique
    constraint covers both directions.
    """

    __tablename__ = "requests"

    __table_args__ = (
        UniqueConstraint("pair_low", "pair_high", name="uq_requests_pair"),
        CheckConstraint("from_uid <> to_uid", name="ck_requests_not_self"),
        Index("ix_requests_to_status", "to_uid", "status"),
    )

    id = Column(Uuid(as_uuid=True), primary_key=True, default=uuid.uuid4)
    from_uid = Column(String(128), nullable=False, index=True)
    to_uid = Column(String(128), nullable=False)
    status = Column(String(16), nullable=False, default="pending")
    pair_low = Column(String(128), nullable=False)
    pair_high = Column(String(128), nullable=False)
    created_at = Column(
        DateTime(timezone=True),
        nullable=False,
        default=lambda: datetime.now(timezone.utc),
    )
