"""Conversation model: a two-party conversation created when a request is accepted."""

from __future__ import annotations

import uuid
from datetime import datetime, timezone

from sqlalchemy import (
    Column,
    DateTime,
    Integer,
    String,
    Text,
    UniqueConstraint,
    Uuid,
)
from sqlalchemy.orm import relationship

from app.db import Base
from app.models.mixins import JSONType


class Conversation(Base):
    """
    Exactly two participants, immutable after creation.

    participant_details is a denormalized copy of each participant's profile
    (display_name, photo_url, texting_id) refreshed on profile changes.
    last_message* always describes the tail of the message log.
    """

    __tablename__ = "conversations"

    __table_args__ = (
        UniqueConstraint("pair_low", "pair_high", name="uq_conversations_pair"),
    )

    id = Column(Uuid(as_uuid=True), primary_key=True, default=uuid.uuid4)
    participants = Column(JSONType, nullable=False)
    pair_low = Column(String(128), nullable=False, index=True)
    pair_high = Column(String(128), nullable=False, index=True)
    participant_details = Column(JSONType, nullable=False, default=dict)
    last_message = Column(Text, nullable=True)
    last_message_sender_id = Column(String(128), nullable=True)
    last_message_timestamp = Column(DateTime(timezone=True), nullable=True)
    message_seq = Column(Integer, nullable=False, default=0)
    created_at = Column(
        DateTime(timezone=True),
        nullable=False,
        default=lambda: datetime.now(timezone.utc),
    )

    messages = relationship(
        "Message",
        back_populates="conversation",
        cascade="all, delete-orphan",
        passive_deletes=True,
        order_by="[Message.timestamp, Message.sequence]",
    )

    def has_participant(self, uid: str) -> bool:
        return uid in (self.pair_low, self.pair_high)

    def other_participant(self, uid: str) -> str | None:
        for participant in self.participants or []:
            if participant != uid:
                return participant
        return None
