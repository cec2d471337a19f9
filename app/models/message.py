"""Message model: one row per message in a conversation's log."""

from __future__ import annotations

import uuid
from datetime import datetime, timezone

from sqlalchemy import Column, DateTime, ForeignKey, Index, Integer, String, Text, Uuid
from sqlalchemy.orm import relationship

from app.db import Base


class Message(Base):
    """Immutable except for deletion. Ordered by (timestamp, sequence)."""

    __tablename__ = "messages"

    __table_args__ = (
        Index(
            "ix_messages_conversation_order",
            "conversation_id",
            "timestamp",
            "sequence",
        ),
    )

    id = Column(Uuid(as_uuid=True), primary_key=True, default=uuid.uuid4)
    conversation_id = Column(
        Uuid(as_uuid=True),
        ForeignKey("conversations.id", ondelete="CASCADE"),
        nullable=False,
    )
    sender_id = Column(String(128), nullable=False)
    text = Column(Text, nullable=False)
    timestamp = Column(
        DateTime(timezone=True),
        nullable=False,
        default=lambda: datetime.now(timezone.utc),
    )
    sequence = Column(Integer, nullable=False)

    conversation = relationship("Conversation", back_populates="messages")
