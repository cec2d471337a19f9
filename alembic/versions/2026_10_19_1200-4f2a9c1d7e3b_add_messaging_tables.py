"""add messaging tables

Revision ID: 4f2a9c1d7e3b
Revises:
Create Date: 2026-10-19 12:00:00.000000

"""

from typing import Sequence, Union

from alembic import op
import sqlalchemy as sa
from sqlalchemy.dialects import postgresql

# revision identifiers, used by Alembic.
revision: str = "4f2a9c1d7e3b"
down_revision: Union[str, None] = None
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None


def upgrade() -> None:
    """Upgrade schema: users, user_lookups, requests, conversations, messages."""
    op.create_table(
        "users",
        sa.Column("uid", sa.String(length=128), nullable=False),
        sa.Column("display_name", sa.String(length=256), nullable=False),
        sa.Column(
            "display_name_is_set",
            sa.Boolean(),
            nullable=False,
            server_default=sa.false(),
        ),
        sa.Column("texting_id", sa.String(length=9), nullable=False),
        sa.Column(
            "texting_id_is_set", sa.Boolean(), nullable=False, server_default=sa.false()
        ),
        sa.Column("photo_url", sa.Text(), nullable=True),
        sa.Column(
            "visibility",
            sa.String(length=16),
            nullable=False,
            server_default="private",
        ),
        sa.Column(
            "chat_filters",
            postgresql.JSONB(astext_type=sa.Text()),
            nullable=False,
            server_default=sa.text("'{}'::jsonb"),
        ),
        sa.Column(
            "created_at",
            sa.DateTime(timezone=True),
            nullable=False,
            server_default=sa.text("now()"),
        ),
        sa.Column(
            "updated_at",
            sa.DateTime(timezone=True),
            nullable=False,
            server_default=sa.text("now()"),
        ),
        sa.PrimaryKeyConstraint("uid"),
    )

    op.create_table(
        "user_lookups",
        sa.Column("uid", sa.String(length=128), nullable=False),
        sa.Column("display_name", sa.String(length=256), nullable=False),
        sa.Column("texting_id", sa.String(length=9), nullable=False),
        sa.Column("photo_url", sa.Text(), nullable=True),
        sa.Column(
            "visibility",
            sa.String(length=16),
            nullable=False,
            server_default="private",
        ),
        sa.PrimaryKeyConstraint("uid"),
    )
    op.create_index(
        "ix_user_lookups_display_name", "user_lookups", ["display_name"], unique=False
    )
    op.create_index(
        "ix_user_lookups_texting_id", "user_lookups", ["texting_id"], unique=True
    )

    op.create_table(
        "requests",
        sa.Column(
            "id",
            postgresql.UUID(as_uuid=True),
            nullable=False,
            server_default=sa.text("gen_random_uuid()"),
        ),
        sa.Column("from_uid", sa.String(length=128), nullable=False),
        sa.Column("to_uid", sa.String(length=128), nullable=False),
        sa.Column(
            "status", sa.String(length=16), nullable=False, server_default="pending"
        ),
        sa.Column("pair_low", sa.String(length=128), nullable=False),
        sa.Column("pair_high", sa.String(length=128), nullable=False),
        sa.Column(
            "created_at",
            sa.DateTime(timezone=True),
            nullable=False,
            server_default=sa.text("now()"),
        ),
        sa.PrimaryKeyConstraint("id"),
        sa.UniqueConstraint("pair_low", "pair_high", name="uq_requests_pair"),
        sa.CheckConstraint("from_uid <> to_uid", name="ck_requests_not_self"),
    )
    op.create_index("ix_requests_from_uid", "requests", ["from_uid"], unique=False)
    op.create_index(
        "ix_requests_to_status", "requests", ["to_uid", "status"], unique=False
    )

    op.create_table(
        "conversations",
        sa.Column(
            "id",
            postgresql.UUID(as_uuid=True),
            nullable=False,
            server_default=sa.text("gen_random_uuid()"),
        ),
        sa.Column(
            "participants", postgresql.JSONB(astext_type=sa.Text()), nullable=False
        ),
        sa.Column("pair_low", sa.String(length=128), nullable=False),
        sa.Column("pair_high", sa.String(length=128), nullable=False),
        sa.Column(
            "participant_details",
            postgresql.JSONB(astext_type=sa.Text()),
            nullable=False,
        ),
        sa.Column("last_message", sa.Text(), nullable=True),
        sa.Column("last_message_sender_id", sa.String(length=128), nullable=True),
        sa.Column(
            "last_message_timestamp", sa.DateTime(timezone=True), nullable=True
        ),
        sa.Column(
            "message_seq", sa.Integer(), nullable=False, server_default=sa.text("0")
        ),
        sa.Column(
            "created_at",
            sa.DateTime(timezone=True),
            nullable=False,
            server_default=sa.text("now()"),
        ),
        sa.PrimaryKeyConstraint("id"),
        sa.UniqueConstraint("pair_low", "pair_high", name="uq_conversations_pair"),
    )
    op.create_index(
        "ix_conversations_pair_low", "conversations", ["pair_low"], unique=False
    )
    op.create_index(
        "ix_conversations_pair_high", "conversations", ["pair_high"], unique=False
    )

    op.create_table(
        "messages",
        sa.Column(
            "id",
            postgresql.UUID(as_uuid=True),
            nullable=False,
            server_default=sa.text("gen_random_uuid()"),
        ),
        sa.Column("conversation_id", postgresql.UUID(as_uuid=True), nullable=False),
        sa.Column("sender_id", sa.String(length=128), nullable=False),
        sa.Column("text", sa.Text(), nullable=False),
        sa.Column(
            "timestamp",
            sa.DateTime(timezone=True),
            nullable=False,
            server_default=sa.text("now()"),
        ),
        sa.Column("sequence", sa.Integer(), nullable=False),
        sa.PrimaryKeyConstraint("id"),
        sa.ForeignKeyConstraint(
            ["conversation_id"], ["conversations.id"], ondelete="CASCADE"
        ),
    )
    op.create_index(
        "ix_messages_conversation_order",
        "messages",
        ["conversation_id", "timestamp", "sequence"],
        unique=False,
    )


def downgrade() -> None:
    """Downgrade schema: drop messaging tables."""
    op.drop_index("ix_messages_conversation_order", table_name="messages")
    op.drop_table("messages")
    op.drop_index("ix_conversations_pair_high", table_name="conversations")
    op.drop_index("ix_conversations_pair_low", table_name="conversations")
    op.drop_table("conversations")
    op.drop_index("ix_requests_to_status", table_name="requests")
    op.drop_index("ix_requests_from_uid", table_name="requests")
    op.drop_table("requests")
    op.drop_index("ix_user_lookups_texting_id", table_name="user_lookups")
    op.drop_index("ix_user_lookups_display_name", table_name="user_lookups")
    op.drop_table("user_lookups")
    op.drop_table("users")
