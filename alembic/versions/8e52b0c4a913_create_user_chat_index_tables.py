"""create user_chats and user_chat_entries tables

Revision ID: 8e52b0c4a913
Revises: 3c1f9a7d2e40
Create Date: 2026-10-12

"""

from collections.abc import Sequence

import sqlalchemy as sa

from alembic import op

# revision identifiers, used by Alembic.
revision: str = "8e52b0c4a913"
down_revision: str | Sequence[str] | None = "3c1f9a7d2e40"
branch_labels: str | Sequence[str] | None = None
depends_on: str | Sequence[str] | None = None


def upgrade() -> None:
    """Create the per-user chat index tables."""
    op.create_table(
        "user_chats",
        sa.Column("id", sa.Integer(), autoincrement=True, nullable=False),
        sa.Column("owner_id", sa.String(255), nullable=False),
        sa.Column(
            "created_at",
            sa.DateTime(timezone=True),
            server_default=sa.text("now()"),
            nullable=False,
        ),
        sa.PrimaryKeyConstraint("id"),
        sa.UniqueConstraint("owner_id"),
    )
    op.create_index(
        op.f("ix_user_chats_owner_id"),
        "user_chats",
        ["owner_id"],
        unique=True,
    )

    op.create_table(
        "user_chat_entries",
        sa.Column("id", sa.Integer(), autoincrement=True, nullable=False),
        sa.Column("index_id", sa.Integer(), nullable=False),
        sa.Column("chat_id", sa.String(36), nullable=False),
        sa.Column("title", sa.String(40), nullable=False),
        sa.Column(
            "created_at",
            sa.DateTime(timezone=True),
            server_default=sa.text("now()"),
            nullable=False,
        ),
        sa.ForeignKeyConstraint(["index_id"], ["user_chats.id"]),
        sa.PrimaryKeyConstraint("id"),
        sa.UniqueConstraint(
            "index_id", "chat_id", name="uq_user_chat_entries_index_chat"
        ),
    )
    op.create_index(
        op.f("ix_user_chat_entries_index_id"),
        "user_chat_entries",
        ["index_id"],
        unique=False,
    )


def downgrade() -> None:
    """Drop the per-user chat index tables."""
    op.drop_index(
        op.f("ix_user_chat_entries_index_id"), table_name="user_chat_entries"
    )
    op.drop_table("user_chat_entries")
    op.drop_index(op.f("ix_user_chats_owner_id"), table_name="user_chats")
    op.drop_table("user_chats")
