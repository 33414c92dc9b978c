"""create chats and chat_turns tables

Revision ID: 3c1f9a7d2e40
Revises:
Create Date: 2026-10-12

"""

from collections.abc import Sequence

import sqlalchemy as sa

from alembic import op

# revision identifiers, used by Alembic.
revision: str = "3c1f9a7d2e40"
down_revision: str | Sequence[str] | None = None
branch_labels: str | Sequence[str] | None = None
depends_on: str | Sequence[str] | None = None


def upgrade() -> None:
    """Create chats and chat_turns tables."""
    op.create_table(
        "chats",
        sa.Column("id", sa.Integer(), autoincrement=True, nullable=False),
        sa.Column("chat_id", sa.String(36), nullable=False),
        sa.Column("owner_id", sa.String(255), nullable=False),
        sa.Column(
            "created_at",
            sa.DateTime(timezone=True),
            server_default=sa.text("now()"),
            nullable=False,
        ),
        sa.Column(
            "updated_at",
            sa.DateTime(timezone=True),
            server_default=sa.text("now()"),
            nullable=False,
        ),
        sa.PrimaryKeyConstraint("id"),
        sa.UniqueConstraint("chat_id"),
    )
    op.create_index(
        op.f("ix_chats_chat_id"),
        "chats",
        ["chat_id"],
        unique=True,
    )
    op.create_index(
        "ix_chats_owner_id_id",
        "chats",
        ["owner_id", "id"],
        unique=False,
    )

    op.create_table(
        "chat_turns",
        sa.Column("id", sa.Integer(), autoincrement=True, nullable=False),
        sa.Column("chat_pk", sa.Integer(), nullable=False),
        sa.Column("role", sa.String(10), nullable=False),
        sa.Column("parts", sa.JSON(), nullable=False),
        sa.Column("img", sa.String(2048), nullable=True),
        sa.Column(
            "created_at",
            sa.DateTime(timezone=True),
            server_default=sa.text("now()"),
            nullable=False,
        ),
        sa.ForeignKeyConstraint(["chat_pk"], ["chats.id"]),
        sa.PrimaryKeyConstraint("id"),
    )
    op.create_index(
        op.f("ix_chat_turns_chat_pk"),
        "chat_turns",
        ["chat_pk"],
        unique=False,
    )


def downgrade() -> None:
    """Drop chat_turns and chats tables."""
    op.drop_index(op.f("ix_chat_turns_chat_pk"), table_name="chat_turns")
    op.drop_table("chat_turns")
    op.drop_index("ix_chats_owner_id_id", table_name="chats")
    op.drop_index(op.f("ix_chats_chat_id"), table_name="chats")
    op.drop_table("chats")
