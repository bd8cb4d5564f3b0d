"""Initial schema: users, practice_action, practice_record

Revision ID: 001
Revises:
Create Date: 2026-10-16

"""
from typing import Sequence, Union

from alembic import op
import sqlalchemy as sa

revision: str = "001"
down_revision: Union[str, None] = None
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None


def upgrade() -> None:
    op.create_table(
        "users",
        sa.Column("id", sa.Integer(), autoincrement=True, nullable=False),
        sa.Column("username", sa.String(255), nullable=False),
        sa.Column("password_hash", sa.String(255), nullable=False),
        sa.Column("create_time", sa.DateTime(timezone=True), nullable=False),
        sa.PrimaryKeyConstraint("id"),
    )
    op.create_index("ix_users_username", "users", ["username"], unique=True)

    op.create_table(
        "practice_action",
        sa.Column("id", sa.Integer(), autoincrement=True, nullable=False),
        sa.Column("user_id", sa.Integer(), nullable=False),
        sa.Column("name", sa.String(255), nullable=False),
        sa.Column("create_time", sa.DateTime(timezone=True), nullable=False),
        sa.Column("last_finish_time", sa.DateTime(timezone=True), nullable=True),
        sa.ForeignKeyConstraint(["user_id"], ["users.id"]),
        sa.PrimaryKeyConstraint("id"),
    )
    op.create_index("ix_practice_action_user_id", "practice_action", ["user_id"], unique=False)

    # No unique (action_id, date) constraint: same-day exclusivity is enforced by
    # the completion transaction, which locks the action row first.
    op.create_table(
        "practice_record",
        sa.Column("id", sa.Integer(), autoincrement=True, nullable=False),
        sa.Column("action_id", sa.Integer(), nullable=False),
        sa.Column("finish_time", sa.DateTime(timezone=True), nullable=False),
        sa.Column("note", sa.Text(), nullable=True),
        sa.ForeignKeyConstraint(["action_id"], ["practice_action.id"]),
        sa.PrimaryKeyConstraint("id"),
    )
    op.create_index("ix_practice_record_action_id", "practice_record", ["action_id"], unique=False)
    op.create_index("ix_practice_record_finish_time", "practice_record", ["finish_time"], unique=False)


def downgrade() -> None:
    op.drop_index("ix_practice_record_finish_time", table_name="practice_record")
    op.drop_index("ix_practice_record_action_id", table_name="practice_record")
    op.drop_table("practice_record")
    op.drop_index("ix_practice_action_user_id", table_name="practice_action")
    op.drop_table("practice_action")
    op.drop_index("ix_users_username", table_name="users")
    op.drop_table("users")
