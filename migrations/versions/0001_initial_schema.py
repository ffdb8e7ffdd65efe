"""initial schema

Revision ID: 0001
Revises:
Create Date: 2026-10-18 00:00:00.000000

habits, habit_completions (one row per habit and day), tasks.
"""
from typing import Sequence, Union

from alembic import op
import sqlalchemy as sa

revision: str = "0001"
down_revision: Union[str, None] = None
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None


def upgrade() -> None:
    # --- habits ---
    op.create_table(
        "habits",
        sa.Column("id", sa.Integer(), nullable=False),
        sa.Column("name", sa.String(120), nullable=False),
        sa.Column("habit_type", sa.Enum(
            "standard", "timer", name="habit_type_enum",
        ), nullable=False),
        sa.Column("duration", sa.Integer(), nullable=True),
        sa.Column("allow_partial", sa.Boolean(), nullable=False),
        sa.Column("color", sa.String(16), nullable=False),
        sa.Column("priority", sa.Enum(
            "low", "medium", "high", name="habit_priority_enum",
        ), nullable=False),
        sa.Column("difficulty", sa.Enum(
            "easy", "medium", "hard", name="habit_difficulty_enum",
        ), nullable=False),
        sa.Column("frequency", sa.Enum(
            "daily", "weekly", "monthly", name="habit_frequency_enum",
        ), nullable=False),
        sa.Column("times", sa.Integer(), nullable=False),
        sa.Column("current_streak", sa.Integer(), nullable=False, server_default="0"),
        sa.Column("longest_streak", sa.Integer(), nullable=False, server_default="0"),
        sa.Column("created_at", sa.DateTime(), server_default=sa.func.now(), nullable=False),
        sa.Column("updated_at", sa.DateTime(), server_default=sa.func.now(), nullable=False),
        sa.PrimaryKeyConstraint("id"),
    )
    op.create_index("ix_habits_id", "habits", ["id"])

    # --- habit_completions ---
    op.create_table(
        "habit_completions",
        sa.Column("id", sa.Integer(), nullable=False),
        sa.Column("habit_id", sa.Integer(), nullable=False),
        sa.Column("day", sa.Date(), nullable=False),
        sa.Column("completion_level", sa.Float(), nullable=False),
        sa.Column("reason", sa.String(255), nullable=True),
        sa.Column("updated_at", sa.DateTime(), server_default=sa.func.now(), nullable=False),
        sa.PrimaryKeyConstraint("id"),
        sa.ForeignKeyConstraint(["habit_id"], ["habits.id"], ondelete="CASCADE"),
        sa.UniqueConstraint("habit_id", "day", name="uq_habit_completion_day"),
    )
    op.create_index("ix_habit_completions_id", "habit_completions", ["id"])
    op.create_index("ix_habit_completions_habit_id", "habit_completions", ["habit_id"])
    op.create_index("ix_habit_completions_day", "habit_completions", ["day"])

    # --- tasks ---
    op.create_table(
        "tasks",
        sa.Column("id", sa.Integer(), nullable=False),
        sa.Column("name", sa.String(256), nullable=False),
        sa.Column("day", sa.Date(), nullable=False),
        sa.Column("completed", sa.Boolean(), nullable=False),
        sa.Column("created_at", sa.DateTime(), server_default=sa.func.now(), nullable=False),
        sa.Column("updated_at", sa.DateTime(), server_default=sa.func.now(), nullable=False),
        sa.PrimaryKeyConstraint("id"),
    )
    op.create_index("ix_tasks_id", "tasks", ["id"])
    op.create_index("ix_tasks_day", "tasks", ["day"])


def downgrade() -> None:
    op.drop_index("ix_tasks_day", table_name="tasks")
    op.drop_index("ix_tasks_id", table_name="tasks")
    op.drop_table("tasks")

    op.drop_index("ix_habit_completions_day", table_name="habit_completions")
    op.drop_index("ix_habit_completions_habit_id", table_name="habit_completions")
    op.drop_index("ix_habit_completions_id", table_name="habit_completions")
    op.drop_table("habit_completions")

    op.drop_index("ix_habits_id", table_name="habits")
    op.drop_table("habits")

    for enum_name in (
        "habit_frequency_enum",
        "habit_difficulty_enum",
        "habit_priority_enum",
        "habit_type_enum",
    ):
        sa.Enum(name=enum_name).drop(op.get_bind(), checkfirst=True)
