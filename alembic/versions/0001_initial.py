"""Initial schema for Courtforge

Revision ID: 0001_initial
Revises:
Create Date: 2026-10-18
"""
from __future__ import annotations

from alembic import op  # type: ignore
import sqlalchemy as sa

# revision identifiers, used by Alembic.
revision = "0001_initial"
down_revision = None
branch_labels = None
depends_on = None


def upgrade() -> None:
    # territories table (v1: economy fields only)
    op.create_table(
        "territories",
        sa.Column("id", sa.Integer(), primary_key=True, autoincrement=True),
        sa.Column("name", sa.String(length=64), nullable=False),
        sa.Column("wealth", sa.Float(), nullable=False, server_default=sa.text("50")),
        sa.Column("food", sa.Float(), nullable=False, server_default=sa.text("50")),
        sa.Column("military", sa.Float(), nullable=False, server_default=sa.text("20")),
        sa.Column("technology", sa.Float(), nullable=False, server_default=sa.text("10")),
        sa.Column("happiness", sa.Float(), nullable=False, server_default=sa.text("50")),
        sa.Column("population", sa.Integer(), nullable=False, server_default=sa.text("100")),
    )
    op.create_index("ix_territories_name", "territories", ["name"], unique=True)

    # characters table
    op.create_table(
        "characters",
        sa.Column("id", sa.Integer(), primary_key=True, autoincrement=True),
        sa.Column("territory_id", sa.Integer(), sa.ForeignKey("territories.id"), nullable=False),
        sa.Column("name", sa.String(length=64), nullable=False),
        sa.Column("title", sa.String(length=64), nullable=False),
        sa.Column("role", sa.String(length=32), nullable=False),
        sa.Column("birth_tick", sa.Integer(), nullable=False),
        sa.Column("age", sa.Integer(), nullable=False),
        sa.Column("is_alive", sa.Boolean(), nullable=False, server_default=sa.true()),
        sa.Column("death_tick", sa.Integer(), nullable=True),
        sa.Column("death_cause", sa.String(length=128), nullable=True),
        sa.Column("dynasty_name", sa.String(length=64), nullable=True),
        sa.Column("dynasty_generation", sa.Integer(), nullable=True),
        sa.Column("coronation_tick", sa.Integer(), nullable=True),
        sa.Column("secret_goal", sa.String(length=32), nullable=False, server_default=sa.text("'none'")),
        sa.Column("traits_json", sa.JSON(), nullable=False),
        sa.Column("emotions_json", sa.JSON(), nullable=False),
        sa.Column("plots_json", sa.JSON(), nullable=False),
        sa.Column("deeds_json", sa.JSON(), nullable=False),
        sa.Column("reign_summary_json", sa.JSON(), nullable=True),
    )
    op.create_index("ix_characters_territory_id", "characters", ["territory_id"], unique=False)
    op.create_index("ix_characters_role", "characters", ["role"], unique=False)
    op.create_index("ix_characters_is_alive", "characters", ["is_alive"], unique=False)

    # succession_events table
    op.create_table(
        "succession_events",
        sa.Column("id", sa.Integer(), primary_key=True, autoincrement=True),
        sa.Column("territory_id", sa.Integer(), sa.ForeignKey("territories.id"), nullable=False),
        sa.Column("tick", sa.Integer(), nullable=False),
        sa.Column("deceased_ruler_id", sa.Integer(), sa.ForeignKey("characters.id"), nullable=False),
        sa.Column("new_ruler_id", sa.Integer(), sa.ForeignKey("characters.id"), nullable=False),
        sa.Column("succession_type", sa.String(length=16), nullable=False),
        sa.Column("plotters_executed", sa.Integer(), nullable=False, server_default=sa.text("0")),
        sa.Column("civil_war_casualties", sa.Integer(), nullable=True),
        sa.Column("narrative", sa.Text(), nullable=False),
    )
    op.create_index("ix_succession_events_territory_id", "succession_events", ["territory_id"], unique=False)
    op.create_index("ix_succession_events_tick", "succession_events", ["tick"], unique=False)

    # memories table
    op.create_table(
        "memories",
        sa.Column("id", sa.Integer(), primary_key=True, autoincrement=True),
        sa.Column("territory_id", sa.Integer(), sa.ForeignKey("territories.id"), nullable=True),
        sa.Column("tick", sa.Integer(), nullable=True),
        sa.Column("memory_type", sa.String(length=32), nullable=False),
        sa.Column("description", sa.Text(), nullable=False),
        sa.Column("emotional_weight", sa.Float(), nullable=False, server_default=sa.text("0")),
    )
    op.create_index("ix_memories_territory_id", "memories", ["territory_id"], unique=False)
    op.create_index("ix_memories_tick", "memories", ["tick"], unique=False)


def downgrade() -> None:
    op.drop_index("ix_memories_tick", table_name="memories")
    op.drop_index("ix_memories_territory_id", table_name="memories")
    op.drop_table("memories")

    op.drop_index("ix_succession_events_tick", table_name="succession_events")
    op.drop_index("ix_succession_events_territory_id", table_name="succession_events")
    op.drop_table("succession_events")

    op.drop_index("ix_characters_is_alive", table_name="characters")
    op.drop_index("ix_characters_role", table_name="characters")
    op.drop_index("ix_characters_territory_id", table_name="characters")
    op.drop_table("characters")

    op.drop_index("ix_territories_name", table_name="territories")
    op.drop_table("territories")
