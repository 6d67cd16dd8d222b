"""Add prosperity fields to territories; factions, rebellions and court events

Revision ID: 0002_prosperity_and_factions
Revises: 0001_initial
Create Date: 2026-10-18
"""
from __future__ import annotations

from alembic import op  # type: ignore
import sqlalchemy as sa

# revision identifiers, used by Alembic.
revision = "0002_prosperity_and_factions"
down_revision = "0001_initial"
branch_labels = None
depends_on = None


def upgrade() -> None:
    # Territory schema v2. Existing rows keep schema_version=1 and are read with defaults.
    op.add_column("territories", sa.Column("prosperity_tier", sa.Integer(), nullable=False, server_default=sa.text("0")))
    op.add_column("territories", sa.Column("decadence_level", sa.Float(), nullable=False, server_default=sa.text("0")))
    op.add_column("territories", sa.Column("schema_version", sa.Integer(), nullable=False, server_default=sa.text("1")))

    op.create_table(
        "factions",
        sa.Column("id", sa.Integer(), primary_key=True, autoincrement=True),
        sa.Column("territory_id", sa.Integer(), sa.ForeignKey("territories.id"), nullable=False),
        sa.Column("name", sa.String(length=128), nullable=False),
        sa.Column("faction_type", sa.String(length=32), nullable=False, server_default=sa.text("'political'")),
        sa.Column("ideology", sa.String(length=255), nullable=False),
        sa.Column("power", sa.Integer(), nullable=False),
        sa.Column("rebellion_risk", sa.Integer(), nullable=False),
        sa.Column("happiness", sa.Integer(), nullable=False, server_default=sa.text("20")),
        sa.Column("member_count", sa.Integer(), nullable=False),
        sa.Column("leader_name", sa.String(length=64), nullable=True),
        sa.Column("founded_at_tick", sa.Integer(), nullable=False),
    )
    op.create_index("ix_factions_territory_id", "factions", ["territory_id"], unique=False)

    op.create_table(
        "rebellions",
        sa.Column("id", sa.Integer(), primary_key=True, autoincrement=True),
        sa.Column("territory_id", sa.Integer(), sa.ForeignKey("territories.id"), nullable=False),
        sa.Column("faction_id", sa.Integer(), sa.ForeignKey("factions.id"), nullable=False),
        sa.Column("started_at_tick", sa.Integer(), nullable=False),
        sa.Column("strength", sa.Integer(), nullable=False),
        sa.Column("demands", sa.String(length=255), nullable=False),
        sa.Column("status", sa.String(length=16), nullable=False, server_default=sa.text("'active'")),
    )
    op.create_index("ix_rebellions_territory_id", "rebellions", ["territory_id"], unique=False)

    op.create_table(
        "court_events",
        sa.Column("id", sa.Integer(), primary_key=True, autoincrement=True),
        sa.Column("territory_id", sa.Integer(), sa.ForeignKey("territories.id"), nullable=True),
        sa.Column("tick", sa.Integer(), nullable=False),
        sa.Column("event_type", sa.String(length=32), nullable=False),
        sa.Column("title", sa.String(length=128), nullable=False),
        sa.Column("description", sa.Text(), nullable=False),
        sa.Column("severity", sa.String(length=16), nullable=False, server_default=sa.text("'info'")),
        sa.Column("character_id", sa.Integer(), nullable=True),
        sa.Column("plot_type", sa.String(length=32), nullable=True),
    )
    op.create_index("ix_court_events_territory_id", "court_events", ["territory_id"], unique=False)
    op.create_index("ix_court_events_tick", "court_events", ["tick"], unique=False)


def downgrade() -> None:
    op.drop_index("ix_court_events_tick", table_name="court_events")
    op.drop_index("ix_court_events_territory_id", table_name="court_events")
    op.drop_table("court_events")

    op.drop_index("ix_rebellions_territory_id", table_name="rebellions")
    op.drop_table("rebellions")

    op.drop_index("ix_factions_territory_id", table_name="factions")
    op.drop_table("factions")

    op.drop_column("territories", "schema_version")
    op.drop_column("territories", "decadence_level")
    op.drop_column("territories", "prosperity_tier")
