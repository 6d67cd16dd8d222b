"""Track the last processed tick for resumed runs

Revision ID: 0003_simulation_state
Revises: 0002_prosperity_and_factions
Create Date: 2026-10-18
"""
from __future__ import annotations

from alembic import op  # type: ignore
import sqlalchemy as sa

# revision identifiers, used by Alembic.
revision = "0003_simulation_state"
down_revision = "0002_prosperity_and_factions"
branch_labels = None
depends_on = None


def upgrade() -> None:
    op.create_table(
        "simulation_state",
        sa.Column("id", sa.Integer(), primary_key=True),
        sa.Column("last_tick", sa.Integer(), nullable=False, server_default=sa.text("0")),
    )
    # seed from the event log so existing databases do not replay ticks
    op.execute(
        "INSERT INTO simulation_state (id, last_tick) "
        "SELECT 1, COALESCE(MAX(tick), 0) FROM court_events"
    )


def downgrade() -> None:
    op.drop_table("simulation_state")
