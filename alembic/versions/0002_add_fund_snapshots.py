"""Add fund_snapshots: one immutable row per user, fund and as-of day.

Revision ID: 0002
Revises: 0001
Create Date: 2025-10-17
"""

from __future__ import annotations

from typing import Sequence, Union

import sqlalchemy as sa

from alembic import op

revision: str = "0002"
down_revision: Union[str, None] = "0001"
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None


def upgrade() -> None:
    op.create_table(
        "fund_snapshots",
        sa.Column("id", sa.BigInteger, sa.Identity(), primary_key=True),
        sa.Column("user_id", sa.Integer, nullable=False),
        sa.Column("fund_code", sa.String(10), nullable=False),
        sa.Column("price", sa.Numeric(18, 6), nullable=False),
        sa.Column("units", sa.Numeric(18, 6), nullable=False),
        sa.Column("market_value", sa.Numeric(18, 2), nullable=False),
        sa.Column("mix_percent", sa.Numeric(8, 4), nullable=False),
        sa.Column("contribution_percent", sa.Numeric(8, 4), nullable=True),
        sa.Column("as_of_day", sa.Date, nullable=False),
        sa.Column("captured_at", sa.DateTime(timezone=True), nullable=False),
        sa.UniqueConstraint(
            "user_id", "fund_code", "as_of_day", name="uq_fund_snapshots_user_fund_day"
        ),
    )
    op.create_index(
        "ix_fund_snapshots_user_day", "fund_snapshots", ["user_id", "as_of_day"]
    )


def downgrade() -> None:
    op.drop_index("ix_fund_snapshots_user_day", table_name="fund_snapshots")
    op.drop_table("fund_snapshots")
