"""Initial schema: retirement profiles and per-fund positions.

Revision ID: 0001
Revises:
Create Date: 2025-10-17
"""

from __future__ import annotations

from typing import Sequence, Union

import sqlalchemy as sa

from alembic import op

revision: str = "0001"
down_revision: Union[str, None] = None
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None


def upgrade() -> None:
    op.create_table(
        "retirement_profiles",
        sa.Column("user_id", sa.Integer, primary_key=True, autoincrement=False),
        sa.Column("contribution_rate_percent", sa.Numeric(8, 4), nullable=False),
        sa.Column("employer_match_percent", sa.Numeric(8, 4), nullable=False),
        sa.Column("current_balance", sa.Numeric(18, 2), nullable=False),
        sa.Column("target_balance", sa.Numeric(18, 2), nullable=False),
        sa.Column("g_fund_percent", sa.Numeric(8, 4), nullable=False),
        sa.Column("f_fund_percent", sa.Numeric(8, 4), nullable=False),
        sa.Column("c_fund_percent", sa.Numeric(8, 4), nullable=False),
        sa.Column("s_fund_percent", sa.Numeric(8, 4), nullable=False),
        sa.Column("i_fund_percent", sa.Numeric(8, 4), nullable=False),
        sa.Column(
            "last_updated_at",
            sa.DateTime(timezone=True),
            server_default=sa.text("now()"),
            nullable=False,
        ),
    )

    op.create_table(
        "fund_positions",
        sa.Column("id", sa.BigInteger, sa.Identity(), primary_key=True),
        sa.Column("user_id", sa.Integer, nullable=False),
        sa.Column("fund_code", sa.String(10), nullable=False),
        sa.Column("contribution_percent", sa.Numeric(8, 4), nullable=False),
        sa.Column("units", sa.Numeric(18, 6), nullable=False),
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
        sa.UniqueConstraint("user_id", "fund_code", name="uq_fund_positions_user_fund"),
    )
    op.create_index("ix_fund_positions_user_id", "fund_positions", ["user_id"])


def downgrade() -> None:
    op.drop_index("ix_fund_positions_user_id", table_name="fund_positions")
    op.drop_table("fund_positions")
    op.drop_table("retirement_profiles")
