"""Add cached valuation columns to fund_positions and total_balance to profiles.

Revision ID: 0003
Revises: 0002
Create Date: 2025-10-18
"""

from __future__ import annotations

from typing import Sequence, Union

import sqlalchemy as sa

from alembic import op

revision: str = "0003"
down_revision: Union[str, None] = "0002"
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None

_POSITION_COLUMNS = (
    ("current_price", sa.Numeric(18, 6)),
    ("current_market_value", sa.Numeric(18, 2)),
    ("current_mix_percent", sa.Numeric(8, 4)),
    ("last_priced_as_of", sa.Date()),
)


def upgrade() -> None:
    op.add_column(
        "retirement_profiles",
        sa.Column("total_balance", sa.Numeric(18, 2), nullable=True),
    )
    for name, type_ in _POSITION_COLUMNS:
        op.add_column("fund_positions", sa.Column(name, type_, nullable=True))


def downgrade() -> None:
    for name, _ in reversed(_POSITION_COLUMNS):
        op.drop_column("fund_positions", name)
    op.drop_column("retirement_profiles", "total_balance")
