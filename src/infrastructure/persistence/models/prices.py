"""Price cache ORM model: fund_prices."""

from __future__ import annotations

from datetime import date, datetime
from decimal import Decimal

from sqlalchemy import Date, DateTime, Numeric, String, func
from sqlalchemy.orm import Mapped, mapped_column

from src.infrastructure.database import Base


class FundPrice(Base):
    """Closing price of one fund on one price date.

    Composite PK: (price_date, fund_code).  fund_code is canonical.
    """

    __tablename__ = "fund_prices"

    price_date: Mapped[date] = mapped_column(Date, primary_key=True)
    fund_code: Mapped[str] = mapped_column(String(10), primary_key=True)
    price: Mapped[Decimal] = mapped_column(Numeric(18, 6), nullable=False)
    pulled_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), server_default=func.now(), nullable=False
    )
