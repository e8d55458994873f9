#!/usr/bin/env python3
"""
Load daily fund closing prices into the fund_prices cache table.

Input is a CSV file with a header row containing fund_code and price
columns.  Codes are normalized before storage; re-loading the same date
overwrites the earlier quotes.

    python scripts/load_fund_prices.py --date 2025-06-10 prices.csv
"""

from __future__ import annotations

import argparse
import asyncio
import csv
import logging
import os
import sys
from datetime import date
from decimal import Decimal, InvalidOperation

# Ensure repo root on sys.path before importing src.*
ROOT = os.path.abspath(os.path.join(os.path.dirname(__file__), ".."))
if ROOT not in sys.path:
    sys.path.insert(0, ROOT)

from src.infrastructure.config import get_settings  # noqa: E402
from src.infrastructure.database import create_engine, create_session_factory  # noqa: E402
from src.infrastructure.logging_config import setup_logging  # noqa: E402
from src.infrastructure.persistence.repositories import SqlFundPriceRepository  # noqa: E402

logger = logging.getLogger("load_fund_prices")


def read_prices(path: str) -> dict[str, Decimal]:
    prices: dict[str, Decimal] = {}
    with open(path, newline="") as fh:
        for line_no, row in enumerate(csv.DictReader(fh), start=2):
            try:
                prices[row["fund_code"]] = Decimal(row["price"].strip())
            except (KeyError, AttributeError, InvalidOperation) as exc:
                raise SystemExit(f"{path}:{line_no}: bad row {row!r} ({exc})")
    return prices


async def _run(price_date: date, prices: dict[str, Decimal]) -> int:
    engine = create_engine(get_settings().database_url)
    try:
        async with create_session_factory(engine)() as session:
            count = await SqlFundPriceRepository(session).bulk_upsert(price_date, prices)
            await session.commit()
    finally:
        await engine.dispose()
    logger.info("Stored %d fund price(s) for %s", count, price_date)
    print(f"[prices] date={price_date} stored={count}")
    return 0


def main() -> int:
    parser = argparse.ArgumentParser(description="Load fund prices into the price cache.")
    parser.add_argument("csv_path", help="CSV with fund_code,price columns")
    parser.add_argument(
        "--date", type=date.fromisoformat, required=True, help="Price date (YYYY-MM-DD)"
    )
    parser.add_argument("--log-level", default=None, help="Override LOG_LEVEL")
    args = parser.parse_args()

    setup_logging(args.log_level)
    return asyncio.run(_run(args.date, read_prices(args.csv_path)))


if __name__ == "__main__":
    raise SystemExit(main())
