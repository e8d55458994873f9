#!/usr/bin/env python3
"""
Ensure users have baseline fund rows (G, F, C, S, I, L-INCOME).

Dry run by default; pass --execute to insert the missing rows.  Safe to
re-run: existing rows are never modified and a second run creates nothing.
"""

from __future__ import annotations

import argparse
import asyncio
import os
import sys

# Ensure repo root on sys.path before importing src.*
ROOT = os.path.abspath(os.path.join(os.path.dirname(__file__), ".."))
if ROOT not in sys.path:
    sys.path.insert(0, ROOT)

from src.infrastructure.container import build_services  # noqa: E402
from src.infrastructure.logging_config import setup_logging  # noqa: E402


async def _run(user_ids: list[int], execute: bool) -> int:
    services = build_services()
    try:
        for user_id in user_ids:
            result = await services.backfill.backfill_base_funds(user_id, dry_run=not execute)
            verb = "created" if execute else "would create"
            missing = ", ".join(result.missing_codes) or "-"
            print(
                f"[backfill] user={user_id} {verb}={result.created} "
                f"existing={result.existing} missing={missing}"
            )
    finally:
        await services.dispose()
    return 0


def main() -> int:
    parser = argparse.ArgumentParser(description="Backfill baseline fund position rows.")
    parser.add_argument(
        "--user-id", type=int, action="append", required=True, help="User id (repeatable)"
    )
    parser.add_argument(
        "--execute",
        action="store_true",
        help="Insert missing rows. Without this flag only counts are reported.",
    )
    parser.add_argument("--log-level", default=None, help="Override LOG_LEVEL")
    args = parser.parse_args()

    setup_logging(args.log_level)
    return asyncio.run(_run(args.user_id, args.execute))


if __name__ == "__main__":
    raise SystemExit(main())
