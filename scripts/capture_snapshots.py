#!/usr/bin/env python3
"""
Capture today's fund snapshot for one or more users.

Intended to be called by a daily scheduler after the market close.  Each
user's capture is idempotent, so overlapping or retried runs are harmless.
Exit status is 1 if any capture failed to persist.
"""

from __future__ import annotations

import argparse
import asyncio
import logging
import os
import sys

# Ensure repo root on sys.path before importing src.*
ROOT = os.path.abspath(os.path.join(os.path.dirname(__file__), ".."))
if ROOT not in sys.path:
    sys.path.insert(0, ROOT)

from src.domain.exceptions import PersistenceError  # noqa: E402
from src.infrastructure.container import build_services  # noqa: E402
from src.infrastructure.logging_config import setup_logging  # noqa: E402

logger = logging.getLogger("capture_snapshots")


async def _run(user_ids: list[int]) -> int:
    services = build_services()
    failures = 0
    try:
        for user_id in user_ids:
            try:
                written = await services.snapshots.capture_if_absent(user_id)
            except PersistenceError:
                logger.exception("Snapshot capture failed for user %s", user_id)
                failures += 1
                continue
            print(f"[capture] user={user_id} written={written}")
    finally:
        await services.dispose()
    return 1 if failures else 0


def main() -> int:
    parser = argparse.ArgumentParser(description="Capture daily fund snapshots.")
    parser.add_argument(
        "--user-id", type=int, action="append", required=True, help="User id (repeatable)"
    )
    parser.add_argument("--log-level", default=None, help="Override LOG_LEVEL")
    args = parser.parse_args()

    setup_logging(args.log_level)
    return asyncio.run(_run(args.user_id))


if __name__ == "__main__":
    raise SystemExit(main())
