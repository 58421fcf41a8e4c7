#!/usr/bin/env python
"""Run one automatic renewal pass (for OS-level cron deployments)."""

import asyncio
import logging
import sys
from pathlib import Path

# Add src directory to path
sys.path.insert(0, str(Path(__file__).parent.parent / "src"))

from licenze_api.config import get_settings
from licenze_api.database import async_session_maker, engine
from licenze_api.repositories.store import SqlLicenseStore
from licenze_api.services.renewal_service import RenewalService


async def run(backfill: bool = False) -> int:
    """Run a renewal pass or an expiry backfill and print the summary."""
    settings = get_settings()

    try:
        async with async_session_maker() as session:
            store = SqlLicenseStore(session, autocommit=True)
            service = RenewalService(store, timeout_seconds=settings.renewal_run_timeout_seconds)
            if backfill:
                summary = await service.backfill_missing_expiry_dates()
            else:
                summary = await service.run_once()
    finally:
        await engine.dispose()

    print(summary.model_dump_json(indent=2))
    return 1 if summary.failed or summary.aborted else 0


if __name__ == "__main__":
    import argparse
    parser = argparse.ArgumentParser(description="Run automatic license renewal once")
    parser.add_argument(
        "--backfill",
        action="store_true",
        help="Fill in missing activation/expiry dates instead of renewing",
    )
    parser.add_argument("-v", "--verbose", action="store_true", help="Verbose logging")
    args = parser.parse_args()

    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.INFO,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )
    sys.exit(asyncio.run(run(args.backfill)))
