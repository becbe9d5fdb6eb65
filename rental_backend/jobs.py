"""Scheduled maintenance jobs, run from cron as console scripts.

    rental-update-asset-status [--date YYYY-MM-DD]
    rental-payment-reminders [--date YYYY-MM-DD]

Both exit 0 on success and 1 when the job fails.
"""

import argparse
import asyncio
import sys
import uuid
from datetime import date

from .config import settings
from .core.logging import get_logger, set_transaction_id, setup_logging, shutdown_logging
from .database import AsyncSessionLocal, engine, import_models
from .modules.asset_management.status_reconciler import reconcile_asset_statuses
from .modules.payment_management.reminders import run_payment_reminders

logger = get_logger("jobs")


def _parse_args(description: str, argv: list[str] | None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(description=description)
    parser.add_argument(
        "--date",
        type=date.fromisoformat,
        default=None,
        help="Evaluate as of this day (YYYY-MM-DD, default: today in UTC)",
    )
    return parser.parse_args(argv)


async def _update_asset_status(on_date: date | None) -> int:
    async with AsyncSessionLocal() as db:
        return await reconcile_asset_statuses(db, on_date)


async def _send_payment_reminders(on_date: date | None) -> dict[str, int]:
    async with AsyncSessionLocal() as db:
        return await run_payment_reminders(db, on_date)


async def _run(job, on_date: date | None):
    try:
        return await job(on_date)
    finally:
        await engine.dispose()


def _execute(name: str, job, on_date: date | None) -> int:
    setup_logging(settings)
    import_models()
    # One transaction id per run so its log lines can be grouped
    set_transaction_id(f"{name}-{uuid.uuid4().hex[:8]}")
    try:
        result = asyncio.run(_run(job, on_date))
    except Exception:
        logger.exception(f"Job {name} failed")
        return 1
    else:
        logger.info(f"Job {name} finished", extra={"job": name, "result": result})
        return 0
    finally:
        shutdown_logging()


def update_asset_status(argv: list[str] | None = None) -> int:
    args = _parse_args("Recompute asset occupancy from contract dates.", argv)
    return _execute("update-asset-status", _update_asset_status, args.date)


def payment_reminders(argv: list[str] | None = None) -> int:
    args = _parse_args("Flag overdue payments and send reminders.", argv)
    return _execute("payment-reminders", _send_payment_reminders, args.date)


def update_asset_status_main() -> None:
    sys.exit(update_asset_status())


def payment_reminders_main() -> None:
    sys.exit(payment_reminders())
