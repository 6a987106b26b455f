"""
Daily job that keeps every court's slots generated through the horizon.

The job is just another writer of court slots: each court is locked and
regenerated in its own transaction, like an owner edit would be.
"""

import asyncio
import logging
from datetime import date, datetime, timedelta
from typing import Optional

from sqlalchemy.orm import Session

from app.config import settings
from app.crud import court as court_crud
from app.crud import slot as slot_crud
from app.database import SessionLocal
from app.models.court import Court
from app.services.slot_generator import horizon_range

logger = logging.getLogger(__name__)


def extend_slot_horizon(db: Session, today: Optional[date] = None) -> dict:
    """
    Regenerate the slots of every court for [today, today + horizon].

    A failure on one court is logged and does not stop the others.

    Returns:
        Summary with the number of courts processed, failed and slots created
    """
    today = today or date.today()
    start, end = horizon_range(today, settings.SLOT_HORIZON_DAYS)
    court_ids = [court_id for (court_id,) in db.query(Court.id).order_by(Court.id)]

    summary = {"courts": 0, "failed": 0, "slots_created": 0}
    for court_id in court_ids:
        try:
            court = court_crud.lock_court(db, court_id)
            if not court:
                db.rollback()
                continue
            created = slot_crud.regenerate_court_slots(db, court, start, end)
            db.commit()
            summary["courts"] += 1
            summary["slots_created"] += len(created)
        except Exception:
            db.rollback()
            summary["failed"] += 1
            logger.exception("Slot horizon extension failed for court %s", court_id)

    logger.info(
        "Daily slot generation complete: %s courts, %s new slots, %s failures",
        summary["courts"],
        summary["slots_created"],
        summary["failed"],
    )
    return summary


def seconds_until_next_run(now: datetime, hour: int) -> float:
    next_run = now.replace(hour=hour, minute=0, second=0, microsecond=0)
    if next_run <= now:
        next_run += timedelta(days=1)
    return (next_run - now).total_seconds()


def run_slot_generation() -> dict:
    db = SessionLocal()
    try:
        return extend_slot_horizon(db)
    finally:
        db.close()


async def slot_scheduler_loop() -> None:
    """Run the horizon extension every day at ``SLOT_SCHEDULER_HOUR``."""
    while True:
        delay = seconds_until_next_run(datetime.now(), settings.SLOT_SCHEDULER_HOUR)
        logger.info("Next slot generation run in %.0f seconds", delay)
        await asyncio.sleep(delay)
        logger.info("Running daily slot generation task...")
        try:
            await asyncio.to_thread(run_slot_generation)
        except Exception:
            logger.exception("Daily slot generation task failed")
