"""
Scheduler Job Definitions
Maintenance jobs run by the background scheduler
"""
from datetime import datetime, timedelta
from typing import Optional
import logging

import pytz

from app.core.config import settings
from app.services.habits import repository
from app.services.habits import verification
from app.utils.timezone import get_app_now

logger = logging.getLogger(__name__)


def get_pending_cutoff_iso(now: Optional[datetime] = None) -> str:
    """Verifications last updated before this instant are stuck in pending"""
    now = now or get_app_now()
    cutoff = now - timedelta(minutes=settings.PENDING_VERIFICATION_TIMEOUT_MINUTES)
    return cutoff.astimezone(pytz.utc).isoformat()


def reconcile_stale_pending_verifications(now: Optional[datetime] = None) -> int:
    """
    Reset verifications stuck in pending back to unverified

    Covers submissions that died between the pending write and the verdict,
    e.g. a server restart mid-request.

    Returns:
        Number of verifications reset
    """
    try:
        stale = repository.get_stale_pending_verifications(get_pending_cutoff_iso(now))
    except Exception as e:
        logger.error(f"[SCHEDULER] Error loading pending verifications: {e}", exc_info=True)
        return 0

    if not stale:
        return 0

    logger.info(f"[SCHEDULER] Found {len(stale)} verification(s) stuck in pending")

    reset_count = 0
    for row in stale:
        habit_id = row["habit_id"]
        try:
            verification.reset_verification(habit_id)
            reset_count += 1
            logger.info(f"[SCHEDULER] Reset stale pending verification for habit_id={habit_id}")
        except Exception as e:
            logger.error(f"[SCHEDULER] Failed to reset verification for habit_id={habit_id}: {e}")

    return reset_count
