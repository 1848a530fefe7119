"""
Scheduler Service - Background scheduler lifecycle management
Handles starting, stopping, and configuring the APScheduler instance
"""
import logging
from apscheduler.schedulers.background import BackgroundScheduler
from apscheduler.triggers.interval import IntervalTrigger

from app.core.config import settings
from .jobs import reconcile_stale_pending_verifications

logger = logging.getLogger(__name__)

# Global scheduler instance
scheduler = None


def start_scheduler():
    """
    Start the background scheduler
    Runs the pending-verification check every SCHEDULER_CHECK_INTERVAL_SECONDS
    """
    global scheduler

    if scheduler is not None:
        logger.warning("Scheduler already running")
        return

    scheduler = BackgroundScheduler()

    scheduler.add_job(
        func=reconcile_stale_pending_verifications,
        trigger=IntervalTrigger(seconds=settings.SCHEDULER_CHECK_INTERVAL_SECONDS),
        id='pending_verification_check',
        name='Reset verifications stuck in pending',
        replace_existing=True
    )

    scheduler.start()
    logger.info(f"Scheduler started - checking pending verifications every {settings.SCHEDULER_CHECK_INTERVAL_SECONDS} seconds")


def stop_scheduler():
    """Stop the background scheduler"""
    global scheduler

    if scheduler is not None:
        scheduler.shutdown()
        scheduler = None
        logger.info("Scheduler stopped")


def is_running() -> bool:
    return scheduler is not None
