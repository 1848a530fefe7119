"""
Timezone Utilities - Centralized timezone handling
"""
from datetime import date, datetime, timedelta
import pytz

from app.core.config import settings


# Application timezone - streak days and report windows follow this zone
APP_TZ = pytz.timezone(settings.APP_TIMEZONE)


def get_app_tz():
    """
    Get the application timezone object

    Returns:
        pytz timezone configured by APP_TIMEZONE
    """
    return APP_TZ


def get_app_now() -> datetime:
    """
    Get current datetime in the application timezone

    Returns:
        Timezone-aware datetime object
    """
    return datetime.now(APP_TZ)


def get_app_today_date() -> date:
    """
    Get today's date in the application timezone

    Returns:
        date object for today
    """
    return get_app_now().date()


def get_utc_now_iso() -> str:
    """Current UTC time as an ISO-8601 string, used for stored timestamps"""
    return datetime.now(pytz.utc).isoformat()


def get_timeframe_start(timeframe: str, now: datetime = None) -> datetime:
    """
    Get the start of a report timeframe in the application timezone

    Args:
        timeframe: 'day' (local midnight), 'week' (last Sunday) or 'month' (the 1st)
        now: Optional timezone-aware current datetime (defaults to now)

    Returns:
        Timezone-aware datetime at the start of the timeframe
    """
    local_now = (now or get_app_now()).astimezone(APP_TZ)
    midnight = local_now.replace(tzinfo=None, hour=0, minute=0, second=0, microsecond=0)

    if timeframe == "day":
        start = midnight
    elif timeframe == "week":
        # weekday(): Monday=0 ... Sunday=6
        start = midnight - timedelta(days=(local_now.weekday() + 1) % 7)
    elif timeframe == "month":
        start = midnight.replace(day=1)
    else:
        raise ValueError(f"Unknown timeframe: {timeframe}")

    return APP_TZ.localize(start)
