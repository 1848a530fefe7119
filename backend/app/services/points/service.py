"""
Points Service - Points and streak ledger
Awards points for verified habits and stacks, keeps the daily streak,
and pays streak milestone bonuses
"""
from datetime import date, timedelta
from typing import NamedTuple, Optional
import logging

from app.core.constants import (
    HABIT_COMPLETION_POINTS,
    STACK_COMPLETION_POINTS,
    STREAK_BONUS_POINTS
)
from app.core.exceptions import DatabaseError
from app.models.points import PointsData
from app.utils.timezone import get_app_today_date
from . import repository

logger = logging.getLogger(__name__)


class StreakUpdate(NamedTuple):
    """Streak before and after an activity"""
    previous: int
    current: int

    @property
    def changed(self) -> bool:
        return self.previous != self.current


def add_points(user_id: str, amount: int) -> int:
    """
    Add points to a user's total, creating the record if needed

    Args:
        user_id: The user ID
        amount: Points to add

    Returns:
        The new total, or 0 if the database call failed
    """
    try:
        new_total = repository.increment_points(user_id, amount)
    except DatabaseError as e:
        logger.error(f"[POINTS] Could not add {amount} points for user {user_id}: {e}")
        return 0

    logger.info(f"[POINTS] +{amount} for user {user_id} (total {new_total})")
    return new_total


def award_habit_completion_points(user_id: str) -> int:
    """Award the fixed points for one verified habit"""
    return add_points(user_id, HABIT_COMPLETION_POINTS)


def award_stack_completion_points(user_id: str) -> int:
    """Award the fixed bonus for completing a whole stack"""
    return add_points(user_id, STACK_COMPLETION_POINTS)


def compute_streak(last_activity_date: Optional[date], current_streak: int, today: date) -> int:
    """
    Work out the streak after an activity today

    - last activity yesterday: streak continues (+1)
    - last activity before yesterday: streak restarts at 1
    - last activity today: unchanged
    - never active: 1
    """
    if last_activity_date is None:
        return 1

    yesterday = today - timedelta(days=1)
    if last_activity_date == yesterday:
        return current_streak + 1
    if last_activity_date < yesterday:
        return 1
    return current_streak


def _parse_date(value) -> Optional[date]:
    if value is None or isinstance(value, date):
        return value
    return date.fromisoformat(str(value)[:10])


def advance_streak(user_id: str) -> StreakUpdate:
    """
    Record activity for today and update the user's streak

    Args:
        user_id: The user ID

    Returns:
        StreakUpdate with the previous and new streak; current is 0 if the
        record could not be read or written
    """
    today = get_app_today_date()

    try:
        record = repository.get_points_record(user_id)
    except DatabaseError as e:
        logger.error(f"[STREAK] Could not read streak for user {user_id}: {e}")
        return StreakUpdate(previous=0, current=0)

    previous = 0
    last_activity = None
    if record:
        previous = record.get("current_streak") or 0
        last_activity = _parse_date(record.get("last_activity_date"))
    new_streak = compute_streak(last_activity, previous, today)

    try:
        repository.upsert_streak(user_id, new_streak, today)
    except DatabaseError as e:
        logger.error(f"[STREAK] Could not save streak for user {user_id}: {e}")
        return StreakUpdate(previous=previous, current=0)

    logger.info(f"[STREAK] User {user_id}: {previous} -> {new_streak}")
    return StreakUpdate(previous=previous, current=new_streak)


def update_streak(user_id: str) -> int:
    """
    Record activity for today and return the resulting streak (0 on failure)
    """
    return advance_streak(user_id).current


def check_and_award_streak_bonus(user_id: str, streak: int) -> int:
    """
    Pay the bonus for a streak milestone

    Only an exact milestone (3, 7, 14, 30 days) pays; passing over one does not.

    Args:
        user_id: The user ID
        streak: The streak just reached

    Returns:
        The new points total, or 0 if no bonus applied
    """
    bonus = STREAK_BONUS_POINTS.get(streak, 0)
    if bonus <= 0:
        return 0

    logger.info(f"[STREAK] {streak}-day milestone for user {user_id}: +{bonus} bonus")
    return add_points(user_id, bonus)


def get_user_points(user_id: str) -> Optional[PointsData]:
    """
    Get a user's points and streak

    Returns:
        PointsData, or None if the user has no record or the read failed
    """
    try:
        record = repository.get_points_record(user_id)
    except DatabaseError as e:
        logger.error(f"[POINTS] Could not read points for user {user_id}: {e}")
        return None

    if not record:
        return None

    return PointsData(
        user_id=record["user_id"],
        total_points=record.get("total_points") or 0,
        current_streak=record.get("current_streak") or 0,
        last_activity_date=_parse_date(record.get("last_activity_date"))
    )
