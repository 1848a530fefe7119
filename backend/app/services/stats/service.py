"""
Stats Service - Dashboard numbers, timeframe reports, achievements and the leaderboard
"""
from datetime import datetime
from typing import Dict, List, Optional
import logging

import pytz

from app.core.constants import HABIT_COMPLETION_POINTS, UNKNOWN_NAME, UNKNOWN_USERNAME
from app.core.exceptions import DatabaseError
from app.models.stats import (
    Achievement,
    DashboardResponse,
    LeaderboardEntry,
    ReportResponse,
    Timeframe,
    TimeframeStats,
    UserStats
)
from app.services import points, profiles
from app.services.habits import repository as habits_repository
from app.services.profiles import repository as profiles_repository
from app.utils.timezone import get_timeframe_start

logger = logging.getLogger(__name__)

# (id, title, description, icon, metric, threshold)
ACHIEVEMENTS = [
    ("streak_3", "3-Day Streak", "Maintained habits for 3 consecutive days", "🔥", "streak", 3),
    ("streak_7", "7-Day Streak", "Maintained habits for a full week", "🏆", "streak", 7),
    ("streak_30", "Monthly Master", "Maintained habits for 30 consecutive days", "🌟", "streak", 30),
    ("points_100", "Century Club", "Earned 100 or more habit points", "💯", "points", 100),
    ("points_500", "Habit Hero", "Earned 500 or more habit points", "👑", "points", 500),
    ("habits_5", "Getting Started", "Completed 5 habits", "🌱", "completed", 5),
    ("habits_20", "Consistency is Key", "Completed 20 habits", "🔑", "completed", 20),
    ("habits_50", "Habit Master", "Completed 50 habits", "🎓", "completed", 50),
]


def completion_rate(completed: int, total: int) -> int:
    """Rounded percentage, 0 when there is nothing to complete"""
    if total <= 0:
        return 0
    return round(completed / total * 100)


def get_user_stats(user_id: str) -> UserStats:
    """
    Headline numbers for the dashboard

    Database failures are logged and the affected numbers stay at zero.
    """
    stats = UserStats()

    try:
        stack_ids = habits_repository.get_stack_ids_for_user(user_id)
        habits = habits_repository.get_habits_for_stacks(stack_ids)
        completed = sum(1 for h in habits if h.get("completed"))

        stats.habit_count = len(habits)
        stats.goals_achieved = completed
        stats.completion_rate = completion_rate(completed, len(habits))
    except DatabaseError as e:
        logger.error(f"[STATS] Failed to count habits for user {user_id}: {e}")

    points_data = points.get_user_points(user_id)
    if points_data:
        stats.streak = points_data.current_streak
        stats.total_points = points_data.total_points

    return stats


def get_dashboard(user_id: str) -> DashboardResponse:
    """
    Profile and headline stats for the home screen

    Raises:
        ProfileNotFoundError: If the user has not created a profile
        DatabaseError: If the profile query fails
    """
    profile = profiles.get_profile(user_id)
    return DashboardResponse(profile=profile, stats=get_user_stats(user_id))


def get_timeframe_stats(user_id: str, timeframe: Timeframe, now: Optional[datetime] = None) -> TimeframeStats:
    """
    Verified completions since the start of the day, week or month

    Points earned is an estimate at the per-habit rate and ignores bonuses.

    Raises:
        DatabaseError: If a query fails
    """
    start = get_timeframe_start(Timeframe(timeframe).value, now)
    since_iso = start.astimezone(pytz.utc).isoformat()

    stack_ids = habits_repository.get_stack_ids_for_user(user_id)
    habit_ids = [h["id"] for h in habits_repository.get_habits_for_stacks(stack_ids)]
    verified = habits_repository.get_verified_since(habit_ids, since_iso)

    habits_completed = len(verified)
    return TimeframeStats(
        habits_completed=habits_completed,
        total_habits=len(habit_ids),
        completion_rate=completion_rate(habits_completed, len(habit_ids)),
        points_earned=habits_completed * HABIT_COMPLETION_POINTS,
        streak_maintained=habits_completed > 0
    )


def get_achievements(current_streak: int, total_points: int, completed_habits: int) -> List[Achievement]:
    """Every achievement with its earned flag"""
    metrics = {
        "streak": current_streak,
        "points": total_points,
        "completed": completed_habits
    }
    return [
        Achievement(
            id=achievement_id,
            title=title,
            description=description,
            icon=icon,
            earned=metrics[metric] >= threshold
        )
        for achievement_id, title, description, icon, metric, threshold in ACHIEVEMENTS
    ]


def get_report(user_id: str, now: Optional[datetime] = None) -> ReportResponse:
    """
    Full report: headline stats, day/week/month breakdown and achievements

    A timeframe whose queries fail is reported as zeros.
    """
    user_stats = get_user_stats(user_id)

    timeframes: Dict[Timeframe, TimeframeStats] = {}
    for timeframe in Timeframe:
        try:
            timeframes[timeframe] = get_timeframe_stats(user_id, timeframe, now)
        except DatabaseError as e:
            logger.error(f"[STATS] Failed to load {timeframe.value} stats for user {user_id}: {e}")
            timeframes[timeframe] = TimeframeStats()

    return ReportResponse(
        current_streak=user_stats.streak,
        user_stats=user_stats,
        timeframes=timeframes,
        achievements=get_achievements(user_stats.streak, user_stats.total_points, user_stats.goals_achieved)
    )


def get_leaderboard(current_user_id: Optional[str] = None) -> List[LeaderboardEntry]:
    """
    Every user ranked by total points, highest first

    Users without a profile show as "Unknown User".

    Raises:
        DatabaseError: If a query fails
    """
    rows = points.repository.get_all_points_ranked()
    profiles_by_id = {
        p["id"]: p
        for p in profiles_repository.get_profiles_by_ids([row["user_id"] for row in rows])
    }

    leaderboard = []
    for index, row in enumerate(rows):
        profile = profiles_by_id.get(row["user_id"]) or {}
        leaderboard.append(LeaderboardEntry(
            rank=index + 1,
            user_id=row["user_id"],
            username=profile.get("username") or UNKNOWN_USERNAME,
            name=profile.get("name") or UNKNOWN_NAME,
            total_points=row.get("total_points") or 0,
            current_streak=row.get("current_streak") or 0,
            avatar_url=profile.get("avatar_url"),
            is_current_user=row["user_id"] == current_user_id
        ))

    return leaderboard
