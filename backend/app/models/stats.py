"""
Pydantic models for dashboard stats, reports and the leaderboard
"""
from enum import Enum
from typing import Dict, List, Optional
from pydantic import BaseModel

from app.models.profile import Profile


class Timeframe(str, Enum):
    """Report timeframes"""
    DAY = "day"
    WEEK = "week"
    MONTH = "month"


class UserStats(BaseModel):
    """Headline numbers for the dashboard"""
    habit_count: int = 0
    streak: int = 0
    completion_rate: int = 0
    goals_achieved: int = 0
    total_points: int = 0


class DashboardResponse(BaseModel):
    """Profile plus headline stats"""
    profile: Profile
    stats: UserStats


class TimeframeStats(BaseModel):
    """Verified completions within a timeframe"""
    habits_completed: int = 0
    total_habits: int = 0
    completion_rate: int = 0
    points_earned: int = 0
    streak_maintained: bool = False


class Achievement(BaseModel):
    """A badge earned from streak, points or completion thresholds"""
    id: str
    title: str
    description: str
    icon: str
    earned: bool


class ReportResponse(BaseModel):
    """Full report for the signed-in user"""
    current_streak: int = 0
    user_stats: UserStats
    timeframes: Dict[Timeframe, TimeframeStats]
    achievements: List[Achievement]


class LeaderboardEntry(BaseModel):
    """One ranked row of the leaderboard"""
    rank: int
    user_id: str
    username: str
    name: str
    total_points: int
    current_streak: int
    avatar_url: Optional[str] = None
    is_current_user: bool = False
