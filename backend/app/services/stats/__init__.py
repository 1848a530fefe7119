"""
Stats module - Dashboard, reports and leaderboard
"""
from . import service

from .service import (
    get_user_stats,
    get_dashboard,
    get_timeframe_stats,
    get_achievements,
    get_report,
    get_leaderboard
)

__all__ = [
    'service',
    'get_user_stats',
    'get_dashboard',
    'get_timeframe_stats',
    'get_achievements',
    'get_report',
    'get_leaderboard'
]
