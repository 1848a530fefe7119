"""
Points module - Points and streak ledger
"""
from . import repository
from . import service

from .service import (
    add_points,
    award_habit_completion_points,
    award_stack_completion_points,
    compute_streak,
    advance_streak,
    update_streak,
    check_and_award_streak_bonus,
    get_user_points,
    StreakUpdate
)

__all__ = [
    'repository',
    'service',
    'add_points',
    'award_habit_completion_points',
    'award_stack_completion_points',
    'compute_streak',
    'advance_streak',
    'update_streak',
    'check_and_award_streak_bonus',
    'get_user_points',
    'StreakUpdate'
]
