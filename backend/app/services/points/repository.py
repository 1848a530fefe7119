"""
Points Repository - Database access for the user_points table
"""
from datetime import date
from typing import List, Dict, Any, Optional
import logging

from app.core import dependencies
from app.core.exceptions import DatabaseError

logger = logging.getLogger(__name__)


def get_points_record(user_id: str) -> Optional[Dict[str, Any]]:
    """
    Get the points and streak row of a user

    Args:
        user_id: The user ID

    Returns:
        Points dictionary or None if the user has never earned points

    Raises:
        DatabaseError: If query fails
    """
    try:
        result = dependencies.get_supabase_client().table("user_points")\
            .select("*")\
            .eq("user_id", user_id)\
            .execute()
        return result.data[0] if result.data else None
    except Exception as e:
        logger.error(f"Database error fetching points for user {user_id}: {e}")
        raise DatabaseError(f"Failed to fetch user points: {e}")


def increment_points(user_id: str, amount: int) -> int:
    """
    Add points to a user's total in a single statement

    Calls the add_user_points Postgres function, which inserts the row with
    `amount` when it is missing and otherwise adds to total_points.

    Args:
        user_id: The user ID
        amount: Points to add

    Returns:
        The new total

    Raises:
        DatabaseError: If the call fails
    """
    try:
        result = dependencies.get_supabase_client().rpc("add_user_points", {
            "p_user_id": user_id,
            "p_amount": amount
        }).execute()
        return int(result.data)
    except Exception as e:
        logger.error(f"Database error adding {amount} points for user {user_id}: {e}")
        raise DatabaseError(f"Failed to add points: {e}")


def upsert_streak(user_id: str, current_streak: int, last_activity_date: date) -> Dict[str, Any]:
    """
    Store a user's streak and last activity date

    Args:
        user_id: The user ID
        current_streak: New streak length in days
        last_activity_date: Date of the activity

    Returns:
        Stored points data

    Raises:
        DatabaseError: If upsert fails
    """
    try:
        result = dependencies.get_supabase_client().table("user_points")\
            .upsert({
                "user_id": user_id,
                "current_streak": current_streak,
                "last_activity_date": str(last_activity_date)
            }, on_conflict="user_id")\
            .execute()
        return result.data[0] if result.data else {}
    except Exception as e:
        logger.error(f"Database error updating streak for user {user_id}: {e}")
        raise DatabaseError(f"Failed to update streak: {e}")


def get_all_points_ranked() -> List[Dict[str, Any]]:
    """
    Get every user's points, highest total first

    Raises:
        DatabaseError: If query fails
    """
    try:
        result = dependencies.get_supabase_client().table("user_points")\
            .select("user_id, total_points, current_streak")\
            .order("total_points", desc=True)\
            .execute()
        return result.data
    except Exception as e:
        logger.error(f"Database error fetching leaderboard points: {e}")
        raise DatabaseError(f"Failed to fetch leaderboard: {e}")
