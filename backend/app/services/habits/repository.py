"""
Habits Repository - Centralized database access layer
All Supabase queries for habit stacks, habits, and habit verifications
"""
from typing import List, Dict, Any, Optional
import logging

from app.core import dependencies
from app.core.exceptions import DatabaseError

logger = logging.getLogger(__name__)


# ============================================================================
# HABIT_STACKS TABLE
# ============================================================================

def get_stacks_for_user(user_id: str) -> List[Dict[str, Any]]:
    """
    Get all habit stacks owned by a user, oldest first

    Args:
        user_id: The owning user ID

    Returns:
        List of stack dictionaries

    Raises:
        DatabaseError: If query fails
    """
    try:
        result = dependencies.get_supabase_client().table("habit_stacks")\
            .select("*")\
            .eq("user_id", user_id)\
            .order("created_at")\
            .execute()
        return result.data
    except Exception as e:
        logger.error(f"Database error fetching stacks for user {user_id}: {e}")
        raise DatabaseError(f"Failed to fetch habit stacks: {e}")


def get_stack_for_user(stack_id: str, user_id: str) -> Optional[Dict[str, Any]]:
    """
    Get a single stack, only if it belongs to the user

    Args:
        stack_id: The stack ID
        user_id: The owning user ID

    Returns:
        Stack dictionary or None if not found

    Raises:
        DatabaseError: If query fails
    """
    try:
        result = dependencies.get_supabase_client().table("habit_stacks")\
            .select("*")\
            .eq("id", stack_id)\
            .eq("user_id", user_id)\
            .execute()
        return result.data[0] if result.data else None
    except Exception as e:
        logger.error(f"Database error fetching stack {stack_id}: {e}")
        raise DatabaseError(f"Failed to fetch habit stack: {e}")


def get_stack_ids_for_user(user_id: str) -> List[str]:
    """
    Get the IDs of all stacks owned by a user

    Raises:
        DatabaseError: If query fails
    """
    try:
        result = dependencies.get_supabase_client().table("habit_stacks")\
            .select("id")\
            .eq("user_id", user_id)\
            .execute()
        return [row["id"] for row in result.data]
    except Exception as e:
        logger.error(f"Database error fetching stack ids for user {user_id}: {e}")
        raise DatabaseError(f"Failed to fetch habit stacks: {e}")


def create_stack(user_id: str, name: str) -> Dict[str, Any]:
    """
    Create a new habit stack

    Args:
        user_id: The owning user ID
        name: Stack name

    Returns:
        Created stack data

    Raises:
        DatabaseError: If insert fails
    """
    try:
        result = dependencies.get_supabase_client().table("habit_stacks").insert({
            "user_id": user_id,
            "name": name
        }).execute()
        return result.data[0] if result.data else {}
    except Exception as e:
        logger.error(f"Database error creating stack: {e}")
        raise DatabaseError(f"Failed to create habit stack: {e}")


# ============================================================================
# HABITS TABLE
# ============================================================================

def get_habits_for_stack(stack_id: str) -> List[Dict[str, Any]]:
    """
    Get all habits of a stack in display order

    Args:
        stack_id: The stack ID

    Returns:
        List of habit dictionaries ordered by position

    Raises:
        DatabaseError: If query fails
    """
    try:
        result = dependencies.get_supabase_client().table("habits")\
            .select("*")\
            .eq("stack_id", stack_id)\
            .order("position")\
            .execute()
        return result.data
    except Exception as e:
        logger.error(f"Database error fetching habits for stack {stack_id}: {e}")
        raise DatabaseError(f"Failed to fetch habits: {e}")


def get_habits_for_stacks(stack_ids: List[str], completed: Optional[bool] = None) -> List[Dict[str, Any]]:
    """
    Get habits across several stacks

    Args:
        stack_ids: Stack IDs to include
        completed: Optional filter on the completed flag

    Returns:
        List of habit dictionaries (id, stack_id, completed)

    Raises:
        DatabaseError: If query fails
    """
    if not stack_ids:
        return []

    try:
        query = dependencies.get_supabase_client().table("habits")\
            .select("id, stack_id, completed")\
            .in_("stack_id", stack_ids)
        if completed is not None:
            query = query.eq("completed", completed)
        result = query.execute()
        return result.data
    except Exception as e:
        logger.error(f"Database error fetching habits for stacks: {e}")
        raise DatabaseError(f"Failed to fetch habits: {e}")


def create_habit(stack_id: str, name: str, description: Optional[str], position: int) -> Dict[str, Any]:
    """
    Create a new habit at the given position

    Args:
        stack_id: The parent stack ID
        name: Habit name
        description: Optional description
        position: Display position within the stack

    Returns:
        Created habit data

    Raises:
        DatabaseError: If insert fails
    """
    try:
        result = dependencies.get_supabase_client().table("habits").insert({
            "stack_id": stack_id,
            "name": name,
            "description": description,
            "position": position,
            "completed": False
        }).execute()
        return result.data[0] if result.data else {}
    except Exception as e:
        logger.error(f"Database error creating habit: {e}")
        raise DatabaseError(f"Failed to create habit: {e}")


def update_habit(habit_id: str, update_data: Dict[str, Any]) -> Dict[str, Any]:
    """
    Update a habit

    Args:
        habit_id: The habit ID
        update_data: Dictionary of fields to update

    Returns:
        Updated habit data

    Raises:
        DatabaseError: If update fails
    """
    try:
        result = dependencies.get_supabase_client().table("habits")\
            .update(update_data)\
            .eq("id", habit_id)\
            .execute()
        return result.data[0] if result.data else {}
    except Exception as e:
        logger.error(f"Database error updating habit {habit_id}: {e}")
        raise DatabaseError(f"Failed to update habit: {e}")


def reset_habits_for_stack(stack_id: str) -> List[Dict[str, Any]]:
    """
    Mark every habit of a stack as not completed

    Raises:
        DatabaseError: If update fails
    """
    try:
        result = dependencies.get_supabase_client().table("habits")\
            .update({"completed": False})\
            .eq("stack_id", stack_id)\
            .execute()
        return result.data
    except Exception as e:
        logger.error(f"Database error resetting habits for stack {stack_id}: {e}")
        raise DatabaseError(f"Failed to reset habits: {e}")


# ============================================================================
# HABIT_VERIFICATIONS TABLE
# ============================================================================

def get_verification(habit_id: str) -> Optional[Dict[str, Any]]:
    """
    Get the verification row of a habit

    Args:
        habit_id: The habit ID

    Returns:
        Verification dictionary or None if the habit has never been submitted

    Raises:
        DatabaseError: If query fails
    """
    try:
        result = dependencies.get_supabase_client().table("habit_verifications")\
            .select("*")\
            .eq("habit_id", habit_id)\
            .execute()
        return result.data[0] if result.data else None
    except Exception as e:
        logger.error(f"Database error fetching verification for habit {habit_id}: {e}")
        raise DatabaseError(f"Failed to fetch verification status: {e}")


def get_verifications_for_habits(habit_ids: List[str]) -> List[Dict[str, Any]]:
    """
    Get the verification rows of several habits in one query

    Raises:
        DatabaseError: If query fails
    """
    if not habit_ids:
        return []

    try:
        result = dependencies.get_supabase_client().table("habit_verifications")\
            .select("*")\
            .in_("habit_id", habit_ids)\
            .execute()
        return result.data
    except Exception as e:
        logger.error(f"Database error fetching verifications: {e}")
        raise DatabaseError(f"Failed to fetch verification statuses: {e}")


def upsert_verification(verification_data: Dict[str, Any]) -> Dict[str, Any]:
    """
    Insert or update the verification row of a habit in a single operation

    Args:
        verification_data: Row data including habit_id

    Returns:
        Stored verification data

    Raises:
        DatabaseError: If upsert fails
    """
    try:
        result = dependencies.get_supabase_client().table("habit_verifications")\
            .upsert(verification_data, on_conflict="habit_id")\
            .execute()
        return result.data[0] if result.data else {}
    except Exception as e:
        logger.error(f"Database error saving verification for habit {verification_data.get('habit_id')}: {e}")
        raise DatabaseError(f"Failed to save verification status: {e}")


def get_verified_since(habit_ids: List[str], since_iso: str) -> List[Dict[str, Any]]:
    """
    Get verifications of the given habits verified after a point in time

    Args:
        habit_ids: Habit IDs to include
        since_iso: ISO-8601 timestamp (exclusive lower bound)

    Returns:
        List of {habit_id, verified_at} dictionaries

    Raises:
        DatabaseError: If query fails
    """
    if not habit_ids:
        return []

    try:
        result = dependencies.get_supabase_client().table("habit_verifications")\
            .select("habit_id, verified_at")\
            .eq("is_verified", True)\
            .gt("verified_at", since_iso)\
            .in_("habit_id", habit_ids)\
            .execute()
        return result.data
    except Exception as e:
        logger.error(f"Database error fetching verified habits since {since_iso}: {e}")
        raise DatabaseError(f"Failed to fetch verified habits: {e}")


def get_stale_pending_verifications(cutoff_iso: str) -> List[Dict[str, Any]]:
    """
    Get verifications left pending since before the cutoff

    Args:
        cutoff_iso: ISO-8601 timestamp; rows last updated before it are stale

    Returns:
        List of verification dictionaries

    Raises:
        DatabaseError: If query fails
    """
    try:
        result = dependencies.get_supabase_client().table("habit_verifications")\
            .select("*")\
            .eq("pending_verification", True)\
            .lt("updated_at", cutoff_iso)\
            .execute()
        return result.data
    except Exception as e:
        logger.error(f"Database error fetching stale pending verifications: {e}")
        raise DatabaseError(f"Failed to fetch pending verifications: {e}")
