"""
Profiles Repository - Database access for the profiles table
"""
from typing import List, Dict, Any, Optional
import logging

from app.core import dependencies
from app.core.exceptions import DatabaseError

logger = logging.getLogger(__name__)


def get_profile(user_id: str) -> Optional[Dict[str, Any]]:
    """
    Get a profile by user ID

    Returns:
        Profile dictionary or None if not found

    Raises:
        DatabaseError: If query fails
    """
    try:
        result = dependencies.get_supabase_client().table("profiles")\
            .select("*")\
            .eq("id", user_id)\
            .execute()
        return result.data[0] if result.data else None
    except Exception as e:
        logger.error(f"Database error fetching profile {user_id}: {e}")
        raise DatabaseError(f"Failed to fetch profile: {e}")


def find_profile_by_username(username: str, exclude_user_id: Optional[str] = None) -> Optional[Dict[str, Any]]:
    """
    Look up a profile by username

    Args:
        username: Username to look for
        exclude_user_id: Optional user whose own row is ignored

    Returns:
        Matching profile dictionary or None

    Raises:
        DatabaseError: If query fails
    """
    try:
        query = dependencies.get_supabase_client().table("profiles")\
            .select("id, username")\
            .eq("username", username)
        if exclude_user_id:
            query = query.neq("id", exclude_user_id)
        result = query.limit(1).execute()
        return result.data[0] if result.data else None
    except Exception as e:
        logger.error(f"Database error checking username '{username}': {e}")
        raise DatabaseError(f"Failed to check username: {e}")


def get_profiles_by_ids(user_ids: List[str]) -> List[Dict[str, Any]]:
    """
    Get the public fields of several profiles

    Raises:
        DatabaseError: If query fails
    """
    if not user_ids:
        return []

    try:
        result = dependencies.get_supabase_client().table("profiles")\
            .select("id, username, name, avatar_url")\
            .in_("id", user_ids)\
            .execute()
        return result.data
    except Exception as e:
        logger.error(f"Database error fetching profiles: {e}")
        raise DatabaseError(f"Failed to fetch profiles: {e}")


def create_profile(profile_data: Dict[str, Any]) -> Dict[str, Any]:
    """
    Create a profile row

    Args:
        profile_data: id, name, username, avatar_url

    Returns:
        Created profile data

    Raises:
        DatabaseError: If insert fails
    """
    try:
        result = dependencies.get_supabase_client().table("profiles").insert(profile_data).execute()
        return result.data[0] if result.data else {}
    except Exception as e:
        logger.error(f"Database error creating profile: {e}")
        raise DatabaseError(f"Failed to create profile: {e}")


def update_profile(user_id: str, update_data: Dict[str, Any]) -> Dict[str, Any]:
    """
    Update a profile row

    Raises:
        DatabaseError: If update fails
    """
    try:
        result = dependencies.get_supabase_client().table("profiles")\
            .update(update_data)\
            .eq("id", user_id)\
            .execute()
        return result.data[0] if result.data else {}
    except Exception as e:
        logger.error(f"Database error updating profile {user_id}: {e}")
        raise DatabaseError(f"Failed to update profile: {e}")
