"""
Profiles Service - Profile creation and editing
Usernames are unique: every write that sets a new username checks first
"""
from typing import Optional
import logging

from app.core.exceptions import ProfileNotFoundError, UsernameTakenError, ValidationError
from app.models.profile import Profile
from . import repository

logger = logging.getLogger(__name__)


def _clean(name: str, username: str, avatar_url: Optional[str]) -> dict:
    name = (name or "").strip()
    username = (username or "").strip()
    if not name:
        raise ValidationError("Name is required")
    if not username:
        raise ValidationError("Username is required")

    return {
        "name": name,
        "username": username,
        "avatar_url": (avatar_url or "").strip() or None
    }


def _ensure_username_available(username: str, user_id: str) -> None:
    if repository.find_profile_by_username(username, exclude_user_id=user_id):
        raise UsernameTakenError("Username already taken. Please choose another one.")


def get_profile(user_id: str) -> Profile:
    """
    Get the signed-in user's profile

    Raises:
        ProfileNotFoundError: If the user has not created a profile yet
        DatabaseError: If query fails
    """
    profile = repository.get_profile(user_id)
    if not profile:
        raise ProfileNotFoundError("Profile not found. Create one to continue.")
    return Profile(**profile)


def create_profile(user_id: str, name: str, username: str, avatar_url: Optional[str] = None) -> Profile:
    """
    Create the profile that completes sign-up

    Raises:
        ValidationError: If name or username is blank
        UsernameTakenError: If another profile uses the username
        DatabaseError: If a query fails
    """
    data = _clean(name, username, avatar_url)
    _ensure_username_available(data["username"], user_id)

    profile = repository.create_profile({"id": user_id, **data})
    logger.info(f"[PROFILE] Created profile '{data['username']}' for user {user_id}")
    return Profile(**profile)


def update_profile(user_id: str, name: str, username: str, avatar_url: Optional[str] = None) -> Profile:
    """
    Edit the signed-in user's profile

    The username check runs only when the username actually changes.

    Raises:
        ProfileNotFoundError: If the user has no profile
        ValidationError: If name or username is blank
        UsernameTakenError: If another profile uses the new username
        DatabaseError: If a query fails
    """
    current = get_profile(user_id)
    data = _clean(name, username, avatar_url)

    if data["username"] != current.username:
        _ensure_username_available(data["username"], user_id)

    profile = repository.update_profile(user_id, data)
    logger.info(f"[PROFILE] Updated profile for user {user_id}")
    return Profile(**profile) if profile else current.model_copy(update=data)
