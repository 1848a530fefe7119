"""
Pydantic models for user profiles
"""
from typing import Optional
from pydantic import BaseModel, Field


class ProfileRequest(BaseModel):
    """Request model for creating or editing a profile"""
    name: str = Field("", max_length=200, description="Display name")
    username: str = Field("", max_length=50, description="Unique username")
    avatar_url: Optional[str] = Field(None, description="Optional avatar image URL")


class Profile(BaseModel):
    """A user profile row"""
    id: str
    name: str
    username: str
    avatar_url: Optional[str] = None
    created_at: Optional[str] = None
