"""
Pydantic models for authentication
"""
from typing import Optional
from pydantic import BaseModel, Field


class SignUpRequest(BaseModel):
    """Request model for email/password sign-up"""
    email: str = Field("", description="Email address")
    password: str = Field("", description="Password (at least 6 characters)")
    confirm_password: str = Field("", description="Must match password")


class SignInRequest(BaseModel):
    """Request model for email/password sign-in"""
    email: str = Field("", description="Email address")
    password: str = Field("", description="Password")


class AuthenticatedUser(BaseModel):
    """The user behind a validated access token"""
    id: str
    email: Optional[str] = None
    access_token: str = Field(..., exclude=True)


class AuthSession(BaseModel):
    """Session tokens returned by the auth provider"""
    user_id: str
    email: Optional[str] = None
    access_token: Optional[str] = None
    refresh_token: Optional[str] = None
    expires_at: Optional[int] = None


class SignUpResponse(BaseModel):
    """Response for a completed sign-up"""
    message: str
    next: str = Field("/profiles", description="Where the client continues (profile creation)")
    session: AuthSession


class OAuthUrlResponse(BaseModel):
    """OAuth redirect URL for a third-party provider"""
    provider: str
    url: str
