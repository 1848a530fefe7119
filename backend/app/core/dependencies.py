"""
Dependency injection for shared clients and resources
"""
import logging
from typing import Optional

from fastapi import Depends
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer
from openai import OpenAI
from supabase import create_client, Client

from app.core.config import settings
from app.models.auth import AuthenticatedUser

logger = logging.getLogger(__name__)

# Singletons, created on first use
_supabase_client: Optional[Client] = None
_openai_client: Optional[OpenAI] = None

bearer_scheme = HTTPBearer(auto_error=False)


def get_supabase_client() -> Client:
    """Get the shared Supabase client instance (tables, storage, token lookups)"""
    global _supabase_client

    if _supabase_client is None:
        _supabase_client = create_client(settings.SUPABASE_URL, settings.SUPABASE_KEY)
    return _supabase_client


def create_auth_client() -> Client:
    """
    Create a fresh Supabase client for sign-in/sign-up calls

    Signing in stores the session on the client it was called on, so these
    calls never go through the shared client used for table queries.
    """
    return create_client(settings.SUPABASE_URL, settings.SUPABASE_KEY)


def get_openai_client() -> OpenAI:
    """Get the shared OpenAI client instance"""
    global _openai_client

    if _openai_client is None:
        _openai_client = OpenAI(
            api_key=settings.OPENAI_API_KEY,
            timeout=settings.OPENAI_TIMEOUT_SECONDS
        )
    return _openai_client


def get_current_user(
    credentials: Optional[HTTPAuthorizationCredentials] = Depends(bearer_scheme)
) -> AuthenticatedUser:
    """
    FastAPI dependency resolving the bearer token to the signed-in user

    Raises:
        HTTPException 401: If the token is missing or rejected by the auth provider
    """
    # Import here to avoid circular dependency
    from fastapi import HTTPException
    from app.core.exceptions import AuthenticationError
    from app.services.auth import get_user_from_token

    if credentials is None or not credentials.credentials:
        raise HTTPException(status_code=401, detail="Not authenticated")

    try:
        return get_user_from_token(credentials.credentials)
    except AuthenticationError as e:
        raise HTTPException(status_code=401, detail=str(e))
