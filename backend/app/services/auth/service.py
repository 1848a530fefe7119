"""
Auth Service - Session accessor over Supabase Auth
Sign-up, sign-in (email/password and Google OAuth), token lookup and sign-out
"""
from typing import Any, Optional
import logging

from app.core import dependencies
from app.core.config import settings
from app.core.constants import MIN_PASSWORD_LENGTH, OAUTH_PROVIDER_GOOGLE
from app.core.exceptions import AuthenticationError, ValidationError
from app.models.auth import AuthenticatedUser, AuthSession, OAuthUrlResponse, SignUpResponse

logger = logging.getLogger(__name__)


def validate_sign_up(email: str, password: str, confirm_password: str) -> None:
    """
    Check sign-up input before calling the auth provider

    Raises:
        ValidationError: With the message to show next to the form
    """
    if not email or not password:
        raise ValidationError("Email and password are required")
    if password != confirm_password:
        raise ValidationError("Passwords do not match")
    if len(password) < MIN_PASSWORD_LENGTH:
        raise ValidationError(f"Password must be at least {MIN_PASSWORD_LENGTH} characters long")


def _to_session(response: Any) -> AuthSession:
    user = response.user
    session = response.session
    if user is None:
        raise AuthenticationError("Auth provider returned no user")

    return AuthSession(
        user_id=str(user.id),
        email=getattr(user, "email", None),
        access_token=getattr(session, "access_token", None),
        refresh_token=getattr(session, "refresh_token", None),
        expires_at=getattr(session, "expires_at", None)
    )


def sign_up(email: str, password: str, confirm_password: str) -> SignUpResponse:
    """
    Register a new user with email and password

    When the project requires email confirmation the returned session carries
    no tokens until the user confirms.

    Raises:
        ValidationError: If the input is invalid
        AuthenticationError: If the provider rejects the sign-up
    """
    email = (email or "").strip()
    validate_sign_up(email, password, confirm_password)

    try:
        response = dependencies.create_auth_client().auth.sign_up({
            "email": email,
            "password": password
        })
    except Exception as e:
        logger.error(f"[AUTH] Sign-up failed for {email}: {e}")
        raise AuthenticationError(str(e))

    session = _to_session(response)
    logger.info(f"[AUTH] Signed up user {session.user_id}")
    return SignUpResponse(
        message="Sign-up successful! Complete your profile to continue.",
        session=session
    )


def sign_in(email: str, password: str) -> AuthSession:
    """
    Sign in with email and password

    Raises:
        ValidationError: If email or password is missing
        AuthenticationError: If the credentials are rejected
    """
    email = (email or "").strip()
    if not email or not password:
        raise ValidationError("Email and password are required")

    try:
        response = dependencies.create_auth_client().auth.sign_in_with_password({
            "email": email,
            "password": password
        })
    except Exception as e:
        logger.warning(f"[AUTH] Sign-in failed for {email}: {e}")
        raise AuthenticationError(str(e))

    session = _to_session(response)
    logger.info(f"[AUTH] Signed in user {session.user_id}")
    return session


def get_google_sign_in_url(redirect_to: Optional[str] = None) -> OAuthUrlResponse:
    """
    Get the Google OAuth URL; the provider redirects back to `redirect_to`

    Args:
        redirect_to: Origin to return to (defaults to APP_ORIGIN)

    Raises:
        AuthenticationError: If the provider call fails
    """
    try:
        response = dependencies.create_auth_client().auth.sign_in_with_oauth({
            "provider": OAUTH_PROVIDER_GOOGLE,
            "options": {"redirect_to": redirect_to or settings.APP_ORIGIN}
        })
    except Exception as e:
        logger.error(f"[AUTH] Google sign-in failed: {e}")
        raise AuthenticationError(str(e))

    return OAuthUrlResponse(provider=OAUTH_PROVIDER_GOOGLE, url=response.url)


def get_user_from_token(access_token: str) -> AuthenticatedUser:
    """
    Resolve an access token to its user

    Raises:
        AuthenticationError: If the token is invalid or expired
    """
    try:
        response = dependencies.get_supabase_client().auth.get_user(access_token)
    except Exception as e:
        logger.warning(f"[AUTH] Token rejected: {e}")
        raise AuthenticationError("Invalid or expired session")

    user = getattr(response, "user", None) if response else None
    if user is None:
        raise AuthenticationError("Invalid or expired session")

    return AuthenticatedUser(id=str(user.id), email=getattr(user, "email", None), access_token=access_token)


def sign_out(access_token: str) -> None:
    """
    Revoke the session behind an access token

    Raises:
        AuthenticationError: If the provider rejects the request
    """
    try:
        dependencies.get_supabase_client().auth.admin.sign_out(access_token)
    except Exception as e:
        logger.warning(f"[AUTH] Sign-out failed: {e}")
        raise AuthenticationError(str(e))

    logger.info("[AUTH] Signed out")
