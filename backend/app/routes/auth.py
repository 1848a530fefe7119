"""
Auth Routes - Sign-up, sign-in, Google OAuth and session endpoints
"""
from typing import Optional
from fastapi import APIRouter, Depends, HTTPException

from app.core.dependencies import get_current_user
from app.core.exceptions import AuthenticationError, ValidationError
from app.models.auth import AuthenticatedUser, SignInRequest, SignUpRequest
from app.services import auth as auth_service

router = APIRouter(prefix="/auth", tags=["auth"])


@router.post("/signup")
def sign_up(request: SignUpRequest):
    """Register with email and password; the client continues to profile creation"""
    try:
        return auth_service.sign_up(request.email, request.password, request.confirm_password)
    except ValidationError as e:
        raise HTTPException(status_code=400, detail=str(e))
    except AuthenticationError as e:
        raise HTTPException(status_code=401, detail=str(e))
    except Exception as e:
        raise HTTPException(status_code=500, detail=f"Unexpected error: {str(e)}")


@router.post("/signin")
def sign_in(request: SignInRequest):
    """Sign in with email and password"""
    try:
        return auth_service.sign_in(request.email, request.password)
    except ValidationError as e:
        raise HTTPException(status_code=400, detail=str(e))
    except AuthenticationError as e:
        raise HTTPException(status_code=401, detail=str(e))
    except Exception as e:
        raise HTTPException(status_code=500, detail=f"Unexpected error: {str(e)}")


@router.get("/google")
def google_sign_in(redirect_to: Optional[str] = None):
    """Get the Google OAuth URL to send the browser to"""
    try:
        return auth_service.get_google_sign_in_url(redirect_to)
    except AuthenticationError as e:
        raise HTTPException(status_code=401, detail=str(e))
    except Exception as e:
        raise HTTPException(status_code=500, detail=f"Unexpected error: {str(e)}")


@router.get("/session")
def get_session(user: AuthenticatedUser = Depends(get_current_user)):
    """Get the user behind the bearer token"""
    return {"user_id": user.id, "email": user.email, "access_token": user.access_token}


@router.post("/signout")
def sign_out(user: AuthenticatedUser = Depends(get_current_user)):
    """Revoke the current session"""
    try:
        auth_service.sign_out(user.access_token)
        return {"message": "Signed out"}
    except AuthenticationError as e:
        raise HTTPException(status_code=401, detail=str(e))
    except Exception as e:
        raise HTTPException(status_code=500, detail=f"Unexpected error: {str(e)}")
