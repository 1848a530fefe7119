"""
Profile Routes - Create, view and edit the signed-in user's profile
"""
from fastapi import APIRouter, Depends, HTTPException

from app.core.dependencies import get_current_user
from app.core.exceptions import (
    ProfileNotFoundError,
    UsernameTakenError,
    ValidationError,
    DatabaseError
)
from app.models.auth import AuthenticatedUser
from app.models.profile import ProfileRequest
from app.services import profiles as profile_service

router = APIRouter(prefix="/profiles", tags=["profiles"])


@router.get("/me")
def get_my_profile(user: AuthenticatedUser = Depends(get_current_user)):
    """Get the signed-in user's profile (404 means create one first)"""
    try:
        return profile_service.get_profile(user.id)
    except ProfileNotFoundError as e:
        raise HTTPException(status_code=404, detail=str(e))
    except DatabaseError as e:
        raise HTTPException(status_code=500, detail=str(e))
    except Exception as e:
        raise HTTPException(status_code=500, detail=f"Unexpected error: {str(e)}")


@router.post("")
def create_profile(request: ProfileRequest, user: AuthenticatedUser = Depends(get_current_user)):
    """Create the profile after sign-up"""
    try:
        return profile_service.create_profile(user.id, request.name, request.username, request.avatar_url)
    except UsernameTakenError as e:
        raise HTTPException(status_code=409, detail=str(e))
    except ValidationError as e:
        raise HTTPException(status_code=400, detail=str(e))
    except DatabaseError as e:
        raise HTTPException(status_code=500, detail=str(e))
    except Exception as e:
        raise HTTPException(status_code=500, detail=f"Unexpected error: {str(e)}")


@router.put("/me")
def update_my_profile(request: ProfileRequest, user: AuthenticatedUser = Depends(get_current_user)):
    """Edit name, username and avatar"""
    try:
        return profile_service.update_profile(user.id, request.name, request.username, request.avatar_url)
    except UsernameTakenError as e:
        raise HTTPException(status_code=409, detail=str(e))
    except ValidationError as e:
        raise HTTPException(status_code=400, detail=str(e))
    except ProfileNotFoundError as e:
        raise HTTPException(status_code=404, detail=str(e))
    except DatabaseError as e:
        raise HTTPException(status_code=500, detail=str(e))
    except Exception as e:
        raise HTTPException(status_code=500, detail=f"Unexpected error: {str(e)}")
