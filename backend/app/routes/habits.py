"""
Stack Routes - Habit stacks, habits and photo verification
"""
from fastapi import APIRouter, Depends, HTTPException

from app.core.dependencies import get_current_user
from app.core.exceptions import (
    HabitNotFoundError,
    IllegalVerificationTransitionError,
    InvalidHabitDataError,
    StackNotFoundError,
    ValidationError,
    DatabaseError,
    StorageError
)
from app.models.auth import AuthenticatedUser
from app.models.habit import AddHabitRequest, CreateStackRequest, VerifyHabitRequest
from app.services import habits as habit_service

router = APIRouter(prefix="/stacks", tags=["stacks"])


@router.get("")
def get_stacks(user: AuthenticatedUser = Depends(get_current_user)):
    """Get all stacks with their habits and verification status"""
    try:
        return habit_service.get_user_stacks(user.id)
    except DatabaseError as e:
        raise HTTPException(status_code=500, detail=str(e))
    except Exception as e:
        raise HTTPException(status_code=500, detail=f"Unexpected error: {str(e)}")


@router.post("")
def create_stack(request: CreateStackRequest, user: AuthenticatedUser = Depends(get_current_user)):
    """Create an empty habit stack"""
    try:
        return habit_service.create_stack(user.id, request.name)
    except InvalidHabitDataError as e:
        raise HTTPException(status_code=400, detail=str(e))
    except DatabaseError as e:
        raise HTTPException(status_code=500, detail=str(e))
    except Exception as e:
        raise HTTPException(status_code=500, detail=f"Unexpected error: {str(e)}")


@router.post("/{stack_id}/habits")
def add_habit(stack_id: str, request: AddHabitRequest, user: AuthenticatedUser = Depends(get_current_user)):
    """Add a habit to the end of a stack"""
    try:
        return habit_service.add_habit(user.id, stack_id, request.name, request.description)
    except InvalidHabitDataError as e:
        raise HTTPException(status_code=400, detail=str(e))
    except StackNotFoundError as e:
        raise HTTPException(status_code=404, detail=str(e))
    except DatabaseError as e:
        raise HTTPException(status_code=500, detail=str(e))
    except Exception as e:
        raise HTTPException(status_code=500, detail=f"Unexpected error: {str(e)}")


@router.post("/{stack_id}/reset")
def reset_stack(stack_id: str, user: AuthenticatedUser = Depends(get_current_user)):
    """Mark every habit in the stack incomplete and unverified"""
    try:
        return habit_service.reset_stack(user.id, stack_id)
    except StackNotFoundError as e:
        raise HTTPException(status_code=404, detail=str(e))
    except DatabaseError as e:
        raise HTTPException(status_code=500, detail=str(e))
    except Exception as e:
        raise HTTPException(status_code=500, detail=f"Unexpected error: {str(e)}")


@router.post("/{stack_id}/habits/{habit_id}/verify")
def verify_habit(stack_id: str, habit_id: str, request: VerifyHabitRequest,
                 user: AuthenticatedUser = Depends(get_current_user)):
    """Submit a photo as proof; rewards are applied when the model accepts it"""
    try:
        return habit_service.verify_habit_completion(user.id, stack_id, habit_id, request.image)
    except (StackNotFoundError, HabitNotFoundError) as e:
        raise HTTPException(status_code=404, detail=str(e))
    except IllegalVerificationTransitionError as e:
        raise HTTPException(status_code=409, detail=str(e))
    except ValidationError as e:
        raise HTTPException(status_code=400, detail=str(e))
    except (DatabaseError, StorageError) as e:
        raise HTTPException(status_code=500, detail=str(e))
    except Exception as e:
        raise HTTPException(status_code=500, detail=f"Unexpected error: {str(e)}")
