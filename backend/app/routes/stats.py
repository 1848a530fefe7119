"""
Stats Routes - Dashboard, points, leaderboard and reports
"""
from fastapi import APIRouter, Depends, HTTPException

from app.core.dependencies import get_current_user
from app.core.exceptions import ProfileNotFoundError, DatabaseError
from app.models.auth import AuthenticatedUser
from app.models.points import PointsData
from app.services import points as points_service
from app.services import stats as stats_service

router = APIRouter(tags=["stats"])


@router.get("/dashboard")
def get_dashboard(user: AuthenticatedUser = Depends(get_current_user)):
    """Profile plus habit count, streak, completion rate and goals achieved"""
    try:
        return stats_service.get_dashboard(user.id)
    except ProfileNotFoundError as e:
        raise HTTPException(status_code=404, detail=str(e))
    except DatabaseError as e:
        raise HTTPException(status_code=500, detail=str(e))
    except Exception as e:
        raise HTTPException(status_code=500, detail=f"Unexpected error: {str(e)}")


@router.get("/points/me")
def get_my_points(user: AuthenticatedUser = Depends(get_current_user)):
    """Get total points and streak (zeros before the first completion)"""
    try:
        return points_service.get_user_points(user.id) or PointsData(user_id=user.id)
    except Exception as e:
        raise HTTPException(status_code=500, detail=f"Unexpected error: {str(e)}")


@router.get("/leaderboard")
def get_leaderboard(user: AuthenticatedUser = Depends(get_current_user)):
    """All users ranked by total points"""
    try:
        return stats_service.get_leaderboard(user.id)
    except DatabaseError as e:
        raise HTTPException(status_code=500, detail=str(e))
    except Exception as e:
        raise HTTPException(status_code=500, detail=f"Unexpected error: {str(e)}")


@router.get("/reports")
def get_report(user: AuthenticatedUser = Depends(get_current_user)):
    """Day/week/month breakdown and achievements"""
    try:
        return stats_service.get_report(user.id)
    except Exception as e:
        raise HTTPException(status_code=500, detail=f"Unexpected error: {str(e)}")
