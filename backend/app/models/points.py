"""
Pydantic models for points and streaks
"""
from datetime import date
from typing import Optional
from pydantic import BaseModel


class PointsData(BaseModel):
    """Points and streak record of one user"""
    user_id: str
    total_points: int = 0
    current_streak: int = 0
    last_activity_date: Optional[date] = None
