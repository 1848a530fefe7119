"""
Pydantic models for habit stacks and habits
"""
from pydantic import BaseModel, Field
from typing import List, Optional

from app.models.proof import VerificationRecord, VerificationResult


class CreateStackRequest(BaseModel):
    """Request model for creating a habit stack"""
    name: str = Field(..., max_length=200, description="Stack name")


class AddHabitRequest(BaseModel):
    """Request model for adding a habit to a stack"""
    name: str = Field(..., max_length=200, description="Habit name")
    description: Optional[str] = Field(None, description="Optional description used as verification context")


class VerifyHabitRequest(BaseModel):
    """Request model for submitting a verification photo"""
    image: str = Field(..., min_length=1, description="Base64 image, raw or as a data: URL")


class Habit(BaseModel):
    """A habit with its verification state"""
    id: str
    stack_id: str
    name: str
    description: Optional[str] = None
    completed: bool = False
    position: int = 0
    verification: VerificationRecord


class HabitStack(BaseModel):
    """A habit stack with its habits ordered by position"""
    id: str
    name: str
    created_at: Optional[str] = None
    habits: List[Habit] = Field(default_factory=list)

    @property
    def is_complete(self) -> bool:
        return bool(self.habits) and all(
            h.completed and h.verification.is_verified for h in self.habits
        )


class VerificationOutcome(BaseModel):
    """Result of the photo verification flow for one habit"""
    habit_id: str
    verified: bool
    result: VerificationResult
    image_url: str
    points_awarded: int = 0
    total_points: Optional[int] = None
    streak: Optional[int] = None
    stack_completed: bool = False
    message: str
    stacks: List[HabitStack] = Field(default_factory=list)
