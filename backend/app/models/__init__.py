"""
Pydantic models for the application
"""
from app.models.auth import (
    SignUpRequest,
    SignInRequest,
    AuthenticatedUser,
    AuthSession,
    SignUpResponse,
    OAuthUrlResponse
)
from app.models.profile import ProfileRequest, Profile
from app.models.proof import VerificationStatus, VerificationResult, VerificationRecord
from app.models.habit import (
    CreateStackRequest,
    AddHabitRequest,
    VerifyHabitRequest,
    Habit,
    HabitStack,
    VerificationOutcome
)
from app.models.points import PointsData
from app.models.stats import (
    Timeframe,
    UserStats,
    DashboardResponse,
    TimeframeStats,
    Achievement,
    ReportResponse,
    LeaderboardEntry
)

__all__ = [
    "SignUpRequest",
    "SignInRequest",
    "AuthenticatedUser",
    "AuthSession",
    "SignUpResponse",
    "OAuthUrlResponse",
    "ProfileRequest",
    "Profile",
    "VerificationStatus",
    "VerificationResult",
    "VerificationRecord",
    "CreateStackRequest",
    "AddHabitRequest",
    "VerifyHabitRequest",
    "Habit",
    "HabitStack",
    "VerificationOutcome",
    "PointsData",
    "Timeframe",
    "UserStats",
    "DashboardResponse",
    "TimeframeStats",
    "Achievement",
    "ReportResponse",
    "LeaderboardEntry"
]
