"""
Pydantic models for proof verification
"""
from enum import Enum
from typing import Optional
from pydantic import BaseModel, ConfigDict, Field


class VerificationStatus(str, Enum):
    """Verification state of a habit"""
    UNVERIFIED = "unverified"
    PENDING = "pending"
    VERIFIED = "verified"


class VerificationResult(BaseModel):
    """Verdict parsed from the vision model reply"""
    model_config = ConfigDict(populate_by_name=True)

    is_verified: bool = Field(..., alias="isVerified", description="Whether the image shows the habit done")
    confidence: float = Field(..., ge=0, le=1, description="Model confidence between 0 and 1")
    explanation: str = Field(..., description="Short explanation of the decision")


class VerificationRecord(BaseModel):
    """Stored verification state for one habit"""
    habit_id: str
    is_verified: bool = False
    pending_verification: bool = False
    image_url: Optional[str] = None
    verified_at: Optional[str] = None

    @property
    def status(self) -> VerificationStatus:
        if self.is_verified:
            return VerificationStatus.VERIFIED
        if self.pending_verification:
            return VerificationStatus.PENDING
        return VerificationStatus.UNVERIFIED

    @classmethod
    def from_status(cls, habit_id: str, status: VerificationStatus,
                    image_url: Optional[str] = None,
                    verified_at: Optional[str] = None) -> "VerificationRecord":
        return cls(
            habit_id=habit_id,
            is_verified=status == VerificationStatus.VERIFIED,
            pending_verification=status == VerificationStatus.PENDING,
            image_url=image_url,
            verified_at=verified_at if status == VerificationStatus.VERIFIED else None
        )
