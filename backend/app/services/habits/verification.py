"""
Habit verification status - explicit unverified/pending/verified state machine

Legal transitions:
    unverified -> pending      (photo submitted)
    pending    -> verified     (model accepted the photo)
    pending    -> unverified   (model rejected it, or the attempt was abandoned)

Staying in the same state is allowed (a re-submitted photo replaces the URL).
reset_verification() returns any state to unverified; it is used when a stack
is reset and when stale pending rows are reconciled.
"""
from typing import Dict, Optional, Set
import logging

from app.core.exceptions import IllegalVerificationTransitionError
from app.models.proof import VerificationRecord, VerificationStatus
from app.utils.timezone import get_utc_now_iso
from . import repository

logger = logging.getLogger(__name__)


LEGAL_TRANSITIONS: Dict[VerificationStatus, Set[VerificationStatus]] = {
    VerificationStatus.UNVERIFIED: {VerificationStatus.PENDING},
    VerificationStatus.PENDING: {VerificationStatus.VERIFIED, VerificationStatus.UNVERIFIED},
    VerificationStatus.VERIFIED: set(),
}


def can_transition(current: VerificationStatus, target: VerificationStatus) -> bool:
    """Whether a habit may move from `current` to `target`"""
    return current == target or target in LEGAL_TRANSITIONS[current]


def record_from_row(row: Dict) -> VerificationRecord:
    """Build a VerificationRecord from a habit_verifications row"""
    return VerificationRecord(
        habit_id=row["habit_id"],
        is_verified=bool(row.get("is_verified")),
        pending_verification=bool(row.get("pending_verification")),
        image_url=row.get("image_url"),
        verified_at=row.get("verified_at")
    )


def get_verification_status(habit_id: str) -> VerificationRecord:
    """
    Get the verification status of a habit

    A habit that was never submitted gets an unverified default; the default
    is not written to the database.

    Args:
        habit_id: The habit ID

    Returns:
        VerificationRecord

    Raises:
        DatabaseError: If query fails
    """
    row = repository.get_verification(habit_id)
    if not row:
        return VerificationRecord(habit_id=habit_id)
    return record_from_row(row)


def _save(habit_id: str, status: VerificationStatus, image_url: Optional[str]) -> VerificationRecord:
    now = get_utc_now_iso()
    record = VerificationRecord.from_status(habit_id, status, image_url=image_url, verified_at=now)

    repository.upsert_verification({
        "habit_id": habit_id,
        "is_verified": record.is_verified,
        "pending_verification": record.pending_verification,
        "image_url": record.image_url,
        "verified_at": record.verified_at,
        "updated_at": now
    })
    return record


def update_verification_status(habit_id: str, status: VerificationStatus,
                               image_url: Optional[str] = None) -> VerificationRecord:
    """
    Move a habit to a new verification status

    verified_at is set to now when the new status is verified and cleared otherwise.

    Args:
        habit_id: The habit ID
        status: Target status
        image_url: Evidence image URL to store with the status

    Returns:
        The stored VerificationRecord

    Raises:
        IllegalVerificationTransitionError: If the transition is not allowed
        DatabaseError: If the read or the upsert fails
    """
    current = get_verification_status(habit_id).status

    if not can_transition(current, status):
        raise IllegalVerificationTransitionError(
            f"Habit {habit_id} cannot go from {current.value} to {status.value}"
        )

    record = _save(habit_id, status, image_url)
    logger.info(f"[VERIFICATION] Habit {habit_id}: {current.value} -> {status.value}")
    return record


def mark_pending(habit_id: str, image_url: str) -> VerificationRecord:
    """Record that a photo was submitted and is awaiting judgement"""
    return update_verification_status(habit_id, VerificationStatus.PENDING, image_url)


def mark_resolved(habit_id: str, verified: bool, image_url: Optional[str] = None) -> VerificationRecord:
    """Record the verdict for a pending habit"""
    status = VerificationStatus.VERIFIED if verified else VerificationStatus.UNVERIFIED
    return update_verification_status(habit_id, status, image_url)


def reset_verification(habit_id: str) -> VerificationRecord:
    """
    Return a habit to unverified from any state, clearing the image

    Raises:
        DatabaseError: If the upsert fails
    """
    record = _save(habit_id, VerificationStatus.UNVERIFIED, None)
    logger.info(f"[VERIFICATION] Habit {habit_id} reset to unverified")
    return record
