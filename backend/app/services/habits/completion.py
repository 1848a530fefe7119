"""
Habit completion flow - photo verification and rewards

Order of operations for one submission:
    upload photo -> mark pending -> ask the vision model -> record verdict
    -> (if verified) complete habit, award points, advance streak,
       pay streak milestone and stack bonuses -> reload stacks
"""
import logging

from app.core.constants import HABIT_COMPLETION_POINTS, STACK_COMPLETION_POINTS, STREAK_BONUS_POINTS
from app.core.exceptions import HabitNotFoundError, IllegalVerificationTransitionError
from app.models.habit import HabitStack, VerificationOutcome
from app.models.proof import VerificationStatus
from app.services import points
from app.services.external import storage, vision
from . import repository
from . import service
from . import verification

logger = logging.getLogger(__name__)


def _other_habits_done(stack: HabitStack, habit_id: str) -> bool:
    """Whether every habit in the stack except `habit_id` is completed and verified"""
    return all(
        h.completed and h.verification.is_verified
        for h in stack.habits
        if h.id != habit_id
    )


def _award_rewards(user_id: str, stack: HabitStack, habit_id: str) -> dict:
    """
    Mark the habit completed and pay out points, streak and bonuses

    Returns:
        Dict with points_awarded, total_points, streak, stack_completed
    """
    repository.update_habit(habit_id, {"completed": True})

    points_awarded = 0
    total_points = points.award_habit_completion_points(user_id)
    if total_points:
        points_awarded += HABIT_COMPLETION_POINTS

    # Same-day completions leave the streak unchanged and must not re-pay a milestone
    streak = points.advance_streak(user_id)
    if streak.changed:
        bonus_total = points.check_and_award_streak_bonus(user_id, streak.current)
        if bonus_total:
            points_awarded += STREAK_BONUS_POINTS[streak.current]
            total_points = bonus_total

    stack_completed = _other_habits_done(stack, habit_id)
    if stack_completed:
        logger.info(f"[VERIFICATION] Stack {stack.id} completed")
        stack_total = points.award_stack_completion_points(user_id)
        if stack_total:
            points_awarded += STACK_COMPLETION_POINTS
            total_points = stack_total

    return {
        "points_awarded": points_awarded,
        "total_points": total_points,
        "streak": streak.current,
        "stack_completed": stack_completed
    }


def verify_habit_completion(user_id: str, stack_id: str, habit_id: str, image_base64: str) -> VerificationOutcome:
    """
    Verify a habit from a photo and apply the rewards if the model accepts it

    Args:
        user_id: The signed-in user
        stack_id: Stack containing the habit
        habit_id: Habit being verified
        image_base64: Raw base64 or a data: URL

    Returns:
        VerificationOutcome including the reloaded stacks

    Raises:
        StackNotFoundError: If the stack is not the user's
        HabitNotFoundError: If the habit is not in the stack
        IllegalVerificationTransitionError: If the habit is already verified
        ValidationError: If the image cannot be decoded
        StorageError, DatabaseError: If an upload or write fails
    """
    stack = service.get_stack(user_id, stack_id)
    habit = next((h for h in stack.habits if h.id == habit_id), None)
    if habit is None:
        raise HabitNotFoundError(f"Habit {habit_id} not found in stack {stack_id}")

    if not verification.can_transition(habit.verification.status, VerificationStatus.PENDING):
        raise IllegalVerificationTransitionError(f"Habit '{habit.name}' is already verified")

    logger.info(f"[VERIFICATION] User {user_id} submitted proof for '{habit.name}'")

    image_url = storage.upload_verification_image(habit_id, image_base64)
    verification.mark_pending(habit_id, image_url)

    try:
        result = vision.verify_habit_with_image(habit.name, habit.description, image_base64)
        verification.mark_resolved(habit_id, result.is_verified, image_url)

        rewards = {}
        if result.is_verified:
            rewards = _award_rewards(user_id, stack, habit_id)
    except Exception:
        logger.error(f"[VERIFICATION] Flow failed after pending write for habit {habit_id}; resetting", exc_info=True)
        try:
            verification.reset_verification(habit_id)
        except Exception as reset_error:
            logger.error(f"[VERIFICATION] Could not reset habit {habit_id}: {reset_error}")
        raise

    if result.is_verified:
        message = f"Verification successful! You earned {rewards['points_awarded']} points."
    else:
        message = f"Verification failed: {result.explanation}"

    return VerificationOutcome(
        habit_id=habit_id,
        verified=result.is_verified,
        result=result,
        image_url=image_url,
        message=message,
        stacks=service.get_user_stacks(user_id),
        **rewards
    )
