"""
Habits Service - Business logic for habit stacks and habits
Handles listing, creating and resetting stacks and adding habits to them
"""
from typing import Optional, Dict, Any, List
import logging

from app.core.exceptions import InvalidHabitDataError, StackNotFoundError
from app.models.habit import Habit, HabitStack
from app.models.proof import VerificationRecord
from . import repository
from .verification import record_from_row, reset_verification

logger = logging.getLogger(__name__)


def _build_stack(stack: Dict[str, Any], habits: List[Dict[str, Any]],
                 verifications: Dict[str, VerificationRecord]) -> HabitStack:
    return HabitStack(
        id=stack["id"],
        name=stack["name"],
        created_at=stack.get("created_at"),
        habits=[
            Habit(
                id=h["id"],
                stack_id=h["stack_id"],
                name=h["name"],
                description=h.get("description"),
                completed=bool(h.get("completed")),
                position=h.get("position") or 0,
                verification=verifications.get(h["id"]) or VerificationRecord(habit_id=h["id"])
            )
            for h in habits
        ]
    )


def _load_verifications(habits: List[Dict[str, Any]]) -> Dict[str, VerificationRecord]:
    rows = repository.get_verifications_for_habits([h["id"] for h in habits])
    return {row["habit_id"]: record_from_row(row) for row in rows}


def get_user_stacks(user_id: str) -> List[HabitStack]:
    """
    Get all of a user's stacks with their habits and verification status

    Stacks come oldest first; habits within a stack by position.

    Raises:
        DatabaseError: If a query fails
    """
    stacks = repository.get_stacks_for_user(user_id)

    result = []
    for stack in stacks:
        habits = repository.get_habits_for_stack(stack["id"])
        result.append(_build_stack(stack, habits, _load_verifications(habits)))

    return result


def get_stack(user_id: str, stack_id: str) -> HabitStack:
    """
    Get one of the user's stacks with its habits

    Raises:
        StackNotFoundError: If the stack does not exist or belongs to someone else
        DatabaseError: If a query fails
    """
    stack = repository.get_stack_for_user(stack_id, user_id)
    if not stack:
        raise StackNotFoundError(f"Habit stack {stack_id} not found")

    habits = repository.get_habits_for_stack(stack_id)
    return _build_stack(stack, habits, _load_verifications(habits))


def create_stack(user_id: str, name: str) -> HabitStack:
    """
    Create an empty habit stack

    Raises:
        InvalidHabitDataError: If the name is blank
        DatabaseError: If insert fails
    """
    name = (name or "").strip()
    if not name:
        raise InvalidHabitDataError("Stack name is required")

    stack = repository.create_stack(user_id, name)
    logger.info(f"[STACKS] Created stack '{name}' for user {user_id}")
    return _build_stack(stack, [], {})


def next_position(habits: List[Dict[str, Any]]) -> int:
    """Position for a new habit: one past the highest, 0 for an empty stack"""
    if not habits:
        return 0
    return max(h.get("position") or 0 for h in habits) + 1


def add_habit(user_id: str, stack_id: str, name: str, description: Optional[str] = None) -> Habit:
    """
    Add a habit to the end of one of the user's stacks

    Args:
        user_id: The owning user ID
        stack_id: Target stack
        name: Habit name
        description: Optional description (blank becomes None)

    Returns:
        The created Habit (unverified)

    Raises:
        InvalidHabitDataError: If the name is blank
        StackNotFoundError: If the stack is not the user's
        DatabaseError: If a query fails
    """
    name = (name or "").strip()
    if not name:
        raise InvalidHabitDataError("Habit name is required")
    description = (description or "").strip() or None

    if not repository.get_stack_for_user(stack_id, user_id):
        raise StackNotFoundError(f"Habit stack {stack_id} not found")

    position = next_position(repository.get_habits_for_stack(stack_id))
    habit = repository.create_habit(stack_id, name, description, position)
    logger.info(f"[STACKS] Added habit '{name}' to stack {stack_id} at position {position}")

    return Habit(
        id=habit["id"],
        stack_id=stack_id,
        name=habit.get("name", name),
        description=habit.get("description"),
        completed=False,
        position=habit.get("position", position),
        verification=VerificationRecord(habit_id=habit["id"])
    )


def reset_stack(user_id: str, stack_id: str) -> HabitStack:
    """
    Start a stack over: every habit back to not completed and unverified

    Raises:
        StackNotFoundError: If the stack is not the user's
        DatabaseError: If a query fails
    """
    stack = get_stack(user_id, stack_id)

    repository.reset_habits_for_stack(stack_id)
    for habit in stack.habits:
        reset_verification(habit.id)

    logger.info(f"[STACKS] Reset stack {stack_id} ({len(stack.habits)} habits)")
    return get_stack(user_id, stack_id)
