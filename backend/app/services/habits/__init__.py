"""
Habits module - Habit stacks, verification status and the completion flow
"""
from . import repository
from . import service
from . import verification
from . import completion

# Export commonly used functions for convenience
from .service import (
    get_user_stacks,
    get_stack,
    create_stack,
    add_habit,
    reset_stack
)

from .verification import (
    get_verification_status,
    update_verification_status,
    mark_pending,
    mark_resolved,
    reset_verification,
    can_transition
)

from .completion import verify_habit_completion

__all__ = [
    # Modules
    'repository',
    'service',
    'verification',
    'completion',

    # Stack functions
    'get_user_stacks',
    'get_stack',
    'create_stack',
    'add_habit',
    'reset_stack',

    # Verification status functions
    'get_verification_status',
    'update_verification_status',
    'mark_pending',
    'mark_resolved',
    'reset_verification',
    'can_transition',

    # Completion flow
    'verify_habit_completion'
]
