"""
Custom Exceptions - Application-specific error types
"""


class HabitOverflowException(Exception):
    """Base exception for all HabitOverflow errors"""
    pass


class AuthenticationError(HabitOverflowException):
    """Raised when sign-in, sign-up or token lookup fails"""
    pass


class ValidationError(HabitOverflowException):
    """Raised when user input fails validation before any network call"""
    pass


class InvalidHabitDataError(ValidationError):
    """Raised when stack or habit data validation fails"""
    pass


class UsernameTakenError(ValidationError):
    """Raised when a profile username is already used by another user"""
    pass


class ProfileNotFoundError(HabitOverflowException):
    """Raised when the signed-in user has not created a profile yet"""
    pass


class StackNotFoundError(HabitOverflowException):
    """Raised when a habit stack cannot be found for the user"""
    pass


class HabitNotFoundError(HabitOverflowException):
    """Raised when a habit cannot be found in its stack"""
    pass


class IllegalVerificationTransitionError(HabitOverflowException):
    """Raised when a verification status change is not an allowed transition"""
    pass


class DatabaseError(HabitOverflowException):
    """Raised when database operations fail"""
    pass


class StorageError(HabitOverflowException):
    """Raised when object storage uploads fail"""
    pass
