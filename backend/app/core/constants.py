"""
Application constants - point values, streak milestones and fixed messages
"""

# Points
HABIT_COMPLETION_POINTS = 5
STACK_COMPLETION_POINTS = 10

# Streak milestone -> bonus points (awarded only on an exact match)
STREAK_BONUS_POINTS = {
    3: 5,
    7: 15,
    14: 30,
    30: 50,
}

# Auth
MIN_PASSWORD_LENGTH = 6
OAUTH_PROVIDER_GOOGLE = "google"

# Verification
VERIFICATION_FAILED_EXPLANATION = "Verification failed due to technical error"
DEFAULT_IMAGE_MIME_TYPE = "image/jpeg"

# Leaderboard fallbacks for users without a profile
UNKNOWN_USERNAME = "Unknown User"
UNKNOWN_NAME = "Unknown"
