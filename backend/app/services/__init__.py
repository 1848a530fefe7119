"""
Business logic services
"""
from . import auth
from . import profiles
from . import points
from . import habits
from . import stats
from . import external
from . import scheduler

__all__ = [
    'auth',
    'profiles',
    'points',
    'habits',
    'stats',
    'external',
    'scheduler'
]
