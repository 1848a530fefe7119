"""
Profiles module - User profiles
"""
from . import repository
from . import service

from .service import get_profile, create_profile, update_profile

__all__ = [
    'repository',
    'service',
    'get_profile',
    'create_profile',
    'update_profile'
]
