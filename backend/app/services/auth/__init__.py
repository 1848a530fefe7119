"""
Auth module - Session accessor
"""
from . import service

from .service import (
    validate_sign_up,
    sign_up,
    sign_in,
    get_google_sign_in_url,
    get_user_from_token,
    sign_out
)

__all__ = [
    'service',
    'validate_sign_up',
    'sign_up',
    'sign_in',
    'get_google_sign_in_url',
    'get_user_from_token',
    'sign_out'
]
