"""
External integrations module
Handles connections to external services (Vision model, Object storage)
"""
from . import vision
from . import storage

__all__ = ['vision', 'storage']
