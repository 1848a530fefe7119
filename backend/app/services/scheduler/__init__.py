"""
Scheduler module
Background job scheduling for verification maintenance
"""
from .service import start_scheduler, stop_scheduler, is_running
from . import jobs

__all__ = ['start_scheduler', 'stop_scheduler', 'is_running', 'jobs']
