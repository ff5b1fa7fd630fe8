"""
Services package for the deferred callback scheduler.
"""

from .callback_scheduler import CallbackScheduler

__all__ = [
    "CallbackScheduler",
]
