"""
Deferred Callback Scheduler

Runs callbacks on a single background thread at or after their due time,
soonest first, exactly once.
"""

from .errors import (
    InvalidDelayError,
    InvalidDueTimeError,
    InvalidPolicyError,
    SchedulerError,
    SchedulerPoisonedError,
)
from .models import Entry, OnceCallback, SharedState
from .pending import PendingSet
from .scheduler import CallbackScheduler
from .worker import DispatchWorker, WorkerState

__all__ = [
    "CallbackScheduler",
    "DispatchWorker",
    "WorkerState",
    "Entry",
    "OnceCallback",
    "SharedState",
    "PendingSet",
    "SchedulerError",
    "SchedulerPoisonedError",
    "InvalidDelayError",
    "InvalidDueTimeError",
    "InvalidPolicyError",
]
