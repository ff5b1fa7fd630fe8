"""
Error types for the deferred callback scheduler.

The public API has no error return values: a submission either succeeds or
raises one of these.
"""

from typing import Optional


class SchedulerError(Exception):
    """Base class for scheduler errors."""


class SchedulerPoisonedError(SchedulerError):
    """The dispatch worker died abnormally and the pending queue can no longer be trusted."""

    def __init__(self, thread_name: str, cause: Optional[BaseException] = None):
        self.thread_name = thread_name
        self.cause = cause
        detail = f": {cause!r}" if cause is not None else ""
        super().__init__(f"Scheduler worker {thread_name!r} terminated abnormally{detail}")


class InvalidDelayError(SchedulerError, ValueError):
    """A negative delay was passed while the reject policy is active."""

    def __init__(self, delay: float):
        self.delay = delay
        super().__init__(f"Delay must be non-negative, got {delay}s")


class InvalidDueTimeError(SchedulerError, ValueError):
    """A due time that cannot be ordered against other entries (NaN)."""

    def __init__(self, due_at: float):
        self.due_at = due_at
        super().__init__(f"Due time must be a number, got {due_at}")


class InvalidPolicyError(SchedulerError, ValueError):
    """An unknown callback error or negative delay policy."""

    def __init__(self, name: str, value: str, allowed):
        self.name = name
        self.value = value
        self.allowed = tuple(allowed)
        super().__init__(f"{name} must be one of: {', '.join(self.allowed)}; got {value!r}")
