"""
Public handle for submitting deferred callbacks.
"""

import math
import time
from datetime import timedelta
from typing import Any, Callable, Optional, Union

from core.config import NEGATIVE_DELAY_POLICIES, settings
from core.logging_config import get_logger

from .errors import (
    InvalidDelayError,
    InvalidDueTimeError,
    InvalidPolicyError,
    SchedulerPoisonedError,
)
from .models import Entry, OnceCallback, SharedState
from .worker import DispatchWorker

logger = get_logger(__name__)

Delay = Union[float, int, timedelta]


class CallbackScheduler:
    """Runs each submitted callback once, at or after its due time, on a single worker thread.

    Constructing a scheduler spawns its dispatch worker. A handle is safe to
    share between threads; ``share()`` returns another handle onto the same
    pending set and worker. There is no shutdown: the worker is a daemon
    thread and lives as long as the process.

    Due times are ``time.monotonic()`` readings, see ``now()``.
    """

    def __init__(
        self,
        *,
        callback_error_policy: Optional[str] = None,
        negative_delay_policy: Optional[str] = None,
        thread_name: Optional[str] = None,
        _shared: Optional[SharedState] = None,
        _worker: Optional[DispatchWorker] = None
    ):
        self.negative_delay_policy = negative_delay_policy or settings.scheduler_negative_delay_policy
        if self.negative_delay_policy not in NEGATIVE_DELAY_POLICIES:
            raise InvalidPolicyError("negative_delay_policy", self.negative_delay_policy, NEGATIVE_DELAY_POLICIES)

        if _shared is not None and _worker is not None:
            self._shared = _shared
            self._worker = _worker
            return

        self._shared = SharedState()
        self._worker = DispatchWorker(
            self._shared,
            callback_error_policy=callback_error_policy or settings.scheduler_callback_error_policy,
            thread_name=thread_name or settings.scheduler_thread_name
        )
        self._worker.start()

    @staticmethod
    def now() -> float:
        """Current reading of the clock due times are measured on."""
        return time.monotonic()

    @property
    def worker(self) -> DispatchWorker:
        return self._worker

    def share(self) -> "CallbackScheduler":
        """Return another handle onto the same pending set and worker."""
        return CallbackScheduler(
            negative_delay_policy=self.negative_delay_policy,
            _shared=self._shared,
            _worker=self._worker
        )

    def schedule_at(self, due_at: float, callback: Callable[[], Any]) -> None:
        """
        Run ``callback`` on the worker thread at or after monotonic time ``due_at``.

        A due time already in the past runs on the worker's next pass, never
        inside this call.

        Raises:
            SchedulerPoisonedError: the worker died and the scheduler is unusable
            InvalidDueTimeError: ``due_at`` is NaN
            TypeError: ``callback`` is not callable
        """
        due_at = float(due_at)
        # NaN compares false against everything and would corrupt the heap order
        if math.isnan(due_at):
            raise InvalidDueTimeError(due_at)
        entry = Entry(due_at=due_at, callback=OnceCallback(callback))

        with self._shared.condition:
            if self._shared.poisoned:
                raise SchedulerPoisonedError(
                    self._worker.thread_name, self._shared.poison_cause
                ) from self._shared.poison_cause
            self._shared.pending.push(entry)
            pending = len(self._shared.pending)
            # Wake the worker on every submission, even if this entry is not the new head
            self._shared.condition.notify_all()

        logger.debug(
            f"Scheduled {entry.callback.name} in {due_at - time.monotonic():.3f}s ({pending} pending)"
        )

    def schedule_after(self, delay: Delay, callback: Callable[[], Any]) -> None:
        """
        Run ``callback`` on the worker thread once ``delay`` has elapsed.

        Args:
            delay: Seconds, or a ``timedelta``
            callback: Zero-argument callable, run at most once

        Raises:
            InvalidDelayError: ``delay`` is negative and the reject policy is active
        """
        now = time.monotonic()
        seconds = delay.total_seconds() if isinstance(delay, timedelta) else float(delay)

        if seconds < 0:
            if self.negative_delay_policy == "reject":
                raise InvalidDelayError(seconds)
            logger.debug(f"Clamping negative delay {seconds}s to 0")
            seconds = 0.0

        self.schedule_at(now + seconds, callback)

    def pending(self) -> int:
        """Number of callbacks not yet taken by the worker."""
        with self._shared.lock:
            return len(self._shared.pending)

    def __len__(self) -> int:
        return self.pending()

    def __repr__(self):
        return (
            f"CallbackScheduler(worker={self._worker.thread_name!r}, "
            f"state={self._worker.state}, pending={self.pending()})"
        )
