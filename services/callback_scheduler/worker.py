"""
Dispatch worker that sleeps until the soonest pending callback is due and runs it.
"""

import threading
import time
from typing import Optional
import logging

from core.config import CALLBACK_ERROR_POLICIES

from .errors import InvalidPolicyError
from .models import Entry, SharedState

logger = logging.getLogger(__name__)

# Upper bound on a single armed wait, far below threading.TIMEOUT_MAX
MAX_WAIT_SECONDS = 3600.0


class WorkerState:
    """Observable states of the dispatch loop."""
    STARTING = "starting"
    IDLE = "idle"
    ARMED = "armed"
    RUNNING = "running"
    DEAD = "dead"


class DispatchWorker:
    """The single background thread that executes due callbacks."""

    def __init__(
        self,
        shared: SharedState,
        callback_error_policy: str = "isolate",
        thread_name: str = "callback-scheduler"
    ):
        """
        Initialize the dispatch worker.

        Args:
            shared: Pending set, lock and wake-up condition shared with the handles
            callback_error_policy: "isolate" logs callback failures and keeps going,
                "propagate" lets them end the thread and poisons the shared state
            thread_name: Name of the worker thread
        """
        if callback_error_policy not in CALLBACK_ERROR_POLICIES:
            raise InvalidPolicyError("callback_error_policy", callback_error_policy, CALLBACK_ERROR_POLICIES)

        self.shared = shared
        self.callback_error_policy = callback_error_policy
        self.thread_name = thread_name

        self.state = WorkerState.STARTING
        self.deadline: Optional[float] = None
        self.dispatched = 0
        self.failed = 0
        self.worker_thread: Optional[threading.Thread] = None

    def start(self):
        """Start the worker thread. Only the first call has any effect."""
        if self.worker_thread is not None:
            logger.warning("Worker is already running")
            return

        self.worker_thread = threading.Thread(
            target=self._worker_loop,
            name=self.thread_name,
            daemon=True
        )
        self.worker_thread.start()
        logger.info(f"Dispatch worker {self.thread_name!r} started")

    def is_alive(self) -> bool:
        return self.worker_thread is not None and self.worker_thread.is_alive()

    def _worker_loop(self):
        """Main worker loop. Runs for the lifetime of the process."""
        logger.debug("Starting dispatch worker loop")

        try:
            while True:
                entry = self._next_due_entry()
                self._dispatch(entry)
        except BaseException as e:
            self.state = WorkerState.DEAD
            stranded = self.shared.poison(e)
            logger.critical(
                f"Dispatch worker {self.thread_name!r} terminated by {type(e).__name__}; "
                f"{stranded} pending callback(s) will never run"
            )
            raise

    def _next_due_entry(self) -> Entry:
        """
        Block until the soonest entry is due, then remove and return it.

        Every wake-up, whether from a timeout, a submission or a spurious
        wake, re-derives the wait from the current head of the pending set.
        """
        condition = self.shared.condition
        pending = self.shared.pending

        with condition:
            while True:
                entry = pending.pop()

                if entry is None:
                    self.state = WorkerState.IDLE
                    self.deadline = None
                    condition.wait()
                    continue

                remaining = entry.due_at - time.monotonic()
                if remaining > 0:
                    pending.push(entry)
                    self.state = WorkerState.ARMED
                    self.deadline = entry.due_at
                    # Longer waits overflow the platform timeout; the loop re-arms on wake
                    condition.wait(min(remaining, MAX_WAIT_SECONDS))
                    continue

                self.state = WorkerState.RUNNING
                self.deadline = None
                return entry

    def _dispatch(self, entry: Entry):
        """Run one callback on this thread. The shared lock is not held here."""
        try:
            entry.callback()
        except Exception:
            self.failed += 1
            if self.callback_error_policy == "propagate":
                raise
            logger.exception(f"Callback {entry.callback.name} raised; continuing dispatch")
        else:
            self.dispatched += 1
