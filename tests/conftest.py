"""
Pytest configuration and fixtures for the deferred callback scheduler tests.
"""
import pytest
import sys
import threading
import time
from pathlib import Path

# Add the project root to Python path
project_root = Path(__file__).parent.parent
sys.path.insert(0, str(project_root))

from services.callback_scheduler import CallbackScheduler


class CallRecorder:
    """Thread-safe record of which callbacks ran, when, and on which thread."""

    def __init__(self):
        self._lock = threading.Lock()
        self.calls = []
        self.events = {}

    def callback(self, label):
        event = self.events.setdefault(label, threading.Event())

        def _record():
            with self._lock:
                self.calls.append((label, time.monotonic(), threading.current_thread().name))
            event.set()

        return _record

    def labels(self):
        with self._lock:
            return [label for label, _, _ in self.calls]

    def count(self, label):
        with self._lock:
            return sum(1 for recorded, _, _ in self.calls if recorded == label)

    def ran_at(self, label):
        with self._lock:
            return next(at for recorded, at, _ in self.calls if recorded == label)

    def thread_of(self, label):
        with self._lock:
            return next(name for recorded, _, name in self.calls if recorded == label)

    def wait_for(self, *labels, timeout=2.0):
        deadline = time.monotonic() + timeout
        return all(
            self.events[label].wait(max(0.0, deadline - time.monotonic()))
            for label in labels
        )


def _wait_until(predicate, timeout=2.0, interval=0.005):
    deadline = time.monotonic() + timeout
    while time.monotonic() < deadline:
        if predicate():
            return True
        time.sleep(interval)
    return predicate()


@pytest.fixture
def scheduler():
    """A fresh scheduler with the default policies."""
    return CallbackScheduler(thread_name="test-callback-scheduler")


@pytest.fixture
def recorder():
    """Records callback invocations."""
    return CallRecorder()


@pytest.fixture
def wait_until():
    """Poll a predicate until it holds or the timeout runs out."""
    return _wait_until
