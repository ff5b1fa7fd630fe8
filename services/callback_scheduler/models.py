"""
Data models for the deferred callback scheduler.
"""

import threading
from dataclasses import dataclass, field
from typing import Any, Callable, Optional

from .pending import PendingSet


class OnceCallback:
    """Take-once guard around a zero-argument callable.

    The first call runs the wrapped callable; every later call does nothing.
    The reference to the callable is dropped as soon as it has been taken, so
    whatever state it closed over is released right after it runs.
    """

    __slots__ = ("_fn", "_lock", "name")

    def __init__(self, fn: Callable[[], Any]):
        if not callable(fn):
            raise TypeError(f"callback must be callable, got {type(fn).__name__}")
        self._fn: Optional[Callable[[], Any]] = fn
        self._lock = threading.Lock()
        self.name = getattr(fn, "__qualname__", None) or repr(fn)

    @property
    def invoked(self) -> bool:
        return self._fn is None

    def __call__(self) -> None:
        with self._lock:
            fn, self._fn = self._fn, None
        if fn is not None:
            fn()

    def __repr__(self):
        return f"OnceCallback({self.name}, invoked={self.invoked})"


@dataclass(order=True)
class Entry:
    """A callback waiting in the pending set.

    Entries order by ``due_at`` alone; two entries with the same due time
    compare equal and may run in either order.
    """

    due_at: float
    callback: OnceCallback = field(compare=False)


class SharedState:
    """State shared by every scheduler handle and the dispatch worker.

    ``lock`` guards ``pending`` and ``poison_cause``; ``condition`` is built on
    the same lock and is the worker's wake-up signal.
    """

    def __init__(self):
        self.pending = PendingSet()
        self.lock = threading.Lock()
        self.condition = threading.Condition(self.lock)
        self.poisoned = False
        self.poison_cause: Optional[BaseException] = None

    def poison(self, cause: Optional[BaseException]) -> int:
        """Refuse all further submissions. Returns the number of entries stranded."""
        with self.lock:
            self.poisoned = True
            self.poison_cause = cause
            return len(self.pending)
