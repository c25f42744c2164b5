"""Event loops that run posted callables for a store.

Every loop offers ``post``, ``run_async``, ``finish``, ``pause`` and ``resume``.
An operation that a loop cannot perform raises :class:`RuntimeError`.
"""

from __future__ import annotations

import threading
from collections.abc import Callable
from typing import Any, Protocol

EventFn = Callable[[], Any]


def _unsupported(loop: object, operation: str) -> RuntimeError:
    return RuntimeError(f"{type(loop).__name__} does not support {operation}()")


def _run_pending(queue: list[EventFn]) -> None:
    """Run every callable in ``queue``, including ones appended while running.

    On an exception, the callables already taken from the queue are dropped
    and the rest stay queued.
    """
    done = 0
    try:
        while done < len(queue):
            event = queue[done]
            done += 1
            event()
    except BaseException:
        del queue[:done]
        raise
    queue.clear()


class ManualEventLoop:
    """Runs posted callables immediately, in order, on the calling thread.

    A callable posted while another one runs is queued and run after it.
    ``finish``, ``pause`` and ``resume`` only record the requested state in
    :attr:`finished` and :attr:`paused`; posting is not affected by them.
    """

    def __init__(self) -> None:
        self._queue: list[EventFn] = []
        self._running = False
        self.finished = False
        self.paused = False

    def post(self, fn: EventFn) -> None:
        """Run ``fn``, or queue it when called from inside a running callable."""
        self._queue.append(fn)
        if self._running:
            return
        self._running = True
        try:
            _run_pending(self._queue)
        finally:
            self._running = False

    def run_async(self, fn: EventFn) -> None:
        """Unsupported: the manual loop has no background execution."""
        raise _unsupported(self, "run_async")

    def finish(self) -> None:
        """Record that the loop was asked to finish."""
        self.finished = True

    def pause(self) -> None:
        """Record that the loop was asked to pause."""
        self.paused = True

    def resume(self) -> None:
        """Record that the loop was asked to resume."""
        self.paused = False


class QueueEventLoop:
    """Queues posted callables until :meth:`step` runs them.

    If a callable raises, :meth:`step` must be called again to run the rest.
    """

    def __init__(self) -> None:
        self._queue: list[EventFn] = []

    def post(self, fn: EventFn) -> None:
        """Queue ``fn`` for the next :meth:`step`."""
        self._queue.append(fn)

    def step(self) -> None:
        """Run everything queued, including what gets queued meanwhile."""
        _run_pending(self._queue)

    def run_async(self, fn: EventFn) -> None:
        """Unsupported."""
        raise _unsupported(self, "run_async")

    def finish(self) -> None:
        """Unsupported."""
        raise _unsupported(self, "finish")

    def pause(self) -> None:
        """Unsupported."""
        raise _unsupported(self, "pause")

    def resume(self) -> None:
        """Unsupported."""
        raise _unsupported(self, "resume")


class SafeQueueEventLoop:
    """A queue loop that accepts posts from any thread.

    Callables are run by :meth:`step` on the owning thread, which is the
    thread that created the loop or that last called :meth:`adopt`.
    """

    def __init__(self) -> None:
        self._owner = threading.get_ident()
        self._lock = threading.Lock()
        self._shared: list[EventFn] = []
        self._local: list[EventFn] = []

    def post(self, fn: EventFn) -> None:
        """Queue ``fn``; safe to call from any thread."""
        if threading.get_ident() == self._owner:
            self._local.append(fn)
        else:
            with self._lock:
                self._shared.append(fn)

    def step(self) -> None:
        """Run the queued callables; must be called on the owning thread."""
        if threading.get_ident() != self._owner:
            raise RuntimeError("step() called from a thread that does not own the loop")
        _run_pending(self._local)
        with self._lock:
            self._local, self._shared = self._shared, self._local
        _run_pending(self._local)

    def adopt(self) -> None:
        """Make the calling thread the owner of the loop."""
        if self._local:
            raise RuntimeError("cannot adopt a loop with pending local events")
        self._owner = threading.get_ident()

    def run_async(self, fn: EventFn) -> None:
        """Unsupported."""
        raise _unsupported(self, "run_async")

    def finish(self) -> None:
        """Unsupported."""
        raise _unsupported(self, "finish")

    def pause(self) -> None:
        """Unsupported."""
        raise _unsupported(self, "pause")

    def resume(self) -> None:
        """Unsupported."""
        raise _unsupported(self, "resume")


class _Submitter(Protocol):
    def submit(self, fn: EventFn, /) -> Any: ...


class ExecutorEventLoop:
    """Posts callables to an executor offering ``submit``.

    The executor should run tasks serially, e.g. a thread pool with a single
    worker, since store updates are not meant to run concurrently.
    ``pause`` and ``resume`` only record the requested state in
    :attr:`paused`; posting is not affected by it.
    """

    def __init__(self, executor: _Submitter, stop: EventFn | None = None) -> None:
        self.executor = executor
        self.stop: EventFn = stop if stop is not None else (lambda: None)
        self.paused = False

    def post(self, fn: EventFn) -> None:
        """Submit ``fn`` to the executor."""
        self.executor.submit(fn)

    def run_async(self, fn: EventFn) -> None:
        """Run ``fn`` on a new background thread."""
        threading.Thread(target=fn, daemon=True).start()

    def finish(self) -> None:
        """Call the ``stop`` callback."""
        self.stop()

    def pause(self) -> None:
        """Record that the loop was asked to pause."""
        self.paused = True

    def resume(self) -> None:
        """Record that the loop was asked to resume."""
        self.paused = False