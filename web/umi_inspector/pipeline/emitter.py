"""
Emission queue (bounded, threaded handoff).

Purpose
-------
Forward closed records from a producer thread (the aggregation loop) to a
consumer that formats or writes them, so slow output does not have to wait
for the archive to be read and a slow consumer slows the producer down.

Behavior
--------
- `put(record)`  -> enqueue one record, waiting while the queue is full
- `close()`      -> end-of-stream marker; iteration stops after it
- `fail(exc)`    -> the consumer re-raises exc once it reaches it
- `cancel()`     -> advisory stop; a producer blocked in put() gives up

Records are never dropped: a full queue holds the producer back until the
consumer catches up or cancels. Only the producer closes the queue, after
its final flush.
"""

from __future__ import annotations

import logging
import queue
import threading
from typing import Callable, Generic, Iterator, TypeVar

logger = logging.getLogger(__name__)

T = TypeVar("T")

_POLL_SECONDS = 0.1


class EmissionCancelled(Exception):
    """Raised in the producer when the consumer has cancelled the queue."""


class _Closed:
    pass


class _Failed:
    def __init__(self, exc: BaseException) -> None:
        self.exc = exc


_CLOSED = _Closed()


class EmissionQueue(Generic[T]):
    """
    Parameters
    ----------
    capacity : int
        Maximum queued records before put() starts to wait.
    """

    def __init__(self, *, capacity: int = 1024) -> None:
        self._q: "queue.Queue[object]" = queue.Queue(maxsize=int(capacity))
        self._cancelled = threading.Event()

    @property
    def cancelled(self) -> bool:
        return self._cancelled.is_set()

    # --- producer side ---

    def put(self, record: T) -> None:
        """Enqueue one record; raises EmissionCancelled once the consumer has gone."""
        self._put_blocking(record)

    def close(self) -> None:
        self._put_control(_CLOSED)

    def fail(self, exc: BaseException) -> None:
        self._put_control(_Failed(exc))

    # --- consumer side ---

    def cancel(self) -> None:
        self._cancelled.set()

    def __iter__(self) -> Iterator[T]:
        while True:
            item = self._q.get()
            if item is _CLOSED:
                return
            if isinstance(item, _Failed):
                raise item.exc
            yield item  # type: ignore[misc]

    # --- helpers ---

    def _put_blocking(self, item: object) -> None:
        while True:
            if self._cancelled.is_set():
                raise EmissionCancelled("consumer cancelled the emission queue")
            try:
                self._q.put(item, timeout=_POLL_SECONDS)
                return
            except queue.Full:
                continue

    def _put_control(self, item: object) -> None:
        try:
            self._put_blocking(item)
        except EmissionCancelled:
            logger.debug("Emission queue cancelled before end-of-stream marker")


def run_producer(
    produce: Callable[[], Iterator[T]],
    out: EmissionQueue[T],
    *,
    name: str = "umi-producer",
) -> threading.Thread:
    """
    Run `produce()` on a daemon thread, feeding every record into `out`.

    The thread closes `out` when the iterator is exhausted, or forwards the
    error with `out.fail` so the consumer sees it. A daemon thread can be
    abandoned together with its byte source after cancel().
    """

    def runner() -> None:
        try:
            for record in produce():
                out.put(record)
        except EmissionCancelled:
            logger.info("Producer stopped: consumer cancelled")
            return
        except Exception as e:
            logger.error("Producer failed: %s", e)
            out.fail(e)
            return
        out.close()

    t = threading.Thread(target=runner, name=name, daemon=True)
    t.start()
    return t
