from __future__ import annotations

from collections import deque
from typing import Iterable, Iterator


class QueueEmpty(LookupError):
    """Raised when dequeue_next() is called on an empty ReadyQueue."""


class ReadyQueue:
    """
    FIFO of pids awaiting dispatch.

    Order is arrival order at start, then requeue order. It is never sorted:
    dispatch order must not depend on pid value or remaining work.
    """

    def __init__(self, pids: Iterable[int] = ()) -> None:
        self._items: deque[int] = deque()
        # Mirrors _items for O(1) membership checks.
        self._queued: set[int] = set()
        for pid in pids:
            self.enqueue(pid)

    def enqueue(self, pid: int) -> None:
        # A pid may come back later, but never sits in the queue twice.
        if pid in self._queued:
            raise ValueError(f"pid {pid} is already queued")
        self._items.append(pid)
        self._queued.add(pid)

    def dequeue_next(self) -> int:
        if not self._items:
            raise QueueEmpty("ready queue is empty")
        pid = self._items.popleft()
        self._queued.discard(pid)
        return pid

    def __len__(self) -> int:
        return len(self._items)

    def __bool__(self) -> bool:
        return bool(self._items)

    def __iter__(self) -> Iterator[int]:
        return iter(tuple(self._items))

    def __contains__(self, pid: object) -> bool:
        return pid in self._queued

    def __repr__(self) -> str:
        return f"ReadyQueue({list(self._items)!r})"
