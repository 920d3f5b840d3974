from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import Any


class EventType(str, Enum):
    """
    Event vocabulary for the scheduler loop.
    One tick produces a short, fixed-order run of these.
    """

    TICK_START = "TICK_START"
    DISPATCHED = "DISPATCHED"
    WORK_APPLIED = "WORK_APPLIED"
    TERMINATED = "TERMINATED"
    TRACE_EMITTED = "TRACE_EMITTED"
    REQUEUED = "REQUEUED"
    # Guard path: the queue was empty while unfinished processes remained.
    IDLE_TICK = "IDLE_TICK"


@dataclass(frozen=True, slots=True)
class Event:
    """
    A structured, orderable fact emitted by the scheduler (optionally).

    tick and seq are owned by the sink, not by the simulation.
    """

    tick: int
    seq: int
    type: EventType
    pid: int | None = None
    data: dict[str, Any] = field(default_factory=dict)
