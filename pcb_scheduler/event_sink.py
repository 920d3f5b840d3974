from __future__ import annotations

from abc import ABC, abstractmethod
from dataclasses import dataclass, field
from typing import Any

from pcb_scheduler.events import Event, EventType


class EventSink(ABC):
    """
    Consumer of structured scheduling events.

    Simulation.step() reports each decision of a tick here (dispatch, work
    applied, termination, trace, requeue), giving a machine-readable record
    alongside the text trace. The simulation must run identically with
    event_sink=None.
    """

    @abstractmethod
    def start_tick(self) -> int: ...

    @abstractmethod
    def emit(self, event_type: EventType, pid: int | None = None, **data: Any) -> None: ...


@dataclass
class InMemoryEventSink(EventSink):
    """
    Simple sink for tests and --events-out.
    Owns tick/seq numbering; it is expected to track Simulation.tick one-for-one.
    """

    events: list[Event] = field(default_factory=list)
    _tick: int = field(default=0, init=False)
    _seq: int = field(default=0, init=False)

    @property
    def current_tick(self) -> int:
        return self._tick

    def start_tick(self) -> int:
        self._tick += 1
        self._seq = 0
        return self._tick

    def emit(self, event_type: EventType, pid: int | None = None, **data: object) -> None:
        if self._tick <= 0:
            raise RuntimeError("EventSink.start_tick() must be called before emitting events.")
        self._seq += 1
        self.events.append(
            Event(
                tick=self._tick,
                seq=self._seq,
                type=event_type,
                pid=pid,
                data=dict(data),
            )
        )

    def of_type(self, event_type: EventType) -> list[Event]:
        return [e for e in self.events if e.type == event_type]
