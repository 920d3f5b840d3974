from __future__ import annotations

from abc import ABC, abstractmethod
from dataclasses import dataclass, field
from typing import Iterable, TextIO

from pcb_scheduler.models import ProcessRecord, ProcessState

COMPLETION_LINE = "All processes completed."


@dataclass(frozen=True)
class ProcessTrace:
    pid: int
    state: ProcessState
    pc: int
    total_work: int


@dataclass(frozen=True)
class TickTrace:
    tick: int
    # Sorted by ascending pid.
    processes: tuple[ProcessTrace, ...]

    def state_of(self, pid: int) -> ProcessState:
        for p in self.processes:
            if p.pid == pid:
                return p.state
        raise KeyError(pid)


def render_tick(processes: Iterable[ProcessRecord], tick: int) -> str:
    """
    Render one "Interrupt" block for the given tick.

    Lines are ordered by ascending pid. The sort is done on a copy each call,
    so the caller's collection order (and the ready queue) is never touched.
    """
    out = [f"Interrupt {tick}:"]
    for p in sorted(processes, key=lambda r: r.pid):
        out.append(f"PID {p.pid}: {p.state.value}, at pc {p.pc}")
    return "\n".join(out) + "\n"


def snapshot_tick(processes: Iterable[ProcessRecord], tick: int) -> TickTrace:
    """Capture an immutable, pid-sorted view of every record at this tick."""
    return TickTrace(
        tick=tick,
        processes=tuple(
            ProcessTrace(pid=p.pid, state=p.state, pc=p.pc, total_work=p.total_work)
            for p in sorted(processes, key=lambda r: r.pid)
        ),
    )


class TraceEmitter(ABC):
    """
    Receives the full process set once per tick, after the tick's state is final.
    Implementations are read-only with respect to the records.
    """

    @abstractmethod
    def emit(self, processes: list[ProcessRecord], tick: int) -> None: ...

    @abstractmethod
    def finish(self) -> None: ...


class StreamTraceEmitter(TraceEmitter):
    """Writes the text trace to a stream, flushing after every block."""

    def __init__(self, stream: TextIO) -> None:
        self.stream = stream

    def emit(self, processes: list[ProcessRecord], tick: int) -> None:
        self.stream.write(render_tick(processes, tick))
        self.stream.flush()

    def finish(self) -> None:
        self.stream.write(COMPLETION_LINE + "\n")
        self.stream.flush()


@dataclass
class RecordingTraceEmitter(TraceEmitter):
    """Keeps TickTrace snapshots in memory (tests, tooling)."""

    log: list[TickTrace] = field(default_factory=list)
    finished: bool = False

    def emit(self, processes: list[ProcessRecord], tick: int) -> None:
        self.log.append(snapshot_tick(processes, tick))

    def finish(self) -> None:
        self.finished = True


def run_with_trace(processes: list[ProcessRecord]) -> list[TickTrace]:
    """
    Run the simulation to completion, returning the per-tick trace log.

    Adds observability only (same rules as Simulation.run()).
    """
    from pcb_scheduler.engine import run_simulation

    recorder = RecordingTraceEmitter()
    run_simulation(processes, emitter=recorder)
    return recorder.log
