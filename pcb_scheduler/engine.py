from __future__ import annotations

from typing import Iterable

from pcb_scheduler.event_sink import EventSink
from pcb_scheduler.events import EventType
from pcb_scheduler.models import ProcessRecord, ProcessState
from pcb_scheduler.ready_queue import ReadyQueue
from pcb_scheduler.trace import TraceEmitter

# Work units granted per dispatch. Fixed; not read from input or flags.
QUANTUM = 2


class SchedulerInvariantError(RuntimeError):
    """Raised when unfinished processes remain but none is queued for dispatch."""


def all_terminated(processes: Iterable[ProcessRecord]) -> bool:
    """True iff every record is Terminated (vacuously true when empty)."""
    return all(p.state is ProcessState.TERMINATED for p in processes)


class Simulation:
    """
    Owns the process collection, the ready queue and the tick counter.

    The emitter and event sink only ever read the records; all mutation
    happens in step().
    """

    def __init__(
            self,
            processes: list[ProcessRecord],
            *,
            emitter: TraceEmitter | None = None,
            event_sink: EventSink | None = None,
    ) -> None:
        self.processes = processes
        self.emitter = emitter
        self.event_sink = event_sink
        self.tick = 0

        self._by_pid: dict[int, ProcessRecord] = {}
        for p in processes:
            if p.pid in self._by_pid:
                raise ValueError(f"duplicate pid {p.pid} in process collection")
            self._by_pid[p.pid] = p

        self.ready_queue = ReadyQueue(p.pid for p in processes if not p.is_terminated)

    def record(self, pid: int) -> ProcessRecord:
        return self._by_pid[pid]

    def _emit_trace(self) -> None:
        if self.emitter is not None:
            self.emitter.emit(self.processes, self.tick)
        if self.event_sink is not None:
            self.event_sink.emit(EventType.TRACE_EMITTED)

    def step(self) -> ProcessRecord | None:
        """
        Advance the simulation by one tick (one dispatch decision).

        Rules:
        - The head of the ready queue runs for min(QUANTUM, remaining) units.
        - A process that reaches total_work is Terminated before the trace.
        - A process with work left is traced as Running, then set back to
          Ready and requeued at the tail.

        Returns the dispatched record, or None when nothing was runnable.
        """
        self.tick += 1
        sink = self.event_sink
        if sink is not None:
            sink.start_tick()
            sink.emit(EventType.TICK_START)

        if not self.ready_queue:
            # Unreachable with a single queue and no blocking; still trace the
            # tick so a broken invariant shows up in the output instead of a stall.
            if sink is not None:
                sink.emit(EventType.IDLE_TICK)
            self._emit_trace()
            return None

        current = self.record(self.ready_queue.dequeue_next())
        current.set_state(ProcessState.RUNNING)
        if sink is not None:
            sink.emit(EventType.DISPATCHED, pid=current.pid)

        work_done = current.advance(min(QUANTUM, current.remaining))
        if sink is not None:
            sink.emit(EventType.WORK_APPLIED, pid=current.pid, work_done=work_done, pc=current.pc)

        if current.pc >= current.total_work:
            current.set_state(ProcessState.TERMINATED)
            if sink is not None:
                sink.emit(EventType.TERMINATED, pid=current.pid, pc=current.pc)

        self._emit_trace()

        if not current.is_terminated:
            current.set_state(ProcessState.READY)
            self.ready_queue.enqueue(current.pid)
            if sink is not None:
                sink.emit(EventType.REQUEUED, pid=current.pid, queue_len=len(self.ready_queue))

        return current

    def run(self) -> int:
        """Step until every process is Terminated. Returns the number of ticks run."""
        while not all_terminated(self.processes):
            if self.step() is None:
                unfinished = sorted(p.pid for p in self.processes if not p.is_terminated)
                raise SchedulerInvariantError(
                    f"tick {self.tick}: ready queue is empty but pids {unfinished} are unfinished"
                )
        if self.emitter is not None:
            self.emitter.finish()
        return self.tick


def run_simulation(
        processes: list[ProcessRecord],
        emitter: TraceEmitter | None = None,
        event_sink: EventSink | None = None,
) -> int:
    return Simulation(processes, emitter=emitter, event_sink=event_sink).run()
