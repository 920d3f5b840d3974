from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum


class ProcessState(str, Enum):
    # Values double as the labels printed in the trace.
    READY = "Ready"
    RUNNING = "Running"
    TERMINATED = "Terminated"


@dataclass
class ProcessRecord:
    pid: int
    total_work: int
    state: ProcessState = ProcessState.READY
    # Program counter: work units completed so far.
    pc: int = field(default=0)

    @property
    def remaining(self) -> int:
        return self.total_work - self.pc

    @property
    def is_terminated(self) -> bool:
        return self.state is ProcessState.TERMINATED

    def advance(self, work_units: int) -> int:
        """Add up to work_units of progress, never past total_work. Returns the work done."""
        if work_units < 0:
            raise ValueError(f"work_units must be >= 0 (got {work_units})")
        done = min(work_units, self.remaining)
        self.pc += done
        return done

    def set_state(self, new_state: ProcessState) -> None:
        self.state = new_state
