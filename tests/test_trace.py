import io

from pcb_scheduler.engine import run_simulation
from pcb_scheduler.models import ProcessRecord, ProcessState
from pcb_scheduler.trace import (
    COMPLETION_LINE,
    StreamTraceEmitter,
    render_tick,
    run_with_trace,
    snapshot_tick,
)


class _CountingStream(io.StringIO):
    def __init__(self):
        super().__init__()
        self.flushes = 0

    def flush(self):
        self.flushes += 1
        super().flush()


def test_render_tick_sorts_by_pid_without_reordering_input():
    processes = [
        ProcessRecord(pid=9, total_work=4),
        ProcessRecord(pid=2, total_work=1, state=ProcessState.TERMINATED, pc=1),
        ProcessRecord(pid=5, total_work=3, state=ProcessState.RUNNING, pc=2),
    ]

    text = render_tick(processes, 4)

    assert text == (
        "Interrupt 4:\n"
        "PID 2: Terminated, at pc 1\n"
        "PID 5: Running, at pc 2\n"
        "PID 9: Ready, at pc 0\n"
    )
    assert [p.pid for p in processes] == [9, 2, 5]


def test_scenario_a_full_text_trace():
    out = _CountingStream()
    processes = [ProcessRecord(pid=1, total_work=3), ProcessRecord(pid=2, total_work=2)]

    run_simulation(processes, emitter=StreamTraceEmitter(out))

    assert out.getvalue() == (
        "Interrupt 1:\n"
        "PID 1: Running, at pc 2\n"
        "PID 2: Ready, at pc 0\n"
        "Interrupt 2:\n"
        "PID 1: Ready, at pc 2\n"
        "PID 2: Terminated, at pc 2\n"
        "Interrupt 3:\n"
        "PID 1: Terminated, at pc 3\n"
        "PID 2: Terminated, at pc 2\n"
        "All processes completed.\n"
    )
    # One flush per tick block plus one for the closing line.
    assert out.flushes == 4


def test_trace_lines_ascend_by_pid_on_every_tick():
    processes = [
        ProcessRecord(pid=40, total_work=3),
        ProcessRecord(pid=-3, total_work=5),
        ProcessRecord(pid=12, total_work=2),
    ]

    log = run_with_trace(processes)

    assert len(log) == 2 + 3 + 1
    for entry in log:
        pids = [p.pid for p in entry.processes]
        assert pids == [-3, 12, 40]


def test_snapshot_is_detached_from_live_records():
    p = ProcessRecord(pid=1, total_work=4)
    snap = snapshot_tick([p], 1)

    p.advance(2)
    p.set_state(ProcessState.RUNNING)

    assert snap.processes[0].pc == 0
    assert snap.processes[0].state is ProcessState.READY


def test_byte_for_byte_reproducible():
    def run_once() -> str:
        out = io.StringIO()
        processes = [
            ProcessRecord(pid=3, total_work=5),
            ProcessRecord(pid=1, total_work=3),
            ProcessRecord(pid=7, total_work=6),
        ]
        run_simulation(processes, emitter=StreamTraceEmitter(out))
        return out.getvalue()

    first = run_once()
    assert first == run_once()
    assert first.endswith(COMPLETION_LINE + "\n")
