from __future__ import annotations

from pcb_scheduler.engine import QUANTUM
from pcb_scheduler.models import ProcessRecord
from pcb_scheduler.trace import run_with_trace


def main() -> None:
    processes = [
        ProcessRecord(pid=3, total_work=5),
        ProcessRecord(pid=1, total_work=3),
        ProcessRecord(pid=2, total_work=2),
        ProcessRecord(pid=7, total_work=6),
    ]

    log = run_with_trace(processes)

    print(f"quantum={QUANTUM}, ticks={len(log)}")
    for entry in log:
        print(f"\nInterrupt {entry.tick:2d}")
        for p in entry.processes:
            bar = "#" * p.pc + "." * (p.total_work - p.pc)
            print(f"  PID {p.pid:<3d} {p.state.value:<10s} [{bar}] {p.pc}/{p.total_work}")


if __name__ == "__main__":
    main()
