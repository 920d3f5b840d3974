from __future__ import annotations

import argparse
import json
import sys
from pathlib import Path

from pcb_scheduler.engine import Simulation
from pcb_scheduler.event_sink import InMemoryEventSink
from pcb_scheduler.stream_io import (
    InputFormatError,
    dump_event_stream,
    load_process_list,
)
from pcb_scheduler.trace import StreamTraceEmitter

EXIT_OK = 0
EXIT_INVALID_INPUT = 1


def _cmd_run(args: argparse.Namespace) -> int:
    # Ingest everything before creating any simulation state.
    try:
        if args.input:
            processes = load_process_list(Path(str(args.input)))
        else:
            processes = load_process_list(sys.stdin)
    except InputFormatError as e:
        print(f"Error: {e}", file=sys.stderr)
        return EXIT_INVALID_INPUT

    sink = InMemoryEventSink() if args.events_out else None
    sim = Simulation(processes, emitter=StreamTraceEmitter(sys.stdout), event_sink=sink)
    sim.run()

    if sink is not None:
        out_path = Path(str(args.events_out))
        out_path.write_text(json.dumps(dump_event_stream(sink.events), indent=2) + "\n", encoding="utf-8")

    return EXIT_OK


def build_parser() -> argparse.ArgumentParser:
    parser: argparse.ArgumentParser = argparse.ArgumentParser(
        prog="pcb_scheduler",
        description=(
            "PCB Round-Robin Scheduler Simulator.\n"
            "\n"
            "Single core, fixed quantum of 2 work units.\n"
            "Prints one 'Interrupt' block per tick, processes sorted by PID."
        ),
        formatter_class=argparse.RawDescriptionHelpFormatter,
    )

    sub = parser.add_subparsers(dest="command", required=True)

    run = sub.add_parser("run", help="Run a simulation and print the per-tick trace.")
    run.add_argument(
        "--input",
        type=str,
        default=None,
        help="Process list file (count, then pid/work pairs). Reads stdin when omitted.",
    )
    run.add_argument(
        "--events-out",
        type=str,
        default=None,
        help="Optional: write the structured scheduling event stream to this JSON file.",
    )
    run.set_defaults(func=_cmd_run)

    return parser


def main(argv: list[str] | None = None) -> int:
    argv = argv if argv is not None else sys.argv[1:]
    parser = build_parser()
    args = parser.parse_args(argv)
    return int(args.func(args))


if __name__ == "__main__":
    raise SystemExit(main())
