from __future__ import annotations

import re
from dataclasses import asdict
from pathlib import Path
from typing import Any, TextIO

from pcb_scheduler.events import Event
from pcb_scheduler.models import ProcessRecord

_INT_TOKEN = re.compile(r"[+-]?\d+")

# Values must fit a 32-bit signed int, the range the process table was defined for.
INT_MIN = -(2 ** 31)
INT_MAX = 2 ** 31 - 1


class InputFormatError(ValueError):
    """Raised when a process list fails validation."""


class MalformedCountError(InputFormatError):
    def __init__(self, token: str | None):
        self.token = token
        super().__init__("Invalid input for number of processes")


class InvalidCountError(InputFormatError):
    def __init__(self, count: int):
        self.count = count
        super().__init__("Invalid number of processes")


class MalformedEntryError(InputFormatError):
    def __init__(self, index: int):
        self.index = index
        super().__init__("Invalid input format for process data")


class InvalidWorkError(InputFormatError):
    def __init__(self, pid: int, work: int):
        self.pid = pid
        self.work = work
        super().__init__(f"Invalid work units for PID {pid}")


class DuplicatePidError(InputFormatError):
    def __init__(self, pid: int):
        self.pid = pid
        super().__init__(f"Duplicate PID {pid} detected")


def _parse_int(token: str | None) -> int | None:
    if token is None or not _INT_TOKEN.fullmatch(token):
        return None
    value = int(token)
    if value < INT_MIN or value > INT_MAX:
        return None
    return value


def parse_process_list(text: str) -> list[ProcessRecord]:
    """Parse and validate a whitespace-delimited process list.

    Format:

      N
      pid_1 work_1
      ...
      pid_N work_N

    Line breaks are not significant; any whitespace separates tokens.
    Tokens after the N-th pair are ignored.

    Validation is fail-fast in input order: the first bad token raises and
    nothing is returned, so no partial simulation can start.
    """
    tokens = text.split()
    it = iter(tokens)

    count_token = next(it, None)
    count = _parse_int(count_token)
    if count is None:
        raise MalformedCountError(count_token)
    if count <= 0:
        raise InvalidCountError(count)

    records: list[ProcessRecord] = []
    seen: set[int] = set()
    for i in range(count):
        pid = _parse_int(next(it, None))
        work = _parse_int(next(it, None))
        if pid is None or work is None:
            raise MalformedEntryError(i)
        if work <= 0:
            raise InvalidWorkError(pid, work)
        if pid in seen:
            raise DuplicatePidError(pid)
        seen.add(pid)
        records.append(ProcessRecord(pid=pid, total_work=work))

    return records


def _decode(data: bytes) -> str:
    try:
        return data.decode("utf-8")
    except UnicodeDecodeError as e:
        raise InputFormatError(f"input is not valid UTF-8 text (byte offset {e.start})") from e


def load_process_list(source: Path | TextIO) -> list[ProcessRecord]:
    """Load a process list from a file path or an already-open text stream.

    Text streams backed by a binary buffer (sys.stdin) are decoded here as
    UTF-8 so bad bytes fail the same way for both sources.
    """
    if isinstance(source, Path):
        if not source.exists():
            raise InputFormatError(f"file not found: {source}")
        if not source.is_file():
            raise InputFormatError(f"not a file: {source}")
        text = _decode(source.read_bytes())
    else:
        buffer = getattr(source, "buffer", None)
        if buffer is not None:
            text = _decode(buffer.read())
        else:
            try:
                text = source.read()
            except UnicodeDecodeError as e:
                raise InputFormatError(f"input is not valid UTF-8 text (byte offset {e.start})") from e
    return parse_process_list(text)


def dump_event_stream(events: list[Event]) -> list[dict[str, Any]]:
    """Return a JSON-serializable event stream (the --events-out payload)."""
    out: list[dict[str, Any]] = []
    for e in events:
        d = asdict(e)
        d["type"] = str(e.type.value)
        out.append(d)
    return out
