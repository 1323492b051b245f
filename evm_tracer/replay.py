"""Replay a recorded event log through any TraceHooks implementation.

An event log is a JSON-lines file with one event object per line, e.g.::

    {"kind": "tx_start", "gas_limit": 100000}
    {"kind": "step", "pc": 0, "op": "SLOAD", "gas": 99000, "cost": 2100, "stack": ["0x01"]}
    {"kind": "tx_end", "gas_used": 2100}

Blank lines and lines starting with ``#`` are ignored.
"""

from __future__ import annotations

import logging
from pathlib import Path
from typing import Iterable, Iterator, TypeVar

from pydantic import ValidationError

from .events import ExecutionEvent, parse_event_line
from .hooks import TraceHooks, dispatch

logger = logging.getLogger(__name__)

H = TypeVar("H", bound=TraceHooks)


class EventLogError(ValueError):
    """Raised when an event log line cannot be parsed."""

    def __init__(self, line_number: int, message: str):
        super().__init__(f"line {line_number}: {message}")
        self.line_number = line_number


def iter_events(lines: Iterable[str | bytes]) -> Iterator[ExecutionEvent]:
    """Parse events lazily from JSON lines, skipping blanks and comments.

    Lines may be ``str`` or raw ``bytes``; bytes must decode as UTF-8.
    """
    for line_number, raw in enumerate(lines, start=1):
        if isinstance(raw, bytes):
            try:
                raw = raw.decode("utf-8")
            except UnicodeDecodeError as exc:
                raise EventLogError(line_number, f"invalid UTF-8: {exc}") from exc
        line = raw.strip()
        if not line or line.startswith("#"):
            continue
        try:
            yield parse_event_line(line)
        except ValidationError as exc:
            raise EventLogError(line_number, str(exc)) from exc


def load_event_log(path: str | Path) -> list[ExecutionEvent]:
    """Read every event from the JSON-lines file at *path*."""
    path = Path(path)
    with path.open("rb") as f:
        events = list(iter_events(f))
    logger.info("Loaded %d events from %s", len(events), path)
    return events


def replay(events: Iterable[ExecutionEvent], hooks: H) -> H:
    """Deliver *events* to *hooks* in order and return *hooks*."""
    count = 0
    for event in events:
        dispatch(event, hooks)
        count += 1
    logger.debug("Replayed %d events", count)
    return hooks
