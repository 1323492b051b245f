"""Command line entry point: ``evm-tracer trace EVENTS``."""

from __future__ import annotations

import argparse
import logging
import sys

from .api import render_text, trace_events
from .replay import EventLogError, iter_events, load_event_log
from .report import ReportSerializationError

logger = logging.getLogger(__name__)


def _build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="evm-tracer",
        description="Analyze a recorded EVM execution trace for gas optimizations",
    )
    sub = parser.add_subparsers(dest="command", required=True)

    trace = sub.add_parser(
        "trace",
        help="Replay an event log and report optimization opportunities",
    )
    trace.add_argument("events", help="JSON-lines event log ('-' for stdin)")
    trace.add_argument("--json", action="store_true",
                       help="Print the machine-readable JSON report")
    trace.add_argument("--verbose", "-v", action="store_true",
                       help="Show the gas breakdown and progress logging")
    return parser


def main(argv: list[str] | None = None) -> int:
    args = _build_parser().parse_args(argv)

    logging.basicConfig(
        level=logging.INFO if args.verbose else logging.WARNING,
        format="%(name)s: %(message)s",
    )

    try:
        if args.events == "-":
            events = list(iter_events(sys.stdin.buffer))
        else:
            events = load_event_log(args.events)
        tracer = trace_events(events)
        if args.json:
            print(tracer.report_json())
        else:
            print(render_text(tracer, verbose=args.verbose), end="")
    except (EventLogError, OSError) as exc:
        print(f"error: cannot read event log: {exc}", file=sys.stderr)
        return 1
    except ReportSerializationError as exc:
        print(f"error: failed to generate report: {exc}", file=sys.stderr)
        return 1
    return 0


if __name__ == "__main__":
    sys.exit(main())
