"""EVM gas optimization tracer package."""

from .tracer import GasOptimizationTracer  # noqa: F401
from .api import (  # noqa: F401
    analyze_event_log,
    render_text,
    trace_events,
)
from .report import Report, build_report  # noqa: F401
