"""Composable API functions for the tracer pipelines.

Each function corresponds to a CLI workflow but is callable
programmatically without argparse.
"""

from __future__ import annotations

import logging
from pathlib import Path
from typing import Iterable

from .events import ExecutionEvent
from .formatter import (
    PresenterConfig,
    format_gas_breakdown,
    format_optimizations,
    format_recommendations,
)
from .replay import load_event_log, replay
from .report import Report
from .tracer import GasOptimizationTracer
from .tracer_types import TracerConfig

logger = logging.getLogger(__name__)


def trace_events(
    events: Iterable[ExecutionEvent],
    config: TracerConfig = TracerConfig(),
) -> GasOptimizationTracer:
    """Feed *events* through a fresh tracer and return it.

    Args:
        events: The ordered event stream of one transaction.
        config: Heuristic thresholds.

    Returns:
        The tracer, ended if the stream contained a tx_end event.
    """
    return replay(events, GasOptimizationTracer(config))


def analyze_event_log(
    path: str | Path,
    config: TracerConfig = TracerConfig(),
) -> Report:
    """Replay the JSON-lines event log at *path* and return its Report."""
    logger.info("Analyzing event log %s", path)
    tracer = trace_events(load_event_log(path), config)
    return tracer.report()


def render_text(
    tracer: GasOptimizationTracer,
    verbose: bool = False,
    presenter: PresenterConfig = PresenterConfig(),
) -> str:
    """Render the human-readable report of a finished tracer.

    Args:
        tracer: A tracer that has consumed its events.
        verbose: Include the per-opcode gas breakdown table.
        presenter: Layout settings.

    Returns:
        The optimization listing, optional breakdown, and recommendations.
    """
    findings = tracer.optimizations
    total = tracer.total_gas_used
    parts = [format_optimizations(findings, total, presenter)]
    if verbose:
        parts.append(format_gas_breakdown(tracer.gas_by_opcode, total, presenter))
    parts.append(format_recommendations(findings))
    return "".join(parts)
