"""Report builder — immutable, serializable snapshot of a finished trace."""

from __future__ import annotations

import logging

from pydantic import BaseModel, ConfigDict, NonNegativeInt, ValidationError

from .findings import Finding
from .tracer_types import RunningState, TracerPhase

logger = logging.getLogger(__name__)


class ReportSerializationError(RuntimeError):
    """Raised when a Report cannot be converted to or from JSON."""


class IncompleteTraceError(RuntimeError):
    """Raised when a finished report is requested before the trace ended."""


class Report(BaseModel):
    """Machine-readable trace summary.

    Field order is part of the output format and must not change.
    """

    model_config = ConfigDict(frozen=True)

    total_gas_used: NonNegativeInt
    storage_reads: NonNegativeInt
    storage_writes: NonNegativeInt
    memory_operations: NonNegativeInt
    call_operations: NonNegativeInt
    expensive_ops: NonNegativeInt
    optimizations: list[Finding] = []
    gas_by_opcode: dict[str, NonNegativeInt] = {}

    def to_json(self, indent: int = 2) -> str:
        try:
            return self.model_dump_json(indent=indent)
        except (ValueError, TypeError) as exc:
            raise ReportSerializationError(f"Failed to serialize report: {exc}") from exc

    @classmethod
    def from_json(cls, text: str | bytes) -> Report:
        try:
            return cls.model_validate_json(text)
        except ValidationError as exc:
            raise ReportSerializationError(f"Invalid report document: {exc}") from exc


def build_report(state: RunningState, require_finished: bool = False) -> Report:
    """Snapshot the aggregates of *state* into a Report.

    Args:
        state: The tracer's running state.
        require_finished: Raise instead of returning a partial snapshot when
            the trace has not reached tx_end.

    Returns:
        A Report whose ``gas_by_opcode`` keys are sorted for stable output.
    """
    if state.phase != TracerPhase.ENDED:
        if require_finished:
            raise IncompleteTraceError(
                f"Trace has not ended (phase={state.phase.value})"
            )
        logger.warning("Building partial report (phase=%s)", state.phase.value)
    return Report(
        total_gas_used=state.total_gas_used,
        storage_reads=len(state.storage_reads),
        storage_writes=len(state.storage_writes),
        memory_operations=len(state.memory_ops),
        call_operations=len(state.call_ops),
        expensive_ops=len(state.expensive_ops),
        optimizations=list(state.optimizations),
        gas_by_opcode=dict(sorted(state.gas_by_opcode.items())),
    )
