"""Tracer data types (pure data, no business logic)."""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum

from . import constants
from .findings import Finding


class TracerPhase(Enum):
    """Lifecycle of one traced execution."""

    IDLE = "idle"
    STARTED = "started"
    RUNNING = "running"
    ENDED = "ended"


@dataclass(frozen=True)
class TracerConfig:
    """Groups the heuristic thresholds and gas constants."""

    warm_read_cost: int = constants.WARM_SLOAD_COST
    base_call_cost: int = constants.BASE_CALL_COST
    redundant_read_threshold: int = constants.REDUNDANT_READ_THRESHOLD
    memory_expansion_threshold: int = constants.MEMORY_EXPANSION_THRESHOLD
    large_log_cost: int = constants.LARGE_LOG_COST
    expensive_hash_cost: int = constants.EXPENSIVE_HASH_COST
    hot_opcode_percent: int = constants.HOT_OPCODE_PERCENT
    batch_call_threshold: int = constants.BATCH_CALL_THRESHOLD


@dataclass(frozen=True)
class MemoryOperation:
    pc: int
    op: str
    size: int
    gas: int
    depth: int


@dataclass(frozen=True)
class CallOperation:
    pc: int
    op: str
    gas: int
    gas_used: int
    depth: int
    to: str | None = None  # None when the address operand was missing


@dataclass(frozen=True)
class ExpensiveOperation:
    pc: int
    op: str
    gas: int
    description: str
    depth: int


@dataclass(frozen=True)
class FaultRecord:
    pc: int
    op: str
    gas: int
    cost: int
    depth: int
    error: str | None = None


@dataclass
class RunningState:
    """Mutable aggregates for a single trace.

    ``total_gas_used`` is a provisional live counter while the trace runs:
    Step costs and Exit gas both accrue into it, and TxEnd replaces it with
    the interpreter's authoritative figure.
    """

    storage_reads: dict[str, int] = field(default_factory=dict)
    storage_writes: dict[str, int] = field(default_factory=dict)
    gas_by_opcode: dict[str, int] = field(default_factory=dict)
    memory_ops: list[MemoryOperation] = field(default_factory=list)
    call_ops: list[CallOperation] = field(default_factory=list)
    expensive_ops: list[ExpensiveOperation] = field(default_factory=list)
    faults: list[FaultRecord] = field(default_factory=list)
    optimizations: list[Finding] = field(default_factory=list)

    phase: TracerPhase = TracerPhase.IDLE
    pc: int = 0
    gas: int = 0
    depth: int = 0
    total_gas_used: int = 0
