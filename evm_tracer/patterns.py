"""Pattern detection: pure functions that turn aggregates into Findings.

The streaming checks are called by the tracer while a Step is processed;
``terminal_pass`` runs exactly once when the transaction ends.
"""

from __future__ import annotations

import logging

from . import constants
from .findings import Finding, Severity, format_pc
from .tracer_types import RunningState, TracerConfig

logger = logging.getLogger(__name__)


# ── Streaming checks ─────────────────────────────────────────────


def check_redundant_read(
    pc: int, slot: str, read_count: int, config: TracerConfig
) -> Finding | None:
    """Flag every read of *slot* past the configured threshold.

    Fires again on each further read; earlier reads are never flagged
    retroactively.
    """
    if read_count <= config.redundant_read_threshold:
        return None
    return Finding(
        type=constants.FINDING_REDUNDANT_SLOAD,
        severity=Severity.HIGH,
        description="Multiple SLOAD operations for the same storage slot",
        location=format_pc(pc),
        gas_savings=(read_count - 1) * config.warm_read_cost,
        details={"storage_key": slot, "read_count": read_count},
    )


def check_gas_forwarding(
    pc: int, op: str, available_gas: int, forwarded_gas: int, callee: str
) -> Finding | None:
    """Flag calls that forward everything the 63/64 retention rule allows."""
    retained = available_gas // constants.CALL_GAS_RETENTION_DIVISOR
    if forwarded_gas != available_gas - retained:
        return None
    return Finding(
        type=constants.FINDING_GAS_FORWARDING,
        severity=Severity.LOW,
        description="Forwarding all available gas to external call",
        location=format_pc(pc),
        gas_savings=0,
        details={"call_type": op, "to": callee},
    )


def check_memory_expansion(
    pc: int, memory_size: int, config: TracerConfig
) -> Finding | None:
    if memory_size <= config.memory_expansion_threshold:
        return None
    return Finding(
        type=constants.FINDING_MEMORY_EXPANSION,
        severity=Severity.MEDIUM,
        description="Large memory expansion detected",
        location=format_pc(pc),
        gas_savings=0,
        details={"memory_size": memory_size},
    )


# ── Terminal pass ────────────────────────────────────────────────


def find_hot_opcodes(
    gas_by_opcode: dict[str, int], total_gas: int, config: TracerConfig
) -> list[Finding]:
    """Return one Finding per opcode above the hot threshold, sorted by mnemonic.

    Args:
        gas_by_opcode: Cumulative gas per opcode mnemonic.
        total_gas: The authoritative total gas of the trace.
        config: Thresholds.

    Returns:
        An empty list when *total_gas* is zero, since no share can be computed.
    """
    if total_gas <= 0:
        logger.debug("Total gas is %d; skipping hot opcode analysis", total_gas)
        return []
    return [
        Finding(
            type=constants.FINDING_EXPENSIVE_OPCODE,
            severity=Severity.MEDIUM,
            description="Opcode consumes significant gas",
            location=constants.LOCATION_MULTIPLE,
            gas_savings=0,
            details={
                "opcode": opcode,
                "gas_used": gas,
                "percentage": gas / total_gas * 100,
            },
        )
        for opcode, gas in sorted(gas_by_opcode.items())
        if gas * 100 > total_gas * config.hot_opcode_percent
    ]


def check_call_batching(call_count: int, config: TracerConfig) -> Finding | None:
    if call_count <= config.batch_call_threshold:
        return None
    return Finding(
        type=constants.FINDING_MULTIPLE_CALLS,
        severity=Severity.MEDIUM,
        description="Multiple external calls detected - consider batching",
        location=constants.LOCATION_MULTIPLE,
        gas_savings=call_count * config.base_call_cost,
        details={"call_count": call_count},
    )


def terminal_pass(state: RunningState, config: TracerConfig) -> list[Finding]:
    """Evaluate the end-of-trace heuristics against the final aggregates."""
    findings = find_hot_opcodes(state.gas_by_opcode, state.total_gas_used, config)
    batching = check_call_batching(len(state.call_ops), config)
    if batching is not None:
        findings.append(batching)
    logger.info(
        "Terminal pass produced %d findings (total gas %d)",
        len(findings),
        state.total_gas_used,
    )
    return findings
