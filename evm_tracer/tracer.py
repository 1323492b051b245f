"""Gas optimization tracer — the streaming event consumer.

Consumes the ordered event stream of one transaction, maintains the running
aggregates in a ``RunningState``, and records Findings as patterns are
detected.  Every handler runs under a single re-entrant lock so a driver
delivering events from overlapping frames cannot interleave mutations.
"""

from __future__ import annotations

import logging
import threading

from . import constants
from .events import Enter, EventKind, Exit, Fault, Step, TxEnd, TxStart
from .findings import Finding, address_hex, slot_key
from .hooks import TraceHooks
from .patterns import (
    check_gas_forwarding,
    check_memory_expansion,
    check_redundant_read,
    terminal_pass,
)
from .report import Report, build_report
from .tracer_types import (
    CallOperation,
    ExpensiveOperation,
    FaultRecord,
    MemoryOperation,
    RunningState,
    TracerConfig,
    TracerPhase,
)

logger = logging.getLogger(__name__)


class GasOptimizationTracer(TraceHooks):
    """Tracks gas optimization opportunities across one traced execution."""

    def __init__(self, config: TracerConfig = TracerConfig()):
        self._config = config
        self._state = RunningState()
        self._lock = threading.RLock()

    # ── Read accessors ───────────────────────────────────────────

    @property
    def config(self) -> TracerConfig:
        return self._config

    @property
    def state(self) -> RunningState:
        """The live aggregates. Read only after event delivery has finished."""
        return self._state

    @property
    def phase(self) -> TracerPhase:
        with self._lock:
            return self._state.phase

    @property
    def depth(self) -> int:
        with self._lock:
            return self._state.depth

    @property
    def total_gas_used(self) -> int:
        with self._lock:
            return self._state.total_gas_used

    @property
    def optimizations(self) -> list[Finding]:
        with self._lock:
            return list(self._state.optimizations)

    @property
    def gas_by_opcode(self) -> dict[str, int]:
        with self._lock:
            return dict(self._state.gas_by_opcode)

    def report(self, require_finished: bool = False) -> Report:
        with self._lock:
            return build_report(self._state, require_finished=require_finished)

    def report_json(self, require_finished: bool = False) -> str:
        return self.report(require_finished=require_finished).to_json()

    # ── Lifecycle ────────────────────────────────────────────────

    def _accept(self, kind: EventKind) -> bool:
        """Advance the lifecycle for *kind*; False means drop the event."""
        state = self._state
        if state.phase == TracerPhase.ENDED:
            logger.warning("Ignoring %s event delivered after trace end", kind.value)
            return False
        if kind == EventKind.TX_START:
            if state.phase != TracerPhase.IDLE:
                logger.warning("Ignoring duplicate tx_start (phase=%s)", state.phase.value)
                return False
            state.phase = TracerPhase.STARTED
            return True
        if state.phase == TracerPhase.IDLE:
            logger.warning("%s event before tx_start; starting trace implicitly", kind.value)
        if kind != EventKind.TX_END:
            state.phase = TracerPhase.RUNNING
        return True

    def _record(self, finding: Finding | None) -> None:
        if finding is None:
            return
        logger.debug(
            "Finding %s (%s) at %s", finding.type, finding.severity.value, finding.location
        )
        self._state.optimizations.append(finding)

    # ── TraceHooks ───────────────────────────────────────────────

    def on_tx_start(self, event: TxStart) -> None:
        with self._lock:
            if not self._accept(EventKind.TX_START):
                return
            self._state.gas = event.gas_limit
            self._state.depth = 0
            logger.info("Trace started with gas limit %d", event.gas_limit)

    def on_enter(self, event: Enter) -> None:
        with self._lock:
            if not self._accept(EventKind.ENTER):
                return
            self._state.depth += 1

    def on_exit(self, event: Exit) -> None:
        with self._lock:
            if not self._accept(EventKind.EXIT):
                return
            state = self._state
            if state.depth > 0:
                state.depth -= 1
            else:
                logger.warning("Unmatched exit at depth 0; depth clamped")
            state.total_gas_used += event.gas_used

    def on_fault(self, event: Fault) -> None:
        with self._lock:
            if not self._accept(EventKind.FAULT):
                return
            self._state.faults.append(
                FaultRecord(
                    pc=event.pc,
                    op=event.op,
                    gas=event.gas,
                    cost=event.cost,
                    depth=event.depth,
                    error=event.error,
                )
            )

    def on_tx_end(self, event: TxEnd) -> None:
        with self._lock:
            if not self._accept(EventKind.TX_END):
                return
            state = self._state
            if state.total_gas_used != event.gas_used:
                logger.debug(
                    "Live gas counter %d replaced by final gas %d",
                    state.total_gas_used,
                    event.gas_used,
                )
            state.total_gas_used = event.gas_used
            state.optimizations.extend(terminal_pass(state, self._config))
            state.phase = TracerPhase.ENDED
            logger.info(
                "Trace ended: %d gas, %d findings",
                state.total_gas_used,
                len(state.optimizations),
            )

    def on_step(self, event: Step) -> None:
        with self._lock:
            if not self._accept(EventKind.STEP):
                return
            state = self._state
            state.pc = event.pc
            state.gas = event.gas
            state.depth = event.depth
            state.total_gas_used += event.cost
            state.gas_by_opcode[event.op] = (
                state.gas_by_opcode.get(event.op, 0) + event.cost
            )

            op = event.op
            if op in constants.STORAGE_READ_OPS:
                self._storage_read(event)
            elif op in constants.STORAGE_WRITE_OPS:
                self._storage_write(event)
            elif op in constants.MEMORY_OPS:
                state.memory_ops.append(
                    MemoryOperation(
                        pc=event.pc,
                        op=op,
                        size=event.memory_size,
                        gas=event.cost,
                        depth=event.depth,
                    )
                )
            elif op in constants.CALL_OPS:
                self._external_call(event)
            elif op in constants.CREATE_OPS:
                self._expensive(event, constants.DESC_CONTRACT_CREATION)
            elif op in constants.SELFDESTRUCT_OPS:
                self._expensive(event, constants.DESC_SELFDESTRUCT)
            elif op in constants.LOG_OPS:
                if event.cost > self._config.large_log_cost:
                    self._expensive(event, constants.DESC_LARGE_LOG)
            elif op in constants.HASH_OPS:
                if event.cost > self._config.expensive_hash_cost:
                    self._expensive(event, constants.DESC_EXPENSIVE_HASH)

            self._record(
                check_memory_expansion(event.pc, event.memory_size, self._config)
            )

    # ── Step categories ──────────────────────────────────────────

    def _storage_read(self, event: Step) -> None:
        key = event.operand(0)
        if key is None:
            logger.debug("%s at pc %d without slot operand; skipped", event.op, event.pc)
            return
        slot = slot_key(key)
        count = self._state.storage_reads.get(slot, 0) + 1
        self._state.storage_reads[slot] = count
        self._record(check_redundant_read(event.pc, slot, count, self._config))

    def _storage_write(self, event: Step) -> None:
        key = event.operand(0)
        if key is None:
            logger.debug("%s at pc %d without slot operand; skipped", event.op, event.pc)
            return
        slot = slot_key(key)
        self._state.storage_writes[slot] = self._state.storage_writes.get(slot, 0) + 1

    def _external_call(self, event: Step) -> None:
        gas_limit = event.operand(0)
        addr = event.operand(1)
        callee = None
        if gas_limit is not None and addr is not None:
            callee = address_hex(addr)
            self._record(
                check_gas_forwarding(event.pc, event.op, event.gas, gas_limit, callee)
            )
        else:
            logger.debug("%s at pc %d without call operands", event.op, event.pc)
        self._state.call_ops.append(
            CallOperation(
                pc=event.pc,
                op=event.op,
                gas=event.gas,
                gas_used=event.cost,
                depth=event.depth,
                to=callee,
            )
        )

    def _expensive(self, event: Step, description: str) -> None:
        self._state.expensive_ops.append(
            ExpensiveOperation(
                pc=event.pc,
                op=event.op,
                gas=event.cost,
                description=description,
                depth=event.depth,
            )
        )
