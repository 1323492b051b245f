"""Shared event builders for the tracer test suite."""

from evm_tracer.events import Step, TxEnd, TxStart
from evm_tracer.tracer import GasOptimizationTracer
from evm_tracer.tracer_types import TracerConfig


def step(op: str, pc: int = 0, cost: int = 3, gas: int = 100_000, **kwargs) -> Step:
    """Build a Step event with sensible defaults."""
    return Step(op=op, pc=pc, cost=cost, gas=gas, depth=kwargs.pop("depth", 1), **kwargs)


def sload(slot: int, pc: int = 0, cost: int = 100) -> Step:
    return step("SLOAD", pc=pc, cost=cost, stack=[slot])


def sstore(slot: int, pc: int = 0, cost: int = 5000) -> Step:
    return step("SSTORE", pc=pc, cost=cost, stack=[slot, 1])


def call(
    pc: int = 0,
    gas: int = 64_000,
    forwarded: int = 1000,
    to: int = 0xBEEF,
    op: str = "CALL",
) -> Step:
    return step(op, pc=pc, cost=100, gas=gas, stack=[forwarded, to])


def started(config: TracerConfig = TracerConfig()) -> GasOptimizationTracer:
    """A tracer that has already received tx_start."""
    tracer = GasOptimizationTracer(config)
    tracer.on_tx_start(TxStart(gas_limit=1_000_000))
    return tracer


def feed(tracer: GasOptimizationTracer, *steps: Step) -> GasOptimizationTracer:
    for event in steps:
        tracer.on_step(event)
    return tracer


def finish(tracer: GasOptimizationTracer, gas_used: int | None = None) -> GasOptimizationTracer:
    """Deliver tx_end; defaults to the tracer's live gas counter."""
    final = tracer.total_gas_used if gas_used is None else gas_used
    tracer.on_tx_end(TxEnd(gas_used=final))
    return tracer
