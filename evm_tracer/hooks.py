"""Trace hook contract: one method per execution event kind."""

from __future__ import annotations

from abc import ABC, abstractmethod

from .events import Enter, EventKind, ExecutionEvent, Exit, Fault, Step, TxEnd, TxStart


class TraceHooks(ABC):
    """Callback surface an interpreter driver invokes as execution proceeds.

    Drivers guarantee that ``on_enter``/``on_exit`` nest properly and that
    ``on_tx_end`` is delivered exactly once per trace.
    """

    @abstractmethod
    def on_tx_start(self, event: TxStart) -> None: ...

    @abstractmethod
    def on_enter(self, event: Enter) -> None: ...

    @abstractmethod
    def on_step(self, event: Step) -> None: ...

    @abstractmethod
    def on_exit(self, event: Exit) -> None: ...

    @abstractmethod
    def on_fault(self, event: Fault) -> None: ...

    @abstractmethod
    def on_tx_end(self, event: TxEnd) -> None: ...


def dispatch(event: ExecutionEvent, hooks: TraceHooks) -> None:
    """Route *event* to the matching hook method."""
    if event.kind == EventKind.STEP:
        hooks.on_step(event)
    elif event.kind == EventKind.ENTER:
        hooks.on_enter(event)
    elif event.kind == EventKind.EXIT:
        hooks.on_exit(event)
    elif event.kind == EventKind.FAULT:
        hooks.on_fault(event)
    elif event.kind == EventKind.TX_START:
        hooks.on_tx_start(event)
    elif event.kind == EventKind.TX_END:
        hooks.on_tx_end(event)
    else:
        raise ValueError(f"Unknown event kind: {event.kind}")
