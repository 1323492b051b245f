"""Execution events emitted by an instruction-level interpreter.

One event is produced per executed instruction (``Step``), plus call-frame
boundaries (``Enter``/``Exit``), interpreter faults (``Fault``), and the
transaction boundaries (``TxStart``/``TxEnd``).  Events are plain pydantic
models so a recorded trace can be replayed from JSON; the ``kind`` field is
the discriminator.
"""

from __future__ import annotations

from enum import Enum
from typing import Annotated, Any, Literal, Union

from pydantic import (
    BaseModel,
    ConfigDict,
    Field,
    NonNegativeInt,
    TypeAdapter,
    field_validator,
)


class EventKind(str, Enum):
    TX_START = "tx_start"
    ENTER = "enter"
    STEP = "step"
    EXIT = "exit"
    FAULT = "fault"
    TX_END = "tx_end"


def _coerce_word(value: Any) -> Any:
    """Accept stack words as ints or 0x-prefixed hex strings."""
    if isinstance(value, str):
        text = value.strip().lower()
        if text.startswith("0x"):
            return int(text[2:] or "0", 16)
        return int(text)
    return value


class _Event(BaseModel):
    model_config = ConfigDict(frozen=True)


class TxStart(_Event):
    kind: Literal["tx_start"] = "tx_start"
    gas_limit: NonNegativeInt = 0


class Enter(_Event):
    kind: Literal["enter"] = "enter"
    op: str = "CALL"
    from_address: str | None = None
    to_address: str | None = None
    gas: NonNegativeInt = 0
    value: NonNegativeInt = 0


class Step(_Event):
    """A single executed instruction.

    ``stack`` holds the operand values the analysis may need, top of the
    stack first; it may be shorter than the instruction's arity when the
    interpreter could not supply them.
    """

    kind: Literal["step"] = "step"
    pc: NonNegativeInt
    op: str
    gas: NonNegativeInt = 0
    cost: NonNegativeInt = 0
    depth: NonNegativeInt = 0
    stack: list[int] = []
    memory_size: NonNegativeInt = 0
    error: str | None = None

    @field_validator("stack", mode="before")
    @classmethod
    def _parse_stack_words(cls, value: Any) -> Any:
        if isinstance(value, (list, tuple)):
            return [_coerce_word(v) for v in value]
        return value

    @field_validator("op")
    @classmethod
    def _normalize_op(cls, value: str) -> str:
        return value.upper()

    def operand(self, index: int) -> int | None:
        """Return the *index*-th word from the top of the stack, if supplied."""
        if 0 <= index < len(self.stack):
            return self.stack[index]
        return None


class Exit(_Event):
    kind: Literal["exit"] = "exit"
    gas_used: NonNegativeInt = 0
    error: str | None = None


class Fault(_Event):
    kind: Literal["fault"] = "fault"
    pc: NonNegativeInt = 0
    op: str = ""
    gas: NonNegativeInt = 0
    cost: NonNegativeInt = 0
    depth: NonNegativeInt = 0
    error: str | None = None


class TxEnd(_Event):
    kind: Literal["tx_end"] = "tx_end"
    gas_used: NonNegativeInt = 0


ExecutionEvent = Annotated[
    Union[TxStart, Enter, Step, Exit, Fault, TxEnd],
    Field(discriminator="kind"),
]

_EVENT_ADAPTER: TypeAdapter[ExecutionEvent] = TypeAdapter(ExecutionEvent)


def parse_event(data: dict[str, Any]) -> ExecutionEvent:
    """Validate a decoded mapping into the matching event model.

    Raises ``pydantic.ValidationError`` for unknown kinds or bad fields.
    """
    return _EVENT_ADAPTER.validate_python(data)


def parse_event_line(line: str | bytes) -> ExecutionEvent:
    """Validate one JSON document into the matching event model."""
    return _EVENT_ADAPTER.validate_json(line)
