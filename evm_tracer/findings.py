"""Finding records and the canonical string forms they carry."""

from __future__ import annotations

from enum import Enum
from typing import Union

from pydantic import (
    BaseModel,
    ConfigDict,
    NonNegativeInt,
    StrictFloat,
    StrictInt,
    StrictStr,
)

from . import constants

# Detail values stay scalar so a Finding always serializes to flat JSON.
DetailValue = Union[StrictInt, StrictFloat, StrictStr]


class Severity(str, Enum):
    HIGH = "high"
    MEDIUM = "medium"
    LOW = "low"


SEVERITY_ORDER: tuple[Severity, ...] = (Severity.HIGH, Severity.MEDIUM, Severity.LOW)


class Finding(BaseModel):
    """An actionable observation about gas usage.

    Findings are immutable once recorded; the tracer only ever appends them.
    """

    model_config = ConfigDict(frozen=True)

    type: str
    severity: Severity
    description: str
    location: str
    gas_savings: NonNegativeInt = 0
    details: dict[str, DetailValue] = {}


def format_pc(pc: int) -> str:
    """Render a program counter as 0x + its minimal big-endian bytes.

    >>> format_pc(0), format_pc(42), format_pc(256)
    ('0x', '0x2a', '0x0100')
    """
    if pc <= 0:
        return "0x"
    return "0x" + pc.to_bytes((pc.bit_length() + 7) // 8, "big").hex()


def _fixed_width_hex(word: int, width: int) -> str:
    masked = word & ((1 << (width * 8)) - 1)
    return "0x" + masked.to_bytes(width, "big").hex()


def slot_key(word: int) -> str:
    """Canonical 32-byte key for a storage slot."""
    return _fixed_width_hex(word, constants.WORD_BYTES)


def address_hex(word: int) -> str:
    """Canonical 20-byte address taken from the low bytes of a stack word."""
    return _fixed_width_hex(word, constants.ADDRESS_BYTES)
