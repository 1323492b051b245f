"""Named constants: opcode families, thresholds, and finding identifiers."""

from __future__ import annotations

# ── Opcode families ──────────────────────────────────────────────

STORAGE_READ_OPS: frozenset[str] = frozenset({"SLOAD"})
STORAGE_WRITE_OPS: frozenset[str] = frozenset({"SSTORE"})
MEMORY_OPS: frozenset[str] = frozenset({"MLOAD", "MSTORE", "MSTORE8"})
CALL_OPS: frozenset[str] = frozenset(
    {"CALL", "STATICCALL", "DELEGATECALL", "CALLCODE"}
)
CREATE_OPS: frozenset[str] = frozenset({"CREATE", "CREATE2"})
SELFDESTRUCT_OPS: frozenset[str] = frozenset({"SELFDESTRUCT"})
LOG_OPS: frozenset[str] = frozenset({"LOG0", "LOG1", "LOG2", "LOG3", "LOG4"})
# Older clients still name KECCAK256 "SHA3"
HASH_OPS: frozenset[str] = frozenset({"KECCAK256", "SHA3"})

# ── Gas model ────────────────────────────────────────────────────

WARM_SLOAD_COST = 100
BASE_CALL_COST = 2100
CALL_GAS_RETENTION_DIVISOR = 64

REDUNDANT_READ_THRESHOLD = 2
MEMORY_EXPANSION_THRESHOLD = 10000
LARGE_LOG_COST = 1000
EXPENSIVE_HASH_COST = 500
HOT_OPCODE_PERCENT = 10
BATCH_CALL_THRESHOLD = 5

# ── Finding types ────────────────────────────────────────────────

FINDING_REDUNDANT_SLOAD = "redundant_sload"
FINDING_GAS_FORWARDING = "gas_forwarding"
FINDING_MEMORY_EXPANSION = "memory_expansion"
FINDING_EXPENSIVE_OPCODE = "expensive_opcode"
FINDING_MULTIPLE_CALLS = "multiple_calls"

LOCATION_MULTIPLE = "multiple"

# ── Expensive operation descriptions ─────────────────────────────

DESC_CONTRACT_CREATION = "Contract creation is expensive"
DESC_SELFDESTRUCT = "SELFDESTRUCT is very expensive"
DESC_LARGE_LOG = "Large LOG operation"
DESC_EXPENSIVE_HASH = "Expensive KECCAK256 operation"

# ── Canonical widths ─────────────────────────────────────────────

WORD_BYTES = 32
ADDRESS_BYTES = 20
