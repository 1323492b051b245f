"""Tests for the pattern detector: streaming checks and the terminal pass."""

import pytest

from evm_tracer.findings import Severity
from evm_tracer.patterns import (
    check_call_batching,
    check_gas_forwarding,
    check_memory_expansion,
    check_redundant_read,
    find_hot_opcodes,
)
from evm_tracer.tracer_types import TracerConfig

from tests.unit.conftest import call, feed, finish, sload, started, step

CONFIG = TracerConfig()


class TestStreamingChecks:
    def test_redundant_read_below_threshold(self):
        assert check_redundant_read(0, "0x01", 2, CONFIG) is None

    def test_redundant_read_savings(self):
        finding = check_redundant_read(0, "0x01", 4, CONFIG)
        assert finding.gas_savings == 300

    def test_gas_forwarding_exact_match_only(self):
        assert check_gas_forwarding(0, "CALL", 6400, 6300, "0x00") is not None
        assert check_gas_forwarding(0, "CALL", 6400, 6299, "0x00") is None
        assert check_gas_forwarding(0, "CALL", 6400, 6400, "0x00") is None

    def test_memory_expansion_threshold_is_exclusive(self):
        assert check_memory_expansion(0, 10_000, CONFIG) is None
        assert check_memory_expansion(0, 10_001, CONFIG).details == {
            "memory_size": 10_001
        }


class TestHotOpcodes:
    def test_share_above_ten_percent(self):
        findings = find_hot_opcodes({"SSTORE": 20_000, "ADD": 30}, 40_000, CONFIG)

        (finding,) = findings
        assert finding.severity == Severity.MEDIUM
        assert finding.location == "multiple"
        assert finding.details == {
            "opcode": "SSTORE",
            "gas_used": 20_000,
            "percentage": 50.0,
        }

    def test_exactly_ten_percent_is_not_hot(self):
        assert find_hot_opcodes({"SLOAD": 100}, 1000, CONFIG) == []
        assert len(find_hot_opcodes({"SLOAD": 101}, 1000, CONFIG)) == 1

    def test_sorted_by_mnemonic(self):
        gas = {"SSTORE": 400, "CALL": 300, "SLOAD": 300}
        findings = find_hot_opcodes(gas, 1000, CONFIG)
        assert [f.details["opcode"] for f in findings] == ["CALL", "SLOAD", "SSTORE"]

    @pytest.mark.parametrize("total", [0, -1])
    def test_non_positive_total_suppresses_findings(self, total):
        assert find_hot_opcodes({"SLOAD": 500}, total, CONFIG) == []

    def test_zero_total_at_tx_end_does_not_raise(self):
        tracer = finish(feed(started(), sload(1), step("ADD")), gas_used=0)
        assert [f for f in tracer.optimizations if f.type == "expensive_opcode"] == []


class TestCallBatching:
    def test_more_than_five_calls(self):
        finding = check_call_batching(6, CONFIG)
        assert finding.gas_savings == 6 * 2100
        assert finding.details == {"call_count": 6}

    def test_five_calls_is_fine(self):
        assert check_call_batching(5, CONFIG) is None

    def test_six_calls_through_tracer(self):
        tracer = finish(feed(started(), *(call(pc=i) for i in range(6))))

        (finding,) = [f for f in tracer.optimizations if f.type == "multiple_calls"]
        assert finding.details["call_count"] == 6
        assert finding.gas_savings == 12_600

    def test_five_calls_through_tracer(self):
        tracer = finish(feed(started(), *(call(pc=i) for i in range(5))))
        assert [f for f in tracer.optimizations if f.type == "multiple_calls"] == []


class TestFindingOrder:
    def test_streaming_then_opcode_then_batching(self):
        tracer = started()
        feed(
            tracer,
            sload(1, pc=1),
            sload(1, pc=2),
            sload(1, pc=3),
            step("MSTORE", pc=4, memory_size=20_000),
            *(call(pc=10 + i) for i in range(6)),
        )
        finish(tracer)

        # SLOAD 300, MSTORE 3, CALL 600 of 903 total
        assert [f.type for f in tracer.optimizations] == [
            "redundant_sload",
            "memory_expansion",
            "expensive_opcode",
            "expensive_opcode",
            "multiple_calls",
        ]
        hot = [f.details["opcode"] for f in tracer.optimizations if f.type == "expensive_opcode"]
        assert hot == ["CALL", "SLOAD"]

    def test_terminal_pass_runs_once(self):
        tracer = finish(feed(started(), *(call(pc=i) for i in range(6))))
        count = len(tracer.optimizations)
        finish(tracer)
        assert len(tracer.optimizations) == count
