"""Tests for the plain-text presenter."""

from evm_tracer.findings import Finding, Severity
from evm_tracer.formatter import (
    PresenterConfig,
    format_gas,
    format_gas_breakdown,
    format_optimizations,
    format_recommendations,
)


def _finding(severity, type_="t", savings=0, **details):
    return Finding(
        type=type_,
        severity=severity,
        description=f"{type_} description",
        location="0x01",
        gas_savings=savings,
        details=details,
    )


class TestFormatGas:
    def test_plain(self):
        assert format_gas(999) == "999"

    def test_thousands(self):
        assert format_gas(2100) == "2.10K"

    def test_millions(self):
        assert format_gas(1_500_000) == "1.50M"


class TestFormatOptimizations:
    def test_empty_list_reports_well_optimized(self):
        text = format_optimizations([], 21_000)
        assert "Optimizations Found: 0" in text
        assert "No obvious optimization opportunities found!" in text
        assert "HIGH PRIORITY" not in text

    def test_groups_ordered_by_severity(self):
        findings = [
            _finding(Severity.LOW, "low_one"),
            _finding(Severity.MEDIUM, "medium_one"),
            _finding(Severity.HIGH, "high_one"),
        ]
        text = format_optimizations(findings, 10_000)

        assert text.index("HIGH PRIORITY") < text.index("MEDIUM PRIORITY")
        assert text.index("MEDIUM PRIORITY") < text.index("LOW PRIORITY")
        assert text.index("high_one") < text.index("medium_one") < text.index("low_one")

    def test_numbering_restarts_per_group(self):
        findings = [
            _finding(Severity.HIGH, "a"),
            _finding(Severity.HIGH, "b"),
            _finding(Severity.LOW, "c"),
        ]
        text = format_optimizations(findings, 10_000)
        assert "1. a" in text
        assert "2. b" in text
        assert "1. c" in text

    def test_details_sorted_by_key(self):
        text = format_optimizations(
            [_finding(Severity.HIGH, zeta=1, alpha="x")], 10_000
        )
        assert text.index("alpha: x") < text.index("zeta: 1")

    def test_total_savings_with_percentage(self):
        findings = [
            _finding(Severity.HIGH, savings=200),
            _finding(Severity.MEDIUM, savings=800),
        ]
        text = format_optimizations(findings, 10_000)
        assert "Potential Savings: 200" in text
        assert "Total Potential Savings: 1.00K (~10.00%)" in text

    def test_zero_total_gas_omits_percentage(self):
        text = format_optimizations([_finding(Severity.HIGH, savings=200)], 0)
        assert "Total Potential Savings: 200" in text
        assert "~" not in text

    def test_rule_width_from_config(self):
        text = format_optimizations([], 0, PresenterConfig(rule_width=20))
        assert "═" * 20 + "\n" in text
        assert "═" * 21 not in text


class TestFormatGasBreakdown:
    def test_rows_ordered_by_gas_then_name(self):
        text = format_gas_breakdown({"ADD": 30, "SSTORE": 500, "MUL": 30}, 1000)
        assert text.index("SSTORE") < text.index("ADD") < text.index("MUL")

    def test_limit(self):
        gas = {f"OP{i:02d}": 100 - i for i in range(15)}
        text = format_gas_breakdown(gas, 10_000, PresenterConfig(breakdown_limit=3))
        assert "OP02" in text
        assert "OP03" not in text

    def test_share_markers(self):
        text = format_gas_breakdown({"SSTORE": 500, "SLOAD": 150, "ADD": 50}, 1000)
        lines = {line.split()[0]: line for line in text.splitlines() if line[:1].isalpha()}
        assert lines["SSTORE"].endswith("50.00% !!")
        assert lines["SLOAD"].endswith("15.00% !")
        assert lines["ADD"].endswith("5.00%")

    def test_zero_total(self):
        text = format_gas_breakdown({"ADD": 3}, 0)
        assert "0.00%" in text


class TestRecommendations:
    def test_empty_without_findings(self):
        assert format_recommendations([]) == ""

    def test_lists_advice(self):
        text = format_recommendations([_finding(Severity.LOW)])
        assert text.startswith("RECOMMENDATIONS:")
        assert "4. Use memory instead of storage for temporary data" in text
