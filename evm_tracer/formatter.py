"""Plain-text presentation of Findings and gas breakdowns."""

from __future__ import annotations

from dataclasses import dataclass

from .findings import Finding, SEVERITY_ORDER, Severity

_SEVERITY_HEADINGS: dict[Severity, str] = {
    Severity.HIGH: "HIGH PRIORITY OPTIMIZATIONS",
    Severity.MEDIUM: "MEDIUM PRIORITY OPTIMIZATIONS",
    Severity.LOW: "LOW PRIORITY OPTIMIZATIONS",
}

RECOMMENDATIONS: tuple[str, ...] = (
    "Review high-priority optimizations first",
    "Consider caching frequently accessed storage values",
    "Batch external calls when possible",
    "Use memory instead of storage for temporary data",
)


@dataclass(frozen=True)
class PresenterConfig:
    """Layout settings for the text presenter."""

    rule_width: int = 63
    breakdown_limit: int = 10
    high_share_percent: float = 20.0
    medium_share_percent: float = 10.0


def format_gas(gas: int) -> str:
    if gas >= 1_000_000:
        return f"{gas / 1_000_000:.2f}M"
    if gas >= 1_000:
        return f"{gas / 1_000:.2f}K"
    return str(gas)


def _banner(title: str, config: PresenterConfig) -> list[str]:
    rule = "═" * config.rule_width
    return [rule, title.center(config.rule_width).rstrip(), rule, ""]


def _format_finding(finding: Finding, index: int) -> list[str]:
    lines = [
        f"{index}. {finding.type}",
        f"   Description: {finding.description}",
        f"   Location: {finding.location}",
    ]
    if finding.gas_savings > 0:
        lines.append(f"   Potential Savings: {format_gas(finding.gas_savings)}")
    if finding.details:
        lines.append("   Details:")
        for key in sorted(finding.details):
            lines.append(f"     • {key}: {finding.details[key]}")
    return lines


def format_optimizations(
    findings: list[Finding],
    total_gas: int,
    config: PresenterConfig = PresenterConfig(),
) -> str:
    """Render findings grouped by severity, highest first.

    Numbering restarts within each severity group; findings keep their
    recorded order inside a group.
    """
    lines = [""] + _banner("EVM TRACER - GAS OPTIMIZATION REPORT", config)
    lines.append(f"Total Gas Used: {format_gas(total_gas)}")
    lines.append(f"Optimizations Found: {len(findings)}")
    lines.append("")

    if not findings:
        lines.append("No obvious optimization opportunities found!")
        lines.append("   Your transaction appears to be well-optimized.")
        lines.append("")
        return "\n".join(lines) + "\n"

    for severity in SEVERITY_ORDER:
        group = [f for f in findings if f.severity == severity]
        if not group:
            continue
        lines.append(_SEVERITY_HEADINGS[severity])
        lines.append("─" * config.rule_width)
        for i, finding in enumerate(group, start=1):
            lines.append("")
            lines.extend(_format_finding(finding, i))
        lines.append("")

    total_savings = sum(f.gas_savings for f in findings)
    if total_savings > 0:
        savings = f"Total Potential Savings: {format_gas(total_savings)}"
        if total_gas > 0:
            savings += f" (~{total_savings / total_gas * 100:.2f}%)"
        lines.append("═" * config.rule_width)
        lines.append(savings)
        lines.append("═" * config.rule_width)
        lines.append("")

    return "\n".join(lines) + "\n"


def format_gas_breakdown(
    gas_by_opcode: dict[str, int],
    total_gas: int,
    config: PresenterConfig = PresenterConfig(),
) -> str:
    """Render the top gas consumers as a table.

    Rows are ordered by gas descending, ties broken by mnemonic.  Shares
    above the high / medium thresholds are marked ``!!`` / ``!``.
    """
    lines = [""] + _banner("GAS USAGE BREAKDOWN", config)
    lines.append(f"{'OPCODE':<20} {'GAS USED':>15} {'% OF TOTAL':>10}")
    lines.append("─" * config.rule_width)

    ranked = sorted(gas_by_opcode.items(), key=lambda item: (-item[1], item[0]))
    for opcode, gas in ranked[: config.breakdown_limit]:
        percentage = gas / total_gas * 100 if total_gas > 0 else 0.0
        if percentage > config.high_share_percent:
            marker = "!!"
        elif percentage > config.medium_share_percent:
            marker = "!"
        else:
            marker = ""
        lines.append(
            f"{opcode:<20} {format_gas(gas):>15} {percentage:>9.2f}% {marker}".rstrip()
        )

    return "\n".join(lines) + "\n\n"


def format_recommendations(findings: list[Finding]) -> str:
    if not findings:
        return ""
    lines = ["RECOMMENDATIONS:"]
    lines.extend(f"   {i}. {text}" for i, text in enumerate(RECOMMENDATIONS, start=1))
    return "\n".join(lines) + "\n\n"
