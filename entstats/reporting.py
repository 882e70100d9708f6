"""Reporting utilities for console, terse CSV, and markdown output."""

from __future__ import annotations

import re
import sys
import textwrap
from dataclasses import dataclass
from datetime import timezone
from pathlib import Path
from string import Template
from typing import Optional, Sequence, TYPE_CHECKING, TextIO

if TYPE_CHECKING:
    from datetime import timedelta
    from .analysis import EntStats
    from .app import RunResult

UNDEFINED = "undefined"

TERSE_HEADER = "0,File-{unit}s,Entropy,Chi-square,Mean,Monte-Carlo-Pi,Serial-Correlation"


@dataclass(frozen=True)
class ReportTemplate:
    """Container for the markdown report template."""

    template: Template = Template(
        textwrap.dedent(
            """
            # Entropy Analysis Report

            ## Summary
            ${summary}

            ## Input
            ${file_metadata}

            ## Statistics
            ${stats_table}

            ## Interpretation
            ${interpretation}

            ## Symbol Frequencies
            ${frequency_table}

            _Generated on ${timestamp} (duration: ${duration})._
            """
        ).strip()
    )


DEFAULT_TEMPLATE = ReportTemplate()


def print_console_summary(result: "RunResult", *, verbose: bool = False, stream: TextIO | None = None) -> None:
    """Print the classic ``ent`` summary of ``result`` to ``stream``."""

    output = stream if stream is not None else sys.stdout
    stats = result.stats
    if verbose:
        for line in format_occurrences(stats):
            print(line, file=output)
        print(file=output)
    print(format_summary(stats), file=output)


def format_summary(stats: "EntStats") -> str:
    unit = _unit(stats)
    lines = [
        f"Entropy = {stats.entropy:.6f} bits per {unit}.",
        "",
        "Optimum compression would reduce the size",
        f"of this {stats.total_symbols} {unit} file by {int(stats.compression_percent)} percent.",
        "",
        f"Chi square distribution for {stats.total_symbols} samples is {stats.chi_square:.2f}, and randomly",
        f"would exceed this value {format_p_value(stats.chi_square_p_value)} percent of the times.",
        "",
        f"Arithmetic mean value of data {unit}s is {stats.mean:.4f} ({stats.random_mean:g} = random).",
        _monte_carlo_line(stats),
        _correlation_line(stats),
    ]
    return "\n".join(lines)


def format_p_value(p_value: float) -> str:
    """Render ``p_value`` as the percentage phrase used by ``ent``."""

    if p_value < 0.0001:
        return "less than 0.01"
    if p_value > 0.9999:
        return "more than 99.99"
    return f"{p_value * 100:.2f}"


def format_occurrences(stats: "EntStats") -> Sequence[str]:
    """Return the occurrence table lines, skipping unobserved byte values."""

    table = stats.frequency_table
    lines = ["Value Char Occurrences Fraction"]
    for symbol, count in table.items():
        if stats.mode == "byte" and count == 0:
            continue
        char = chr(symbol) if stats.mode == "byte" and 32 <= symbol < 127 else " "
        lines.append(f"{symbol:3d}   {char}   {count:10d}   {table.fraction(symbol):.6f}")
    total_fraction = 1.0 if stats.total_symbols else 0.0
    lines.append("")
    lines.append(f"Total:     {stats.total_symbols:10d}   {total_fraction:.6f}")
    return tuple(lines)


def format_terse(result: "RunResult") -> str:
    """Return the two-line CSV summary (``ent -t`` layout)."""

    stats = result.stats
    row = ",".join(
        [
            "1",
            str(stats.total_symbols),
            f"{stats.entropy:.6f}",
            f"{stats.chi_square:.6f}",
            f"{stats.mean:.6f}",
            _optional(stats.monte_carlo_pi, "{:.6f}", empty=""),
            _optional(stats.serial_correlation, "{:.6f}", empty=""),
        ]
    )
    return TERSE_HEADER.format(unit=_unit(stats)) + "\n" + row + "\n"


def build_markdown_report(result: "RunResult", *, template: Template | None = None) -> str:
    """Generate a markdown report for ``result`` using ``template``."""

    template = template or DEFAULT_TEMPLATE.template
    stats = result.stats
    timestamp = result.started_at.astimezone(timezone.utc).isoformat()
    return template.substitute(
        summary=_format_summary_section(stats),
        file_metadata=_format_file_metadata(result),
        stats_table=_format_stats_table(stats),
        interpretation=_format_interpretation(result),
        frequency_table=_format_frequency_section(stats),
        timestamp=timestamp,
        duration=_format_duration(result.duration),
    )


def write_markdown_report(
    result: "RunResult",
    path: Path | None = None,
    *,
    template: Template | None = None,
) -> Path:
    """Render and persist a markdown report for ``result``."""

    target = _resolve_report_path(result, path)
    target.parent.mkdir(parents=True, exist_ok=True)
    target.write_text(build_markdown_report(result, template=template), encoding="utf-8")
    return target


# ---------------------------------------------------------------------------
# Helper formatting utilities
# ---------------------------------------------------------------------------

def _unit(stats: "EntStats") -> str:
    return "bit" if stats.mode == "bit" else "byte"


def _optional(value: Optional[float], fmt: str, *, empty: str = UNDEFINED) -> str:
    return empty if value is None else fmt.format(value)


def _monte_carlo_line(stats: "EntStats") -> str:
    if stats.monte_carlo_pi is None:
        return f"Monte Carlo value for Pi is {UNDEFINED} (fewer than 6 bytes)."
    return (
        f"Monte Carlo value for Pi is {stats.monte_carlo_pi:.9f} "
        f"(error {stats.monte_carlo_error_percent:.2f} percent)."
    )


def _correlation_line(stats: "EntStats") -> str:
    value = _optional(stats.serial_correlation, "{:.6f}")
    return f"Serial correlation coefficient is {value} (totally uncorrelated = 0.0)."


def _format_summary_section(stats: "EntStats") -> str:
    unit = _unit(stats)
    return textwrap.dedent(
        f"""
        - **Mode:** {stats.mode}
        - **Entropy:** {stats.entropy:.6f} of {stats.max_entropy:g} bits per {unit}
        - **Optimum compression:** {stats.compression_percent:.2f}%
        """
    ).strip()


def _format_file_metadata(result: "RunResult") -> str:
    lines = [
        f"- **Input file:** {result.input_path}",
        f"- **Configuration:** {result.config_path if result.config_path else '(defaults)'}",
        f"- **Total bytes:** {result.stats.total_bytes}",
        f"- **Total samples:** {result.stats.total_symbols}",
    ]
    return "\n".join(lines)


def _format_stats_table(stats: "EntStats") -> str:
    rows = [
        ("Entropy", f"{stats.entropy:.6f}"),
        ("Chi-square", f"{stats.chi_square:.2f}"),
        ("Chi-square p-value (%)", format_p_value(stats.chi_square_p_value)),
        ("Arithmetic mean", f"{stats.mean:.4f} ({stats.random_mean:g} = random)"),
        ("Monte Carlo Pi", _optional(stats.monte_carlo_pi, "{:.9f}")),
        ("Monte Carlo error (%)", _optional(stats.monte_carlo_error_percent, "{:.2f}")),
        ("Serial correlation", _optional(stats.serial_correlation, "{:.6f}")),
    ]
    lines = ["| Statistic | Value |", "| --- | --- |"]
    lines.extend(f"| {name} | {value} |" for name, value in rows)
    return "\n".join(lines)


def _format_interpretation(result: "RunResult") -> str:
    stats = result.stats
    notes: list[str] = []
    if stats.total_symbols == 0:
        notes.append("Input is empty; all statistics take their neutral values.")
    else:
        p_value = stats.chi_square_p_value
        if p_value < 0.01 or p_value > 0.99:
            notes.append(
                "Chi-square p-value is outside the 1%-99% band; the data is unlikely to be random."
            )
        elif p_value < 0.05 or p_value > 0.95:
            notes.append("Chi-square p-value is borderline (outside the 5%-95% band).")
        else:
            notes.append("Chi-square p-value is consistent with a random source.")
    if stats.serial_correlation is None and stats.total_symbols >= 2:
        notes.append("Serial correlation is undefined because every sample has the same value.")
    notes.extend(result.warnings)
    return "\n".join(f"- {note}" for note in notes)


def _format_frequency_section(stats: "EntStats") -> str:
    table = stats.frequency_table
    lines = ["| Value | Occurrences | Fraction |", "| --- | --- | --- |"]
    rows = [
        f"| {symbol} | {count} | {table.fraction(symbol):.6f} |"
        for symbol, count in table.items()
        if count or stats.mode == "bit"
    ]
    if not rows:
        rows.append("| _(no data)_ | - | - |")
    return "\n".join(lines + rows)


def _format_duration(duration: "timedelta") -> str:
    total_seconds = duration.total_seconds()
    if total_seconds < 1:
        return f"{total_seconds * 1000:.0f} ms"
    return f"{total_seconds:.2f} s"


def _resolve_report_path(result: "RunResult", path: Path | None) -> Path:
    if path is not None:
        return Path(path).expanduser().resolve()
    stem = result.input_path.stem or result.input_path.name or "analysis"
    safe_stem = re.sub(r"[^A-Za-z0-9_.-]+", "-", stem).strip("-") or "analysis"
    timestamp = result.started_at.astimezone(timezone.utc).strftime("%Y%m%d-%H%M%S")
    return (Path("reports") / f"{safe_stem}-{timestamp}.md").resolve()


__all__ = [
    "DEFAULT_TEMPLATE",
    "ReportTemplate",
    "build_markdown_report",
    "format_occurrences",
    "format_p_value",
    "format_summary",
    "format_terse",
    "print_console_summary",
    "write_markdown_report",
]
