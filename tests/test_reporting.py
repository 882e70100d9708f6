"""Tests for :mod:`entstats.reporting`."""

from __future__ import annotations

import io
from dataclasses import replace
from datetime import datetime, timedelta, timezone
from pathlib import Path

import pytest

from entstats import reporting
from entstats.analysis import analyze_bytes
from entstats.app import RunResult


def _build_run_result(tmp_path: Path, data: bytes = b"Hello, world!", mode: str = "byte") -> RunResult:
    input_path = tmp_path / "data.bin"
    input_path.write_bytes(data)
    return RunResult(
        input_path=input_path,
        config_path=None,
        stats=analyze_bytes(data, mode),
        started_at=datetime(2023, 1, 2, 3, 4, 5, tzinfo=timezone.utc),
        duration=timedelta(seconds=1.234),
        warnings=("Ignoring unknown section [extras].",),
    )


def test_format_p_value_phrases() -> None:
    assert reporting.format_p_value(0.00001) == "less than 0.01"
    assert reporting.format_p_value(0.99999) == "more than 99.99"
    assert reporting.format_p_value(0.5) == "50.00"


def test_print_console_summary(tmp_path: Path) -> None:
    result = _build_run_result(tmp_path, bytes(range(256)) * 4)
    buffer = io.StringIO()

    reporting.print_console_summary(result, stream=buffer)
    output = buffer.getvalue()

    assert "Entropy = 8.000000 bits per byte." in output
    assert "of this 1024 byte file by 0 percent." in output
    assert "Chi square distribution for 1024 samples is 0.00, and randomly" in output
    assert "would exceed this value more than 99.99 percent of the times." in output
    assert "Arithmetic mean value of data bytes is 127.5000 (127.5 = random)." in output
    assert "Monte Carlo value for Pi is" in output
    assert "Serial correlation coefficient is" in output
    assert "Value Char Occurrences Fraction" not in output


def test_compression_percent_is_truncated() -> None:
    stats = replace(analyze_bytes(bytes(range(256))), entropy=8 * (1 - 0.1279))

    assert stats.compression_percent == pytest.approx(12.79)
    assert "file by 12 percent." in reporting.format_summary(stats)


def test_console_summary_reports_undefined_values(tmp_path: Path) -> None:
    result = _build_run_result(tmp_path, b"\x01", mode="bit")
    buffer = io.StringIO()

    reporting.print_console_summary(result, stream=buffer)
    output = buffer.getvalue()

    assert "bits per bit" in output
    assert "(0.5 = random)" in output
    assert "Monte Carlo value for Pi is undefined" in output
    assert "Serial correlation coefficient is undefined" in output


def test_verbose_summary_prints_occurrences(tmp_path: Path) -> None:
    result = _build_run_result(tmp_path, b"AAB")
    buffer = io.StringIO()

    reporting.print_console_summary(result, verbose=True, stream=buffer)
    lines = buffer.getvalue().splitlines()

    assert lines[0] == "Value Char Occurrences Fraction"
    assert lines[1] == " 65   A            2   0.666667"
    assert lines[2] == " 66   B            1   0.333333"
    assert "Total:              3   1.000000" in lines


def test_bit_mode_occurrences_list_both_symbols(tmp_path: Path) -> None:
    result = _build_run_result(tmp_path, b"\xff", mode="bit")

    lines = reporting.format_occurrences(result.stats)

    assert lines[1] == "  0                0   0.000000"
    assert lines[2] == "  1                8   1.000000"


def test_format_terse(tmp_path: Path) -> None:
    result = _build_run_result(tmp_path, b"\x00" * 5)

    header, row = reporting.format_terse(result).splitlines()

    assert header == "0,File-bytes,Entropy,Chi-square,Mean,Monte-Carlo-Pi,Serial-Correlation"
    fields = row.split(",")
    assert fields[:2] == ["1", "5"]
    assert fields[5] == ""
    assert fields[6] == ""


def test_write_markdown_report_default_path(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> None:
    result = _build_run_result(tmp_path)
    monkeypatch.chdir(tmp_path)

    report_path = reporting.write_markdown_report(result)

    expected = (tmp_path / "reports" / "data-20230102-030405.md").resolve()
    assert report_path == expected
    content = report_path.read_text(encoding="utf-8")

    assert "# Entropy Analysis Report" in content
    assert "- **Mode:** byte" in content
    assert "- **Total bytes:** 13" in content
    assert "| Statistic | Value |" in content
    assert "| 108 | 3 | 0.230769 |" in content
    assert "Ignoring unknown section [extras]." in content
    assert "Generated on 2023-01-02T03:04:05+00:00 (duration: 1.23 s)" in content


def test_markdown_report_for_empty_input(tmp_path: Path) -> None:
    result = _build_run_result(tmp_path, b"")

    content = reporting.build_markdown_report(result)

    assert "| Monte Carlo Pi | undefined |" in content
    assert "| Serial correlation | undefined |" in content
    assert "Input is empty" in content
    assert "_(no data)_" in content


def test_write_markdown_report_custom_path(tmp_path: Path) -> None:
    result = _build_run_result(tmp_path)
    custom_path = tmp_path / "custom" / "report.md"

    written_path = reporting.write_markdown_report(result, path=custom_path)

    assert written_path == custom_path.resolve()
    assert custom_path.exists()
