"""Utilities for persisting run metadata to structured log files."""

from __future__ import annotations

import csv
import json
from dataclasses import dataclass
from datetime import timezone
from pathlib import Path
from typing import TYPE_CHECKING

if TYPE_CHECKING:  # pragma: no cover - import cycle safe typing
    from .app import RunResult


LOG_FIELDNAMES = (
    "timestamp",
    "input_file",
    "mode",
    "total_bytes",
    "entropy",
    "chi_square",
    "p_value",
    "report_path",
)
"""Ordered field names used for CSV and JSON payloads."""

DEFAULT_LOG_PATH = Path("logs") / "run_log.jsonl"
"""Default location for the run history log."""


@dataclass(frozen=True)
class RunLogRecord:
    """Structured representation of a logged application run."""

    timestamp: str
    input_file: str
    mode: str
    total_bytes: int
    entropy: float
    chi_square: float
    p_value: float
    report_path: str

    @classmethod
    def from_run_result(cls, result: "RunResult", report_path: Path | None) -> "RunLogRecord":
        """Create a log record from a :class:`~entstats.app.RunResult`."""

        stats = result.stats
        return cls(
            timestamp=result.started_at.astimezone(timezone.utc).isoformat(),
            input_file=str(result.input_path),
            mode=stats.mode,
            total_bytes=stats.total_bytes,
            entropy=float(stats.entropy),
            chi_square=float(stats.chi_square),
            p_value=float(stats.chi_square_p_value),
            report_path=str(report_path) if report_path is not None else "",
        )

    def to_dict(self) -> dict[str, str | int | float]:
        return {name: getattr(self, name) for name in LOG_FIELDNAMES}


def log_run_result(
    result: "RunResult",
    report_path: Path | None,
    *,
    log_path: Path | None = None,
    fmt: str = "jsonl",
    retention: int | None = 100,
) -> Path:
    """Append ``result`` to the structured log and enforce retention limits."""

    record = RunLogRecord.from_run_result(result, report_path)
    target = _prepare_log_path(log_path)
    normalised_format = fmt.lower()
    if normalised_format not in {"jsonl", "csv"}:
        raise ValueError(f"Unsupported log format: {fmt}")
    _append_record(target, record, normalised_format)
    if retention is not None and retention > 0:
        trim_log(target, retention, fmt=normalised_format)
    return target


def trim_log(path: Path, max_entries: int, *, fmt: str = "jsonl") -> None:
    """Trim ``path`` so only the last ``max_entries`` records remain."""

    if max_entries <= 0 or not path.exists():
        return
    with path.open("r", encoding="utf-8", newline="") as handle:
        lines = handle.readlines()
    header: list[str] = []
    if fmt == "csv" and lines:
        header, lines = lines[:1], lines[1:]
    elif fmt != "jsonl":
        raise ValueError(f"Unsupported log format: {fmt}")
    if len(lines) <= max_entries:
        return
    with path.open("w", encoding="utf-8", newline="") as handle:
        handle.writelines(header + lines[-max_entries:])


def _prepare_log_path(path: Path | None) -> Path:
    candidate = Path(path).expanduser() if path is not None else DEFAULT_LOG_PATH
    resolved = candidate.resolve()
    resolved.parent.mkdir(parents=True, exist_ok=True)
    return resolved


def _append_record(path: Path, record: RunLogRecord, fmt: str) -> None:
    if fmt == "jsonl":
        payload = json.dumps(record.to_dict(), ensure_ascii=False)
        with path.open("a", encoding="utf-8") as handle:
            handle.write(payload + "\n")
        return
    is_new_file = not path.exists() or path.stat().st_size == 0
    with path.open("a", encoding="utf-8", newline="") as handle:
        writer = csv.DictWriter(handle, fieldnames=LOG_FIELDNAMES)
        if is_new_file:
            writer.writeheader()
        writer.writerow(record.to_dict())


__all__ = ["DEFAULT_LOG_PATH", "LOG_FIELDNAMES", "RunLogRecord", "log_run_result", "trim_log"]
