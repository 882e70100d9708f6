"""Application orchestration for the entropy statistics CLI."""

from __future__ import annotations

import dataclasses
import logging
import sys
import time
from dataclasses import dataclass
from datetime import datetime, timedelta, timezone
from pathlib import Path
from typing import BinaryIO, TextIO, Tuple

from .analysis import EntStats, analyze_bytes
from .config import DEFAULT_CONFIG, EntStatsConfig, load_config
from .errors import AnalysisExecutionError, EntStatsError, InvalidConfigurationError
from .io import STDIN_LABEL, InputData, read_input_file, read_input_stream
from .logging import log_run_result
from .metrics import AnalysisMode, alphabet_size_for
from .reporting import format_terse, print_console_summary, write_markdown_report

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class RunResult:
    """Summary of a full application run."""

    input_path: Path
    config_path: Path | None
    stats: EntStats
    started_at: datetime
    duration: timedelta
    report_path: Path | None = None
    log_path: Path | None = None
    warnings: Tuple[str, ...] = ()

    @property
    def mode(self) -> AnalysisMode:
        return self.stats.mode


class EntStatsApp:
    """High level service wiring configuration, analysis, and rendering."""

    def __init__(self, stdin: BinaryIO | None = None) -> None:
        self._stdin = stdin

    # ------------------------------------------------------------------
    # Public API
    # ------------------------------------------------------------------
    def run(
        self,
        input_path: Path,
        config_path: Path | None = None,
        report_path: Path | None = None,
        mode: AnalysisMode | None = None,
        verbose: bool = False,
        terse: bool = False,
        stream: TextIO | None = None,
    ) -> RunResult:
        """Execute the analysis workflow and return its :class:`RunResult`."""

        started_at = datetime.now(timezone.utc)
        started = time.perf_counter()

        config = self._load_config(config_path)
        active_mode = self._resolve_mode(config, mode)
        input_data = self._load_input(input_path, config)
        logger.debug(
            "Analysing %d bytes from %s in %s mode", input_data.byte_count, input_data.path, active_mode
        )
        stats = self._analyse(input_data, active_mode)

        result = RunResult(
            input_path=input_data.path,
            config_path=config_path,
            stats=stats,
            started_at=started_at,
            duration=timedelta(seconds=time.perf_counter() - started),
            warnings=config.warnings,
        )

        output = stream if stream is not None else sys.stdout
        if terse:
            output.write(format_terse(result))
        else:
            print_console_summary(
                result, verbose=verbose or config.output.show_occurrences, stream=output
            )

        target_report = report_path or config.output.report_path
        if target_report is not None:
            written = write_markdown_report(result, target_report)
            result = dataclasses.replace(result, report_path=written)
            logger.debug("Report written to %s", written)

        if config.output.log_results:
            log_file = log_run_result(
                result,
                result.report_path,
                log_path=config.output.run_log_path,
                fmt=config.output.run_log_format,
                retention=config.output.run_log_retention,
            )
            result = dataclasses.replace(result, log_path=log_file)
        return result

    # ------------------------------------------------------------------
    # Pipeline stages
    # ------------------------------------------------------------------
    def _load_config(self, path: Path | None) -> EntStatsConfig:
        if path is None:
            return DEFAULT_CONFIG
        config = load_config(path)
        for warning in config.warnings:
            logger.warning(warning)
        return config

    def _resolve_mode(self, config: EntStatsConfig, mode: str | None) -> AnalysisMode:
        selected = mode or config.analysis.mode
        try:
            alphabet_size_for(selected)
        except ValueError as exc:
            raise InvalidConfigurationError(str(exc)) from exc
        return selected  # type: ignore[return-value]

    def _load_input(self, path: Path, config: EntStatsConfig) -> InputData:
        if str(path) == STDIN_LABEL:
            stdin = self._stdin if self._stdin is not None else sys.stdin.buffer
            return read_input_stream(stdin, max_bytes=config.analysis.max_bytes)
        return read_input_file(path, max_bytes=config.analysis.max_bytes)

    def _analyse(self, input_data: InputData, mode: AnalysisMode) -> EntStats:
        try:
            return analyze_bytes(input_data.data, mode)
        except EntStatsError:
            raise
        except Exception as exc:
            raise AnalysisExecutionError(
                f"Analysis of '{input_data.path}' failed: {exc}"
            ) from exc


__all__ = ["EntStatsApp", "RunResult"]
