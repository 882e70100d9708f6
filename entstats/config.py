"""Configuration parsing utilities for the entropy statistics application."""

from __future__ import annotations

import configparser
from dataclasses import dataclass, field
from pathlib import Path
from typing import Tuple

from .analysis import DEFAULT_MODE
from .errors import InvalidConfigurationError, MissingFileError
from .io import DEFAULT_MAX_BYTES
from .metrics import ALPHABET_SIZES, AnalysisMode

LOG_FORMATS = ("jsonl", "csv")


@dataclass(frozen=True)
class AnalysisSection:
    """Options controlling how the input is analysed."""

    mode: AnalysisMode = DEFAULT_MODE
    max_bytes: int | None = DEFAULT_MAX_BYTES


@dataclass(frozen=True)
class OutputSection:
    """Options controlling how results should be presented to the user."""

    report_path: Path | None = None
    show_occurrences: bool = False
    log_results: bool = False
    run_log_path: Path = Path("logs") / "run_log.jsonl"
    run_log_format: str = "jsonl"
    run_log_retention: int | None = 100


@dataclass(frozen=True)
class EntStatsConfig:
    """Aggregate configuration container returned by :func:`load_config`."""

    analysis: AnalysisSection = field(default_factory=AnalysisSection)
    output: OutputSection = field(default_factory=OutputSection)
    warnings: Tuple[str, ...] = field(default_factory=tuple)


DEFAULT_CONFIG = EntStatsConfig()


def load_config(path: Path) -> EntStatsConfig:
    """Load and validate an INI configuration file."""

    parser = configparser.ConfigParser()
    try:
        with path.open("r", encoding="utf-8") as config_file:
            parser.read_file(config_file)
    except FileNotFoundError as exc:
        raise MissingFileError(f"Configuration file not found: {path}") from exc
    except OSError as exc:  # pragma: no cover - filesystem guard
        raise MissingFileError(f"Could not read configuration file: {path}") from exc
    except configparser.Error as exc:
        raise InvalidConfigurationError(f"Configuration is not valid INI: {exc}") from exc

    warnings: list[str] = []
    known = {"analysis", "output", "logging"}
    for name in parser.sections():
        if name not in known:
            warnings.append(f"Ignoring unknown section [{name}].")

    return EntStatsConfig(
        analysis=_parse_analysis(parser),
        output=_parse_output(parser, path),
        warnings=tuple(warnings),
    )


def _parse_analysis(parser: configparser.ConfigParser) -> AnalysisSection:
    if not parser.has_section("analysis"):
        return AnalysisSection()
    section = parser["analysis"]

    mode = section.get("mode", DEFAULT_MODE).strip().lower()
    if mode not in ALPHABET_SIZES:
        choices = "' or '".join(ALPHABET_SIZES)
        raise InvalidConfigurationError(
            f"Option 'mode' in [analysis] must be either '{choices}'."
        )

    max_bytes: int | None = DEFAULT_MAX_BYTES
    if "max_bytes" in section:
        raw_limit = section["max_bytes"].strip()
        try:
            parsed = int(raw_limit)
        except ValueError as exc:
            raise InvalidConfigurationError(
                "Option 'max_bytes' in [analysis] must be an integer value."
            ) from exc
        if parsed < 0:
            raise InvalidConfigurationError(
                "Option 'max_bytes' in [analysis] must not be negative."
            )
        max_bytes = parsed if parsed > 0 else None

    return AnalysisSection(mode=mode, max_bytes=max_bytes)  # type: ignore[arg-type]


def _parse_output(
    parser: configparser.ConfigParser, config_path: Path
) -> OutputSection:
    report_path: Path | None = None
    show_occurrences = False
    log_results = False
    base_dir = config_path.resolve().parent
    log_path = (base_dir / "logs" / "run_log.jsonl").resolve()
    log_format = "jsonl"
    log_retention: int | None = 100

    def _get_boolean(section: configparser.SectionProxy, key: str, section_name: str) -> bool:
        try:
            return section.getboolean(key)
        except ValueError as exc:
            raise InvalidConfigurationError(
                f"Option '{key}' in [{section_name}] must be a boolean value."
            ) from exc

    def _apply_logging_overrides(
        section: configparser.SectionProxy, *, section_name: str, allow_enable: bool = False
    ) -> None:
        nonlocal log_results, log_path, log_format, log_retention
        if allow_enable and "enabled" in section:
            log_results = _get_boolean(section, "enabled", section_name)
        if "log_results" in section:
            log_results = _get_boolean(section, "log_results", section_name)
        for key in ("log_path", "path"):
            if key in section:
                raw_path = section[key].strip()
                if raw_path:
                    candidate = Path(raw_path).expanduser()
                    if not candidate.is_absolute():
                        candidate = base_dir / candidate
                    log_path = candidate.resolve()
                break
        for key in ("log_format", "format"):
            if key in section:
                raw_format = section[key].strip().lower()
                if raw_format not in LOG_FORMATS:
                    raise InvalidConfigurationError(
                        f"Option '{key}' in [{section_name}] must be either 'jsonl' or 'csv'."
                    )
                log_format = raw_format
                break
        for key in ("log_retention", "retention"):
            if key in section:
                raw_retention = section[key].strip()
                if raw_retention:
                    try:
                        parsed = int(raw_retention)
                    except ValueError as exc:
                        raise InvalidConfigurationError(
                            f"Option '{key}' in [{section_name}] must be an integer value."
                        ) from exc
                    log_retention = parsed if parsed > 0 else None
                break

    if parser.has_section("output"):
        section = parser["output"]
        if "show_occurrences" in section:
            show_occurrences = _get_boolean(section, "show_occurrences", "output")
        if "report_path" in section:
            raw_report = section["report_path"].strip()
            if raw_report:
                candidate = Path(raw_report).expanduser()
                if not candidate.is_absolute():
                    candidate = base_dir / candidate
                report_path = candidate.resolve()
        _apply_logging_overrides(section, section_name="output")

    if parser.has_section("logging"):
        _apply_logging_overrides(parser["logging"], section_name="logging", allow_enable=True)

    return OutputSection(
        report_path=report_path,
        show_occurrences=show_occurrences,
        log_results=log_results,
        run_log_path=log_path,
        run_log_format=log_format,
        run_log_retention=log_retention,
    )


__all__ = [
    "AnalysisSection",
    "DEFAULT_CONFIG",
    "EntStatsConfig",
    "OutputSection",
    "load_config",
]
