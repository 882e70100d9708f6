"""Command line entry point for the entropy statistics application."""

from __future__ import annotations

import argparse
import logging
import sys
from pathlib import Path

from .app import EntStatsApp
from .errors import (
    AnalysisExecutionError,
    InputTooLargeError,
    InvalidConfigurationError,
    InvalidInputError,
    MissingFileError,
)

EXIT_SUCCESS = 0
EXIT_UNEXPECTED_ERROR = 1
EXIT_MISSING_FILE = 2
EXIT_INVALID_CONFIG = 3
EXIT_ANALYSIS_FAILURE = 4
EXIT_INVALID_INPUT = 5


def _build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="entstats",
        description="Report entropy and randomness statistics for a binary file.",
    )
    parser.add_argument(
        "input",
        type=Path,
        help="Path to the file to analyse, or '-' to read standard input.",
    )
    parser.add_argument(
        "--bits",
        "-b",
        action="store_true",
        help="Treat the input as a stream of bits instead of bytes.",
    )
    parser.add_argument(
        "--config",
        "-C",
        type=Path,
        help="Optional path to an INI configuration file.",
    )
    parser.add_argument(
        "--report",
        "-r",
        type=Path,
        help="Optional path where a markdown report will be written.",
    )
    parser.add_argument(
        "--occurrences",
        "-c",
        action="store_true",
        help="Print the occurrence count of each value.",
    )
    parser.add_argument(
        "--terse",
        "-t",
        action="store_true",
        help="Print a CSV summary instead of the full text.",
    )
    parser.add_argument(
        "--debug",
        action="store_true",
        help="Enable debug diagnostics on standard error.",
    )
    return parser


def main(argv: list[str] | None = None) -> int:
    parser = _build_parser()
    args = parser.parse_args(argv)
    logging.basicConfig(
        level=logging.DEBUG if args.debug else logging.WARNING,
        format="%(levelname)s %(name)s: %(message)s",
    )
    app = EntStatsApp()
    try:
        app.run(
            input_path=args.input,
            config_path=args.config,
            report_path=args.report,
            mode="bit" if args.bits else None,
            verbose=args.occurrences,
            terse=args.terse,
        )
    except MissingFileError as exc:
        print(f"Error: {exc}", file=sys.stderr)
        return EXIT_MISSING_FILE
    except InvalidConfigurationError as exc:
        print(f"Configuration error: {exc}", file=sys.stderr)
        return EXIT_INVALID_CONFIG
    except (InvalidInputError, InputTooLargeError) as exc:
        print(f"Invalid input: {exc}", file=sys.stderr)
        return EXIT_INVALID_INPUT
    except AnalysisExecutionError as exc:
        print(f"Analysis failed: {exc}", file=sys.stderr)
        return EXIT_ANALYSIS_FAILURE
    except Exception as exc:  # pragma: no cover - last resort for the CLI
        print(f"Unexpected error: {exc}", file=sys.stderr)
        return EXIT_UNEXPECTED_ERROR
    return EXIT_SUCCESS


if __name__ == "__main__":  # pragma: no cover - CLI entry point
    sys.exit(main())
