"""Custom exceptions for the entropy statistics application."""

from __future__ import annotations


class EntStatsError(Exception):
    """Base error type for application specific failures."""


class MissingFileError(EntStatsError):
    """Raised when a required input file could not be located."""


class InvalidConfigurationError(EntStatsError):
    """Raised when the configuration file is malformed or invalid."""


class AnalysisExecutionError(EntStatsError):
    """Raised when the statistical analysis fails to execute."""


class InvalidInputError(EntStatsError, TypeError):
    """Raised when the data handed to the analyzer is not bytes-like."""


class InputTooLargeError(EntStatsError):
    """Raised when the input file exceeds the supported number of bytes."""
