"""Entropy and randomness statistics for binary data."""

from .analysis import EntStats, analyze_bytes
from .app import EntStatsApp, RunResult
from .metrics import AnalysisMode, FrequencyTable

__all__ = [
    "AnalysisMode",
    "EntStats",
    "EntStatsApp",
    "FrequencyTable",
    "RunResult",
    "analyze_bytes",
]
