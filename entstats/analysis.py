"""Aggregation of the statistical measures into a single result record.

The :mod:`entstats.metrics` package exposes the individual measures. This
module runs them over one in-memory buffer and packs the outcome into an
immutable :class:`EntStats` record:

``frequency_table``
    Counts for every symbol of the alphabet (256 byte values or the two bit
    values). Entropy, mean and the chi-square test are derived from it.

``monte_carlo_pi`` / ``serial_correlation``
    Computed from the raw sample sequence instead of the table. Both are
    ``None`` when the input is too short, and the correlation is also ``None``
    for constant input, so an undefined value is never confused with a
    computed ``0.0``.

In bit mode every byte contributes eight samples, most significant bit first.
The Monte Carlo estimate always consumes whole bytes regardless of the mode.

The analysis never performs I/O and never raises for bytes-like input,
including empty buffers.
"""

from __future__ import annotations

import math
from dataclasses import dataclass
from typing import Optional

from .metrics import (
    AnalysisMode,
    FrequencyTable,
    alphabet_size_for,
    arithmetic_mean,
    as_byte_array,
    chi_square,
    count_frequencies,
    monte_carlo_pi,
    serial_correlation,
    shannon_entropy,
)

DEFAULT_MODE: AnalysisMode = "byte"


@dataclass(frozen=True)
class EntStats:
    """Statistics computed for one buffer."""

    mode: AnalysisMode
    entropy: float
    chi_square: float
    chi_square_p_value: float
    mean: float
    monte_carlo_pi: Optional[float]
    serial_correlation: Optional[float]
    frequency_table: FrequencyTable
    total_symbols: int
    alphabet_size: int
    total_bytes: int

    @classmethod
    def from_data(cls, data: object, mode: AnalysisMode = DEFAULT_MODE) -> "EntStats":
        """Analyse ``data`` in ``mode`` (``"byte"`` or ``"bit"``)."""

        alphabet_size = alphabet_size_for(mode)
        raw = as_byte_array(data)

        table = count_frequencies(raw, mode)
        statistic, p_value = chi_square(table)

        return cls(
            mode=mode,
            entropy=shannon_entropy(table),
            chi_square=statistic,
            chi_square_p_value=p_value,
            mean=arithmetic_mean(table),
            monte_carlo_pi=monte_carlo_pi(raw),
            serial_correlation=serial_correlation(raw, mode),
            frequency_table=table,
            total_symbols=table.total,
            alphabet_size=alphabet_size,
            total_bytes=len(raw),
        )

    @property
    def max_entropy(self) -> float:
        return math.log2(self.alphabet_size)

    @property
    def random_mean(self) -> float:
        """Mean expected from a perfectly random source (127.5 or 0.5)."""

        return (self.alphabet_size - 1) / 2.0

    @property
    def compression_percent(self) -> float:
        """Size reduction an optimal compressor would achieve, in percent."""

        if self.total_symbols == 0:
            return 0.0
        return 100.0 * (1.0 - self.entropy / self.max_entropy)

    @property
    def monte_carlo_error_percent(self) -> Optional[float]:
        if self.monte_carlo_pi is None:
            return None
        return 100.0 * abs(math.pi - self.monte_carlo_pi) / math.pi


def analyze_bytes(data: object, mode: AnalysisMode = DEFAULT_MODE) -> EntStats:
    """Return the :class:`EntStats` for ``data``; see :meth:`EntStats.from_data`."""

    return EntStats.from_data(data, mode)


__all__ = ["DEFAULT_MODE", "EntStats", "analyze_bytes"]
