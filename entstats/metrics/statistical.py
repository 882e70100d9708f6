"""Concrete implementations of the ``ent`` statistical measures."""

from __future__ import annotations

import math
from typing import Optional, Tuple

import numpy as np

from .base import AnalysisMode, FrequencyTable, alphabet_size_for
from .utils import SAMPLE_CHUNK_BYTES, chi_square_sf, iter_samples

MONTE_CARLO_GROUP_BYTES = 6
"""Bytes consumed per Monte Carlo point (three per axis)."""

MONTE_CARLO_AXIS_MAX = 256 ** (MONTE_CARLO_GROUP_BYTES // 2) - 1
"""Largest coordinate value representable by three bytes."""

MONTE_CARLO_RADIUS_SQUARED = MONTE_CARLO_AXIS_MAX ** 2

_AXIS_WEIGHTS = np.array([1 << 16, 1 << 8, 1], dtype=np.int64)


def count_frequencies(
    data: np.ndarray, mode: AnalysisMode = "byte", *, chunk_bytes: int | None = None
) -> FrequencyTable:
    """Tabulate the ``mode`` symbols of ``data`` over the full alphabet."""

    alphabet_size = alphabet_size_for(mode)
    counts = np.zeros(alphabet_size, dtype=np.int64)
    for samples in iter_samples(data, mode, chunk_bytes=chunk_bytes):
        counts += np.bincount(samples, minlength=alphabet_size)
    return FrequencyTable(counts=tuple(int(count) for count in counts))


def shannon_entropy(table: FrequencyTable) -> float:
    """Return the entropy of ``table`` in bits per symbol."""

    total = table.total
    if total == 0:
        return 0.0
    entropy = 0.0
    for count in table.counts:
        if count:
            probability = count / total
            entropy -= probability * math.log2(probability)
    return entropy


def arithmetic_mean(table: FrequencyTable) -> float:
    total = table.total
    if total == 0:
        return 0.0
    return sum(symbol * count for symbol, count in enumerate(table.counts)) / total


def chi_square(table: FrequencyTable) -> Tuple[float, float]:
    """Return the chi-square statistic against a uniform distribution and its p-value."""

    total = table.total
    if total == 0:
        return 0.0, 1.0
    expected = total / table.alphabet_size
    statistic = 0.0
    for count in table.counts:
        diff = count - expected
        statistic += diff * diff / expected
    p_value = chi_square_sf(statistic, table.alphabet_size - 1)
    return statistic, p_value


def monte_carlo_pi(data: np.ndarray, *, chunk_bytes: int | None = None) -> Optional[float]:
    """Estimate Pi from non-overlapping six byte groups of ``data``.

    Each group yields a point whose 24-bit big-endian coordinates are compared
    against the circle inscribed in the ``MONTE_CARLO_AXIS_MAX`` square.
    Returns ``None`` when no complete group is available.
    """

    groups = len(data) // MONTE_CARLO_GROUP_BYTES
    if groups == 0:
        return None
    step = max(1, (chunk_bytes or SAMPLE_CHUNK_BYTES) // MONTE_CARLO_GROUP_BYTES)
    inside = 0
    for first in range(0, groups, step):
        last = min(groups, first + step)
        chunk = data[first * MONTE_CARLO_GROUP_BYTES : last * MONTE_CARLO_GROUP_BYTES]
        coordinates = chunk.reshape(last - first, 2, 3).astype(np.int64) @ _AXIS_WEIGHTS
        x = coordinates[:, 0]
        y = coordinates[:, 1]
        inside += int(np.count_nonzero(x * x + y * y <= MONTE_CARLO_RADIUS_SQUARED))
    return 4.0 * inside / groups


def serial_correlation(
    data: np.ndarray, mode: AnalysisMode = "byte", *, chunk_bytes: int | None = None
) -> Optional[float]:
    """Return the lag-1 correlation coefficient of the ``mode`` samples of ``data``.

    Pairs are not wrapped around, so values differ from classic ``ent``
    reports, which also correlate the last sample with the first, by O(1/n).
    ``None`` marks sequences shorter than two samples and constant sequences.
    """

    n = sum_x = sum_y = sum_xy = sum_x2 = sum_y2 = 0
    previous: Optional[np.ndarray] = None
    for samples in iter_samples(data, mode, chunk_bytes=chunk_bytes):
        if previous is not None:
            samples = np.concatenate((previous, samples))
        previous = samples[-1:]
        x = samples[:-1].astype(np.int64)
        y = samples[1:].astype(np.int64)
        n += len(x)
        sum_x += int(x.sum())
        sum_y += int(y.sum())
        sum_xy += int(np.dot(x, y))
        sum_x2 += int(np.dot(x, x))
        sum_y2 += int(np.dot(y, y))

    if n == 0:
        return None
    numerator = n * sum_xy - sum_x * sum_y
    denominator = (n * sum_x2 - sum_x * sum_x) * (n * sum_y2 - sum_y * sum_y)
    if denominator <= 0:
        return None
    return numerator / math.sqrt(denominator)


__all__ = [
    "MONTE_CARLO_AXIS_MAX",
    "MONTE_CARLO_GROUP_BYTES",
    "arithmetic_mean",
    "chi_square",
    "count_frequencies",
    "monte_carlo_pi",
    "serial_correlation",
    "shannon_entropy",
]
