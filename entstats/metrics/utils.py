"""Utility helpers shared by the statistical measures."""

from __future__ import annotations

import math
from typing import Iterator

import numpy as np

from ..errors import InvalidInputError
from .base import AnalysisMode

GAMMA_MAX_ITERATIONS = 10_000
"""Upper bound on series terms / continued fraction steps."""

GAMMA_EPSILON = 1e-15
"""Relative accuracy targeted by the incomplete gamma evaluation."""

_FPMIN = 1e-300

SAMPLE_CHUNK_BYTES = 1 << 16
"""Input bytes processed per step by the sample-sequence measures."""


def as_byte_array(data: object) -> np.ndarray:
    """Return ``data`` as a flat ``uint8`` array, copying only strided views."""

    if isinstance(data, np.ndarray):
        if data.dtype != np.uint8:
            raise InvalidInputError(f"Expected a uint8 array, got dtype {data.dtype}.")
        return data.ravel()
    if not isinstance(data, (bytes, bytearray, memoryview)):
        raise InvalidInputError(
            f"Expected a bytes-like object, got {type(data).__name__}."
        )
    view = memoryview(data)
    if not view.c_contiguous:
        return np.frombuffer(view.tobytes(), dtype=np.uint8)
    return np.frombuffer(view.cast("B"), dtype=np.uint8)


def build_samples(data: np.ndarray, mode: AnalysisMode) -> np.ndarray:
    """Return the symbol sequence for ``mode``.

    Bit mode expands every byte into eight samples, most significant bit first.
    """

    if mode == "bit":
        return np.unpackbits(data)
    return data


def iter_samples(
    data: np.ndarray, mode: AnalysisMode, *, chunk_bytes: int | None = None
) -> Iterator[np.ndarray]:
    """Yield the symbol sequence for ``mode`` in consecutive slices.

    Each slice covers at most ``chunk_bytes`` input bytes so bit mode never
    expands the whole buffer at once.
    """

    step = chunk_bytes or SAMPLE_CHUNK_BYTES
    for start in range(0, len(data), step):
        yield build_samples(data[start : start + step], mode)


def regularised_gamma_q(a: float, x: float) -> float:
    """Return the regularised upper incomplete gamma function ``Q(a, x)``.

    The lower tail series converges quickly for ``x < a + 1``; above that the
    Lentz continued fraction is used (Numerical Recipes, section 6.2).
    """

    if a <= 0.0 or x <= 0.0:
        return 1.0
    if not math.isfinite(x):
        return 0.0
    if x < a + 1.0:
        q = 1.0 - _gamma_p_series(a, x)
    else:
        q = _gamma_q_continued_fraction(a, x)
    return min(1.0, max(0.0, q))


def chi_square_sf(statistic: float, degrees_of_freedom: int) -> float:
    """Return the survival function of the chi-square distribution."""

    if degrees_of_freedom <= 0:
        return 1.0
    return regularised_gamma_q(degrees_of_freedom / 2.0, statistic / 2.0)


def _gamma_prefactor(a: float, x: float) -> float:
    return math.exp(-x + a * math.log(x) - math.lgamma(a))


def _gamma_p_series(a: float, x: float) -> float:
    ap = a
    delta = total = 1.0 / a
    for _ in range(GAMMA_MAX_ITERATIONS):
        ap += 1.0
        delta *= x / ap
        total += delta
        if abs(delta) < abs(total) * GAMMA_EPSILON:
            break
    return total * _gamma_prefactor(a, x)


def _gamma_q_continued_fraction(a: float, x: float) -> float:
    b = x + 1.0 - a
    c = 1.0 / _FPMIN
    d = 1.0 / b
    h = d
    for i in range(1, GAMMA_MAX_ITERATIONS + 1):
        an = -i * (i - a)
        b += 2.0
        d = an * d + b
        if abs(d) < _FPMIN:
            d = _FPMIN
        c = b + an / c
        if abs(c) < _FPMIN:
            c = _FPMIN
        d = 1.0 / d
        delta = d * c
        h *= delta
        if abs(delta - 1.0) < GAMMA_EPSILON:
            break
    return h * _gamma_prefactor(a, x)


__all__ = [
    "as_byte_array",
    "build_samples",
    "iter_samples",
    "chi_square_sf",
    "regularised_gamma_q",
]
