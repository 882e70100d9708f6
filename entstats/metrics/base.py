"""Common data structures shared by the statistical measures."""

from __future__ import annotations

from dataclasses import dataclass
from numbers import Integral
from typing import Iterator, Literal, Mapping, Tuple

AnalysisMode = Literal["byte", "bit"]

ALPHABET_SIZES: Mapping[AnalysisMode, int] = {"byte": 256, "bit": 2}
"""Number of distinct symbols observed in each analysis mode."""


def alphabet_size_for(mode: str) -> int:
    """Return the alphabet size for ``mode`` or raise :class:`ValueError`."""

    try:
        return ALPHABET_SIZES[mode]  # type: ignore[index]
    except KeyError:
        raise ValueError(f"Unsupported analysis mode: {mode!r}") from None


@dataclass(frozen=True)
class FrequencyTable(Mapping[int, int]):
    """Occurrence counts for every symbol of the alphabet.

    Symbols are the integers ``0 .. len(counts) - 1``; unobserved symbols are
    present with a count of zero so the table always covers the full alphabet.
    """

    counts: Tuple[int, ...]

    def __getitem__(self, symbol: int) -> int:
        if not isinstance(symbol, Integral) or not 0 <= symbol < len(self.counts):
            raise KeyError(symbol)
        return self.counts[symbol]

    def __iter__(self) -> Iterator[int]:
        return iter(range(len(self.counts)))

    def __len__(self) -> int:
        return len(self.counts)

    @property
    def total(self) -> int:
        return sum(self.counts)

    @property
    def alphabet_size(self) -> int:
        return len(self.counts)

    def fraction(self, symbol: int) -> float:
        """Return the share of ``symbol`` among all observations."""

        total = self.total
        if total == 0:
            return 0.0
        return self[symbol] / total


__all__ = [
    "ALPHABET_SIZES",
    "AnalysisMode",
    "FrequencyTable",
    "alphabet_size_for",
]
