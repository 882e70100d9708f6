"""Unit tests for :mod:`entstats.analysis`."""

from __future__ import annotations

import math
import random
import tracemalloc

import numpy as np
import pytest

from entstats.analysis import EntStats, analyze_bytes
from entstats.errors import InvalidInputError


def _random_buffers() -> list[bytes]:
    rng = random.Random(20240101)
    return [rng.randbytes(size) for size in (1, 7, 64, 1000, 4096)]


@pytest.mark.parametrize("mode", ["byte", "bit"])
def test_empty_input_has_neutral_statistics(mode: str) -> None:
    stats = analyze_bytes(b"", mode)

    assert stats.entropy == 0.0
    assert stats.mean == 0.0
    assert stats.chi_square == 0.0
    assert stats.chi_square_p_value == 1.0
    assert stats.monte_carlo_pi is None
    assert stats.serial_correlation is None
    assert stats.total_symbols == 0
    assert stats.total_bytes == 0
    assert stats.compression_percent == 0.0
    assert stats.monte_carlo_error_percent is None
    assert all(count == 0 for count in stats.frequency_table.values())


def test_constant_input() -> None:
    stats = analyze_bytes(b"\x42" * 1000)

    assert stats.entropy == 0.0
    assert stats.mean == 66.0
    assert stats.serial_correlation is None
    assert stats.frequency_table[0x42] == 1000
    assert stats.compression_percent == pytest.approx(100.0)
    assert stats.chi_square_p_value == pytest.approx(0.0, abs=1e-12)


def test_uniform_distribution() -> None:
    stats = analyze_bytes(bytes(range(256)) * 16)

    assert stats.entropy == pytest.approx(8.0, abs=1e-12)
    assert stats.chi_square == pytest.approx(0.0, abs=1e-9)
    assert stats.chi_square_p_value == pytest.approx(1.0)
    assert stats.mean == pytest.approx(127.5)
    assert stats.compression_percent == pytest.approx(0.0, abs=1e-9)


@pytest.mark.parametrize("data", _random_buffers())
@pytest.mark.parametrize("mode", ["byte", "bit"])
def test_invariants_hold_for_arbitrary_input(data: bytes, mode: str) -> None:
    stats = analyze_bytes(data, mode)

    assert 0.0 <= stats.entropy <= math.log2(stats.alphabet_size) + 1e-12
    assert sum(stats.frequency_table.values()) == stats.total_symbols
    assert stats.total_symbols == len(data) * (8 if mode == "bit" else 1)
    assert stats.chi_square >= 0.0
    assert 0.0 <= stats.chi_square_p_value <= 1.0
    if stats.serial_correlation is not None:
        assert -1.0 - 1e-9 <= stats.serial_correlation <= 1.0 + 1e-9


def test_analysis_is_deterministic() -> None:
    data = random.Random(7).randbytes(5000)

    assert analyze_bytes(data) == analyze_bytes(data)
    assert analyze_bytes(data, "bit") == analyze_bytes(data, "bit")


def test_monte_carlo_group_boundary() -> None:
    assert analyze_bytes(b"\x00" * 6).monte_carlo_pi == 4.0
    assert analyze_bytes(b"\x00" * 5).monte_carlo_pi is None


def test_bit_mode_single_ff_byte() -> None:
    stats = EntStats.from_data(b"\xff", "bit")

    assert dict(stats.frequency_table) == {0: 0, 1: 8}
    assert stats.total_symbols == 8
    assert stats.alphabet_size == 2
    assert stats.mean == 1.0
    assert stats.entropy == 0.0


def test_bit_mode_balanced_pattern() -> None:
    stats = analyze_bytes(b"\xaa" * 1024, "bit")

    assert stats.entropy == pytest.approx(1.0)
    assert stats.mean == pytest.approx(0.5)
    assert stats.chi_square == pytest.approx(0.0)
    assert stats.serial_correlation == pytest.approx(-1.0)
    assert stats.random_mean == 0.5


def test_bit_mode_monte_carlo_uses_bytes() -> None:
    data = bytes(range(60))

    assert analyze_bytes(data, "bit").monte_carlo_pi == analyze_bytes(data, "byte").monte_carlo_pi


def test_mean_of_extremes() -> None:
    stats = analyze_bytes(b"\x00\xff")

    assert stats.mean == pytest.approx(127.5)
    assert stats.random_mean == 127.5


def test_biased_input_has_positive_chi_square() -> None:
    data = b"\x00" * 3072 + bytes(range(256)) * 4

    stats = analyze_bytes(data)

    assert stats.chi_square > 0.0
    assert 0.0 <= stats.chi_square_p_value <= 1.0


def test_monte_carlo_error_percent() -> None:
    stats = analyze_bytes(b"\x00" * 6)

    assert stats.monte_carlo_error_percent == pytest.approx(100 * (4 - math.pi) / math.pi)


def test_accepts_buffer_types() -> None:
    data = bytes(range(100))
    expected = analyze_bytes(data)

    assert analyze_bytes(bytearray(data)) == expected
    assert analyze_bytes(memoryview(data)) == expected
    assert analyze_bytes(memoryview(data)[::2]) == analyze_bytes(data[::2])
    assert analyze_bytes(np.frombuffer(data, dtype=np.uint8)) == expected


def test_rejects_text_and_unknown_modes() -> None:
    with pytest.raises(InvalidInputError):
        analyze_bytes("not bytes")  # type: ignore[arg-type]
    with pytest.raises(TypeError):
        analyze_bytes(None)  # type: ignore[arg-type]
    with pytest.raises(ValueError):
        analyze_bytes(b"abc", "nibble")  # type: ignore[arg-type]


def test_bit_mode_memory_stays_bounded() -> None:
    data = random.Random(7).randbytes(4 << 20)

    tracemalloc.start()
    try:
        stats = analyze_bytes(data, "bit")
        _, peak = tracemalloc.get_traced_memory()
    finally:
        tracemalloc.stop()

    assert stats.total_symbols == 8 * len(data)
    # one byte per bit plus int64 copies would need well over 64 bytes per input byte
    assert peak < 4 * len(data)
