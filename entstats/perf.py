"""Performance helpers for benchmarking and profiling the analyzer."""

from __future__ import annotations

import cProfile
import io
import pstats
import statistics
import timeit
from contextlib import contextmanager
from pathlib import Path
from typing import Callable, Iterator, Mapping

from .analysis import DEFAULT_MODE, analyze_bytes
from .app import EntStatsApp
from .metrics import AnalysisMode


def benchmark_analysis(
    data: bytes, *, mode: AnalysisMode = DEFAULT_MODE, repeat: int = 5
) -> Mapping[str, float]:
    """Benchmark :func:`~entstats.analysis.analyze_bytes` on ``data``."""

    payload = bytes(data)
    timer = timeit.Timer(lambda: analyze_bytes(payload, mode))
    runs = timer.repeat(repeat=repeat, number=1)
    return {
        "min": min(runs),
        "max": max(runs),
        "mean": statistics.fmean(runs),
    }


def profile_application(input_path: Path, *, mode: AnalysisMode | None = None, repeat: int = 1) -> str:
    """Profile the end-to-end application pipeline using :mod:`cProfile`."""

    app = EntStatsApp()
    profiler = cProfile.Profile()
    sink = io.StringIO()
    for _ in range(repeat):
        profiler.runcall(app.run, input_path, None, None, mode, False, False, sink)
    return _render_profile(profiler, 25)


@contextmanager
def capture_profile(
    app: EntStatsApp | None = None,
) -> Iterator[tuple[EntStatsApp, Callable[[int], str]]]:
    """Context manager capturing profiling data for manual inspection.

    The yielded tuple contains the :class:`EntStatsApp` instance to use for the
    profiled operations and a callable that returns a formatted profile summary
    when invoked.
    """

    profiler = cProfile.Profile()
    target_app = app or EntStatsApp()
    profiler.enable()

    def exporter(limit: int = 25) -> str:
        profiler.disable()
        return _render_profile(profiler, limit)

    try:
        yield target_app, exporter
    finally:
        profiler.disable()


def _render_profile(profiler: cProfile.Profile, limit: int) -> str:
    stream = io.StringIO()
    stats = pstats.Stats(profiler, stream=stream)
    stats.strip_dirs().sort_stats("cumulative").print_stats(limit)
    return stream.getvalue()


__all__ = [
    "benchmark_analysis",
    "capture_profile",
    "profile_application",
]
