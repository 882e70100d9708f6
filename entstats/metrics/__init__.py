"""Statistical measures computed by the entropy analyzer."""

from .base import ALPHABET_SIZES, AnalysisMode, FrequencyTable, alphabet_size_for
from .statistical import (
    MONTE_CARLO_AXIS_MAX,
    MONTE_CARLO_GROUP_BYTES,
    arithmetic_mean,
    chi_square,
    count_frequencies,
    monte_carlo_pi,
    serial_correlation,
    shannon_entropy,
)
from .utils import (
    SAMPLE_CHUNK_BYTES,
    as_byte_array,
    build_samples,
    chi_square_sf,
    iter_samples,
    regularised_gamma_q,
)

__all__ = [
    "ALPHABET_SIZES",
    "AnalysisMode",
    "FrequencyTable",
    "MONTE_CARLO_AXIS_MAX",
    "MONTE_CARLO_GROUP_BYTES",
    "SAMPLE_CHUNK_BYTES",
    "alphabet_size_for",
    "arithmetic_mean",
    "as_byte_array",
    "build_samples",
    "chi_square",
    "chi_square_sf",
    "count_frequencies",
    "iter_samples",
    "monte_carlo_pi",
    "regularised_gamma_q",
    "serial_correlation",
    "shannon_entropy",
]
