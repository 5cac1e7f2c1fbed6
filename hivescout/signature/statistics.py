"""
Moment and distribution statistics for a window.

Pure compute: numpy array (or iterable of keys) in, float out.
"""

from collections import Counter
from typing import Hashable, Iterable

import numpy as np
from scipy import stats


def sample_variance(values: np.ndarray) -> float:
    """Sample variance (ddof=1). 0 with fewer than 2 values."""
    values = np.asarray(values, dtype=float)
    if len(values) < 2:
        return 0.0
    return float(np.var(values, ddof=1))


def sample_skewness(values: np.ndarray) -> float:
    """Adjusted sample skewness.

    n / ((n-1)(n-2)) * sum(((x - mean) / sd) ** 3), with sd the sample
    standard deviation. 0 with fewer than 3 values or zero spread.
    """
    values = np.asarray(values, dtype=float)
    n = len(values)
    if n < 3:
        return 0.0

    mean = np.mean(values)
    std_dev = np.sqrt(np.var(values, ddof=1))
    if std_dev == 0:
        return 0.0

    z = (values - mean) / std_dev
    return float(n / ((n - 1) * (n - 2)) * np.sum(z ** 3))


def shannon_entropy(weights: np.ndarray) -> float:
    """Base-2 Shannon entropy of non-negative weights.

    Weights are normalized to sum to 1; zero weights are skipped.
    Returns 0 when the total weight is 0.
    """
    weights = np.asarray(weights, dtype=float)
    if len(weights) == 0 or weights.sum() <= 0:
        return 0.0
    return max(0.0, float(stats.entropy(weights, base=2)))


def key_entropy(keys: Iterable[Hashable]) -> float:
    """Base-2 Shannon entropy of a categorical key distribution."""
    counts = Counter(keys)
    if not counts:
        return 0.0
    return shannon_entropy(np.fromiter(counts.values(), dtype=float))
