"""
Spectral entropy of a value sequence.

The sequence is zero-padded to the next power of two before the DFT.
Padding changes the bin count and therefore the entropy, so it is part
of the metric definition, not an optimization detail.

    constant sequence  → all energy in the DC bin      → entropy 0
    periodic sequence  → energy in a few harmonic bins → intermediate
    irregular sequence → energy spread across bins     → high
"""

import numpy as np

from hivescout.signature.statistics import shannon_entropy


def next_power_of_two(n: int) -> int:
    """Smallest power of two >= n (1 for n <= 1)."""
    if n <= 1:
        return 1
    return 1 << (int(n) - 1).bit_length()


def pad_to_power_of_two(values: np.ndarray) -> np.ndarray:
    """Append trailing zeros up to the next power of two."""
    values = np.asarray(values, dtype=float)
    target = next_power_of_two(len(values))
    if target == len(values):
        return values
    return np.concatenate([values, np.zeros(target - len(values))])


def magnitude_spectrum(values: np.ndarray) -> np.ndarray:
    """|DFT| of the zero-padded sequence, one entry per frequency bin."""
    padded = pad_to_power_of_two(values)
    return np.abs(np.fft.fft(padded))


def fft_entropy(values: np.ndarray) -> float:
    """Base-2 Shannon entropy of the normalized magnitude spectrum.

    0 with fewer than 2 values or when the spectrum is all zeros.
    """
    values = np.asarray(values, dtype=float)
    if len(values) < 2:
        return 0.0

    magnitudes = magnitude_spectrum(values)
    if magnitudes.sum() == 0:
        return 0.0

    return shannon_entropy(magnitudes)
