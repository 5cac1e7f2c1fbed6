"""
HiveScout Signature - Statistical Fingerprint of a Triple Window

Usage:
    from hivescout.signature import extract_signature

    signature = extract_signature(window)
    signature.variance, signature.fft_entropy
"""

from hivescout.signature.extractor import (
    SignatureExtractor,
    build_signature_frame,
    extract_signature,
    harvest_numeric_values,
    literal_number,
)
from hivescout.signature.spectral import fft_entropy, next_power_of_two, pad_to_power_of_two
from hivescout.signature.statistics import (
    key_entropy,
    sample_skewness,
    sample_variance,
    shannon_entropy,
)

__all__ = [
    'SignatureExtractor',
    'build_signature_frame',
    'extract_signature',
    'harvest_numeric_values',
    'literal_number',
    'fft_entropy',
    'next_power_of_two',
    'pad_to_power_of_two',
    'key_entropy',
    'sample_skewness',
    'sample_variance',
    'shannon_entropy',
]
