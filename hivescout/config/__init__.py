"""
HiveScout Configuration

Thresholds and presets live in hivescout.config.thresholds.
Rule files are read and written by hivescout.config.loader.
"""

from hivescout.config.thresholds import (
    APPROACH_PRESETS,
    DEFAULT_APPROACH,
    MAX_CONFIDENCE,
    NUMERIC_DATATYPE_MARKERS,
    SPECIFICITY_TOLERANCE,
    get_preset,
    list_presets,
)

__all__ = [
    'APPROACH_PRESETS',
    'DEFAULT_APPROACH',
    'MAX_CONFIDENCE',
    'NUMERIC_DATATYPE_MARKERS',
    'SPECIFICITY_TOLERANCE',
    'get_preset',
    'list_presets',
]
