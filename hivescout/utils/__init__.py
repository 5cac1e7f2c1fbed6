"""HiveScout utilities."""

from hivescout.utils.engine_output import (
    normalize_metric_value,
    parse_numeric_literal,
    safe_metric_call,
)

__all__ = [
    'normalize_metric_value',
    'parse_numeric_literal',
    'safe_metric_call',
]
