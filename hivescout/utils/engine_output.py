"""
Metric Output Normalization

Literal parsing and metric return values.

A metric failing to produce a value is DATA, not an error.
- Literal text without a leading number → skipped
- Insufficient samples                   → 0.0
- Numerical instability (NaN/inf)        → 0.0

Only actual Python exceptions outside the math domain are errors.
"""

import logging
import re
from typing import Any, Optional

import numpy as np


logger = logging.getLogger(__name__)

# Leading decimal number: sign, digits, fraction, exponent. No hex, no underscores.
_LEADING_NUMBER = re.compile(r'[+-]?(?:\d+\.?\d*|\.\d+)(?:[eE][+-]?\d+)?')


def parse_numeric_literal(text: Any) -> Optional[float]:
    """
    Parse the leading decimal number of a literal's lexical form.

    "42 kg" reads as 42 and "1_000" as 1. Returns None when the text
    does not start with a number (after leading whitespace) or the
    number is not finite.
    """
    if text is None:
        return None
    match = _LEADING_NUMBER.match(str(text).lstrip())
    if match is None:
        return None
    value = float(match.group())
    if not np.isfinite(value):
        return None
    return value


def normalize_metric_value(value: Any) -> float:
    """Metric output as a float; None, NaN, inf and non-numbers become 0.0."""
    try:
        value = float(value)
    except (TypeError, ValueError):
        return 0.0
    return value if np.isfinite(value) else 0.0


def safe_metric_call(metric_func, *args, metric_name: str = "unknown", **kwargs) -> float:
    """
    Call a metric function, turning math-domain failures into 0.0.

    - Math domain errors → 0.0 (not exception)
    - Linear algebra / FFT value errors → 0.0
    - Real crashes → re-raised
    """
    try:
        result = metric_func(*args, **kwargs)
        normalized = normalize_metric_value(result)
        if normalized == 0.0 and result not in (0, 0.0):
            logger.debug(f"Metric {metric_name} returned non-finite value {result!r}")
        return normalized

    except (ValueError, ZeroDivisionError, FloatingPointError) as e:
        logger.debug(f"Metric {metric_name} math issue (0.0): {e}")
        return 0.0

    except np.linalg.LinAlgError as e:
        logger.debug(f"Metric {metric_name} linalg issue (0.0): {e}")
        return 0.0
