"""
Window Signature Extractor
==========================

Reduces a window of triples to a five-field Signature:

    triples
    → numeric values harvested from literal objects (window order)
    → variance, skewness           (order-independent moments)
    → fft_entropy                  (order-dependent spectral spread)
    → entropy                      (predicate distribution, all triples)
    → triple_count                 (window size)

Public API:
    harvest_numeric_values(window)    iterable in, numpy array out
    extract_signature(window)         iterable in, Signature out
    build_signature_frame(df)         polars DataFrame in, DataFrame out

Pure compute. No file I/O, no exceptions for malformed literals.
"""

import logging
from typing import Iterable, List, Optional

import numpy as np
import polars as pl

from hivescout.config.thresholds import NUMERIC_DATATYPE_MARKERS
from hivescout.core.types import SIGNATURE_METRICS, Signature, TermType
from hivescout.intake.reader import frame_to_triples
from hivescout.signature.spectral import fft_entropy
from hivescout.signature.statistics import key_entropy, sample_skewness, sample_variance
from hivescout.utils.engine_output import parse_numeric_literal, safe_metric_call


logger = logging.getLogger(__name__)


def _is_literal(term) -> bool:
    flag = getattr(term, 'is_literal', None)
    if flag is not None:
        return bool(flag)
    return getattr(term, 'term_type', None) is TermType.LITERAL


def _predicate_key(predicate):
    return getattr(predicate, 'value', predicate)


def _accepts_datatype(datatype: Optional[str]) -> bool:
    """Untyped literals and numeric/string datatypes are parse candidates."""
    if not datatype:
        return True
    return any(marker in datatype for marker in NUMERIC_DATATYPE_MARKERS)


def literal_number(term) -> Optional[float]:
    """Numeric value of a literal term, or None if it does not carry one."""
    if not _is_literal(term):
        return None
    if not _accepts_datatype(getattr(term, 'datatype', None)):
        return None
    return parse_numeric_literal(getattr(term, 'value', None))


def harvest_numeric_values(window: Iterable) -> np.ndarray:
    """Finite numbers from literal objects, in window iteration order."""
    numbers = []
    for record in window:
        value = literal_number(record.object)
        if value is not None:
            numbers.append(value)
    return np.array(numbers, dtype=float)


def extract_signature(window: Iterable) -> Signature:
    """Compute the Signature of one window.

    The window is iterated exactly once, so generators are fine and the
    numeric sequence order (which fft_entropy depends on) is fixed for
    the whole call.

    Args:
        window: iterable of triples exposing .predicate and .object

    Returns:
        Signature with all fields 0 for an empty window
    """
    records = list(window)
    triple_count = len(records)
    if triple_count == 0:
        return Signature()

    values = harvest_numeric_values(records)
    predicates = [_predicate_key(record.predicate) for record in records]

    skipped = sum(1 for record in records if _is_literal(record.object)) - len(values)
    if skipped:
        logger.debug(f"Skipped {skipped} non-numeric literal(s)")
    logger.debug(f"Window: {triple_count} triples, {len(values)} numeric values")

    return Signature(
        triple_count=triple_count,
        variance=safe_metric_call(sample_variance, values, metric_name='variance'),
        skewness=safe_metric_call(sample_skewness, values, metric_name='skewness'),
        entropy=safe_metric_call(key_entropy, predicates, metric_name='entropy'),
        fft_entropy=safe_metric_call(fft_entropy, values, metric_name='fft_entropy'),
    )


class SignatureExtractor:
    """Stateless extractor object for callers that hold a component."""

    def extract_signature(self, window: Iterable) -> Signature:
        return extract_signature(window)

    __call__ = extract_signature


def build_signature_frame(
    triples_df: pl.DataFrame,
    window_column: str = 'window_id',
    verbose: bool = False,
) -> pl.DataFrame:
    """Signature for every window in a long triples table.

    Args:
        triples_df: DataFrame with [window_id, subject, predicate, object]
                    plus optional [datatype, object_type].
        window_column: column that assigns triples to windows.
        verbose: print progress.

    Returns:
        DataFrame: one row per window, window column first, then the
        five Signature metrics.
    """
    has_windows = window_column in triples_df.columns
    if has_windows:
        windows = sorted(triples_df[window_column].drop_nulls().unique().to_list())
    else:
        # Whole table is a single window
        windows = [None]

    if verbose:
        print(f"Building signature frame: {len(windows)} windows")

    rows: List[dict] = []
    for i, window_id in enumerate(windows):
        window_df = (
            triples_df.filter(pl.col(window_column) == window_id)
            if has_windows else triples_df
        )
        signature = extract_signature(frame_to_triples(window_df))
        rows.append({window_column: window_id, **signature.to_dict()})
        if verbose and (i + 1) % 100 == 0:
            print(f"  {i + 1}/{len(windows)} windows processed")

    schema = {
        window_column: triples_df.schema.get(window_column, pl.Utf8),
        'triple_count': pl.Int64,
        **{m: pl.Float64 for m in SIGNATURE_METRICS if m != 'triple_count'},
    }
    result = pl.DataFrame(rows, schema=schema)

    if verbose:
        print(f"Signature frame: {result.height} windows × {len(SIGNATURE_METRICS)} metrics")

    return result
