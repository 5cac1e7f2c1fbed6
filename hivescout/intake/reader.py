"""
HiveScout Intake Reader - Triple Windows from Tables

Reads CSV, TSV and Parquet triple tables into Triple records.

Table layout (one row per triple):

    subject      required   subject IRI / blank node label
    predicate    required   predicate IRI
    object       required   object IRI, blank node label, or literal text
    datatype     optional   literal datatype IRI (null for untyped/IRIs)
    object_type  optional   'literal' | 'iri' | 'bnode'
    window_id    optional   groups rows into windows for batch signatures

Without object_type, an object is a literal when it has a datatype or
does not look like an IRI / blank node label.

The triple encoding itself is not parsed here; the table is already
one term per cell.
"""

from pathlib import Path
from typing import List, Optional, Union

import polars as pl

from hivescout.core.types import Term, TermType, Triple
from hivescout.errors import IntakeError


REQUIRED_COLUMNS = ('subject', 'predicate', 'object')

IRI_PREFIXES = ('http://', 'https://', 'urn:', 'mailto:', 'file:')
BLANK_NODE_PREFIX = '_:'

OBJECT_TYPES = {t.value: t for t in TermType}


def _read_file(path: Path) -> pl.DataFrame:
    """Read file based on extension."""
    suffix = path.suffix.lower()

    if suffix == '.parquet':
        return pl.read_parquet(path)
    elif suffix in ('.tsv', '.txt'):
        return pl.read_csv(path, separator='\t', infer_schema_length=0)
    else:
        # Try CSV as default; all columns as strings so literal text survives
        return pl.read_csv(path, infer_schema_length=0)


def _node(value: Optional[str]) -> Term:
    text = '' if value is None else str(value)
    if text.startswith(BLANK_NODE_PREFIX):
        return Term(text, TermType.BLANK_NODE)
    return Term(text, TermType.NAMED_NODE)


def _object_term(value: Optional[str], datatype: Optional[str], object_type: Optional[str]) -> Term:
    text = '' if value is None else str(value)

    if object_type:
        term_type = OBJECT_TYPES.get(object_type.strip().lower())
        if term_type is None:
            raise IntakeError(
                f"Unknown object_type '{object_type}'. "
                f"Expected one of: {', '.join(OBJECT_TYPES)}"
            )
    elif datatype:
        term_type = TermType.LITERAL
    elif text.startswith(BLANK_NODE_PREFIX):
        term_type = TermType.BLANK_NODE
    elif text.startswith(IRI_PREFIXES):
        term_type = TermType.NAMED_NODE
    else:
        term_type = TermType.LITERAL

    if term_type is TermType.LITERAL:
        return Term(text, TermType.LITERAL, datatype or None)
    return Term(text, term_type)


def validate_frame(df: pl.DataFrame) -> pl.DataFrame:
    """Check required columns and cast term columns to strings."""
    missing = [c for c in REQUIRED_COLUMNS if c not in df.columns]
    if missing:
        raise IntakeError(f"Triple table is missing column(s): {', '.join(missing)}")

    term_columns = [c for c in ('subject', 'predicate', 'object', 'datatype', 'object_type')
                    if c in df.columns]
    return df.with_columns([pl.col(c).cast(pl.Utf8) for c in term_columns])


def frame_to_triples(df: pl.DataFrame) -> List[Triple]:
    """Triple records from a triple table, in row order."""
    df = validate_frame(df)
    has_datatype = 'datatype' in df.columns
    has_object_type = 'object_type' in df.columns

    triples = []
    for row in df.iter_rows(named=True):
        triples.append(Triple(
            subject=_node(row['subject']),
            predicate=_node(row['predicate']),
            object=_object_term(
                row['object'],
                row['datatype'] if has_datatype else None,
                row['object_type'] if has_object_type else None,
            ),
        ))
    return triples


def read_frame(source: Union[str, Path, pl.DataFrame]) -> pl.DataFrame:
    """Load and validate a triple table from a file or DataFrame."""
    if isinstance(source, pl.DataFrame):
        return validate_frame(source)

    path = Path(source)
    if not path.exists():
        raise IntakeError(f"Window file not found: {path}")

    try:
        df = _read_file(path)
    except (pl.exceptions.ComputeError, pl.exceptions.NoDataError, OSError) as e:
        raise IntakeError(f"Could not read window file {path.name}", e) from e

    return validate_frame(df)


def read_window(source: Union[str, Path, pl.DataFrame]) -> List[Triple]:
    """All rows of a triple table as one window."""
    return frame_to_triples(read_frame(source))
