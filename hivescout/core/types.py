"""
Core value types: RDF-style terms, triples, and the window Signature.
"""

from dataclasses import dataclass, fields
from enum import Enum
from typing import Optional

import numpy as np


class TermType(Enum):
    """Kind of term in a triple position."""
    NAMED_NODE = "iri"
    BLANK_NODE = "bnode"
    LITERAL = "literal"


@dataclass(frozen=True)
class Term:
    """
    A single triple term.

    Literals carry their lexical text in `value` and an optional
    datatype IRI. Named and blank nodes only use `value`.
    """
    value: str
    term_type: TermType = TermType.NAMED_NODE
    datatype: Optional[str] = None

    @property
    def is_literal(self) -> bool:
        return self.term_type is TermType.LITERAL


@dataclass(frozen=True)
class Triple:
    """Subject-predicate-object record. Hashable, so windows may be sets."""
    subject: Term
    predicate: Term
    object: Term


def named_node(value: str) -> Term:
    return Term(value, TermType.NAMED_NODE)


def blank_node(value: str) -> Term:
    return Term(value, TermType.BLANK_NODE)


def literal(value, datatype: Optional[str] = None) -> Term:
    return Term(str(value), TermType.LITERAL, datatype)


def triple(subject, predicate, obj) -> Triple:
    """Build a Triple. Plain strings become named nodes."""
    if isinstance(subject, str):
        subject = named_node(subject)
    if isinstance(predicate, str):
        predicate = named_node(predicate)
    if isinstance(obj, str):
        obj = named_node(obj)
    return Triple(subject, predicate, obj)


# Metric field names, in Signature order
SIGNATURE_METRICS = ('triple_count', 'variance', 'skewness', 'entropy', 'fft_entropy')


@dataclass(frozen=True)
class Signature:
    """
    Statistical fingerprint of one window.

    All fields default to 0 when there is not enough data to compute
    them. Instances are immutable and compare by value.
    """
    triple_count: int = 0
    variance: float = 0.0
    skewness: float = 0.0
    entropy: float = 0.0
    fft_entropy: float = 0.0

    def metric(self, name: str) -> float:
        """Value of a metric by field name."""
        return getattr(self, name)

    def to_dict(self) -> dict:
        """Flat dictionary for parquet/JSON."""
        return {f.name: getattr(self, f.name) for f in fields(self)}

    def as_array(self) -> np.ndarray:
        """Metrics as a float vector in SIGNATURE_METRICS order."""
        return np.array([float(getattr(self, m)) for m in SIGNATURE_METRICS])

    @property
    def is_empty(self) -> bool:
        return self.triple_count == 0
