"""HiveScout core types."""

from hivescout.core.types import (
    SIGNATURE_METRICS,
    Signature,
    Term,
    TermType,
    Triple,
    blank_node,
    literal,
    named_node,
    triple,
)

__all__ = [
    'SIGNATURE_METRICS',
    'Signature',
    'Term',
    'TermType',
    'Triple',
    'blank_node',
    'literal',
    'named_node',
    'triple',
]
