"""
HiveScout - Stream Window Signatures & Approach Selection

Fingerprints a window of subject-predicate-object triples and
recommends which processing approach should handle it.

Usage:
    from hivescout import ApproachSelector, RuleConfig, extract_signature

    signature = extract_signature(window)

    selector = ApproachSelector([
        RuleConfig('low-complexity', max_thresholds={'variance': 10, 'entropy': 0.5}),
        RuleConfig('large-dataset', min_thresholds={'triple_count': 100}),
    ])
    recommendation = selector.choose_approach(window)
    recommendation.recommended_approach   # 'low-complexity' or 'default'
"""

__version__ = "0.1.0"

from hivescout.core.types import Signature, Term, TermType, Triple, literal, named_node, triple
from hivescout.errors import HiveScoutError, IntakeError, RuleConfigError
from hivescout.selector import ApproachSelector, Recommendation, RuleConfig
from hivescout.signature import SignatureExtractor, extract_signature

__all__ = [
    "__version__",
    "ApproachSelector",
    "HiveScoutError",
    "IntakeError",
    "Recommendation",
    "RuleConfig",
    "RuleConfigError",
    "Signature",
    "SignatureExtractor",
    "Term",
    "TermType",
    "Triple",
    "extract_signature",
    "literal",
    "named_node",
    "triple",
]
