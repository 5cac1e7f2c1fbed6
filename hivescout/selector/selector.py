"""
HiveScout Approach Selector - Route a Window to a Processing Approach

Examines a window's signature against every registered rule to decide:
1. Which rules match (all declared thresholds satisfied)
2. Which matching rule is most specific
3. How confident the recommendation is

Ranking:
    specificity descending; when two rules are within
    SPECIFICITY_TOLERANCE of each other, priority descending.
    Stable, so equal rules keep registry order.
"""

import logging
from dataclasses import dataclass, field
from functools import cmp_to_key
from pathlib import Path
from typing import Iterable, List, Optional, Tuple, Union

from hivescout.config.thresholds import DEFAULT_APPROACH, MAX_CONFIDENCE, SPECIFICITY_TOLERANCE
from hivescout.core.types import Signature
from hivescout.selector.rules import RuleConfig
from hivescout.selector.scoring import evaluate_rule, rule_specificity
from hivescout.signature.extractor import extract_signature


logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class ApproachEvaluation:
    """Ranking inputs for one matching rule."""
    name: str
    score: float
    specificity: float
    priority: int

    def to_dict(self) -> dict:
        return {
            'name': self.name,
            'score': self.score,
            'specificity': self.specificity,
            'priority': self.priority,
        }


@dataclass(frozen=True)
class Recommendation:
    """
    Result of approach selection for one window.

    matching_approaches follows registry order; evaluations follows
    ranking order (best first).
    """
    recommended_approach: str
    matching_approaches: Tuple[str, ...]
    signature: Signature
    confidence: float
    evaluations: Tuple[ApproachEvaluation, ...] = field(default=())

    @property
    def is_default(self) -> bool:
        return not self.matching_approaches

    def to_dict(self) -> dict:
        """Flat dictionary for JSON output."""
        return {
            'recommended_approach': self.recommended_approach,
            'matching_approaches': list(self.matching_approaches),
            'signature': self.signature.to_dict(),
            'confidence': self.confidence,
            'evaluations': [e.to_dict() for e in self.evaluations],
        }


def _compare(a: ApproachEvaluation, b: ApproachEvaluation) -> int:
    if abs(a.specificity - b.specificity) > SPECIFICITY_TOLERANCE:
        return -1 if a.specificity > b.specificity else 1
    return b.priority - a.priority


def rank_evaluations(evaluations: Iterable[ApproachEvaluation]) -> List[ApproachEvaluation]:
    """Best first: specificity, then priority inside the tolerance band."""
    return sorted(evaluations, key=cmp_to_key(_compare))


class ApproachSelector:
    """
    Registry of approach rules plus the selection algorithm.

    The registry is an insertion-ordered dict keyed by rule name.
    It has no locking; serialize add/remove with choose calls when
    sharing a selector across threads.
    """

    def __init__(self, approaches: Iterable[RuleConfig] = ()):
        self._approaches = {}
        for config in approaches:
            self.add_approach(config)

    @classmethod
    def from_file(cls, path: Union[str, Path]) -> 'ApproachSelector':
        """Selector populated from a YAML or JSON rule file."""
        from hivescout.config.loader import load_rules
        return cls(load_rules(path))

    # ------------------------------------------------------------------
    # Registry
    # ------------------------------------------------------------------

    def add_approach(self, config: RuleConfig) -> None:
        """Insert or replace a rule. Replacing keeps the original position."""
        if config.name in self._approaches:
            logger.debug(f"Replacing approach {config.name}")
        self._approaches[config.name] = config

    def remove_approach(self, name: str) -> bool:
        """Remove a rule. False if it was not registered."""
        return self._approaches.pop(name, None) is not None

    def list_approach_names(self) -> List[str]:
        return list(self._approaches)

    def get_approach(self, name: str) -> Optional[RuleConfig]:
        return self._approaches.get(name)

    def __len__(self) -> int:
        return len(self._approaches)

    def __contains__(self, name: object) -> bool:
        return name in self._approaches

    # ------------------------------------------------------------------
    # Selection
    # ------------------------------------------------------------------

    def choose_approach(self, window: Iterable) -> Recommendation:
        """Extract the window's signature and recommend an approach."""
        return self.choose_for_signature(extract_signature(window))

    def choose_for_signature(self, signature: Signature) -> Recommendation:
        """Recommend an approach for a precomputed signature."""
        matching = []
        evaluations = []

        for name, config in self._approaches.items():
            result = evaluate_rule(signature, config)
            if not result.matches:
                logger.debug(f"Approach {name}: no match (score={result.score:.3f})")
                continue

            specificity = rule_specificity(signature, config)
            logger.debug(
                f"Approach {name}: match (score={result.score:.3f}, "
                f"specificity={specificity:.3f}, priority={config.priority})"
            )
            matching.append(name)
            evaluations.append(ApproachEvaluation(
                name=name,
                score=result.score,
                specificity=specificity,
                priority=config.priority,
            ))

        if not evaluations:
            logger.info(f"No approach matched; using {DEFAULT_APPROACH}")
            return Recommendation(
                recommended_approach=DEFAULT_APPROACH,
                matching_approaches=(),
                signature=signature,
                confidence=0.0,
            )

        ranked = rank_evaluations(evaluations)
        best = ranked[0]
        confidence = min(best.score, MAX_CONFIDENCE)
        logger.info(
            f"Recommended {best.name} ({len(matching)} matching, confidence={confidence:.2f})"
        )

        return Recommendation(
            recommended_approach=best.name,
            matching_approaches=tuple(matching),
            signature=signature,
            confidence=confidence,
            evaluations=tuple(ranked),
        )
