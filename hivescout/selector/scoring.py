"""
Rule Scoring - Match, Match Score, Specificity

Three numbers per (signature, rule) pair:

    matches      every declared threshold satisfied
    score        mean per-threshold fit in [0, 1]; 1.0 when satisfied,
                 value/t (min) or t/value (max) when violated
    specificity  how tightly the rule's thresholds wrap the signature

Specificity (higher = narrower rule):

    min threshold t:  t / (value + 1)   if value > 0
                      t                 otherwise
    max threshold t:  1 / (t + 1)       (inf when t == -1)

    averaged over all declared thresholds, 0 when none are declared.

The min/max asymmetry is part of the ranking contract; rankings
depend on its exact shape.
"""

import logging
import math
from dataclasses import dataclass

from hivescout.core.types import Signature
from hivescout.selector.rules import RuleConfig


logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class RuleMatch:
    """Outcome of evaluating one rule against one signature."""
    matches: bool
    score: float


def _min_fit(value: float, threshold: float) -> float:
    if value >= threshold:
        return 1.0
    if threshold == 0:
        return 0.0
    return max(0.0, value / threshold)


def _max_fit(value: float, threshold: float) -> float:
    if value <= threshold:
        return 1.0
    if value == 0:
        return 0.0
    return max(0.0, threshold / value)


def evaluate_rule(signature: Signature, config: RuleConfig) -> RuleMatch:
    """
    Check every declared threshold of a rule against a signature.

    A rule with no thresholds matches everything with score 0.

    Returns:
        RuleMatch(matches, score)
    """
    matches = True
    total = 0.0

    for metric, threshold in config.iter_min():
        value = signature.metric(metric)
        if value < threshold:
            matches = False
        total += _min_fit(value, threshold)

    for metric, threshold in config.iter_max():
        value = signature.metric(metric)
        if value > threshold:
            matches = False
        total += _max_fit(value, threshold)

    count = config.criteria_count
    score = total / count if count > 0 else 0.0
    return RuleMatch(matches=matches, score=score)


def rule_specificity(signature: Signature, config: RuleConfig) -> float:
    """How narrowly a rule's thresholds wrap the signature."""
    total = 0.0

    for metric, threshold in config.iter_min():
        value = signature.metric(metric)
        if value > 0:
            total += threshold / (value + 1)
        else:
            total += threshold

    for metric, threshold in config.iter_max():
        if threshold == -1:
            # 1 / (t + 1) diverges; the rule outranks every finite one
            logger.debug(f"Rule {config.name}: max {metric} of -1 gives infinite specificity")
            total += math.inf
            continue
        total += 1 / (threshold + 1)

    count = config.criteria_count
    return total / count if count > 0 else 0.0
