"""
HiveScout Selector - Approach Rules & Specificity Ranking

Usage:
    from hivescout.selector import ApproachSelector, RuleConfig

    selector = ApproachSelector([
        RuleConfig('low-complexity', max_thresholds={'variance': 10}),
    ])
    recommendation = selector.choose_approach(window)
"""

from hivescout.selector.rules import RuleConfig, THRESHOLD_METRICS
from hivescout.selector.scoring import RuleMatch, evaluate_rule, rule_specificity
from hivescout.selector.selector import (
    ApproachEvaluation,
    ApproachSelector,
    Recommendation,
    rank_evaluations,
)

__all__ = [
    'RuleConfig',
    'THRESHOLD_METRICS',
    'RuleMatch',
    'evaluate_rule',
    'rule_specificity',
    'ApproachEvaluation',
    'ApproachSelector',
    'Recommendation',
    'rank_evaluations',
]
