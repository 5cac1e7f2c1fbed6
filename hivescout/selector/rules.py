"""
Approach Rule Configuration

A rule names a processing approach and the signature region it claims:

    min_thresholds: metric >= bound for every entry
    max_thresholds: metric <= bound for every entry
    priority:       tiebreaker between rules of near-equal specificity

Serialized schema (YAML / JSON rule files):

    name: periodic-pattern-approach
    description: For periodic data patterns
    minThresholds: {fftEntropy: 0.5}
    maxThresholds: {fftEntropy: 2.5, variance: 20}
    priority: 4

Metric keys accept both camelCase (fftEntropy, tripleCount) and
snake_case (fft_entropy, triple_count).
"""

import math
import numbers
from dataclasses import dataclass, field
from typing import Any, Dict, Iterator, Mapping, Optional, Tuple

from hivescout.errors import RuleConfigError


# Threshold evaluation order
THRESHOLD_METRICS = ('variance', 'skewness', 'entropy', 'fft_entropy', 'triple_count')

METRIC_ALIASES = {
    'variance': 'variance',
    'skewness': 'skewness',
    'entropy': 'entropy',
    'fft_entropy': 'fft_entropy',
    'fftEntropy': 'fft_entropy',
    'triple_count': 'triple_count',
    'tripleCount': 'triple_count',
}

SCHEMA_METRIC_NAMES = {
    'variance': 'variance',
    'skewness': 'skewness',
    'entropy': 'entropy',
    'fft_entropy': 'fftEntropy',
    'triple_count': 'tripleCount',
}


def _normalize_thresholds(rule_name: str, kind: str, raw: Optional[Mapping]) -> Dict[str, float]:
    if raw is None:
        return {}
    if not isinstance(raw, Mapping):
        raise RuleConfigError(f"Rule '{rule_name}': {kind} must be a mapping of metric -> bound")

    result = {}
    for key, bound in raw.items():
        metric = METRIC_ALIASES.get(key)
        if metric is None:
            raise RuleConfigError(
                f"Rule '{rule_name}': unknown metric '{key}' in {kind}. "
                f"Expected one of: {', '.join(THRESHOLD_METRICS)}"
            )
        if bound is None:
            continue
        if isinstance(bound, bool) or not isinstance(bound, numbers.Real):
            raise RuleConfigError(f"Rule '{rule_name}': {kind}.{key} must be a number")
        if not math.isfinite(bound):
            raise RuleConfigError(f"Rule '{rule_name}': {kind}.{key} must be finite")
        result[metric] = float(bound)
    return result


@dataclass
class RuleConfig:
    """One named approach and the thresholds that select it."""
    name: str
    description: Optional[str] = None
    min_thresholds: Dict[str, float] = field(default_factory=dict)
    max_thresholds: Dict[str, float] = field(default_factory=dict)
    priority: int = 0

    def __post_init__(self):
        if not isinstance(self.name, str) or not self.name.strip():
            raise RuleConfigError("Rule name must be a non-empty string")
        self.min_thresholds = _normalize_thresholds(self.name, 'min_thresholds', self.min_thresholds)
        self.max_thresholds = _normalize_thresholds(self.name, 'max_thresholds', self.max_thresholds)
        if self.priority is None:
            self.priority = 0
        if isinstance(self.priority, bool) or not isinstance(self.priority, numbers.Integral):
            raise RuleConfigError(f"Rule '{self.name}': priority must be an integer")
        self.priority = int(self.priority)

    @property
    def criteria_count(self) -> int:
        """Number of declared thresholds, min and max combined."""
        return len(self.min_thresholds) + len(self.max_thresholds)

    def iter_min(self) -> Iterator[Tuple[str, float]]:
        for metric in THRESHOLD_METRICS:
            if metric in self.min_thresholds:
                yield metric, self.min_thresholds[metric]

    def iter_max(self) -> Iterator[Tuple[str, float]]:
        for metric in THRESHOLD_METRICS:
            if metric in self.max_thresholds:
                yield metric, self.max_thresholds[metric]

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> 'RuleConfig':
        """Build from a rule-file entry (camelCase or snake_case keys)."""
        if not isinstance(data, Mapping):
            raise RuleConfigError("Rule entry must be a mapping")
        if 'name' not in data:
            raise RuleConfigError("Rule entry is missing 'name'")

        known = {'name', 'description', 'priority',
                 'minThresholds', 'min_thresholds', 'maxThresholds', 'max_thresholds'}
        unknown = set(data) - known
        if unknown:
            raise RuleConfigError(
                f"Rule '{data['name']}': unknown field(s) {', '.join(sorted(unknown))}"
            )

        return cls(
            name=data['name'],
            description=data.get('description'),
            min_thresholds=data.get('minThresholds', data.get('min_thresholds')),
            max_thresholds=data.get('maxThresholds', data.get('max_thresholds')),
            priority=data.get('priority', 0),
        )

    def to_dict(self) -> dict:
        """Rule-file entry in the camelCase schema. Empty fields are omitted."""
        d = {'name': self.name}
        if self.description is not None:
            d['description'] = self.description
        if self.min_thresholds:
            d['minThresholds'] = {SCHEMA_METRIC_NAMES[m]: t for m, t in self.iter_min()}
        if self.max_thresholds:
            d['maxThresholds'] = {SCHEMA_METRIC_NAMES[m]: t for m, t in self.iter_max()}
        d['priority'] = self.priority
        return d
