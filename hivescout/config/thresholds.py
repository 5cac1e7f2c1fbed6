"""
HiveScout Selection Thresholds
==============================

Centralized configuration for signature extraction and approach
selection.

Principle: Thresholds are supplied, never learned. Adjusting a rule's
bounds changes which windows it claims without recomputing signatures.

Usage:
    from hivescout.config.thresholds import (
        DEFAULT_APPROACH,
        SPECIFICITY_TOLERANCE,
        APPROACH_PRESETS,
        get_preset,
    )

Modification:
    Tighter bounds = more specific rule = wins ranking over broad rules.
    Priority only decides between rules of near-equal specificity.
"""

# =============================================================================
# SIGNATURE EXTRACTION
# =============================================================================
# Used in: hivescout/signature/extractor.py
# Purpose: Which literal datatypes are parsed for numeric values.
# A datatype IRI containing any of these substrings is a parse candidate.
# Untyped literals are always candidates.

NUMERIC_DATATYPE_MARKERS = ('integer', 'decimal', 'double', 'float', 'string')


# =============================================================================
# APPROACH SELECTION
# =============================================================================
# Used in: hivescout/selector/selector.py

# Recommended approach name when no rule matches
DEFAULT_APPROACH = 'default'

# Specificity gap below which priority decides the ranking
SPECIFICITY_TOLERANCE = 0.01

# Upper bound of the reported confidence
MAX_CONFIDENCE = 1.0


# =============================================================================
# RULE PRESETS
# =============================================================================
# Ready-made rule tables. Same shape as a rule file entry.

APPROACH_PRESETS = {
    'default': [
        {
            'name': 'high-variance-approach',
            'description': 'For data with high variance and entropy',
            'min_thresholds': {'variance': 50, 'entropy': 1.0},
            'priority': 3,
        },
        {
            'name': 'low-complexity-approach',
            'description': 'For simple, low-entropy data',
            'max_thresholds': {'variance': 10, 'entropy': 0.5, 'fft_entropy': 2.0},
            'priority': 2,
        },
        {
            'name': 'periodic-pattern-approach',
            'description': 'For periodic data patterns',
            'min_thresholds': {'fft_entropy': 0.5},
            'max_thresholds': {'fft_entropy': 2.5, 'variance': 20},
            'priority': 4,
        },
        {
            'name': 'large-dataset-approach',
            'description': 'For large datasets',
            'min_thresholds': {'triple_count': 100},
            'priority': 1,
        },
    ],

    # Broad high-priority rule vs. narrow low-priority rule
    'specificity': [
        {
            'name': 'very-broad',
            'max_thresholds': {'variance': 1000, 'entropy': 100},
            'priority': 10,
        },
        {
            'name': 'very-specific',
            'max_thresholds': {'variance': 1, 'entropy': 0.1},
            'priority': 1,
        },
    ],
}


# =============================================================================
# HELPER FUNCTIONS
# =============================================================================

def get_preset(name: str = 'default') -> list:
    """Fresh RuleConfig objects for a named preset."""
    from hivescout.errors import RuleConfigError
    from hivescout.selector.rules import RuleConfig

    if name not in APPROACH_PRESETS:
        raise RuleConfigError(
            f"Unknown preset '{name}'. Available: {', '.join(sorted(APPROACH_PRESETS))}"
        )
    return [RuleConfig.from_dict(entry) for entry in APPROACH_PRESETS[name]]


def list_presets() -> list:
    return sorted(APPROACH_PRESETS)
