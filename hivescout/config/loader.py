"""
HiveScout Rule Files

Reads and writes approach rule tables as YAML or JSON.

Accepted layouts:

    # list of rules
    - name: low-complexity-approach
      maxThresholds: {variance: 10, entropy: 0.5}

    # mapping with an 'approaches' list
    approaches:
      - name: low-complexity-approach
        ...

Usage:
    from hivescout.config.loader import load_rules, dump_rules

    rules = load_rules("rules.yaml")
    dump_rules(rules, "rules.json")
"""

import json
import logging
from pathlib import Path
from typing import Iterable, List, Union

import yaml

from hivescout.errors import RuleConfigError
from hivescout.selector.rules import RuleConfig


logger = logging.getLogger(__name__)


JSON_SUFFIXES = {'.json'}


def _read_document(path: Path):
    suffix = path.suffix.lower()
    with open(path) as f:
        if suffix in JSON_SUFFIXES:
            return json.load(f)
        return yaml.safe_load(f)


def parse_rules(document) -> List[RuleConfig]:
    """RuleConfigs from an already-parsed YAML/JSON document."""
    if document is None:
        return []
    if isinstance(document, dict):
        if 'approaches' not in document:
            raise RuleConfigError("Rule document must be a list or contain an 'approaches' list")
        document = document['approaches'] or []
    if not isinstance(document, list):
        raise RuleConfigError("Rule document 'approaches' must be a list")

    rules = [RuleConfig.from_dict(entry) for entry in document]

    names = [r.name for r in rules]
    duplicates = sorted({n for n in names if names.count(n) > 1})
    if duplicates:
        # Later entries replace earlier ones when registered
        logger.warning(f"Duplicate rule name(s), last entry wins: {', '.join(duplicates)}")

    return rules


def load_rules(path: Union[str, Path]) -> List[RuleConfig]:
    """Load approach rules from a .yaml/.yml or .json file."""
    path = Path(path)
    if not path.exists():
        raise RuleConfigError(f"Rule file not found: {path}")

    try:
        document = _read_document(path)
    except (yaml.YAMLError, json.JSONDecodeError) as e:
        raise RuleConfigError(f"Rule file {path.name} is not valid YAML/JSON", e) from e

    return parse_rules(document)


def dump_rules(rules: Iterable[RuleConfig], path: Union[str, Path]) -> Path:
    """Write rules in the camelCase schema. Format follows the suffix."""
    path = Path(path)
    document = {'approaches': [r.to_dict() for r in rules]}

    with open(path, 'w') as f:
        if path.suffix.lower() in JSON_SUFFIXES:
            json.dump(document, f, indent=2)
        else:
            yaml.safe_dump(document, f, sort_keys=False)

    return path
