"""Render rules back into the canonical dictionary text format."""

from __future__ import annotations

from collections.abc import Iterable

from dictation_dictionary.config import (
    PROTECT_PREFIX,
    SERIALIZED_ARROW,
    SERIALIZED_PATTERN_SEPARATOR,
)
from dictation_dictionary.rules import ProtectRule, Rule


def serialize_rule(rule: Rule) -> str:
    """Render one rule as a line, or an empty string when nothing would remain."""

    patterns = [p.strip() for p in rule.patterns if p.strip()]
    if not patterns:
        return ""
    joined = SERIALIZED_PATTERN_SEPARATOR.join(patterns)
    if isinstance(rule, ProtectRule):
        return f"{PROTECT_PREFIX}: {joined}"

    replacement = rule.replacement.strip()
    if not replacement:
        return ""
    return f"{joined}{SERIALIZED_ARROW}{replacement}"


def serialize_rules(rules: Iterable[Rule]) -> str:
    """Render rules one per line; rules that would be empty are dropped."""

    return "\n".join(line for line in map(serialize_rule, rules) if line)
