"""Dictionary rule types and helpers shared by the parser, validator and applier."""

from __future__ import annotations

from collections.abc import Iterable
from dataclasses import dataclass, field
from typing import ClassVar, Literal, NamedTuple, Union

RuleType = Literal["replace", "protect"]


@dataclass
class ReplaceRule:
    """Replace every occurrence of any pattern with ``replacement``."""

    patterns: list[str] = field(default_factory=list)
    replacement: str = ""
    type: ClassVar[RuleType] = "replace"

    def to_dict(self) -> dict:
        """Serialize the rule to a JSON-friendly dict."""

        return {"type": self.type, "from": list(self.patterns), "to": self.replacement}


@dataclass
class ProtectRule:
    """Keep every occurrence of any pattern untouched by replacements."""

    patterns: list[str] = field(default_factory=list)
    type: ClassVar[RuleType] = "protect"

    def to_dict(self) -> dict:
        """Serialize the rule to a JSON-friendly dict."""

        return {"type": self.type, "from": list(self.patterns)}


Rule = Union[ReplaceRule, ProtectRule]


class ParseResult(NamedTuple):
    """Rules parsed from text plus one message per malformed line."""

    rules: list[Rule]
    errors: list[str]


def rule_from_dict(data: dict) -> Rule:
    """Create a rule from its ``to_dict`` representation."""

    patterns = [str(p) for p in data.get("from", []) or []]
    if data.get("type") == "protect":
        return ProtectRule(patterns=patterns)
    return ReplaceRule(patterns=patterns, replacement=str(data.get("to", "")))


def split_rules(rules: Iterable[Rule]) -> tuple[list[str], list[ReplaceRule]]:
    """Partition rules into flattened protect patterns and replace rules, keeping order."""

    protect_patterns: list[str] = []
    replace_rules: list[ReplaceRule] = []
    for rule in rules:
        if isinstance(rule, ProtectRule):
            protect_patterns.extend(rule.patterns)
        elif isinstance(rule, ReplaceRule):
            replace_rules.append(rule)
    return protect_patterns, replace_rules


def consolidate_replace_rules(rules: Iterable[ReplaceRule]) -> list[ReplaceRule]:
    """Merge replace rules that share a replacement target.

    Targets keep the order in which they were first seen, and each merged
    rule lists its patterns deduplicated in first-seen order. Rules with a
    blank target are dropped.
    """

    groups: dict[str, list[str]] = {}
    for rule in rules:
        replacement = rule.replacement.strip()
        if not replacement:
            continue
        patterns = groups.setdefault(replacement, [])
        for pattern in rule.patterns:
            cleaned = pattern.strip()
            if cleaned and cleaned not in patterns:
                patterns.append(cleaned)

    return [ReplaceRule(patterns=patterns, replacement=to) for to, patterns in groups.items()]
