"""Whole-document operations on stored dictionary text."""

from __future__ import annotations

from dictation_dictionary.parser import parse_rules
from dictation_dictionary.rules import (
    ProtectRule,
    ReplaceRule,
    Rule,
    consolidate_replace_rules,
    split_rules,
)
from dictation_dictionary.serializer import serialize_rules
from dictation_dictionary.validation import validate_rules


class DictionaryRulesError(Exception):
    """Raised when dictionary text does not parse or validate."""

    def __init__(self, errors: list[str]):
        self.errors = list(errors)
        super().__init__(self.errors[0] if self.errors else "invalid dictionary rules")


def check_rules_text(text: str) -> list[Rule]:
    """Parse and validate dictionary text.

    Returns:
        The parsed rules

    Raises:
        DictionaryRulesError: With every syntax error if any line is malformed,
            otherwise with every validation error
    """
    rules, errors = parse_rules(text)
    if errors:
        raise DictionaryRulesError(errors)

    result = validate_rules(rules)
    if not result.ok:
        raise DictionaryRulesError(result.errors)
    return rules


def join_rules(replace_rules: list[ReplaceRule], protect_rules: list[ProtectRule]) -> str:
    """Serialize replace rules first, then protect rules."""

    return serialize_rules([*replace_rules, *protect_rules])


def format_rules_text(text: str) -> str:
    """Rewrite dictionary text with replace rules merged by target.

    Raises:
        DictionaryRulesError: If the text has syntax errors
    """
    rules, errors = parse_rules(text)
    if errors:
        raise DictionaryRulesError(errors)

    _, replace_rules = split_rules(rules)
    protect_rules = [rule for rule in rules if isinstance(rule, ProtectRule)]
    return join_rules(consolidate_replace_rules(replace_rules), protect_rules)
