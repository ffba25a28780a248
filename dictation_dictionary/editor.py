"""Add single rules to stored dictionary text, as an "add to dictionary" dialog does."""

from __future__ import annotations

import logging
import re

from dictation_dictionary.config import ARROW_TOKENS
from dictation_dictionary.parser import parse_rules, split_patterns
from dictation_dictionary.rules import ProtectRule, ReplaceRule, consolidate_replace_rules
from dictation_dictionary.rules_text import join_rules

logger = logging.getLogger(__name__)


class DictionaryEditError(Exception):
    """Raised when a rule cannot be added to the dictionary."""


def normalize_one_line(value: str) -> str:
    """Collapse line breaks to spaces and trim."""

    return re.sub(r"\r?\n", " ", value).strip()


def _read_patterns(from_text: str) -> list[str]:
    patterns = split_patterns(normalize_one_line(from_text))
    if not patterns:
        raise DictionaryEditError("from is empty")
    for pattern in patterns:
        if any(token in pattern for token in ARROW_TOKENS):
            raise DictionaryEditError(f'pattern "{pattern}" contains an arrow token')
    return list(dict.fromkeys(patterns))


def _load_rules(rules_text: str) -> tuple[list[ReplaceRule], list[ProtectRule]]:
    rules, errors = parse_rules(rules_text)
    if errors:
        raise DictionaryEditError(f"existing rules are invalid: {errors[0]}")
    replace_rules = [rule for rule in rules if isinstance(rule, ReplaceRule)]
    protect_rules = [rule for rule in rules if isinstance(rule, ProtectRule)]
    return replace_rules, protect_rules


def add_replace_rule(rules_text: str, from_text: str, to: str) -> str:
    """Return ``rules_text`` with ``from_text -> to`` added.

    The new patterns are taken out of any existing replace rule, the new rule
    goes first, and replace rules sharing a target are merged.

    Raises:
        DictionaryEditError: If the input is empty or malformed, the existing
            text does not parse, or a pattern is protected or already mapped
            to a different target
    """
    to = normalize_one_line(to)
    if not normalize_one_line(from_text):
        raise DictionaryEditError("from is empty")
    if not to:
        raise DictionaryEditError("to is empty")
    patterns = _read_patterns(from_text)

    replace_rules, protect_rules = _load_rules(rules_text)

    protected = {pattern for rule in protect_rules for pattern in rule.patterns}
    for pattern in patterns:
        if pattern in protected:
            raise DictionaryEditError(f'pattern "{pattern}" is protected')

    existing: dict[str, str] = {}
    for rule in replace_rules:
        for pattern in rule.patterns:
            existing.setdefault(pattern, rule.replacement)
    for pattern in patterns:
        existing_to = existing.get(pattern)
        if existing_to and existing_to != to:
            raise DictionaryEditError(f'pattern "{pattern}" is already mapped to "{existing_to}"')

    removed = set(patterns)
    remaining = [
        ReplaceRule(patterns=[p for p in rule.patterns if p not in removed], replacement=rule.replacement)
        for rule in replace_rules
    ]
    next_rules = [ReplaceRule(patterns=patterns, replacement=to)]
    next_rules.extend(rule for rule in remaining if rule.patterns)

    logger.info(f"Adding dictionary rule: {' | '.join(patterns)} -> {to}")
    return join_rules(consolidate_replace_rules(next_rules), protect_rules)


def add_protect_rule(rules_text: str, from_text: str) -> str:
    """Return ``rules_text`` with a protect rule for ``from_text`` added first.

    Raises:
        DictionaryEditError: If the input is empty or malformed, the existing
            text does not parse, or a pattern is already protected
    """
    patterns = _read_patterns(from_text)
    replace_rules, protect_rules = _load_rules(rules_text)

    protected = {pattern for rule in protect_rules for pattern in rule.patterns}
    for pattern in patterns:
        if pattern in protected:
            raise DictionaryEditError(f'pattern "{pattern}" is protected')

    next_rules = [ProtectRule(patterns=patterns)]
    next_rules.extend(rule for rule in protect_rules if rule.patterns)

    logger.info(f"Protecting dictionary patterns: {' | '.join(patterns)}")
    return join_rules(replace_rules, next_rules)
