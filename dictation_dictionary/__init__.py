"""Dictation Dictionary - custom replace/protect rules for dictated transcripts."""

from dictation_dictionary.applier import apply_rules
from dictation_dictionary.parser import parse_rules
from dictation_dictionary.rules import (
    ParseResult,
    ProtectRule,
    ReplaceRule,
    Rule,
    consolidate_replace_rules,
)
from dictation_dictionary.serializer import serialize_rules
from dictation_dictionary.validation import ValidationResult, validate_rules

__version__ = "0.1.0"

__all__ = [
    "ParseResult",
    "ProtectRule",
    "ReplaceRule",
    "Rule",
    "ValidationResult",
    "apply_rules",
    "consolidate_replace_rules",
    "parse_rules",
    "serialize_rules",
    "validate_rules",
]
