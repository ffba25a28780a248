"""Transcript post-processing with the stored dictionary."""

from __future__ import annotations

import logging
from collections.abc import Mapping
from typing import Any

from dictation_dictionary.applier import apply_rules
from dictation_dictionary.parser import parse_rules

logger = logging.getLogger(__name__)


def apply_dictionary(transcript: str, settings: Mapping[str, Any]) -> str:
    """Apply the stored dictionary to a finished transcript.

    The transcript is returned unchanged when the dictionary is disabled,
    empty, or has syntax errors.
    """

    rules_text = settings.get("dictionary_rules_text") or ""
    if not settings.get("dictionary_enabled"):
        return transcript
    if not rules_text.strip() or not transcript.strip():
        return transcript

    rules, errors = parse_rules(rules_text)
    if errors:
        logger.warning(f"Dictionary skipped, stored rules have errors: {errors[0]}")
        return transcript
    if not rules:
        return transcript

    return apply_rules(transcript, rules)
