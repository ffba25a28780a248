"""Parse user-authored dictionary text into rules."""

from __future__ import annotations

import logging
import re

from dictation_dictionary.config import (
    ARROW_TOKENS,
    COMMENT_PREFIX,
    PATTERN_SEPARATORS,
    PROTECT_PREFIX,
)
from dictation_dictionary.rules import ParseResult, ProtectRule, ReplaceRule, Rule

logger = logging.getLogger(__name__)

_LINE_BREAK = re.compile(r"\r?\n")
BYTE_ORDER_MARK = "\ufeff"
_PROTECT_LINE = re.compile(rf"^{PROTECT_PREFIX}\s*:\s*(.+)$", re.IGNORECASE)
# Lazy left side: only the first arrow token on the line splits it
_REPLACE_LINE = re.compile(
    r"^(.+?)(?:" + "|".join(re.escape(token) for token in ARROW_TOKENS) + r")(.*)$"
)
_SEPARATOR = re.compile("[" + re.escape(PATTERN_SEPARATORS) + "]")


def split_patterns(value: str) -> list[str]:
    """Split a pattern list on ``|`` or ``,`` and drop blank pieces."""

    return [piece.strip() for piece in _SEPARATOR.split(value) if piece.strip()]


def parse_rules(text: str) -> ParseResult:
    """Parse dictionary text into rules.

    Malformed lines are skipped and reported with their 1-based line number;
    parsing itself never fails.
    """

    rules: list[Rule] = []
    errors: list[str] = []

    # Editors such as Notepad save a leading BOM, which str.strip keeps
    text = text.removeprefix(BYTE_ORDER_MARK)
    for number, raw_line in enumerate(_LINE_BREAK.split(text), start=1):
        line = raw_line.strip()
        if not line or line.startswith(COMMENT_PREFIX):
            continue

        protect_match = _PROTECT_LINE.match(line)
        if protect_match:
            patterns = split_patterns(protect_match.group(1))
            if not patterns:
                errors.append(f"empty protect patterns at line {number}")
                continue
            rules.append(ProtectRule(patterns=_unique(patterns)))
            continue

        replace_match = _REPLACE_LINE.match(line)
        if not replace_match:
            errors.append(f"expected from -> to at line {number}")
            continue

        from_text = replace_match.group(1).strip()
        to = replace_match.group(2).strip()
        if not from_text or not to:
            # "from ->" is rejected rather than read as a protect rule
            errors.append(f"empty from or to at line {number}")
            continue

        patterns = split_patterns(from_text)
        if not patterns:
            errors.append(f"empty from patterns at line {number}")
            continue

        rules.append(ReplaceRule(patterns=_unique(patterns), replacement=to))

    if errors:
        logger.debug(f"Parsed {len(rules)} dictionary rules with {len(errors)} errors")
    return ParseResult(rules, errors)


def _unique(patterns: list[str]) -> list[str]:
    return list(dict.fromkeys(patterns))
