"""Apply dictionary rules to a finished transcript."""

from __future__ import annotations

import logging
from collections.abc import Sequence

from dictation_dictionary.rules import Rule, split_rules
from dictation_dictionary.spans import TextSpan, find_protected_spans

logger = logging.getLogger(__name__)


def replace_outside_spans(
    text: str, pattern: str, replacement: str, protected_spans: Sequence[TextSpan]
) -> str:
    """Replace every occurrence of ``pattern`` that does not overlap a protected span.

    ``protected_spans`` must be sorted and non-overlapping, as returned by
    :func:`dictation_dictionary.spans.merge_spans`.
    """

    if not pattern:
        return text
    if not protected_spans:
        return text.replace(pattern, replacement)

    size = len(pattern)
    pieces: list[str] = []
    last = 0
    span_index = 0

    start = text.find(pattern)
    while start != -1:
        end = start + size
        while span_index < len(protected_spans) and protected_spans[span_index].end <= start:
            span_index += 1
        if span_index < len(protected_spans):
            span = protected_spans[span_index]
            overlaps = span.start < end and span.end > start
        else:
            overlaps = False

        if not overlaps:
            pieces.append(text[last:start])
            pieces.append(replacement)
            last = end
        start = text.find(pattern, end)

    if not pieces:
        return text
    pieces.append(text[last:])
    return "".join(pieces)


def apply_rules(text: str, rules: Sequence[Rule]) -> str:
    """Rewrite ``text`` with every replace rule, leaving protected phrases alone.

    Rules are applied in order, pattern by pattern. Protected spans are
    recomputed against the current text before each replacement, since
    earlier replacements move offsets and can create or break protected
    phrases. The rules are assumed to be validated; nothing here raises.
    """

    protect_patterns, replace_rules = split_rules(rules)

    result = text
    for rule in replace_rules:
        for pattern in rule.patterns:
            if not pattern or pattern not in result:
                continue
            protected_spans = find_protected_spans(result, protect_patterns)
            result = replace_outside_spans(result, pattern, rule.replacement, protected_spans)

    if result != text:
        logger.debug("Dictionary rules rewrote transcript")
    return result
