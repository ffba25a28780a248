"""Protected-span search over a text snapshot."""

from __future__ import annotations

from collections.abc import Iterable
from typing import NamedTuple


class TextSpan(NamedTuple):
    """Half-open ``[start, end)`` range of indices into one string."""

    start: int
    end: int


def merge_spans(spans: Iterable[TextSpan]) -> list[TextSpan]:
    """Sort spans and merge the ones that overlap or touch."""

    ordered = sorted(spans)
    if not ordered:
        return []

    merged: list[TextSpan] = []
    current = ordered[0]
    for span in ordered[1:]:
        if span.start <= current.end:
            current = TextSpan(current.start, max(current.end, span.end))
            continue
        merged.append(current)
        current = span
    merged.append(current)
    return merged


def index_by_first_char(patterns: Iterable[str]) -> dict[str, list[str]]:
    """Group patterns by first character, longest first within each group."""

    index: dict[str, list[str]] = {}
    for raw in patterns:
        pattern = raw.strip()
        if not pattern:
            continue
        candidates = index.setdefault(pattern[0], [])
        if pattern not in candidates:
            candidates.append(pattern)

    for candidates in index.values():
        # Stable sort: equal lengths keep declaration order
        candidates.sort(key=len, reverse=True)
    return index


def find_protected_spans(text: str, protect_patterns: Iterable[str]) -> list[TextSpan]:
    """Return merged spans of ``text`` covered by any protect pattern.

    At each position only the longest pattern starting there is recorded.
    """

    if not text:
        return []
    by_first_char = index_by_first_char(protect_patterns)
    if not by_first_char:
        return []

    spans: list[TextSpan] = []
    for start, char in enumerate(text):
        for pattern in by_first_char.get(char, ()):
            if text.startswith(pattern, start):
                spans.append(TextSpan(start, start + len(pattern)))
                break

    return merge_spans(spans)
