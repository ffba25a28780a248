"""Cross-rule validation: duplicate and conflicting patterns."""

from __future__ import annotations

import logging
from collections.abc import Sequence
from dataclasses import dataclass, field

from dictation_dictionary.rules import ProtectRule, Rule

logger = logging.getLogger(__name__)


@dataclass
class ValidationResult:
    """Outcome of :func:`validate_rules`; ``ok`` only when no error was found."""

    errors: list[str] = field(default_factory=list)

    @property
    def ok(self) -> bool:
        return not self.errors


def _duplicate(pattern: str, first_row: int, second_row: int) -> str:
    return f'duplicate pattern "{pattern}" in rules {first_row} and {second_row}'


def _conflict(pattern: str, first_row: int, first_to: str, second_row: int, second_to: str) -> str:
    return (
        f'conflicting pattern "{pattern}": rule {first_row} -> "{first_to}", '
        f'rule {second_row} -> "{second_to}"'
    )


def _protect_conflict(pattern: str, protect_row: int, replace_row: int, replace_to: str) -> str:
    return (
        f'protected pattern "{pattern}" (rule {protect_row}) conflicts with '
        f'replacement rule {replace_row} -> "{replace_to}"'
    )


def validate_rules(rules: Sequence[Rule]) -> ValidationResult:
    """Check that no pattern is declared twice or given two different effects.

    Every problem is collected so the whole rule set can be fixed at once.
    Rows in messages are 1-based rule positions.
    """

    errors: list[str] = []
    seen_replace: dict[str, tuple[str, int]] = {}
    seen_protect: dict[str, int] = {}

    for index, rule in enumerate(rules):
        row = index + 1
        local_seen: set[str] = set()

        for pattern in rule.patterns:
            if not pattern or pattern in local_seen:
                continue
            local_seen.add(pattern)

            if isinstance(rule, ProtectRule):
                protect_index = seen_protect.get(pattern)
                if protect_index is not None and protect_index != index:
                    errors.append(_duplicate(pattern, protect_index + 1, row))
                    continue

                if pattern in seen_replace:
                    replace_to, replace_index = seen_replace[pattern]
                    errors.append(_protect_conflict(pattern, row, replace_index + 1, replace_to))
                    continue

                seen_protect[pattern] = index
                continue

            to = rule.replacement
            protect_index = seen_protect.get(pattern)
            if protect_index is not None and protect_index != index:
                errors.append(_protect_conflict(pattern, protect_index + 1, row, to))
                continue

            if pattern not in seen_replace:
                seen_replace[pattern] = (to, index)
                continue

            previous_to, previous_index = seen_replace[pattern]
            if previous_index == index:
                continue
            if previous_to == to:
                errors.append(_duplicate(pattern, previous_index + 1, row))
            else:
                errors.append(_conflict(pattern, previous_index + 1, previous_to, row, to))

    if errors:
        logger.debug(f"Dictionary validation found {len(errors)} problems")
    return ValidationResult(errors)
