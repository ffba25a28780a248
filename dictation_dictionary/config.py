"""Configuration defaults for dictation-dictionary."""

from pathlib import Path

# Application data lives next to the other per-user files
APP_DIR = Path.home() / ".dictation_dictionary"

# Settings defaults
DEFAULT_DICTIONARY_ENABLED = False
DEFAULT_DICTIONARY_RULES_TEXT = ""

# Rule-file syntax
ARROW_TOKENS: tuple[str, ...] = ("->", "=>", "→")
PROTECT_PREFIX = "protect"
PATTERN_SEPARATORS = "|,"
COMMENT_PREFIX = "#"

# Canonical rendering used when rules are written back to text
SERIALIZED_PATTERN_SEPARATOR = " | "
SERIALIZED_ARROW = " -> "
