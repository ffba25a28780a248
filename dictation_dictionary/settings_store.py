"""Persistent dictionary settings for dictation-dictionary."""

import json
import logging
from typing import Any

from dictation_dictionary.config import (
    APP_DIR,
    DEFAULT_DICTIONARY_ENABLED,
    DEFAULT_DICTIONARY_RULES_TEXT,
)
from dictation_dictionary.rules_text import check_rules_text

logger = logging.getLogger(__name__)

SETTINGS_FILE = APP_DIR / "dictation_dictionary_settings.json"


def _defaults() -> dict[str, Any]:
    return {
        "dictionary_enabled": DEFAULT_DICTIONARY_ENABLED,
        "dictionary_rules_text": DEFAULT_DICTIONARY_RULES_TEXT,
    }


def load_settings() -> dict[str, Any]:
    """Load saved settings from disk, returning defaults on failure.

    Keys missing from the saved file are filled in from the defaults; values
    of the wrong type are replaced by the default.
    """
    defaults = _defaults()

    try:
        if SETTINGS_FILE.is_file():
            settings = json.loads(SETTINGS_FILE.read_text(encoding="utf-8"))
            if not isinstance(settings, dict):
                logger.error("Could not read saved settings: expected a JSON object")
                return defaults

            for key, value in defaults.items():
                if not isinstance(settings.get(key), type(value)):
                    settings[key] = value
            return settings
    except (OSError, UnicodeDecodeError, json.JSONDecodeError) as e:
        # OSError: File access errors
        # UnicodeDecodeError: Invalid UTF-8 encoding
        # JSONDecodeError: Invalid JSON format
        logger.error(f"Could not read saved settings: {e}")
    return defaults


def save_settings(settings: dict[str, Any]) -> bool:
    """Persist settings to disk. Returns True on success, False otherwise."""
    try:
        SETTINGS_FILE.parent.mkdir(parents=True, exist_ok=True)
        SETTINGS_FILE.write_text(
            json.dumps(settings, indent=2, ensure_ascii=False), encoding="utf-8"
        )
        return True
    except (OSError, UnicodeEncodeError, TypeError, ValueError) as e:
        # OSError: File/directory write errors
        # UnicodeEncodeError: Invalid character encoding
        # TypeError: Non-serializable values in settings
        # ValueError: Invalid JSON structure
        logger.error(f"Could not save settings: {e}")
        return False


def set_dictionary_enabled(enabled: bool) -> bool:
    """Turn dictionary post-processing on or off."""
    settings = load_settings()
    settings["dictionary_enabled"] = bool(enabled)
    return save_settings(settings)


def set_dictionary_rules_text(rules_text: str) -> bool:
    """Validate and store the dictionary rule text.

    Returns:
        True if the text was written, False if writing failed

    Raises:
        DictionaryRulesError: If the text has syntax or validation errors;
            nothing is written in that case
    """
    check_rules_text(rules_text)

    settings = load_settings()
    settings["dictionary_rules_text"] = rules_text
    saved = save_settings(settings)
    if saved:
        logger.info("Saved dictionary rules")
    return saved
