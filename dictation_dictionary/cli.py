"""Command-line interface for Dictation Dictionary."""

from __future__ import annotations

import argparse
import json
import logging
import sys
from pathlib import Path
from typing import Optional

import pyperclip

from . import settings_store
from .applier import apply_rules
from .editor import DictionaryEditError, add_protect_rule, add_replace_rule
from .logging_config import setup_logging
from .parser import parse_rules
from .rules import rule_from_dict
from .rules_text import DictionaryRulesError, check_rules_text, format_rules_text
from .serializer import serialize_rules
from .validation import validate_rules

logger = logging.getLogger(__name__)


def _read_rules_text(args: argparse.Namespace) -> str:
    """Rules come from --rules when given, otherwise from saved settings."""
    if getattr(args, "rules", None):
        return Path(args.rules).read_text(encoding="utf-8-sig")
    return settings_store.load_settings()["dictionary_rules_text"]


def _read_input_text(args: argparse.Namespace) -> str:
    if args.text is not None:
        return args.text
    if args.clipboard:
        return pyperclip.paste() or ""
    return sys.stdin.read()


def cmd_check(args: argparse.Namespace) -> int:
    rules, errors = parse_rules(_read_rules_text(args))
    # Lines that did parse are still checked against each other
    errors = errors + validate_rules(rules).errors
    if errors:
        for error in errors:
            print(f"error: {error}")
        return 1

    if args.json:
        print(json.dumps([rule.to_dict() for rule in rules], indent=2, ensure_ascii=False))
    else:
        print(f"OK: {len(rules)} rules")
    return 0


def cmd_apply(args: argparse.Namespace) -> int:
    try:
        rules = check_rules_text(_read_rules_text(args))
    except DictionaryRulesError as exc:
        for error in exc.errors:
            print(f"error: {error}")
        return 1

    text = _read_input_text(args)
    result = apply_rules(text, rules)
    print(result)

    if args.copy:
        try:
            pyperclip.copy(result)
            print("(copied to clipboard)", file=sys.stderr)
        except pyperclip.PyperclipException as exc:
            print(f"(clipboard copy failed: {exc})", file=sys.stderr)
    return 0


def cmd_format(args: argparse.Namespace) -> int:
    try:
        text = format_rules_text(_read_rules_text(args))
    except DictionaryRulesError as exc:
        for error in exc.errors:
            print(f"error: {error}")
        return 1

    if args.write:
        return _store_rules_text(text)
    print(text)
    return 0


def _store_rules_text(text: str) -> int:
    try:
        saved = settings_store.set_dictionary_rules_text(text)
    except DictionaryRulesError as exc:
        for error in exc.errors:
            print(f"error: {error}")
        return 1
    if not saved:
        print("error: could not save dictionary rules")
        return 1

    print("Saved.")
    return 0


def cmd_add(args: argparse.Namespace) -> int:
    rules_text = settings_store.load_settings()["dictionary_rules_text"]
    try:
        if args.command == "protect":
            text = add_protect_rule(rules_text, args.pattern)
        else:
            text = add_replace_rule(rules_text, args.pattern, args.to)
    except DictionaryEditError as exc:
        print(f"error: {exc}")
        return 1

    code = _store_rules_text(text)
    if code:
        return code
    if not settings_store.load_settings()["dictionary_enabled"]:
        if not settings_store.set_dictionary_enabled(True):
            print("error: rules saved, but the dictionary could not be enabled")
            return 1
    return 0


def cmd_import(args: argparse.Namespace) -> int:
    data = json.loads(Path(args.file).read_text(encoding="utf-8-sig"))
    if not isinstance(data, list) or not all(isinstance(item, dict) for item in data):
        print("error: expected a JSON list of rules, as printed by `check --json`")
        return 1
    return _store_rules_text(serialize_rules(rule_from_dict(item) for item in data))


def cmd_toggle(args: argparse.Namespace) -> int:
    enabled = args.command == "enable"
    if not settings_store.set_dictionary_enabled(enabled):
        print("error: could not save settings")
        return 1
    print("Dictionary enabled." if enabled else "Dictionary disabled.")
    return 0


def cmd_show(args: argparse.Namespace) -> int:
    settings = settings_store.load_settings()
    state = "enabled" if settings["dictionary_enabled"] else "disabled"
    print(f"# dictionary {state}")
    if settings["dictionary_rules_text"].strip():
        print(settings["dictionary_rules_text"])
    return 0


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="dictation-dictionary",
        description="Custom replace/protect dictionary for dictated transcripts",
    )
    parser.add_argument("--debug", action="store_true", help="Log at DEBUG level")
    sub = parser.add_subparsers(dest="command", required=True)

    check = sub.add_parser("check", help="Report every syntax and validation error")
    check.add_argument("--rules", help="Rule file to check instead of the saved dictionary")
    check.add_argument("--json", action="store_true", help="Print the parsed rules as JSON")
    check.set_defaults(func=cmd_check)

    apply = sub.add_parser("apply", help="Apply the dictionary to text")
    apply.add_argument("text", nargs="?", default=None, help="Text to rewrite (default: stdin)")
    apply.add_argument("--rules", help="Rule file to use instead of the saved dictionary")
    apply.add_argument("--clipboard", action="store_true", help="Read the text from the clipboard")
    apply.add_argument("--copy", action="store_true", help="Copy the result to the clipboard")
    apply.set_defaults(func=cmd_apply)

    fmt = sub.add_parser("format", help="Merge replace rules that share a target")
    fmt.add_argument("--rules", help="Rule file to format instead of the saved dictionary")
    fmt.add_argument("--write", action="store_true", help="Save the result as the dictionary")
    fmt.set_defaults(func=cmd_format)

    add = sub.add_parser("add", help="Add a replacement: FROM may list patterns split by | or ,")
    add.add_argument("pattern", metavar="FROM")
    add.add_argument("to", metavar="TO")
    add.set_defaults(func=cmd_add)

    protect = sub.add_parser("protect", help="Protect phrases from replacement")
    protect.add_argument("pattern", metavar="FROM")
    protect.set_defaults(func=cmd_add)

    imp = sub.add_parser("import", help="Save rules from a JSON list, as printed by `check --json`")
    imp.add_argument("file", metavar="FILE")
    imp.set_defaults(func=cmd_import)

    for name in ("enable", "disable"):
        toggle = sub.add_parser(name, help=f"{name.capitalize()} dictionary post-processing")
        toggle.set_defaults(func=cmd_toggle)

    show = sub.add_parser("show", help="Print the saved dictionary")
    show.set_defaults(func=cmd_show)

    return parser


def main(argv: Optional[list[str]] = None) -> int:
    args = build_parser().parse_args(argv)
    setup_logging(logging.DEBUG if args.debug else logging.WARNING)

    try:
        return args.func(args)
    except (OSError, json.JSONDecodeError) as exc:
        logger.error(f"{args.command} failed: {exc}")
        return 1


if __name__ == "__main__":
    sys.exit(main())
