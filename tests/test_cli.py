"""Tests for the command-line interface."""

import io
import json
from unittest.mock import patch

import pytest

from dictation_dictionary import cli
from dictation_dictionary.settings_store import load_settings, save_settings


@pytest.fixture(autouse=True)
def isolated(tmp_path, monkeypatch):
    """Keep settings in a temp dir and avoid touching real log handlers."""
    monkeypatch.setattr(
        "dictation_dictionary.settings_store.SETTINGS_FILE", tmp_path / "settings.json"
    )
    with patch("dictation_dictionary.cli.setup_logging"):
        yield


@pytest.fixture
def rules_file(tmp_path):
    path = tmp_path / "rules.txt"
    path.write_text("テキスト -> テクスト\nprotect: テキストエディタ\n", encoding="utf-8")
    return path


class TestCheckCommand:
    """Tests for `check`."""

    def test_check_valid_file(self, rules_file, capsys):
        """Test that a valid rule file reports its rule count."""
        assert cli.main(["check", "--rules", str(rules_file)]) == 0
        assert "OK: 2 rules" in capsys.readouterr().out

    def test_check_json_output(self, rules_file, capsys):
        """Test that --json prints each rule as a dict."""
        assert cli.main(["check", "--rules", str(rules_file), "--json"]) == 0
        data = json.loads(capsys.readouterr().out)
        assert data == [
            {"type": "replace", "from": ["テキスト"], "to": "テクスト"},
            {"type": "protect", "from": ["テキストエディタ"]},
        ]

    def test_check_reports_every_error(self, tmp_path, capsys):
        """Test that every validation error is printed."""
        path = tmp_path / "bad.txt"
        path.write_text("a -> x\na -> y\nprotect: a\n", encoding="utf-8")

        assert cli.main(["check", "--rules", str(path)]) == 1
        out = capsys.readouterr().out
        assert out.count("error:") == 2

    def test_check_uses_saved_rules_by_default(self, capsys):
        """Test that saved rules are checked when --rules is absent."""
        save_settings({"dictionary_enabled": True, "dictionary_rules_text": "nonsense"})

        assert cli.main(["check"]) == 1
        assert "expected from -> to at line 1" in capsys.readouterr().out

    def test_check_reports_validation_errors_alongside_syntax_errors(self, tmp_path, capsys):
        """Test that a malformed line does not hide conflicts between the other lines."""
        path = tmp_path / "mixed.txt"
        path.write_text("a -> x\nbroken\na -> y\n", encoding="utf-8")

        assert cli.main(["check", "--rules", str(path)]) == 1
        out = capsys.readouterr().out
        assert "error: expected from -> to at line 2" in out
        assert 'error: conflicting pattern "a"' in out

    def test_check_accepts_file_with_byte_order_mark(self, tmp_path, capsys):
        """Test that a rule file saved with a UTF-8 BOM checks cleanly."""
        path = tmp_path / "bom.txt"
        path.write_text("# my rules\nテキスト -> テクスト\n", encoding="utf-8-sig")

        assert cli.main(["check", "--rules", str(path)]) == 0
        assert "OK: 1 rules" in capsys.readouterr().out

    def test_missing_rules_file_fails(self, tmp_path):
        """Test that an unreadable rule file exits with 1."""
        assert cli.main(["check", "--rules", str(tmp_path / "missing.txt")]) == 1


class TestApplyCommand:
    """Tests for `apply`."""

    def test_apply_text_argument(self, rules_file, capsys):
        """Test applying rules to text given on the command line."""
        code = cli.main(["apply", "テキストエディタ and テキスト", "--rules", str(rules_file)])
        assert code == 0
        assert capsys.readouterr().out == "テキストエディタ and テクスト\n"

    def test_apply_reads_stdin(self, rules_file, capsys, monkeypatch):
        """Test that text is read from stdin when no argument is given."""
        monkeypatch.setattr("sys.stdin", io.StringIO("テキスト"))
        assert cli.main(["apply", "--rules", str(rules_file)]) == 0
        assert capsys.readouterr().out == "テクスト\n"

    def test_apply_clipboard_round_trip(self, rules_file, capsys):
        """Test reading from and copying back to the clipboard."""
        with patch("dictation_dictionary.cli.pyperclip") as mock_clip:
            mock_clip.paste.return_value = "テキスト"
            assert cli.main(["apply", "--clipboard", "--copy", "--rules", str(rules_file)]) == 0

        mock_clip.copy.assert_called_once_with("テクスト")
        assert "(copied to clipboard)" in capsys.readouterr().err

    def test_apply_refuses_invalid_rules(self, tmp_path, capsys):
        """Test that invalid rules are reported instead of applied."""
        path = tmp_path / "bad.txt"
        path.write_text("a -> x\na -> y", encoding="utf-8")

        assert cli.main(["apply", "a", "--rules", str(path)]) == 1
        assert "conflicting pattern" in capsys.readouterr().out


class TestEditingCommands:
    """Tests for `add`, `protect`, `format`, `enable`, `disable` and `show`."""

    def test_add_saves_and_enables(self, capsys):
        """Test that adding a rule saves it and turns the dictionary on."""
        assert cli.main(["add", "git hub", "GitHub"]) == 0

        settings = load_settings()
        assert settings["dictionary_rules_text"] == "git hub -> GitHub"
        assert settings["dictionary_enabled"] is True

    def test_protect_then_conflicting_add(self, capsys):
        """Test that a protected pattern cannot then be replaced."""
        assert cli.main(["protect", "text editor"]) == 0
        assert cli.main(["add", "text editor", "x"]) == 1
        assert 'pattern "text editor" is protected' in capsys.readouterr().out

    def test_protect_conflicting_with_replacement_is_not_saved(self, capsys):
        """Test that protecting a replaced pattern leaves the saved rules alone."""
        assert cli.main(["add", "a", "x"]) == 0
        assert cli.main(["protect", "a"]) == 1

        assert "conflicts with replacement rule" in capsys.readouterr().out
        assert load_settings()["dictionary_rules_text"] == "a -> x"

    def test_format_prints_and_writes(self, capsys):
        """Test that format prints merged rules and --write saves them without enabling."""
        save_settings({"dictionary_enabled": False, "dictionary_rules_text": "a -> x\nb -> x"})

        assert cli.main(["format"]) == 0
        assert capsys.readouterr().out == "a | b -> x\n"

        assert cli.main(["format", "--write"]) == 0
        settings = load_settings()
        assert settings["dictionary_rules_text"] == "a | b -> x"
        assert settings["dictionary_enabled"] is False

    def test_add_reports_when_enabling_fails(self, capsys):
        """Test that a failed enable after a successful save is reported."""
        with patch("dictation_dictionary.cli.settings_store.set_dictionary_enabled", return_value=False):
            assert cli.main(["add", "a", "x"]) == 1

        assert "rules saved, but the dictionary could not be enabled" in capsys.readouterr().out
        assert load_settings()["dictionary_rules_text"] == "a -> x"

    def test_enable_disable_show(self, capsys):
        """Test toggling the dictionary and showing its state."""
        assert cli.main(["enable"]) == 0
        assert load_settings()["dictionary_enabled"] is True
        assert cli.main(["disable"]) == 0
        assert load_settings()["dictionary_enabled"] is False

        capsys.readouterr()
        assert cli.main(["show"]) == 0
        assert capsys.readouterr().out == "# dictionary disabled\n"

    def test_command_is_required(self):
        """Test that running without a subcommand is a usage error."""
        with pytest.raises(SystemExit):
            cli.main([])


class TestImportCommand:
    """Tests for `import`."""

    def test_import_round_trips_check_json(self, rules_file, tmp_path, capsys):
        """Test that the output of `check --json` imports back to the same rules."""
        assert cli.main(["check", "--rules", str(rules_file), "--json"]) == 0
        exported = tmp_path / "rules.json"
        exported.write_text(capsys.readouterr().out, encoding="utf-8")

        assert cli.main(["import", str(exported)]) == 0

        settings = load_settings()
        assert settings["dictionary_rules_text"] == "テキスト -> テクスト\nprotect: テキストエディタ"
        assert settings["dictionary_enabled"] is False

    def test_import_refuses_conflicting_rules(self, tmp_path, capsys):
        """Test that imported rules are validated before they are saved."""
        path = tmp_path / "rules.json"
        path.write_text(
            json.dumps(
                [
                    {"type": "replace", "from": ["a"], "to": "x"},
                    {"type": "protect", "from": ["a"]},
                ]
            ),
            encoding="utf-8",
        )

        assert cli.main(["import", str(path)]) == 1
        assert "conflicts with replacement rule" in capsys.readouterr().out
        assert load_settings()["dictionary_rules_text"] == ""

    def test_import_rejects_non_list_json(self, tmp_path, capsys):
        """Test that a JSON object is not mistaken for a rule list."""
        path = tmp_path / "rules.json"
        path.write_text('{"type": "replace"}', encoding="utf-8")

        assert cli.main(["import", str(path)]) == 1
        assert "expected a JSON list of rules" in capsys.readouterr().out

    def test_import_invalid_json_fails(self, tmp_path):
        """Test that unreadable JSON is logged and exits with 1."""
        path = tmp_path / "rules.json"
        path.write_text("not json", encoding="utf-8")

        assert cli.main(["import", str(path)]) == 1
