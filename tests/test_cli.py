"""Tests for the cli module."""
import json
import pytest
from pathlib import Path
from unittest.mock import patch
from markprompter.cli import build_parser, resolve_config, main
from markprompter.models import TOOL_VERSION


@pytest.fixture
def themes_file(tmp_path):
    return tmp_path / "themes.json"


class TestResolveConfig:
    """Tests for resolve_config function."""

    def test_defaults(self):
        """Test no arguments keep defaults."""
        cfg = resolve_config(build_parser().parse_args([]))
        assert cfg.speed == 50.0
        assert cfg.pause_at_headings is False

    def test_cli_overrides(self):
        """Test CLI flags override defaults."""
        args = build_parser().parse_args([
            "--speed", "120", "--font-size", "30", "--pause-at-headings",
            "--pause-duration", "3", "--auto-restart", "--themes", "t.json",
        ])
        cfg = resolve_config(args)
        assert cfg.speed == 120.0
        assert cfg.font_size == 30.0
        assert cfg.pause_at_headings is True
        assert cfg.pause_duration == 3.0
        assert cfg.auto_restart is True
        assert cfg.themes_path == "t.json"

    def test_cli_overrides_config_file(self, tmp_path):
        """Test order: defaults -> config file -> CLI."""
        config_file = tmp_path / "cfg.json"
        config_file.write_text(json.dumps({"speed": 80, "font_size": 40}), encoding="utf-8")
        args = build_parser().parse_args(["--config", str(config_file), "--speed", "200"])
        cfg = resolve_config(args)
        assert cfg.speed == 200.0
        assert cfg.font_size == 40

    def test_negated_flags_override_config_file(self, tmp_path):
        """Test --no-auto-restart turns off a setting the config enables."""
        config_file = tmp_path / "cfg.json"
        config_file.write_text(
            json.dumps({"auto_restart": True, "pause_at_headings": True}), encoding="utf-8"
        )
        args = build_parser().parse_args([
            "--config", str(config_file), "--no-auto-restart", "--no-pause-at-headings",
        ])
        cfg = resolve_config(args)
        assert cfg.auto_restart is False
        assert cfg.pause_at_headings is False

    def test_flags_omitted_keep_config_file(self, tmp_path):
        """Test booleans from the config file survive when no flag is given."""
        config_file = tmp_path / "cfg.json"
        config_file.write_text(json.dumps({"auto_restart": True}), encoding="utf-8")
        cfg = resolve_config(build_parser().parse_args(["--config", str(config_file)]))
        assert cfg.auto_restart is True
        assert cfg.pause_at_headings is False


class TestMain:
    """Tests for main function."""

    def test_version(self, capsys):
        """Test --version prints the tool version."""
        assert main(["--version"]) == 0
        assert TOOL_VERSION in capsys.readouterr().out

    def test_bad_config_exit_code(self, tmp_path, capsys):
        """Test a missing --config file exits with code 2."""
        rc = main(["--config", str(tmp_path / "missing.json"), "--list-themes"])
        assert rc == 2
        assert "ERROR:" in capsys.readouterr().err

    @pytest.mark.parametrize("text", [
        '{"speed": "fast"}',
        '{"speed": NaN}',
        '{"pause_at_headings": "false"}',
    ])
    def test_mistyped_config_exit_code(self, tmp_path, capsys, text):
        """Test a config value of the wrong type exits with code 2."""
        config_file = tmp_path / "cfg.json"
        config_file.write_text(text, encoding="utf-8")
        with patch("markprompter.cli.launch_gui", return_value=0) as launch:
            rc = main(["--config", str(config_file)])
        assert rc == 2
        assert "ERROR:" in capsys.readouterr().err
        launch.assert_not_called()

    def test_themes_help_mentions_json(self, capsys):
        """Test --help says the theme file is JSON."""
        with pytest.raises(SystemExit):
            main(["--help"])
        out = " ".join(capsys.readouterr().out.split())
        assert "JSON theme file" in out
        assert "themes.toml" in out

    def test_list_themes(self, themes_file, capsys):
        """Test --list-themes marks the current theme."""
        rc = main(["--themes", str(themes_file), "--list-themes", "--quiet"])
        out = capsys.readouterr().out
        assert rc == 0
        assert " * Light" in out
        assert "   Stones" in out

    def test_outline(self, tmp_path, capsys):
        """Test --outline prints nested headings."""
        doc = tmp_path / "talk.md"
        doc.write_text("# Intro\ntext\n## Detail\n", encoding="utf-8")
        rc = main([str(doc), "--outline", "--quiet"])
        out = capsys.readouterr().out
        assert rc == 0
        assert "- Intro" in out
        assert "  - Detail" in out

    def test_outline_no_headings(self, tmp_path, capsys):
        """Test --outline on a document without headings."""
        doc = tmp_path / "plain.md"
        doc.write_text("just text", encoding="utf-8")
        assert main([str(doc), "--outline"]) == 0
        assert "(no headings)" in capsys.readouterr().out

    def test_outline_requires_file(self, capsys):
        """Test --outline without a file is a usage error."""
        assert main(["--outline"]) == 2

    def test_outline_load_error(self, tmp_path, capsys):
        """Test an unreadable document exits with code 1."""
        rc = main([str(tmp_path / "missing.md"), "--outline"])
        assert rc == 1
        assert "ERROR:" in capsys.readouterr().err

    def test_non_markdown_warning(self, tmp_path, capsys):
        """Test a non-markdown extension warns but still works."""
        doc = tmp_path / "notes.txt"
        doc.write_text("# A", encoding="utf-8")
        assert main([str(doc), "--outline"]) == 0
        assert "markdown extension" in capsys.readouterr().err

    def test_launches_gui(self, tmp_path, themes_file):
        """Test the GUI is started with resolved settings."""
        doc = tmp_path / "talk.md"
        doc.write_text("# A", encoding="utf-8")
        with patch("markprompter.cli.launch_gui", return_value=0) as launch:
            rc = main([str(doc), "--themes", str(themes_file), "--speed", "90", "--quiet"])

        assert rc == 0
        cfg, theme_cfg = launch.call_args.args
        assert cfg.speed == 90.0
        assert launch.call_args.kwargs["document"] == Path(doc)
        assert theme_cfg.themes

    def test_theme_selection_persisted(self, themes_file):
        """Test --theme saves the selection."""
        with patch("markprompter.cli.launch_gui", return_value=0):
            main(["--themes", str(themes_file), "--theme", "Forest", "--quiet"])

        data = json.loads(themes_file.read_text(encoding="utf-8"))
        assert data["selected_theme"] == "Forest"

    def test_unknown_theme_falls_back(self, themes_file, capsys):
        """Test an unknown --theme warns and uses the first theme."""
        with patch("markprompter.cli.launch_gui", return_value=0) as launch:
            main(["--themes", str(themes_file), "--theme", "Nope"])

        assert "Unknown theme" in capsys.readouterr().err
        assert launch.call_args.args[1].selected_theme == "Light"
