"""Tests for the logging_utils module."""
import pytest
from markprompter.logging_utils import debug_traceback, die, format_duration, log, status_line, warn
from markprompter.models import PlayerStatus


class TestConsole:
    """Tests for log, warn and die."""

    def test_log_goes_to_stdout(self, capsys):
        """Test informational lines land on stdout only."""
        log("Created theme file: themes.json")
        captured = capsys.readouterr()
        assert captured.out == "Created theme file: themes.json\n"
        assert captured.err == ""

    def test_warn_prefix(self, capsys):
        """Test warnings carry a WARNING prefix on stderr."""
        warn("Skipping theme #2: missing name")
        assert capsys.readouterr().err == "WARNING: Skipping theme #2: missing name\n"

    @pytest.mark.parametrize("func", [log, warn])
    def test_quiet_silences(self, capsys, func):
        """Test --quiet suppresses log and warn."""
        func("Created theme file: themes.json", quiet=True)
        assert capsys.readouterr() == ("", "")

    def test_die_returns_exit_code(self, capsys):
        """Test die reports the error and returns the code for main."""
        assert die("--outline requires a file.", 2) == 2
        assert die("Cannot read talk.md") == 1
        err = capsys.readouterr().err
        assert "ERROR: --outline requires a file." in err
        assert "ERROR: Cannot read talk.md" in err


class TestDebugTraceback:
    """Tests for debug_traceback function."""

    def test_only_with_debug(self, capsys):
        """Test the traceback is printed only when debugging is on."""
        for enabled in (False, True):
            try:
                raise ValueError("bad speed")
            except ValueError:
                debug_traceback(enabled)
        err = capsys.readouterr().err
        assert err.count("ValueError: bad speed") == 1


class TestFormatDuration:
    """Tests for format_duration function."""

    @pytest.mark.parametrize("seconds,expected", [
        (0, "0:00"),
        (0.2, "0:01"),
        (59.1, "1:00"),
        (61, "1:01"),
        (3600, "1:00:00"),
        (5024.5, "1:23:45"),
        (-5, "0:00"),
        (float("nan"), "0:00"),
        (float("inf"), "--:--"),
    ])
    def test_format(self, seconds, expected):
        """Test partial seconds round up and odd inputs stay readable."""
        assert format_duration(seconds) == expected


class TestStatusLine:
    """Tests for status_line function."""

    def test_every_status_has_a_label(self):
        """Test each player status renders."""
        for status in PlayerStatus:
            assert status_line(status, 10).endswith("0:10 left")

    def test_heading_pause(self):
        """Test the heading pause text."""
        assert status_line(PlayerStatus.PAUSED_AT_HEADING, 90) == "Paused at heading • 1:30 left"
