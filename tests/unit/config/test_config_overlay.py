"""Tests for override file parsing and loading."""

from __future__ import annotations

import os
from unittest.mock import patch

from tasker.config.overlay import load_overlay_files, parse_overlay_line, parse_overlay_text


class TestParseOverlayLine:
    """Tests for single-line KEY=VALUE parsing."""

    def test_simple_assignment(self):
        assert parse_overlay_line("KEY=value") == ("KEY", "value")

    def test_blank_and_comment_lines_skipped(self):
        assert parse_overlay_line("") is None
        assert parse_overlay_line("   ") is None
        assert parse_overlay_line("# comment") is None
        assert parse_overlay_line("   # indented comment") is None

    def test_splits_on_first_equals_only(self):
        """Values may contain '=' themselves."""
        assert parse_overlay_line("DSN=postgres://u:p@h/db?opt=a=b") == ("DSN", "postgres://u:p@h/db?opt=a=b")

    def test_trims_key_and_value(self):
        assert parse_overlay_line("  KEY  =   spaced value  ") == ("KEY", "spaced value")

    def test_double_quotes_removed(self):
        assert parse_overlay_line('KEY="quoted value"') == ("KEY", "quoted value")

    def test_single_quotes_removed(self):
        assert parse_overlay_line("KEY='quoted value'") == ("KEY", "quoted value")

    def test_inner_whitespace_kept_inside_quotes(self):
        assert parse_overlay_line('KEY="  padded  "') == ("KEY", "  padded  ")

    def test_only_one_pair_of_quotes_removed(self):
        assert parse_overlay_line("KEY=\"'nested'\"") == ("KEY", "'nested'")
        assert parse_overlay_line('KEY=""double""') == ("KEY", '"double"')

    def test_mismatched_quotes_kept(self):
        assert parse_overlay_line("KEY=\"half'") == ("KEY", "\"half'")
        assert parse_overlay_line('KEY="open') == ("KEY", '"open')

    def test_single_quote_character_kept(self):
        assert parse_overlay_line('KEY="') == ("KEY", '"')

    def test_inline_hash_is_part_of_value(self):
        assert parse_overlay_line("PASSWORD=abc #123") == ("PASSWORD", "abc #123")

    def test_empty_value_allowed(self):
        assert parse_overlay_line("KEY=") == ("KEY", "")

    def test_line_without_equals_skipped(self):
        assert parse_overlay_line("JUST_A_WORD") is None

    def test_empty_key_skipped(self):
        assert parse_overlay_line("=value") is None


class TestParseOverlayText:
    """Tests for multi-line file content."""

    def test_parses_all_assignments(self):
        text = "# settings\nA=1\n\nB=two\n"
        assert parse_overlay_text(text) == {"A": "1", "B": "two"}

    def test_later_line_wins(self):
        assert parse_overlay_text("A=1\nA=2\n") == {"A": "2"}

    def test_windows_line_endings(self):
        assert parse_overlay_text("A=1\r\nB=2\r\n") == {"A": "1", "B": "2"}


class TestLoadOverlayFiles:
    """Tests for ordered file loading."""

    def test_later_file_wins(self, write_env_file):
        first = write_env_file("a.env", "SHARED=from-a\nONLY_A=a\n")
        second = write_env_file("b.env", "SHARED=from-b\nONLY_B=b\n")

        overlay = load_overlay_files([first, second])

        assert overlay == {"SHARED": "from-b", "ONLY_A": "a", "ONLY_B": "b"}

    def test_missing_file_skipped(self, write_env_file, tmp_path):
        present = write_env_file("present.env", "KEY=value\n")

        overlay = load_overlay_files([tmp_path / "missing.env", present, tmp_path / "also-missing.env"])

        assert overlay == {"KEY": "value"}

    def test_no_files_gives_empty_overlay(self, tmp_path):
        assert load_overlay_files([tmp_path / "nope.env"]) == {}
        assert load_overlay_files([]) == {}

    def test_directory_path_skipped(self, tmp_path):
        """Unreadable candidates never fail the load."""
        assert load_overlay_files([tmp_path]) == {}

    def test_quoted_value_from_file(self, write_env_file):
        path = write_env_file(".env", 'KEY="quoted value"\n')
        assert load_overlay_files([path]) == {"KEY": "quoted value"}

    def test_process_environment_untouched(self, write_env_file):
        path = write_env_file(".env", "TASKER_OVERLAY_ONLY=1\n")

        with patch.dict(os.environ, {}, clear=True):
            load_overlay_files([path])
            assert "TASKER_OVERLAY_ONLY" not in os.environ

    def test_undecodable_bytes_only_affect_their_line(self, tmp_path):
        path = tmp_path / ".env"
        path.write_bytes(b"# caf\xe9 settings\nTASKER_SERVER.PORT=9000\nTASKER_NOTE=na\xefve\n")

        overlay = load_overlay_files([path])

        assert overlay["TASKER_SERVER.PORT"] == "9000"
        assert overlay["TASKER_NOTE"].startswith("na")
