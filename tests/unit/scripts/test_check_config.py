"""Tests for the check_config operator script."""

from __future__ import annotations

import json
import logging
from unittest.mock import patch

import pytest

from scripts.check_config import main


@pytest.fixture(autouse=True)
def restore_root_logger():
    root = logging.getLogger()
    handlers, level = list(root.handlers), root.level
    yield
    root.handlers[:] = handlers
    root.setLevel(level)


class TestCheckConfig:
    """Tests for scripts/check_config.py main()."""

    def test_valid_config_prints_redacted_json(self, valid_env, tmp_path, capsys):
        with patch.dict("os.environ", valid_env, clear=True):
            exit_code = main(["--env-file", str(tmp_path / "none.env")])

        assert exit_code == 0
        output = json.loads(capsys.readouterr().out)
        assert output["server"]["port"] == "8080"
        assert output["auth"]["secret_key"] == "********"
        assert output["cron"]["batch_size"] == 100

    def test_invalid_config_lists_failures(self, valid_env, tmp_path, capsys):
        del valid_env["TASKER_DATABASE.NAME"]
        del valid_env["TASKER_AUTH.SECRET_KEY"]

        with patch.dict("os.environ", valid_env, clear=True):
            exit_code = main(["--env-file", str(tmp_path / "none.env")])

        assert exit_code == 1
        err = capsys.readouterr().err
        assert "2 field(s)" in err
        assert "database.name" in err
        assert "auth.secret_key" in err

    def test_env_file_supplies_missing_value(self, valid_env, write_env_file, capsys):
        del valid_env["TASKER_DATABASE.NAME"]
        env_file = write_env_file(".env", "TASKER_DATABASE.NAME=tasker\n")

        with patch.dict("os.environ", valid_env, clear=True):
            exit_code = main(["--env-file", str(env_file), "--quiet"])

        assert exit_code == 0
        assert capsys.readouterr().out == ""

    def test_list_delimiter_option(self, valid_env, tmp_path, capsys):
        valid_env["TASKER_SERVER.CORS_ALLOWED_ORIGINS"] = "http://a.example;http://b.example"

        with patch.dict("os.environ", valid_env, clear=True):
            exit_code = main(["--env-file", str(tmp_path / "none.env"), "--list-delimiter", ";"])

        assert exit_code == 0
        output = json.loads(capsys.readouterr().out)
        assert output["server"]["cors_allowed_origins"] == ["http://a.example", "http://b.example"]
