"""
Tests for the CLI, configuration and logging setup.
"""

import io
import json

import pytest

from ..cli import main
from ..config import Settings
from ..logging_config import setup_logging


class TestSettings:
    """Tests for environment-driven settings."""

    def test_defaults(self):
        settings = Settings.from_env({})
        assert settings.env == "development"
        assert settings.log_level == "WARNING"
        assert settings.session_ttl == 3600
        assert not settings.is_production

    def test_values_read(self):
        settings = Settings.from_env({
            "CALCFLOW_ENV": "Production",
            "CALCFLOW_LOG_LEVEL": "debug",
            "CALCFLOW_SESSION_TTL": "60",
        })
        assert settings.is_production
        assert settings.log_level == "DEBUG"
        assert settings.session_ttl == 60

    @pytest.mark.parametrize("ttl", ["soon", "-5", "0"])
    def test_bad_ttl_falls_back(self, ttl):
        assert Settings.from_env({"CALCFLOW_SESSION_TTL": ttl}).session_ttl == 3600

    def test_bad_level_falls_back(self):
        assert Settings.from_env({"CALCFLOW_LOG_LEVEL": "LOUD"}).log_level == "WARNING"

    def test_setup_logging_accepts_both_envs(self):
        setup_logging(Settings(env="production", log_level="INFO"))
        setup_logging(Settings())


class TestCLI:
    """Tests for the calcflow command."""

    def test_eval_prints_display(self, capsys):
        assert main(["eval", "2", "+", "3", "x", "4", "="]) == 0
        assert capsys.readouterr().out.strip() == "20"

    def test_eval_joined_keys(self, capsys):
        assert main(["eval", "50%"]) == 0
        assert capsys.readouterr().out.strip() == "0.5"

    def test_eval_minus_key(self, capsys):
        assert main(["eval", "3", "-", "5", "Enter"]) == 0
        assert capsys.readouterr().out.strip() == "-2"

    def test_eval_json(self, capsys):
        assert main(["eval", "--json", "5/0="]) == 0
        data = json.loads(capsys.readouterr().out)
        assert data["display"] == "Error"
        assert data["error"] == "DIV_BY_ZERO"
        assert "session_id" not in data

    def test_eval_trace(self, capsys):
        assert main(["eval", "--trace", "1+2="]) == 0
        lines = capsys.readouterr().out.strip().splitlines()
        assert [line.split()[-1] for line in lines] == ["1", "1", "2", "3"]

    def test_repl(self, capsys, monkeypatch):
        monkeypatch.setattr("sys.stdin", io.StringIO("7 *\n6 =\nq\n9\n"))
        assert main(["repl"]) == 0
        assert capsys.readouterr().out.split() == ["0", "7", "42"]

    def test_keys(self, capsys):
        assert main(["keys"]) == 0
        out = capsys.readouterr().out
        assert "Backspace" in out
        assert "OP ÷" in out

    def test_no_command(self, capsys):
        assert main([]) == 1
