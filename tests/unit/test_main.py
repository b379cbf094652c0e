# tests/unit/test_main.py - v1
"""Tests for main.py: CLI entry point."""

from __future__ import annotations

import json
import logging

import pytest

from swarmcache.main import _build_parser, main


@pytest.fixture
def env(tmp_path, monkeypatch):
    """Point the CLI at a throwaway SQLite store."""
    monkeypatch.chdir(tmp_path)
    monkeypatch.setenv("STORE_BACKEND", "sqlite")
    monkeypatch.setenv("STORE_PATH", str(tmp_path / "cache.db"))
    monkeypatch.setenv("PARAMETERS_CONTRACT", "0xcontract")
    monkeypatch.setenv("PARAMETERS_CONTRACT_START_BLOCK", "100")
    monkeypatch.setenv("LOG_LEVEL", "ERROR")
    yield tmp_path
    logging.getLogger("swarmcache").handlers.clear()


class TestBuildParser:
    def test_version_flag(self):
        parser = _build_parser()
        with pytest.raises(SystemExit) as exc_info:
            parser.parse_args(["--version"])
        assert exc_info.value.code == 0

    def test_last_block_subcommand(self):
        args = _build_parser().parse_args(["last-block", "--set", "12"])
        assert args.command == "last-block"
        assert args.block == 12

    def test_last_block_defaults(self):
        args = _build_parser().parse_args(["last-block"])
        assert args.block is None

    def test_short_codes_purge(self):
        args = _build_parser().parse_args(["short-codes", "--purge"])
        assert args.purge is True

    def test_history_subcommand(self):
        args = _build_parser().parse_args(["history", "0xabc"])
        assert args.pubkey == "0xabc"


class TestMain:
    def test_no_command_prints_help(self, capsys):
        assert main([]) == 1
        assert "usage" in capsys.readouterr().out

    def test_last_block_fallback_then_set(self, env, capsys):
        assert main(["last-block"]) == 0
        assert capsys.readouterr().out.strip().splitlines()[-1] == "100"
        assert main(["last-block", "--set", "250"]) == 0
        assert main(["last-block"]) == 0
        assert capsys.readouterr().out.strip().splitlines()[-1] == "250"

    def test_history_default_record(self, env, capsys):
        assert main(["history", "0xuser"]) == 0
        out = capsys.readouterr().out
        record = json.loads(out[out.index("{"):])
        assert record["endBlock"] == 99
        assert record["transactionHistory"] == []

    def test_hashtags_empty(self, env, capsys):
        assert main(["hashtags"]) == 0
        assert capsys.readouterr().out.strip().splitlines()[-1] == "[]"

    def test_short_codes_empty(self, env, capsys):
        assert main(["short-codes", "--purge"]) == 0
        out = capsys.readouterr().out
        assert "0 short codes" in out
        assert "Purged 0 short codes" in out

    def test_fatal_error_returns_1(self, env, monkeypatch):
        monkeypatch.setenv("STORE_BACKEND", "redis")
        assert main(["last-block"]) == 1

    def test_logs_stay_off_stdout(self, env, monkeypatch, capsys):
        monkeypatch.setenv("LOG_LEVEL", "INFO")
        assert main(["last-block", "--set", "7"]) == 0
        captured = capsys.readouterr()
        assert captured.out == "7\n"
        assert "Checkpoint set to 7" in captured.err
