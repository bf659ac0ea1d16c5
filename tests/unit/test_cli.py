"""Tests for CLI argument parsing and settings resolution."""

import argparse
from datetime import date
from pathlib import Path

import pytest
from pydantic import ValidationError

from main import load_settings, parse_args, parse_date, resolve_rules
from src.core.config import Settings


class TestParseDate:
    def test_iso(self) -> None:
        assert parse_date("2018-01-05") == date(2018, 1, 5)

    @pytest.mark.parametrize("value", ["05/01/2018", "2018-13-01", "yesterday", ""])
    def test_invalid(self, value: str) -> None:
        with pytest.raises(argparse.ArgumentTypeError):
            parse_date(value)


class TestParseArgs:
    def test_add(self) -> None:
        args = parse_args(["add", "-u", "alice", "--enter", "2018-01-01", "--exit", "2018-01-10"])
        assert args.command == "add"
        assert args.username == "alice"
        assert args.enter == date(2018, 1, 1)
        assert args.exit == date(2018, 1, 10)

    def test_add_short_flags(self) -> None:
        args = parse_args(["add", "-u", "alice", "-i", "2018-01-01", "-o", "2018-01-02"])
        assert args.exit == date(2018, 1, 2)

    def test_add_bad_date_exits(self) -> None:
        with pytest.raises(SystemExit):
            parse_args(["add", "-u", "alice", "--enter", "01/01/2018", "--exit", "2018-01-10"])

    def test_rm(self) -> None:
        args = parse_args(["rm", "--username", "alice", "--id", "3"])
        assert args.command == "rm"
        assert args.id == 3

    def test_ls_alias(self) -> None:
        args = parse_args(["ls", "-u", "alice"])
        assert args.command == "summary"

    def test_summary_overrides(self) -> None:
        args = parse_args(["summary", "-u", "alice", "-p", "365", "-d", "180", "--export", "json"])
        assert args.period == 365
        assert args.max_days == 180
        assert args.export == "json"

    def test_next_defaults_unset(self) -> None:
        args = parse_args(["next", "-u", "alice"])
        assert args.period is None
        assert args.max_days is None
        assert args.length is None
        assert args.verbose is False

    def test_command_required(self) -> None:
        with pytest.raises(SystemExit):
            parse_args([])


class TestLoadSettings:
    def test_defaults_without_file(self, tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> None:
        monkeypatch.chdir(tmp_path)
        settings = load_settings(parse_args(["ls", "-u", "alice"]))
        assert settings == Settings()

    def test_db_override(self, tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> None:
        monkeypatch.chdir(tmp_path)
        settings = load_settings(parse_args(["ls", "-u", "alice", "--db", "x.db"]))
        assert settings.database.path == "x.db"

    def test_explicit_config(self, tmp_path: Path) -> None:
        cfg = tmp_path / "s.yaml"
        cfg.write_text("rules:\n  period: 365\nusername: bob\n")
        settings = load_settings(parse_args(["ls", "--config", str(cfg)]))
        assert settings.rules.period == 365
        assert settings.username == "bob"

    def test_default_config_picked_up(self, tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> None:
        monkeypatch.chdir(tmp_path)
        (tmp_path / "config").mkdir()
        (tmp_path / "config" / "settings.yaml").write_text("rules:\n  max_days: 60\n")
        settings = load_settings(parse_args(["ls", "-u", "alice"]))
        assert settings.rules.max_days == 60

    def test_missing_explicit_config(self, tmp_path: Path) -> None:
        with pytest.raises(FileNotFoundError):
            load_settings(parse_args(["ls", "--config", str(tmp_path / "missing.yaml")]))


class TestResolveRules:
    def test_flags_override_config(self) -> None:
        args = parse_args(["next", "-u", "alice", "-p", "365", "-l", "14"])
        rules = resolve_rules(Settings(), args)
        assert rules.period == 365
        assert rules.max_days == 90
        assert rules.length == 14

    def test_config_used_when_no_flags(self) -> None:
        settings = Settings.model_validate({"rules": {"period": 30, "max_days": 10}})
        rules = resolve_rules(settings, parse_args(["summary", "-u", "alice"]))
        assert (rules.period, rules.max_days, rules.length) == (30, 10, 1)

    def test_commands_without_rule_flags(self) -> None:
        rules = resolve_rules(Settings(), parse_args(["rm", "-u", "alice", "--id", "1"]))
        assert rules.period == 180

    def test_length_over_max_days_left_to_search(self) -> None:
        settings = Settings.model_validate({"rules": {"length": 10}})
        rules = resolve_rules(settings, parse_args(["summary", "-u", "alice", "-d", "5"]))
        assert (rules.max_days, rules.length) == (5, 10)

    def test_override_above_upper_bound_rejected(self) -> None:
        with pytest.raises(ValidationError):
            resolve_rules(Settings(), parse_args(["summary", "-u", "alice", "-p", "1000000"]))

    def test_invalid_override_rejected(self) -> None:
        with pytest.raises(ValidationError):
            resolve_rules(Settings(), parse_args(["next", "-u", "alice", "-l", "0"]))
