"""Tests for leasectl.toml discovery."""

from pathlib import Path

import pytest

from leasectl.config.discovery import CONFIG_ENV_VAR, find_config


def test_finds_in_start_dir(tmp_path: Path) -> None:
    cfg = tmp_path / "leasectl.toml"
    cfg.write_text("")
    assert find_config(tmp_path) == cfg.resolve()


def test_walks_up(tmp_path: Path) -> None:
    cfg = tmp_path / "leasectl.toml"
    cfg.write_text("")
    nested = tmp_path / "x" / "y"
    nested.mkdir(parents=True)
    assert find_config(nested) == cfg.resolve()


def test_env_var_wins(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> None:
    (tmp_path / "leasectl.toml").write_text("")
    other = tmp_path / "other.toml"
    other.write_text("")
    monkeypatch.setenv(CONFIG_ENV_VAR, str(other))
    assert find_config(tmp_path) == other


def test_env_var_missing_file(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setenv(CONFIG_ENV_VAR, str(tmp_path / "nope.toml"))
    assert find_config(tmp_path) is None
