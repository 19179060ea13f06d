"""Tests for TOML configuration loading."""

from __future__ import annotations

import logging
import tomllib
from pathlib import Path

import pytest

from beatsync.config.config import HASH_WORKERS_DEFAULT, Config


def test_missing_file_yields_defaults_without_writing(config_runtime_env: Path) -> None:
    config = Config.load()

    assert config.levels_path is None
    assert config.unzip_packages is True
    assert config.overwrite_target is False
    assert config.hash_workers == HASH_WORKERS_DEFAULT
    assert not (config_runtime_env / "config" / "config.toml").exists()


def test_values_are_read_from_toml(config_runtime_env: Path) -> None:
    config_file = config_runtime_env / "config" / "config.toml"
    config_file.parent.mkdir()
    _ = config_file.write_text(
        'levels_path = "~/Beat Saber/CustomLevels"\n'
        "unzip_packages = false\n"
        "hash_workers = 2\n"
        'playlist_path = ""\n',
        encoding="utf-8",
    )

    config = Config.load()

    assert config.levels_path == Path("~/Beat Saber/CustomLevels").expanduser()
    assert config.unzip_packages is False
    assert config.hash_workers == 2
    assert config.playlist_path is None


def test_load_is_cached_per_file(config_runtime_env: Path) -> None:
    assert Config.load() is Config.load()


def test_unknown_keys_are_ignored_with_warning(
    config_runtime_env: Path, caplog: pytest.LogCaptureFixture
) -> None:
    config_file = config_runtime_env / "settings.toml"
    _ = config_file.write_text('mystery = 1\nlog_file = "logs/custom.log"\n', encoding="utf-8")

    with caplog.at_level(logging.WARNING, logger="beatsync"):
        config = Config.load(config_file)

    assert config.log_file == Path("logs/custom.log")
    assert "mystery" in caplog.text


def test_invalid_toml_raises(config_runtime_env: Path) -> None:
    config_file = config_runtime_env / "broken.toml"
    _ = config_file.write_text("levels_path = ", encoding="utf-8")

    with pytest.raises(tomllib.TOMLDecodeError):
        _ = Config.load(config_file)
