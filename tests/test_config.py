"""Tests for goatee.config."""

from __future__ import annotations

import os

import pytest
from pydantic import ValidationError

from goatee.config import (
    PREFERENCES,
    HexConfig,
    LanguageConfig,
    Settings,
    config_dir,
    config_files,
    get_settings,
    reset_settings,
)


def _write_user_config(tmp_path, body: str):
    path = tmp_path / "xdg" / "goatee" / "goatee.yaml"
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_text(body)
    return path


def test_defaults():
    settings = get_settings()
    assert settings.search.max_items == 1024
    assert settings.hex.bytes_in_line == 16
    assert settings.hex.language == "hexdump"
    assert settings.detect.min_confidence == pytest.approx(0.30)
    assert settings.language.fallback == "sh"


def test_language_order_defaults():
    cfg = LanguageConfig()
    assert cfg.comment_order == ["toml", "yaml", "sh"]
    assert cfg.section_order == ["ini", "toml"]
    assert cfg.sample_bytes == 64


def test_config_dir_follows_xdg(tmp_path):
    assert config_dir() == tmp_path / "xdg" / "goatee"


def test_no_config_files_by_default():
    assert config_files() == []


def test_user_yaml_is_loaded(tmp_path):
    path = _write_user_config(tmp_path, "hex:\n  bytes_in_line: 8\n")
    reset_settings()
    assert config_files() == [path]
    assert get_settings().hex.bytes_in_line == 8


def test_local_yaml_overrides_user_yaml(tmp_path):
    _write_user_config(tmp_path, "search:\n  max_items: 10\n")
    (tmp_path / "goatee.yaml").write_text("search:\n  max_items: 20\n")
    reset_settings()
    assert get_settings().search.max_items == 20


def test_env_var_overrides_yaml(tmp_path, monkeypatch):
    _write_user_config(tmp_path, "search:\n  max_items: 10\n")
    monkeypatch.setenv("GOATEE_SEARCH__MAX_ITEMS", "5")
    reset_settings()
    assert get_settings().search.max_items == 5


def test_dotenv_in_config_dir(tmp_path):
    env = tmp_path / "xdg" / "goatee" / ".env"
    env.parent.mkdir(parents=True)
    env.write_text("GOATEE_HEX__LANGUAGE=hex\n")
    reset_settings()
    try:
        assert get_settings().hex.language == "hex"
    finally:
        # load_dotenv writes straight into os.environ
        os.environ.pop("GOATEE_HEX__LANGUAGE", None)


def test_settings_are_cached():
    assert get_settings() is get_settings()
    first = get_settings()
    reset_settings()
    assert get_settings() is not first


def test_invalid_group_size_rejected():
    with pytest.raises(ValidationError):
        HexConfig(bytes_in_line=0)


def test_init_kwargs_win():
    assert Settings(hex={"bytes_in_line": 4}).hex.bytes_in_line == 4


def test_preferences_describe_real_fields():
    settings = get_settings()
    seen = set()
    for pref in PREFERENCES:
        section = getattr(settings, pref.section)
        assert pref.name in type(section).model_fields, pref.name
        assert pref.value(settings) == getattr(section, pref.name)
        seen.add((pref.section, pref.name))

    for section in ("search", "hex", "detect", "language"):
        for name in type(getattr(settings, section)).model_fields:
            assert (section, name) in seen, f"{section}.{name} has no descriptor"
