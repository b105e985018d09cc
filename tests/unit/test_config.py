"""Unit tests for config.py"""

import pytest

from mdedit.config import load_config
from mdedit.core.models import Mark


@pytest.fixture(autouse=True)
def clean_env(tmp_path, monkeypatch):
    """Run from an empty directory with no MDEDIT_* variables set."""
    monkeypatch.chdir(tmp_path)
    for name in ("APP_NAME", "LOG_LEVEL", "STRICT_SELECTION", "SHORTCUTS", "SAVE_KEY"):
        monkeypatch.delenv(f"MDEDIT_{name}", raising=False)


def test_load_config_defaults():
    """Settings defaults are used when no config.yaml, env var, or CLI override exists."""
    settings = load_config()
    assert settings.log_level == "WARNING"
    assert settings.strict_selection is True
    assert settings.shortcuts == {"b": Mark.bold, "i": Mark.italic, "u": Mark.underline}
    assert settings.save_key == "s"


def test_load_config_uses_env_log_level(monkeypatch):
    monkeypatch.setenv("MDEDIT_LOG_LEVEL", "DEBUG")
    assert load_config().log_level == "DEBUG"


def test_load_config_env_strict_selection(monkeypatch):
    """MDEDIT_STRICT_SELECTION is coerced to bool."""
    monkeypatch.setenv("MDEDIT_STRICT_SELECTION", "false")
    assert load_config().strict_selection is False


def test_load_config_reads_config_yaml(tmp_path):
    (tmp_path / "config.yaml").write_text("log_level: INFO\nshortcuts:\n  k: bold\n  e: italic\n")
    settings = load_config()
    assert settings.log_level == "INFO"
    assert settings.shortcuts == {"k": Mark.bold, "e": Mark.italic}


def test_load_config_env_overrides_config_yaml(tmp_path, monkeypatch):
    (tmp_path / "config.yaml").write_text("log_level: INFO\n")
    monkeypatch.setenv("MDEDIT_LOG_LEVEL", "ERROR")
    assert load_config().log_level == "ERROR"


def test_load_config_cli_overrides_env(monkeypatch):
    """A non-None CLI override beats the env var; None overrides are ignored."""
    monkeypatch.setenv("MDEDIT_LOG_LEVEL", "ERROR")
    settings = load_config(overrides={"log_level": "DEBUG", "save_key": None})
    assert settings.log_level == "DEBUG"
    assert settings.save_key == "s"


def test_load_config_shortcuts_not_read_from_env(monkeypatch):
    monkeypatch.setenv("MDEDIT_SHORTCUTS", "x: bold")
    assert "x" not in load_config().shortcuts


def test_load_config_invalid_yaml(tmp_path):
    (tmp_path / "config.yaml").write_text("key: [unclosed\n")
    with pytest.raises(ValueError, match="Invalid config.yaml"):
        load_config()


def test_load_config_non_mapping_yaml(tmp_path):
    (tmp_path / "config.yaml").write_text("- just\n- a list\n")
    with pytest.raises(ValueError, match="expected a mapping"):
        load_config()


@pytest.mark.parametrize("data", ["log_level: LOUD\n", "shortcuts:\n  b: strike\n", "save_key: ss\n"])
def test_load_config_rejects_invalid_values(tmp_path, data):
    (tmp_path / "config.yaml").write_text(data)
    with pytest.raises(ValueError):
        load_config()


def test_load_config_lowercases_key_bindings(tmp_path):
    (tmp_path / "config.yaml").write_text("save_key: S\nshortcuts:\n  B: bold\n  u: underline\n")
    settings = load_config()
    assert settings.save_key == "s"
    assert settings.shortcuts == {"b": Mark.bold, "u": Mark.underline}
