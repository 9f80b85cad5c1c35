from pathlib import Path

from autosave import config as config_module
from autosave.adapters.config_env import load_autosave_config


def test_env_bool(monkeypatch):
    monkeypatch.setenv("AUTOSAVE_ORDERED_WRITES", "TRUE")
    assert config_module._env_bool("AUTOSAVE_ORDERED_WRITES") is True

    monkeypatch.setenv("AUTOSAVE_ORDERED_WRITES", "no")
    assert config_module._env_bool("AUTOSAVE_ORDERED_WRITES") is False

    monkeypatch.delenv("AUTOSAVE_ORDERED_WRITES")
    assert config_module._env_bool("AUTOSAVE_ORDERED_WRITES") is False


def test_env_int_falls_back_on_garbage(monkeypatch):
    monkeypatch.setenv("AUTOSAVE_INDENT", "4")
    assert config_module._env_int("AUTOSAVE_INDENT", 2) == 4

    monkeypatch.setenv("AUTOSAVE_INDENT", "wide")
    assert config_module._env_int("AUTOSAVE_INDENT", 2) == 2


def test_relative_path_resolves_against_cwd(monkeypatch, tmp_path):
    monkeypatch.chdir(tmp_path)
    monkeypatch.setattr(config_module.Config, "SETTINGS_PATH", Path("prefs.json"))

    assert config_module.Config.resolved_path() == tmp_path / "prefs.json"


def test_load_autosave_config_reflects_env_config(monkeypatch, tmp_path):
    target = tmp_path / "absolute.json"
    monkeypatch.setattr(config_module.Config, "SETTINGS_PATH", target)
    monkeypatch.setattr(config_module.Config, "INDENT", 4)
    monkeypatch.setattr(config_module.Config, "ORDERED_WRITES", True)
    monkeypatch.setattr(config_module.Config, "DEBUG", False)

    cfg = load_autosave_config()

    assert cfg.path == target
    assert cfg.indent == 4
    assert cfg.ordered_writes is True
    assert cfg.debug is False
