from pathlib import Path

import pytest

from lcond.config import ConfigError, EngineConfig, ParseMode, load_config
from tests.infrastructure import write


# ========= Defaults and validation =========

def test_defaults():
    cfg = EngineConfig()
    assert cfg.error_mode is ParseMode.LAX
    assert cfg.strict_variables is False
    assert cfg.max_chain_length == 50
    assert cfg.max_nesting_depth == 100


def test_from_dict():
    cfg = EngineConfig.from_dict({"error_mode": "Strict", "strict_variables": True, "max_chain_length": 5})
    assert cfg.error_mode is ParseMode.STRICT
    assert cfg.strict_variables is True
    assert cfg.max_chain_length == 5


@pytest.mark.parametrize("data, message", [
    ({"mode": "lax"}, "Unknown config keys: mode"),
    ({"error_mode": "loose"}, "Unknown error mode 'loose'"),
    ({"strict_variables": "yes"}, "strict_variables: expected bool"),
    ({"max_chain_length": "10"}, "max_chain_length: expected int"),
    ({"max_nesting_depth": True}, "max_nesting_depth: expected int"),
    ({"max_nesting_depth": 0}, "max_nesting_depth must be positive"),
])
def test_from_dict_rejects(data, message):
    with pytest.raises(ConfigError, match=message):
        EngineConfig.from_dict(data)


def test_with_overrides_skips_none():
    cfg = EngineConfig(strict_variables=True).with_overrides(error_mode="warn", strict_variables=None)
    assert cfg.error_mode is ParseMode.WARN
    assert cfg.strict_variables is True


# ========= Loading from YAML =========

def test_load_without_file():
    assert load_config() == EngineConfig()


def test_load_file(tmp_path: Path):
    path = write(tmp_path / "lcond.yaml", "error_mode: warn\nmax_nesting_depth: 3\n")
    cfg = load_config(path)
    assert cfg.error_mode is ParseMode.WARN
    assert cfg.max_nesting_depth == 3


def test_load_empty_file(tmp_path: Path):
    path = write(tmp_path / "lcond.yaml", "")
    assert load_config(path) == EngineConfig()


def test_load_missing_file(tmp_path: Path):
    with pytest.raises(ConfigError, match="Config file not found"):
        load_config(tmp_path / "nope.yaml")


def test_load_invalid_yaml(tmp_path: Path):
    path = write(tmp_path / "lcond.yaml", "error_mode: [strict\n")
    with pytest.raises(ConfigError, match="Failed to parse"):
        load_config(path)


def test_load_non_mapping(tmp_path: Path):
    path = write(tmp_path / "lcond.yaml", "- lax\n- strict\n")
    with pytest.raises(ConfigError, match="must be a mapping"):
        load_config(path)


# ========= Environment override =========

def test_env_overrides_default(monkeypatch):
    monkeypatch.setenv("LCOND_ERROR_MODE", "strict")
    assert load_config().error_mode is ParseMode.STRICT


def test_env_overrides_file(tmp_path: Path, monkeypatch):
    path = write(tmp_path / "lcond.yaml", "error_mode: lax\nstrict_variables: true\n")
    monkeypatch.setenv("LCOND_ERROR_MODE", "warn")
    cfg = load_config(path)
    assert cfg.error_mode is ParseMode.WARN
    assert cfg.strict_variables is True


def test_env_invalid_mode(monkeypatch):
    monkeypatch.setenv("LCOND_ERROR_MODE", "sloppy")
    with pytest.raises(ConfigError, match="Unknown error mode 'sloppy'"):
        load_config()
