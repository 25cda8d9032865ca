"""Tests for centralized Config class."""
import importlib
import sys
from pathlib import Path

import pytest

from packy import config as config_module
from packy.config import Config


@pytest.fixture
def reload_config(monkeypatch):
    """
    Reload the config module under a patched environment.

    Restores the original Config class afterwards so modules that imported
    it keep seeing the same object.
    """
    original = config_module.Config

    def _reload(**env):
        for key in ("PACKY_PACKS_ROOT", "PACKY_LOG_LEVEL", "PACKY_PORT", "PACKY_TRANSPORT"):
            monkeypatch.delenv(key, raising=False)
        for key, value in env.items():
            monkeypatch.setenv(key, value)
        return importlib.reload(config_module).Config

    yield _reload

    config_module.Config = original


def test_config_defaults(reload_config):
    """Verify default configuration values."""
    config = reload_config()

    assert config.MANIFEST_FILENAME == "manifest.json"
    assert config.ARCHIVE_SUFFIX == ".zip"
    assert Path(config.PACKS_ROOT).name == "packs"
    assert config.LOG_LEVEL == "INFO"
    assert config.HOST == "127.0.0.1"
    assert config.PORT == 8002
    assert config.TRANSPORT == "stdio"


def test_config_env_overrides(reload_config, tmp_path):
    """Environment variables override defaults."""
    config = reload_config(
        PACKY_PACKS_ROOT=str(tmp_path / "out"),
        PACKY_LOG_LEVEL="debug",
        PACKY_PORT="9100",
        PACKY_TRANSPORT="SSE",
    )

    assert config.PACKS_ROOT == str(tmp_path / "out")
    assert config.LOG_LEVEL == "DEBUG"
    assert config.PORT == 9100
    assert config.TRANSPORT == "sse"


class TestProgramDir:
    """Where the default packs root is anchored."""

    def test_launching_script_folder(self, monkeypatch, tmp_path):
        monkeypatch.setattr(sys, "argv", [str(tmp_path / "run_packy.py")])

        assert config_module._program_dir() == tmp_path.resolve()

    def test_module_run_uses_interpreter_folder(self, monkeypatch):
        package_main = Path(config_module.__file__).parent / "__main__.py"
        monkeypatch.setattr(sys, "argv", [str(package_main)])

        program_dir = config_module._program_dir()

        assert program_dir == Path(sys.executable).absolute().parent
        assert program_dir != package_main.resolve().parent

    def test_interactive_uses_cwd(self, monkeypatch, tmp_path):
        monkeypatch.setattr(sys, "argv", ["-c"])
        monkeypatch.chdir(tmp_path)

        assert config_module._program_dir() == tmp_path.resolve()


def test_config_rejects_bad_port(reload_config):
    with pytest.raises(ValueError, match="Invalid PACKY_PORT"):
        reload_config(PACKY_PORT="70000")


def test_config_validation_passes_by_default():
    assert Config.validate() is True


def test_config_validation_collects_errors(monkeypatch):
    """Config.validate() reports every problem in one error."""
    monkeypatch.setattr(Config, "PACKS_ROOT", "  ")
    monkeypatch.setattr(Config, "TRANSPORT", "carrier-pigeon")

    with pytest.raises(ValueError) as exc_info:
        Config.validate()

    message = str(exc_info.value)
    assert "PACKS_ROOT must not be empty" in message
    assert "TRANSPORT must be one of stdio, sse, http" in message


def test_config_validation_rejects_unknown_log_level(monkeypatch):
    monkeypatch.setattr(Config, "LOG_LEVEL", "LOUD")

    with pytest.raises(ValueError, match="LOG_LEVEL must be one of"):
        Config.validate()
