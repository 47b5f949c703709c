"""
Unit tests for settings loading and logger naming.
"""

import logging

import pytest
from pydantic import ValidationError

from njdice.config.logging import get_logger, setup_logging
from njdice.config.settings import DiceSettings, Settings


class TestSettings:
    def test_defaults(self, monkeypatch):
        monkeypatch.delenv("DICE__SEED", raising=False)
        monkeypatch.delenv("DICE_SEED", raising=False)
        settings = Settings(_env_file=None)

        assert settings.log_level == "INFO"
        assert settings.dice.game_system == "NinjaSlayer"
        assert settings.dice.seed is None
        assert settings.dice.max_rands == 10000

    def test_nested_env_override(self, monkeypatch):
        monkeypatch.setenv("DICE__SEED", "42")
        monkeypatch.setenv("LOG_LEVEL", "DEBUG")
        settings = Settings(_env_file=None)

        assert settings.dice.seed == 42
        assert settings.log_level == "DEBUG"

    def test_env_file(self, tmp_path, monkeypatch):
        monkeypatch.delenv("DICE__MAX_RANDS", raising=False)
        env_file = tmp_path / ".env"
        env_file.write_text("DICE__MAX_RANDS=50\n", encoding="utf-8")

        assert Settings(_env_file=env_file).dice.max_rands == 50

    def test_max_rands_must_be_positive(self):
        with pytest.raises(ValidationError):
            DiceSettings(max_rands=0)


class TestLogging:
    def test_get_logger_prefixes_name(self):
        assert get_logger("cli").name == "njdice.cli"

    def test_get_logger_keeps_package_name(self):
        assert get_logger("njdice.dice.barabara").name == "njdice.dice.barabara"

    def test_setup_logging_writes_file(self, tmp_path):
        log_file = tmp_path / "logs" / "njdice.log"
        settings = Settings(_env_file=None, log_level="DEBUG", log_file=log_file)

        setup_logging(settings)
        get_logger("test").debug("hello file")
        for handler in logging.getLogger("njdice").handlers:
            handler.flush()

        content = log_file.read_text(encoding="utf-8")
        assert "hello file" in content
        # Console colors must not leak into the file
        assert "\033[" not in content

        for handler in logging.getLogger("njdice").handlers:
            handler.close()
        logging.getLogger("njdice").handlers.clear()
