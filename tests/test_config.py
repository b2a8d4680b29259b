"""Tests for Settings and logging setup."""

from __future__ import annotations

import logging

import pytest

from safetell.config import DEFAULT_TIMEOUT_MS, Settings, configure_logging
from safetell.errors import ConfigurationError


class TestSettings:
    """Tests for Settings.from_env."""

    def test_defaults(self) -> None:
        settings = Settings.from_env({})
        assert settings == Settings()
        assert settings.default_timeout_ms == DEFAULT_TIMEOUT_MS == 30_000
        assert settings.enable_validation is True
        assert settings.log_level == "INFO"

    def test_reads_environment(self) -> None:
        settings = Settings.from_env(
            {
                "SAFETELL_TIMEOUT_MS": "5000",
                "SAFETELL_ENABLE_VALIDATION": "false",
                "SAFETELL_LOG_LEVEL": "debug",
            }
        )
        assert settings.default_timeout_ms == 5000
        assert settings.enable_validation is False
        assert settings.log_level == "DEBUG"

    def test_log_level_fallback_and_warn_alias(self) -> None:
        assert Settings.from_env({"LOG_LEVEL": "warn"}).log_level == "WARNING"

    @pytest.mark.parametrize(
        "env",
        [
            {"SAFETELL_TIMEOUT_MS": "soon"},
            {"SAFETELL_TIMEOUT_MS": "-1"},
            {"SAFETELL_ENABLE_VALIDATION": "maybe"},
            {"SAFETELL_LOG_LEVEL": "LOUD"},
        ],
    )
    def test_rejects_bad_values(self, env: dict[str, str]) -> None:
        with pytest.raises(ConfigurationError) as exc_info:
            Settings.from_env(env)
        assert exc_info.value.code == "CONFIGURATION_ERROR"


class TestConfigureLogging:
    """Tests for configure_logging."""

    def test_installs_single_handler(self) -> None:
        logger = configure_logging("DEBUG")
        configure_logging("INFO")
        try:
            ours = [h for h in logger.handlers if getattr(h, "_safetell", False)]
            assert len(ours) == 1
            assert logger.level == logging.INFO
        finally:
            for handler in ours:
                logger.removeHandler(handler)
            logger.setLevel(logging.NOTSET)
