"""Tests for environment-driven settings."""

from ultimatexo.config import Settings


def test_defaults():
    settings = Settings.from_env({})
    assert settings.host == "0.0.0.0"
    assert settings.port == 8000
    assert settings.log_level == "INFO"
    assert settings.ai_max_depth == 6
    assert settings.ai_delay == 0.5


def test_overrides():
    settings = Settings.from_env(
        {
            "ULTIMATEXO_HOST": "127.0.0.1",
            "ULTIMATEXO_PORT": "9001",
            "ULTIMATEXO_LOG_LEVEL": "debug",
            "ULTIMATEXO_AI_MAX_DEPTH": "4",
            "ULTIMATEXO_AI_DELAY": "0",
        }
    )
    assert settings.host == "127.0.0.1"
    assert settings.port == 9001
    assert settings.log_level == "DEBUG"
    assert settings.ai_max_depth == 4
    assert settings.ai_delay == 0.0


def test_zero_or_blank_depth_means_exhaustive():
    assert Settings.from_env({"ULTIMATEXO_AI_MAX_DEPTH": "0"}).ai_max_depth is None
    assert Settings.from_env({"ULTIMATEXO_AI_MAX_DEPTH": ""}).ai_max_depth is None
