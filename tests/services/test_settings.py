"""Tests for environment-driven settings and logger setup."""

from unittest.mock import patch

from loguru import logger

from mealgen.config.settings import Settings
from mealgen.core.logger import setup_logger


def test_defaults(monkeypatch):
    for name in ("LLM_PROVIDER", "LLM_MODEL", "LLM_TIMEOUT_SECONDS", "LLM_MAX_TOKENS", "LOG_LEVEL"):
        monkeypatch.delenv(name, raising=False)

    settings = Settings(_env_file=None)

    assert settings.llm_provider == "openai"
    assert settings.llm_timeout_seconds == 30.0
    assert settings.llm_max_tokens == 2000
    assert settings.log_level == "INFO"


def test_environment_overrides(monkeypatch):
    monkeypatch.setenv("LLM_PROVIDER", " Groq ")
    monkeypatch.setenv("LLM_MAX_TOKENS", "4000")
    monkeypatch.setenv("LOG_LEVEL", "debug")

    settings = Settings(_env_file=None)

    assert settings.llm_provider == "groq"
    assert settings.llm_max_tokens == 4000
    assert settings.log_level == "DEBUG"


def test_invalid_log_level_defaults_to_info(monkeypatch):
    monkeypatch.setenv("LOG_LEVEL", "verbose")

    assert Settings(_env_file=None).log_level == "INFO"


def test_setup_logger_creates_file_sink(tmp_path):
    log_file = tmp_path / "logs" / "mealgen.log"

    setup_logger(level="DEBUG", log_file=str(log_file))
    logger.debug("settings_test: File sink ready", sink="file")

    assert log_file.parent.is_dir()
    assert log_file.exists()

    logger.remove()


def test_log_serialize_from_environment(monkeypatch):
    monkeypatch.setenv("LOG_SERIALIZE", "true")

    assert Settings(_env_file=None).log_serialize is True


def test_setup_logger_serializes_file_sink_from_settings(tmp_path):
    log_file = tmp_path / "mealgen.log"

    with (
        patch("mealgen.core.logger.settings") as mock_settings,
        patch("mealgen.core.logger.logger") as mock_logger,
    ):
        mock_settings.log_serialize = True
        setup_logger(level="INFO", log_file=str(log_file))

    file_sink = mock_logger.add.call_args_list[1]
    assert file_sink.args == (log_file,)
    assert file_sink.kwargs["serialize"] is True


def test_setup_logger_serialize_argument_wins(tmp_path):
    with (
        patch("mealgen.core.logger.settings") as mock_settings,
        patch("mealgen.core.logger.logger") as mock_logger,
    ):
        mock_settings.log_serialize = True
        setup_logger(level="INFO", log_file=str(tmp_path / "mealgen.log"), serialize=False)

    assert mock_logger.add.call_args_list[1].kwargs["serialize"] is False
