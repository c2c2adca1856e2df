from __future__ import annotations

import io
import json
import logging
from collections.abc import Iterator
from pathlib import Path

import pytest
from pydantic import ValidationError

from transcript_kit import dependencies
from transcript_kit.config import KitSettings, config_file_path, load_settings
from transcript_kit.logging_config import ROOT_LOGGER_NAME, configure_logging


@pytest.fixture
def _restore_logger() -> Iterator[None]:
    yield
    logger = logging.getLogger(ROOT_LOGGER_NAME)
    for handler in list(logger.handlers):
        logger.removeHandler(handler)
        handler.close()
    logger.propagate = True
    logger.setLevel(logging.NOTSET)


def test_defaults() -> None:
    settings = load_settings()

    assert settings.http_timeout_seconds == 15.0
    assert settings.preferred_language_codes == ("en", "en-US")
    assert settings.activity_timestamp_format == "%b %d, %Y, %I:%M:%S %p"
    assert settings.log_level == "WARNING"
    assert settings.log_dir is None
    assert settings.telemetry_enabled is False
    assert settings.telemetry_sink == "log"


def test_environment_overrides(monkeypatch: pytest.MonkeyPatch, tmp_path: Path) -> None:
    monkeypatch.setenv("TRANSCRIPT_KIT_PREFERRED_LANGUAGE_CODES", " fr, en ,fr,, ")
    monkeypatch.setenv("TRANSCRIPT_KIT_HTTP_TIMEOUT_SECONDS", "2.5")
    monkeypatch.setenv("TRANSCRIPT_KIT_LOG_LEVEL", "debug")
    monkeypatch.setenv("TRANSCRIPT_KIT_LOG_DIR", str(tmp_path / "logs"))
    monkeypatch.setenv("TRANSCRIPT_KIT_TELEMETRY_ENABLED", "yes")
    monkeypatch.setenv("TRANSCRIPT_KIT_TELEMETRY_SINK", " NONE ")

    settings = load_settings()

    assert settings.preferred_language_codes == ("fr", "en")
    assert settings.http_timeout_seconds == 2.5
    assert settings.log_level == "DEBUG"
    assert settings.log_dir == (tmp_path / "logs").resolve()
    assert settings.telemetry_enabled is True
    assert settings.telemetry_sink == "none"


def test_unrecognized_boolean_falls_back_to_default(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setenv("TRANSCRIPT_KIT_TELEMETRY_ENABLED", "maybe")

    assert load_settings().telemetry_enabled is False


@pytest.mark.parametrize(
    ("name", "value"),
    [
        ("TRANSCRIPT_KIT_LOG_LEVEL", "loud"),
        ("TRANSCRIPT_KIT_HTTP_TIMEOUT_SECONDS", "0"),
        ("TRANSCRIPT_KIT_PREFERRED_LANGUAGE_CODES", " , "),
        ("TRANSCRIPT_KIT_TELEMETRY_SINK", "otlp"),
        ("TRANSCRIPT_KIT_HTTP_USER_AGENT", "   "),
    ],
)
def test_invalid_values_are_rejected(
    monkeypatch: pytest.MonkeyPatch,
    name: str,
    value: str,
) -> None:
    monkeypatch.setenv(name, value)

    with pytest.raises(ValidationError):
        load_settings()


def test_yaml_config_file_is_read(monkeypatch: pytest.MonkeyPatch, tmp_path: Path) -> None:
    config_file = tmp_path / "config.yaml"
    config_file.write_text(
        "preferred_language_codes:\n"
        "  - de\n"
        "  - en\n"
        "log_level: error\n"
        "http_accept_language: de-DE\n",
        encoding="utf-8",
    )
    monkeypatch.setenv("TRANSCRIPT_KIT_CONFIG_FILE", str(config_file))
    monkeypatch.setenv("TRANSCRIPT_KIT_LOG_LEVEL", "info")

    settings = load_settings()

    assert config_file_path() == config_file
    assert settings.preferred_language_codes == ("de", "en")
    assert settings.http_accept_language == "de-DE"
    assert settings.log_level == "INFO"


def test_settings_are_frozen() -> None:
    settings = load_settings()

    with pytest.raises(ValidationError):
        settings.log_level = "DEBUG"  # type: ignore[misc]


def test_dependencies_are_cached_until_reset(monkeypatch: pytest.MonkeyPatch) -> None:
    first = dependencies.get_settings()
    assert dependencies.get_settings() is first
    assert dependencies.get_service() is dependencies.get_service()

    monkeypatch.setenv("TRANSCRIPT_KIT_LOG_LEVEL", "error")
    dependencies.reset_cached_dependencies()

    assert dependencies.get_settings().log_level == "ERROR"


@pytest.mark.usefixtures("_restore_logger")
def test_configure_logging_writes_json_file(tmp_path: Path) -> None:
    settings = KitSettings(log_level="ERROR", log_dir=str(tmp_path / "logs"))
    console = io.StringIO()

    log_file = configure_logging(settings, stream=console)
    logging.getLogger("transcript_kit.test").info("fetch done video_id=%s", "abc123")
    for handler in logging.getLogger(ROOT_LOGGER_NAME).handlers:
        handler.flush()

    assert log_file == (tmp_path / "logs" / "transcript-kit.log").resolve()
    records = [json.loads(line) for line in log_file.read_text(encoding="utf-8").splitlines()]
    event = records[-1]
    assert event["event"] == "fetch done video_id=abc123"
    assert event["level"] == "info"
    assert event["logger"] == "transcript_kit.test"
    assert "timestamp" in event
    assert console.getvalue() == ""


@pytest.mark.usefixtures("_restore_logger")
def test_configure_logging_console_respects_level() -> None:
    console = io.StringIO()

    assert configure_logging(KitSettings(log_level="WARNING"), stream=console) is None
    logging.getLogger("transcript_kit.test").info("quiet")
    logging.getLogger("transcript_kit.test").warning("loud track_count=%s", 2)

    output = console.getvalue()
    assert "quiet" not in output
    assert "loud track_count=2" in output
