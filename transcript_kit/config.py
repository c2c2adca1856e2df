from __future__ import annotations

import os
from pathlib import Path
from typing import Annotated, Any, Literal

from pydantic import Field, ValidationInfo, field_validator
from pydantic_settings import (
    BaseSettings,
    NoDecode,
    PydanticBaseSettingsSource,
    SettingsConfigDict,
    YamlConfigSettingsSource,
)

from transcript_kit.services.activity_parser import DEFAULT_TIMESTAMP_FORMAT
from transcript_kit.services.caption_tracks import DEFAULT_PREFERRED_LANGUAGE_CODES
from transcript_kit.services.http_fetcher import DEFAULT_USER_AGENT

ENV_PREFIX = "TRANSCRIPT_KIT_"
CONFIG_FILE_ENV = f"{ENV_PREFIX}CONFIG_FILE"
DEFAULT_CONFIG_FILE = Path("~/.config/transcript-kit/config.yaml")
LOG_LEVELS: frozenset[str] = frozenset({"DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"})
_BOOLEAN_COERCION_FIELDS: tuple[str, ...] = ("telemetry_enabled",)
_NON_EMPTY_TEXT_FIELDS: tuple[str, ...] = (
    "http_user_agent",
    "http_accept_language",
    "activity_timestamp_format",
)


def config_file_path() -> Path:
    raw_path = os.environ.get(CONFIG_FILE_ENV, "").strip()
    path = Path(raw_path) if raw_path else DEFAULT_CONFIG_FILE
    return path.expanduser()


def _parse_bool_with_default(value: Any, *, default: bool) -> bool:
    if value is None:
        return default
    if isinstance(value, bool):
        return value
    if isinstance(value, int):
        return {1: True, 0: False}.get(value, default)
    if not isinstance(value, str):
        return default

    normalized = value.strip().lower()
    if normalized in {"1", "true", "yes", "on"}:
        return True
    if normalized in {"0", "false", "no", "off"}:
        return False
    return default


class KitSettings(BaseSettings):
    """
    Runtime configuration for fetching and parsing.

    Values come from `TRANSCRIPT_KIT_*` environment variables, a `.env` file,
    or the YAML file named by `TRANSCRIPT_KIT_CONFIG_FILE`
    (default `~/.config/transcript-kit/config.yaml`), in that order of precedence.
    """

    model_config = SettingsConfigDict(
        env_prefix=ENV_PREFIX,
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
        frozen=True,
    )

    # Network fetching.
    http_timeout_seconds: float = Field(
        default=15.0,
        gt=0,
        le=300,
        description="Socket timeout for watch-page and caption-track requests.",
    )
    http_user_agent: str = Field(
        default=DEFAULT_USER_AGENT,
        description="User-Agent header sent with every request.",
    )
    http_accept_language: str = Field(
        default="en-US,en;q=0.9",
        description="Accept-Language header; controls the locale of the watch page.",
    )

    # Extraction.
    preferred_language_codes: Annotated[tuple[str, ...], NoDecode] = Field(
        default=DEFAULT_PREFERRED_LANGUAGE_CODES,
        description=(
            "Caption language codes tried first, in order. "
            "Comma-separated in the environment, e.g. `en,en-US`."
        ),
    )
    activity_timestamp_format: str = Field(
        default=DEFAULT_TIMESTAMP_FORMAT,
        description="strptime format for activity timestamps, without the timezone suffix.",
    )

    # Logging and telemetry.
    log_level: str = Field(
        default="WARNING",
        description="Console log level.",
    )
    log_dir: Path | None = Field(
        default=None,
        description="When set, JSON logs are also written to `<log_dir>/transcript-kit.log`.",
    )
    telemetry_enabled: bool = Field(
        default=False,
        description="Emit telemetry events for fetch and parse operations.",
    )
    telemetry_sink: Literal["none", "log"] = Field(
        default="log",
        description="Telemetry sink backend. `log` emits structured log events.",
    )

    @classmethod
    def settings_customise_sources(
        cls,
        settings_cls: type[BaseSettings],
        init_settings: PydanticBaseSettingsSource,
        env_settings: PydanticBaseSettingsSource,
        dotenv_settings: PydanticBaseSettingsSource,
        file_secret_settings: PydanticBaseSettingsSource,
    ) -> tuple[PydanticBaseSettingsSource, ...]:
        return (
            init_settings,
            env_settings,
            dotenv_settings,
            YamlConfigSettingsSource(settings_cls, yaml_file=config_file_path()),
            file_secret_settings,
        )

    @field_validator("preferred_language_codes", mode="before")
    @classmethod
    def _normalize_language_codes(cls, value: Any) -> tuple[str, ...]:
        if isinstance(value, str):
            raw_codes: list[Any] = value.split(",")
        elif isinstance(value, list | tuple):
            raw_codes = list(value)
        else:
            raise ValueError(f"{ENV_PREFIX}PREFERRED_LANGUAGE_CODES must be a list of codes.")
        codes = [str(code).strip() for code in raw_codes if str(code).strip()]
        if not codes:
            raise ValueError(f"{ENV_PREFIX}PREFERRED_LANGUAGE_CODES must not be empty.")
        return tuple(dict.fromkeys(codes))

    @field_validator("log_level", mode="before")
    @classmethod
    def _normalize_log_level(cls, value: Any) -> str:
        if not isinstance(value, str):
            raise ValueError(f"{ENV_PREFIX}LOG_LEVEL must be a string.")
        normalized = value.strip().upper()
        if normalized in LOG_LEVELS:
            return normalized
        raise ValueError(f"{ENV_PREFIX}LOG_LEVEL must be one of: {', '.join(sorted(LOG_LEVELS))}.")

    @field_validator("telemetry_sink", mode="before")
    @classmethod
    def _normalize_telemetry_sink(cls, value: Any) -> str:
        if not isinstance(value, str):
            raise ValueError(f"{ENV_PREFIX}TELEMETRY_SINK must be a string.")
        normalized = value.strip().lower()
        if normalized in {"none", "log"}:
            return normalized
        raise ValueError(f"{ENV_PREFIX}TELEMETRY_SINK must be set to: none, log.")

    @field_validator(*_NON_EMPTY_TEXT_FIELDS, mode="before")
    @classmethod
    def _normalize_text(cls, value: Any, info: ValidationInfo) -> str:
        if not isinstance(value, str) or not value.strip():
            raise ValueError(f"{ENV_PREFIX}{str(info.field_name).upper()} must not be empty.")
        return value.strip()

    @field_validator("log_dir", mode="before")
    @classmethod
    def _normalize_log_dir(cls, value: Any) -> Path | None:
        if value is None or (isinstance(value, str) and not value.strip()):
            return None
        return Path(value).expanduser().resolve()

    @field_validator(*_BOOLEAN_COERCION_FIELDS, mode="before")
    @classmethod
    def _normalize_booleans(cls, value: Any, info: ValidationInfo) -> bool:
        field_name = info.field_name
        assert field_name is not None
        default_value = cls.model_fields[field_name].default
        assert isinstance(default_value, bool)
        return _parse_bool_with_default(value, default=default_value)


def load_settings(**overrides: Any) -> KitSettings:
    return KitSettings(**overrides)
