from __future__ import annotations

from functools import lru_cache

from transcript_kit.config import KitSettings, load_settings
from transcript_kit.services.http_fetcher import UrllibFetcher
from transcript_kit.services.youtube_service import YouTubeTranscriptService
from transcript_kit.telemetry import TelemetryClient, build_telemetry_client


@lru_cache(maxsize=1)
def get_settings() -> KitSettings:
    return load_settings()


@lru_cache(maxsize=1)
def get_telemetry_client() -> TelemetryClient:
    settings = get_settings()
    return build_telemetry_client(
        enabled=settings.telemetry_enabled,
        sink=settings.telemetry_sink,
    )


@lru_cache(maxsize=1)
def get_service() -> YouTubeTranscriptService:
    return build_service(get_settings(), telemetry=get_telemetry_client())


def build_service(
    settings: KitSettings,
    *,
    telemetry: TelemetryClient | None = None,
) -> YouTubeTranscriptService:
    return YouTubeTranscriptService(
        fetcher=UrllibFetcher(
            timeout_seconds=settings.http_timeout_seconds,
            user_agent=settings.http_user_agent,
            accept_language=settings.http_accept_language,
        ),
        preferred_language_codes=settings.preferred_language_codes,
        activity_timestamp_format=settings.activity_timestamp_format,
        telemetry=telemetry,
    )


def reset_cached_dependencies() -> None:
    get_service.cache_clear()
    get_telemetry_client.cache_clear()
    get_settings.cache_clear()
