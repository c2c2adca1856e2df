from __future__ import annotations

import logging
from collections.abc import Sequence
from dataclasses import replace
from pathlib import Path

from transcript_kit.errors import (
    InvalidHTMLFormatError,
    NoTranscriptDataError,
    TranscriptKitError,
)
from transcript_kit.models.activity_contracts import Activity
from transcript_kit.models.video_contracts import (
    CaptionTrack,
    TranscriptContainer,
    VideoInfo,
)
from transcript_kit.services.activity_parser import (
    DEFAULT_TIMESTAMP_FORMAT,
    parse_activity_html,
    read_activity_file,
)
from transcript_kit.services.caption_tracks import (
    DEFAULT_PREFERRED_LANGUAGE_CODES,
    extract_caption_tracks,
)
from transcript_kit.services.entity_resolver import resolve_watch_url
from transcript_kit.services.http_fetcher import Fetcher, UrllibFetcher
from transcript_kit.services.transcript_xml import decode_transcript_body, parse_transcript_xml
from transcript_kit.services.video_info_decoder import extract_video_info
from transcript_kit.telemetry import TelemetryClient

LOGGER = logging.getLogger("transcript_kit.youtube")


class YouTubeTranscriptService:
    def __init__(
        self,
        *,
        fetcher: Fetcher | None = None,
        preferred_language_codes: Sequence[str] = DEFAULT_PREFERRED_LANGUAGE_CODES,
        activity_timestamp_format: str = DEFAULT_TIMESTAMP_FORMAT,
        telemetry: TelemetryClient | None = None,
    ) -> None:
        self._fetcher: Fetcher = fetcher if fetcher is not None else UrllibFetcher()
        self._preferred_language_codes = tuple(preferred_language_codes)
        self._activity_timestamp_format = activity_timestamp_format
        self._telemetry = telemetry if telemetry is not None else TelemetryClient.disabled()

    def get_video_info(self, target: str, *, include_transcript: bool = True) -> VideoInfo:
        with self._telemetry.timed(
            "video_info.fetch",
            captions_requested=include_transcript,
        ) as event:
            url = resolve_watch_url(target)
            html_text = self._fetch_watch_page(url)
            video_info = extract_video_info(html_text)
            event["video_id"] = video_info.video_id

            if not include_transcript:
                return video_info

            transcripts: tuple[TranscriptContainer, ...] | None = None
            try:
                transcripts = tuple(self._collect_containers(self._caption_tracks(html_text)))
            except TranscriptKitError as exc:
                LOGGER.info(
                    "youtube video_info transcript_unavailable video_id=%s reason=%s",
                    video_info.video_id,
                    type(exc).__name__,
                )
            event["container_count"] = len(transcripts) if transcripts is not None else 0
            return replace(video_info, transcripts=transcripts)

    def get_transcript_containers(self, target: str) -> list[TranscriptContainer]:
        """Fetch every caption track in priority order, skipping failed ones."""
        with self._telemetry.timed("transcript.fetch", mode="all") as event:
            url = resolve_watch_url(target)
            tracks = self._caption_tracks(self._fetch_watch_page(url))
            event["track_count"] = len(tracks)
            containers = self._collect_containers(tracks)
            event["container_count"] = len(containers)
            return containers

    def get_transcript(self, target: str) -> TranscriptContainer:
        """Return the first caption track, in priority order, that fetches and parses."""
        with self._telemetry.timed("transcript.fetch", mode="first") as event:
            url = resolve_watch_url(target)
            tracks = self._caption_tracks(self._fetch_watch_page(url))
            event["track_count"] = len(tracks)
            for attempt, track in enumerate(tracks, start=1):
                try:
                    container = self._fetch_container(track)
                except TranscriptKitError as exc:
                    self._log_track_failure(track, exc)
                    continue
                event["attempts"] = attempt
                event["language_code"] = container.language_code
                return container
            raise NoTranscriptDataError(
                f"None of the {len(tracks)} caption tracks could be fetched and parsed."
            )

    def get_activity(self, path: Path) -> list[Activity]:
        with self._telemetry.timed("activity.parse") as event:
            content = read_activity_file(path)
            activities = parse_activity_html(
                content,
                timestamp_format=self._activity_timestamp_format,
            )
            event["activity_count"] = len(activities)
            return activities

    def _fetch_watch_page(self, url: str) -> str:
        body = self._fetcher.fetch(url)
        try:
            return body.decode("utf-8")
        except UnicodeDecodeError as exc:
            raise InvalidHTMLFormatError(f"Watch page is not valid UTF-8: {url}") from exc

    def _caption_tracks(self, html_text: str) -> list[CaptionTrack]:
        return extract_caption_tracks(
            html_text,
            preferred_language_codes=self._preferred_language_codes,
        )

    def _collect_containers(self, tracks: Sequence[CaptionTrack]) -> list[TranscriptContainer]:
        containers: list[TranscriptContainer] = []
        for track in tracks:
            try:
                containers.append(self._fetch_container(track))
            except TranscriptKitError as exc:
                self._log_track_failure(track, exc)
        if not containers:
            raise NoTranscriptDataError(
                f"None of the {len(tracks)} caption tracks could be fetched and parsed."
            )
        return containers

    def _fetch_container(self, track: CaptionTrack) -> TranscriptContainer:
        body = self._fetcher.fetch(track.fetch_url)
        moments = parse_transcript_xml(decode_transcript_body(body))
        LOGGER.debug(
            "youtube transcript track_done language=%s vss_id=%s moments=%s",
            track.language_code,
            track.vss_id,
            len(moments),
        )
        return TranscriptContainer(
            language_code=track.language_code,
            vss_id=track.vss_id,
            moments=tuple(moments),
        )

    def _log_track_failure(self, track: CaptionTrack, exc: TranscriptKitError) -> None:
        LOGGER.warning(
            "youtube transcript track_skipped language=%s vss_id=%s reason=%s",
            track.language_code,
            track.vss_id,
            exc,
        )
