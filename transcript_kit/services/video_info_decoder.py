from __future__ import annotations

from datetime import UTC, datetime

from transcript_kit.errors import NoVideoInfoError
from transcript_kit.models.player_response import (
    PlayerMicroformatPayload,
    TextPayload,
    VideoDetailsPayload,
    VideoResponsePayload,
)
from transcript_kit.models.video_contracts import (
    VideoInfo,
    VideoThumbnail,
    channel_url,
    watch_url,
)
from transcript_kit.services.embedded_blob import decode_first


def extract_video_info(html_text: str) -> VideoInfo:
    video_info = decode_first(html_text, decode_video_info)
    if video_info is None:
        raise NoVideoInfoError("No embedded player response yielded video details.")
    return video_info


def decode_video_info(document: str) -> VideoInfo:
    response = VideoResponsePayload.model_validate_json(document)
    details = response.video_details
    microformat = _microformat(response)

    return VideoInfo(
        video_id=details.video_id,
        title=details.title or _joined(microformat.title),
        channel_id=details.channel_id or microformat.external_channel_id,
        channel_name=details.author or microformat.owner_channel_name,
        description=(
            details.short_description
            if details.short_description is not None
            else _joined(microformat.description)
        ),
        published_at=_parse_date(microformat.publish_date),
        uploaded_at=_parse_date(microformat.upload_date),
        view_count=_parse_int(details.view_count),
        duration_seconds=_duration_seconds(details, microformat),
        category=microformat.category,
        is_live=_is_live(details, microformat),
        thumbnails=_thumbnails(details),
        channel_url=_channel_url(details, microformat),
        video_url=watch_url(details.video_id),
    )


def _microformat(response: VideoResponsePayload) -> PlayerMicroformatPayload:
    if response.microformat is None or response.microformat.player_microformat_renderer is None:
        return PlayerMicroformatPayload()
    return response.microformat.player_microformat_renderer


def _joined(text: TextPayload | None) -> str | None:
    if text is None:
        return None
    return text.joined()


def _parse_int(raw_value: str | int | None) -> int | None:
    if raw_value is None:
        return None
    if isinstance(raw_value, int):
        return raw_value
    try:
        return int(raw_value.strip())
    except ValueError:
        return None


def _duration_seconds(
    details: VideoDetailsPayload,
    microformat: PlayerMicroformatPayload,
) -> int | None:
    if details.length_seconds is not None:
        return _parse_int(details.length_seconds)
    return _parse_int(microformat.length_seconds)


def _parse_date(raw_value: str | None) -> datetime | None:
    # Newer responses carry full ISO-8601 timestamps, older ones yyyy-MM-dd.
    if not raw_value:
        return None
    try:
        parsed = datetime.fromisoformat(raw_value.strip())
    except ValueError:
        return None
    if parsed.tzinfo is None:
        return parsed.replace(tzinfo=UTC)
    return parsed


def _is_live(details: VideoDetailsPayload, microformat: PlayerMicroformatPayload) -> bool | None:
    live_details = microformat.live_broadcast_details
    if live_details is not None and live_details.is_live_now is not None:
        return live_details.is_live_now
    return details.is_live


def _thumbnails(details: VideoDetailsPayload) -> tuple[VideoThumbnail, ...]:
    if details.thumbnail is None:
        return ()
    return tuple(
        VideoThumbnail(url=thumb.url, width=thumb.width, height=thumb.height)
        for thumb in details.thumbnail.thumbnails
    )


def _channel_url(
    details: VideoDetailsPayload,
    microformat: PlayerMicroformatPayload,
) -> str | None:
    channel_id = details.channel_id or microformat.external_channel_id
    if channel_id:
        return channel_url(channel_id)
    return microformat.owner_profile_url
