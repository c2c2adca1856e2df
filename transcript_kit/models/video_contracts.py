from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime

YOUTUBE_BASE_URL = "https://www.youtube.com"


def watch_url(video_id: str) -> str:
    return f"{YOUTUBE_BASE_URL}/watch?v={video_id}"


def channel_url(channel_id: str) -> str:
    return f"{YOUTUBE_BASE_URL}/channel/{channel_id}"


@dataclass(frozen=True)
class TranscriptMoment:
    start: float
    duration: float
    text: str


@dataclass(frozen=True)
class TranscriptContainer:
    language_code: str
    vss_id: str
    moments: tuple[TranscriptMoment, ...]

    @property
    def text(self) -> str:
        return "\n".join(moment.text for moment in self.moments if moment.text.strip())


@dataclass(frozen=True)
class CaptionTrack:
    base_url: str
    vss_id: str
    language_code: str

    @property
    def is_auto_generated(self) -> bool:
        return self.vss_id.startswith("a")

    @property
    def fetch_url(self) -> str:
        if self.base_url.startswith("http"):
            return self.base_url
        return f"{YOUTUBE_BASE_URL}{self.base_url}"


@dataclass(frozen=True)
class VideoThumbnail:
    url: str
    width: int | None = None
    height: int | None = None


@dataclass(frozen=True)
class VideoInfo:
    video_id: str | None = None
    title: str | None = None
    channel_id: str | None = None
    channel_name: str | None = None
    description: str | None = None
    published_at: datetime | None = None
    uploaded_at: datetime | None = None
    view_count: int | None = None
    duration_seconds: int | None = None
    category: str | None = None
    is_live: bool | None = None
    thumbnails: tuple[VideoThumbnail, ...] = ()
    channel_url: str | None = None
    video_url: str | None = None
    transcripts: tuple[TranscriptContainer, ...] | None = None
