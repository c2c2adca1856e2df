from __future__ import annotations

from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel


class _PayloadModel(BaseModel):
    model_config = ConfigDict(extra="ignore", alias_generator=to_camel, populate_by_name=True)


class TextRunPayload(_PayloadModel):
    text: str = ""


class TextPayload(_PayloadModel):
    runs: list[TextRunPayload] = Field(default_factory=list)
    simple_text: str | None = None

    def joined(self) -> str | None:
        if self.runs:
            return "".join(run.text for run in self.runs)
        return self.simple_text


class ThumbnailPayload(_PayloadModel):
    url: str
    width: int | None = None
    height: int | None = None


class ThumbnailListPayload(_PayloadModel):
    thumbnails: list[ThumbnailPayload] = Field(default_factory=list)


class VideoDetailsPayload(_PayloadModel):
    video_id: str
    title: str | None = None
    length_seconds: str | int | None = None
    channel_id: str | None = None
    short_description: str | None = None
    view_count: str | int | None = None
    author: str | None = None
    is_live: bool | None = None
    thumbnail: ThumbnailListPayload | None = None


class LiveBroadcastDetailsPayload(_PayloadModel):
    is_live_now: bool | None = None
    start_timestamp: str | None = None
    end_timestamp: str | None = None


class PlayerMicroformatPayload(_PayloadModel):
    title: TextPayload | None = None
    description: TextPayload | None = None
    length_seconds: str | int | None = None
    external_channel_id: str | None = None
    category: str | None = None
    publish_date: str | None = None
    upload_date: str | None = None
    owner_channel_name: str | None = None
    owner_profile_url: str | None = None
    live_broadcast_details: LiveBroadcastDetailsPayload | None = None


class MicroformatPayload(_PayloadModel):
    player_microformat_renderer: PlayerMicroformatPayload | None = None


class VideoResponsePayload(_PayloadModel):
    video_details: VideoDetailsPayload
    microformat: MicroformatPayload | None = None


class CaptionTrackPayload(_PayloadModel):
    base_url: str
    language_code: str
    vss_id: str = ""


class CaptionTrackListPayload(_PayloadModel):
    caption_tracks: list[CaptionTrackPayload]


class CaptionsPayload(_PayloadModel):
    player_captions_tracklist_renderer: CaptionTrackListPayload


class CaptionsResponsePayload(_PayloadModel):
    captions: CaptionsPayload
