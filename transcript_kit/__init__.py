from pathlib import Path

from transcript_kit.dependencies import get_service
from transcript_kit.errors import (
    ActivityParseError,
    InvalidHTMLFormatError,
    InvalidURLError,
    InvalidVideoIDError,
    InvalidXMLFormatError,
    NetworkError,
    NoCaptionDataError,
    NoTranscriptDataError,
    NoVideoInfoError,
    TranscriptKitError,
)
from transcript_kit.models.activity_contracts import (
    Activity,
    ActivityAction,
    ActivityLink,
    ChannelLink,
    PlaylistLink,
    PostLink,
    SearchLink,
    VideoLink,
)
from transcript_kit.models.video_contracts import (
    TranscriptContainer,
    TranscriptMoment,
    VideoInfo,
    VideoThumbnail,
)
from transcript_kit.services.youtube_service import YouTubeTranscriptService

__version__ = "1.0.0"


def get_video_info(target: str, *, include_transcript: bool = True) -> VideoInfo:
    return get_service().get_video_info(target, include_transcript=include_transcript)


def get_transcript_containers(target: str) -> list[TranscriptContainer]:
    return get_service().get_transcript_containers(target)


def get_transcript(target: str) -> TranscriptContainer:
    return get_service().get_transcript(target)


def get_activity(path: str | Path) -> list[Activity]:
    return get_service().get_activity(Path(path))


__all__ = [
    "Activity",
    "ActivityAction",
    "ActivityLink",
    "ActivityParseError",
    "ChannelLink",
    "InvalidHTMLFormatError",
    "InvalidURLError",
    "InvalidVideoIDError",
    "InvalidXMLFormatError",
    "NetworkError",
    "NoCaptionDataError",
    "NoTranscriptDataError",
    "NoVideoInfoError",
    "PlaylistLink",
    "PostLink",
    "SearchLink",
    "TranscriptContainer",
    "TranscriptKitError",
    "TranscriptMoment",
    "VideoInfo",
    "VideoLink",
    "VideoThumbnail",
    "YouTubeTranscriptService",
    "get_activity",
    "get_transcript",
    "get_transcript_containers",
    "get_video_info",
]
