from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime
from enum import StrEnum
from typing import Literal
from urllib.parse import quote_plus

from transcript_kit.models.video_contracts import YOUTUBE_BASE_URL, channel_url, watch_url


class ActivityAction(StrEnum):
    WATCHED = "watched"
    WATCHED_STORY = "watched story"
    VIEWED = "viewed"
    LIKED = "liked"
    DISLIKED = "disliked"
    SUBSCRIBED_TO = "subscribed to"
    ANSWERED = "answered"
    VOTED_ON = "voted on"
    SAVED = "saved"
    SEARCHED_FOR = "searched for"


@dataclass(frozen=True)
class VideoLink:
    id: str
    title: str | None = None
    kind: Literal["video"] = "video"

    @property
    def url(self) -> str:
        return watch_url(self.id)


@dataclass(frozen=True)
class PostLink:
    id: str
    text: str
    kind: Literal["post"] = "post"

    @property
    def url(self) -> str:
        return f"{YOUTUBE_BASE_URL}/post/{self.id}"


@dataclass(frozen=True)
class ChannelLink:
    id: str
    name: str
    kind: Literal["channel"] = "channel"

    @property
    def url(self) -> str:
        return channel_url(self.id)


@dataclass(frozen=True)
class PlaylistLink:
    id: str
    title: str
    kind: Literal["playlist"] = "playlist"

    @property
    def url(self) -> str:
        return f"{YOUTUBE_BASE_URL}/playlist?list={self.id}"


@dataclass(frozen=True)
class SearchLink:
    query: str
    kind: Literal["search"] = "search"

    @property
    def url(self) -> str:
        return f"{YOUTUBE_BASE_URL}/results?search_query={quote_plus(self.query)}"


ActivityLink = VideoLink | PostLink | ChannelLink | PlaylistLink | SearchLink


@dataclass(frozen=True)
class Activity:
    action: ActivityAction
    link: ActivityLink
    timestamp: datetime


def describe_link(link: ActivityLink) -> str:
    match link:
        case VideoLink(id=video_id, title=title):
            return title or video_id
        case PostLink(text=text):
            return text
        case ChannelLink(name=name):
            return name
        case PlaylistLink(title=title):
            return title
        case SearchLink(query=query):
            return query
