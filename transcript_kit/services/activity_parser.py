from __future__ import annotations

import logging
import re
from collections.abc import Callable
from datetime import datetime, timedelta, timezone
from pathlib import Path
from urllib.parse import unquote_plus

from transcript_kit.errors import ActivityParseError, InvalidHTMLFormatError
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
from transcript_kit.models.video_contracts import watch_url
from transcript_kit.services.html_entities import decode_html_entities

LOGGER = logging.getLogger("transcript_kit.activity")

DEFAULT_TIMESTAMP_FORMAT = "%b %d, %Y, %I:%M:%S %p"

BLOCK_PATTERN = re.compile(
    r'<div class="outer-cell mdl-cell mdl-cell--12-col mdl-shadow--2dp">.*?'
    r"</div>\s*</div>\s*</div>",
    re.DOTALL,
)
ACTION_PATTERN = re.compile(
    r'<div class="content-cell mdl-cell mdl-cell--6-col mdl-typography--body-1">'
    r'([^<]+?)(?:https://|<a href=")'
)
TIMESTAMP_PATTERN = re.compile(r"<br>([^<]+(?:AM|PM) [A-Z]+)")

_HOST = r'(?:https://)?www\.youtube\.com'
VIDEO_ANCHOR_PATTERN = re.compile(rf'<a href="{_HOST}/watch\?v=([^"]+)">([^<]+)</a>')
VIDEO_BARE_PATTERN = re.compile(r"https://www\.youtube\.com/watch\?v=([^<\s]+)")
POST_PATTERN = re.compile(rf'<a href="{_HOST}/post/([^"]+)">([^<]+)</a>')
CHANNEL_PATTERN = re.compile(rf'<a href="{_HOST}/channel/([^"]+)">([^<]+)</a>')
PLAYLIST_PATTERN = re.compile(rf'<a href="{_HOST}/playlist\?list=([^"]+)">([^<]+)</a>')
SEARCH_PATTERN = re.compile(rf'<a href="{_HOST}/results\?search_query=([^"]+)">([^<]+)</a>')

# Abbreviations seen in English-locale exports; offsets are fixed per abbreviation.
TIMEZONE_OFFSETS: dict[str, float] = {
    "UTC": 0,
    "GMT": 0,
    "WET": 0,
    "WEST": 1,
    "BST": 1,
    "CET": 1,
    "CEST": 2,
    "EET": 2,
    "EEST": 3,
    "MSK": 3,
    "IST": 5.5,
    "SGT": 8,
    "HKT": 8,
    "AWST": 8,
    "JST": 9,
    "KST": 9,
    "ACST": 9.5,
    "ACDT": 10.5,
    "AEST": 10,
    "AEDT": 11,
    "NZST": 12,
    "NZDT": 13,
    "HST": -10,
    "AKST": -9,
    "AKDT": -8,
    "PST": -8,
    "PDT": -7,
    "MST": -7,
    "MDT": -6,
    "CST": -6,
    "CDT": -5,
    "EST": -5,
    "EDT": -4,
    "AST": -4,
    "ADT": -3,
    "NST": -3.5,
    "NDT": -2.5,
}

LinkMatcher = Callable[[str], ActivityLink | None]


def read_activity_file(path: Path) -> str:
    try:
        return path.read_bytes().decode("utf-8")
    except UnicodeDecodeError as exc:
        raise InvalidHTMLFormatError(f"Activity export is not valid UTF-8: {path}") from exc


def parse_activity_html(
    content: str,
    *,
    timestamp_format: str = DEFAULT_TIMESTAMP_FORMAT,
) -> list[Activity]:
    """Parse every activity block of a Takeout ``MyActivity.html`` export.

    The first block that cannot be parsed raises ``ActivityParseError``;
    results keep document order.
    """
    activities: list[Activity] = []
    for match in BLOCK_PATTERN.finditer(content):
        block = match.group(0)
        activities.append(parse_activity_block(block, timestamp_format=timestamp_format))
    LOGGER.debug("activity parse done blocks=%s", len(activities))
    return activities


def parse_activity_block(
    block: str,
    *,
    timestamp_format: str = DEFAULT_TIMESTAMP_FORMAT,
) -> Activity:
    action = _extract_action(block)
    link = classify_link(block)
    if link is None:
        raise ActivityParseError(block, "Could not extract URL")
    timestamp = _extract_timestamp(block, timestamp_format)
    if timestamp is None:
        raise ActivityParseError(block, "Could not extract timestamp")
    return Activity(action=action, link=link, timestamp=timestamp)


def classify_link(block: str) -> ActivityLink | None:
    for matcher in LINK_MATCHERS:
        link = matcher(block)
        if link is not None:
            return link
    return None


def match_video_link(block: str) -> VideoLink | None:
    anchor = VIDEO_ANCHOR_PATTERN.search(block)
    if anchor is not None:
        video_id, title = anchor.group(1), anchor.group(2)
        if title == watch_url(video_id):
            return VideoLink(id=video_id)
        return VideoLink(id=video_id, title=decode_html_entities(title))

    bare = VIDEO_BARE_PATTERN.search(block)
    if bare is not None:
        return VideoLink(id=bare.group(1))
    return None


def match_post_link(block: str) -> PostLink | None:
    match = POST_PATTERN.search(block)
    if match is None:
        return None
    return PostLink(id=match.group(1), text=decode_html_entities(match.group(2)))


def match_channel_link(block: str) -> ChannelLink | None:
    match = CHANNEL_PATTERN.search(block)
    if match is None:
        return None
    return ChannelLink(id=match.group(1), name=decode_html_entities(match.group(2)))


def match_playlist_link(block: str) -> PlaylistLink | None:
    match = PLAYLIST_PATTERN.search(block)
    if match is None:
        return None
    return PlaylistLink(id=match.group(1), title=decode_html_entities(match.group(2)))


def match_search_link(block: str) -> SearchLink | None:
    match = SEARCH_PATTERN.search(block)
    if match is None:
        return None
    return SearchLink(query=unquote_plus(decode_html_entities(match.group(1))))


LINK_MATCHERS: tuple[LinkMatcher, ...] = (
    match_video_link,
    match_post_link,
    match_channel_link,
    match_playlist_link,
    match_search_link,
)


def parse_activity_timestamp(
    raw_value: str,
    *,
    timestamp_format: str = DEFAULT_TIMESTAMP_FORMAT,
) -> datetime | None:
    normalized = " ".join(raw_value.split())
    local_part, _, zone_name = normalized.rpartition(" ")
    offset_hours = TIMEZONE_OFFSETS.get(zone_name)
    if not local_part or offset_hours is None:
        return None
    try:
        naive = datetime.strptime(local_part, timestamp_format)
    except ValueError:
        return None
    return naive.replace(tzinfo=timezone(timedelta(hours=offset_hours), zone_name))


def _extract_action(block: str) -> ActivityAction:
    match = ACTION_PATTERN.search(block)
    if match is None:
        raise ActivityParseError(block, "Could not extract action")
    action_text = " ".join(decode_html_entities(match.group(1)).split()).lower()
    try:
        return ActivityAction(action_text)
    except ValueError:
        raise ActivityParseError(block, f"Unsupported activity type: {action_text}") from None


def _extract_timestamp(block: str, timestamp_format: str) -> datetime | None:
    match = TIMESTAMP_PATTERN.search(block)
    if match is None:
        return None
    return parse_activity_timestamp(match.group(1), timestamp_format=timestamp_format)
