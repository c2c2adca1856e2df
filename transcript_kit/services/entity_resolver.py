from __future__ import annotations

import re
from urllib.parse import urlparse

from transcript_kit.errors import InvalidURLError, InvalidVideoIDError
from transcript_kit.models.video_contracts import watch_url

YOUTUBE_HOST_MARKERS: tuple[str, ...] = ("youtube.com", "youtu.be")
VIDEO_ID_PATTERN = re.compile(r"^[A-Za-z0-9_-]+$")
UNSENDABLE_URL_PATTERN = re.compile(r"[\x00-\x20\x7f]")


def resolve_watch_url(target: str) -> str:
    candidate = target.strip()
    if any(marker in candidate for marker in YOUTUBE_HOST_MARKERS):
        url = _parse_youtube_url(candidate)
        if url is not None:
            return url
    return watch_url_from_id(candidate)


def watch_url_from_id(video_id: str) -> str:
    normalized = video_id.strip()
    if not normalized:
        raise InvalidVideoIDError("Video ID must not be empty.")
    if VIDEO_ID_PATTERN.fullmatch(normalized) is None:
        raise InvalidURLError(f"Cannot build a watch URL from video ID: {normalized!r}")
    return watch_url(normalized)


def _parse_youtube_url(candidate: str) -> str | None:
    if UNSENDABLE_URL_PATTERN.search(candidate) is not None:
        raise InvalidURLError(f"URL contains whitespace or control characters: {candidate!r}")
    if "://" not in candidate:
        candidate = f"https://{candidate}"
    parsed = urlparse(candidate)
    if parsed.scheme not in {"http", "https"} or not parsed.netloc:
        return None
    return candidate
