from __future__ import annotations

import json
from collections.abc import Callable, Iterator, Mapping
from typing import Any

import pytest

from transcript_kit.dependencies import reset_cached_dependencies
from transcript_kit.errors import NetworkError

PlayerResponseFactory = Callable[..., dict[str, Any]]
WatchPageFactory = Callable[..., str]
TakeoutBlockFactory = Callable[..., str]


class FakeFetcher:
    def __init__(self, responses: Mapping[str, bytes | BaseException]) -> None:
        self.responses = dict(responses)
        self.requested: list[str] = []

    def fetch(self, url: str) -> bytes:
        self.requested.append(url)
        response = self.responses.get(url)
        if response is None:
            raise NetworkError(LookupError(f"no fake response for {url}"), url=url)
        if isinstance(response, BaseException):
            raise response
        return response


@pytest.fixture(autouse=True)
def _isolated_settings(  # pyright: ignore[reportUnusedFunction]
    tmp_path_factory: pytest.TempPathFactory,
    monkeypatch: pytest.MonkeyPatch,
) -> Iterator[None]:
    config_dir = tmp_path_factory.mktemp("config")
    monkeypatch.setenv("TRANSCRIPT_KIT_CONFIG_FILE", str(config_dir / "missing.yaml"))
    monkeypatch.chdir(config_dir)
    reset_cached_dependencies()
    yield
    monkeypatch.undo()
    reset_cached_dependencies()


@pytest.fixture
def player_response() -> PlayerResponseFactory:
    def _build(
        video_id: str = "abc123",
        *,
        title: str = "My Video",
        with_microformat: bool = True,
        caption_tracks: list[dict[str, str]] | None = None,
        view_count: str = "1234",
        length_seconds: str = "215",
    ) -> dict[str, Any]:
        payload: dict[str, Any] = {
            "videoDetails": {
                "videoId": video_id,
                "title": title,
                "lengthSeconds": length_seconds,
                "channelId": "UCchannel",
                "shortDescription": "A short description.",
                "viewCount": view_count,
                "author": "Some Channel",
                "thumbnail": {
                    "thumbnails": [
                        {"url": "https://i.ytimg.com/vi/abc123/default.jpg", "width": 120, "height": 90},
                    ]
                },
            },
        }
        if with_microformat:
            payload["microformat"] = {
                "playerMicroformatRenderer": {
                    "title": {"runs": [{"text": "My "}, {"text": "Video"}]},
                    "description": {"runs": [{"text": "A short description."}]},
                    "lengthSeconds": length_seconds,
                    "externalChannelId": "UCchannel",
                    "category": "Education",
                    "publishDate": "2024-01-05T08:00:00-08:00",
                    "uploadDate": "2024-01-04",
                    "ownerChannelName": "Some Channel",
                    "ownerProfileUrl": "http://www.youtube.com/@somechannel",
                    "liveBroadcastDetails": {"isLiveNow": False},
                }
            }
        if caption_tracks is not None:
            payload["captions"] = {
                "playerCaptionsTracklistRenderer": {"captionTracks": caption_tracks}
            }
        return payload

    return _build


@pytest.fixture
def watch_page() -> WatchPageFactory:
    def _build(*documents: dict[str, Any] | str) -> str:
        scripts = "".join(
            "<script>var ytInitialPlayerResponse = "
            f"{document if isinstance(document, str) else json.dumps(document)};</script>"
            for document in documents
        )
        return f"<!DOCTYPE html><html><head><title>YouTube</title></head><body>{scripts}</body></html>"

    return _build


@pytest.fixture
def takeout_block() -> TakeoutBlockFactory:
    def _build(content: str, *, timestamp: str = "Jan 5, 2024, 3:04:05 PM EST") -> str:
        return (
            '<div class="outer-cell mdl-cell mdl-cell--12-col mdl-shadow--2dp">'
            '<div class="mdl-grid">'
            '<div class="header-cell mdl-cell mdl-cell--12-col">'
            '<p class="mdl-typography--title">YouTube<br></p></div>'
            '<div class="content-cell mdl-cell mdl-cell--6-col mdl-typography--body-1">'
            f"{content}<br>{timestamp}<br></div>"
            '<div class="content-cell mdl-cell mdl-cell--6-col mdl-typography--body-1 '
            'mdl-typography--text-right"></div>'
            '<div class="content-cell mdl-cell mdl-cell--12-col mdl-typography--caption">'
            "<b>Products:</b><br>&emsp;YouTube<br></div>"
            "</div></div>\n"
        )

    return _build


def _transcript_xml(*elements: str) -> str:
    return '<?xml version="1.0" encoding="utf-8" ?><transcript>' + "".join(elements) + "</transcript>"


@pytest.fixture
def caption_xml() -> Callable[..., str]:
    return _transcript_xml


@pytest.fixture
def fake_fetcher() -> type[FakeFetcher]:
    return FakeFetcher
