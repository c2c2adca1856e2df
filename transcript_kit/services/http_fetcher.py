from __future__ import annotations

import logging
from http.client import HTTPException
from typing import Protocol
from urllib.error import HTTPError, URLError
from urllib.request import Request, urlopen

from transcript_kit.errors import NetworkError

LOGGER = logging.getLogger("transcript_kit.http")

DEFAULT_USER_AGENT = (
    "Mozilla/5.0 (Macintosh; Intel Mac OS X 10_15_7) AppleWebKit/537.36 "
    "(KHTML, like Gecko) Chrome/126.0 Safari/537.36"
)


class Fetcher(Protocol):
    def fetch(self, url: str) -> bytes:
        ...


class UrllibFetcher:
    """Cookie-less GET fetcher; any transport failure becomes ``NetworkError``."""

    def __init__(
        self,
        *,
        timeout_seconds: float = 15.0,
        user_agent: str = DEFAULT_USER_AGENT,
        accept_language: str = "en-US,en;q=0.9",
    ) -> None:
        self._timeout_seconds = max(0.1, timeout_seconds)
        self._user_agent = user_agent
        self._accept_language = accept_language

    def fetch(self, url: str) -> bytes:
        request = Request(
            url,
            headers={
                "user-agent": self._user_agent,
                "accept-language": self._accept_language,
            },
            method="GET",
        )
        try:
            with urlopen(request, timeout=self._timeout_seconds) as response:
                body = response.read()
                status_code = int(response.getcode() or 0)
        except HTTPError as exc:
            LOGGER.warning("http fetch failed status=%s url=%s", exc.code, url)
            raise NetworkError(exc, url=url) from exc
        except (URLError, HTTPException, TimeoutError, OSError, ValueError) as exc:
            LOGGER.warning("http fetch failed error=%s url=%s", type(exc).__name__, url)
            raise NetworkError(exc, url=url) from exc

        LOGGER.debug("http fetch done status=%s bytes=%s url=%s", status_code, len(body), url)
        return body
