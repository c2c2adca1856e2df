from __future__ import annotations

import logging
from collections.abc import Callable, Iterator
from typing import TypeVar

from pydantic import ValidationError

PLAYER_RESPONSE_MARKER = "var ytInitialPlayerResponse = "
SCRIPT_TERMINATOR = ";</script>"

LOGGER = logging.getLogger("transcript_kit.extract")

T = TypeVar("T")


def iter_embedded_blobs(
    html_text: str,
    *,
    marker: str = PLAYER_RESPONSE_MARKER,
    terminator: str = SCRIPT_TERMINATOR,
) -> Iterator[str]:
    """Yield every JSON document assigned to ``marker`` in ``html_text``.

    Pages may inline the same payload in several scripts, so the scan keeps
    going after the first hit. Scanning stops at the first marker that has no
    terminator after it.
    """
    cursor = 0
    while True:
        start = html_text.find(marker, cursor)
        if start < 0:
            return
        body_start = start + len(marker)
        end = html_text.find(terminator, body_start)
        if end < 0:
            return
        yield html_text[body_start:end]
        cursor = end + len(terminator)


def decode_all(html_text: str, decoder: Callable[[str], T | None]) -> list[T]:
    results: list[T] = []
    for index, document in enumerate(iter_embedded_blobs(html_text)):
        decoded = _decode_candidate(index, document, decoder)
        if decoded is not None:
            results.append(decoded)
    return results


def decode_first(html_text: str, decoder: Callable[[str], T | None]) -> T | None:
    for index, document in enumerate(iter_embedded_blobs(html_text)):
        decoded = _decode_candidate(index, document, decoder)
        if decoded is not None:
            return decoded
    return None


def _decode_candidate(
    index: int,
    document: str,
    decoder: Callable[[str], T | None],
) -> T | None:
    try:
        return decoder(document)
    except ValidationError as exc:
        LOGGER.debug(
            "embedded blob skipped candidate=%s length=%s errors=%s",
            index,
            len(document),
            exc.error_count(),
        )
        return None
