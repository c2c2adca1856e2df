from __future__ import annotations

import logging
import re
from xml.sax.saxutils import unescape as unescape_xml

from transcript_kit.errors import InvalidXMLFormatError
from transcript_kit.models.video_contracts import TranscriptMoment
from transcript_kit.services.html_entities import decode_html_entities

TEXT_OPEN_PATTERN = re.compile(r'<text start="([^"]+)" dur="([^"]+)">')
TEXT_CLOSE_TAG = "</text>"
TIMING_PATTERN = re.compile(r"[+-]?(?:\d+(?:\.\d*)?|\.\d+)(?:[eE][+-]?\d+)?")
_XML_QUOTE_ENTITIES = {"&quot;": '"', "&apos;": "'"}

LOGGER = logging.getLogger("transcript_kit.transcript")


def decode_transcript_body(body: bytes) -> str:
    try:
        return body.decode("utf-8")
    except UnicodeDecodeError as exc:
        raise InvalidXMLFormatError("Caption track body is not valid UTF-8 text.") from exc


def parse_transcript_xml(xml_text: str) -> list[TranscriptMoment]:
    """Parse the flat ``<text start dur>`` stream of a caption track.

    Elements whose timing attributes are not plain decimal numbers are skipped.
    Cue text is unescaped once at the XML level, then entity-decoded twice
    because the payload escapes HTML entities again.
    """
    moments: list[TranscriptMoment] = []
    skipped = 0
    cursor = 0
    while True:
        match = TEXT_OPEN_PATTERN.search(xml_text, cursor)
        if match is None:
            break
        close = xml_text.find(TEXT_CLOSE_TAG, match.end())
        if close < 0:
            break
        cursor = close + len(TEXT_CLOSE_TAG)

        start = _parse_timing(match.group(1))
        duration = _parse_timing(match.group(2))
        if start is None or duration is None:
            skipped += 1
            continue

        raw_text = unescape_xml(xml_text[match.end() : close], _XML_QUOTE_ENTITIES)
        text = decode_html_entities(raw_text, passes=2)
        moments.append(TranscriptMoment(start=start, duration=duration, text=text))

    if skipped:
        LOGGER.debug("transcript xml skipped_moments=%s parsed_moments=%s", skipped, len(moments))
    return moments


def _parse_timing(raw_value: str) -> float | None:
    if TIMING_PATTERN.fullmatch(raw_value) is None:
        return None
    return float(raw_value)
