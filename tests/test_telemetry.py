from __future__ import annotations

from collections.abc import Mapping

import pytest

from transcript_kit.telemetry import (
    AttributeValue,
    NoOpTelemetrySink,
    StructuredLogTelemetrySink,
    TelemetryClient,
    build_telemetry_client,
)


class _CaptureSink:
    def __init__(self) -> None:
        self.events: list[tuple[str, dict[str, AttributeValue]]] = []

    def emit(self, *, event_name: str, attributes: Mapping[str, AttributeValue]) -> None:
        self.events.append((event_name, dict(attributes)))


def test_build_telemetry_client_respects_flags() -> None:
    disabled = build_telemetry_client(enabled=False, sink="log")
    silent = build_telemetry_client(enabled=True, sink="none")
    logging_client = build_telemetry_client(enabled=True, sink="log")

    assert disabled.enabled is False
    assert isinstance(disabled.sink, NoOpTelemetrySink)
    assert silent.enabled is False
    assert logging_client.enabled is True
    assert isinstance(logging_client.sink, StructuredLogTelemetrySink)


def test_emit_redacts_scraped_content_and_normalizes_values() -> None:
    sink = _CaptureSink()
    client = TelemetryClient(enabled=True, sink=sink)

    client.emit(
        "video_info.fetch",
        title="Secret title",
        raw_html="<html>",
        Video_ID="  abc123  ",
        track_count=3,
        captions_requested=True,
        extra=object(),
        long_value="x" * 200,
    )

    [(event_name, attributes)] = sink.events
    assert event_name == "video_info.fetch"
    assert attributes["title"] == "[redacted]"
    assert attributes["raw_html"] == "[redacted]"
    assert attributes["video_id"] == "abc123"
    assert attributes["track_count"] == 3
    assert attributes["captions_requested"] is True
    assert attributes["extra"] == "object"
    assert attributes["long_value"] == "x" * 120 + "..."


def test_disabled_client_emits_nothing() -> None:
    sink = _CaptureSink()
    client = TelemetryClient(enabled=False, sink=sink)

    client.emit("anything", video_id="abc123")
    with client.timed("anything.timed") as event:
        event["video_id"] = "abc123"

    assert sink.events == []


def test_timed_records_outcome_and_duration() -> None:
    sink = _CaptureSink()
    client = TelemetryClient(enabled=True, sink=sink)

    with client.timed("activity.parse", source="file") as event:
        event["activity_count"] = 2
    with pytest.raises(ValueError), client.timed("activity.parse"):
        raise ValueError("boom")

    [(_, ok), (_, failed)] = sink.events
    assert ok["source"] == "file"
    assert ok["activity_count"] == 2
    assert ok["outcome"] == "ok"
    duration = ok["duration_ms"]
    assert isinstance(duration, float)
    assert duration >= 0
    assert failed["outcome"] == "ValueError"
