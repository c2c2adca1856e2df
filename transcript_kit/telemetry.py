from __future__ import annotations

import logging
import time
from collections.abc import Iterator, Mapping
from contextlib import contextmanager
from dataclasses import dataclass
from typing import Any, Literal, Protocol

import structlog

TelemetrySinkName = Literal["none", "log"]
AttributeValue = bool | int | float | str | None

# Scraped content never leaves the process through telemetry.
_REDACTED_KEY_FRAGMENTS: tuple[str, ...] = (
    "block",
    "body",
    "description",
    "html",
    "text",
    "title",
    "transcript",
)
_MAX_STRING_LENGTH = 120


class TelemetrySink(Protocol):
    def emit(self, *, event_name: str, attributes: Mapping[str, AttributeValue]) -> None:
        ...


class NoOpTelemetrySink:
    def emit(self, *, event_name: str, attributes: Mapping[str, AttributeValue]) -> None:
        _ = (event_name, attributes)


class StructuredLogTelemetrySink:
    def __init__(self) -> None:
        self._logger = structlog.get_logger("transcript_kit.telemetry")

    def emit(self, *, event_name: str, attributes: Mapping[str, AttributeValue]) -> None:
        self._logger.info("telemetry", telemetry_event=event_name, **dict(attributes))


@dataclass(frozen=True)
class TelemetryClient:
    enabled: bool
    sink: TelemetrySink

    @classmethod
    def disabled(cls) -> TelemetryClient:
        return cls(enabled=False, sink=NoOpTelemetrySink())

    def emit(self, event_name: str, **attributes: Any) -> None:
        if not self.enabled:
            return
        self.sink.emit(event_name=event_name, attributes=_clean_attributes(attributes))

    @contextmanager
    def timed(self, event_name: str, **attributes: Any) -> Iterator[dict[str, Any]]:
        """Emit ``event_name`` on exit with ``duration_ms`` and an ``outcome``.

        The yielded dict collects extra attributes while the block runs.
        """
        collected: dict[str, Any] = dict(attributes)
        started = time.perf_counter()
        outcome = "ok"
        try:
            yield collected
        except Exception as exc:
            outcome = type(exc).__name__
            raise
        finally:
            collected["outcome"] = outcome
            collected["duration_ms"] = round((time.perf_counter() - started) * 1000, 1)
            self.emit(event_name, **collected)


def build_telemetry_client(*, enabled: bool, sink: TelemetrySinkName) -> TelemetryClient:
    if not enabled or sink == "none":
        return TelemetryClient.disabled()
    if sink == "log":
        return TelemetryClient(enabled=True, sink=StructuredLogTelemetrySink())

    logging.getLogger("transcript_kit.telemetry").warning(
        "unknown telemetry sink; telemetry disabled sink=%s",
        sink,
    )
    return TelemetryClient.disabled()


def _clean_attributes(attributes: Mapping[str, Any]) -> dict[str, AttributeValue]:
    cleaned: dict[str, AttributeValue] = {}
    for raw_key, raw_value in attributes.items():
        key = str(raw_key).strip().lower()
        if not key:
            continue
        if any(fragment in key for fragment in _REDACTED_KEY_FRAGMENTS):
            cleaned[key] = "[redacted]"
        else:
            cleaned[key] = _clean_value(raw_value)
    return cleaned


def _clean_value(value: Any) -> AttributeValue:
    if value is None or isinstance(value, bool | int | float):
        return value
    if isinstance(value, str):
        compact = " ".join(value.split())
        if len(compact) > _MAX_STRING_LENGTH:
            return f"{compact[:_MAX_STRING_LENGTH]}..."
        return compact
    return type(value).__name__
