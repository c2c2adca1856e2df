"""Conversion of result records into JSON payloads and rich output."""

from __future__ import annotations

from collections.abc import Iterator
from contextlib import contextmanager
from datetime import datetime
from typing import Any

from rich.console import Console
from rich.markup import escape
from rich.syntax import Syntax
from rich.table import Table

from transcript_kit.errors import ActivityParseError, TranscriptKitError
from transcript_kit.models.activity_contracts import (
    Activity,
    ActivityLink,
    ChannelLink,
    PlaylistLink,
    PostLink,
    SearchLink,
    VideoLink,
    describe_link,
)
from transcript_kit.models.video_contracts import TranscriptContainer, VideoInfo

console = Console()
error_console = Console(stderr=True)


def _iso(value: datetime | None) -> str | None:
    return value.isoformat() if value is not None else None


def format_offset(seconds: float) -> str:
    """Format seconds as mm:ss, or h:mm:ss past the hour."""
    total = int(seconds)
    hours, remainder = divmod(total, 3600)
    minutes, secs = divmod(remainder, 60)
    if hours:
        return f"{hours}:{minutes:02d}:{secs:02d}"
    return f"{minutes:02d}:{secs:02d}"


def container_payload(container: TranscriptContainer) -> dict[str, Any]:
    return {
        "language_code": container.language_code,
        "vss_id": container.vss_id,
        "moments": [
            {"start": moment.start, "duration": moment.duration, "text": moment.text}
            for moment in container.moments
        ],
    }


def video_info_payload(video_info: VideoInfo) -> dict[str, Any]:
    transcripts = video_info.transcripts
    return {
        "video_id": video_info.video_id,
        "title": video_info.title,
        "channel_id": video_info.channel_id,
        "channel_name": video_info.channel_name,
        "description": video_info.description,
        "published_at": _iso(video_info.published_at),
        "uploaded_at": _iso(video_info.uploaded_at),
        "view_count": video_info.view_count,
        "duration_seconds": video_info.duration_seconds,
        "category": video_info.category,
        "is_live": video_info.is_live,
        "thumbnails": [
            {"url": thumb.url, "width": thumb.width, "height": thumb.height}
            for thumb in video_info.thumbnails
        ],
        "channel_url": video_info.channel_url,
        "video_url": video_info.video_url,
        "transcripts": (
            [container_payload(container) for container in transcripts]
            if transcripts is not None
            else None
        ),
    }


def link_payload(link: ActivityLink) -> dict[str, Any]:
    match link:
        case VideoLink(id=video_id, title=title):
            fields: dict[str, Any] = {"id": video_id, "title": title}
        case PostLink(id=post_id, text=text):
            fields = {"id": post_id, "text": text}
        case ChannelLink(id=channel_id, name=name):
            fields = {"id": channel_id, "name": name}
        case PlaylistLink(id=playlist_id, title=title):
            fields = {"id": playlist_id, "title": title}
        case SearchLink(query=query):
            fields = {"query": query}
    return {"kind": link.kind, **fields, "url": link.url}


def activity_payload(activity: Activity) -> dict[str, Any]:
    return {
        "action": activity.action.value,
        "link": link_payload(activity.link),
        "timestamp": activity.timestamp.isoformat(),
    }


def print_video_info(video_info: VideoInfo) -> None:
    duration = video_info.duration_seconds
    views = video_info.view_count
    live = video_info.is_live
    rows = (
        ("Title", video_info.title),
        ("Video", video_info.video_url),
        ("Channel", video_info.channel_name),
        ("Channel URL", video_info.channel_url),
        ("Published", _iso(video_info.published_at)),
        ("Duration", format_offset(duration) if duration is not None else None),
        ("Views", f"{views:,}" if views is not None else None),
        ("Category", video_info.category),
        ("Live", None if live is None else ("yes" if live else "no")),
    )

    table = Table(show_header=False, box=None)
    table.add_column(style="bold")
    table.add_column()
    for label, value in rows:
        if value is not None:
            table.add_row(label, escape(str(value)))
    console.print(table)

    if video_info.transcripts is None:
        return
    console.print("\n[bold]Transcripts:[/bold]")
    for container in video_info.transcripts:
        console.print(
            f"  {escape(container.language_code)} "
            f"[dim]({escape(container.vss_id)})[/dim]: {len(container.moments)} moments"
        )


def print_transcript(container: TranscriptContainer) -> None:
    console.print(
        f"[bold]{escape(container.language_code)}[/bold] [dim]({escape(container.vss_id)})[/dim]"
    )
    for moment in container.moments:
        console.print(f"[cyan]{format_offset(moment.start)}[/cyan] {escape(moment.text)}")


def print_activities(activities: list[Activity]) -> None:
    table = Table(title=f"{len(activities)} activities")
    table.add_column("Time", no_wrap=True)
    table.add_column("Action")
    table.add_column("Type")
    table.add_column("Detail")
    table.add_column("URL", overflow="fold")
    for activity in activities:
        table.add_row(
            activity.timestamp.strftime("%Y-%m-%d %H:%M:%S %Z"),
            activity.action.value,
            activity.link.kind,
            escape(describe_link(activity.link)),
            escape(activity.link.url),
        )
    console.print(table)


def print_error(exc: TranscriptKitError) -> None:
    error_console.print(f"[red]✗ {type(exc).__name__}: {escape(str(exc))}[/red]")
    if isinstance(exc, ActivityParseError):
        error_console.print("[yellow]Offending block:[/yellow]")
        error_console.print(Syntax(exc.block, "html", word_wrap=True))


@contextmanager
def exit_on_error() -> Iterator[None]:
    try:
        yield
    except TranscriptKitError as exc:
        print_error(exc)
        raise SystemExit(1) from exc
