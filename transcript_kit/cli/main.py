"""Main CLI entry point for ytt."""

import click
from pydantic import ValidationError
from rich.markup import escape

from transcript_kit import __version__, dependencies
from transcript_kit.logging_config import configure_logging

from .commands import activity, transcript, video
from .render import error_console


@click.group()
@click.version_option(version=__version__)
@click.option(
    "--log-level",
    type=click.Choice(["DEBUG", "INFO", "WARNING", "ERROR"], case_sensitive=False),
    default=None,
    help="Override the configured console log level.",
)
def main(log_level: str | None):
    """ytt - YouTube metadata, transcripts, and Takeout activity."""
    try:
        settings = dependencies.get_settings()
    except ValidationError as exc:
        error_console.print(f"[red]✗ Configuration error:[/red]\n{escape(str(exc))}")
        raise SystemExit(2) from exc

    if log_level is not None:
        settings = settings.model_copy(update={"log_level": log_level.upper()})
    configure_logging(settings)


main.add_command(video.info)
main.add_command(transcript.transcript)
main.add_command(activity.activity)


if __name__ == "__main__":
    main()
