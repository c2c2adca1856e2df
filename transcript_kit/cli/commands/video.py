"""Video metadata command for the ytt CLI."""

import click

from transcript_kit import dependencies

from ..render import console, exit_on_error, print_video_info, video_info_payload


@click.command()
@click.argument("target")
@click.option(
    "--transcript/--no-transcript",
    "include_transcript",
    default=True,
    show_default=True,
    help="Fetch caption tracks and attach their transcripts.",
)
@click.option("--json", "as_json", is_flag=True, help="Print the result as JSON.")
def info(target: str, include_transcript: bool, as_json: bool):
    """Show metadata for a video ID or watch URL."""
    with exit_on_error():
        video_info = dependencies.get_service().get_video_info(
            target, include_transcript=include_transcript
        )

    if as_json:
        console.print_json(data=video_info_payload(video_info))
    else:
        print_video_info(video_info)
