"""Transcript command for the ytt CLI."""

import click

from transcript_kit import dependencies

from ..render import console, container_payload, exit_on_error, print_transcript


@click.command()
@click.argument("target")
@click.option(
    "--all/--first",
    "all_tracks",
    default=False,
    help="Fetch every caption track instead of stopping at the first usable one.",
)
@click.option("--json", "as_json", is_flag=True, help="Print the result as JSON.")
def transcript(target: str, all_tracks: bool, as_json: bool):
    """Print the transcript of a video ID or watch URL."""
    service = dependencies.get_service()
    with exit_on_error():
        if all_tracks:
            containers = service.get_transcript_containers(target)
        else:
            containers = [service.get_transcript(target)]

    if as_json:
        payload = [container_payload(container) for container in containers]
        console.print_json(data=payload if all_tracks else payload[0])
        return

    for index, container in enumerate(containers):
        if index:
            console.print()
        print_transcript(container)
