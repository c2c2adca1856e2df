"""Takeout activity command for the ytt CLI."""

from pathlib import Path

import click

from transcript_kit import dependencies

from ..render import activity_payload, console, exit_on_error, print_activities


@click.command()
@click.argument(
    "path",
    type=click.Path(exists=True, dir_okay=False, readable=True, path_type=Path),
)
@click.option("--json", "as_json", is_flag=True, help="Print the result as JSON.")
def activity(path: Path, as_json: bool):
    """Parse a Takeout MyActivity.html export."""
    with exit_on_error():
        activities = dependencies.get_service().get_activity(path)

    if as_json:
        console.print_json(data=[activity_payload(item) for item in activities])
    else:
        print_activities(activities)
