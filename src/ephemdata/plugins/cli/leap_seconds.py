"""
CLI command: leap-seconds

Loads the UTC-TAI history through the configured providers.
"""

import logging

import click

from ephemdata.data import UTCTAIHistoryLoader, build_manager
from ephemdata.errors import EphemDataError
from ephemdata.settings import settings

# Configure module-level logger
logger = logging.getLogger("ephemdata.cli.leap_seconds")


@click.command("leap-seconds")
@click.option("--pattern", default=None, help="Regular expression for the history file name")
def cli(pattern) -> None:
    """
    Show the UTC-TAI offsets history.
    """
    loader = UTCTAIHistoryLoader() if pattern is None else UTCTAIHistoryLoader(pattern)
    try:
        manager = build_manager(settings.data_path or None, settings.providers_file)
        found = manager.feed(loader.supported_names, loader)
    except EphemDataError as e:
        logger.error("Unable to load UTC-TAI history: %s", e)
        raise click.ClickException(str(e))

    if not found:
        raise click.ClickException("no UTC-TAI history found")

    for entry in loader.entries:
        end = entry.end.isoformat() if entry.end else "..."
        line = f"{entry.start.isoformat()} - {end:<10}  {entry.offset:.7f}s"
        if entry.drift:
            line += f" + (MJD - {entry.mjd_reference:g}) x {entry.drift:g}s"
        click.echo(line)
