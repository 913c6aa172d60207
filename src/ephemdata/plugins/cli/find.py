"""
CLI command: find

Feeds a listing loader through the configured providers, showing every data
source whose name matches a pattern.
"""

import logging
from typing import BinaryIO, List, Tuple

import click

from ephemdata.data import DataLoader, build_manager
from ephemdata.errors import EphemDataError
from ephemdata.settings import settings

# Configure module-level logger
logger = logging.getLogger("ephemdata.cli.find")


class ListingLoader(DataLoader):
    """Loader recording names and decompressed sizes of the data it is fed."""

    def __init__(self, limit: int = 0):
        self.limit = limit
        self.found: List[Tuple[str, int]] = []

    def still_accepts_data(self) -> bool:
        return self.limit <= 0 or len(self.found) < self.limit

    def load_data(self, stream: BinaryIO, name: str) -> None:
        size = 0
        for chunk in iter(lambda: stream.read(settings.download_chunk_size), b""):
            size += len(chunk)
        self.found.append((name, size))


@click.command("find")
@click.argument("pattern", type=click.STRING)
@click.option("--providers-file", type=click.Path(exists=True), default=None,
              help="YAML file describing the providers")
@click.option("--limit", type=int, default=0, help="Stop after this many matches")
def cli(pattern: str, providers_file, limit: int) -> None:
    """
    List the data sources whose bare name matches PATTERN (a regular expression).
    """
    loader = ListingLoader(limit)
    try:
        manager = build_manager(settings.data_path or None, providers_file or settings.providers_file)
        manager.feed(pattern, loader)
    except EphemDataError as e:
        logger.error("Search for '%s' failed: %s", pattern, e)
        raise click.ClickException(str(e))

    if not loader.found:
        click.echo(f"No data matching {pattern}")
        return
    for name, size in loader.found:
        click.echo(f"{name}\t{size}")
