"""
CLI command: info

Displays ephemdata package version, provider types, filters and settings.
"""

import logging
from importlib.metadata import PackageNotFoundError, version

import click

from ephemdata.data import FiltersManager
from ephemdata.data.providers import list_provider_types
from ephemdata.settings import settings

# Configure module-level logger
logger = logging.getLogger("ephemdata.cli.info")


@click.command("info")
def cli() -> None:
    """
    Show package metadata and registered data components.
    """
    # Retrieve package version, fallback if not installed
    try:
        pkg_version = version("ephemdata")
        logger.debug("Retrieved package version: %s", pkg_version)
    except PackageNotFoundError:
        pkg_version = "0.0.0-dev"
        logger.warning(
            "Package 'ephemdata' not found; using development version placeholder."
        )

    click.echo(f"ephemdata version: {pkg_version}")

    click.echo("\nAvailable provider types:")
    for provider_type in list_provider_types():
        click.echo(f"  - {provider_type}")

    click.echo("\nDefault filters:")
    for data_filter in FiltersManager().get_filters():
        click.echo(f"  - {data_filter.__class__.__name__} ({getattr(data_filter, 'suffix', '')})")

    click.echo("\nSearch path:")
    entries = settings.search_path_entries()
    if not entries:
        click.echo("  (empty)")
    for entry in entries:
        click.echo(f"  - {entry}")
