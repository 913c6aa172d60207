"""
CLI command: providers

Lists the registered provider types and the providers built from the
current configuration.
"""

import logging

import click

from ephemdata.data import build_manager
from ephemdata.data.providers import get_provider_info
from ephemdata.errors import DataConfigurationError
from ephemdata.settings import settings

# Configure module-level logger
logger = logging.getLogger("ephemdata.cli.providers")


@click.group("providers")
def cli():
    """
    Data providers commands.
    """
    pass


@cli.command("types")
def provider_types():
    """
    Show the registered provider types, in detection order.
    """
    click.echo("Available provider types:")
    for provider_type, description in get_provider_info().items():
        click.echo(f"  - {provider_type}: {description}")


@cli.command("show")
@click.option("--providers-file", type=click.Path(exists=True), default=None,
              help="YAML file describing the providers")
def show_providers(providers_file):
    """
    Show the providers built from the search path and providers file.
    """
    try:
        manager = build_manager(
            settings.data_path or None,
            providers_file or settings.providers_file,
        )
    except DataConfigurationError as e:
        logger.error("Invalid providers configuration: %s", e)
        raise click.ClickException(str(e))

    providers = manager.get_providers()
    if not providers:
        click.echo("No data providers configured")
        return
    click.echo("Configured providers:")
    for provider in providers:
        click.echo(f"  - {provider!r}")
