"""
CLI command: decompress

Runs a file through the filters chain (gzip, Unix compress) and writes the
filtered content.
"""

import logging
import shutil

import click

from ephemdata.data import DataSource, FiltersManager
from ephemdata.errors import EphemDataError

# Configure module-level logger
logger = logging.getLogger("ephemdata.cli.decompress")


@click.command("decompress")
@click.argument("path", type=click.Path(exists=True, dir_okay=False))
@click.option("-o", "--output", type=click.Path(dir_okay=False), default=None,
              help="Output file (defaults to standard output)")
def cli(path: str, output) -> None:
    """
    Decompress PATH, removing as many compression layers as its name shows.
    """
    source = FiltersManager().apply_relevant_filters(DataSource.from_path(path))
    logger.debug("Filtered %s into %s", path, source.name)

    try:
        with source.opener.open_stream_once() as stream:
            if output is None:
                out = click.get_binary_stream("stdout")
                shutil.copyfileobj(stream, out)
                out.flush()
            else:
                with open(output, "wb") as f:
                    shutil.copyfileobj(stream, f)
                click.echo(f"Wrote {source.name} to {output}")
    except EphemDataError as e:
        logger.error("Unable to decompress %s: %s", path, e)
        raise click.ClickException(str(e))
