"""
Core ephemdata CLI: dynamically loads commands from plugins/cli.
"""

import importlib
import logging
import pathlib
import pkgutil

import click

from ephemdata.settings import settings

# Logging configuration, shared by the library and the plugins
logger = logging.getLogger("ephemdata")
handler = logging.StreamHandler()
formatter = logging.Formatter("%(asctime)s %(levelname)s [%(name)s] %(message)s")
handler.setFormatter(formatter)
logger.addHandler(handler)
logger.setLevel(getattr(logging, settings.log_level, logging.INFO))


@click.group()
@click.option("--log-level", default=settings.log_level, help="Set logging level")
@click.option(
    "--data-path",
    default=None,
    help="Search path for data providers (overrides EPHEMDATA_DATA_PATH)",
)
@click.pass_context
def main(ctx, log_level, data_path):
    """
    ephemdata CLI
    """
    ctx.ensure_object(dict)
    ctx.obj["log_level"] = log_level.upper()
    ctx.obj["data_path"] = data_path

    # Update logging level
    logger.setLevel(getattr(logging, log_level.upper(), logging.INFO))

    # Update global settings
    settings.log_level = log_level.upper()
    if data_path is not None:
        settings.data_path = data_path


def load_commands():
    """
    Auto-discover and register click commands from src/ephemdata/plugins/cli/*.py
    Each plugin module must define a top-level `cli` click.Command.
    """
    plugins_path = pathlib.Path(__file__).parent / "plugins" / "cli"
    package = "ephemdata.plugins.cli"
    for _, module_name, _ in pkgutil.iter_modules([str(plugins_path)]):
        full_name = f"{package}.{module_name}"
        try:
            module = importlib.import_module(full_name)
            cmd = getattr(module, "cli", None)
            if isinstance(cmd, click.Command):
                main.add_command(cmd)
        except Exception as e:
            logger.error(f"Failed to load plugin {full_name}: {e}")


# Load all plugin commands
load_commands()

if __name__ == "__main__":
    main()
