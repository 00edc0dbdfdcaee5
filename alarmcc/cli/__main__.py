"""Main file for alarmcc CLI."""

import logging
from importlib import metadata

import click

from .decode import decode
from .emulate import emulate
from .request import request

LOG_LEVELS = ["error", "warning", "info", "debug"]

_LOGGER = logging.getLogger(__name__)

logging.basicConfig(
    format="%(asctime)s.%(msecs)03d %(threadName)-25s %(levelname)-8s %(message)s",
    datefmt="%Y-%m-%d %H:%M:%S",
)


@click.group()
@click.option("--log-level", type=click.Choice(LOG_LEVELS), default="warning")
def cli(log_level: str) -> None:
    """Create the click CLI group with specified log level."""
    level = getattr(logging, log_level.upper())
    logging.getLogger().setLevel(level)
    _LOGGER.debug("alarmcc version: %s", get_version())


@cli.command()
def version() -> None:
    """CLI command to print installed package version."""
    print(get_version())  # noqa: T201 # Valid CLI print


def get_version() -> str:
    """Get the version of the alarmcc module."""
    return metadata.version("alarmcc")


# Add more commands to the CLI
cli.add_command(decode)
cli.add_command(request)
cli.add_command(emulate)

if __name__ == "__main__":
    cli()
