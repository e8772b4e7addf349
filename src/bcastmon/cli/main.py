"""bcastmon command group."""
import logging

import click

from .. import __version__
from ..utils.logger_config import setup_logger
from .interfaces import interfaces
from .monitor import monitor

_LOG_LEVELS = ["DEBUG", "INFO", "WARNING", "ERROR"]


@click.group(context_settings={"auto_envvar_prefix": "BCASTMON"})
@click.version_option(__version__, prog_name="bcastmon")
@click.option("--log-level", "log_level", type=click.Choice(_LOG_LEVELS, case_sensitive=False),
              default="WARNING", show_default=True, help="Diagnostic log level (stderr)")
@click.option("--log-file", "log_file", type=click.Path(dir_okay=False),
              help="Also write diagnostics to this file")
def cli(log_level: str, log_file):
    """bcastmon - count broadcast frames on a network interface."""
    setup_logger("bcastmon", log_file=log_file, level=getattr(logging, log_level.upper()))


cli.add_command(interfaces)
cli.add_command(monitor)


def main():
    cli()


if __name__ == "__main__":
    main()
