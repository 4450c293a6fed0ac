"""styledpass CLI entry point: Click group with subcommands."""

import logging

import click

from styledpass import __version__


@click.group()
@click.version_option(version=__version__, prog_name="styledpass")
@click.option("-v", "--verbose", is_flag=True, help="Log debug output to stderr.")
def cli(verbose: bool) -> None:
    """styledpass - extract CSS and runtime wrappers from styled call sites."""
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.WARNING,
        format="%(levelname)s %(name)s: %(message)s",
    )
    logging.captureWarnings(True)


# Import and register subcommands
from styledpass.cli.build import build  # noqa: E402
from styledpass.cli.inspect import inspect  # noqa: E402

cli.add_command(build)
cli.add_command(inspect)
