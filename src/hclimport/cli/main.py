"""Main CLI entry point for hclimport."""

import click
from .commands.import_cmd import import_cmd
from .commands.scan import scan
from .commands.render import render
from .commands.version import version as version_command
from .. import __version__


@click.group()
@click.version_option(version=__version__, prog_name="hclimport", message="%(prog)s version %(version)s")
def cli():
    """hclimport - Import remote resources into Terraform as HCL."""
    pass


cli.add_command(import_cmd)
cli.add_command(scan)
cli.add_command(render)
cli.add_command(version_command)
