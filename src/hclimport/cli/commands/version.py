"""Version command - show hclimport version."""

import click
from ... import __version__


@click.command()
def version():
    """Show hclimport version."""
    click.echo(f"hclimport version {__version__}")
