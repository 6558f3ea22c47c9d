"""Scan command - list resources and providers already declared in a file."""

import json
import sys
import click
from ...scan.scanner import scan_file
from ...utils.errors import HclImportError
from ..utils import format_error, resolve_file_path


@click.command()
@click.argument('tf_file', default='main.tf', type=click.Path(exists=False))
@click.option('--json', 'as_json', is_flag=True, help='Output structured JSON')
def scan(tf_file, as_json):
    """List resource and provider blocks declared in TF_FILE (default: main.tf)."""
    try:
        path = resolve_file_path(tf_file)
        index = scan_file(str(path))
    except FileNotFoundError as e:
        click.echo(format_error(str(e)), err=True)
        sys.exit(1)
    except HclImportError as e:
        click.echo(format_error(str(e)), err=True)
        sys.exit(1)

    if as_json:
        click.echo(json.dumps({
            "providers": index.provider_keys,
            "resources": index.resource_keys,
        }, indent=2))
        return

    click.echo(f"Providers ({len(index.provider_keys)}):")
    for name in index.provider_keys:
        click.echo(f"  {name}")
    click.echo(f"Resources ({len(index.resource_keys)}):")
    for address in index.resource_keys:
        suffix = f"  (declared {index.resources[address]} times)" if index.resources[address] > 1 else ""
        click.echo(f"  {address}{suffix}")
