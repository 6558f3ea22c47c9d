"""Render command - convert a state file to HCL without importing."""

import sys
from pathlib import Path
import click
from ... import convert_state
from ...config import load_config
from ...utils.errors import HclImportError
from ..utils import format_error, resolve_file_path


@click.command()
@click.argument('state_file', default='terraform.tfstate', type=click.Path(exists=False))
@click.option('--output', '-o', type=click.Path(), help='Write HCL to file instead of stdout')
@click.option('--config', 'config_path', type=click.Path(), default=None,
              help='Path to config YAML file')
def render(state_file, output, config_path):
    """Render STATE_FILE (default: terraform.tfstate) as HCL."""
    try:
        path = resolve_file_path(state_file)
        config = load_config(config_path)
        text = convert_state(str(path), config)
    except FileNotFoundError as e:
        click.echo(format_error(str(e)), err=True)
        sys.exit(1)
    except HclImportError as e:
        click.echo(format_error(str(e)), err=True)
        sys.exit(1)

    if output:
        output_path = Path(output)
        output_path.parent.mkdir(parents=True, exist_ok=True)
        with open(output_path, 'w', encoding='utf-8') as f:
            f.write(text)
        click.echo(f"Output saved to: {output_path}", err=True)
    else:
        click.echo(text, nl=False)
