"""Import command - import remote resources and regenerate the declarations file."""

import sys
import click
from ...config import load_config
from ...importer.sources import FileImporter
from ...reconcile.workflow import run_import, ImportStatus
from ...terraform.runner import TerraformRunner
from ...utils.errors import HclImportError
from ...utils.logging import get_logger
from ..utils import format_error

logger = get_logger("cli.import")


@click.command(name="import")
@click.argument('kind')
@click.option('--definitions', '-d', required=True, type=click.Path(),
              help='YAML/JSON file of remote resource definitions keyed by kind')
@click.option('--id', 'search_id', default=None, help='Import one resource by id')
@click.option('--auto-approve', '--auto_approve', 'auto_approve', is_flag=True,
              help='Skip confirmation of resource import')
@click.option('--workdir', '-w', type=click.Path(file_okay=False), default=None,
              help='Terraform working directory (default: current directory)')
@click.option('--config', 'config_path', type=click.Path(), default=None,
              help='Path to config YAML file')
def import_cmd(kind, definitions, search_id, auto_approve, workdir, config_path):
    """
    Import resources of KIND into Terraform state and rewrite main.tf from it.
    
    Resources already declared in main.tf are skipped, so the command can be
    rerun safely after a partial failure.
    """
    try:
        config = load_config(config_path, working_dir=workdir, auto_approve=True if auto_approve else None)
        importer = FileImporter(definitions)
        runner = TerraformRunner(
            config.working_dir,
            binary=config.terraform.binary,
            env=config.terraform.env,
            timeout=config.terraform.timeout
        )

        result = run_import(kind, config, importer, runner, confirm=_confirm, search_id=search_id)

        if result.status == ImportStatus.NO_CHANGES:
            click.echo("No new resources to import from remote")
        elif result.status == ImportStatus.ABORTED:
            click.echo("User aborted operation!")
        else:
            click.echo(f"Imported {len(result.resources)} resources into {result.output_path}")

    except HclImportError as e:
        click.echo(format_error(str(e)), err=True)
        sys.exit(1)
    except Exception as e:
        logger.error(f"Unexpected error: {e}", exc_info=True)
        click.echo(format_error(f"Import failed: {e}"), err=True)
        sys.exit(1)


def _confirm(count: int) -> bool:
    return click.confirm(f"This will import {count} resources. Do you want to continue?", default=False)
