"""End-to-end import run against a Terraform working directory."""

from enum import Enum
from typing import Callable, List, Optional
from pydantic import BaseModel, Field
from .orchestrator import reconcile, render_definition_headers, render_state
from ..config.models import ReconcileConfig
from ..importer.models import ResourceDefinition
from ..importer.sources import Importer
from ..scan.scanner import scan_declarations
from ..state.loader import load_state
from ..terraform.runner import TerraformRunner
from ..utils.errors import DefinitionFileError, StateLoadError, TerraformError
from ..utils.logging import get_logger

logger = get_logger("reconcile.workflow")

ConfirmCallback = Callable[[int], bool]


class ImportStatus(str, Enum):
    """How an import run ended."""
    NO_CHANGES = "no_changes"
    ABORTED = "aborted"
    IMPORTED = "imported"


class ImportResult(BaseModel):
    """Outcome of run_import."""
    status: ImportStatus = Field(..., description="How the run ended")
    resources: List[str] = Field(default_factory=list, description="Addresses selected for import")
    providers: List[str] = Field(default_factory=list, description="Provider blocks added")
    output_path: Optional[str] = Field(default=None, description="Declarations file that was rewritten")

    class Config:
        use_enum_values = True


def run_import(
    kind: str,
    config: ReconcileConfig,
    importer: Importer,
    runner: TerraformRunner,
    confirm: Optional[ConfirmCallback] = None,
    search_id: Optional[str] = None
) -> ImportResult:
    """
    Import remote resources of one kind and regenerate the declarations file.
    
    Steps:
    1. Scan the declarations file for existing resource/provider blocks
    2. Collect remote definitions, disambiguate names, drop declared ones
    3. Ask for confirmation (unless auto_approve)
    4. Append empty blocks for the new resources, run terraform init and import
    5. Read the resulting state and overwrite the declarations file with it
    
    The declarations file stays open for the whole run and is closed on every
    exit path. Any terraform failure aborts the run: the file is rewritten so
    that only resources which reached state stay declared, and the next run
    imports the rest.
    
    Args:
        kind: Resource kind selector passed to the importer
        config: Reconciliation settings
        importer: Source of remote definitions
        runner: Terraform invoker
        confirm: Called with the number of new resources; returns False to abort.
            When None the run proceeds without asking.
        search_id: Optional single import id filter
        
    Returns:
        ImportResult
        
    Raises:
        DefinitionFileError: If the declarations file cannot be opened, read or written
        ImporterError, TerraformError, StateLoadError: From the collaborators
    """
    path = config.definitions_path
    try:
        path.parent.mkdir(parents=True, exist_ok=True)
        path.touch(exist_ok=True)
        handle = open(path, 'r+', encoding='utf-8')
    except OSError as e:
        raise DefinitionFileError(f"Unable to open {path}: {e}") from e

    with handle as f:
        try:
            existing_text = f.read()
        except (OSError, UnicodeDecodeError) as e:
            raise DefinitionFileError(f"Unable to read {path}: {e}") from e
        index = scan_declarations(existing_text.splitlines())

        remote = importer.import_from_remote(kind, search_id)
        new_definitions, new_providers = reconcile(remote, index)
        addresses = [d.address for d in new_definitions]

        if not new_definitions:
            logger.info("No new resources to import from remote")
            return ImportResult(status=ImportStatus.NO_CHANGES)

        if not config.auto_approve and confirm is not None:
            if not confirm(len(new_definitions)):
                logger.info("User aborted operation")
                return ImportResult(status=ImportStatus.ABORTED, resources=addresses, providers=new_providers)

        headers = render_definition_headers(new_definitions, new_providers, config.render.indent)
        if existing_text and not existing_text.endswith("\n"):
            headers = "\n" + headers
        f.seek(0, 2)
        _write(f, path, headers)

        imported: List[ResourceDefinition] = []
        try:
            runner.init()
            for i, definition in enumerate(new_definitions, 1):
                logger.info(f"Importing resource {i}/{len(new_definitions)}: {definition.address}")
                runner.import_resource(definition.address, definition.import_id)
                imported.append(definition)
        except TerraformError:
            logger.error(
                f"Import stopped after {len(imported)} of {len(new_definitions)} resources, "
                "removing placeholders for resources that were not imported"
            )
            _overwrite(f, path, _recovery_text(existing_text, imported, config))
            raise

        snapshot = load_state(str(config.state_path))
        _overwrite(f, path, render_state(snapshot, config.render))

    logger.info(f"Wrote {len(snapshot.resources)} resources to {path}")
    return ImportResult(
        status=ImportStatus.IMPORTED,
        resources=addresses,
        providers=new_providers,
        output_path=str(path)
    )


def _recovery_text(existing_text: str, imported: List[ResourceDefinition], config: ReconcileConfig) -> str:
    """
    Contents for the declarations file after a failed run.
    
    Placeholders of resources that never reached state must not stay behind,
    or the scanner would treat them as declared on the next run.
    """
    if config.state_path.is_file():
        try:
            return render_state(load_state(str(config.state_path)), config.render)
        except StateLoadError as e:
            logger.warning(f"Unable to render state after failed import: {e}")

    existing = scan_declarations(existing_text.splitlines())
    providers = []
    for definition in imported:
        if definition.provider and definition.provider not in providers and not existing.has_provider(definition.provider):
            providers.append(definition.provider)
    headers = render_definition_headers(imported, providers, config.render.indent)
    if headers and existing_text and not existing_text.endswith("\n"):
        headers = "\n" + headers
    return existing_text + headers


def _overwrite(f, path, text: str) -> None:
    f.seek(0)
    _write(f, path, text)
    try:
        f.truncate()
    except OSError as e:
        raise DefinitionFileError(f"Problem writing {path}: {e}") from e


def _write(f, path, text: str) -> None:
    try:
        f.write(text)
        f.flush()
    except OSError as e:
        raise DefinitionFileError(f"Problem writing {path}: {e}") from e
