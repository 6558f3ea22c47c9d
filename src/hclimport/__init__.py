"""hclimport - Import remote resources into Terraform and regenerate HCL from state."""

from typing import Optional
from .config import ReconcileConfig, load_config
from .importer import ResourceDefinition, FileImporter, disambiguate
from .reconcile import reconcile, render_state, run_import, ImportResult
from .scan import DeclarationIndex, scan_declarations
from .state import StateSnapshot, load_state
from .utils.logging import setup_logging, get_logger
from .utils.errors import HclImportError

__version__ = "0.1.0"

__all__ = [
    "convert_state",
    "reconcile",
    "render_state",
    "run_import",
    "disambiguate",
    "scan_declarations",
    "load_state",
    "load_config",
    "ReconcileConfig",
    "ResourceDefinition",
    "FileImporter",
    "DeclarationIndex",
    "StateSnapshot",
    "ImportResult",
    "HclImportError",
]

setup_logging()
logger = get_logger("hclimport")


def convert_state(state_path: str, config: Optional[ReconcileConfig] = None) -> str:
    """Render a Terraform state file as HCL without importing anything."""
    try:
        config = config or ReconcileConfig()
        snapshot = load_state(state_path)
        return render_state(snapshot, config.render)
    except HclImportError:
        raise
    except Exception as e:
        logger.error(f"Unexpected error while converting state: {e}", exc_info=True)
        raise HclImportError(f"Conversion failed: {e}") from e
