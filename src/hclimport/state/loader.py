"""Load and validate a Terraform state file."""

import json
from collections import OrderedDict
from pathlib import Path
from pydantic import ValidationError
from .models import StateSnapshot
from ..utils.errors import StateLoadError
from ..utils.logging import get_logger

logger = get_logger("state.loader")


def load_state(state_path: str) -> StateSnapshot:
    """
    Load a Terraform state file written after import.
    
    Args:
        state_path: Path to terraform.tfstate
        
    Returns:
        Parsed StateSnapshot
        
    Raises:
        StateLoadError: If the file cannot be read or is not a valid state
    """
    path = Path(state_path)
    logger.info("Collecting state from tfstate file")

    if not path.is_file():
        raise StateLoadError(
            f"Unable to read tfstate: {state_path} not found. "
            "Run 'terraform import' first or check the working directory."
        )

    try:
        with open(path, 'r', encoding='utf-8') as f:
            text = f.read()
    except (OSError, UnicodeDecodeError) as e:
        raise StateLoadError(f"Unable to read tfstate {state_path}: {e}") from e

    return parse_state(text)


def parse_state(text: str) -> StateSnapshot:
    """
    Parse state JSON text, keeping attribute order as written.
    
    Raises:
        StateLoadError: If the text is not valid JSON or not a state document
    """
    try:
        data = json.loads(text, object_pairs_hook=OrderedDict)
    except json.JSONDecodeError as e:
        raise StateLoadError(f"Unable to translate tfstate in memory: invalid JSON: {e}") from e

    if not isinstance(data, dict):
        raise StateLoadError("Unable to translate tfstate in memory: state must be a JSON object")

    try:
        snapshot = StateSnapshot(**data)
    except ValidationError as e:
        raise StateLoadError(f"Unable to translate tfstate in memory: {e}") from e

    logger.info(
        f"Loaded state (terraform: {snapshot.terraform_version}, "
        f"resources: {len(snapshot.resources)})"
    )
    return snapshot
