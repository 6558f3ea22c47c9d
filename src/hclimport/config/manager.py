"""Two-tier configuration manager (user + project override)."""

import os
import yaml
from pathlib import Path
from typing import Dict, Any, Optional
from pydantic import ValidationError
from .models import ReconcileConfig
from .paths import get_user_config_path, get_project_config_path
from ..utils.errors import ConfigError
from ..utils.logging import get_logger

logger = get_logger("config.manager")

ENV_OVERRIDES = {
    "HCLIMPORT_TERRAFORM_BINARY": ("terraform", "binary"),
    "HCLIMPORT_WORKDIR": ("working_dir",),
}


def load_config(config_path: Optional[str] = None, working_dir: Optional[str] = None,
                **overrides: Any) -> ReconcileConfig:
    """
    Build the reconciliation config.
    
    Priority (highest first):
    1. Keyword overrides (CLI flags); None values are ignored
    2. HCLIMPORT_* environment variables
    3. Explicit config file, or project .hclimport/config.yaml over ~/.hclimport/config.yaml
    4. Model defaults
    
    Args:
        config_path: Optional explicit YAML config file
        working_dir: Optional working directory (also where the project config is looked up)
        overrides: Top-level field overrides
        
    Returns:
        ReconcileConfig
        
    Raises:
        ConfigError: If a config file is missing, invalid YAML, or fails validation
    """
    if config_path:
        path = Path(config_path)
        if not path.exists():
            raise ConfigError(f"Config file not found: {config_path}")
        config = _read_yaml(path)
    else:
        config = {}
        user_config_path = get_user_config_path()
        if user_config_path.exists():
            config = _read_yaml(user_config_path)
        project_config_path = get_project_config_path(Path(working_dir) if working_dir else None)
        if project_config_path:
            _deep_merge(config, _read_yaml(project_config_path))
            logger.info(f"Loaded project config from {project_config_path}")

    for env_var, keys in ENV_OVERRIDES.items():
        value = os.getenv(env_var)
        if value:
            _set_nested(config, keys, value)

    if working_dir is not None:
        config["working_dir"] = working_dir
    for key, value in overrides.items():
        if value is not None:
            config[key] = value

    try:
        return ReconcileConfig(**config)
    except ValidationError as e:
        raise ConfigError(f"Invalid configuration: {e}") from e


def _read_yaml(path: Path) -> Dict[str, Any]:
    try:
        with open(path, 'r', encoding='utf-8') as f:
            data = yaml.safe_load(f) or {}
    except yaml.YAMLError as e:
        raise ConfigError(f"Invalid YAML in config file {path}: {e}") from e
    except OSError as e:
        raise ConfigError(f"Error loading config file {path}: {e}") from e

    if not isinstance(data, dict):
        raise ConfigError(f"Config file {path} must contain a dictionary")
    return data


def _deep_merge(base: Dict[str, Any], override: Dict[str, Any]) -> None:
    """Deep merge override into base (mutates base)."""
    for key, value in override.items():
        if key in base and isinstance(base[key], dict) and isinstance(value, dict):
            _deep_merge(base[key], value)
        else:
            base[key] = value


def _set_nested(config: Dict[str, Any], keys: tuple, value: Any) -> None:
    target = config
    for key in keys[:-1]:
        if not isinstance(target.get(key), dict):
            target[key] = {}
        target = target[key]
    target[keys[-1]] = value
