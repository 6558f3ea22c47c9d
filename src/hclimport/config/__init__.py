"""Configuration module: load reconciliation settings."""

from .models import ReconcileConfig, TerraformConfig, RenderConfig
from .manager import load_config
from .paths import get_user_config_path, get_project_config_path

__all__ = [
    "ReconcileConfig",
    "TerraformConfig",
    "RenderConfig",
    "load_config",
    "get_user_config_path",
    "get_project_config_path",
]
