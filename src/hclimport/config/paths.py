"""Config path resolution for two-tier config system."""

from pathlib import Path
from typing import Optional


def get_user_config_path() -> Path:
    """Get user config path: ~/.hclimport/config.yaml"""
    return Path.home() / ".hclimport" / "config.yaml"


def get_project_config_path(working_dir: Optional[Path] = None) -> Optional[Path]:
    """Get project config path: .hclimport/config.yaml (from the working directory)"""
    base = working_dir or Path.cwd()
    project_config = base / ".hclimport" / "config.yaml"
    if project_config.exists():
        return project_config
    return None
