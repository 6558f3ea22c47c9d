"""Pydantic models for reconciliation settings."""

from pathlib import Path
from typing import Dict, List, Optional
from pydantic import BaseModel, Field


class TerraformConfig(BaseModel):
    """How the terraform binary is invoked."""
    binary: str = Field(default="terraform", description="Executable name or path")
    env: Dict[str, str] = Field(default_factory=dict, description="Extra environment variables (e.g. provider credentials)")
    timeout: Optional[float] = Field(default=None, gt=0, description="Per-command timeout in seconds")


class RenderConfig(BaseModel):
    """Controls how state is rendered back into HCL."""
    indent: str = Field(default="\t", description="Indentation unit")
    provider_sources: Dict[str, str] = Field(
        default_factory=dict,
        description="Provider name -> registry source for the required_providers block"
    )
    excluded_attributes: List[str] = Field(
        default_factory=lambda: ["id"],
        description="Attributes dropped from every rendered resource"
    )
    resource_attributes: Dict[str, List[str]] = Field(
        default_factory=dict,
        description="Resource type -> attributes to keep (all when absent)"
    )


class ReconcileConfig(BaseModel):
    """Settings for one reconciliation run, built once and passed explicitly."""
    working_dir: Path = Field(default=Path("."), description="Terraform working directory")
    definitions_file: str = Field(default="main.tf", description="Declarations file, relative to working_dir")
    state_file: str = Field(default="terraform.tfstate", description="State file, relative to working_dir")
    auto_approve: bool = Field(default=False, description="Skip the confirmation prompt")
    terraform: TerraformConfig = Field(default_factory=TerraformConfig)
    render: RenderConfig = Field(default_factory=RenderConfig)

    @property
    def definitions_path(self) -> Path:
        return self.working_dir / self.definitions_file

    @property
    def state_path(self) -> Path:
        return self.working_dir / self.state_file
