"""Pydantic models for the parts of a Terraform state file used for rendering."""

import re
from typing import Any, List
from pydantic import BaseModel, Field

# provider["registry.terraform.io/onelogin/onelogin"] or provider["...".alias]
_PROVIDER_ADDRESS = re.compile(r'^provider\["(?P<source>[^"]+)"\](?:\.(?P<alias>[\w\-]+))?$')


class ResourceInstance(BaseModel):
    """One instance of a resource; only its attributes are kept."""
    data: Any = Field(default=None, alias="attributes", description="Untyped attribute tree")

    class Config:
        populate_by_name = True


class StateResource(BaseModel):
    """A resource entry from the state file."""
    mode: str = Field(default="managed", description="'managed' or 'data'")
    type: str = Field(..., description="Resource type")
    name: str = Field(..., description="Resource name")
    provider: str = Field(default="", description="Provider address as written in state")
    instances: List[ResourceInstance] = Field(default_factory=list)
    content: str = Field(default="", description="Trailing text re-emitted verbatim after the resource")

    @property
    def provider_name(self) -> str:
        return provider_name(self.provider)

    @property
    def provider_alias(self) -> str:
        """Alias of the provider configuration; the provider name when state has none."""
        return provider_alias(self.provider) or self.provider_name


class StateSnapshot(BaseModel):
    """In-memory representation of terraform.tfstate."""
    version: int = Field(default=4)
    terraform_version: str = Field(default="unknown")
    resources: List[StateResource] = Field(default_factory=list)


def provider_name(address: str) -> str:
    """
    Reduce a state provider address to its local provider name.
    
    Examples:
        'provider.onelogin' -> 'onelogin'
        'provider["registry.terraform.io/onelogin/onelogin"]' -> 'onelogin'
        'provider["registry.terraform.io/hashicorp/aws"].west' -> 'aws'
    """
    address = address.strip()
    match = _PROVIDER_ADDRESS.match(address)
    if match:
        return match.group("source").rsplit("/", 1)[-1]
    if address.startswith("provider."):
        return address[len("provider."):].split(".", 1)[0]
    return address


def provider_alias(address: str) -> str:
    """Alias part of a state provider address, or '' for the default configuration."""
    address = address.strip()
    match = _PROVIDER_ADDRESS.match(address)
    if match:
        return match.group("alias") or ""
    if address.startswith("provider."):
        parts = address[len("provider."):].split(".", 1)
        return parts[1] if len(parts) > 1 else ""
    return ""
