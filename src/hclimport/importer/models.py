"""Pydantic model for resource definitions collected from a remote."""

from pydantic import BaseModel, Field


class ResourceDefinition(BaseModel):
    """A remote resource slated for import."""
    type: str = Field(..., description="Terraform resource type (e.g. 'onelogin_apps')")
    name: str = Field(..., description="Local resource name")
    provider: str = Field(..., description="Provider name the resource belongs to")
    import_id: str = Field(..., description="Identifier passed to 'terraform import'")

    @property
    def address(self) -> str:
        """Resource identity in ``Type.Name`` form."""
        return f"{self.type}.{self.name}"
