"""Invocation of the terraform binary."""

from .runner import TerraformRunner

__all__ = ["TerraformRunner"]
