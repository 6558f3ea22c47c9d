"""Terraform state snapshot models and loading."""

from .models import StateSnapshot, StateResource, ResourceInstance, provider_name
from .loader import load_state, parse_state

__all__ = [
    "StateSnapshot",
    "StateResource",
    "ResourceInstance",
    "provider_name",
    "load_state",
    "parse_state",
]
