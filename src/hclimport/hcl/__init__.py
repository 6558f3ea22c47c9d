"""Declarative-syntax (HCL) generation from untyped state data."""

from .keys import normalize_key
from .values import ValueKind, classify, canonicalize
from .serializer import serialize_value, serialize_attributes, render_attributes

__all__ = [
    "normalize_key",
    "ValueKind",
    "classify",
    "canonicalize",
    "serialize_value",
    "serialize_attributes",
    "render_attributes",
]
