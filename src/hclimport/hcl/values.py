"""Value classification for the HCL serializer.

State attributes arrive as an untyped nested tree. Before rendering, the tree is
canonicalized through a JSON round-trip so every node is one of: None, str,
bool, int, float, list, or an ordered mapping. Rendering then dispatches on the
``ValueKind`` tag returned by ``classify`` instead of on arbitrary Python types.
"""

import json
import math
from collections import OrderedDict
from enum import Enum
from typing import Any, Mapping

from pydantic import BaseModel

from ..utils.logging import get_logger

logger = get_logger("hcl.values")


class ValueKind(str, Enum):
    """Shape of a single attribute value."""
    NULL = "null"
    STRING = "string"
    NUMBER = "number"
    BOOLEAN = "boolean"
    LIST = "list"
    MAP = "map"
    UNSUPPORTED = "unsupported"


SCALAR_KINDS = (ValueKind.STRING, ValueKind.NUMBER, ValueKind.BOOLEAN, ValueKind.NULL)
COMPOSITE_KINDS = (ValueKind.LIST, ValueKind.MAP)


def classify(value: Any) -> ValueKind:
    """Return the ValueKind tag for a canonical value."""
    if value is None:
        return ValueKind.NULL
    # bool is a subclass of int, so it must be checked first
    if isinstance(value, bool):
        return ValueKind.BOOLEAN
    if isinstance(value, str):
        return ValueKind.STRING
    if isinstance(value, int):
        return ValueKind.NUMBER
    if isinstance(value, float):
        return ValueKind.NUMBER if math.isfinite(value) else ValueKind.UNSUPPORTED
    if isinstance(value, (list, tuple)):
        return ValueKind.LIST
    if isinstance(value, Mapping):
        return ValueKind.MAP
    return ValueKind.UNSUPPORTED


def canonicalize(value: Any) -> Any:
    """
    Normalize a value into a generic tree of scalars, lists and ordered maps.
    
    Pydantic models are dumped first. Values that cannot be encoded as JSON are
    returned unchanged so the serializer can report the offending keys
    individually instead of failing the whole resource.
    
    Args:
        value: Any nested value (typically decoded state attributes)
        
    Returns:
        Canonical tree with insertion-ordered mappings
    """
    if isinstance(value, BaseModel):
        value = value.model_dump(mode="json")
    try:
        encoded = json.dumps(value)
    except (TypeError, ValueError) as e:
        logger.debug(f"Value is not JSON-encodable, keeping raw tree: {e}")
        return value
    return json.loads(encoded, object_pairs_hook=OrderedDict)


def format_scalar(value: Any) -> str:
    """Render a scalar (string, number, boolean, null) as an HCL literal."""
    kind = classify(value)
    if kind is ValueKind.STRING:
        return quote(value)
    if kind is ValueKind.BOOLEAN:
        return "true" if value else "false"
    if kind is ValueKind.NULL:
        return "null"
    if kind is ValueKind.NUMBER:
        return format_number(value)
    raise ValueError(f"Not a scalar value: {value!r}")


def format_number(value: Any) -> str:
    """Render a number; integral floats drop their decimal part."""
    if isinstance(value, float) and value.is_integer() and abs(value) < 1e16:
        return str(int(value))
    return repr(value)


def quote(text: str) -> str:
    """Quote a string as an HCL string literal."""
    quoted = json.dumps(text, ensure_ascii=False)
    # template sequences would otherwise be interpolated by the HCL parser
    return quoted.replace("${", "$${").replace("%{", "%%{")
