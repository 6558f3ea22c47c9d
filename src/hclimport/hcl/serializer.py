"""Recursive conversion of state attribute trees into HCL lines."""

import re
from typing import Any, List, Mapping

from .keys import normalize_key
from .values import (
    ValueKind,
    SCALAR_KINDS,
    COMPOSITE_KINDS,
    canonicalize,
    classify,
    format_scalar,
    quote,
)
from ..utils.logging import get_logger

logger = get_logger("hcl.serializer")

DEFAULT_INDENT = "\t"
# keys usable bare inside an object expression
IDENTIFIER = re.compile(r"^[A-Za-z_][A-Za-z0-9_\-]*$")


def render_attributes(data: Any, depth: int = 1, indent: str = DEFAULT_INDENT) -> List[str]:
    """
    Canonicalize an attribute tree and render it as HCL lines.
    
    Args:
        data: Attribute mapping (e.g. a state instance's ``attributes``)
        depth: Indentation depth of the emitted assignments
        indent: Indentation unit
        
    Returns:
        Rendered lines, without trailing newlines
    """
    lines: List[str] = []
    canonical = canonicalize(data)
    kind = classify(canonical)
    if kind is ValueKind.NULL:
        return lines
    if kind is not ValueKind.MAP:
        logger.warning(f"Unable to determine type: expected attribute mapping, got {type(data).__name__}")
        return lines
    serialize_attributes(canonical, depth, lines, indent)
    return lines


def serialize_attributes(mapping: Mapping[str, Any], depth: int, lines: List[str],
                         indent: str = DEFAULT_INDENT, in_object: bool = False) -> None:
    """Serialize every key of ``mapping`` in iteration order."""
    for key, value in mapping.items():
        serialize_value(str(key), value, depth, lines, indent, in_object)


def serialize_value(key: str, value: Any, depth: int, lines: List[str],
                    indent: str = DEFAULT_INDENT, in_object: bool = False) -> None:
    """
    Append the HCL rendering of one ``key = value`` pair to ``lines``.
    
    Null values, empty lists and empty maps are omitted. Lists whose elements
    are all composite (maps or lists) become repeated ``key { ... }`` blocks.
    Values of an unsupported shape are skipped with a warning.
    
    Args:
        key: Attribute name in its source convention
        value: Canonical value
        depth: Indentation depth
        lines: Sink the rendered lines are appended to
        indent: Indentation unit
        in_object: True inside a ``key = { ... }`` object, where keys that are
            not identifiers must be quoted
    """
    pad = indent * depth
    name = _render_key(key, in_object)
    kind = classify(value)

    if kind is ValueKind.NULL:
        return
    if kind in (ValueKind.STRING, ValueKind.NUMBER, ValueKind.BOOLEAN):
        lines.append(f"{pad}{name} = {format_scalar(value)}")
    elif kind is ValueKind.MAP:
        if not value:
            return
        lines.append("")
        lines.append(f"{pad}{name} = {{")
        serialize_attributes(value, depth + 1, lines, indent, in_object=True)
        lines.append(f"{pad}}}")
    elif kind is ValueKind.LIST:
        _serialize_list(key, name, value, depth, lines, indent)
    else:
        logger.warning(f"Unable to determine type for '{key}' ({type(value).__name__}), skipping")


def _render_key(key: str, in_object: bool) -> str:
    name = normalize_key(key)
    if in_object and not IDENTIFIER.match(name):
        return quote(name)
    return name


def _serialize_list(key: str, name: str, items: List[Any], depth: int, lines: List[str],
                    indent: str) -> None:
    if not items:
        return
    pad = indent * depth
    kinds = [classify(item) for item in items]

    if all(k in SCALAR_KINDS for k in kinds):
        rendered = ", ".join(format_scalar(item) for item in items)
        lines.append(f"{pad}{name} = [{rendered}]")
    elif all(k in COMPOSITE_KINDS for k in kinds):
        # repeated nested blocks, not an array literal
        for item in items:
            lines.append("")
            lines.append(f"{pad}{name} {{")
            _serialize_block_body(key, item, depth + 1, lines, indent)
            lines.append(f"{pad}}}")
    else:
        shapes = sorted({k.value for k in kinds})
        logger.warning(f"Unable to determine type for '{key}' (list of {', '.join(shapes)}), skipping")


def _serialize_block_body(key: str, item: Any, depth: int, lines: List[str], indent: str) -> None:
    """Maps fill the block; nested lists contribute the maps they contain."""
    kind = classify(item)
    if kind is ValueKind.MAP:
        serialize_attributes(item, depth, lines, indent)
    elif kind is ValueKind.LIST:
        for inner in item:
            _serialize_block_body(key, inner, depth, lines, indent)
    elif kind is not ValueKind.NULL:
        logger.warning(f"Unable to determine type for element of '{key}' ({kind.value}), skipping")
