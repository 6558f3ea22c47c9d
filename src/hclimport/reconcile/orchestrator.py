"""Compose scanning, disambiguation and serialization into file contents."""

from typing import Any, Iterable, List, Optional, Sequence, Set, Tuple
from ..config.models import RenderConfig
from ..hcl.serializer import render_attributes
from ..hcl.values import canonicalize, classify, quote, ValueKind
from ..importer.disambiguate import disambiguate
from ..importer.models import ResourceDefinition
from ..scan.scanner import DeclarationIndex
from ..state.models import StateSnapshot, StateResource
from ..utils.logging import get_logger

logger = get_logger("reconcile.orchestrator")


def reconcile(
    remote_definitions: Sequence[ResourceDefinition],
    existing: DeclarationIndex
) -> Tuple[List[ResourceDefinition], List[str]]:
    """
    Select the remote definitions that still need to be imported.
    
    Names are disambiguated first so that a rerun derives the same names and
    finds them already declared.
    
    Args:
        remote_definitions: Definitions in remote order
        existing: Declarations already present in the target file
        
    Returns:
        Tuple of (new definitions, new provider names), both in first-seen order
    """
    new_definitions = [
        d for d in disambiguate(remote_definitions)
        if not existing.has_resource(d.address)
    ]

    new_providers: List[str] = []
    for definition in new_definitions:
        provider = definition.provider
        if provider and provider not in new_providers and not existing.has_provider(provider):
            new_providers.append(provider)

    skipped = len(remote_definitions) - len(new_definitions)
    if skipped:
        logger.info(f"Skipping {skipped} definitions already declared")
    return new_definitions, new_providers


def render_provider_block(name: str, indent: str = "\t", alias: Optional[str] = None) -> str:
    """Provider block whose alias defaults to the provider name."""
    return f"provider {name} {{\n{indent}alias = {quote(alias or name)}\n}}\n\n"


def render_definition_headers(definitions: Iterable[ResourceDefinition], providers: Iterable[str],
                              indent: str = "\t") -> str:
    """Empty provider and resource blocks that 'terraform import' can address."""
    parts = [render_provider_block(p, indent) for p in providers]
    parts.extend(f"resource {d.type} {d.name} {{}}\n" for d in definitions)
    return "".join(parts)


def render_state(snapshot: StateSnapshot, config: Optional[RenderConfig] = None) -> str:
    """
    Render a state snapshot as the full contents of the declarations file.
    
    Each provider configuration is emitted once, before the first resource
    using it, and resources reference it as ``<name>.<alias>``.
    Each resource's trailing ``content`` is written verbatim right after its
    generated blocks.
    
    Args:
        snapshot: State read after import
        config: Rendering options (defaults when None)
        
    Returns:
        HCL text
    """
    config = config or RenderConfig()
    indent = config.indent
    logger.info("Assembling declarations file...")

    parts: List[str] = []
    header = _render_required_providers(snapshot, config)
    if header:
        parts.append(header)

    known_providers: Set[Tuple[str, str]] = set()
    for resource in snapshot.resources:
        if resource.mode != "managed":
            logger.debug(f"Skipping {resource.mode} source {resource.type}.{resource.name}")
            parts.append(resource.content)
            continue

        provider = resource.provider_name
        alias = resource.provider_alias
        if provider and (provider, alias) not in known_providers:
            known_providers.add((provider, alias))
            parts.append(render_provider_block(provider, indent, alias))

        for instance in resource.instances:
            lines = [f"resource {resource.type} {resource.name} {{"]
            if provider:
                lines.append(f"{indent}provider = {provider}.{alias}")
            lines.extend(render_attributes(_shape_attributes(resource, instance.data, config), 1, indent))
            lines.append("}")
            parts.append("\n".join(lines) + "\n\n")

        parts.append(resource.content)

    return "".join(parts)


def _render_required_providers(snapshot: StateSnapshot, config: RenderConfig) -> str:
    providers: List[str] = []
    for resource in snapshot.resources:
        name = resource.provider_name
        if name in config.provider_sources and name not in providers:
            providers.append(name)
    if not providers:
        return ""

    ind = config.indent
    lines = ["terraform {", f"{ind}required_providers {{"]
    for name in providers:
        lines.append(f"{ind * 2}{name} = {{")
        lines.append(f"{ind * 3}source = {quote(config.provider_sources[name])}")
        lines.append(f"{ind * 2}}}")
    lines.append(f"{ind}}}")
    lines.append("}")
    return "\n".join(lines) + "\n\n"


def _shape_attributes(resource: StateResource, data: Any, config: RenderConfig) -> Any:
    """Restrict attributes to the configured shape for the resource type."""
    data = canonicalize(data)
    if classify(data) is not ValueKind.MAP:
        return data

    allowed = config.resource_attributes.get(resource.type)
    excluded = set(config.excluded_attributes)
    return {
        key: value for key, value in data.items()
        if key not in excluded and (allowed is None or key in allowed)
    }
