"""Rename resource definitions whose names collide within one batch."""

from collections import Counter
from typing import List, Sequence, Set
from .models import ResourceDefinition
from ..utils.logging import get_logger

logger = get_logger("importer.disambiguate")


def disambiguate(definitions: Sequence[ResourceDefinition]) -> List[ResourceDefinition]:
    """
    Assign unique names to definitions sharing a name within the batch.
    
    The first definition with a given name keeps it; every later one is renamed
    to ``_<name>_<n>`` with ``n`` counting collisions from 0. Generated names
    that would clash with a name already present in the batch are skipped.
    The input is not mutated and exactly one definition is returned per input,
    in the original order.
    
    Args:
        definitions: Definitions in remote order
        
    Returns:
        New list of definitions with unique names
    """
    # First pass: every name present in the batch is reserved.
    counts = Counter(d.name for d in definitions)
    taken: Set[str] = set(counts)

    seen: Set[str] = set()
    collisions: Counter = Counter()
    result = []
    for definition in definitions:
        if counts[definition.name] == 1 or definition.name not in seen:
            seen.add(definition.name)
            result.append(definition.model_copy())
            continue

        while True:
            candidate = f"_{definition.name}_{collisions[definition.name]}"
            collisions[definition.name] += 1
            if candidate not in taken:
                break
        taken.add(candidate)
        logger.info(f"Renaming duplicate {definition.address} to {definition.type}.{candidate}")
        result.append(definition.model_copy(update={"name": candidate}))

    return result
