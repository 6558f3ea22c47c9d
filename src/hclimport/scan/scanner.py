"""Find resource and provider blocks already declared in a configuration file.

This is a line-oriented text scan, not an HCL parser. Lines that do not look
like a block header are skipped, so partial or malformed files never fail.
"""

import re
from collections import Counter
from pathlib import Path
from typing import Iterable, List
from dataclasses import dataclass, field
from ..utils.errors import DefinitionFileError
from ..utils.logging import get_logger

logger = get_logger("scan.scanner")

_LABEL = r'"?([A-Za-z_][\w\-]*)"?'

PROVIDER_HEADER = re.compile(rf"^\s*provider\s+{_LABEL}\s*\{{")
RESOURCE_HEADER = re.compile(rf"^\s*resource\s+{_LABEL}\s+{_LABEL}\s*\{{")


@dataclass
class DeclarationIndex:
    """Occurrence counts of declared resource addresses ('type.name') and provider names."""
    resources: Counter = field(default_factory=Counter)
    providers: Counter = field(default_factory=Counter)

    def has_resource(self, address: str) -> bool:
        """Check whether a ``type.name`` address is declared."""
        return self.resources.get(address, 0) > 0

    def has_provider(self, name: str) -> bool:
        """Check whether a provider block is declared."""
        return self.providers.get(name, 0) > 0

    @property
    def resource_keys(self) -> List[str]:
        return sorted(k for k, v in self.resources.items() if v > 0)

    @property
    def provider_keys(self) -> List[str]:
        return sorted(k for k, v in self.providers.items() if v > 0)


def scan_declarations(lines: Iterable[str]) -> DeclarationIndex:
    """
    Scan configuration text for provider and resource block headers.
    
    Args:
        lines: Readable text stream or any iterable of lines
        
    Returns:
        DeclarationIndex of everything that was found
    """
    index = DeclarationIndex()
    for line in lines:
        match = PROVIDER_HEADER.match(line)
        if match:
            index.providers[match.group(1)] += 1
            continue
        match = RESOURCE_HEADER.match(line)
        if match:
            index.resources[f"{match.group(1)}.{match.group(2)}"] += 1

    logger.debug(
        f"Scanned declarations: {len(index.resources)} resources, "
        f"{len(index.providers)} providers"
    )
    return index


def scan_file(path: str) -> DeclarationIndex:
    """
    Scan a configuration file on disk.
    
    A missing file has no declarations.
    
    Raises:
        DefinitionFileError: If the file exists but cannot be read
    """
    file_path = Path(path)
    if not file_path.exists():
        return DeclarationIndex()
    try:
        with open(file_path, 'r', encoding='utf-8') as f:
            return scan_declarations(f)
    except (OSError, UnicodeDecodeError) as e:
        raise DefinitionFileError(f"Unable to read {path}: {e}") from e
