"""Sources of remote resource definitions.

The reconciliation workflow only depends on the ``Importer`` protocol. The
``FileImporter`` reads definitions exported from a remote API into a YAML or
JSON document keyed by resource kind::

    onelogin_apps:
      - type: onelogin_apps
        name: my_app
        provider: onelogin
        import_id: "123456"
"""

import yaml
from pathlib import Path
from typing import Dict, List, Optional, Protocol
from pydantic import ValidationError
from .models import ResourceDefinition
from ..utils.errors import ImporterError
from ..utils.logging import get_logger

logger = get_logger("importer.sources")


class Importer(Protocol):
    """Anything that can list remote resources of a given kind."""

    def import_from_remote(self, kind: str, search_id: Optional[str] = None) -> List[ResourceDefinition]:
        ...


class FileImporter:
    """Importer backed by a YAML/JSON document of definitions per kind."""

    def __init__(self, path: str):
        self.path = Path(path)
        self._kinds: Optional[Dict[str, List[ResourceDefinition]]] = None

    @property
    def kinds(self) -> List[str]:
        return sorted(self._load())

    def import_from_remote(self, kind: str, search_id: Optional[str] = None) -> List[ResourceDefinition]:
        """
        Return the definitions of one kind, in document order.
        
        Args:
            kind: Resource kind selector (case-insensitive)
            search_id: Only return the definition with this import id
            
        Raises:
            ImporterError: If the document is invalid or the kind is unknown
        """
        kinds = self._load()
        selector = kind.lower()
        if selector not in kinds:
            raise ImporterError(
                f"Unknown resource kind '{kind}'. "
                f"Available kinds: {', '.join(self.kinds) or 'none'}"
            )

        definitions = kinds[selector]
        if search_id:
            definitions = [d for d in definitions if d.import_id == search_id]
        logger.info(f"Collected {len(definitions)} '{selector}' definitions from {self.path}")
        return [d.model_copy() for d in definitions]

    def _load(self) -> Dict[str, List[ResourceDefinition]]:
        if self._kinds is not None:
            return self._kinds

        if not self.path.is_file():
            raise ImporterError(f"Definitions file not found: {self.path}")
        try:
            with open(self.path, 'r', encoding='utf-8') as f:
                data = yaml.safe_load(f) or {}
        except yaml.YAMLError as e:
            raise ImporterError(f"Invalid YAML in definitions file: {e}") from e
        except OSError as e:
            raise ImporterError(f"Error reading definitions file: {e}") from e

        if not isinstance(data, dict):
            raise ImporterError("Definitions file must map resource kinds to lists of definitions")

        kinds = {}
        for kind, entries in data.items():
            if not isinstance(entries, list):
                raise ImporterError(f"Definitions for '{kind}' must be a list")
            try:
                kinds[str(kind).lower()] = [ResourceDefinition(**_stringify(e)) for e in entries]
            except (TypeError, ValidationError) as e:
                raise ImporterError(f"Invalid definition under '{kind}': {e}") from e

        self._kinds = kinds
        return kinds


def _stringify(entry: dict) -> dict:
    # numeric ids are common in exports; definitions are all strings
    if not isinstance(entry, dict):
        raise TypeError(f"expected a mapping, got {type(entry).__name__}")
    return {k: str(v) if isinstance(v, (int, float)) and not isinstance(v, bool) else v
            for k, v in entry.items()}
