"""Remote resource definitions: models, sources and name disambiguation."""

from .models import ResourceDefinition
from .disambiguate import disambiguate
from .sources import Importer, FileImporter

__all__ = ["ResourceDefinition", "disambiguate", "Importer", "FileImporter"]
