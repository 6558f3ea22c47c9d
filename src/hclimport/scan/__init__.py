"""Best-effort scan of existing declarations."""

from .scanner import DeclarationIndex, scan_declarations, scan_file

__all__ = ["DeclarationIndex", "scan_declarations", "scan_file"]
