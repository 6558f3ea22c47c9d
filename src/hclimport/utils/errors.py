"""Custom exception classes for hclimport."""


class HclImportError(Exception):
    """Base exception for all hclimport errors."""
    pass


class ConfigError(HclImportError):
    """Raised when configuration is invalid or missing."""
    pass


class DefinitionFileError(HclImportError):
    """Raised when the declarations file cannot be opened, read or written."""
    pass


class StateLoadError(HclImportError):
    """Raised when the Terraform state file cannot be loaded or is invalid."""
    pass


class ImporterError(HclImportError):
    """Raised when remote resource definitions cannot be collected."""
    pass


class TerraformError(HclImportError):
    """Raised when a terraform subprocess fails."""

    def __init__(self, message: str, command=None):
        super().__init__(message)
        self.command = list(command or [])
