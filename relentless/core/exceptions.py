"""
Exception classes for relentless.
"""


class RelentlessError(Exception):
    """Base exception for all relentless errors."""
    pass


class ConfigurationError(RelentlessError):
    """Raised when configuration is invalid."""
    pass


class StorageError(RelentlessError):
    """Raised when tracker state cannot be persisted."""
    pass


class ImportPayloadError(RelentlessError):
    """Raised when an import payload is malformed or fails validation."""
    pass


class TaskNotFoundError(RelentlessError):
    """Raised when a task cannot be found in the roster."""
    pass
