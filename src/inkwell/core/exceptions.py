"""
Inkwell exception hierarchy.

All inkwell exceptions inherit from InkwellError, making it easy for callers
to catch library-level errors while still distinguishing specific failure modes.
"""


class InkwellError(Exception):
    """Base exception class for all inkwell errors."""


class ConfigurationError(InkwellError):
    """Raised for configuration errors (unknown storage mode, missing remote URL)."""


class SyncError(InkwellError):
    """Raised when a remote read or write fails."""


class ImportFormatError(InkwellError, ValueError):
    """Raised when imported data is not a list of entry-shaped records."""
