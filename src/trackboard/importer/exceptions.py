"""Custom exceptions for Import Reconciler."""


class ImporterError(Exception):
    """Base exception for Import Reconciler errors."""


class ImportParseError(ImporterError):
    """Raw import text is not a well-formed JSON document."""
