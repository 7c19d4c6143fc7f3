"""Exceptions raised by the functional core."""


class ValidationError(ValueError):
    """Input rejected before any state was touched."""


class NothingToExportError(Exception):
    """Raised when an export is requested for an empty ledger."""
