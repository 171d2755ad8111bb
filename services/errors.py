"""
Error types raised by the capability map services.

Ingestion errors (SourceUnavailable, SheetNotFound) are caught at the load
boundary by DataCache. Query errors (MissingParameter, FunctionNotFound) are
mapped to HTTP status codes by the API layer.
"""


class CapabilityMapError(Exception):
    """Base class for all capability map errors."""


class SourceUnavailable(CapabilityMapError):
    """Workbook is missing, unreadable or corrupt."""

    def __init__(self, source, reason: str = ''):
        self.source = source
        self.reason = reason
        message = f"Workbook source unavailable: {source}"
        if reason:
            message = f"{message} ({reason})"
        super().__init__(message)


class SheetNotFound(CapabilityMapError):
    """Workbook does not contain a required sheet."""

    def __init__(self, sheet_name: str, available=None):
        self.sheet_name = sheet_name
        self.available = list(available or [])
        super().__init__(
            f"Sheet '{sheet_name}' not found "
            f"(available: {', '.join(self.available) or 'none'})"
        )


class MissingParameter(CapabilityMapError):
    """A required query parameter was not supplied."""

    def __init__(self, parameter: str):
        self.parameter = parameter
        super().__init__(f"Parameter '{parameter}' is required")


class FunctionNotFound(CapabilityMapError):
    """No capability carries the requested function name."""

    def __init__(self, function: str):
        self.function = function
        super().__init__(f"Function '{function}' not found")
