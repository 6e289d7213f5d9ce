"""U6 driver exception classes.

All package exceptions inherit from U6Error. Driver bindings raise
DriverError; the controller catches it at each call site and turns it into a
failed IOResult, so these never escape a controller operation.

Exception hierarchy and optional context:
- U6Error: base (no context)
- DriverError: error_code (native driver code, if the binding has one)
- ConfigurationError: (no context, also a ValueError)
"""

from typing import Optional

__all__ = [
    "U6Error",
    "DriverError",
    "ConfigurationError",
]


class U6Error(Exception):
    """Base exception for all U6-related errors."""

    pass


class DriverError(U6Error):
    """Raised by a driver binding when open, request, execute or fetch fails."""

    def __init__(
        self,
        message: str,
        error_code: Optional[int] = None,
    ) -> None:
        super().__init__(message)
        self.error_code = error_code


class ConfigurationError(U6Error, ValueError):
    """Raised when U6Config holds an invalid value."""

    pass
