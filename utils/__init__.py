"""
U6 utility modules.

This package provides:
- Formatting: format_version (fixed-decimal version strings).
- Logging: setup_logging, get_logger, log_request.
"""

from u6hal.utils.formatting import format_version
from u6hal.utils.logging import (
    get_logger,
    log_request,
    setup_logging,
)

__all__ = [
    "format_version",
    "get_logger",
    "log_request",
    "setup_logging",
]
