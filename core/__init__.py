"""Core U6 driver components.

This package provides:
- U6Controller: main API (connect(), then digital/analog/DAC/version calls)
- U6Config: configuration (validate() called on controller init)
- IOResult / ErrorKind: value-or-error return type of controller operations
- AnalogInputConfig: value of a successful configure_analog()
- UD code tables: IOType, SpecialChannel, AnalogRange, SettlingTime, ResolutionIndex
- Exception hierarchy: U6Error, DriverError, ConfigurationError

Use __all__ as the canonical list of exported names.
"""

from .config import (
    AnalogRange,
    IOType,
    ResolutionIndex,
    SettlingTime,
    SpecialChannel,
    U6Config,
)
from .exceptions import ConfigurationError, DriverError, U6Error
from .results import AnalogInputConfig, ErrorKind, IOResult
from .controller import U6Controller

__all__ = [
    "AnalogInputConfig",
    "AnalogRange",
    "ConfigurationError",
    "DriverError",
    "ErrorKind",
    "IOResult",
    "IOType",
    "ResolutionIndex",
    "SettlingTime",
    "SpecialChannel",
    "U6Config",
    "U6Controller",
    "U6Error",
]
