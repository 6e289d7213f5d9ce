"""
u6hal - Hardware abstraction layer for a USB-connected LabJack U6.

Exposes a small set of operations (connect, configure, read, write, query
versions) over a single U6 multifunction I/O device, translating each into
LabJack UD-style driver requests while tracking connection state and the
last error.

Supported Features:
    - Digital I/O (single bit read/write)
    - Analog inputs with per-channel range, resolution and settling time
    - DAC outputs
    - Driver, bootloader, hardware and firmware version queries
    - Value-or-error results (IOResult) alongside the sentinel API
    - Simulated driver for running without hardware

Public API (import from u6hal):
    U6Controller, U6Config, IOResult, ErrorKind, AnalogRange, SettlingTime,
    ResolutionIndex, U6Error, DriverError, ConfigurationError,
    create_driver, __version__
"""

from u6hal.core.config import AnalogRange, ResolutionIndex, SettlingTime, U6Config
from u6hal.core.exceptions import ConfigurationError, DriverError, U6Error
from u6hal.core.results import ErrorKind, IOResult
from u6hal.core.controller import U6Controller
from u6hal.drivers import create_driver

__version__ = "1.0.0"
__author__ = "u6hal Development"

__all__ = [
    "AnalogRange",
    "ConfigurationError",
    "DriverError",
    "ErrorKind",
    "IOResult",
    "ResolutionIndex",
    "SettlingTime",
    "U6Config",
    "U6Controller",
    "U6Error",
    "create_driver",
    "__version__",
]
