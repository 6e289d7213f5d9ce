"""U6 driver bindings.

This package provides:
- DriverBinding / DriverResult: the interface the controller drives
- SimulatedDriver: in-memory U6 for tests and dry runs
- ExodriverBinding: real hardware through LabJackPython
- create_driver: build a binding by name (U6Config.driver)
"""

from u6hal.core.exceptions import ConfigurationError
from u6hal.drivers.base import DriverBinding, DriverResult
from u6hal.drivers.exodriver import ExodriverBinding
from u6hal.drivers.simulated import SimulatedDriver

_DRIVERS = {
    "simulated": SimulatedDriver,
    "exodriver": ExodriverBinding,
}


def create_driver(name: str) -> DriverBinding:
    """
    Build a driver binding by name.

    Raises:
        ConfigurationError: If the name is unknown.
    """
    try:
        factory = _DRIVERS[str(name).strip().lower()]
    except KeyError:
        raise ConfigurationError(
            f"Unknown driver {name!r}, expected one of {', '.join(_DRIVERS)}"
        ) from None
    return factory()


__all__ = [
    "DriverBinding",
    "DriverResult",
    "ExodriverBinding",
    "SimulatedDriver",
    "create_driver",
]
