"""
Driver binding interface.

A binding is the native layer between the controller and the physical U6.
It mirrors the LabJack UD call pattern: requests are queued per handle,
executed together, and their results fetched one by one. Every failure is
raised as DriverError.
"""

from abc import ABC, abstractmethod
from typing import NamedTuple


class DriverResult(NamedTuple):
    """One result fetched from the driver after execution."""

    io_type: int
    channel: int
    value: float


class DriverBinding(ABC):
    """Abstract LabJack UD-style driver binding."""

    @abstractmethod
    def open_usb(self, device_id: str = "0", first_found: bool = True) -> int:
        """
        Open a USB session with a U6.

        Args:
            device_id: Device address (local ID or serial as string)
            first_found: Open the first U6 found if device_id does not match

        Returns:
            Opaque device handle

        Raises:
            DriverError: If no device could be opened
        """

    @abstractmethod
    def add_request(
        self,
        handle: int,
        io_type: int,
        channel: int,
        value: float,
        x1: int = 0,
        user_data: float = 0.0,
    ) -> None:
        """Queue a request for execution by go_one()."""

    @abstractmethod
    def go_one(self, handle: int) -> None:
        """Execute all requests queued for the handle."""

    @abstractmethod
    def get_first_result(self, handle: int) -> DriverResult:
        """Return the first result of the last execution."""

    @abstractmethod
    def e_put(self, handle: int, io_type: int, channel: int, value: float, x1: int = 0) -> None:
        """Queue, execute and check a single put request."""

    @abstractmethod
    def e_get(self, handle: int, io_type: int, channel: int, x1: int = 0) -> float:
        """Queue, execute and return the value of a single get request."""

    @abstractmethod
    def get_driver_version(self) -> float:
        """Return the installed driver version (no open session needed)."""
