"""
Simulated U6 driver binding.

Keeps device state in memory so the controller can be exercised without
hardware: digital lines echo what was written, analog inputs return preset
voltages, DAC and configuration writes are recorded. Faults can be injected
per binding method.
"""

from typing import Any, Dict, List, Optional, Tuple

from u6hal.core.config import IOType, SpecialChannel
from u6hal.core.exceptions import DriverError
from u6hal.drivers.base import DriverBinding, DriverResult

# UD error codes used by the simulation
NO_DEVICES_FOUND = 1015
INVALID_HANDLE = 1014
NOTHING_EXECUTED = 1008
INVALID_IO_TYPE = 1010


class SimulatedDriver(DriverBinding):
    """
    In-memory U6.

    Usage:
        driver = SimulatedDriver()
        driver.set_analog_input(0, 1.25)
        controller = U6Controller(driver)
        controller.connect()
        controller.get_analog_input(0)   # 1.25
    """

    def __init__(
        self,
        driver_version: float = 3.48,
        hardware_version: float = 2.0,
        firmware_version: float = 1.43,
        bootloader_version: float = 0.27,
        busy_message: Optional[str] = None,
    ):
        self.driver_version = driver_version
        self.versions: Dict[int, float] = {
            SpecialChannel.HARDWARE_VERSION: hardware_version,
            SpecialChannel.FIRMWARE_VERSION: firmware_version,
            SpecialChannel.BOOTLOADER_VERSION: bootloader_version,
        }
        self.busy_message = busy_message

        self.digital: Dict[int, int] = {}
        self.analog_inputs: Dict[int, float] = {}
        self.dac_outputs: Dict[int, float] = {}
        self.ranges: Dict[int, int] = {}
        self.config: Dict[int, float] = {}

        self.calls: List[Tuple[str, Tuple[Any, ...]]] = []
        self.open_count = 0

        self._handles: Dict[int, List[Tuple[int, int, float]]] = {}
        self._results: Dict[int, List[DriverResult]] = {}
        self._next_handle = 1
        self._faults: Dict[str, Tuple[str, int]] = {}
        self._forced_kind: Optional[int] = None

    # ------------------------------------------------------------------
    # Test hooks
    # ------------------------------------------------------------------

    def set_analog_input(self, channel: int, volts: float) -> None:
        """Preset the voltage returned for an analog input channel."""
        self.analog_inputs[channel] = float(volts)

    def fail_on(self, method: str, message: str, after: int = 0) -> None:
        """
        Raise DriverError(message) from a binding method.

        Args:
            method: Binding method name (e.g. "go_one", "e_put")
            message: Error text carried by the exception
            after: Number of calls to let through before failing
        """
        self._faults[method] = (message, after)

    def clear_faults(self) -> None:
        self._faults.clear()
        self._forced_kind = None

    def force_result_kind(self, io_type: int) -> None:
        """Make get_first_result() report io_type regardless of the request."""
        self._forced_kind = int(io_type)

    def calls_to(self, method: str) -> List[Tuple[Any, ...]]:
        """Arguments of every recorded call to `method`."""
        return [args for name, args in self.calls if name == method]

    # ------------------------------------------------------------------
    # DriverBinding
    # ------------------------------------------------------------------

    def open_usb(self, device_id: str = "0", first_found: bool = True) -> int:
        self._record("open_usb", device_id, first_found)
        if self.busy_message is not None:
            raise DriverError(self.busy_message, error_code=NO_DEVICES_FOUND)
        handle = self._next_handle
        self._next_handle += 1
        self._handles[handle] = []
        self._results[handle] = []
        self.open_count += 1
        return handle

    def add_request(
        self,
        handle: int,
        io_type: int,
        channel: int,
        value: float,
        x1: int = 0,
        user_data: float = 0.0,
    ) -> None:
        self._record("add_request", handle, io_type, channel, value)
        self._queue(handle).append((int(io_type), int(channel), float(value)))

    def go_one(self, handle: int) -> None:
        # The queue is consumed even when execution fails
        pending = list(self._handles.get(handle, []))
        self._handles.get(handle, []).clear()
        self._results[handle] = []
        self._record("go_one", handle)
        self._queue(handle)
        if not pending:
            raise DriverError("No requests to execute", error_code=NOTHING_EXECUTED)
        self._results[handle] = [
            self._execute(io_type, channel, value) for io_type, channel, value in pending
        ]

    def get_first_result(self, handle: int) -> DriverResult:
        self._record("get_first_result", handle)
        self._queue(handle)
        results = self._results.get(handle) or []
        if not results:
            raise DriverError("No results available", error_code=NOTHING_EXECUTED)
        first = results[0]
        if self._forced_kind is not None:
            return first._replace(io_type=self._forced_kind)
        return first

    def e_put(self, handle: int, io_type: int, channel: int, value: float, x1: int = 0) -> None:
        self._record("e_put", handle, io_type, channel, value)
        self._queue(handle)
        self._execute(int(io_type), int(channel), float(value))

    def e_get(self, handle: int, io_type: int, channel: int, x1: int = 0) -> float:
        self._record("e_get", handle, io_type, channel)
        self._queue(handle)
        return self._execute(int(io_type), int(channel), 0.0).value

    def get_driver_version(self) -> float:
        self._record("get_driver_version")
        return self.driver_version

    # ------------------------------------------------------------------
    # Internals
    # ------------------------------------------------------------------

    def _record(self, method: str, *args: Any) -> None:
        self.calls.append((method, args))
        fault = self._faults.get(method)
        if fault is None:
            return
        message, after = fault
        if after > 0:
            self._faults[method] = (message, after - 1)
            return
        del self._faults[method]
        raise DriverError(message)

    def _queue(self, handle: int) -> List[Tuple[int, int, float]]:
        try:
            return self._handles[handle]
        except KeyError:
            raise DriverError(f"Invalid handle {handle}", error_code=INVALID_HANDLE) from None

    def _execute(self, io_type: int, channel: int, value: float) -> DriverResult:
        if io_type == IOType.PUT_DIGITAL_BIT:
            self.digital[channel] = 1 if value else 0
        elif io_type == IOType.GET_DIGITAL_BIT:
            value = float(self.digital.get(channel, 0))
        elif io_type == IOType.GET_AIN:
            value = self.analog_inputs.get(channel, 0.0)
        elif io_type == IOType.PUT_DAC:
            self.dac_outputs[channel] = value
        elif io_type == IOType.PUT_AIN_RANGE:
            self.ranges[channel] = int(value)
        elif io_type == IOType.PUT_CONFIG:
            self.config[channel] = value
        elif io_type == IOType.GET_CONFIG:
            if channel in self.versions:
                value = self.versions[channel]
            elif channel in self.config:
                value = self.config[channel]
            else:
                raise DriverError(f"Invalid config channel {channel}", error_code=INVALID_IO_TYPE)
        else:
            raise DriverError(f"Invalid IO type {io_type}", error_code=INVALID_IO_TYPE)
        return DriverResult(io_type, channel, value)
