"""
U6 driver binding over LabJackPython.

Uses the `u6` and `LabJackPython` modules (Exodriver on Linux/macOS, UD on
Windows). LabJackPython loads the native library at import time, so the
modules are imported on first use rather than with this package.

The UD request queue is emulated per handle: add_request() queues, go_one()
executes each request through Feedback / getAIN calls, get_first_result()
returns the first result. Analog resolution, settling and per-channel range
are held here, driver-side, the way the UD driver holds them.
"""

from dataclasses import dataclass, field
from typing import Any, Dict, List, Optional, Tuple

from u6hal.core.config import AnalogRange, IOType, SettlingTime, SpecialChannel
from u6hal.core.exceptions import DriverError
from u6hal.drivers.base import DriverBinding, DriverResult
from u6hal.utils.logging import get_logger

# Range code -> U6 gain index (the U6 is bipolar only; 15 = autorange)
RANGE_TO_GAIN_INDEX = {
    AnalogRange.AUTO: 15,
    AnalogRange.BIP10V: 0,
    AnalogRange.BIP1V: 1,
    AnalogRange.BIPP1V: 2,
    AnalogRange.BIPP01V: 3,
}

# Settling code -> U6 settling factor (first factor not shorter than requested)
SETTLING_TO_FACTOR = {
    SettlingTime.US_5: 1,  # 20us
    SettlingTime.US_10: 1,  # 20us
    SettlingTime.US_100: 3,  # 100us
    SettlingTime.MS_1: 6,  # 1ms
    SettlingTime.MS_10: 9,  # 10ms
}

VERSION_ATTRIBUTES = {
    SpecialChannel.HARDWARE_VERSION: "hardwareVersion",
    SpecialChannel.FIRMWARE_VERSION: "firmwareVersion",
    SpecialChannel.BOOTLOADER_VERSION: "bootloaderVersion",
}

MAX_LOCAL_ID = 255


@dataclass
class _Session:
    """Driver-side state of one open U6."""

    device: Any
    queue: List[Tuple[int, int, float]] = field(default_factory=list)
    results: List[DriverResult] = field(default_factory=list)
    resolution_index: int = 0
    settling_factor: int = 0
    gain_indexes: Dict[int, int] = field(default_factory=dict)


class ExodriverBinding(DriverBinding):
    """
    DriverBinding backed by LabJackPython.

    Usage:
        controller = U6Controller(ExodriverBinding())
        controller.connect()

    Args:
        u6_module: Module providing U6 and the Feedback command classes
            (imported from LabJackPython's `u6` when omitted)
        ljp_module: Module providing LabJackException and getDriverVersion
            (imported from `LabJackPython` when omitted)
    """

    def __init__(self, u6_module: Any = None, ljp_module: Any = None):
        self._u6 = u6_module
        self._ljp = ljp_module
        self._sessions: Dict[int, _Session] = {}
        self._next_handle = 1
        self._logger = get_logger()

    # ------------------------------------------------------------------
    # DriverBinding
    # ------------------------------------------------------------------

    def open_usb(self, device_id: str = "0", first_found: bool = True) -> int:
        u6 = self._load()
        local_id, serial = self._parse_device_id(device_id)

        def _open() -> Any:
            device = u6.U6(autoOpen=False)
            device.open(localId=local_id, firstFound=first_found, serial=serial)
            try:
                device.configU6()
                device.getCalibrationData()
            except Exception:
                # Release the USB interface so a later open can claim it
                device.close()
                raise
            return device

        device = self._call(_open)
        handle = self._next_handle
        self._next_handle += 1
        self._sessions[handle] = _Session(device=device)
        self._logger.info(f"Opened U6 over USB (handle={handle}, device_id={device_id!r})")
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
        self._session(handle).queue.append((int(io_type), int(channel), float(value)))

    def go_one(self, handle: int) -> None:
        session = self._session(handle)
        pending = list(session.queue)
        session.queue.clear()
        session.results = []
        if not pending:
            raise DriverError("No requests to execute")
        session.results = [self._execute(session, *request) for request in pending]

    def get_first_result(self, handle: int) -> DriverResult:
        session = self._session(handle)
        if not session.results:
            raise DriverError("No results available")
        return session.results[0]

    def e_put(self, handle: int, io_type: int, channel: int, value: float, x1: int = 0) -> None:
        self._execute(self._session(handle), int(io_type), int(channel), float(value))

    def e_get(self, handle: int, io_type: int, channel: int, x1: int = 0) -> float:
        return self._execute(self._session(handle), int(io_type), int(channel), 0.0).value

    def get_driver_version(self) -> float:
        self._load()
        return float(self._call(self._ljp.getDriverVersion))

    # ------------------------------------------------------------------
    # Internals
    # ------------------------------------------------------------------

    def _load(self) -> Any:
        if self._u6 is not None and self._ljp is not None:
            return self._u6
        try:
            import LabJackPython as _ljp
            import u6 as _u6
        except ImportError as e:
            raise DriverError(f"LabJackPython is not installed: {e}") from e
        except Exception as e:
            # LabJackPython raises its own exception when the native driver is missing
            raise DriverError(f"Could not load the LabJack driver: {e}") from e
        if self._u6 is None:
            self._u6 = _u6
        if self._ljp is None:
            self._ljp = _ljp
        return self._u6

    @staticmethod
    def _parse_device_id(device_id: str) -> Tuple[Optional[int], Optional[int]]:
        """Return (local_id, serial) for a UD-style address string."""
        try:
            number = int(str(device_id).strip())
        except ValueError:
            raise DriverError(f"Invalid device id {device_id!r}") from None
        if number == 0:
            return None, None
        if number <= MAX_LOCAL_ID:
            return number, None
        return None, number

    def _session(self, handle: int) -> _Session:
        try:
            return self._sessions[handle]
        except KeyError:
            raise DriverError(f"Invalid handle {handle}") from None

    def _call(self, fn: Any, *args: Any, **kwargs: Any) -> Any:
        """Call into LabJackPython, translating LabJackException to DriverError."""
        self._load()
        try:
            return fn(*args, **kwargs)
        except self._ljp.LabJackException as e:
            raise DriverError(str(e), error_code=getattr(e, "errorCode", None)) from e

    def _execute(self, session: _Session, io_type: int, channel: int, value: float) -> DriverResult:
        u6 = self._u6
        device = session.device

        if io_type == IOType.GET_DIGITAL_BIT:
            # UD semantics: a digital read makes the line an input
            state = self._call(
                device.getFeedback,
                u6.BitDirWrite(channel, 0),
                u6.BitStateRead(channel),
            )[-1]
            return DriverResult(io_type, channel, float(state))

        if io_type == IOType.PUT_DIGITAL_BIT:
            # UD semantics: a digital write makes the line an output
            self._call(
                device.getFeedback,
                u6.BitDirWrite(channel, 1),
                u6.BitStateWrite(channel, 1 if value else 0),
            )
            return DriverResult(io_type, channel, value)

        if io_type == IOType.GET_AIN:
            volts = self._call(
                device.getAIN,
                channel,
                resolutionIndex=session.resolution_index,
                gainIndex=session.gain_indexes.get(channel, 0),
                settlingFactor=session.settling_factor,
            )
            return DriverResult(io_type, channel, float(volts))

        if io_type == IOType.PUT_DAC:
            if channel == 0:
                command = u6.DAC0_16
            elif channel == 1:
                command = u6.DAC1_16
            else:
                raise DriverError(f"Invalid DAC channel {channel}")
            bits = self._call(device.voltageToDACBits, value, dacNumber=channel, is16Bits=True)
            self._call(device.getFeedback, command(bits))
            return DriverResult(io_type, channel, value)

        if io_type == IOType.PUT_AIN_RANGE:
            try:
                session.gain_indexes[channel] = RANGE_TO_GAIN_INDEX[int(value)]
            except KeyError:
                raise DriverError(f"Analog range {int(value)} is not supported by the U6") from None
            return DriverResult(io_type, channel, value)

        if io_type == IOType.PUT_CONFIG:
            if channel == SpecialChannel.AIN_RESOLUTION:
                session.resolution_index = int(value)
            elif channel == SpecialChannel.AIN_SETTLING_TIME:
                try:
                    session.settling_factor = SETTLING_TO_FACTOR[int(value)]
                except KeyError:
                    raise DriverError(f"Invalid settling time {int(value)}") from None
            else:
                raise DriverError(f"Invalid config channel {channel}")
            return DriverResult(io_type, channel, value)

        if io_type == IOType.GET_CONFIG:
            attribute = VERSION_ATTRIBUTES.get(channel)
            if attribute is None:
                raise DriverError(f"Invalid config channel {channel}")
            return DriverResult(io_type, channel, float(getattr(device, attribute)))

        raise DriverError(f"Invalid IO type {io_type}")
