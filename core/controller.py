"""
U6 device controller.

The controller owns the single device handle, tracks connection state and
turns every driver exchange into a typed result. No exception leaves a
controller operation: driver failures are captured into `last_error` and
reported as a failed IOResult (or a sentinel value in the legacy API).
"""

from typing import Optional, Tuple

from u6hal.core.config import (
    AnalogRange,
    IOType,
    ResolutionIndex,
    SettlingTime,
    SpecialChannel,
    U6Config,
)
from u6hal.core.exceptions import DriverError
from u6hal.core.results import AnalogInputConfig, ErrorKind, IOResult
from u6hal.drivers import create_driver
from u6hal.drivers.base import DriverBinding
from u6hal.utils.formatting import format_version
from u6hal.utils.logging import get_logger, log_request

# Failure values of the sentinel API
DIGITAL_SENTINEL = -99
ANALOG_SENTINEL = -99.0
VERSION_SENTINEL = ""

NOT_CONNECTED = "U6 not connected"
ALREADY_CONNECTED = "U6 already connected"
UNEXPECTED_RESULT = "IO read returned unexpected value"


class U6Controller:
    """
    Controller for a single USB-connected LabJack U6.

    Each operation comes in two forms sharing one code path: a result form
    returning IOResult (read_digital, write_dac, ...) and a sentinel form
    returning plain values (get_digital_input -> -99 on failure, ...).

    The controller does no locking; calls must be serialized by the caller.

    Usage:
        controller = U6Controller(create_driver("exodriver"))
        if controller.connect():
            controller.set_digital_output(0, True)
            volts = controller.read_analog(0)
            if not volts.ok:
                print(volts.error)
    """

    def __init__(self, driver: DriverBinding, config: Optional[U6Config] = None):
        """
        Initialize the controller.

        Args:
            driver: Driver binding used for every device exchange
            config: Configuration settings (uses defaults if not provided)
        """
        self.config = config or U6Config()
        self.config.validate()

        self._driver = driver
        self._handle: Optional[int] = None
        self._connected = False
        self._last_error = ""
        self._logger = get_logger()

    @classmethod
    def from_config(cls, config: Optional[U6Config] = None) -> "U6Controller":
        """
        Build a controller with the driver named by config.driver.

        The package logger is set to config.log_level.
        """
        config = config or U6Config()
        config.validate()
        get_logger().setLevel(config.log_level)
        return cls(create_driver(config.driver), config)

    @property
    def connected(self) -> bool:
        """True once connect() has succeeded."""
        return self._connected

    @property
    def handle(self) -> Optional[int]:
        return self._handle

    @property
    def last_error(self) -> str:
        """Description of the most recent failure ("" if nothing failed yet)."""
        return self._last_error

    def get_last_error(self) -> str:
        return self._last_error

    # =========================================================================
    # Connection
    # =========================================================================

    def connect(self) -> bool:
        """
        Open a USB session with the U6.

        Fails without touching the driver if a session already exists.

        Returns:
            True if the session was opened
        """
        if self._handle is not None or self._connected:
            self._set_error(ALREADY_CONNECTED)
            return False

        try:
            handle = self._driver.open_usb(self.config.device_id, self.config.first_found)
        except DriverError as e:
            self._set_error(f"Error connecting with '{e}'")
            return False

        self._handle = handle
        self._connected = True
        self._logger.info(f"Connected to U6 (handle={handle})")
        return True

    # =========================================================================
    # Digital I/O
    # =========================================================================

    def read_digital(self, channel: int) -> IOResult[int]:
        """
        Read one digital line.

        Args:
            channel: Digital line number

        Returns:
            IOResult holding 0 or 1
        """
        failure = self._require_connected()
        if failure is not None:
            return failure

        try:
            result = self._request(IOType.GET_DIGITAL_BIT, channel, 0)
        except DriverError as e:
            return self._driver_failure("getting digital input", e)

        if result is None:
            return self._fail(ErrorKind.RESULT_MISMATCH, UNEXPECTED_RESULT)
        return IOResult.success(int(result))

    def write_digital(self, channel: int, level: bool) -> IOResult[bool]:
        """
        Drive one digital line high or low.

        Args:
            channel: Digital line number
            level: True = high, False = low
        """
        failure = self._require_connected()
        if failure is not None:
            return failure

        try:
            self._submit(IOType.PUT_DIGITAL_BIT, channel, 1 if level else 0)
        except DriverError as e:
            return self._driver_failure("setting digital output", e)
        return IOResult.success(True)

    # =========================================================================
    # Analog input
    # =========================================================================

    def configure_analog(
        self,
        channel: int,
        range_code: int,
        resolution: int,
        settling_time: int,
    ) -> IOResult[AnalogInputConfig]:
        """
        Push resolution, settling time and range for an analog input.

        The three driver calls are issued in that order and are not atomic:
        a failure leaves the earlier steps applied. The failed result lists
        them in `applied`.

        Args:
            channel: Analog input channel
            range_code: AnalogRange code (0-11, 101-114)
            resolution: ResolutionIndex (0-12)
            settling_time: SettlingTime code (0=5us ... 4=10ms)
        """
        failure = self._require_connected()
        if failure is not None:
            return failure

        invalid = self._check_codes(range_code, resolution, settling_time)
        if invalid is not None:
            return self._fail(ErrorKind.PRECONDITION, invalid)

        applied: Tuple[str, ...] = ()
        try:
            self._put_config(SpecialChannel.AIN_RESOLUTION, resolution)
            applied += ("resolution",)
            self._put_config(SpecialChannel.AIN_SETTLING_TIME, settling_time)
            applied += ("settling_time",)
            self._submit(IOType.PUT_AIN_RANGE, channel, float(range_code))
        except DriverError as e:
            return self._driver_failure("configuring analog input", e, applied)

        return IOResult.success(
            AnalogInputConfig(
                channel=channel,
                range_code=int(range_code),
                resolution=int(resolution),
                settling_time=int(settling_time),
            )
        )

    def read_analog(self, channel: int) -> IOResult[float]:
        """
        Read one analog input in volts, using the last pushed configuration.

        Args:
            channel: Analog input channel
        """
        failure = self._require_connected()
        if failure is not None:
            return failure

        try:
            result = self._request(IOType.GET_AIN, channel, 0)
        except DriverError as e:
            return self._driver_failure("reading analog value", e)

        if result is None:
            return self._fail(ErrorKind.RESULT_MISMATCH, UNEXPECTED_RESULT)
        return IOResult.success(float(result))

    # =========================================================================
    # Analog output
    # =========================================================================

    def write_dac(self, channel: int, voltage: float) -> IOResult[bool]:
        """
        Set a DAC output.

        Args:
            channel: DAC channel
            voltage: Output voltage
        """
        failure = self._require_connected()
        if failure is not None:
            return failure

        try:
            self._submit(IOType.PUT_DAC, channel, float(voltage))
        except DriverError as e:
            return self._driver_failure("setting DAC", e)
        return IOResult.success(True)

    # =========================================================================
    # Versions
    # =========================================================================

    def driver_version(self) -> IOResult[str]:
        """Version of the installed driver. Works without a connection."""
        try:
            version = self._driver.get_driver_version()
        except DriverError as e:
            return self._driver_failure("reading driver version", e)
        return IOResult.success(format_version(version, self.config.version_decimals))

    def bootloader_version(self) -> IOResult[str]:
        return self._device_version(SpecialChannel.BOOTLOADER_VERSION, "bootloader")

    def hardware_version(self) -> IOResult[str]:
        return self._device_version(SpecialChannel.HARDWARE_VERSION, "hardware")

    def firmware_version(self) -> IOResult[str]:
        return self._device_version(SpecialChannel.FIRMWARE_VERSION, "firmware")

    # =========================================================================
    # Sentinel API
    # =========================================================================

    def get_digital_input(self, channel: int) -> int:
        """Digital line value, or -99 on failure."""
        return self.read_digital(channel).value_or(DIGITAL_SENTINEL)

    def set_digital_output(self, channel: int, level: bool) -> bool:
        return self.write_digital(channel, level).ok

    def configure_analog_input(
        self,
        channel: int,
        range_code: int,
        resolution: int,
        settling_time: int,
    ) -> bool:
        return self.configure_analog(channel, range_code, resolution, settling_time).ok

    def get_analog_input(self, channel: int) -> float:
        """Analog input in volts, or -99.0 on failure."""
        return self.read_analog(channel).value_or(ANALOG_SENTINEL)

    def set_dac(self, channel: int, voltage: float) -> bool:
        return self.write_dac(channel, voltage).ok

    def get_driver_version(self) -> str:
        return self.driver_version().value_or(VERSION_SENTINEL)

    def get_bootloader_version(self) -> str:
        return self.bootloader_version().value_or(VERSION_SENTINEL)

    def get_hardware_version(self) -> str:
        return self.hardware_version().value_or(VERSION_SENTINEL)

    def get_firmware_version(self) -> str:
        return self.firmware_version().value_or(VERSION_SENTINEL)

    # =========================================================================
    # Internal helpers
    # =========================================================================

    def _set_error(self, message: str) -> None:
        self._last_error = message
        self._logger.warning(message)

    def _fail(self, kind: ErrorKind, message: str, applied: Tuple[str, ...] = ()) -> IOResult:
        self._set_error(message)
        return IOResult.failure(kind, message, applied)

    def _driver_failure(
        self,
        action: str,
        error: DriverError,
        applied: Tuple[str, ...] = (),
    ) -> IOResult:
        return self._fail(ErrorKind.DRIVER, f"Error {action} with '{error}'", applied)

    def _require_connected(self) -> Optional[IOResult]:
        """Failed result if not connected, None otherwise."""
        if self._connected and self._handle is not None:
            return None
        return self._fail(ErrorKind.PRECONDITION, NOT_CONNECTED)

    def _submit(self, io_type: IOType, channel: int, value: float) -> None:
        """Queue one request and execute it."""
        if self.config.log_requests:
            log_request(io_type, channel, value, "TX", self._logger)
        self._driver.add_request(self._handle, io_type, channel, value, 0, 0)
        self._driver.go_one(self._handle)

    def _request(self, io_type: IOType, channel: int, value: float) -> Optional[float]:
        """
        Submit a get request and fetch its first result.

        Returns:
            The result value, or None if the driver answered with another IO kind
        """
        self._submit(io_type, channel, value)
        result = self._driver.get_first_result(self._handle)
        if self.config.log_requests:
            log_request(result.io_type, result.channel, result.value, "RX", self._logger)
        if result.io_type != io_type:
            return None
        return result.value

    def _put_config(self, channel: SpecialChannel, value: int) -> None:
        if self.config.log_requests:
            log_request(IOType.PUT_CONFIG, channel, value, "TX", self._logger)
        self._driver.e_put(self._handle, IOType.PUT_CONFIG, channel, value, 0)

    def _device_version(self, channel: SpecialChannel, name: str) -> IOResult[str]:
        failure = self._require_connected()
        if failure is not None:
            return failure

        try:
            version = self._driver.e_get(self._handle, IOType.GET_CONFIG, channel, 0)
        except DriverError as e:
            return self._driver_failure(f"reading {name} version", e)
        return IOResult.success(format_version(version, self.config.version_decimals))

    @staticmethod
    def _check_codes(range_code: int, resolution: int, settling_time: int) -> Optional[str]:
        """Error message for the first unknown configuration code, if any."""
        for enum, code, label in (
            (AnalogRange, range_code, "analog range"),
            (ResolutionIndex, resolution, "resolution index"),
            (SettlingTime, settling_time, "settling time"),
        ):
            try:
                enum(code)
            except ValueError:
                return f"Invalid {label} code {code!r}"
        return None
