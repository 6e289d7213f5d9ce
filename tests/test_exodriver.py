"""Tests for the LabJackPython-backed driver binding (no hardware needed)."""

from types import SimpleNamespace

import pytest
from u6hal.core.config import AnalogRange, IOType, SettlingTime, SpecialChannel
from u6hal.core.controller import U6Controller
from u6hal.core.exceptions import DriverError
from u6hal.drivers.base import DriverResult
from u6hal.drivers.exodriver import ExodriverBinding


class FakeLabJackException(Exception):
    """Stand-in for LabJackPython.LabJackException."""

    def __init__(self, ec=0, errorString=""):
        super().__init__(errorString)
        self.errorCode = ec


class FeedbackCommand:
    def __init__(self, name, *args):
        self.name = name
        self.args = args

    def __eq__(self, other):
        return (self.name, self.args) == (other.name, other.args)

    def __repr__(self):
        return f"{self.name}{self.args}"


class FakeU6:
    """Records what the binding asks of a U6.

    Lines power up as inputs; BitStateWrite only drives a line whose
    direction was set to output.
    """

    instances = []
    open_error = None
    config_error = None

    def __init__(self, autoOpen=True):
        self.autoOpen = autoOpen
        self.open_args = None
        self.closed = False
        self.configured = False
        self.calibrated = False
        self.directions = {}
        self.lines = {}
        self.feedback = []
        self.ain_calls = []
        self.ain_error = None
        self.hardwareVersion = "2.00"
        self.firmwareVersion = "1.43"
        self.bootloaderVersion = "0.27"
        FakeU6.instances.append(self)

    def open(self, localId=None, firstFound=True, serial=None):
        self.open_args = (localId, firstFound, serial)
        if FakeU6.open_error is not None:
            raise FakeLabJackException(1015, FakeU6.open_error)

    def close(self):
        self.closed = True

    def configU6(self):
        if FakeU6.config_error is not None:
            raise FakeLabJackException(1, FakeU6.config_error)
        self.configured = True

    def getCalibrationData(self):
        self.calibrated = True

    def getFeedback(self, *commands):
        self.feedback.append(commands)
        results = []
        for command in commands:
            if command.name == "BitDirWrite":
                self.directions[command.args[0]] = command.args[1]
                results.append(None)
            elif command.name == "BitStateWrite":
                if self.directions.get(command.args[0]) == 1:
                    self.lines[command.args[0]] = command.args[1]
                results.append(None)
            elif command.name == "BitStateRead":
                results.append(self.lines.get(command.args[0], 0))
            else:
                results.append(None)
        return results

    def getAIN(self, positiveChannel, resolutionIndex=0, gainIndex=0, settlingFactor=0):
        self.ain_calls.append((positiveChannel, resolutionIndex, gainIndex, settlingFactor))
        if self.ain_error is not None:
            raise FakeLabJackException(2, self.ain_error)
        return 1.25

    def voltageToDACBits(self, volts, dacNumber=0, is16Bits=False):
        return int(volts * 1000)


def _command(name):
    return lambda *args: FeedbackCommand(name, *args)


@pytest.fixture
def modules():
    FakeU6.instances = []
    FakeU6.open_error = None
    FakeU6.config_error = None
    u6 = SimpleNamespace(
        U6=FakeU6,
        BitDirWrite=_command("BitDirWrite"),
        BitStateRead=_command("BitStateRead"),
        BitStateWrite=_command("BitStateWrite"),
        DAC0_16=_command("DAC0_16"),
        DAC1_16=_command("DAC1_16"),
    )
    ljp = SimpleNamespace(
        LabJackException=FakeLabJackException,
        getDriverVersion=lambda: 2.0599,
    )
    return u6, ljp


@pytest.fixture
def binding(modules):
    u6, ljp = modules
    return ExodriverBinding(u6_module=u6, ljp_module=ljp)


@pytest.fixture
def handle(binding):
    return binding.open_usb()


class TestOpen:
    """Tests for opening a U6."""

    def test_open_first_found(self, binding):
        """Test device id "0" opens the first U6 found and loads calibration."""
        handle = binding.open_usb("0", True)
        device = FakeU6.instances[-1]
        assert handle == 1
        assert device.autoOpen is False
        assert device.open_args == (None, True, None)
        assert device.configured and device.calibrated

    def test_open_by_local_id(self, binding):
        """Test small ids are local ids."""
        binding.open_usb("3", False)
        assert FakeU6.instances[-1].open_args == (3, False, None)

    def test_open_by_serial(self, binding):
        """Test large ids are serial numbers."""
        binding.open_usb("360012345", False)
        assert FakeU6.instances[-1].open_args == (None, False, 360012345)

    def test_open_invalid_id(self, binding):
        """Test non-numeric device ids are rejected."""
        with pytest.raises(DriverError, match="Invalid device id"):
            binding.open_usb("abc")

    def test_open_failure_translated(self, binding):
        """Test LabJackException becomes DriverError with its code."""
        FakeU6.open_error = "device busy"
        with pytest.raises(DriverError, match="device busy") as exc_info:
            binding.open_usb()
        assert exc_info.value.error_code == 1015

    def test_open_closes_device_when_setup_fails(self, binding):
        """Test a device that opens but fails configU6 is closed before the error propagates."""
        FakeU6.config_error = "Comm failure"
        with pytest.raises(DriverError, match="Comm failure"):
            binding.open_usb()
        device = FakeU6.instances[-1]
        assert device.open_args == (None, True, None)
        assert device.closed is True

    def test_open_retry_after_setup_failure(self, binding):
        """Test a second open succeeds after a setup failure released the device."""
        FakeU6.config_error = "Comm failure"
        with pytest.raises(DriverError):
            binding.open_usb()
        FakeU6.config_error = None
        assert binding.open_usb() == 1
        assert FakeU6.instances[-1].closed is False

    def test_driver_version(self, binding):
        """Test the driver version comes from LabJackPython."""
        assert binding.get_driver_version() == pytest.approx(2.0599)

class TestRequests:
    """Tests for the emulated request queue."""

    def test_digital_read(self, binding, handle):
        """Test a digital read sets the line to input and reads it."""
        device = FakeU6.instances[-1]
        device.lines[4] = 1
        binding.add_request(handle, IOType.GET_DIGITAL_BIT, 4, 0)
        binding.go_one(handle)

        assert device.feedback[-1] == (
            FeedbackCommand("BitDirWrite", 4, 0),
            FeedbackCommand("BitStateRead", 4),
        )
        assert binding.get_first_result(handle) == DriverResult(IOType.GET_DIGITAL_BIT, 4, 1.0)

    def test_digital_write(self, binding, handle):
        """Test a digital write sets the line to output and drives it in one Feedback call."""
        binding.add_request(handle, IOType.PUT_DIGITAL_BIT, 2, 1)
        binding.go_one(handle)
        device = FakeU6.instances[-1]
        assert device.feedback[-1] == (
            FeedbackCommand("BitDirWrite", 2, 1),
            FeedbackCommand("BitStateWrite", 2, 1),
        )
        assert device.directions[2] == 1
        assert device.lines[2] == 1

    def test_digital_write_after_read(self, binding, handle):
        """Test a write after a read turns the line back into a driven output."""
        device = FakeU6.instances[-1]
        binding.add_request(handle, IOType.GET_DIGITAL_BIT, 3, 0)
        binding.go_one(handle)
        assert device.directions[3] == 0

        binding.add_request(handle, IOType.PUT_DIGITAL_BIT, 3, 1)
        binding.go_one(handle)
        assert device.directions[3] == 1
        assert device.lines[3] == 1

    def test_analog_read_uses_stored_config(self, binding, handle):
        """Test resolution, settling and range are applied to getAIN."""
        binding.e_put(handle, IOType.PUT_CONFIG, SpecialChannel.AIN_RESOLUTION, 8)
        binding.e_put(handle, IOType.PUT_CONFIG, SpecialChannel.AIN_SETTLING_TIME, SettlingTime.MS_1)
        binding.add_request(handle, IOType.PUT_AIN_RANGE, 3, float(AnalogRange.BIPP1V))
        binding.go_one(handle)

        binding.add_request(handle, IOType.GET_AIN, 3, 0)
        binding.go_one(handle)

        assert FakeU6.instances[-1].ain_calls[-1] == (3, 8, 2, 6)
        assert binding.get_first_result(handle).value == 1.25

    def test_analog_read_defaults(self, binding, handle):
        """Test an unconfigured channel reads at gain index 0."""
        binding.add_request(handle, IOType.GET_AIN, 0, 0)
        binding.go_one(handle)
        assert FakeU6.instances[-1].ain_calls[-1] == (0, 0, 0, 0)

    def test_unsupported_range(self, binding, handle):
        """Test unipolar ranges are rejected for the U6."""
        binding.add_request(handle, IOType.PUT_AIN_RANGE, 0, float(AnalogRange.UNI10V))
        with pytest.raises(DriverError, match="not supported"):
            binding.go_one(handle)

    def test_dac_write(self, binding, handle):
        """Test DAC writes are converted to 16-bit DAC commands."""
        binding.add_request(handle, IOType.PUT_DAC, 1, 2.5)
        binding.go_one(handle)
        assert FakeU6.instances[-1].feedback[-1] == (FeedbackCommand("DAC1_16", 2500),)

    def test_dac_invalid_channel(self, binding, handle):
        """Test only DAC0 and DAC1 exist."""
        binding.add_request(handle, IOType.PUT_DAC, 2, 1.0)
        with pytest.raises(DriverError, match="Invalid DAC channel"):
            binding.go_one(handle)

    def test_versions(self, binding, handle):
        """Test versions are read from the configU6 attributes."""
        assert binding.e_get(handle, IOType.GET_CONFIG, SpecialChannel.HARDWARE_VERSION) == 2.0
        assert binding.e_get(handle, IOType.GET_CONFIG, SpecialChannel.FIRMWARE_VERSION) == 1.43
        assert binding.e_get(handle, IOType.GET_CONFIG, SpecialChannel.BOOTLOADER_VERSION) == 0.27

    def test_go_one_without_requests(self, binding, handle):
        """Test executing an empty queue fails."""
        with pytest.raises(DriverError, match="No requests"):
            binding.go_one(handle)

    def test_invalid_handle(self, binding):
        """Test unknown handles are rejected."""
        with pytest.raises(DriverError, match="Invalid handle"):
            binding.go_one(42)

    def test_labjack_exception_during_read(self, binding, handle):
        """Test device errors during execution are translated."""
        FakeU6.instances[-1].ain_error = "Stream overflow"
        binding.add_request(handle, IOType.GET_AIN, 0, 0)
        with pytest.raises(DriverError, match="Stream overflow") as exc_info:
            binding.go_one(handle)
        assert exc_info.value.error_code == 2

class TestWithController:
    """Tests for the controller driving the LabJackPython binding."""

    def test_full_session(self, binding):
        """Test a typical connect/configure/read/write sequence."""
        controller = U6Controller(binding)
        assert controller.get_driver_version() == "2.060"
        assert controller.connect() is True
        assert controller.get_firmware_version() == "1.430"
        assert controller.configure_analog_input(0, AnalogRange.BIP10V, 0, SettlingTime.US_100)
        assert controller.get_analog_input(0) == 1.25
        assert controller.set_digital_output(1, True)
        assert controller.get_digital_input(1) == 1
        assert controller.set_dac(0, 1.0)

    def test_unsupported_range_reported(self, binding):
        """Test a range the U6 lacks fails with partial configuration applied."""
        controller = U6Controller(binding)
        controller.connect()
        result = controller.configure_analog(0, AnalogRange.UNI5V, 1, 0)
        assert result.applied == ("resolution", "settling_time")
        assert controller.last_error == (
            "Error configuring analog input with 'Analog range 103 is not supported by the U6'"
        )

    def test_digital_output_driven(self, binding):
        """Test set_digital_output drives a line that powered up as input."""
        controller = U6Controller(binding)
        controller.connect()
        assert controller.set_digital_output(3, True) is True
        device = FakeU6.instances[-1]
        assert device.directions.get(3) == 1
        assert device.lines.get(3) == 1
