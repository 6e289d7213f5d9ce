"""U6 driver configuration and LabJack UD code tables."""

from dataclasses import dataclass
from enum import IntEnum

from u6hal.core.exceptions import ConfigurationError


class IOType(IntEnum):
    """LabJack UD IO request kinds used by the controller."""

    GET_AIN = 10
    PUT_DAC = 20
    GET_DIGITAL_BIT = 30
    PUT_DIGITAL_BIT = 40
    PUT_CONFIG = 1000
    GET_CONFIG = 1001
    PUT_AIN_RANGE = 2000


class SpecialChannel(IntEnum):
    """Pseudo-channels addressed by PUT_CONFIG / GET_CONFIG."""

    HARDWARE_VERSION = 10
    FIRMWARE_VERSION = 11
    BOOTLOADER_VERSION = 15
    AIN_RESOLUTION = 3000
    AIN_SETTLING_TIME = 3001


class AnalogRange(IntEnum):
    """Analog input range codes (literal UD values, not a dense sequence)."""

    AUTO = 0
    BIP20V = 1  # +/- 20V
    BIP10V = 2  # +/- 10V
    BIP5V = 3  # +/- 5V
    BIP4V = 4  # +/- 4V
    BIP2P5V = 5  # +/- 2.5V
    BIP2V = 6  # +/- 2V
    BIP1P25V = 7  # +/- 1.25V
    BIP1V = 8  # +/- 1V
    BIPP625V = 9  # +/- 0.625V
    BIPP1V = 10  # +/- 0.1V
    BIPP01V = 11  # +/- 0.01V
    UNI20V = 101  # 0 to 20V
    UNI10V = 102
    UNI5V = 103
    UNI4V = 104
    UNI2P5V = 105
    UNI2V = 106
    UNI1P25V = 107
    UNI1V = 108
    UNIP625V = 109
    UNIP5V = 110
    UNIP3125V = 111
    UNIP25V = 112
    UNIP025V = 113
    UNIP0025V = 114


class SettlingTime(IntEnum):
    """Analog input settling time codes."""

    US_5 = 0
    US_10 = 1
    US_100 = 2
    MS_1 = 3
    MS_10 = 4


class ResolutionIndex(IntEnum):
    """Analog input resolution index (0 = device default, 9-12 are U6-Pro only)."""

    DEFAULT = 0
    INDEX_1 = 1
    INDEX_2 = 2
    INDEX_3 = 3
    INDEX_4 = 4
    INDEX_5 = 5
    INDEX_6 = 6
    INDEX_7 = 7
    INDEX_8 = 8
    INDEX_9 = 9
    INDEX_10 = 10
    INDEX_11 = 11
    INDEX_12 = 12


SUPPORTED_DRIVERS = ("simulated", "exodriver")
LOG_LEVELS = ("DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL")


@dataclass
class U6Config:
    """Configuration for a U6 controller."""

    # Device selection
    device_id: str = "0"  # UD address; "0" with first_found picks any U6
    first_found: bool = True

    # Driver binding name (see u6hal.drivers.create_driver)
    driver: str = "simulated"

    # Version strings
    version_decimals: int = 3

    # Logging
    log_level: str = "INFO"
    log_requests: bool = False

    def validate(self) -> None:
        """Validate and normalize configuration values.

        Raises:
            ConfigurationError: If any value is out of range or invalid.
        """
        if self.device_id is None:
            raise ConfigurationError("device_id must be a string, got NoneType")
        self.device_id = str(self.device_id).strip()
        if not self.device_id:
            raise ConfigurationError("device_id must be a non-empty string")

        self.first_found = bool(self.first_found)
        self.log_requests = bool(self.log_requests)

        if not isinstance(self.driver, str):
            raise ConfigurationError(
                f"driver must be a string, got {type(self.driver).__name__}"
            )
        driver = self.driver.strip().lower()
        if driver not in SUPPORTED_DRIVERS:
            raise ConfigurationError(
                f"driver must be one of {', '.join(SUPPORTED_DRIVERS)}, got {self.driver!r}"
            )
        self.driver = driver

        try:
            decimals = int(self.version_decimals)
        except (TypeError, ValueError) as e:
            raise ConfigurationError(
                f"version_decimals must be an integer, got {self.version_decimals!r}"
            ) from e
        if not 0 <= decimals <= 6:
            raise ConfigurationError(f"version_decimals must be 0-6, got {decimals}")
        self.version_decimals = decimals

        if not isinstance(self.log_level, str):
            raise ConfigurationError(
                f"log_level must be a string, got {type(self.log_level).__name__}"
            )
        normalized = self.log_level.strip().upper()
        if normalized not in LOG_LEVELS:
            raise ConfigurationError(
                f"log_level must be one of {', '.join(LOG_LEVELS)}, got {self.log_level!r}"
            )
        self.log_level = normalized
