#!/usr/bin/env python3
"""
Basic U6 controller usage.

Runs against the simulated driver by default; pass --hardware to talk to a
real U6 through LabJackPython.
"""

import sys

from u6hal import AnalogRange, ResolutionIndex, SettlingTime, U6Config, U6Controller
from u6hal.utils.logging import setup_logging


def main(use_hardware: bool = False) -> int:
    setup_logging(level="INFO")

    config = U6Config(driver="exodriver" if use_hardware else "simulated")
    controller = U6Controller.from_config(config)

    print(f"Driver version: {controller.get_driver_version() or controller.last_error}")

    if not controller.connect():
        print(f"Connect failed: {controller.last_error}")
        return 1

    print(f"Hardware version:   {controller.get_hardware_version()}")
    print(f"Firmware version:   {controller.get_firmware_version()}")
    print(f"Bootloader version: {controller.get_bootloader_version()}")

    # Digital I/O
    controller.set_digital_output(0, True)
    print(f"FIO0 = {controller.get_digital_input(0)}")

    # Analog input
    configured = controller.configure_analog(
        0, AnalogRange.BIP10V, ResolutionIndex.INDEX_8, SettlingTime.MS_1
    )
    if not configured.ok:
        print(f"Configure failed: {configured.error} (applied: {configured.applied})")
    reading = controller.read_analog(0)
    print(f"AIN0 = {reading.value:.4f} V" if reading.ok else f"AIN0 failed: {reading.error}")

    # Analog output
    if not controller.set_dac(0, 2.5):
        print(f"DAC0 failed: {controller.last_error}")

    return 0


if __name__ == "__main__":
    sys.exit(main("--hardware" in sys.argv[1:]))
