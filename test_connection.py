#!/usr/bin/env python3
"""Quick check of a U6 attached over USB."""

from u6hal import U6Config, U6Controller
from u6hal.utils.logging import setup_logging

def main():
    setup_logging(level="DEBUG")

    controller = U6Controller.from_config(
        U6Config(driver="exodriver", log_requests=True)
    )

    print(f"Driver version: {controller.get_driver_version()}")
    print("Connecting to first U6 found on USB...")
    if not controller.connect():
        print(f"Error: {controller.last_error}")
        return

    print(f"Hardware: {controller.get_hardware_version()}")
    print(f"Firmware: {controller.get_firmware_version()}")
    print(f"Bootloader: {controller.get_bootloader_version()}")

    for channel in range(4):
        result = controller.read_analog(channel)
        if result.ok:
            print(f"  AIN{channel}: {result.value:.4f} V")
        else:
            print(f"  AIN{channel}: {result.error}")

if __name__ == "__main__":
    main()
