"""
Display Configuration
=====================

Construction parameters for OLEDDisplay. Configuration can come from:
- Default values (defined here)
- Environment variables
- Command-line options (oledctl)

All values are fixed once a display has been created.
"""

import os
from dataclasses import dataclass

from pi_oled.commands import AddressingMode
from pi_oled.rotation import Rotation
from pi_oled.transport import DEFAULT_DISPLAY_ADDRESS, DEFAULT_I2C_BUS


def parse_int(text: str) -> int:
    """Parse a decimal or 0x-prefixed hexadecimal integer."""
    text = text.strip()
    if text.lower().startswith("0x"):
        return int(text, 16)
    return int(text)


@dataclass
class DisplayConfig:
    """
    Configuration for an OLED display.

    Attributes:
        bus: I2C adapter number (default: 1, the Raspberry Pi header bus)
        address: I2C device address (default: 0x3C)
        rotation: Clockwise mounting angle (default: 0°)
        addressing_mode: HORIZONTAL for SSD1306, PAGE for SH1106 clones
        column_offset: First RAM column in page mode (default: 0)
        register_exit_hook: Clear the panel when the interpreter exits
    """

    bus: int = DEFAULT_I2C_BUS
    address: int = DEFAULT_DISPLAY_ADDRESS
    rotation: Rotation = Rotation.DEG_0
    addressing_mode: AddressingMode = AddressingMode.HORIZONTAL
    column_offset: int = 0
    register_exit_hook: bool = True

    @classmethod
    def from_env(cls) -> "DisplayConfig":
        """
        Create DisplayConfig from environment variables.

        Environment variables (all optional):
            PI_OLED_BUS: I2C adapter number
            PI_OLED_ADDRESS: Device address (decimal or 0x hex)
            PI_OLED_ROTATION: 0, 90, 180 or 270
            PI_OLED_ADDRESSING: "horizontal" or "page"
            PI_OLED_COLUMN_OFFSET: Page mode column offset

        Invalid values are ignored and the default is kept.

        Returns:
            DisplayConfig with values from environment variables
        """
        config = cls()

        if bus := os.environ.get("PI_OLED_BUS"):
            try:
                config.bus = parse_int(bus)
            except ValueError:
                pass  # Ignore invalid values

        if address := os.environ.get("PI_OLED_ADDRESS"):
            try:
                config.address = parse_int(address)
            except ValueError:
                pass

        if rotation := os.environ.get("PI_OLED_ROTATION"):
            try:
                config.rotation = Rotation.from_degrees(parse_int(rotation))
            except ValueError:
                pass

        if addressing := os.environ.get("PI_OLED_ADDRESSING"):
            try:
                config.addressing_mode = AddressingMode.from_name(addressing)
            except ValueError:
                pass

        if offset := os.environ.get("PI_OLED_COLUMN_OFFSET"):
            try:
                config.column_offset = parse_int(offset)
            except ValueError:
                pass

        return config
