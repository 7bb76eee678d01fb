"""
Register Bus Transports
=======================

The display controller only needs two primitives from the bus:

- ``write_register(register, value)``: one byte to a register
- ``write_block(register, data)``: several bytes to a register in one
  bus transaction

plus ``close()`` to release the bus. Both writes are synchronous and
blocking. A failure surfaces as TransportError; no retry happens here.

Available Transports
--------------------
- **I2CTransport**: Linux ``/dev/i2c-N`` via smbus2. This is what a
  Raspberry Pi uses.
- **MemoryTransport**: records every write in memory. Used to render
  previews without hardware and as a test double.

Raspberry Pi Setup
------------------
I2C must be enabled (``raspi-config`` > Interface Options > I2C), which
loads the ``i2c_dev`` kernel module and creates ``/dev/i2c-1``. Refresh
rate improves noticeably with ``dtparam=i2c_arm_baudrate=1000000`` in
``/boot/config.txt``.
"""

import logging
from dataclasses import dataclass
from typing import Final, List, Optional, Protocol

from smbus2 import SMBus

from pi_oled.commands import COMMAND_REGISTER, DATA_REGISTER
from pi_oled.errors import ConfigurationError, TransportError

# Configure module logger
logger = logging.getLogger(__name__)


# =============================================================================
# Constants
# =============================================================================

# Bus number of the header I2C pins on every Raspberry Pi since rev 2
DEFAULT_I2C_BUS: Final[int] = 1

# Factory-default address of SSD1306/SH1106 modules (0x3D with SA0 high)
DEFAULT_DISPLAY_ADDRESS: Final[int] = 0x3C

# SMBus block writes carry at most 32 data bytes
MAX_BLOCK_SIZE: Final[int] = 32


# =============================================================================
# Transport Interface
# =============================================================================

class Transport(Protocol):
    """
    Protocol defining the register bus interface.

    The display controller talks to the panel only through this interface.
    """

    def write_register(self, register: int, value: int) -> None:
        """Write one byte to a register."""
        ...

    def write_block(self, register: int, data: bytes) -> None:
        """Write a block of bytes to a register."""
        ...

    def close(self) -> None:
        """Release the bus."""
        ...


# =============================================================================
# I2C Transport
# =============================================================================

class I2CTransport:
    """
    Transport over a Linux I2C adapter using smbus2.

    Example:
        >>> bus = I2CTransport(bus=1, address=0x3C)
        >>> bus.write_register(0x00, 0xAF)  # display on
        >>> bus.close()
    """

    def __init__(self, bus: int = DEFAULT_I2C_BUS, address: int = DEFAULT_DISPLAY_ADDRESS):
        """
        Open the I2C adapter.

        Args:
            bus: Adapter number (N in /dev/i2c-N)
            address: 7-bit device address

        Raises:
            ConfigurationError: If the address is not a valid 7-bit device
                                address or the adapter cannot be opened
        """
        if not 0x03 <= address <= 0x77:
            raise ConfigurationError(
                f"Invalid I2C address: 0x{address:02X} (valid: 0x03-0x77)"
            )

        self.bus_number = bus
        self.address = address

        logger.info("Opening i2c bus %d (device 0x%02X)", bus, address)

        try:
            self._bus: Optional[SMBus] = SMBus(bus)
        except FileNotFoundError:
            raise ConfigurationError(
                f"I2C bus not found: /dev/i2c-{bus}. "
                "Enable I2C with raspi-config and load the i2c_dev module."
            )
        except PermissionError:
            raise ConfigurationError(
                f"Permission denied accessing /dev/i2c-{bus}. "
                "You may need to add your user to the 'i2c' group: "
                "sudo usermod -a -G i2c $USER"
            )
        except OSError as e:
            raise ConfigurationError(f"Cannot open /dev/i2c-{bus}: {e}")

    @property
    def is_open(self) -> bool:
        """True until close() has been called."""
        return self._bus is not None

    def _require_bus(self, register: int) -> SMBus:
        if self._bus is None:
            raise TransportError(register, "i2c bus is closed")
        return self._bus

    def write_register(self, register: int, value: int) -> None:
        """
        Write one byte to a register (SMBus "write byte data").

        Raises:
            TransportError: If the bus reports an error
        """
        bus = self._require_bus(register)
        try:
            bus.write_byte_data(self.address, register, value & 0xFF)
        except OSError as e:
            raise TransportError(register, cause=e) from e

    def write_block(self, register: int, data: bytes) -> None:
        """
        Write up to 32 bytes to a register in one transaction.

        Raises:
            TransportError: If the bus reports an error
            ValueError: If data is longer than MAX_BLOCK_SIZE
        """
        if len(data) > MAX_BLOCK_SIZE:
            raise ValueError(
                f"Block of {len(data)} bytes exceeds SMBus limit of {MAX_BLOCK_SIZE}"
            )

        bus = self._require_bus(register)
        try:
            bus.write_i2c_block_data(self.address, register, list(data))
        except OSError as e:
            raise TransportError(register, cause=e) from e

    def close(self) -> None:
        """Close the adapter. Safe to call more than once."""
        if self._bus is None:
            return

        bus, self._bus = self._bus, None
        try:
            bus.close()
            logger.info("Closed i2c bus %d", self.bus_number)
        except OSError as e:
            logger.warning("Error closing i2c bus %d: %s", self.bus_number, e)


# =============================================================================
# In-Memory Transport
# =============================================================================

@dataclass(frozen=True)
class BusWrite:
    """
    One recorded write.

    Attributes:
        register: Target register
        data: Bytes written (one byte for write_register)
        block: True if issued through write_block
    """

    register: int
    data: bytes
    block: bool = False


class MemoryTransport:
    """
    Transport that records writes instead of touching hardware.

    Example:
        >>> bus = MemoryTransport()
        >>> bus.write_register(0x00, 0xAE)
        >>> bus.writes
        [BusWrite(register=0, data=b'\\xae', block=False)]
    """

    def __init__(self) -> None:
        self.writes: List[BusWrite] = []
        self.closed = False

    def write_register(self, register: int, value: int) -> None:
        self.writes.append(BusWrite(register, bytes([value & 0xFF])))

    def write_block(self, register: int, data: bytes) -> None:
        self.writes.append(BusWrite(register, bytes(data), block=True))

    def close(self) -> None:
        self.closed = True

    def commands(self) -> List[int]:
        """All bytes written to the command register, in order."""
        return [w.data[0] for w in self.writes if w.register == COMMAND_REGISTER]

    def data_bytes(self) -> bytes:
        """Concatenation of everything written to the data register."""
        return b"".join(w.data for w in self.writes if w.register == DATA_REGISTER)

    def reset(self) -> None:
        """Forget recorded writes."""
        self.writes.clear()
