"""
OLED Display Controller
=======================

Driver for 128x64 monochrome OLED panels built on the SSD1306 controller
or its SH1106 clone, attached to a register bus (normally I2C).

The driver keeps a host-side framebuffer. Drawing calls only touch that
buffer; nothing reaches the panel until update() is called, which sends
the whole buffer using the addressing mode chosen at construction.

Controller Lifecycle
--------------------
    UNINITIALIZED ──► INITIALIZING ──► READY ──► SHUTTING_DOWN ──► CLOSED
                            │                                        ▲
                            └──────────── init failure ──────────────┘

- The constructor acquires the transport and sends the init sequence.
  A bus failure at that point raises ConfigurationError and the
  controller is closed.
- update() is only valid in READY.
- shutdown() clears the panel, releases the bus and is a no-op once
  the controller is closed. By default it is also registered with
  ``atexit`` so the panel goes dark when the program ends.

Thread Safety
-------------
Every public operation runs under one reentrant lock per controller,
held for the full duration of blocking bus writes. Concurrent callers
are serialized; the exit hook takes the same lock, so it never
interleaves with a draw or refresh in progress.

Example
-------
    >>> from pi_oled import OLEDDisplay, FONT_5X8
    >>> display = OLEDDisplay()
    >>> display.draw_string_centered("Hello World!", FONT_5X8, 25)
    >>> display.update()

Copyright (c) 2025-2026 Hugo José Pinto & Contributors
"""

import atexit
import logging
import threading
from enum import Enum
from typing import TYPE_CHECKING, Optional

from pi_oled.commands import (
    COMMAND_REGISTER,
    DATA_CHUNK_SIZE,
    DATA_REGISTER,
    AddressingMode,
    horizontal_window,
    init_sequence,
    page_select,
)
from pi_oled.errors import (
    ConfigurationError,
    DisplayStateError,
    OLEDError,
    TransportError,
)
from pi_oled.fonts import Font
from pi_oled.framebuffer import FrameBuffer
from pi_oled.rotation import Rotation, logical_size, to_physical
from pi_oled.transport import (
    DEFAULT_DISPLAY_ADDRESS,
    DEFAULT_I2C_BUS,
    I2CTransport,
    Transport,
)

if TYPE_CHECKING:
    from pi_oled.config import DisplayConfig

# Configure module logger
logger = logging.getLogger(__name__)


class DisplayState(Enum):
    """Lifecycle state of a display controller."""

    UNINITIALIZED = "uninitialized"
    INITIALIZING = "initializing"
    READY = "ready"
    SHUTTING_DOWN = "shutting down"
    CLOSED = "closed"


class OLEDDisplay:
    """
    SSD1306/SH1106 128x64 OLED display.

    Coordinates passed to drawing methods are *logical*: for 90° and 270°
    rotations the panel is 64 pixels wide and 128 tall. Pixels outside
    the panel are silently dropped.

    Attributes exposed as read-only properties:
        rotation: Mounting angle, fixed for the lifetime
        addressing_mode: Refresh protocol, fixed for the lifetime
        state: Current DisplayState
    """

    def __init__(
        self,
        bus: int = DEFAULT_I2C_BUS,
        address: int = DEFAULT_DISPLAY_ADDRESS,
        rotation: Rotation = Rotation.DEG_0,
        addressing_mode: AddressingMode = AddressingMode.HORIZONTAL,
        *,
        column_offset: int = 0,
        transport: Optional[Transport] = None,
        register_exit_hook: bool = True,
    ):
        """
        Open the bus and initialize the panel.

        Args:
            bus: I2C adapter number (ignored when transport is given)
            address: I2C device address (ignored when transport is given)
            rotation: Clockwise mounting angle
            addressing_mode: HORIZONTAL for SSD1306, PAGE for SH1106 clones
            column_offset: First RAM column in page mode (2 for most
                           132-column SH1106 panels)
            transport: Already-open transport; an I2CTransport is opened
                       when omitted
            register_exit_hook: Clear the panel and release the bus when
                                the interpreter exits

        Raises:
            ConfigurationError: If the address is invalid, the bus cannot
                                be opened or the initialization sequence
                                fails
            ValueError: If column_offset is outside 0-127
        """
        if not 0 <= column_offset <= 0x7F:
            raise ValueError(f"column offset must be 0-127, got {column_offset}")

        self._lock = threading.RLock()
        self._state = DisplayState.UNINITIALIZED
        self._rotation = Rotation(rotation)
        self._addressing_mode = AddressingMode(addressing_mode)
        self._column_offset = column_offset
        self._framebuffer = FrameBuffer()
        self._width, self._height = logical_size(
            self._rotation, self._framebuffer.width, self._framebuffer.height
        )
        self._exit_hook_registered = False

        if transport is None:
            transport = I2CTransport(bus, address)
        self._transport: Transport = transport

        self.clear()

        if register_exit_hook:
            atexit.register(self.shutdown)
            self._exit_hook_registered = True

        try:
            self._init()
        except (TransportError, OSError) as e:
            self._release()
            raise ConfigurationError(f"display initialization failed: {e}") from e

    @classmethod
    def from_config(
        cls,
        config: "DisplayConfig",
        transport: Optional[Transport] = None,
    ) -> "OLEDDisplay":
        """Create a display from a DisplayConfig."""
        return cls(
            bus=config.bus,
            address=config.address,
            rotation=config.rotation,
            addressing_mode=config.addressing_mode,
            column_offset=config.column_offset,
            transport=transport,
            register_exit_hook=config.register_exit_hook,
        )

    # =========================================================================
    # Properties
    # =========================================================================

    @property
    def rotation(self) -> Rotation:
        return self._rotation

    @property
    def addressing_mode(self) -> AddressingMode:
        return self._addressing_mode

    @property
    def state(self) -> DisplayState:
        return self._state

    @property
    def width(self) -> int:
        """Logical width (swapped with height for 90° and 270°)."""
        return self._width

    @property
    def height(self) -> int:
        """Logical height (swapped with width for 90° and 270°)."""
        return self._height

    def get_width(self) -> int:
        return self._width

    def get_height(self) -> int:
        return self._height

    # =========================================================================
    # Pixel Operations
    # =========================================================================

    def clear(self) -> None:
        """Turn every pixel off (framebuffer only, call update() to show)."""
        with self._lock:
            self._framebuffer.clear()

    def set_pixel(self, x: int, y: int, on: bool = True) -> None:
        """
        Set or clear one pixel at logical coordinates.

        Out-of-range coordinates are a no-op.
        """
        with self._lock:
            px, py = to_physical(
                self._rotation, x, y,
                self._framebuffer.width, self._framebuffer.height,
            )
            self._framebuffer.set_pixel(px, py, on)

    def get_pixel(self, x: int, y: int) -> bool:
        """Read one pixel at logical coordinates (False outside the panel)."""
        with self._lock:
            px, py = to_physical(
                self._rotation, x, y,
                self._framebuffer.width, self._framebuffer.height,
            )
            return self._framebuffer.get_pixel(px, py)

    def snapshot(self) -> bytes:
        """Copy of the physical framebuffer in controller byte order."""
        with self._lock:
            return self._framebuffer.raw_bytes()

    # =========================================================================
    # Drawing Operations
    # =========================================================================

    def draw_char(self, char: str, font: Font, x: int, y: int, on: bool = True) -> None:
        """Draw a single character with its top-left corner at (x, y)."""
        with self._lock:
            font.draw_char(self, char, x, y, on)

    def draw_string(self, text: str, font: Font, x: int, y: int, on: bool = True) -> None:
        """
        Draw text starting at (x, y).

        A character is drawn only if its whole cell fits on the panel; the
        cursor advances either way. ``\\n`` moves down one font line and
        back to column x.
        """
        with self._lock:
            pos_x = x
            pos_y = y
            for char in text:
                if char == "\n":
                    pos_y += font.outer_height
                    pos_x = x
                    continue

                if (
                    pos_x >= 0
                    and pos_x + font.width < self._width
                    and pos_y >= 0
                    and pos_y + font.height < self._height
                ):
                    self.draw_char(char, font, pos_x, pos_y, on)
                pos_x += font.outer_width

    def draw_string_centered(self, text: str, font: Font, y: int, on: bool = True) -> None:
        """Draw one line of text horizontally centered at row y."""
        with self._lock:
            x = (self._width - len(text) * font.outer_width) // 2
            self.draw_string(text, font, x, y, on)

    def clear_rect(self, x: int, y: int, width: int, height: int, on: bool = False) -> None:
        """
        Fill a rectangle with lit (on=True) or dark (on=False) pixels.

        Parts outside the panel are clipped.
        """
        with self._lock:
            for pos_x in range(x, x + width):
                for pos_y in range(y, y + height):
                    self.set_pixel(pos_x, pos_y, on)

    def draw_image(self, bitmap: bytes, x: int = 0, y: int = 0) -> None:
        """
        Copy a 1-bit bitmap over the framebuffer.

        The bitmap is sized to the logical panel: ``width // 8`` bytes per
        row, rows top to bottom, most significant bit leftmost. Zero bits
        clear pixels, so the image replaces what was underneath. The
        bitmap is placed with its top-left corner at (x, y) and clipped.

        Use pi_oled.image.image_to_bitmap() to produce the bitmap from a
        Pillow image.

        Raises:
            ValueError: If the bitmap is shorter than the panel
        """
        stride = self._width // 8
        expected = stride * self._height
        if len(bitmap) < expected:
            raise ValueError(
                f"bitmap too short: {len(bitmap)} bytes, expected {expected} "
                f"for {self._width}x{self._height}"
            )

        with self._lock:
            index = 0
            for row in range(self._height):
                for col_byte in range(stride):
                    value = bitmap[index]
                    index += 1
                    for bit in range(8):
                        self.set_pixel(
                            x + col_byte * 8 + bit,
                            y + row,
                            bool((value >> (7 - bit)) & 0x01),
                        )

    # =========================================================================
    # Controller Protocol
    # =========================================================================

    def _write_command(self, command: int) -> None:
        self._transport.write_register(COMMAND_REGISTER, command)

    def _init(self) -> None:
        """Send the power-up sequence. Runs once, from the constructor."""
        self._state = DisplayState.INITIALIZING
        for command in init_sequence(self._addressing_mode):
            logger.debug("init command 0x%02X", command)
            self._write_command(command)
        self._state = DisplayState.READY
        logger.info(
            "Display ready (%s addressing, rotation %d°)",
            self._addressing_mode.name.lower(), int(self._rotation),
        )

    def update(self) -> None:
        """
        Send the framebuffer to the panel.

        Raises:
            DisplayStateError: If the display is not ready
            TransportError: If a bus write fails
        """
        with self._lock:
            if self._state is not DisplayState.READY:
                raise DisplayStateError("update", self._state.value)
            self._flush()

    def _flush(self) -> None:
        if self._addressing_mode is AddressingMode.PAGE:
            self._flush_pages()
        else:
            self._flush_horizontal()

    def _flush_horizontal(self) -> None:
        data = self._framebuffer.raw_bytes()
        logger.debug("Horizontal refresh: %d bytes", len(data))

        for command in horizontal_window(self._framebuffer.width, self._framebuffer.page_count):
            self._write_command(command)

        for offset in range(0, len(data), DATA_CHUNK_SIZE):
            self._transport.write_block(DATA_REGISTER, data[offset:offset + DATA_CHUNK_SIZE])

    def _flush_pages(self) -> None:
        logger.debug("Page refresh: %d pages", self._framebuffer.page_count)

        for page in range(self._framebuffer.page_count):
            for command in page_select(page, self._column_offset):
                self._write_command(command)
            for value in self._framebuffer.page(page):
                self._transport.write_register(DATA_REGISTER, value)

    # =========================================================================
    # Shutdown
    # =========================================================================

    def shutdown(self) -> None:
        """
        Clear the panel and release the bus.

        Runs at most once; later calls do nothing. Bus errors are logged
        and swallowed, since this usually runs while the process exits.
        """
        with self._lock:
            if self._state in (DisplayState.SHUTTING_DOWN, DisplayState.CLOSED):
                return

            self._state = DisplayState.SHUTTING_DOWN
            try:
                self._framebuffer.clear()
                self._flush()
            except (OLEDError, OSError) as e:
                logger.warning("Could not clear display during shutdown: %s", e)
            finally:
                self._release()
            logger.info("Display shut down")

    def _release(self) -> None:
        """Unregister the exit hook, close the transport and mark CLOSED."""
        if self._exit_hook_registered:
            atexit.unregister(self.shutdown)
            self._exit_hook_registered = False

        try:
            self._transport.close()
        except (OLEDError, OSError) as e:
            logger.warning("Error closing transport: %s", e)

        self._state = DisplayState.CLOSED

    def __enter__(self) -> "OLEDDisplay":
        return self

    def __exit__(self, exc_type, exc_val, exc_tb) -> None:
        self.shutdown()

    def __repr__(self) -> str:
        return (
            f"OLEDDisplay({self._width}x{self._height}, "
            f"rotation={int(self._rotation)}, "
            f"mode={self._addressing_mode.name.lower()}, "
            f"state={self._state.value})"
        )
