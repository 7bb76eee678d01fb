"""
Monochrome Framebuffer
======================

Host-side mirror of the SSD1306/SH1106 display RAM.

The controller organises its RAM in *pages*: horizontal bands of 8 pixel
rows. Each byte holds one column of a page, least significant bit on top:

    byte index = x + (y // 8) * width
    bit        = y & 7

    page 0  ┌────────────── 128 bytes ──────────────┐  rows 0..7
    page 1  │                                       │  rows 8..15
    ...     │                                       │
    page 7  └───────────────────────────────────────┘  rows 56..63

Pixel writes outside the panel are dropped without error. This keeps
naive callers (centered text, clipped rectangles) working when they draw
slightly past an edge.

Copyright (c) 2025-2026 Hugo José Pinto & Contributors
"""

from typing import Final

# =============================================================================
# Panel Constants
# =============================================================================

# Native panel geometry; there is no runtime panel-size negotiation
DISPLAY_WIDTH: Final[int] = 128
DISPLAY_HEIGHT: Final[int] = 64

# Rows per page (one byte per column)
PAGE_HEIGHT: Final[int] = 8

PAGE_COUNT: Final[int] = DISPLAY_HEIGHT // PAGE_HEIGHT

BUFFER_SIZE: Final[int] = (DISPLAY_WIDTH * DISPLAY_HEIGHT) // 8


class FrameBuffer:
    """
    Fixed-size 1 bit-per-pixel bitmap in controller page layout.

    Coordinates are *physical*: rotation is resolved by the caller
    before anything reaches this class.

    Example:
        >>> fb = FrameBuffer()
        >>> fb.set_pixel(3, 10, True)
        >>> fb.raw_bytes()[3 + 128] == 0b100
        True
    """

    def __init__(self, width: int = DISPLAY_WIDTH, height: int = DISPLAY_HEIGHT):
        """
        Allocate a cleared framebuffer.

        Args:
            width: Panel width in pixels
            height: Panel height in pixels (multiple of 8)
        """
        if width <= 0 or height <= 0 or height % PAGE_HEIGHT != 0:
            raise ValueError(
                f"invalid framebuffer size {width}x{height} "
                f"(height must be a positive multiple of {PAGE_HEIGHT})"
            )

        self._width = width
        self._height = height
        self._buffer = bytearray((width * height) // 8)

    @property
    def width(self) -> int:
        """Physical width in pixels."""
        return self._width

    @property
    def height(self) -> int:
        """Physical height in pixels."""
        return self._height

    @property
    def page_count(self) -> int:
        """Number of 8-row pages."""
        return self._height // PAGE_HEIGHT

    def __len__(self) -> int:
        return len(self._buffer)

    def clear(self) -> None:
        """Set every pixel off."""
        self._buffer[:] = bytes(len(self._buffer))

    def set_pixel(self, x: int, y: int, on: bool) -> None:
        """
        Set or clear one pixel.

        Coordinates outside the panel are a no-op, never an error.

        Args:
            x: Column (0 = left)
            y: Row (0 = top)
            on: True to light the pixel, False to clear it
        """
        # Checked per axis: a column past the right edge must not wrap
        # into the next page.
        if not (0 <= x < self._width and 0 <= y < self._height):
            return

        pos = x + (y // PAGE_HEIGHT) * self._width
        if not 0 <= pos < len(self._buffer):
            return

        mask = 1 << (y & 0x07)
        if on:
            self._buffer[pos] |= mask
        else:
            self._buffer[pos] &= ~mask & 0xFF

    def get_pixel(self, x: int, y: int) -> bool:
        """
        Read back one pixel.

        Returns:
            True if lit; False if off or outside the panel
        """
        if not (0 <= x < self._width and 0 <= y < self._height):
            return False
        pos = x + (y // PAGE_HEIGHT) * self._width
        return bool(self._buffer[pos] & (1 << (y & 0x07)))

    def raw_bytes(self) -> bytes:
        """
        Snapshot of the backing buffer in controller byte order.

        A copy is returned so the live buffer is never shared.
        """
        return bytes(self._buffer)

    def page(self, index: int) -> bytes:
        """
        Bytes of one page, left to right.

        Args:
            index: Page number (0 = top)
        """
        if not 0 <= index < self.page_count:
            raise ValueError(f"page must be 0-{self.page_count - 1}, got {index}")
        start = index * self._width
        return bytes(self._buffer[start:start + self._width])
