"""
Display Rotation
================

Mapping from logical (caller) coordinates to physical framebuffer
coordinates for the four mounting angles. All angles are clockwise.

For 90° and 270° the logical panel is portrait: width and height swap,
so callers always draw in the space they see.

    angle   physical x        physical y
    -----   ---------------   ---------------
      0     x                 y
     90     y                 W - x - 1
    180     W - x - 1         H - y - 1
    270     H - y - 1         x

W and H are the *logical* width and height. The mapping is a bijection
between logical and physical bounds, so an out-of-range logical
coordinate always lands out of range physically and is dropped by the
framebuffer.
"""

from enum import IntEnum
from typing import Tuple

from pi_oled.framebuffer import DISPLAY_HEIGHT, DISPLAY_WIDTH


class Rotation(IntEnum):
    """Clockwise mounting angle of the panel. Values are degrees."""

    DEG_0 = 0
    DEG_90 = 90
    DEG_180 = 180
    DEG_270 = 270

    @classmethod
    def from_degrees(cls, degrees: int) -> "Rotation":
        """
        Look up a rotation by angle.

        Raises:
            ValueError: If degrees is not 0, 90, 180 or 270
        """
        try:
            return cls(int(degrees))
        except ValueError:
            raise ValueError(
                f"Invalid rotation: {degrees}. Valid values: 0, 90, 180, 270"
            ) from None

    @property
    def is_portrait(self) -> bool:
        """True when logical width and height are swapped."""
        return self in (Rotation.DEG_90, Rotation.DEG_270)


def logical_size(
    rotation: Rotation,
    native_width: int = DISPLAY_WIDTH,
    native_height: int = DISPLAY_HEIGHT,
) -> Tuple[int, int]:
    """Return (width, height) as seen by callers for the given rotation."""
    if rotation.is_portrait:
        return native_height, native_width
    return native_width, native_height


def to_physical(
    rotation: Rotation,
    x: int,
    y: int,
    native_width: int = DISPLAY_WIDTH,
    native_height: int = DISPLAY_HEIGHT,
) -> Tuple[int, int]:
    """
    Map a logical coordinate to the physical framebuffer.

    Pure function, no bounds checking: the result may lie outside the
    panel, in which case the framebuffer drops the write.

    Args:
        rotation: Mounting angle
        x: Logical column
        y: Logical row
        native_width: Physical panel width
        native_height: Physical panel height

    Returns:
        (x, y) in physical coordinates
    """
    width, height = logical_size(rotation, native_width, native_height)

    if rotation == Rotation.DEG_90:
        return y, width - x - 1
    if rotation == Rotation.DEG_180:
        return width - x - 1, height - y - 1
    if rotation == Rotation.DEG_270:
        return height - y - 1, x
    return x, y
