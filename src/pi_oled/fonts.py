"""
Bitmap Fonts
============

Glyph rendering is a collaborator of the display, not part of it. The
display only asks a font for its cell size and hands it the position of
each character; the font sets the pixels through ``display.set_pixel``,
so rotation and clipping apply to glyphs exactly as to any other pixel.

Glyph Table Format
------------------
One byte per glyph row, top row first. Bit 0 is the *rightmost* pixel of
the row, so a 5-pixel-wide glyph uses bits 4..0:

    0x0E  .###.
    0x11  #...#
    0x11  #...#
    0x11  #...#
    0x1F  #####
    0x11  #...#
    0x11  #...#
    0x00  .....

The built-in 5x8 table covers ASCII 32..127 and comes from the HD44780
character ROM, with backslash and tilde restored in place of the ROM's
yen sign and arrow.
"""

from abc import ABC, abstractmethod
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from pi_oled.display import OLEDDisplay


class Font(ABC):
    """
    Glyph capability used by the display's text drawing operations.

    ``width``/``height`` are the glyph ink box; ``outer_width`` and
    ``outer_height`` include spacing and are the cursor advance.
    """

    @property
    @abstractmethod
    def width(self) -> int:
        """Glyph width in pixels."""
        pass

    @property
    @abstractmethod
    def height(self) -> int:
        """Glyph height in pixels."""
        pass

    @property
    @abstractmethod
    def outer_width(self) -> int:
        """Horizontal advance per character."""
        pass

    @property
    @abstractmethod
    def outer_height(self) -> int:
        """Vertical advance per line."""
        pass

    @abstractmethod
    def draw_char(self, display: "OLEDDisplay", char: str, x: int, y: int, on: bool) -> None:
        """
        Draw one character with its top-left corner at (x, y).

        Args:
            display: Target display (pixels set through set_pixel)
            char: Single character
            x: Logical column
            y: Logical row
            on: True to draw lit pixels, False to erase them
        """
        pass

    def text_width(self, text: str) -> int:
        """Width of a single line of text in pixels, spacing included."""
        return len(text) * self.outer_width


class BitmapFont(Font):
    """
    Fixed-width font backed by a row-per-byte glyph table.

    Characters outside the table render as blank cells. Only the lit
    pixels of a glyph are written; the background is left untouched.
    """

    def __init__(
        self,
        name: str,
        width: int,
        height: int,
        glyphs: bytes,
        first_char: int = 32,
        spacing: int = 1,
        line_spacing: int = 1,
    ):
        """
        Args:
            name: Font name for display purposes
            width: Glyph width (at most 8)
            height: Glyph height (rows per glyph in the table)
            glyphs: Glyph table, ``height`` bytes per character
            first_char: Character code of the first table entry
            spacing: Blank columns after each glyph
            line_spacing: Blank rows after each line
        """
        if not 0 < width <= 8:
            raise ValueError(f"glyph width must be 1-8, got {width}")
        if height <= 0 or len(glyphs) % height != 0:
            raise ValueError(
                f"glyph table of {len(glyphs)} bytes is not a multiple of height {height}"
            )

        self.name = name
        self._width = width
        self._height = height
        self._glyphs = bytes(glyphs)
        self._first_char = first_char
        self._char_count = len(glyphs) // height
        self._spacing = spacing
        self._line_spacing = line_spacing

    @property
    def width(self) -> int:
        return self._width

    @property
    def height(self) -> int:
        return self._height

    @property
    def outer_width(self) -> int:
        return self._width + self._spacing

    @property
    def outer_height(self) -> int:
        return self._height + self._line_spacing

    def glyph(self, char: str) -> bytes:
        """Row bytes for a character (all zero when not in the table)."""
        index = ord(char) - self._first_char
        if not 0 <= index < self._char_count:
            return bytes(self._height)
        start = index * self._height
        return self._glyphs[start:start + self._height]

    def draw_char(self, display: "OLEDDisplay", char: str, x: int, y: int, on: bool) -> None:
        rows = self.glyph(char)
        for row, bits in enumerate(rows):
            for col in range(self._width):
                # LSB = rightmost pixel
                if (bits >> (self._width - 1 - col)) & 1:
                    display.set_pixel(x + col, y + row, on)

    def __repr__(self) -> str:
        return f"BitmapFont({self.name!r}, {self._width}x{self._height})"


# =============================================================================
# Built-in 5x8 Font (ASCII 32..127)
# =============================================================================

_GLYPHS_5X8 = bytes([
    0x00, 0x00, 0x00, 0x00, 0x00, 0x00, 0x00, 0x00,  # space
    0x04, 0x04, 0x04, 0x04, 0x00, 0x00, 0x04, 0x00,  # !
    0x0A, 0x0A, 0x0A, 0x00, 0x00, 0x00, 0x00, 0x00,  # "
    0x0A, 0x0A, 0x1F, 0x0A, 0x1F, 0x0A, 0x0A, 0x00,  # #
    0x04, 0x0F, 0x14, 0x0E, 0x05, 0x1E, 0x04, 0x00,  # $
    0x18, 0x19, 0x02, 0x04, 0x08, 0x13, 0x03, 0x00,  # %
    0x0C, 0x12, 0x14, 0x08, 0x15, 0x12, 0x0D, 0x00,  # &
    0x0C, 0x04, 0x08, 0x00, 0x00, 0x00, 0x00, 0x00,  # '
    0x02, 0x04, 0x08, 0x08, 0x08, 0x04, 0x02, 0x00,  # (
    0x08, 0x04, 0x02, 0x02, 0x02, 0x04, 0x08, 0x00,  # )
    0x00, 0x04, 0x15, 0x0E, 0x15, 0x04, 0x00, 0x00,  # *
    0x00, 0x04, 0x04, 0x1F, 0x04, 0x04, 0x00, 0x00,  # +
    0x00, 0x00, 0x00, 0x00, 0x0C, 0x04, 0x08, 0x00,  # ,
    0x00, 0x00, 0x00, 0x1F, 0x00, 0x00, 0x00, 0x00,  # -
    0x00, 0x00, 0x00, 0x00, 0x00, 0x0C, 0x0C, 0x00,  # .
    0x00, 0x01, 0x02, 0x04, 0x08, 0x10, 0x00, 0x00,  # /
    0x0E, 0x11, 0x13, 0x15, 0x19, 0x11, 0x0E, 0x00,  # 0
    0x04, 0x0C, 0x04, 0x04, 0x04, 0x04, 0x0E, 0x00,  # 1
    0x0E, 0x11, 0x01, 0x02, 0x04, 0x08, 0x1F, 0x00,  # 2
    0x1F, 0x02, 0x04, 0x02, 0x01, 0x11, 0x0E, 0x00,  # 3
    0x02, 0x06, 0x0A, 0x12, 0x1F, 0x02, 0x02, 0x00,  # 4
    0x1F, 0x10, 0x1E, 0x01, 0x01, 0x11, 0x0E, 0x00,  # 5
    0x06, 0x08, 0x10, 0x1E, 0x11, 0x11, 0x0E, 0x00,  # 6
    0x1F, 0x01, 0x02, 0x04, 0x08, 0x08, 0x08, 0x00,  # 7
    0x0E, 0x11, 0x11, 0x0E, 0x11, 0x11, 0x0E, 0x00,  # 8
    0x0E, 0x11, 0x11, 0x0F, 0x01, 0x02, 0x0C, 0x00,  # 9
    0x00, 0x0C, 0x0C, 0x00, 0x0C, 0x0C, 0x00, 0x00,  # :
    0x00, 0x0C, 0x0C, 0x00, 0x0C, 0x04, 0x08, 0x00,  # ;
    0x02, 0x04, 0x08, 0x10, 0x08, 0x04, 0x02, 0x00,  # <
    0x00, 0x00, 0x1F, 0x00, 0x1F, 0x00, 0x00, 0x00,  # =
    0x08, 0x04, 0x02, 0x01, 0x02, 0x04, 0x08, 0x00,  # >
    0x0E, 0x11, 0x01, 0x02, 0x04, 0x00, 0x04, 0x00,  # ?
    0x0E, 0x11, 0x01, 0x0D, 0x15, 0x15, 0x0E, 0x00,  # @
    0x0E, 0x11, 0x11, 0x11, 0x1F, 0x11, 0x11, 0x00,  # A
    0x1E, 0x11, 0x11, 0x1E, 0x11, 0x11, 0x1E, 0x00,  # B
    0x0E, 0x11, 0x10, 0x10, 0x10, 0x11, 0x0E, 0x00,  # C
    0x1C, 0x12, 0x11, 0x11, 0x11, 0x12, 0x1C, 0x00,  # D
    0x1F, 0x10, 0x10, 0x1E, 0x10, 0x10, 0x1F, 0x00,  # E
    0x1F, 0x10, 0x10, 0x1E, 0x10, 0x10, 0x10, 0x00,  # F
    0x0E, 0x11, 0x10, 0x17, 0x11, 0x11, 0x0F, 0x00,  # G
    0x11, 0x11, 0x11, 0x1F, 0x11, 0x11, 0x11, 0x00,  # H
    0x0E, 0x04, 0x04, 0x04, 0x04, 0x04, 0x0E, 0x00,  # I
    0x07, 0x02, 0x02, 0x02, 0x02, 0x12, 0x0C, 0x00,  # J
    0x11, 0x12, 0x14, 0x18, 0x14, 0x12, 0x11, 0x00,  # K
    0x10, 0x10, 0x10, 0x10, 0x10, 0x10, 0x1F, 0x00,  # L
    0x11, 0x1B, 0x15, 0x15, 0x11, 0x11, 0x11, 0x00,  # M
    0x11, 0x11, 0x19, 0x15, 0x13, 0x11, 0x11, 0x00,  # N
    0x0E, 0x11, 0x11, 0x11, 0x11, 0x11, 0x0E, 0x00,  # O
    0x1E, 0x11, 0x11, 0x1E, 0x10, 0x10, 0x10, 0x00,  # P
    0x0E, 0x11, 0x11, 0x11, 0x15, 0x12, 0x0D, 0x00,  # Q
    0x1E, 0x11, 0x11, 0x1E, 0x14, 0x12, 0x11, 0x00,  # R
    0x0F, 0x10, 0x10, 0x0E, 0x01, 0x01, 0x1E, 0x00,  # S
    0x1F, 0x04, 0x04, 0x04, 0x04, 0x04, 0x04, 0x00,  # T
    0x11, 0x11, 0x11, 0x11, 0x11, 0x11, 0x0E, 0x00,  # U
    0x11, 0x11, 0x11, 0x11, 0x11, 0x0A, 0x04, 0x00,  # V
    0x11, 0x11, 0x11, 0x15, 0x15, 0x15, 0x0A, 0x00,  # W
    0x11, 0x11, 0x0A, 0x04, 0x0A, 0x11, 0x11, 0x00,  # X
    0x11, 0x11, 0x11, 0x0A, 0x04, 0x04, 0x04, 0x00,  # Y
    0x1F, 0x01, 0x02, 0x04, 0x08, 0x10, 0x1F, 0x00,  # Z
    0x0E, 0x08, 0x08, 0x08, 0x08, 0x08, 0x0E, 0x00,  # [
    0x00, 0x10, 0x08, 0x04, 0x02, 0x01, 0x00, 0x00,  # backslash
    0x0E, 0x02, 0x02, 0x02, 0x02, 0x02, 0x0E, 0x00,  # ]
    0x04, 0x0A, 0x11, 0x00, 0x00, 0x00, 0x00, 0x00,  # ^
    0x00, 0x00, 0x00, 0x00, 0x00, 0x00, 0x1F, 0x00,  # _
    0x08, 0x04, 0x02, 0x00, 0x00, 0x00, 0x00, 0x00,  # `
    0x00, 0x00, 0x0E, 0x01, 0x0F, 0x11, 0x0F, 0x00,  # a
    0x10, 0x10, 0x16, 0x19, 0x11, 0x11, 0x1E, 0x00,  # b
    0x00, 0x00, 0x0E, 0x10, 0x10, 0x11, 0x0E, 0x00,  # c
    0x01, 0x01, 0x0D, 0x13, 0x11, 0x11, 0x0F, 0x00,  # d
    0x00, 0x00, 0x0E, 0x11, 0x1F, 0x10, 0x0E, 0x00,  # e
    0x06, 0x09, 0x08, 0x1C, 0x08, 0x08, 0x08, 0x00,  # f
    0x00, 0x0F, 0x11, 0x11, 0x0F, 0x01, 0x0E, 0x00,  # g
    0x10, 0x10, 0x16, 0x19, 0x11, 0x11, 0x11, 0x00,  # h
    0x04, 0x00, 0x0C, 0x04, 0x04, 0x04, 0x0E, 0x00,  # i
    0x02, 0x00, 0x06, 0x02, 0x02, 0x12, 0x0C, 0x00,  # j
    0x10, 0x10, 0x12, 0x14, 0x18, 0x14, 0x12, 0x00,  # k
    0x0C, 0x04, 0x04, 0x04, 0x04, 0x04, 0x0E, 0x00,  # l
    0x00, 0x00, 0x1A, 0x15, 0x15, 0x11, 0x11, 0x00,  # m
    0x00, 0x00, 0x16, 0x19, 0x11, 0x11, 0x11, 0x00,  # n
    0x00, 0x00, 0x0E, 0x11, 0x11, 0x11, 0x0E, 0x00,  # o
    0x00, 0x00, 0x1E, 0x11, 0x1E, 0x10, 0x10, 0x00,  # p
    0x00, 0x00, 0x0D, 0x13, 0x0F, 0x01, 0x01, 0x00,  # q
    0x00, 0x00, 0x16, 0x19, 0x10, 0x10, 0x10, 0x00,  # r
    0x00, 0x00, 0x0E, 0x10, 0x0E, 0x01, 0x1E, 0x00,  # s
    0x08, 0x08, 0x1C, 0x08, 0x08, 0x09, 0x06, 0x00,  # t
    0x00, 0x00, 0x11, 0x11, 0x11, 0x13, 0x0D, 0x00,  # u
    0x00, 0x00, 0x11, 0x11, 0x11, 0x0A, 0x04, 0x00,  # v
    0x00, 0x00, 0x11, 0x11, 0x15, 0x15, 0x0A, 0x00,  # w
    0x00, 0x00, 0x11, 0x0A, 0x04, 0x0A, 0x11, 0x00,  # x
    0x00, 0x00, 0x11, 0x11, 0x0F, 0x01, 0x0E, 0x00,  # y
    0x00, 0x00, 0x1F, 0x02, 0x04, 0x08, 0x1F, 0x00,  # z
    0x02, 0x04, 0x04, 0x08, 0x04, 0x04, 0x02, 0x00,  # {
    0x04, 0x04, 0x04, 0x04, 0x04, 0x04, 0x04, 0x00,  # |
    0x08, 0x04, 0x04, 0x02, 0x04, 0x04, 0x08, 0x00,  # }
    0x00, 0x00, 0x08, 0x15, 0x02, 0x00, 0x00, 0x00,  # ~
    0x00, 0x00, 0x00, 0x00, 0x00, 0x00, 0x00, 0x00,  # DEL
])

FONT_5X8 = BitmapFont("5x8", width=5, height=8, glyphs=_GLYPHS_5X8)
