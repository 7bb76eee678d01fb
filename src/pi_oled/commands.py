"""
SSD1306 / SH1106 Command Set
============================

Opcodes and command sequences for the two supported controller families.

Register Map
------------
The controller is reached through two registers on the bus:

    0x00  command channel (one opcode or argument byte per write)
    0x40  display RAM data channel

Addressing Modes
----------------
- **Horizontal**: the column and page pointers auto-increment across the
  whole RAM, so one column-range and one page-range command followed by
  the full buffer refreshes the panel. SSD1306 only.
- **Page**: the column pointer wraps within a single page. Each page is
  selected explicitly and its column pointer reset before its bytes are
  sent. This is the only mode that SH1106 clones implement.

The initialization values below are the ones the Adafruit SSD1306
library uses for a 128x64 panel on the internal charge pump. They are
a construction-time contract: a different order or value leaves the
panel blank or garbled.

References
----------
- SSD1306 datasheet rev 1.1, section 10 (command table)
- SH1106 datasheet v2.3, section "Commands"
"""

from enum import IntEnum
from typing import Final, List

from pi_oled.framebuffer import DISPLAY_WIDTH, PAGE_COUNT

# =============================================================================
# Registers
# =============================================================================

COMMAND_REGISTER: Final[int] = 0x00
DATA_REGISTER: Final[int] = 0x40

# Bytes per data write in horizontal mode
DATA_CHUNK_SIZE: Final[int] = 16

# =============================================================================
# Opcodes
# =============================================================================

SET_CONTRAST: Final[int] = 0x81
DISPLAY_ALL_ON_RESUME: Final[int] = 0xA4
NORMAL_DISPLAY: Final[int] = 0xA6
DISPLAY_OFF: Final[int] = 0xAE
DISPLAY_ON: Final[int] = 0xAF

SET_DISPLAY_OFFSET: Final[int] = 0xD3
SET_COM_PINS: Final[int] = 0xDA
SET_VCOM_DETECT: Final[int] = 0xDB
SET_DISPLAY_CLOCK_DIV: Final[int] = 0xD5
SET_PRECHARGE: Final[int] = 0xD9
SET_MULTIPLEX: Final[int] = 0xA8

SET_LOW_COLUMN: Final[int] = 0x00
SET_HIGH_COLUMN: Final[int] = 0x10
SET_START_LINE: Final[int] = 0x40

MEMORY_MODE: Final[int] = 0x20
COLUMN_ADDR: Final[int] = 0x21
PAGE_ADDR: Final[int] = 0x22
SET_PAGE_START: Final[int] = 0xB0

COM_SCAN_DEC: Final[int] = 0xC8
SEG_REMAP: Final[int] = 0xA0
CHARGE_PUMP: Final[int] = 0x8D


class AddressingMode(IntEnum):
    """
    Display RAM addressing mode, fixed at construction.

    The value is the argument of the MEMORY_MODE (0x20) command.
    """

    HORIZONTAL = 0x00
    PAGE = 0x02

    @classmethod
    def from_name(cls, name: str) -> "AddressingMode":
        """Look up a mode by case-insensitive name ('horizontal' or 'page')."""
        try:
            return cls[name.strip().upper()]
        except KeyError:
            raise ValueError(
                f"Invalid addressing mode: {name!r}. Valid modes: horizontal, page"
            ) from None


# =============================================================================
# Command Sequences
# =============================================================================

def init_sequence(mode: AddressingMode) -> List[int]:
    """
    Build the power-up command sequence.

    Every byte is written individually to COMMAND_REGISTER, in order.

    Args:
        mode: Addressing mode the refresh protocol will rely on

    Returns:
        List of command and argument bytes
    """
    return [
        DISPLAY_OFF,
        SET_DISPLAY_CLOCK_DIV, 0x80,        # suggested ratio
        SET_MULTIPLEX, 0x3F,                # 64 rows
        SET_DISPLAY_OFFSET, 0x00,           # no offset
        SET_START_LINE | 0x00,              # line #0
        CHARGE_PUMP, 0x14,                  # internal DC/DC on
        MEMORY_MODE, int(mode),
        SEG_REMAP | 0x01,                   # column 127 mapped to SEG0
        COM_SCAN_DEC,
        SET_COM_PINS, 0x12,
        SET_CONTRAST, 0xCF,
        SET_PRECHARGE, 0xF1,
        SET_VCOM_DETECT, 0x40,
        DISPLAY_ALL_ON_RESUME,
        NORMAL_DISPLAY,
        DISPLAY_ON,
    ]


def horizontal_window(width: int = DISPLAY_WIDTH, pages: int = PAGE_COUNT) -> List[int]:
    """
    Column and page range commands preceding a horizontal-mode refresh.

    Returns:
        [COLUMN_ADDR, 0, width - 1, PAGE_ADDR, 0, pages - 1]
    """
    return [
        COLUMN_ADDR, 0, width - 1,
        PAGE_ADDR, 0, pages - 1,
    ]


def page_select(page: int, column_offset: int = 0) -> List[int]:
    """
    Commands that point the page-mode write cursor at a page start.

    Args:
        page: Page number (0-7)
        column_offset: First RAM column to write. SH1106 panels with
                       132-column RAM usually need 2.

    Returns:
        [page select, column low nibble, column high nibble]
    """
    if not 0 <= page < PAGE_COUNT:
        raise ValueError(f"page must be 0-{PAGE_COUNT - 1}, got {page}")
    if not 0 <= column_offset <= 0x7F:
        raise ValueError(f"column offset must be 0-127, got {column_offset}")

    return [
        SET_PAGE_START + page,
        SET_LOW_COLUMN | (column_offset & 0x0F),
        SET_HIGH_COLUMN | (column_offset >> 4),
    ]
