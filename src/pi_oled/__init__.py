"""
pi-oled - Raspberry Pi Driver for SSD1306/SH1106 OLED Panels
=============================================================

This package drives 128x64 monochrome OLED modules built on the SSD1306
controller or its SH1106 clone, connected to a Raspberry Pi I2C bus.

Drawing happens in a host-side framebuffer; update() sends it to the
panel. The panel can be mounted at 0°, 90°, 180° or 270°, and both the
horizontal (SSD1306) and page (SH1106) addressing modes are supported.

Main Components
---------------
- **display**: OLEDDisplay controller (init, refresh, shutdown, drawing)
- **framebuffer**: 1 bit-per-pixel buffer in controller page layout
- **rotation**: logical to physical coordinate mapping
- **commands**: controller opcodes and command sequences
- **transport**: I2C bus access via smbus2, plus an in-memory transport
- **fonts**: font capability and a built-in 5x8 font
- **image**: Pillow image import and PNG previews

Quick Start
-----------
Show a message:
    >>> from pi_oled import OLEDDisplay, FONT_5X8
    >>> display = OLEDDisplay()
    >>> display.draw_string_centered("Hello World!", FONT_5X8, 25)
    >>> display.update()

The panel is cleared automatically when the program exits.

SH1106 module mounted upside down:
    >>> from pi_oled import AddressingMode, Rotation
    >>> display = OLEDDisplay(
    ...     rotation=Rotation.DEG_180,
    ...     addressing_mode=AddressingMode.PAGE,
    ...     column_offset=2,
    ... )

Or use the command-line tool:
    $ oledctl text "Hello World!" --hold 10
    $ oledctl image logo.png

Version History
---------------
1.0.0 - Initial release with SSD1306/SH1106 support, rotation and oledctl
"""

__version__ = "1.0.0"
__author__ = "Hugo José Pinto & Contributors"

# =============================================================================
# Public API Exports
# =============================================================================
# These are the main classes and functions that users of the library will use.
# We import them here so they can be accessed directly from pi_oled.
# =============================================================================

from pi_oled.commands import AddressingMode
from pi_oled.config import DisplayConfig
from pi_oled.display import DisplayState, OLEDDisplay
from pi_oled.errors import (
    ConfigurationError,
    DisplayStateError,
    OLEDError,
    TransportError,
)
from pi_oled.fonts import FONT_5X8, BitmapFont, Font
from pi_oled.framebuffer import (
    BUFFER_SIZE,
    DISPLAY_HEIGHT,
    DISPLAY_WIDTH,
    FrameBuffer,
)
from pi_oled.image import draw_pil_image, image_to_bitmap, render_preview
from pi_oled.rotation import Rotation
from pi_oled.transport import (
    DEFAULT_DISPLAY_ADDRESS,
    DEFAULT_I2C_BUS,
    I2CTransport,
    MemoryTransport,
    Transport,
)

__all__ = [
    # Version info
    "__version__",
    "__author__",
    # Display
    "OLEDDisplay",
    "DisplayState",
    "DisplayConfig",
    "AddressingMode",
    "Rotation",
    # Framebuffer
    "FrameBuffer",
    "DISPLAY_WIDTH",
    "DISPLAY_HEIGHT",
    "BUFFER_SIZE",
    # Transports
    "Transport",
    "I2CTransport",
    "MemoryTransport",
    "DEFAULT_I2C_BUS",
    "DEFAULT_DISPLAY_ADDRESS",
    # Fonts
    "Font",
    "BitmapFont",
    "FONT_5X8",
    # Images
    "image_to_bitmap",
    "draw_pil_image",
    "render_preview",
    # Exception hierarchy
    "OLEDError",
    "ConfigurationError",
    "TransportError",
    "DisplayStateError",
]
