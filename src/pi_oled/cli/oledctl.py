"""
oledctl - OLED Display Command-Line Interface
=============================================

This module implements the command-line interface for SSD1306/SH1106
OLED panels on a Raspberry Pi I2C bus.

Usage Examples
--------------
Show a message for ten seconds:
    $ oledctl text "Hello World!" --hold 10

Cheap SH1106 module mounted upside down:
    $ oledctl --page-mode --column-offset 2 --rotation 180 text "Hi"

Show a picture:
    $ oledctl image logo.png --threshold 100

Blank the panel:
    $ oledctl clear

Check a layout without hardware:
    $ oledctl --rotation 90 preview "Line 1\\nLine 2" -o layout.png

The panel is cleared when oledctl exits, so use --hold to keep text
visible for a while.

Defaults for the global options come from the PI_OLED_* environment
variables (see pi_oled.config).

Exit Codes
----------
0 - Success
1 - Display or bus error
2 - Invalid arguments
3 - Internal error
"""

import logging
import time
from pathlib import Path
from typing import List, Optional

import click
from PIL import Image, UnidentifiedImageError

from pi_oled import __version__
from pi_oled.cli.errors import handle_cli_exception
from pi_oled.commands import AddressingMode
from pi_oled.config import DisplayConfig, parse_int
from pi_oled.display import OLEDDisplay
from pi_oled.fonts import FONT_5X8, Font
from pi_oled.image import DEFAULT_THRESHOLD, draw_pil_image, render_preview
from pi_oled.rotation import Rotation
from pi_oled.transport import MemoryTransport

# Configure logging
logger = logging.getLogger(__name__)


# =============================================================================
# CLI Context and Utilities
# =============================================================================

class Context:
    """
    Shared context for CLI commands.

    Stores the display configuration and verbosity.
    """

    def __init__(self) -> None:
        self.config: DisplayConfig = DisplayConfig.from_env()
        self.verbose: bool = False

    def setup_logging(self) -> None:
        """Configure logging based on verbosity."""
        level = logging.DEBUG if self.verbose else logging.INFO
        logging.basicConfig(
            level=level,
            format="%(levelname)s: %(message)s" if self.verbose else "%(message)s",
        )

    def open_display(self) -> OLEDDisplay:
        """Open and initialize the configured panel."""
        return OLEDDisplay.from_config(self.config)


pass_context = click.make_pass_decorator(Context, ensure=True)


def unescape_text(text: str) -> str:
    """Turn the two-character sequence backslash-n into a newline."""
    return text.replace("\\n", "\n")


def draw_text_block(display: OLEDDisplay, text: str, font: Font, y: Optional[int]) -> None:
    """
    Draw text with every line centered horizontally.

    When y is None the block is centered vertically as well.
    """
    lines: List[str] = text.split("\n")
    if y is None:
        y = (display.height - len(lines) * font.outer_height) // 2

    for index, line in enumerate(lines):
        display.draw_string_centered(line, font, y + index * font.outer_height)


def hold(seconds: float) -> None:
    """Keep the process (and so the picture) alive for a while."""
    if seconds > 0:
        click.echo(f"Holding for {seconds:g}s (Ctrl+C to stop)...")
        try:
            time.sleep(seconds)
        except KeyboardInterrupt:
            pass


# =============================================================================
# Main CLI Group
# =============================================================================

@click.group()
@click.option(
    "-b", "--bus",
    type=int,
    default=None,
    help="I2C bus number (default: 1 or $PI_OLED_BUS)",
)
@click.option(
    "-a", "--address",
    type=str,
    default=None,
    help="I2C address, hex with 0x prefix or decimal (default: 0x3C)",
)
@click.option(
    "-r", "--rotation",
    type=click.Choice(["0", "90", "180", "270"]),
    default=None,
    help="Clockwise mounting angle (default: 0)",
)
@click.option(
    "--page-mode/--horizontal-mode",
    default=None,
    help="Page addressing for SH1106 clones (default: horizontal)",
)
@click.option(
    "--column-offset",
    type=click.IntRange(0, 127),
    default=None,
    help="First RAM column in page mode, usually 2 for SH1106 (default: 0)",
)
@click.option(
    "-v", "--verbose",
    is_flag=True,
    help="Enable verbose output",
)
@click.version_option(version=__version__, prog_name="oledctl")
@pass_context
def main(
    ctx: Context,
    bus: Optional[int],
    address: Optional[str],
    rotation: Optional[str],
    page_mode: Optional[bool],
    column_offset: Optional[int],
    verbose: bool,
) -> None:
    """
    Drive a 128x64 SSD1306/SH1106 OLED panel over I2C.

    Drawing commands clear the panel first and clear it again when the
    program exits. Use 'oledctl preview' to check a layout without a
    display attached.
    """
    config = ctx.config

    if bus is not None:
        config.bus = bus
    if address is not None:
        try:
            config.address = parse_int(address)
        except ValueError:
            raise click.BadParameter(f"invalid address '{address}'", param_hint="--address")
    if rotation is not None:
        config.rotation = Rotation.from_degrees(int(rotation))
    if page_mode is not None:
        config.addressing_mode = AddressingMode.PAGE if page_mode else AddressingMode.HORIZONTAL
    if column_offset is not None:
        config.column_offset = column_offset

    ctx.verbose = verbose
    ctx.setup_logging()


# =============================================================================
# Text Command
# =============================================================================

@main.command()
@click.argument("text")
@click.option(
    "-y", "--y",
    "y",
    type=int,
    default=None,
    help="Top row of the text (default: vertically centered)",
)
@click.option(
    "--hold", "hold_seconds",
    type=float,
    default=5.0,
    show_default=True,
    help="Seconds to keep the text on screen before exiting",
)
@pass_context
def text(ctx: Context, text: str, y: Optional[int], hold_seconds: float) -> None:
    """
    Show centered text using the built-in 5x8 font.

    TEXT may contain '\\n' to start a new line.

    Example:
        oledctl text "Hello World!"
        oledctl text "IP\\n192.168.1.20" --hold 30
    """
    try:
        with ctx.open_display() as display:
            display.clear()
            draw_text_block(display, unescape_text(text), FONT_5X8, y)
            display.update()
            hold(hold_seconds)
    except Exception as e:
        handle_cli_exception(e, verbose=ctx.verbose, error_type="Display")


# =============================================================================
# Image Command
# =============================================================================

@main.command()
@click.argument("file", type=click.Path(exists=True, dir_okay=False, path_type=Path))
@click.option("-x", "--x", "x", type=int, default=0, help="Left edge of the picture")
@click.option("-y", "--y", "y", type=int, default=0, help="Top edge of the picture")
@click.option(
    "-t", "--threshold",
    type=click.IntRange(0, 255),
    default=DEFAULT_THRESHOLD,
    show_default=True,
    help="Gray level from which a pixel is lit",
)
@click.option(
    "--hold", "hold_seconds",
    type=float,
    default=5.0,
    show_default=True,
    help="Seconds to keep the picture on screen before exiting",
)
@pass_context
def image(
    ctx: Context,
    file: Path,
    x: int,
    y: int,
    threshold: int,
    hold_seconds: float,
) -> None:
    """
    Show a picture file.

    The picture is converted to black and white; it is not scaled, so
    prepare it at the panel's size (128x64, or 64x128 when rotated).

    Example:
        oledctl image logo.png
        oledctl image photo.jpg --threshold 90
    """
    try:
        try:
            picture = Image.open(file)
            picture.load()
        except UnidentifiedImageError:
            raise click.BadParameter(f"{file} is not a supported image", param_hint="FILE")

        with ctx.open_display() as display:
            draw_pil_image(display, picture, x, y, threshold)
            display.update()
            hold(hold_seconds)
    except Exception as e:
        handle_cli_exception(e, verbose=ctx.verbose, error_type="Display")


# =============================================================================
# Clear Command
# =============================================================================

@main.command()
@pass_context
def clear(ctx: Context) -> None:
    """
    Blank the panel.

    Example:
        oledctl clear
        oledctl --address 0x3D clear
    """
    try:
        with ctx.open_display() as display:
            display.clear()
            display.update()
        click.echo("Display cleared.")
    except Exception as e:
        handle_cli_exception(e, verbose=ctx.verbose, error_type="Display")


# =============================================================================
# Preview Command
# =============================================================================

@main.command()
@click.argument("text")
@click.option(
    "-o", "--output",
    type=click.Path(dir_okay=False, path_type=Path),
    required=True,
    help="PNG file to write",
)
@click.option(
    "-y", "--y",
    "y",
    type=int,
    default=None,
    help="Top row of the text (default: vertically centered)",
)
@click.option(
    "-s", "--scale",
    type=click.IntRange(1, 16),
    default=4,
    show_default=True,
    help="Pixel scale factor",
)
@pass_context
def preview(ctx: Context, text: str, output: Path, y: Optional[int], scale: int) -> None:
    """
    Render text as it would appear on the panel, without hardware.

    Honors --rotation, so the PNG has the orientation you look at.

    Example:
        oledctl preview "Hello World!" -o hello.png
        oledctl --rotation 90 preview "A\\nB\\nC" -o portrait.png
    """
    try:
        display = OLEDDisplay(
            rotation=ctx.config.rotation,
            addressing_mode=ctx.config.addressing_mode,
            column_offset=ctx.config.column_offset,
            transport=MemoryTransport(),
            register_exit_hook=False,
        )
        with display:
            draw_text_block(display, unescape_text(text), FONT_5X8, y)
            png = render_preview(display, scale=scale)

        output.write_bytes(png)
        click.echo(f"Preview written to: {output} ({display.width}x{display.height})")
    except Exception as e:
        handle_cli_exception(e, verbose=ctx.verbose)


# =============================================================================
# Entry Point
# =============================================================================

if __name__ == "__main__":
    main()
