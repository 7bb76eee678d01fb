"""
Image Import and Preview
========================

Bridges Pillow images and the 1-bit display.

- image_to_bitmap(): threshold any Pillow image into the packed bitmap
  format that OLEDDisplay.draw_image() consumes
- draw_pil_image(): the two steps above in one call
- render_preview(): render what the display would show as a PNG, for
  checking layouts without hardware

Bitmap Format
-------------
Rows top to bottom, ``width // 8`` bytes per row, most significant bit
is the leftmost pixel, 1 = lit. This is Pillow's own packing for mode
"1" images.
"""

import io
from typing import TYPE_CHECKING

from PIL import Image

if TYPE_CHECKING:
    from pi_oled.display import OLEDDisplay

DEFAULT_THRESHOLD = 128


def image_to_bitmap(
    image: Image.Image,
    width: int,
    height: int,
    x: int = 0,
    y: int = 0,
    threshold: int = DEFAULT_THRESHOLD,
) -> bytes:
    """
    Convert a Pillow image to a packed 1-bit bitmap.

    The image is converted to grayscale and pasted onto a black
    ``width x height`` canvas with its top-left corner at (x, y). Parts
    falling outside the canvas are cut off. Pixels at or above the
    threshold become lit.

    Args:
        image: Source image, any mode
        width: Canvas width (multiple of 8)
        height: Canvas height
        x: Horizontal position of the image on the canvas
        y: Vertical position of the image on the canvas
        threshold: Gray level (0-255) from which a pixel is lit

    Returns:
        ``(width // 8) * height`` bytes
    """
    if width % 8 != 0:
        raise ValueError(f"canvas width must be a multiple of 8, got {width}")
    if not 0 <= threshold <= 255:
        raise ValueError(f"threshold must be 0-255, got {threshold}")

    canvas = Image.new("L", (width, height), color=0)
    canvas.paste(image.convert("L"), (x, y))

    binary = canvas.point(lambda level: 255 if level >= threshold else 0, mode="1")
    return binary.tobytes()


def draw_pil_image(
    display: "OLEDDisplay",
    image: Image.Image,
    x: int = 0,
    y: int = 0,
    threshold: int = DEFAULT_THRESHOLD,
) -> None:
    """
    Draw a Pillow image on the display at (x, y).

    The whole panel is overwritten: areas not covered by the image are
    cleared. Call display.update() afterwards to show the result.
    """
    bitmap = image_to_bitmap(image, display.width, display.height, x, y, threshold)
    display.draw_image(bitmap)


def render_preview(display: "OLEDDisplay", scale: int = 2) -> bytes:
    """
    Render the display's framebuffer as a PNG, in logical orientation.

    Lit pixels are white on black, like the panel itself.

    Args:
        display: Display to capture
        scale: Pixel scale factor (default 2)

    Returns:
        PNG image bytes
    """
    if scale < 1:
        raise ValueError(f"scale must be at least 1, got {scale}")

    img = Image.new("1", (display.width, display.height), color=0)
    for y in range(display.height):
        for x in range(display.width):
            if display.get_pixel(x, y):
                img.putpixel((x, y), 1)

    if scale > 1:
        img = img.resize(
            (display.width * scale, display.height * scale),
            Image.Resampling.NEAREST,
        )

    # Export as PNG
    buffer = io.BytesIO()
    img.save(buffer, format="PNG")
    return buffer.getvalue()
