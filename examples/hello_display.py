#!/usr/bin/env python3
"""
OLED Display Demo
=================

This script demonstrates how to use the pi_oled driver to:
1. Open a panel on the Raspberry Pi I2C bus
2. Draw centered text
3. Draw a framed status box
4. Update only after drawing is done
5. Render a preview PNG without hardware

Usage:
    source .venv/bin/activate
    python examples/hello_display.py            # real panel on /dev/i2c-1
    python examples/hello_display.py --preview  # no hardware needed

Copyright (c) 2025-2026 Hugo José Pinto & Contributors
"""

import sys
import time
from pathlib import Path

from pi_oled import FONT_5X8, MemoryTransport, OLEDDisplay, Rotation, render_preview


def draw_screen(display: OLEDDisplay, counter: int) -> None:
    display.clear()

    # ==========================================================================
    # Title line
    # ==========================================================================
    display.draw_string_centered("pi-oled", FONT_5X8, 2)

    # ==========================================================================
    # Frame: fill a rectangle, then clear its inside
    # ==========================================================================
    display.clear_rect(10, 20, 108, 30, True)
    display.clear_rect(12, 22, 104, 26, False)

    display.draw_string_centered(f"count {counter}", FONT_5X8, 31)


def main():
    if "--preview" in sys.argv:
        # A recording transport stands in for the I2C bus
        with OLEDDisplay(transport=MemoryTransport(), register_exit_hook=False) as display:
            draw_screen(display, 42)
            output = Path("hello_display.png")
            output.write_bytes(render_preview(display, scale=4))
        print(f"Preview written to {output}")
        return

    print("Opening display on i2c bus 1, address 0x3C...")
    # The panel is cleared automatically when the script exits
    display = OLEDDisplay(bus=1, address=0x3C, rotation=Rotation.DEG_0)

    for counter in range(10):
        draw_screen(display, counter)
        display.update()
        time.sleep(1)

    display.shutdown()
    print("Done.")


if __name__ == "__main__":
    main()
