"""
Shared fixtures for the pi-oled test suite.

Hardware is replaced by a recording transport that can be armed to fail,
so every protocol test runs without an I2C bus.
"""

from typing import Optional

import pytest

from pi_oled.display import OLEDDisplay
from pi_oled.errors import TransportError
from pi_oled.transport import MemoryTransport


class FlakyTransport(MemoryTransport):
    """
    MemoryTransport that raises TransportError from a chosen write on.

    Attributes:
        fail_after: Number of successful writes before failing
                    (None = never fail)
        close_calls: How many times close() was called
    """

    def __init__(self, fail_after: Optional[int] = None) -> None:
        super().__init__()
        self.fail_after = fail_after
        self.close_calls = 0

    def _check(self, register: int) -> None:
        if self.fail_after is not None and len(self.writes) >= self.fail_after:
            raise TransportError(register, "simulated bus failure")

    def write_register(self, register: int, value: int) -> None:
        self._check(register)
        super().write_register(register, value)

    def write_block(self, register: int, data: bytes) -> None:
        self._check(register)
        super().write_block(register, data)

    def close(self) -> None:
        self.close_calls += 1
        super().close()


@pytest.fixture
def transport() -> FlakyTransport:
    """Fixture: recording transport that never fails (until armed)."""
    return FlakyTransport()


@pytest.fixture
def display(transport: FlakyTransport) -> OLEDDisplay:
    """
    Fixture: initialized horizontal-mode display at 0°.

    The init sequence is already recorded on the transport; it is reset
    so tests only see what they trigger.
    """
    d = OLEDDisplay(transport=transport, register_exit_hook=False)
    transport.reset()
    return d


def lit_pixels(display: OLEDDisplay) -> set:
    """Set of logical (x, y) coordinates that are lit."""
    return {
        (x, y)
        for y in range(display.height)
        for x in range(display.width)
        if display.get_pixel(x, y)
    }
