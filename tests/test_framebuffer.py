"""
Framebuffer Unit Tests
======================

Tests for the 1 bit-per-pixel page-layout framebuffer.

Byte layout: byte x + (y // 8) * width, bit y & 7.
"""

import pytest

from pi_oled.framebuffer import (
    BUFFER_SIZE,
    DISPLAY_HEIGHT,
    DISPLAY_WIDTH,
    PAGE_COUNT,
    FrameBuffer,
)


# =============================================================================
# Construction
# =============================================================================

class TestFrameBufferInit:
    """Test framebuffer allocation."""

    def test_panel_constants(self):
        assert DISPLAY_WIDTH == 128
        assert DISPLAY_HEIGHT == 64
        assert BUFFER_SIZE == 1024
        assert PAGE_COUNT == 8

    def test_default_size(self):
        fb = FrameBuffer()
        assert fb.width == 128
        assert fb.height == 64
        assert len(fb) == BUFFER_SIZE
        assert fb.page_count == 8

    def test_starts_cleared(self):
        assert FrameBuffer().raw_bytes() == bytes(BUFFER_SIZE)

    def test_height_must_be_page_multiple(self):
        with pytest.raises(ValueError):
            FrameBuffer(128, 60)

    def test_zero_size_rejected(self):
        with pytest.raises(ValueError):
            FrameBuffer(0, 64)


# =============================================================================
# Pixel Writes
# =============================================================================

class TestSetPixel:
    """Test pixel set/clear and byte-level layout."""

    @pytest.fixture
    def fb(self):
        return FrameBuffer()

    @pytest.mark.parametrize("x,y", [
        (0, 0), (127, 0), (0, 63), (127, 63), (5, 7), (5, 8), (64, 33),
    ])
    def test_set_lands_on_expected_bit(self, fb, x, y):
        """Pixel (x, y) is bit y&7 of byte x + (y//8)*width."""
        fb.set_pixel(x, y, True)
        data = fb.raw_bytes()
        index = x + (y // 8) * 128
        assert data[index] == 1 << (y & 7)
        assert sum(1 for b in data if b) == 1

    def test_clear_pixel(self, fb):
        fb.set_pixel(10, 12, True)
        fb.set_pixel(10, 13, True)
        fb.set_pixel(10, 12, False)
        assert fb.raw_bytes()[10 + 128] == 1 << 5

    def test_repeated_writes_are_idempotent(self, fb):
        fb.set_pixel(3, 3, True)
        once = fb.raw_bytes()
        fb.set_pixel(3, 3, True)
        fb.set_pixel(3, 3, True)
        assert fb.raw_bytes() == once

    def test_clearing_unset_pixel_is_noop(self, fb):
        fb.set_pixel(3, 3, False)
        assert fb.raw_bytes() == bytes(BUFFER_SIZE)

    def test_get_pixel_readback(self, fb):
        fb.set_pixel(100, 50, True)
        assert fb.get_pixel(100, 50) is True
        assert fb.get_pixel(100, 51) is False

    def test_whole_column_of_a_page(self, fb):
        for y in range(8, 16):
            fb.set_pixel(7, y, True)
        assert fb.raw_bytes()[7 + 128] == 0xFF


# =============================================================================
# Out-of-range Writes
# =============================================================================

class TestOutOfRange:
    """Writes outside the panel are silently dropped."""

    @pytest.mark.parametrize("x,y", [
        (-1, 0), (0, -1), (128, 0), (0, 64), (130, 0), (200, 5),
        (-1, -1), (-128, 8), (5, 1000), (1000, 1000),
    ])
    def test_buffer_unchanged(self, x, y):
        fb = FrameBuffer()
        fb.set_pixel(50, 20, True)
        before = fb.raw_bytes()
        fb.set_pixel(x, y, True)
        fb.set_pixel(x, y, False)
        assert fb.raw_bytes() == before

    def test_column_past_edge_does_not_wrap_to_next_page(self):
        """(130, 0) would alias byte 130 = pixel (2, 8) without axis checks."""
        fb = FrameBuffer()
        fb.set_pixel(130, 0, True)
        assert fb.get_pixel(2, 8) is False

    def test_get_pixel_outside_is_false(self):
        assert FrameBuffer().get_pixel(-1, 200) is False


# =============================================================================
# Bulk Operations
# =============================================================================

class TestBulk:
    """Test clear, raw access and page slicing."""

    def test_clear(self):
        fb = FrameBuffer()
        for x in range(0, 128, 3):
            fb.set_pixel(x, x % 64, True)
        fb.clear()
        assert fb.raw_bytes() == bytes(BUFFER_SIZE)

    def test_raw_bytes_is_a_copy(self):
        fb = FrameBuffer()
        data = fb.raw_bytes()
        fb.set_pixel(0, 0, True)
        assert data[0] == 0
        assert fb.raw_bytes()[0] == 1

    def test_page_slice(self):
        fb = FrameBuffer()
        fb.set_pixel(0, 16, True)      # page 2, column 0
        fb.set_pixel(127, 23, True)    # page 2, column 127
        page = fb.page(2)
        assert len(page) == 128
        assert page[0] == 0x01
        assert page[127] == 0x80
        assert fb.page(1) == bytes(128)

    @pytest.mark.parametrize("index", [-1, 8])
    def test_invalid_page(self, index):
        with pytest.raises(ValueError):
            FrameBuffer().page(index)
