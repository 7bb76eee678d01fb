"""
oledctl CLI Tests
=================

Tests for the oledctl command-line interface using click's CliRunner.
Hardware access is patched out: commands that open a display get one
backed by a recording transport.
"""

from unittest.mock import patch

import pytest
from click.testing import CliRunner
from PIL import Image

from pi_oled.cli.oledctl import draw_text_block, main, unescape_text
from pi_oled.display import DisplayState, OLEDDisplay
from pi_oled.errors import ConfigurationError
from pi_oled.fonts import FONT_5X8
from pi_oled.rotation import Rotation

from conftest import FlakyTransport, lit_pixels


@pytest.fixture
def runner():
    """Fixture: CliRunner instance."""
    return CliRunner()


@pytest.fixture(autouse=True)
def clean_env(monkeypatch):
    for name in ("PI_OLED_BUS", "PI_OLED_ADDRESS", "PI_OLED_ROTATION",
                 "PI_OLED_ADDRESSING", "PI_OLED_COLUMN_OFFSET"):
        monkeypatch.delenv(name, raising=False)


@pytest.fixture
def fake_display():
    """
    Fixture: patch OLEDDisplay.from_config to use a recording transport.

    Yields a dict that receives the created display and its config.
    """
    created = {}
    real_from_config = OLEDDisplay.from_config

    def from_config(config, transport=None):
        created["config"] = config
        created["transport"] = FlakyTransport()
        config.register_exit_hook = False
        created["display"] = real_from_config(config, transport=created["transport"])
        return created["display"]

    with patch.object(OLEDDisplay, "from_config", side_effect=from_config):
        yield created


class TestHelpers:
    """Test text layout helpers."""

    def test_unescape(self):
        assert unescape_text("a\\nb") == "a\nb"
        assert unescape_text("plain") == "plain"

    def test_text_block_vertically_centered(self, display):
        draw_text_block(display, "A\nA", FONT_5X8, None)
        ys = [y for _, y in lit_pixels(display)]
        top = (64 - 2 * FONT_5X8.outer_height) // 2
        assert min(ys) >= top
        assert max(ys) < top + 2 * FONT_5X8.outer_height

    def test_text_block_explicit_row(self, display):
        draw_text_block(display, "A", FONT_5X8, 0)
        assert min(y for _, y in lit_pixels(display)) == 0


class TestMainGroup:
    """Test global options and help."""

    def test_help(self, runner):
        result = runner.invoke(main, ["--help"])
        assert result.exit_code == 0
        assert "preview" in result.output
        assert "--page-mode" in result.output

    def test_version(self, runner):
        result = runner.invoke(main, ["--version"])
        assert result.exit_code == 0
        assert "oledctl" in result.output

    def test_bad_address(self, runner):
        result = runner.invoke(main, ["--address", "zz", "clear"])
        assert result.exit_code == 2

    def test_bad_rotation(self, runner):
        result = runner.invoke(main, ["--rotation", "45", "clear"])
        assert result.exit_code == 2

    def test_global_options_reach_config(self, runner, fake_display):
        result = runner.invoke(main, [
            "--bus", "3", "--address", "0x3D", "--rotation", "180",
            "--page-mode", "--column-offset", "2", "clear",
        ])
        assert result.exit_code == 0, result.output
        config = fake_display["config"]
        assert config.bus == 3
        assert config.address == 0x3D
        assert config.rotation is Rotation.DEG_180
        assert config.column_offset == 2

    def test_env_defaults(self, runner, fake_display, monkeypatch):
        monkeypatch.setenv("PI_OLED_ROTATION", "90")
        result = runner.invoke(main, ["clear"])
        assert result.exit_code == 0, result.output
        assert fake_display["config"].rotation is Rotation.DEG_90


class TestTextCommand:
    """Test 'oledctl text'."""

    def test_text_shown_then_cleared(self, runner, fake_display):
        result = runner.invoke(main, ["text", "Hi", "--hold", "0"])
        assert result.exit_code == 0, result.output

        transport = fake_display["transport"]
        data = transport.data_bytes()
        # One refresh with the text, one blank refresh on shutdown
        assert len(data) == 2048
        assert any(data[:1024])
        assert data[1024:] == bytes(1024)
        assert fake_display["display"].state is DisplayState.CLOSED

    def test_configuration_error(self, runner):
        with patch.object(OLEDDisplay, "from_config",
                          side_effect=ConfigurationError("I2C bus not found: /dev/i2c-1")):
            result = runner.invoke(main, ["text", "Hi", "--hold", "0"])
        assert result.exit_code == 1
        assert "Configuration error" in result.output

    def test_hold_sleeps(self, runner, fake_display):
        with patch("pi_oled.cli.oledctl.time.sleep") as mock_sleep:
            result = runner.invoke(main, ["text", "Hi", "--hold", "2"])
        assert result.exit_code == 0
        mock_sleep.assert_called_once_with(2.0)


class TestImageCommand:
    """Test 'oledctl image'."""

    def test_image(self, runner, fake_display, tmp_path):
        path = tmp_path / "dot.png"
        Image.new("1", (1, 1), color=1).save(path)

        result = runner.invoke(main, ["image", str(path), "-x", "4", "-y", "2", "--hold", "0"])
        assert result.exit_code == 0, result.output
        data = fake_display["transport"].data_bytes()
        # Pixel (4, 2) is page 0, column 4, bit 2
        assert data[4] == 0x04
        assert sum(1 for b in data[:1024] if b) == 1

    def test_missing_file(self, runner):
        result = runner.invoke(main, ["image", "does-not-exist.png"])
        assert result.exit_code == 2

    def test_not_an_image(self, runner, tmp_path):
        path = tmp_path / "notes.txt"
        path.write_text("hello")
        result = runner.invoke(main, ["image", str(path), "--hold", "0"])
        assert result.exit_code == 2
        assert "not a supported image" in result.output


class TestClearCommand:
    """Test 'oledctl clear'."""

    def test_clear(self, runner, fake_display):
        result = runner.invoke(main, ["clear"])
        assert result.exit_code == 0
        assert "Display cleared." in result.output
        assert fake_display["transport"].data_bytes() == bytes(2048)


class TestPreviewCommand:
    """Test 'oledctl preview'."""

    def test_writes_png(self, runner, tmp_path):
        output = tmp_path / "preview.png"
        result = runner.invoke(main, ["preview", "Hello", "-o", str(output), "-s", "2"])
        assert result.exit_code == 0, result.output
        assert "Preview written to" in result.output

        img = Image.open(output)
        assert img.size == (256, 128)
        assert img.getbbox() is not None

    def test_rotated(self, runner, tmp_path):
        output = tmp_path / "portrait.png"
        result = runner.invoke(main, ["--rotation", "90", "preview", "A\\nB", "-o", str(output)])
        assert result.exit_code == 0, result.output
        assert "(64x128)" in result.output
        assert Image.open(output).size == (256, 512)

    def test_output_required(self, runner):
        result = runner.invoke(main, ["preview", "Hello"])
        assert result.exit_code == 2
