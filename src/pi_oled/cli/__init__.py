"""
pi-oled Command-Line Interface
==============================

This package provides the command-line tool for the OLED driver:

- **oledctl**: draw text or pictures on a panel, clear it, or render a
  PNG preview without hardware

The tool is implemented as a Click-based CLI application with
comprehensive help and error reporting.
"""

__all__ = ["oledctl"]
