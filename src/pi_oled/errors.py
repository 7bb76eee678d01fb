"""
pi-oled Error Hierarchy
=======================

This module defines the exception hierarchy for the OLED driver.
All exceptions inherit from OLEDError, allowing callers to catch all
driver-related errors with a single except clause if desired.

Exception Hierarchy
-------------------
OLEDError (base)
├── ConfigurationError - bus cannot be opened, or controller init failed
├── TransportError - a register write failed during normal operation
└── DisplayStateError - operation not allowed in the controller's state

Design Philosophy
-----------------
Out-of-range pixel coordinates are never an error. Writes outside the
panel are silently dropped so that layout code drawing slightly past an
edge keeps working.

The driver performs no automatic retry. Bus errors are almost always
wiring or kernel driver problems, so a TransportError is handed to the
caller, who decides what to do.
"""

from typing import Optional


# =============================================================================
# Base Exception Class
# =============================================================================

class OLEDError(Exception):
    """
    Base exception for all pi-oled errors.

    All exceptions in the driver inherit from this class, allowing callers
    to catch all driver-related errors with a single except clause:

        try:
            display.update()
        except OLEDError as e:
            print(f"Error: {e}")
    """
    pass


# =============================================================================
# Construction Errors
# =============================================================================

class ConfigurationError(OLEDError):
    """
    The controller could not be brought up.

    Raised from the OLEDDisplay constructor when the transport cannot be
    acquired or when any command of the initialization sequence fails.
    The controller is unusable afterwards.
    """
    pass


# =============================================================================
# Runtime Errors
# =============================================================================

class TransportError(OLEDError):
    """
    A write to the display failed.

    Attributes:
        register: Register the failed write was addressed to
                  (0x00 for commands, 0x40 for pixel data)
        cause: The underlying bus exception, if any
    """

    def __init__(
        self,
        register: int,
        message: str = "",
        cause: Optional[BaseException] = None,
    ):
        self.register = register
        self.cause = cause
        detail = message or (str(cause) if cause else "write failed")
        super().__init__(f"register 0x{register:02X}: {detail}")


class DisplayStateError(OLEDError):
    """
    Operation requested in a controller state that does not allow it.

    update() is only valid once initialization has completed and before
    shutdown() has run.
    """

    def __init__(self, operation: str, state: str):
        self.operation = operation
        self.state = state
        super().__init__(f"cannot {operation}: display is {state}")
