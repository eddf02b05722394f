"""Parsers for serial port settings given on the command line."""

from __future__ import annotations

import re
from enum import Enum

import serial

_USIZE_MAX = 2**64 - 1
_UNSIGNED = re.compile(r"\+?[0-9]+")


class FlowControl(Enum):
    """How the serial line paces data."""

    NONE = "none"
    SOFTWARE = "software"
    HARDWARE = "hardware"

    @property
    def xonxoff(self) -> bool:
        """Whether XON/XOFF software flow control is enabled."""
        return self is FlowControl.SOFTWARE

    @property
    def rtscts(self) -> bool:
        """Whether RTS/CTS hardware flow control is enabled."""
        return self is FlowControl.HARDWARE


_WIDTHS = {
    "5": serial.FIVEBITS,
    "6": serial.SIXBITS,
    "7": serial.SEVENBITS,
    "8": serial.EIGHTBITS,
}

_STOP_BITS = {
    "1": serial.STOPBITS_ONE,
    "2": serial.STOPBITS_TWO,
}


def parse_width(s: str) -> int:
    """Parse a data character width of 5 to 8 bits."""
    try:
        return _WIDTHS[s]
    except KeyError:
        raise ValueError("value must be >= 5 and <= 8") from None


def parse_stop_bits(s: str) -> float:
    """Parse a number of stop bits, '1' or '2'."""
    try:
        return _STOP_BITS[s]
    except KeyError:
        raise ValueError("value must '1' or '2'") from None


def parse_flow_control(s: str) -> FlowControl:
    """Parse 'none', 'software' or 'hardware'."""
    try:
        return FlowControl(s)
    except ValueError:
        raise ValueError(
            "value must be 'none', 'software' (xon/xoff), or 'hardware' (rts/cts)"
        ) from None


def parse_baud_rate(s: str) -> int:
    """Parse a baud rate as an unsigned integer."""
    if not s:
        raise ValueError("cannot parse integer from empty string")
    if not _UNSIGNED.fullmatch(s):
        raise ValueError("invalid digit found in string")
    value = int(s)
    if value > _USIZE_MAX:
        raise ValueError("number too large to fit in target type")
    return value