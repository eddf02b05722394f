"""Addresses and clock rates shared by the board's peripherals."""

from __future__ import annotations

IO_BASE = 0x3F000000
"""Physical address where I/O peripherals are mapped."""

CLOCK_HZ = 250 * 1000 * 1000
"""Core clock frequency in hertz."""


def peripheral_address(offset: int) -> int:
    """Return the physical address of the peripheral at ``offset`` from ``IO_BASE``."""
    if offset < 0:
        raise ValueError(f"peripheral offset must not be negative, got {offset}")
    return IO_BASE + offset