"""A console over a byte device, and kernel-style print helpers."""

from __future__ import annotations

import sys
from typing import Any, Callable, Optional

from .mutex import Mutex


class _HostDevice:
    """Byte device backed by the process's standard streams."""

    def read_byte(self) -> int:
        data = sys.stdin.buffer.read(1)
        if not data:
            raise EOFError("console input closed")
        return data[0]

    def write_byte(self, byte: int) -> None:
        sys.stdout.buffer.write(bytes([byte]))
        sys.stdout.buffer.flush()

    def has_byte(self) -> bool:
        return False


class Console:
    """Read/write access to a byte device that is opened on first use.

    ``factory`` builds the device; it needs ``read_byte()`` and
    ``write_byte(byte)`` and may offer ``has_byte()`` and ``flush()``.
    """

    def __init__(self, factory: Optional[Callable[[], Any]] = None) -> None:
        self._factory = factory or _HostDevice
        self._inner: Optional[Any] = None

    def _device(self) -> Any:
        if self._inner is None:
            self._inner = self._factory()
        return self._inner

    def read_byte(self) -> int:
        """Read one byte, blocking until one is available."""
        return self._device().read_byte()

    def write_byte(self, byte: int) -> None:
        """Write one byte."""
        if not 0 <= byte <= 0xFF:
            raise ValueError(f"byte out of range: {byte}")
        self._device().write_byte(byte)

    def read(self, size: int) -> bytes:
        """Wait for one byte, then read whatever else is ready, up to ``size``."""
        if size <= 0:
            return b""
        device = self._device()
        data = bytearray([device.read_byte()])
        has_byte = getattr(device, "has_byte", None)
        while has_byte is not None and len(data) < size and has_byte():
            data.append(device.read_byte())
        return bytes(data)

    def write(self, data: bytes) -> int:
        """Write every byte of ``data``; return how many were written."""
        for byte in bytes(data):
            self.write_byte(byte)
        return len(data)

    def flush(self) -> None:
        """Flush the device if it is open and buffers output."""
        device_flush = getattr(self._inner, "flush", None)
        if device_flush is not None:
            device_flush()

    def write_str(self, s: str) -> None:
        """Write ``s`` as UTF-8, sending a carriage return before each newline."""
        for byte in s.encode("utf-8"):
            if byte == 0x0A:
                self.write_byte(0x0D)
            self.write_byte(byte)


CONSOLE = Mutex(Console())
"""The shared console."""


def kprint(*args: Any, console: Optional[Console] = None, sep: str = " ", end: str = "") -> None:
    """Print ``args`` to ``console``, or to the shared console."""
    text = sep.join(str(arg) for arg in args) + end
    if console is not None:
        console.write_str(text)
        return
    with CONSOLE.lock() as guard:
        guard.value.write_str(text)


def kprintln(*args: Any, console: Optional[Console] = None, sep: str = " ") -> None:
    """Like :func:`kprint`, followed by a newline."""
    kprint(*args, console=console, sep=sep, end="\n")