"""I/O error kinds and build-time style assertions."""

from __future__ import annotations

import struct
from enum import Enum, auto
from typing import Any


class ErrorKind(Enum):
    """The category of an I/O failure."""

    NOT_FOUND = auto()
    PERMISSION_DENIED = auto()
    CONNECTION_REFUSED = auto()
    CONNECTION_RESET = auto()
    CONNECTION_ABORTED = auto()
    NOT_CONNECTED = auto()
    ADDR_IN_USE = auto()
    ADDR_NOT_AVAILABLE = auto()
    BROKEN_PIPE = auto()
    ALREADY_EXISTS = auto()
    WOULD_BLOCK = auto()
    INVALID_INPUT = auto()
    INVALID_DATA = auto()
    TIMED_OUT = auto()
    WRITE_ZERO = auto()
    INTERRUPTED = auto()
    OTHER = auto()
    UNEXPECTED_EOF = auto()


class IoError(Exception):
    """An I/O failure carrying an :class:`ErrorKind`."""

    def __init__(self, kind: ErrorKind, message: str) -> None:
        super().__init__(message)
        self.kind = kind
        self.message = message

    def __repr__(self) -> str:
        return f"IoError({self.kind.name}, {self.message!r})"


class ConstAssertionError(AssertionError):
    """Raised when a static layout or value assertion does not hold."""


def const_assert(*args: Any) -> None:
    """Require every argument to be truthy."""
    if not args:
        raise TypeError("const_assert requires at least one condition")
    for position, condition in enumerate(args):
        if not condition:
            raise ConstAssertionError(f"condition {position} does not hold")


def const_assert_eq(first: Any, *args: Any) -> None:
    """Require every further argument to equal ``first``."""
    if not args:
        raise TypeError("const_assert_eq requires at least two values")
    for other in args:
        if first != other:
            raise ConstAssertionError(f"{first!r} != {other!r}")


def _size_of(layout: Any) -> int:
    if isinstance(layout, struct.Struct):
        return layout.size
    if isinstance(layout, (str, bytes)):
        return struct.calcsize(layout)
    raise TypeError(f"cannot size {layout!r}: expected a struct format or struct.Struct")


def const_assert_size(layout: Any, size: int) -> None:
    """Require a struct format string or ``struct.Struct`` to occupy ``size`` bytes."""
    actual = _size_of(layout)
    if actual != size:
        raise ConstAssertionError(f"size is {actual} bytes, expected {size}")