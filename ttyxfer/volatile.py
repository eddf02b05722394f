"""Typed views of memory-mapped registers with read/write access rules.

Each wrapper addresses one fixed-size value inside a writable buffer. The
wrapper type decides what is allowed: reading, writing, both, or neither.
"""

from __future__ import annotations

import struct
from typing import Any

DEFAULT_FORMAT = "<I"


class _Register:
    """A fixed-size value at ``offset`` inside ``memory``."""

    def __init__(self, memory: Any, offset: int = 0, fmt: str = DEFAULT_FORMAT) -> None:
        layout = struct.Struct(fmt)
        if offset < 0 or offset + layout.size > len(memory):
            raise ValueError(
                f"register at {offset:#x} of {layout.size} bytes lies outside "
                f"memory of {len(memory)} bytes"
            )
        self._memory = memory
        self._offset = offset
        self._layout = layout

    @property
    def address(self) -> int:
        """Offset of the register within its memory."""
        return self._offset

    @property
    def size(self) -> int:
        """Size of the register in bytes."""
        return self._layout.size

    def _load(self) -> int:
        return self._layout.unpack_from(self._memory, self._offset)[0]

    def _store(self, value: int) -> None:
        self._layout.pack_into(self._memory, self._offset, value)

    def _describe(self) -> str:
        return f"{type(self).__name__}(address={self._offset:#x}, size={self.size})"


class ReadVolatile(_Register):
    """A read-only register."""

    def __init__(self, memory: Any, offset: int = 0, fmt: str = DEFAULT_FORMAT) -> None:
        super().__init__(memory, offset, fmt)

    def read(self) -> int:
        """Return the current value."""
        return self._load()

    def has_mask(self, mask: int) -> bool:
        """Return whether every bit of ``mask`` is set."""
        return (self._load() & mask) == mask

    def __repr__(self) -> str:
        return self._describe()


class WriteVolatile(_Register):
    """A write-only register."""

    def __init__(self, memory: Any, offset: int = 0, fmt: str = DEFAULT_FORMAT) -> None:
        super().__init__(memory, offset, fmt)

    def write(self, value: int) -> None:
        """Store ``value``."""
        self._store(value)

    def __repr__(self) -> str:
        return self._describe()


class Volatile(_Register):
    """A register that may be both read and written."""

    def __init__(self, memory: Any, offset: int = 0, fmt: str = DEFAULT_FORMAT) -> None:
        super().__init__(memory, offset, fmt)

    def read(self) -> int:
        """Return the current value."""
        return self._load()

    def write(self, value: int) -> None:
        """Store ``value``."""
        self._store(value)

    def has_mask(self, mask: int) -> bool:
        """Return whether every bit of ``mask`` is set."""
        return (self._load() & mask) == mask

    def and_mask(self, mask: int) -> None:
        """Replace the value with ``value & mask``."""
        self._store(self._load() & mask)

    def or_mask(self, mask: int) -> None:
        """Replace the value with ``value | mask``."""
        self._store(self._load() | mask)

    def __repr__(self) -> str:
        return self._describe()


class Reserved(_Register):
    """A register slot that may be neither read nor written."""

    def __init__(self, memory: Any, offset: int = 0, fmt: str = DEFAULT_FORMAT) -> None:
        super().__init__(memory, offset, fmt)

    def __repr__(self) -> str:
        return self._describe()


class Unique:
    """Wraps another register, exposing exactly the operations it allows."""

    def __init__(self, wrapped: Any) -> None:
        self._wrapped = wrapped

    def __getattr__(self, name: str) -> Any:
        if name == "_wrapped":
            raise AttributeError(name)
        return getattr(self._wrapped, name)

    def __repr__(self) -> str:
        return f"Unique({self._wrapped!r})"