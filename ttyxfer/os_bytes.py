"""A growable byte string used for operating-system strings."""

from __future__ import annotations

from typing import Any, Optional, Union

_ESCAPES = {
    "\t": "\\t",
    "\r": "\\r",
    "\n": "\\n",
    "\\": "\\\\",
    '"': '\\"',
    "'": "\\'",
    "\0": "\\0",
}


def _escape_char(ch: str) -> str:
    if ch in _ESCAPES:
        return _ESCAPES[ch]
    if ch.isprintable():
        return ch
    return f"\\u{{{ord(ch):x}}}"


def debug_bytestring(data: bytes) -> str:
    """Quote ``data``: valid UTF-8 is escaped as text, invalid bytes as ``\\xHH``."""
    parts = ['"']
    for ch in bytes(data).decode("utf-8", errors="surrogateescape"):
        code = ord(ch)
        if 0xDC80 <= code <= 0xDCFF:
            parts.append(f"\\x{code - 0xDC00:02X}")
        else:
            parts.append(_escape_char(ch))
    parts.append('"')
    return "".join(parts)


class OsBuf:
    """Owned bytes that need not be valid UTF-8."""

    def __init__(self, data: Union[bytes, bytearray, memoryview] = b"") -> None:
        self._data = bytearray(data)

    @classmethod
    def from_string(cls, s: str) -> "OsBuf":
        """Build a buffer holding the UTF-8 encoding of ``s``."""
        return cls(s.encode("utf-8"))

    def clear(self) -> None:
        """Remove every byte."""
        self._data.clear()

    def push(self, other: Union["OsBuf", bytes, bytearray]) -> None:
        """Append the bytes of ``other``."""
        self._data += bytes(other)

    def to_str(self) -> Optional[str]:
        """Return the contents as text, or ``None`` if they are not valid UTF-8."""
        try:
            return self._data.decode("utf-8")
        except UnicodeDecodeError:
            return None

    def into_string(self) -> str:
        """Return the contents as text; raise ``UnicodeDecodeError`` if invalid."""
        return self._data.decode("utf-8")

    def to_string_lossy(self) -> str:
        """Return the contents as text, replacing invalid sequences with U+FFFD."""
        return self._data.decode("utf-8", errors="replace")

    def __bytes__(self) -> bytes:
        return bytes(self._data)

    def __len__(self) -> int:
        return len(self._data)

    def __eq__(self, other: Any) -> bool:
        if isinstance(other, OsBuf):
            return self._data == other._data
        if isinstance(other, (bytes, bytearray)):
            return self._data == other
        return NotImplemented

    def __hash__(self) -> int:
        return hash(bytes(self._data))

    def __repr__(self) -> str:
        return debug_bytestring(self._data)

    def __str__(self) -> str:
        return self.to_string_lossy()