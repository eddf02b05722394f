"""The XMODEM file transfer protocol with 128-byte packets and 8-bit checksums."""

from __future__ import annotations

import io
from typing import Any, BinaryIO

from .ioerrors import ErrorKind, IoError
from .progress import Progress, ProgressFn, noop

SOH = 0x01
EOT = 0x04
ACK = 0x06
NAK = 0x15
CAN = 0x18

PACKET_SIZE = 128
_RETRIES = 10


def read_max(stream: Any, size: int) -> bytes:
    """Read up to ``size`` bytes, stopping early only at end of stream."""
    chunks = []
    remaining = size
    while remaining > 0:
        try:
            chunk = stream.read(remaining)
        except InterruptedError:
            continue
        except IoError as err:
            if err.kind is ErrorKind.INTERRUPTED:
                continue
            raise
        if not chunk:
            break
        chunk = bytes(chunk)
        chunks.append(chunk)
        remaining -= len(chunk)
    return b"".join(chunks)


def get_checksum(buf: bytes) -> int:
    """Return the 8-bit wrapping sum of ``buf``."""
    return sum(buf) & 0xFF


def _as_stream(data: Any) -> Any:
    if isinstance(data, (bytes, bytearray, memoryview)):
        return io.BytesIO(bytes(data))
    return data


class Xmodem:
    """One side of an XMODEM session over a readable and writable stream."""

    def __init__(self, inner: Any, progress: ProgressFn = noop) -> None:
        self.inner = inner
        self.progress = progress
        self.packet = 1
        self.started = False

    def _read_exact(self, size: int) -> bytes:
        data = read_max(self.inner, size)
        if len(data) < size:
            raise IoError(ErrorKind.UNEXPECTED_EOF, "failed to fill whole buffer")
        return data

    def _write_all(self, data: bytes) -> None:
        view = memoryview(bytes(data))
        while len(view):
            try:
                written = self.inner.write(view)
            except InterruptedError:
                continue
            if written is None:
                return
            if written == 0:
                raise IoError(ErrorKind.WRITE_ZERO, "failed to write whole buffer")
            view = view[written:]

    def read_byte(self, abort_on_can: bool = False) -> int:
        """Read one byte; with ``abort_on_can`` a CAN byte aborts the session."""
        byte = self._read_exact(1)[0]
        if abort_on_can and byte == CAN:
            raise IoError(ErrorKind.CONNECTION_ABORTED, "received CAN")
        return byte

    def write_byte(self, byte: int) -> None:
        """Write one byte and flush."""
        self._write_all(bytes([byte]))
        self.inner.flush()

    def expect_byte(self, byte: int, expected: str) -> int:
        """Read a byte that must equal ``byte``."""
        received = self.read_byte(False)
        if received == byte:
            return received
        if received == CAN:
            raise IoError(ErrorKind.CONNECTION_ABORTED, "received CAN")
        raise IoError(ErrorKind.INVALID_DATA, expected)

    def expect_byte_or_cancel(self, byte: int, expected: str) -> int:
        """Like :meth:`expect_byte`, but sends CAN when the byte differs."""
        received = self.read_byte(False)
        if received == byte:
            return received
        self.write_byte(CAN)
        if received == CAN:
            raise IoError(ErrorKind.CONNECTION_ABORTED, "received CAN")
        raise IoError(ErrorKind.INVALID_DATA, expected)

    def read_packet(self, buf: bytearray) -> int:
        """Receive one packet into ``buf``; return 128, or 0 at end of transfer."""
        if len(buf) < PACKET_SIZE:
            raise IoError(ErrorKind.UNEXPECTED_EOF, "buffer too small")

        byte = self.read_byte(False)
        if byte == CAN:
            raise IoError(ErrorKind.CONNECTION_ABORTED, "received CAN")

        if byte == SOH:
            if not self.started:
                self.started = True
                self.progress(Progress.started())

            packet_num = self.read_byte(False)
            packet_num_neg = self.read_byte(False)
            if packet_num != self.packet or packet_num_neg != (~self.packet & 0xFF):
                self.write_byte(NAK)
                raise IoError(ErrorKind.INVALID_DATA, "packet number mismatch")

            data = self._read_exact(PACKET_SIZE)
            buf[:PACKET_SIZE] = data
            checksum = self.read_byte(False)
            if get_checksum(data) != checksum:
                self.write_byte(NAK)
                raise IoError(ErrorKind.INTERRUPTED, "checksum mismatch")

            self.write_byte(ACK)
            self.progress(Progress.packet(packet_num))
            self.packet = (self.packet + 1) & 0xFF
            return PACKET_SIZE

        if byte == EOT:
            self.write_byte(NAK)
            if self.read_byte(False) != EOT:
                raise IoError(ErrorKind.INVALID_DATA, "expected second EOT")
            self.write_byte(ACK)
            return 0

        if self.read_byte(False) == CAN:
            raise IoError(ErrorKind.CONNECTION_ABORTED, "received CAN")
        self.write_byte(NAK)
        raise IoError(ErrorKind.INVALID_DATA, "expected SOH or EOT")

    def write_packet(self, buf: bytes) -> int:
        """Send one 128-byte packet, or end the transfer when ``buf`` is empty."""
        if len(buf) != PACKET_SIZE and len(buf) != 0:
            raise IoError(ErrorKind.UNEXPECTED_EOF, "buffer length must be 128 or 0")

        if not self.started:
            self.progress(Progress.waiting())
            self.expect_byte(NAK, "expected NAK to start transmission")
            self.started = True
            self.progress(Progress.started())

        if not buf:
            self.write_byte(EOT)
            self.expect_byte(NAK, "expected NAK after first EOT")
            self.write_byte(EOT)
            self.expect_byte(ACK, "expected ACK after second EOT")
            return 0

        self.write_byte(SOH)
        self.write_byte(self.packet)
        self.write_byte(~self.packet & 0xFF)
        self.inner.flush()

        self._write_all(buf)
        self.write_byte(get_checksum(buf))

        response = self.read_byte(False)
        if response == ACK:
            self.packet = (self.packet + 1) & 0xFF
            self.progress(Progress.packet(self.packet))
            return PACKET_SIZE
        if response == NAK:
            raise IoError(ErrorKind.INTERRUPTED, "checksum failed")
        if response == CAN:
            raise IoError(ErrorKind.CONNECTION_ABORTED, "connection aborted by receiver")
        raise IoError(ErrorKind.INVALID_DATA, "expected ACK, NAK, or CAN")

    def flush(self) -> None:
        self.inner.flush()


def transmit(data: Any, to: Any, progress: ProgressFn = noop) -> int:
    """Send everything readable from ``data`` over ``to``; return bytes sent."""
    source: BinaryIO = _as_stream(data)
    transmitter = Xmodem(to, progress)
    written = 0

    while True:
        chunk = read_max(source, PACKET_SIZE)
        if not chunk:
            transmitter.write_packet(b"")
            return written

        packet = chunk.ljust(PACKET_SIZE, b"\x00")
        for _ in range(_RETRIES):
            try:
                transmitter.write_packet(packet)
            except IoError as err:
                if err.kind is ErrorKind.INTERRUPTED:
                    continue
                raise
            written += len(chunk)
            break
        else:
            raise IoError(ErrorKind.BROKEN_PIPE, "bad transmit")


def receive(source: Any, into: Any, progress: ProgressFn = noop) -> int:
    """Receive a transfer from ``source`` and write it to ``into``; return bytes received."""
    receiver = Xmodem(source, progress)
    received = 0
    packet = bytearray(PACKET_SIZE)

    receiver.write_byte(NAK)

    while True:
        for _ in range(_RETRIES):
            try:
                count = receiver.read_packet(packet)
            except IoError as err:
                if err.kind is ErrorKind.INTERRUPTED:
                    continue
                raise
            if count == 0:
                return received
            received += count
            into.write(bytes(packet))
            break
        else:
            raise IoError(ErrorKind.BROKEN_PIPE, "bad receive")