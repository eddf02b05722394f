"""The free-running 64-bit microsecond system timer."""

from __future__ import annotations

import struct
import time
from datetime import timedelta
from typing import Any, Optional

from .common import peripheral_address
from .volatile import ReadVolatile, Volatile

TIMER_REG_BASE = peripheral_address(0x3000)

_WORD = 4
_CS, _CLO, _CHI, _COMPARE = 0, 4, 8, 12
REGISTER_BLOCK_SIZE = _COMPARE + 4 * _WORD


class Timer:
    """The system timer, read through its register block.

    Without ``memory`` the counter follows the host's monotonic clock.
    """

    def __init__(self, memory: Optional[Any] = None) -> None:
        self._follows_host = memory is None
        if memory is None:
            memory = bytearray(REGISTER_BLOCK_SIZE)
        if len(memory) < REGISTER_BLOCK_SIZE:
            raise ValueError(
                f"timer registers need {REGISTER_BLOCK_SIZE} bytes, got {len(memory)}"
            )
        self.memory = memory
        self.cs = Volatile(memory, _CS)
        self.clo = ReadVolatile(memory, _CLO)
        self.chi = ReadVolatile(memory, _CHI)
        self.compare = [Volatile(memory, _COMPARE + i * _WORD) for i in range(4)]

    def _refresh_from_host(self) -> None:
        micros = time.monotonic_ns() // 1000
        struct.pack_into("<II", self.memory, _CLO, micros & 0xFFFFFFFF, (micros >> 32) & 0xFFFFFFFF)

    def read(self) -> timedelta:
        """Return the elapsed time held by the CHI:CLO counter."""
        if self._follows_host:
            self._refresh_from_host()
        high = self.chi.read()
        low = self.clo.read()
        again = self.chi.read()
        if again != high:
            high, low = again, self.clo.read()
        return timedelta(microseconds=(high << 32) | low)


def current_time(timer: Optional[Timer] = None) -> timedelta:
    """Return the current timer reading."""
    return (timer or Timer()).read()


def spin_sleep(duration: timedelta, timer: Optional[Timer] = None) -> None:
    """Busy-wait until ``duration`` has passed on ``timer``."""
    timer = timer or Timer()
    deadline = timer.read() + duration
    while timer.read() < deadline:
        pass