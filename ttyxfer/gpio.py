"""General-purpose I/O pins, configured through their register block."""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import Any, List, Optional, Tuple

from .common import peripheral_address
from .volatile import ReadVolatile, Reserved, Volatile, WriteVolatile

GPIO_BASE = peripheral_address(0x200000)
MAX_PIN = 53

_WORD = 4


class Function(Enum):
    """Function select codes for a pin."""

    INPUT = 0b000
    OUTPUT = 0b001
    ALT0 = 0b100
    ALT1 = 0b101
    ALT2 = 0b110
    ALT3 = 0b111
    ALT4 = 0b011
    ALT5 = 0b010


_LAYOUT = (
    ("fsel", Volatile, 6),
    (None, Reserved, 1),
    ("set", WriteVolatile, 2),
    (None, Reserved, 1),
    ("clr", WriteVolatile, 2),
    (None, Reserved, 1),
    ("lev", ReadVolatile, 2),
    (None, Reserved, 1),
    ("eds", Volatile, 2),
    (None, Reserved, 1),
    ("ren", Volatile, 2),
    (None, Reserved, 1),
    ("fen", Volatile, 2),
    (None, Reserved, 1),
    ("hen", Volatile, 2),
    (None, Reserved, 1),
    ("len", Volatile, 2),
    (None, Reserved, 1),
    ("aren", Volatile, 2),
    (None, Reserved, 1),
    ("afen", Volatile, 2),
    (None, Reserved, 1),
    ("pud", Volatile, 1),
    ("pudclk", Volatile, 2),
)

REGISTER_BLOCK_SIZE = sum(count for _, _, count in _LAYOUT) * _WORD


@dataclass
class _Registers:
    fsel: List[Volatile] = field(default_factory=list)
    set: List[WriteVolatile] = field(default_factory=list)
    clr: List[WriteVolatile] = field(default_factory=list)
    lev: List[ReadVolatile] = field(default_factory=list)
    eds: List[Volatile] = field(default_factory=list)
    ren: List[Volatile] = field(default_factory=list)
    fen: List[Volatile] = field(default_factory=list)
    hen: List[Volatile] = field(default_factory=list)
    len: List[Volatile] = field(default_factory=list)
    aren: List[Volatile] = field(default_factory=list)
    afen: List[Volatile] = field(default_factory=list)
    pud: List[Volatile] = field(default_factory=list)
    pudclk: List[Volatile] = field(default_factory=list)
    reserved: List[Reserved] = field(default_factory=list)


def _map_registers(memory: Any) -> _Registers:
    if len(memory) < REGISTER_BLOCK_SIZE:
        raise ValueError(
            f"GPIO registers need {REGISTER_BLOCK_SIZE} bytes, got {len(memory)}"
        )
    registers = _Registers()
    offset = 0
    for name, kind, count in _LAYOUT:
        target = getattr(registers, name or "reserved")
        for _ in range(count):
            target.append(kind(memory, offset))
            offset += _WORD
    return registers


def register_block() -> bytearray:
    """Return zeroed memory sized for one GPIO register block."""
    return bytearray(REGISTER_BLOCK_SIZE)


class _Pin:
    def __init__(self, pin: int, memory: Any, registers: _Registers) -> None:
        self.pin = pin
        self.memory = memory
        self.registers = registers
        self._consumed = False

    def _take(self) -> Tuple[int, Any, _Registers]:
        if self._consumed:
            raise RuntimeError(f"GPIO pin {self.pin} has already changed state")
        self._consumed = True
        return self.pin, self.memory, self.registers

    def _bank(self) -> Tuple[int, int]:
        return divmod(self.pin, 32)

    def __repr__(self) -> str:
        return f"{type(self).__name__}(pin={self.pin})"


class AltGpio(_Pin):
    """A pin running an alternative function."""


class OutputGpio(_Pin):
    """A pin configured as an output."""

    def set(self) -> None:
        """Drive the pin high."""
        index, bit = self._bank()
        self.registers.set[index].write(1 << bit)

    def clear(self) -> None:
        """Drive the pin low."""
        index, bit = self._bank()
        self.registers.clr[index].write(1 << bit)


class InputGpio(_Pin):
    """A pin configured as an input."""

    def level(self) -> bool:
        """Return ``True`` if the pin reads high."""
        index, bit = self._bank()
        return self.registers.lev[index].has_mask(1 << bit)


class Gpio(_Pin):
    """An unconfigured pin; choose its role with one of the ``into_*`` methods."""

    def __init__(self, pin: int, memory: Optional[Any] = None) -> None:
        if not 0 <= pin <= MAX_PIN:
            raise ValueError(f"pin {pin} exceeds maximum of {MAX_PIN}")
        if memory is None:
            memory = register_block()
        super().__init__(pin, memory, _map_registers(memory))

    def into_alt(self, function: Function) -> AltGpio:
        """Select ``function`` for this pin."""
        pin, memory, registers = self._take()
        index, slot = divmod(pin, 10)
        shift = slot * 3
        fsel = registers.fsel[index]
        fsel.and_mask(~(0b111 << shift) & 0xFFFFFFFF)
        fsel.or_mask(function.value << shift)
        return AltGpio(pin, memory, registers)

    def into_output(self) -> OutputGpio:
        """Configure this pin as an output."""
        return OutputGpio(*self.into_alt(Function.OUTPUT)._take())

    def into_input(self) -> InputGpio:
        """Configure this pin as an input."""
        return InputGpio(*self.into_alt(Function.INPUT)._take())