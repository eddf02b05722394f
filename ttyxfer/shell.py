"""A line-editing command shell running on a console."""

from __future__ import annotations

from dataclasses import dataclass
from typing import List, Optional

from .console import CONSOLE, Console
from .stack_vec import StackVec, StackVecFull

MAX_ARGS = 64
MAX_LINE = 512

BELL = 0x07
BACKSPACE = 0x08
DELETE = 0x7F
_ERASE = "\b \b"


class CommandError(Exception):
    """A command line could not be parsed."""


class EmptyCommandError(CommandError):
    """The command line holds no arguments."""


class TooManyArgsError(CommandError):
    """The command line holds more arguments than fit."""


@dataclass
class Command:
    """A parsed command: its arguments, the first being its path."""

    args: StackVec

    @classmethod
    def parse(cls, s: str, capacity: int = MAX_ARGS) -> "Command":
        """Split ``s`` on spaces into at most ``capacity`` arguments."""
        args = StackVec([""] * capacity)
        for arg in filter(None, s.split(" ")):
            try:
                args.push(arg)
            except StackVecFull:
                raise TooManyArgsError(f"more than {capacity} arguments") from None
        if args.is_empty():
            raise EmptyCommandError("no arguments")
        return cls(args)

    def path(self) -> str:
        """Return the first argument."""
        return self.args[0]


def _read_line(console: Console) -> str:
    line: List[int] = []
    while True:
        byte = console.read_byte()
        if byte in (0x0D, 0x0A):
            console.write_str("\n")
            return bytes(line).decode("ascii")
        if byte in (BACKSPACE, DELETE):
            if line:
                line.pop()
                console.write_str(_ERASE)
            else:
                console.write_byte(BELL)
        elif 0x20 <= byte <= 0x7E and len(line) < MAX_LINE:
            line.append(byte)
            console.write_byte(byte)
        else:
            console.write_byte(BELL)


def _run(console: Console, prefix: str) -> None:
    while True:
        console.write_str(prefix)
        try:
            line = _read_line(console)
        except EOFError:
            return
        try:
            command = Command.parse(line)
        except EmptyCommandError:
            continue
        except TooManyArgsError:
            console.write_str("error: too many arguments\n")
            continue

        path = command.path()
        if path == "exit":
            return
        if path == "echo":
            console.write_str(" ".join(command.args.as_slice()[1:]) + "\n")
        else:
            console.write_str(f"unknown command: {path}\n")


def shell(prefix: str = "> ", console: Optional[Console] = None) -> None:
    """Run a shell, printing ``prefix`` before each line, until ``exit`` or end of input."""
    if console is not None:
        _run(console, prefix)
        return
    with CONSOLE.lock() as guard:
        _run(guard.value, prefix)