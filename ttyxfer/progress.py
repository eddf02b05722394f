"""Progress reports emitted during an XMODEM transfer."""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Callable, Optional


class ProgressKind(Enum):
    """What stage a transfer is in."""

    WAITING = "waiting"
    STARTED = "started"
    PACKET = "packet"
    NAK = "nak"
    UNKNOWN = "unknown"


@dataclass(frozen=True)
class Progress:
    """A progress event; ``number`` is set only for ``PACKET`` events."""

    kind: ProgressKind
    number: Optional[int] = None

    def __post_init__(self) -> None:
        if self.kind is ProgressKind.PACKET:
            if not isinstance(self.number, int) or not 0 <= self.number <= 0xFF:
                raise ValueError(f"packet number must be a byte, got {self.number!r}")
        elif self.number is not None:
            raise ValueError(f"{self.kind.name} progress carries no packet number")

    @classmethod
    def waiting(cls) -> "Progress":
        """Waiting for the receiver to send NAK."""
        return cls(ProgressKind.WAITING)

    @classmethod
    def started(cls) -> "Progress":
        """The transfer has started."""
        return cls(ProgressKind.STARTED)

    @classmethod
    def packet(cls, number: int) -> "Progress":
        """Packet ``number`` was transmitted or received."""
        return cls(ProgressKind.PACKET, number)


ProgressFn = Callable[[Progress], None]


def noop(progress: Progress) -> None:
    """Progress callback that discards every event; rejects non-events."""
    if not isinstance(progress, Progress):
        raise TypeError(f"expected a Progress event, got {progress!r}")