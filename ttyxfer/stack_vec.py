"""A fixed-capacity vector backed by caller-supplied storage."""

from __future__ import annotations

from itertools import islice
from typing import Any, Iterator, MutableSequence


class StackVecFull(Exception):
    """Raised when pushing onto a vector that is at capacity."""


class StackVec:
    """A vector whose capacity is bounded by the storage it is given.

    Elements live in the supplied mutable sequence; the vector only tracks how
    many of its leading slots are in use.
    """

    def __init__(self, storage: MutableSequence[Any]) -> None:
        self._storage = storage
        self._len = 0

    @classmethod
    def with_len(cls, storage: MutableSequence[Any], length: int) -> "StackVec":
        """Treat the first ``length`` elements of ``storage`` as already pushed."""
        if length < 0 or length > len(storage):
            raise ValueError(
                f"length {length} exceeds storage capacity {len(storage)}"
            )
        vec = cls(storage)
        vec._len = length
        return vec

    def capacity(self) -> int:
        """Return the number of elements this vector can hold."""
        return len(self._storage)

    def truncate(self, length: int) -> None:
        """Keep only the first ``length`` elements; longer lengths do nothing."""
        if length < self._len:
            self._len = max(length, 0)

    def as_slice(self) -> list:
        """Return the elements currently in the vector."""
        return list(islice(self._storage, self._len))

    def __len__(self) -> int:
        return self._len

    def is_empty(self) -> bool:
        return self._len == 0

    def is_full(self) -> bool:
        return self._len == self.capacity()

    def push(self, value: Any) -> None:
        """Append ``value``; raise :class:`StackVecFull` if there is no room."""
        if self.is_full():
            raise StackVecFull(f"vector is full (capacity {self.capacity()})")
        self._storage[self._len] = value
        self._len += 1

    def pop(self) -> Any:
        """Remove and return the last element, or ``None`` if the vector is empty."""
        if self._len == 0:
            return None
        self._len -= 1
        return self._storage[self._len]

    def _checked_index(self, index: int) -> int:
        if index < 0:
            index += self._len
        if not 0 <= index < self._len:
            raise IndexError(f"index out of range for vector of length {self._len}")
        return index

    def __getitem__(self, index):
        if isinstance(index, slice):
            return self.as_slice()[index]
        return self._storage[self._checked_index(index)]

    def __setitem__(self, index, value) -> None:
        if isinstance(index, slice):
            raise TypeError("StackVec does not support slice assignment")
        self._storage[self._checked_index(index)] = value

    def __iter__(self) -> Iterator[Any]:
        return iter(self.as_slice())

    def __repr__(self) -> str:
        return f"StackVec({self.as_slice()!r}, capacity={self.capacity()})"