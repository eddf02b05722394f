"""A spinning lock that owns the value it protects."""

from __future__ import annotations

import threading
import time
from typing import Any, Optional


class Mutex:
    """Guards a value; the owning thread may lock it again without blocking."""

    def __init__(self, value: Any) -> None:
        self._value = value
        self._locked = False
        self._owner: Optional[int] = None
        self._state = threading.Lock()

    def try_lock(self) -> Optional["MutexGuard"]:
        """Acquire the lock if it is free or already held by this thread."""
        me = threading.get_ident()
        with self._state:
            if not self._locked or self._owner == me:
                self._locked = True
                self._owner = me
                return MutexGuard(self)
        return None

    def lock(self) -> "MutexGuard":
        """Spin until the lock is acquired."""
        while True:
            guard = self.try_lock()
            if guard is not None:
                return guard
            time.sleep(0)

    def _unlock(self) -> None:
        with self._state:
            self._locked = False

    def __repr__(self) -> str:
        with self._state:
            held_elsewhere = self._locked and self._owner != threading.get_ident()
        if held_elsewhere:
            return "Mutex(data=<locked>)"
        return f"Mutex(data={self._value!r})"


class MutexGuard:
    """Access to a locked :class:`Mutex`; releasing it unlocks the mutex."""

    def __init__(self, mutex: Mutex) -> None:
        self._mutex = mutex
        self._released = False

    def _check(self) -> Mutex:
        if self._released:
            raise RuntimeError("guard has already been released")
        return self._mutex

    @property
    def value(self) -> Any:
        """The protected value."""
        return self._check()._value

    @value.setter
    def value(self, new: Any) -> None:
        self._check()._value = new

    def release(self) -> None:
        """Unlock the mutex; later calls do nothing."""
        if not self._released:
            self._released = True
            self._mutex._unlock()

    def __enter__(self) -> "MutexGuard":
        return self

    def __exit__(self, exc_type, exc, tb) -> None:
        self.release()