import threading

import pytest

from ttyxfer.mutex import Mutex


def _in_thread(func):
    result = {}

    def run():
        result["value"] = func()

    worker = threading.Thread(target=run)
    worker.start()
    worker.join(timeout=5)
    return result["value"]


def _try_elsewhere(mutex):
    def attempt():
        guard = mutex.try_lock()
        if guard is None:
            return False
        guard.release()
        return True

    return _in_thread(attempt)


def test_try_lock_gives_value():
    mutex = Mutex([1, 2])
    guard = mutex.try_lock()
    assert guard.value == [1, 2]
    guard.release()


def test_value_assignment_persists():
    mutex = Mutex("a")
    with mutex.lock() as guard:
        guard.value = "b"
    with mutex.lock() as guard:
        assert guard.value == "b"


def test_other_thread_blocked_while_held():
    mutex = Mutex(0)
    guard = mutex.lock()
    assert _try_elsewhere(mutex) is False
    guard.release()
    assert _try_elsewhere(mutex) is True


def test_context_manager_releases():
    mutex = Mutex(0)
    with mutex.lock():
        assert _try_elsewhere(mutex) is False
    assert _try_elsewhere(mutex) is True


def test_same_thread_may_lock_again():
    mutex = Mutex(5)
    first = mutex.lock()
    second = mutex.try_lock()
    assert second.value == 5
    first.release()
    second.release()


def test_lock_waits_for_release():
    mutex = Mutex(0)
    held = threading.Event()
    go = threading.Event()

    def holder():
        with mutex.lock() as guard:
            guard.value = 42
            held.set()
            go.wait(timeout=5)

    worker = threading.Thread(target=holder)
    worker.start()
    held.wait(timeout=5)
    assert mutex.try_lock() is None
    go.set()
    with mutex.lock() as guard:
        assert guard.value == 42
    worker.join(timeout=5)


def test_release_is_idempotent_and_guard_becomes_unusable():
    mutex = Mutex(1)
    guard = mutex.lock()
    guard.release()
    guard.release()
    with pytest.raises(RuntimeError):
        guard.value
    assert _try_elsewhere(mutex) is True


def test_repr_shows_data_or_locked():
    mutex = Mutex(3)
    assert repr(mutex) == "Mutex(data=3)"
    guard = mutex.lock()
    assert _in_thread(lambda: repr(mutex)) == "Mutex(data=<locked>)"
    guard.release()
    assert _in_thread(lambda: repr(mutex)) == "Mutex(data=3)"