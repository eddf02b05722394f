import struct
from datetime import timedelta

import pytest

from ttyxfer.timer import REGISTER_BLOCK_SIZE, Timer, current_time, spin_sleep


def _set_counter(timer, high, low):
    struct.pack_into("<I", timer.memory, timer.clo.address, low)
    struct.pack_into("<I", timer.memory, timer.chi.address, high)


def test_read_low_word():
    timer = Timer(bytearray(REGISTER_BLOCK_SIZE))
    _set_counter(timer, 0, 1500)
    assert timer.read() == timedelta(microseconds=1500)


def test_read_combines_high_and_low_words():
    timer = Timer(bytearray(REGISTER_BLOCK_SIZE))
    _set_counter(timer, 3, 77)
    micros = timer.read() // timedelta(microseconds=1)
    assert micros >> 32 == 3
    assert micros & 0xFFFFFFFF == 77


def test_current_time_matches_timer():
    timer = Timer(bytearray(REGISTER_BLOCK_SIZE))
    _set_counter(timer, 0, 999)
    assert current_time(timer) == timer.read()


def test_short_memory_rejected():
    with pytest.raises(ValueError):
        Timer(bytearray(REGISTER_BLOCK_SIZE - 1))


def test_host_timer_is_monotonic():
    timer = Timer()
    first = timer.read()
    second = timer.read()
    assert second >= first
    assert current_time() >= first


def test_spin_sleep_waits_at_least_duration():
    timer = Timer()
    before = timer.read()
    spin_sleep(timedelta(milliseconds=2), timer)
    assert timer.read() - before >= timedelta(milliseconds=2)


def test_spin_sleep_zero_returns_on_stopped_counter():
    timer = Timer(bytearray(REGISTER_BLOCK_SIZE))
    _set_counter(timer, 0, 10)
    spin_sleep(timedelta(0), timer)
    spin_sleep(timedelta(microseconds=-5), timer)
    assert timer.read() == timedelta(microseconds=10)