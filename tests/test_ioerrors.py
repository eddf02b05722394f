import struct

import pytest

from ttyxfer.ioerrors import (
    ConstAssertionError,
    ErrorKind,
    IoError,
    const_assert,
    const_assert_eq,
    const_assert_size,
)


S1 = struct.Struct("<B")
S2 = struct.Struct("<HH")


def test_const_assert_size_structs():
    const_assert_size(S1, 1)
    const_assert_size(S2, 2 + 2)
    assert S1.unpack(S1.pack(1)) == (1,)
    assert S2.unpack(S2.pack(2, 2)) == (2, 2)


def test_const_assert_size_format_strings():
    const_assert_size("B", 1)
    const_assert_size("HH", 4)
    with pytest.raises(ConstAssertionError):
        const_assert_size("HH", 2)


def test_const_assert_size_wrong():
    with pytest.raises(ConstAssertionError):
        const_assert_size(S2, 3)


def test_const_assert_size_rejects_unknown_layout():
    with pytest.raises(TypeError):
        const_assert_size(3.5, 4)


def test_const_assert():
    const_assert(True, 1 == 1)
    with pytest.raises(ConstAssertionError):
        const_assert(True, False)
    with pytest.raises(TypeError):
        const_assert()


def test_const_assert_eq():
    const_assert_eq(4, 4, 4)
    with pytest.raises(ConstAssertionError):
        const_assert_eq(4, 4, 5)


def test_io_error_carries_kind_and_message():
    err = IoError(ErrorKind.BROKEN_PIPE, "bad transmit")
    assert err.kind is ErrorKind.BROKEN_PIPE
    assert str(err) == "bad transmit"
    with pytest.raises(IoError) as info:
        raise err
    assert info.value.kind is ErrorKind.BROKEN_PIPE