import pytest
import serial

from ttyxfer.parsers import (
    FlowControl,
    parse_baud_rate,
    parse_flow_control,
    parse_stop_bits,
    parse_width,
)


@pytest.mark.parametrize(
    "text, expected",
    [
        ("5", serial.FIVEBITS),
        ("6", serial.SIXBITS),
        ("7", serial.SEVENBITS),
        ("8", serial.EIGHTBITS),
    ],
)
def test_parse_width_accepts_five_to_eight(text, expected):
    assert parse_width(text) == expected


@pytest.mark.parametrize("text", ["4", "9", "", "eight"])
def test_parse_width_rejects_others(text):
    with pytest.raises(ValueError, match="value must be >= 5 and <= 8"):
        parse_width(text)


def test_parse_stop_bits():
    assert parse_stop_bits("1") == serial.STOPBITS_ONE
    assert parse_stop_bits("2") == serial.STOPBITS_TWO


def test_parse_stop_bits_rejects_others():
    with pytest.raises(ValueError, match="value must '1' or '2'"):
        parse_stop_bits("3")


def test_parse_flow_control():
    assert parse_flow_control("none") is FlowControl.NONE
    assert parse_flow_control("software") is FlowControl.SOFTWARE
    assert parse_flow_control("hardware") is FlowControl.HARDWARE


def test_flow_control_flags_are_exclusive():
    for text in ("none", "software", "hardware"):
        mode = parse_flow_control(text)
        assert not (mode.xonxoff and mode.rtscts)
    assert parse_flow_control("software").xonxoff
    assert parse_flow_control("hardware").rtscts
    none = parse_flow_control("none")
    assert not none.xonxoff and not none.rtscts


def test_parse_flow_control_rejects_others():
    with pytest.raises(ValueError, match="'hardware' \\(rts/cts\\)"):
        parse_flow_control("both")


def test_parse_baud_rate_valid():
    assert parse_baud_rate("115200") == 115200
    assert parse_baud_rate("+9600") == 9600


@pytest.mark.parametrize("text", ["", "abc", "-1", "12.5", " 9600"])
def test_parse_baud_rate_invalid(text):
    with pytest.raises(ValueError):
        parse_baud_rate(text)


def test_parse_baud_rate_overflow():
    with pytest.raises(ValueError, match="too large"):
        parse_baud_rate("1" + "0" * 30)