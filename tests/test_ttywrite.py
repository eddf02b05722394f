import io
from unittest import mock

import pytest
import serial

from ttyxfer.parsers import FlowControl
from ttyxfer.ttywrite import build_parser, main
from ttyxfer.xmodem import ACK, EOT, NAK, SOH


class FakePort:
    def __init__(self, replies=b""):
        self.incoming = io.BytesIO(replies)
        self.sent = bytearray()
        self.closed = False

    def read(self, size=1):
        return self.incoming.read(size)

    def write(self, data):
        self.sent += bytes(data)
        return len(data)

    def flush(self):
        pass

    def close(self):
        self.closed = True


def test_parser_defaults():
    args = build_parser().parse_args(["/dev/ttyFAKE0"])
    assert args.tty_path == "/dev/ttyFAKE0"
    assert args.baud_rate == 115200
    assert args.timeout == 10
    assert args.char_width == serial.EIGHTBITS
    assert args.stop_bits == serial.STOPBITS_ONE
    assert args.flow_control is FlowControl.NONE
    assert args.raw is False
    assert args.input is None


def test_parser_options():
    args = build_parser().parse_args(
        ["-b", "9600", "-w", "7", "-s", "2", "-f", "hardware", "-r", "-t", "3", "tty"]
    )
    assert args.baud_rate == 9600
    assert args.char_width == serial.SEVENBITS
    assert args.stop_bits == serial.STOPBITS_TWO
    assert args.flow_control is FlowControl.HARDWARE
    assert args.raw is True
    assert args.timeout == 3


def test_parser_rejects_bad_width(capsys):
    with pytest.raises(SystemExit):
        build_parser().parse_args(["-w", "9", "tty"])
    assert "value must be >= 5 and <= 8" in capsys.readouterr().err


def test_raw_copy(tmp_path, capsys):
    payload = bytes(range(256)) * 3
    source = tmp_path / "kernel.bin"
    source.write_bytes(payload)
    port = FakePort()
    with mock.patch("serial.Serial", return_value=port) as opener:
        status = main(["-r", "-i", str(source), "/dev/ttyFAKE0"])
    assert status == 0
    assert bytes(port.sent) == payload
    assert port.closed
    assert opener.call_args.kwargs["baudrate"] == 115200
    assert f"wrote {len(payload)} bytes" in capsys.readouterr().out


def test_xmodem_transfer(tmp_path, capsys):
    payload = b"\x07" * 200
    source = tmp_path / "kernel.bin"
    source.write_bytes(payload)
    port = FakePort(bytes([NAK, ACK, ACK, NAK, ACK]))
    with mock.patch("serial.Serial", return_value=port):
        status = main(["-i", str(source), "/dev/ttyFAKE0"])
    assert status == 0
    assert bytes(port.sent[:3]) == bytes([SOH, 1, 0xFE])
    assert bytes(port.sent[-2:]) == bytes([EOT, EOT])
    out = capsys.readouterr().out
    assert f"wrote {len(payload)} bytes" in out
    assert "Progress:" in out


def test_xmodem_failure_reports_error(tmp_path, capsys):
    source = tmp_path / "kernel.bin"
    source.write_bytes(b"data")
    port = FakePort(b"")
    with mock.patch("serial.Serial", return_value=port):
        status = main(["-i", str(source), "/dev/ttyFAKE0"])
    assert status == 1
    assert port.closed
    assert "XMODEM transmission failed" in capsys.readouterr().err


def test_open_failure(capsys):
    with mock.patch("serial.Serial", side_effect=serial.SerialException("nope")):
        status = main(["/dev/ttyFAKE0"])
    assert status == 1
    assert "Failed to open serial port" in capsys.readouterr().err