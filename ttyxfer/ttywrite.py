"""Command that writes a file to a TTY, using XMODEM unless told otherwise."""

from __future__ import annotations

import argparse
import sys
from typing import Any, Callable, Optional, Sequence

import serial

from .ioerrors import IoError
from .parsers import parse_baud_rate, parse_flow_control, parse_stop_bits, parse_width
from .xmodem import transmit

_CHUNK = 8192


def _argument(parse: Callable[[str], Any]) -> Callable[[str], Any]:
    def convert(text: str) -> Any:
        try:
            return parse(text)
        except ValueError as err:
            raise argparse.ArgumentTypeError(str(err)) from None

    convert.__name__ = parse.__name__
    return convert


def _seconds(text: str) -> int:
    return parse_baud_rate(text)


def build_parser() -> argparse.ArgumentParser:
    """Return the command line parser."""
    parser = argparse.ArgumentParser(
        prog="ttywrite",
        description="Write to TTY using the XMODEM protocol by default.",
    )
    parser.add_argument(
        "-i", dest="input", default=None,
        help="Input file (defaults to stdin if not set)",
    )
    parser.add_argument(
        "-b", "--baud", dest="baud_rate", type=_argument(parse_baud_rate),
        default="115200", help="Set baud rate",
    )
    parser.add_argument(
        "-t", "--timeout", dest="timeout", type=_argument(_seconds),
        default="10", help="Set timeout in seconds",
    )
    parser.add_argument(
        "-w", "--width", dest="char_width", type=_argument(parse_width),
        default="8", help="Set data character width in bits",
    )
    parser.add_argument("tty_path", help="Path to TTY device")
    parser.add_argument(
        "-f", "--flow-control", dest="flow_control",
        type=_argument(parse_flow_control), default="none",
        help="Enable flow control ('hardware' or 'software')",
    )
    parser.add_argument(
        "-s", "--stop-bits", dest="stop_bits", type=_argument(parse_stop_bits),
        default="1", help="Set number of stop bits",
    )
    parser.add_argument("-r", "--raw", action="store_true", help="Disable XMODEM")
    return parser


def _copy(source: Any, port: Any) -> int:
    total = 0
    while True:
        chunk = source.read(_CHUNK)
        if not chunk:
            return total
        port.write(chunk)
        total += len(chunk)


def _send(source: Any, port: Any, raw: bool) -> int:
    if raw:
        written = _copy(source, port)
    else:
        written = transmit(source, port, lambda p: print(f"Progress: {p}"))
    port.flush()
    return written


def main(argv: Optional[Sequence[str]] = None) -> int:
    """Run the command; return the process exit status."""
    opt = build_parser().parse_args(argv)

    try:
        port = serial.Serial(
            opt.tty_path,
            baudrate=opt.baud_rate,
            bytesize=opt.char_width,
            stopbits=opt.stop_bits,
            xonxoff=opt.flow_control.xonxoff,
            rtscts=opt.flow_control.rtscts,
            timeout=opt.timeout,
            write_timeout=opt.timeout,
        )
    except (serial.SerialException, OSError, ValueError) as err:
        print(f"Failed to open serial port: {err}", file=sys.stderr)
        return 1

    try:
        try:
            source = open(opt.input, "rb") if opt.input else sys.stdin.buffer
        except OSError as err:
            print(f"Failed to open input file: {err}", file=sys.stderr)
            return 1
        try:
            written = _send(source, port, opt.raw)
        except IoError as err:
            print(f"XMODEM transmission failed: {err}", file=sys.stderr)
            return 1
        except (serial.SerialException, OSError) as err:
            print(f"Failed to write data: {err}", file=sys.stderr)
            return 1
        finally:
            if opt.input:
                source.close()
    finally:
        port.close()

    print(f"wrote {written} bytes")
    return 0