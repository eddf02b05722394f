# ttyxfer

Send a file to a device over a serial line using the XMODEM protocol
(128-byte packets, 8-bit checksum), or copy it across raw. The package
also holds a few small building blocks: a bounded vector, a spinning
mutex, a console with a tiny line-editing shell, an OS byte-string type,
and register wrappers for GPIO and the system timer that work on
in-memory register blocks.

## Installing

    pip install .

To run the tests:

    pip install ".[test]"
    pytest

## Sending a file

    ttywrite -i kernel.bin /dev/ttyUSB0

With no `-i`, the data is read from standard input. Options:

| Option | Meaning | Default |
| --- | --- | --- |
| `-i FILE` | input file | stdin |
| `-b`, `--baud` | baud rate (unsigned integer) | `115200` |
| `-t`, `--timeout` | read and write timeout in seconds | `10` |
| `-w`, `--width` | character width in bits, `5` to `8` | `8` |
| `-f`, `--flow-control` | `none`, `software` (XON/XOFF) or `hardware` (RTS/CTS) | `none` |
| `-s`, `--stop-bits` | `1` or `2` | `1` |
| `-r`, `--raw` | send the bytes as they are, without XMODEM | off |

In XMODEM mode each progress event is printed as `Progress: ...`. At the
end `wrote N bytes` is printed and the command exits with status 0; if
the port or input file cannot be opened, or the transfer fails, a
message goes to standard error and the status is 1.

The same command is available from Python as `ttyxfer.ttywrite.main(argv)`,
and its argument parser as `ttyxfer.ttywrite.build_parser()`. The option
parsers live in `ttyxfer.parsers` (`parse_width`, `parse_stop_bits`,
`parse_flow_control`, `parse_baud_rate`); each raises `ValueError` on bad
input.

## Using XMODEM from Python

`ttyxfer.xmodem` works on any binary stream with `read`, `write` and
`flush`:

```python
import io
from ttyxfer.xmodem import transmit, receive
from ttyxfer.progress import noop

written = transmit(io.BytesIO(b"hello"), port, noop)
```

`transmit(data, to, progress)` accepts a stream or a bytes object,
pads the last packet with zeros and returns the number of data bytes
sent. `receive(source, into, progress)` is the other side: it writes
each full 128-byte packet to `into` and returns the number of bytes
received (a multiple of 128). Both retry a packet up to ten times on a
checksum failure.

The `Xmodem` class gives packet-level access: `read_packet(buf)`,
`write_packet(buf)`, `read_byte`, `write_byte`, `expect_byte`,
`expect_byte_or_cancel` and `flush`. `get_checksum(buf)` and
`read_max(stream, size)` are exposed as well.

Errors are raised as `ttyxfer.ioerrors.IoError`, whose `kind` is an
`ErrorKind` (for example `CONNECTION_ABORTED` when CAN is received, or
`BROKEN_PIPE` after too many retries). Progress callbacks receive
`ttyxfer.progress.Progress` events built with `Progress.waiting()`,
`Progress.started()` and `Progress.packet(number)`.

## Other pieces

- `ttyxfer.stack_vec.StackVec`: a list over caller-supplied storage;
  `push` raises `StackVecFull` once the storage is used up, and `pop`
  returns `None` when empty.
- `ttyxfer.ioerrors`: `const_assert`, `const_assert_eq` and
  `const_assert_size` (size of a `struct` format), raising
  `ConstAssertionError`.
- `ttyxfer.mutex.Mutex`: a lock the owning thread may take again;
  `lock()` and `try_lock()` return a `MutexGuard` that is a context
  manager and exposes the protected `value`.
- `ttyxfer.console.Console`: byte-level read/write over a device
  (standard input and output by default); `write_str` sends `\r`
  before every `\n`. `kprint` and `kprintln` write to a console or to
  the shared `CONSOLE`.
- `ttyxfer.shell`: `Command.parse` splits a line on spaces into a
  bounded number of arguments (`EmptyCommandError`,
  `TooManyArgsError`); `shell(prefix, console)` runs a prompt that
  knows `echo` and `exit` and stops at `exit` or end of input.
- `ttyxfer.volatile`: `ReadVolatile`, `WriteVolatile`, `Volatile`,
  `Reserved` and `Unique` wrap one value in a writable buffer and allow
  only the matching reads and writes.
- `ttyxfer.gpio.Gpio`: configure a pin (0 to 53) with `into_input`,
  `into_output` or `into_alt(Function...)`, then `set`/`clear` or read
  `level`. `register_block()` returns zeroed register memory.
- `ttyxfer.timer.Timer`: reads the 64-bit microsecond counter as a
  `timedelta`; with no memory given it follows the host's monotonic
  clock. `current_time` and `spin_sleep` build on it.
- `ttyxfer.common`: `IO_BASE`, `CLOCK_HZ` and `peripheral_address`.
- `ttyxfer.os_bytes.OsBuf`: a byte string that need not be UTF-8, with
  `to_str`, `into_string`, `to_string_lossy` and a quoted `repr` that
  shows invalid bytes as `\xHH`.

## What it does not do

- `ttywrite` only sends. There is no command for receiving a file;
  use `ttyxfer.xmodem.receive` from Python for that.
- The GPIO and timer classes operate on register memory you pass in
  (a `bytearray` or similar). They do not map or touch physical
  hardware, and there is no UART driver: the console talks to whatever
  device its factory returns.