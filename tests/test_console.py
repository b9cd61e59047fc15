import io

import pytest

from tigerkernel.console import Console


def make_console(data=b""):
    out = io.BytesIO()
    return Console(out, io.BytesIO(data)), out


def test_putc_newline_becomes_crlf():
    console, out = make_console()
    console.putc("\n")
    assert out.getvalue() == b"\r\n"


def test_write_translates_each_newline():
    console, out = make_console()
    console.write("ab\nc\n")
    assert out.getvalue() == b"ab\r\nc\r\n"


def test_plain_text_is_unchanged():
    console, out = make_console()
    console.write("BOOT: kernel entry")
    assert out.getvalue() == b"BOOT: kernel entry"


def test_nonblocking_read_returns_bytes_then_none():
    console, _ = make_console(b"hi")
    assert console.getc_nonblocking() == ord("h")
    assert console.getc_nonblocking() == ord("i")
    assert console.getc_nonblocking() is None


def test_blocking_read_raises_at_end():
    console, _ = make_console(b"x")
    assert console.getc_blocking() == ord("x")
    with pytest.raises(EOFError):
        console.getc_blocking()