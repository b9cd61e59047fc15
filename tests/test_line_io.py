import collections

import pytest

from tigerkernel.console import Console
from tigerkernel.line_io import LINE_BUFFER_SIZE, LineReader


class FeedInput:
    """Byte source that can be topped up between reads."""

    def __init__(self, data=b""):
        self._bytes = collections.deque(data)

    def feed(self, data):
        self._bytes.extend(data)

    def read(self, n):
        out = bytearray()
        while self._bytes and len(out) < n:
            out.append(self._bytes.popleft())
        return bytes(out)


class Output:
    def __init__(self):
        self.data = bytearray()

    def write(self, data):
        self.data.extend(data)

    def text(self):
        return self.data.decode("latin-1").replace("\r\n", "\n")


def make_reader(data=b""):
    source = FeedInput(data)
    out = Output()
    return LineReader(Console(output=out, input=source)), source, out


def test_reads_line_and_echoes():
    reader, _, out = make_reader(b"echo hi\r\n")
    assert reader.readline() == "echo hi"
    assert out.text() == "echo hi\n"


def test_crlf_counts_as_one_line_end():
    reader, _, _ = make_reader(b"a\r\nb\n")
    assert reader.readline() == "a"
    assert reader.readline() == "b"


def test_bare_lf_after_lf_gives_empty_line():
    reader, _, _ = make_reader(b"a\n\n")
    assert reader.readline() == "a"
    assert reader.readline() == ""


def test_backspace_removes_last_character():
    reader, _, out = make_reader(b"ab\x7fc\n")
    assert reader.readline() == "ac"
    assert "\b \b" in out.text()


def test_backspace_on_empty_line_writes_nothing():
    reader, _, out = make_reader(b"\x08\n")
    assert reader.readline() == ""
    assert "\b" not in out.text()


def test_non_printable_bytes_are_dropped():
    reader, _, _ = make_reader(b"a\x01b\n")
    assert reader.readline() == "ab"


def test_max_len_truncates_result():
    reader, _, _ = make_reader(b"abcdefghij\n")
    assert reader.readline(max_len=4) == "abcd"


def test_line_buffer_limit():
    reader, _, _ = make_reader(b"x" * 300 + b"\n")
    line = reader.readline()
    assert len(line) == LINE_BUFFER_SIZE - 1


def test_negative_max_len_rejected():
    reader, _, _ = make_reader(b"a\n")
    with pytest.raises(ValueError):
        reader.readline(max_len=-1)


def test_nonblocking_keeps_partial_line():
    reader, source, _ = make_reader(b"ec")
    assert reader.readline(blocking=False) is None
    assert reader.pending == "ec"
    source.feed(b"ho\r")
    assert reader.readline(blocking=False) == "echo"


def test_skip_lf_survives_between_calls():
    reader, source, _ = make_reader(b"one\r")
    assert reader.readline(blocking=False) == "one"
    source.feed(b"\ntwo\n")
    assert reader.readline(blocking=False) == "two"


def test_blocking_read_at_end_of_input_raises():
    reader, _, _ = make_reader(b"")
    with pytest.raises(EOFError):
        reader.readline()


def test_write_goes_to_console():
    reader, _, out = make_reader()
    reader.write("shell> ")
    assert out.text() == "shell> "