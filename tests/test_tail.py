"""Tests for tail.py - choose where the tail starts, then copy it out."""

import io
import subprocess
import sys
from pathlib import Path

import pytest

import tail
from tail import SELECT_ALL, Count, CountParser, InvalidSelection


BIN_DIR = Path(__file__).resolve().parent.parent / "bin"

TEN_LINES = b"".join(b"line %d\n" % i for i in range(1, 11))


def run_tail(*args, input=b"", cwd=None):
    """Run bin/tail.py with the given args and stdin, and return the result."""
    return subprocess.run(
        [sys.executable, str(BIN_DIR / "tail.py")] + list(args),
        input=input,
        capture_output=True,
        cwd=cwd,
    )


@pytest.fixture
def parser():
    return CountParser()


@pytest.fixture
def ten_txt(tmp_path):
    path = tmp_path / "ten.txt"
    path.write_bytes(TEN_LINES)
    return path


class TestCountParser:
    def test_bare_count_means_last_n(self, parser):
        assert parser.parse("3") == Count(-3)

    def test_plus_count_means_start_at(self, parser):
        assert parser.parse("+3") == Count(3)

    def test_minus_count_same_as_bare(self, parser):
        assert parser.parse("-3") == Count(-3)

    def test_zero_selects_nothing(self, parser):
        assert parser.parse("0") == Count(0)
        assert parser.parse("-0") == Count(0)

    def test_plus_zero_selects_all(self, parser):
        assert parser.parse("+0") is SELECT_ALL
        assert parser.parse("+000") is SELECT_ALL

    def test_boundaries(self, parser):
        int64_max = 2 ** 63 - 1
        int64_min = -(2 ** 63)

        assert parser.parse(str(int64_max)) == Count(int64_min + 1)
        assert parser.parse(str(int64_min + 1)) == Count(int64_min + 1)
        assert parser.parse("+{}".format(int64_max)) == Count(int64_max)
        assert parser.parse(str(int64_min)) == Count(int64_min)
        assert parser.parse(str(-int64_min)) == Count(int64_min)

    @pytest.mark.parametrize(
        "token",
        [
            "9223372036854775809",
            "+9223372036854775808",
            "-9223372036854775809",
        ],
    )
    def test_out_of_range(self, parser, token):
        with pytest.raises(InvalidSelection) as excinfo:
            parser.parse(token)
        assert str(excinfo.value) == token

    @pytest.mark.parametrize(
        "token",
        ["3.14", "foo", "", "+", "-", "+-3", "--3", "3a", " 3", "3\n", "٣"],
    )
    def test_rejects_all_but_signed_digits(self, parser, token):
        with pytest.raises(InvalidSelection) as excinfo:
            parser.parse(token)
        assert str(excinfo.value) == token
        assert excinfo.value.token == token

    def test_invalid_selection_is_value_error(self, parser):
        with pytest.raises(ValueError):
            parser.parse("foo")

    def test_parse_twice_same_result(self, parser):
        for token in ["3", "+3", "-3", "0", "+0", "9223372036854775807"]:
            assert parser.parse(token) == parser.parse(token)

    def test_parsers_keep_no_state_between_tokens(self):
        assert CountParser().parse("7") == CountParser().parse("7")


class TestCountLinesBytes:
    def test_empty(self):
        assert tail.count_lines_bytes(io.BytesIO(b"")) == (0, 0)

    def test_one_line(self):
        incoming = io.BytesIO(b"The quick brown fox...\n")
        assert tail.count_lines_bytes(incoming) == (1, 23)

    def test_ten_lines(self):
        assert tail.count_lines_bytes(io.BytesIO(TEN_LINES)) == (10, len(TEN_LINES))

    def test_last_line_unterminated(self):
        assert tail.count_lines_bytes(io.BytesIO(b"a\nbc")) == (2, 4)

    def test_blank_lines(self):
        assert tail.count_lines_bytes(io.BytesIO(b"\n\n\n")) == (3, 3)


class TestResolveStartIndex:
    def test_select_all(self):
        assert tail.resolve_start_index(SELECT_ALL, 0) is None
        assert tail.resolve_start_index(SELECT_ALL, 1) == 0
        assert tail.resolve_start_index(SELECT_ALL, 10) == 0

    @pytest.mark.parametrize("total", [0, 1, 10, 2 ** 63 - 1])
    def test_zero_count_selects_nothing(self, total):
        assert tail.resolve_start_index(Count(0), total) is None

    def test_empty_input_selects_nothing(self):
        assert tail.resolve_start_index(Count(1), 0) is None
        assert tail.resolve_start_index(Count(-1), 0) is None

    def test_count_past_end_selects_nothing(self):
        assert tail.resolve_start_index(Count(2), 1) is None
        assert tail.resolve_start_index(Count(11), 10) is None

    def test_counting_up_from_start(self):
        assert tail.resolve_start_index(Count(1), 10) == 0
        assert tail.resolve_start_index(Count(2), 10) == 1
        assert tail.resolve_start_index(Count(3), 10) == 2
        assert tail.resolve_start_index(Count(10), 10) == 9

    def test_counting_down_from_end(self):
        assert tail.resolve_start_index(Count(-1), 10) == 9
        assert tail.resolve_start_index(Count(-2), 10) == 8
        assert tail.resolve_start_index(Count(-3), 10) == 7
        assert tail.resolve_start_index(Count(-10), 10) == 0

    def test_counting_down_past_start_selects_all(self):
        assert tail.resolve_start_index(Count(-20), 10) == 0
        assert tail.resolve_start_index(Count(-(2 ** 63)), 10) == 0

    def test_extremes(self):
        int64_max = 2 ** 63 - 1
        assert tail.resolve_start_index(Count(int64_max), int64_max) == int64_max - 1
        assert tail.resolve_start_index(Count(-(2 ** 63)), int64_max) == 0


class TestStreams:
    def test_lines_from_start_index(self):
        outgoing = io.BytesIO()
        tail.stream_lines(io.BytesIO(TEN_LINES), outgoing, start=7)
        assert outgoing.getvalue() == b"line 8\nline 9\nline 10\n"

    def test_lines_none_reads_nothing(self):
        incoming = io.BytesIO(TEN_LINES)
        outgoing = io.BytesIO()
        tail.stream_lines(incoming, outgoing, start=None)
        assert incoming.tell() == 0
        assert outgoing.getvalue() == b""

    def test_lines_keep_last_partial_line(self):
        outgoing = io.BytesIO()
        tail.stream_lines(io.BytesIO(b"a\nb\nc"), outgoing, start=1)
        assert outgoing.getvalue() == b"b\nc"

    def test_bytes_from_start_index(self):
        outgoing = io.BytesIO()
        tail.stream_bytes(io.BytesIO(TEN_LINES), outgoing, start=len(TEN_LINES) - 5)
        assert outgoing.getvalue() == b"e 10\n"

    def test_bytes_none_seeks_nothing(self):
        incoming = io.BytesIO(TEN_LINES)
        incoming.read(3)
        outgoing = io.BytesIO()
        tail.stream_bytes(incoming, outgoing, start=None)
        assert incoming.tell() == 3
        assert outgoing.getvalue() == b""


class TestTailIncoming:
    def tail_of(self, data, selection, mode):
        outgoing = io.BytesIO()
        tail.tail_incoming(io.BytesIO(data), outgoing, selection=selection, mode=mode)
        return outgoing.getvalue()

    def test_last_three_lines(self):
        got = self.tail_of(TEN_LINES, Count(-3), mode="lines")
        assert got == b"line 8\nline 9\nline 10\n"

    def test_plus_zero_lines(self):
        assert self.tail_of(TEN_LINES, SELECT_ALL, mode="lines") == TEN_LINES

    def test_from_third_line(self):
        got = self.tail_of(TEN_LINES, Count(3), mode="lines")
        assert got == TEN_LINES[len(b"line 1\nline 2\n") :]

    def test_last_five_bytes(self):
        got = self.tail_of(TEN_LINES, Count(-5), mode="bytes")
        assert got == TEN_LINES[-5:]

    def test_from_second_byte(self):
        assert self.tail_of(b"abcdef", Count(2), mode="bytes") == b"bcdef"

    def test_bytes_split_encoded_char(self):
        data = "café\n".encode()  # b"caf\xc3\xa9\n"
        assert self.tail_of(data, Count(-2), mode="bytes") == b"\xa9\n"

    def test_empty_input(self):
        assert self.tail_of(b"", SELECT_ALL, mode="lines") == b""
        assert self.tail_of(b"", Count(-3), mode="bytes") == b""

    def test_count_past_end(self):
        assert self.tail_of(TEN_LINES, Count(11), mode="lines") == b""


class TestArgvShorthand:
    def test_leading_count(self):
        assert tail.argv_expand_count_shorthand(["-5", "a"]) == ["-n", "-5", "a"]
        assert tail.argv_expand_count_shorthand(["+9"]) == ["-n", "+9"]

    def test_no_leading_count(self):
        assert tail.argv_expand_count_shorthand(["a", "-5"]) == ["a", "-5"]
        assert tail.argv_expand_count_shorthand(["-q"]) == ["-q"]
        assert tail.argv_expand_count_shorthand([]) == []


class TestTailCommand:
    def test_default_ten_lines(self, tmp_path):
        path = tmp_path / "twenty.txt"
        path.write_bytes(b"".join(b"%d\n" % i for i in range(1, 21)))

        result = run_tail(str(path))
        assert result.returncode == 0
        assert result.stdout == b"".join(b"%d\n" % i for i in range(11, 21))

    def test_lines_option(self, ten_txt):
        result = run_tail("-n", "3", str(ten_txt))
        assert result.stdout == b"line 8\nline 9\nline 10\n"

        result = run_tail("--lines", "-3", str(ten_txt))
        assert result.stdout == b"line 8\nline 9\nline 10\n"

    def test_lines_plus(self, ten_txt):
        result = run_tail("-n", "+9", str(ten_txt))
        assert result.stdout == b"line 9\nline 10\n"

    def test_plus_zero(self, ten_txt):
        result = run_tail("-n", "+0", str(ten_txt))
        assert result.stdout == TEN_LINES

    def test_shorthand(self, ten_txt):
        result = run_tail("-2", str(ten_txt))
        assert result.returncode == 0
        assert result.stdout == b"line 9\nline 10\n"

    def test_bytes_option(self, ten_txt):
        result = run_tail("-c", "5", str(ten_txt))
        assert result.returncode == 0
        assert result.stdout == TEN_LINES[-5:]

    def test_stdin(self):
        result = run_tail("-n", "2", input=TEN_LINES)
        assert result.returncode == 0
        assert result.stdout == b"line 9\nline 10\n"

        result = run_tail("-c", "+4", "-", input=b"abcdef")
        assert result.stdout == b"def"

    def test_illegal_line_count(self, ten_txt):
        result = run_tail("-n", "foo", str(ten_txt))
        assert result.returncode == 1
        assert result.stdout == b""
        assert b"illegal line count -- foo" in result.stderr

    def test_illegal_byte_count(self, ten_txt):
        result = run_tail("-c", "3.14", str(ten_txt))
        assert result.returncode == 1
        assert b"illegal byte count -- 3.14" in result.stderr

    def test_lines_conflict_with_bytes(self, ten_txt):
        result = run_tail("-n", "1", "-c", "1", str(ten_txt))
        assert result.returncode == 2
        assert b"not allowed with" in result.stderr

    def test_headers(self, tmp_path, ten_txt):
        one_txt = tmp_path / "one.txt"
        one_txt.write_bytes(b"one\n")

        result = run_tail("-n", "1", "ten.txt", "one.txt", cwd=tmp_path)
        assert result.returncode == 0
        assert result.stdout == b"==> ten.txt <==\nline 10\n\n==> one.txt <==\none\n"

    def test_quiet(self, tmp_path, ten_txt):
        one_txt = tmp_path / "one.txt"
        one_txt.write_bytes(b"one\n")

        result = run_tail("-q", "-n", "1", "ten.txt", "one.txt", cwd=tmp_path)
        assert result.stdout == b"line 10\none\n"

    def test_missing_file_doesnt_stop_the_rest(self, tmp_path, ten_txt):
        result = run_tail("-n", "1", "missing.txt", "ten.txt", cwd=tmp_path)
        assert result.returncode == 1
        assert b"tail.py: error: missing.txt: " in result.stderr
        assert result.stdout == b"==> ten.txt <==\nline 10\n"

    def test_help(self):
        result = run_tail("--help")
        assert result.returncode == 0
        assert result.stdout.startswith(b"usage: tail.py")
        assert b"-n COUNT, --lines COUNT" in result.stdout
        assert b"quirks:" in result.stdout
