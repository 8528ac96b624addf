#!/usr/bin/env python3

"""
usage: tail.py [-h] [-q] [-n COUNT | -c COUNT] [FILE ...]

show just the trailing lines (or bytes) of a file

positional arguments:
  FILE                  a file to copy the tail of (default: stdin)

options:
  -h, --help            show this help message and exit
  -q, --quiet           never print headers giving file names
  -n COUNT, --lines COUNT
                        how many trailing lines to show (default: 10)
  -c COUNT, --bytes COUNT
                        how many trailing bytes to show

quirks:
  takes a count led by "+" as the 1-based line (or byte) to start at
  takes "+0" as meaning everything, and "0" or "-0" as meaning nothing
  takes a count not led by "+" or "-" as led by "-", so "3" means the last 3
  takes "-5" or "+9" and such, like mac "tail", unlike linux "tail -n"
  counts all the lines and bytes of each file first, then reads it again
  copies stdin to a temporary file first, so as to read it twice
  copies out the bytes picked, even when that splits an encoded char

unsurprising quirks:
  prompts for stdin, like mac bash "grep -R .", unlike bash "tail"
  takes "-" as meaning "/dev/stdin", like linux "tail -", unlike mac "tail -"

examples:
  tail.py /dev/null
  tail.py tail.py
  tail.py -5 tail.py
  tail.py -n 5 tail.py
  tail.py -n +40 tail.py  # drop the leading 39 lines
  tail.py -c 8 tail.py
  python3 -c 'import this' |tail.py -n 3 |cat.py -n
"""


import collections
import contextlib
import os
import re
import shutil
import sys
import tempfile

import argdoc


INT64_MIN = -(2 ** 63)
INT64_MAX = 2 ** 63 - 1


def main(argv):

    parser = argdoc.ArgumentParser()
    args = parser.parse_args(argv_expand_count_shorthand(argv[1:]))

    # Parse the Count before opening any File

    if args.bytes is not None:
        (mode, token, what) = ("bytes", args.bytes, "byte count")
    else:
        token = "10" if (args.lines is None) else args.lines
        (mode, what) = ("lines", "line count")

    count_parser = CountParser()
    try:
        selection = count_parser.parse(token)
    except InvalidSelection as exc:
        stderr_print("tail.py: error: illegal {} -- {}".format(what, exc))
        sys.exit(1)

    # Copy out the Tail of each File, one at a time

    paths = args.files if args.files else ["-"]
    if "-" in paths:
        prompt_tty_stdin()

    outgoing = sys.stdout.buffer

    exit_status = 0
    headers = 0
    for path in paths:
        try:
            with open_seekable(path) as incoming:
                if (len(paths) > 1) and not args.quiet:
                    tail_header(outgoing, path=path, index=headers)
                    headers += 1
                tail_incoming(incoming, outgoing, selection=selection, mode=mode)
        except BrokenPipeError:
            raise
        except OSError as exc:
            reason = exc.strerror if exc.strerror else exc
            stderr_print("tail.py: error: {}: {}".format(path, reason))
            exit_status = 1

    return exit_status


def argv_expand_count_shorthand(args):
    """Take a leading "-5" or "+9" as short for "-n -5" or "-n +9" """

    if args and re.fullmatch(r"[+-][0-9]+", string=args[0]):

        return ["-n", args[0]] + args[1:]

    return list(args)


def tail_header(outgoing, path, index):
    """Name the File, ahead of its Tail, when copying out the Tails of more Files"""

    name = "standard input" if (path == "-") else path
    header = "{}==> {} <==\n".format("\n" if index else "", name)

    outgoing.write(header.encode())


def open_seekable(path):
    """Open a File to read twice, else copy it into a Temporary File first"""

    readable = "/dev/stdin" if (path == "-") else path

    incoming = open(readable, mode="rb")
    if incoming.seekable():

        return incoming

    with incoming:
        spool = tempfile.TemporaryFile()
        try:
            shutil.copyfileobj(incoming, spool)
            spool.seek(0)
        except BaseException:
            spool.close()
            raise

    return spool


#
# Choose where to start, then copy out the rest
#


Count = collections.namedtuple("Count", "n")


class SelectAll:
    """Select every line or byte, as asked for by the Count "+0" """

    def __repr__(self):
        return "SelectAll()"


SELECT_ALL = SelectAll()


class InvalidSelection(ValueError):
    """Reject a Count Token, and say the Token exactly as it came"""

    def __init__(self, token):
        super().__init__(token)
        self.token = token

    def __str__(self):
        return str(self.token)


class CountParser:
    """Parse Count Tokens such as "3", "-3", "+3", and "+0"

    Compile the Regex once, then reuse it for every Token parsed
    """

    def __init__(self):
        self.regex = re.compile(r"([+-])?([0-9]+)")

    def parse(self, token):
        """Return SELECT_ALL for "+0", else a signed Count, else raise InvalidSelection"""

        match = self.regex.fullmatch(token)
        if not match:
            raise InvalidSelection(token)

        # Take no sign as the "-" sign, so "3" means the last 3

        sign = match.group(1) if match.group(1) else "-"
        digits = match.group(2)

        n = int(sign + digits)
        if not (INT64_MIN <= n <= INT64_MAX):
            raise InvalidSelection(token)

        if (sign == "+") and (n == 0):

            return SELECT_ALL

        return Count(n)


def count_lines_bytes(incoming):
    """Read every line once, to count the lines and bytes, including a last partial line"""

    total_lines = 0
    total_bytes = 0
    for line in incoming:
        total_lines += 1
        total_bytes += len(line)

    return (total_lines, total_bytes)


def resolve_start_index(selection, total):
    """Return the 0-based index of the first line or byte to copy out, else None"""

    if isinstance(selection, SelectAll):
        start = 0 if (total > 0) else None

        return start

    n = selection.n
    if (n == 0) or (total == 0) or (n > total):

        return None

    if n > 0:

        return n - 1  # count up from the start, from 1

    start = max(0, total + n)  # count down from the end

    return start


def stream_lines(incoming, outgoing, start):
    """Copy out each line at or past the Start Index, read in order, one at a time"""

    if start is None:

        return

    for (index, line) in enumerate(incoming):
        if index >= start:
            outgoing.write(line)


def stream_bytes(incoming, outgoing, start):
    """Seek to the Start Index, then copy out all the rest of the bytes at once"""

    if start is None:

        return

    incoming.seek(start)
    outgoing.write(incoming.read())


def tail_incoming(incoming, outgoing, selection, mode):
    """Count the Lines and Bytes, then rewind and copy out the Tail of Lines or Bytes"""

    (total_lines, total_bytes) = count_lines_bytes(incoming)
    incoming.seek(0)

    if mode == "bytes":
        start = resolve_start_index(selection, total=total_bytes)
        stream_bytes(incoming, outgoing, start=start)
    else:
        assert mode == "lines", repr(mode)
        start = resolve_start_index(selection, total=total_lines)
        stream_lines(incoming, outgoing, start=start)


#
# Git-track some Python idioms here
#


# deffed in many files  # missing from docs.python.org
def prompt_tty_stdin():
    if sys.stdin.isatty():
        stderr_print("Press ⌃D EOF to quit")


# deffed in many files  # missing from docs.python.org
def stderr_print(*args, **kwargs):
    sys.stdout.flush()
    print(*args, **kwargs, file=sys.stderr)
    sys.stderr.flush()  # esp. when kwargs["end"] != "\n"


# deffed in many files  # missing from docs.python.org
class BrokenPipeErrorSink(contextlib.ContextDecorator):
    """Cut unhandled BrokenPipeError down to sys.exit(1)

    Test with large Stdout cut sharply, such as:  tail.py -n +0 big.txt |head

    More narrowly than:  signal.signal(signal.SIGPIPE, handler=signal.SIG_DFL)
    As per https://docs.python.org/3/library/signal.html#note-on-sigpipe
    """

    def __enter__(self):
        return self

    def __exit__(self, *exc_info):
        (exc_type, exc, exc_traceback) = exc_info
        if isinstance(exc, BrokenPipeError):  # catch this one

            null_fileno = os.open(os.devnull, flags=os.O_WRONLY)
            os.dup2(null_fileno, sys.stdout.fileno())  # avoid the next one

            sys.exit(1)


if __name__ == "__main__":
    with BrokenPipeErrorSink():
        sys.exit(main(sys.argv))


# copied from:  git clone https://github.com/pelavarre/pybashish.git
