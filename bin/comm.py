#!/usr/bin/env python3

"""
usage: comm.py [-h] [-1] [-2] [-3] [-i] [-d DELIM] FILE1 FILE2

show the lines found in one sorted file, or the other, or in both

positional arguments:
  FILE1                 a sorted file to compare
  FILE2                 another sorted file to compare

options:
  -h, --help            show this help message and exit
  -1                    don't show column 1, the lines found only in FILE1
  -2                    don't show column 2, the lines found only in FILE2
  -3                    don't show column 3, the lines found in both files
  -i                    compare lines ignoring the upper/lower case of ascii letters
  -d DELIM, --output-delimiter DELIM
                        separate the columns with DELIM (default: tab)

quirks:
  shows the line from FILE1 in column 3, when comparing with -i
  adds the missing "\\n" to a last line that ends without one

unsurprising quirks:
  takes "-" as meaning "/dev/stdin", but only for one of FILE1 or FILE2

examples:
  comm.py a.txt b.txt
  comm.py -12 a.txt b.txt  # show just the lines found in both
  comm.py -3 -d : a.txt b.txt
"""


import contextlib
import os
import sys

import argdoc


def main(argv):

    args = argdoc.parse_args(argv[1:])
    flags = vars(args)

    if (args.file1 == "-") and (args.file2 == "-"):
        stderr_print('comm.py: error: Both input files cannot be STDIN ("-")')
        sys.exit(1)

    shows = (not flags["1"], not flags["2"], not flags["3"])

    delim = "\t" if (args.output_delimiter is None) else args.output_delimiter
    insensitive = bool(args.i)

    # Open both Files, or neither

    if "-" in (args.file1, args.file2):
        prompt_tty_stdin()

    with contextlib.ExitStack() as stack:
        incomings = list()
        for path in (args.file1, args.file2):
            readable = "/dev/stdin" if (path == "-") else path
            try:
                incoming = stack.enter_context(open(readable, mode="rb"))
            except OSError as exc:
                reason = exc.strerror if exc.strerror else exc
                stderr_print("comm.py: error: {}: {}".format(path, reason))
                sys.exit(1)

            incomings.append(incoming)

        outgoing = sys.stdout.buffer
        for (column, line) in comm_columns(*incomings, insensitive=insensitive):
            if shows[column]:
                dents = sum(shows[:column])
                outgoing.write(delim.encode() * dents + line + b"\n")


def comm_columns(incoming1, incoming2, insensitive):
    """Yield (0, line) when only in File1, (1, line) when only in File2, else (2, line)"""

    def read_line(incoming):
        line = incoming.readline()
        if not line:

            return None

        return line.rstrip(b"\n").rstrip(b"\r")

    def key(line):
        return line.lower() if insensitive else line

    line1 = read_line(incoming1)
    line2 = read_line(incoming2)

    while (line1 is not None) or (line2 is not None):

        if line2 is None:
            yield (0, line1)
            line1 = read_line(incoming1)
        elif line1 is None:
            yield (1, line2)
            line2 = read_line(incoming2)
        elif key(line1) < key(line2):
            yield (0, line1)
            line1 = read_line(incoming1)
        elif key(line2) < key(line1):
            yield (1, line2)
            line2 = read_line(incoming2)
        else:
            yield (2, line1)
            line1 = read_line(incoming1)
            line2 = read_line(incoming2)


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
    """Cut unhandled BrokenPipeError down to sys.exit(1)"""

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
