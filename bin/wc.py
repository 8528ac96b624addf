#!/usr/bin/env python3

"""
usage: wc.py [-h] [-l] [-w] [-m] [-c] [FILE ...]

count lines and words and characters and bytes

positional arguments:
  FILE           a file to examine (default: stdin)

options:
  -h, --help     show this help message and exit
  -l, --lines    count lines
  -w, --words    count words
  -m, --chars    count characters
  -c, --bytes    count bytes

quirks:
  acts like 'wc -lwc' if called without options, same as Bash 'wc'
  counts characters as decoded from utf-8, counting each undecodable byte as one

unsurprising quirks:
  prompts Tty Stdin, like Mac 'grep -R .', unlike Bash 'wc'
  takes '-' as meaning '/dev/stdin', like Linux 'wc -', unlike Mac 'wc -'
  takes '--help' as an option, like Linux 'wc --help', unlike Mac 'wc --help'

examples:
  wc.py wc.py
  wc.py -l wc.py tail.py
  echo 'Hello, Wc World!' |wc.py -m
"""


import collections
import contextlib
import os
import sys

import argdoc


WcCounts = collections.namedtuple("WcCounts", "lines words chars bytes".split())


def main(argv):

    args = argdoc.parse_args(argv[1:])

    if not (args.lines or args.words or args.chars or args.bytes):
        args.lines = 1
        args.words = 1
        args.bytes = 1

    paths = args.files if args.files else ["-"]
    if "-" in paths:
        prompt_tty_stdin()

    # Count each File, and sum up the Counts

    exit_status = 0
    totals = WcCounts(lines=0, words=0, chars=0, bytes=0)
    for path in paths:
        readable = "/dev/stdin" if (path == "-") else path
        try:
            with open(readable, mode="rb") as incoming:
                counts = wc_incoming(incoming)
        except OSError as exc:
            reason = exc.strerror if exc.strerror else exc
            stderr_print("wc.py: error: {}: {}".format(path, reason))
            exit_status = 1

            continue

        totals = WcCounts(*(a + b for (a, b) in zip(totals, counts)))

        name = None if (path == "-") else path
        print(format_wc_counts(counts, args=args, name=name))

    if len(paths) > 1:
        print(format_wc_counts(totals, args=args, name="total"))

    return exit_status


def wc_incoming(incoming):
    """Count the Lines, Words, Chars, and Bytes of a Binary File"""

    lines = 0
    words = 0
    chars = 0
    bytes_ = 0

    for line in incoming:
        lines += line.count(b"\n")
        words += len(line.split())
        chars += len(line.decode("utf-8", errors="replace"))
        bytes_ += len(line)

    counts = WcCounts(lines=lines, words=words, chars=chars, bytes=bytes_)

    return counts


def format_wc_counts(counts, args, name):
    """Format the Counts asked for, in order, eight columns each, then the Name"""

    chars = ""
    for field in WcCounts._fields:
        if getattr(args, field):
            chars += "{:>8}".format(getattr(counts, field))

    if name is not None:
        chars += " {}".format(name)

    return chars


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
