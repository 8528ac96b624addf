#!/usr/bin/env python3

"""
usage: head.py [-h] [-n COUNT | -c COUNT] [FILE ...]

show just the leading lines (or bytes) of a file

positional arguments:
  FILE                  a file to copy the head of (default: stdin)

options:
  -h, --help            show this help message and exit
  -n COUNT, --lines COUNT
                        how many leading lines to show (default: 10)
  -c COUNT, --bytes COUNT
                        how many leading bytes to show

quirks:
  rejects a count of zero, and rejects a count led by "+" or "-"
  copies out the bytes picked, even when that splits an encoded char

unsurprising quirks:
  prompts for stdin, like mac bash "grep -R .", unlike bash "head"
  takes file "-" as meaning "/dev/stdin", like linux "head -", unlike mac "head -"

examples:
  head.py /dev/null
  head.py head.py
  head.py -n 5 head.py
  head.py -c 8 head.py
"""


import contextlib
import itertools
import os
import sys

import argdoc


def main(argv):

    parser = argdoc.ArgumentParser()
    args = parser.parse_args(argv[1:])

    if args.bytes is not None:
        (mode, token, what) = ("bytes", args.bytes, "byte count")
    else:
        token = "10" if (args.lines is None) else args.lines
        (mode, what) = ("lines", "line count")

    try:
        count = parse_positive_int(token)
    except ValueError:
        stderr_print("head.py: error: illegal {} -- {}".format(what, token))
        sys.exit(1)

    # Copy out the Head of each File

    paths = args.files if args.files else ["-"]
    if "-" in paths:
        prompt_tty_stdin()

    outgoing = sys.stdout.buffer

    exit_status = 0
    headers = 0
    for path in paths:
        readable = "/dev/stdin" if (path == "-") else path
        try:
            with open(readable, mode="rb") as incoming:
                if len(paths) > 1:
                    name = "standard input" if (path == "-") else path
                    header = "{}==> {} <==\n".format("\n" if headers else "", name)
                    outgoing.write(header.encode())
                    headers += 1

                if mode == "bytes":
                    outgoing.write(incoming.read(count))
                else:
                    for line in itertools.islice(incoming, count):
                        outgoing.write(line)

        except BrokenPipeError:
            raise
        except OSError as exc:
            reason = exc.strerror if exc.strerror else exc
            stderr_print("head.py: error: {}: {}".format(path, reason))
            exit_status = 1

    return exit_status


def parse_positive_int(token):
    """Take decimal digits for a count of 1 or more, else raise ValueError"""

    if not (token.isascii() and token.isdigit()):
        raise ValueError(token)

    count = int(token)
    if count <= 0:
        raise ValueError(token)

    return count


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
