#!/usr/bin/env python3

"""
usage: uniq.py [-h] [-c] [IN_FILE] [OUT_FILE]

drop each line that repeats the line above it

positional arguments:
  IN_FILE      the file to read (default: stdin)
  OUT_FILE     the file to write (default: stdout)

options:
  -h, --help   show this help message and exit
  -c, --count  lead each line with how often it repeated

quirks:
  takes lines as repeats when they differ only in trailing blanks
  copies out the first of each run of repeats, with its own trailing blanks

unsurprising quirks:
  prompts for stdin, like mac bash "grep -R .", unlike bash "uniq"
  takes "-" as meaning "/dev/stdin", like linux "uniq -", unlike mac "uniq -"

examples:
  printf 'a\\na\\nb\\na\\n' |uniq.py
  printf 'a\\na\\nb\\na\\n' |uniq.py -c
  uniq.py -c in.txt out.txt
"""


import contextlib
import itertools
import os
import sys

import argdoc


def main(argv):

    args = argdoc.parse_args(argv[1:])

    in_file = args.in_file if args.in_file else "-"
    if in_file == "-":
        prompt_tty_stdin()

    readable = "/dev/stdin" if (in_file == "-") else in_file
    try:
        incoming = open(readable, mode="rb")
    except OSError as exc:
        reason = exc.strerror if exc.strerror else exc
        stderr_print("uniq.py: error: {}: {}".format(in_file, reason))
        sys.exit(1)

    with incoming:
        if not args.out_file:
            uniq_incoming(incoming, sys.stdout.buffer, count=args.count)
        else:
            try:
                with open(args.out_file, mode="wb") as outgoing:
                    uniq_incoming(incoming, outgoing, count=args.count)
            except OSError as exc:
                reason = exc.strerror if exc.strerror else exc
                stderr_print("uniq.py: error: {}: {}".format(args.out_file, reason))
                sys.exit(1)


def uniq_incoming(incoming, outgoing, count):
    """Copy out the first Line of each run of Lines, counted or not"""

    for (_, group) in itertools.groupby(incoming, key=bytes.rstrip):
        line = next(group)
        repeats = 1 + sum(1 for _ in group)

        if count:
            tag = "{:>4} ".format(repeats)
            outgoing.write(tag.encode())

        outgoing.write(line)


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
