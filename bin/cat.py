#!/usr/bin/env python3

r"""
usage: cat.py [-h] [-n | -b] [FILE ...]

copy each line of input bytes to output (as if "cat"enating them slowly)

positional arguments:
  FILE                  a file to copy out (default: stdin)

options:
  -h, --help            show this help message and exit
  -n, --number          number each line of output
  -b, --number-nonblank
                        number each nonblank line of output

quirks:
  counts up from 1 again at each next file, unlike bash "cat -n"
  does print hard b"\x09" tab after each line number, via "{:6}\t", same as bash "cat"
  doesn't add a "\n" to the last line, when the last line isn't completed by "\n"

unsurprising quirks:
  prompts for stdin, like mac bash "grep -R .", unlike bash "cat -" and "cat"
  takes "-" as meaning "/dev/stdin", like linux "cat -", unlike mac "cat -"

examples:
  cat.py -  # copy out each line of input
  cat.py -n cat.py |tail.py -3
  (echo a; echo; echo c) |cat.py -b
"""


import contextlib
import os
import sys

import argdoc


def main(argv):

    args = argdoc.parse_args(argv[1:])

    paths = args.files if args.files else ["-"]
    if "-" in paths:
        prompt_tty_stdin()

    outgoing = sys.stdout.buffer

    # Catenate each binary (or text) file

    exit_status = 0
    for path in paths:
        readable = "/dev/stdin" if (path == "-") else path
        try:
            with open(readable, mode="rb") as incoming:
                cat_incoming(incoming, outgoing, args=args)
        except BrokenPipeError:
            raise
        except OSError as exc:
            reason = exc.strerror if exc.strerror else exc
            stderr_print("cat.py: error: {}: {}".format(path, reason))
            exit_status = 1

    return exit_status


def cat_incoming(incoming, outgoing, args):
    """Copy out each Line, numbered or not"""

    line_index = 0
    for line in incoming:

        numbered = args.number
        if args.number_nonblank:
            numbered = line not in (b"\n", b"\r\n")

        if numbered:
            tag = "{:6}\t".format(1 + line_index)
            outgoing.write(tag.encode())
            line_index += 1

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
    """Cut unhandled BrokenPipeError down to sys.exit(1)

    Test with large Stdout cut sharply, such as:  cat.py big.txt |head

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
