#!/usr/bin/env python3

r"""
usage: echo.py [-h] [-n] [WORD ...]

print some words

positional arguments:
  WORD        a word to print

options:
  -h, --help  show this help message and exit
  -n          print just the words, don't add an end-of-line

quirks:
  understand "-n" like bash or zsh echo, unlike sh echo
  doesn't understand "-e" backslash escapes, like sh echo, unlike bash echo -e

examples:
  echo.py 'Hello, Echo World!'
  echo.py -n 'Hello' |wc.py -c
"""


import sys

import argdoc


def main(argv):

    args = argdoc.parse_args(argv[1:])

    line = " ".join(args.words)
    end = "" if args.n else "\n"

    sys.stdout.write(line + end)


if __name__ == "__main__":
    main(sys.argv)


# copied from:  git clone https://github.com/pelavarre/pybashish.git
