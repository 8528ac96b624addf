#!/usr/bin/env python3
# -*- coding: utf-8 -*-

"""
usage: argdoc.py [-h] FILE [WORD ...]

parse command line args as per a top-of-file docstring of help lines

positional arguments:
  FILE        some python file begun by a docstring (often your main py file)
  WORD        an arg to parse for the file

options:
  -h, --help  show this help message and exit

quirks:
  plural args go to an english plural key, such as '[FILE ...]' to '.files'
  options listed as '[-a | -b]' in the usage line exclude each other
  you lose your '-h' and '--help' options if you drop them from your 'options:'

examples:
  argdoc.py bin/tail.py --                  # parse no args for the file
  argdoc.py bin/tail.py -- -n +3 a.txt      # parse:  -n +3 a.txt
  argdoc.py bin/comm.py -- -12 a.txt b.txt  # parse:  -12 a.txt b.txt
"""


import argparse
import ast
import inspect
import json
import re
import sys


def main(argv):
    """Run an Arg Doc Py command line"""

    run_self_tests()

    args = parse_args(argv[1:])

    words = list(args.words)
    if words[:1] == ["--"]:
        words = words[1:]

    try:
        doc = eval_doc_from_path(args.file)
    except OSError as exc:
        stderr_print("argdoc.py: error: {}: {}".format(args.file, exc.strerror))
        sys.exit(1)

    if doc is None:
        stderr_print("argdoc.py: error: no docstring at top of:  {}".format(args.file))
        sys.exit(1)

    parser = ArgumentParser(doc=doc)
    file_args = parser.parse_args(words)

    print(json.dumps(vars(file_args), indent=2, sort_keys=True))


def run_self_tests():
    """Run some Self Tests, as part of every Launch"""

    _plural_en_test()
    _textwrap_split_paras_test()
    _textwrap_para_unbreakdent_lines_test()


def eval_doc_from_path(path):
    """Pick the DocString out of the top of a Python File"""

    with open(path) as incoming:
        pychars = incoming.read()

    module = ast.parse(pychars)
    doc = ast.get_docstring(module, clean=False)

    return doc


#
# Work with an ArgumentParser compiled from the DocString of the Calling Module
#


def parse_args(args=None, namespace=None, doc=None):
    """
    Call 'argparse.parse_arg' on a Parser of the calling Module's DocString

    However, work instead from the given Doc, if any
    """

    alt_argv = sys.argv[1:] if (args is None) else args

    f = inspect.currentframe()
    alt_doc = module_find_doc(doc=doc, f=f)
    parser = ArgumentParser(doc=alt_doc)

    alt_namespace = parser.parse_args(alt_argv, namespace=namespace)

    return alt_namespace


def module_find_doc(doc, f):
    """Take the Doc as given, else pick the Doc out of the Calling Module"""

    if doc is not None:

        return doc

    module = inspect.getmodule(f.f_back)
    module_doc = module.__doc__

    return module_doc


class ArgumentParser(argparse.ArgumentParser):
    """Form an ArgumentParser with Args and Options and Epilog, from a Doc"""

    def __init__(self, doc=None):

        f = inspect.currentframe()
        alt_doc = module_find_doc(doc=doc, f=f)

        paras = textwrap_split_paras(alt_doc)
        if not paras[1:]:
            paras = textwrap_split_paras("usage: prog\n\ndesc")

        # Pick the Prog out of the Usage, and the Description out of the 2nd Para

        usage = " ".join(_.strip() for _ in paras[0])
        assert usage.startswith("usage: "), repr(usage)

        usage_words = usage.split()
        prog = usage_words[1] if usage_words[1:] else "prog"

        description = " ".join(_.strip() for _ in paras[1])

        # Take up all the rest of the Doc as the Epilog

        epilog = None
        epi = parser_epi_from_paras(paras)
        if epi:
            epilog_at = alt_doc.index(epi)
            epilog = alt_doc[epilog_at:].rstrip()

        super().__init__(
            prog=prog,
            description=description,
            add_help=parser_add_help_from_paras(paras),
            formatter_class=argparse.RawTextHelpFormatter,
            epilog=epilog,
        )

        # Add zero or more Args and/or Options from the Doc

        parser_adds_from_paras(self, paras=paras[2:], usage=usage)


def parser_add_help_from_paras(paras):
    """Find the conventional H/ Help Option and return True, else False"""

    for para in paras[2:]:
        if para_is_options(para):
            for line in textwrap_para_unbreakdent_lines(para[1:]):
                rejoined = " ".join(line.split())
                if rejoined.startswith("-h, --help "):

                    return True

    return False


def parser_epi_from_paras(paras):
    """Pick the first Line of an ArgParse Epilog out of the Paras of a Doc"""

    paras = paras[2:]  # Skip over Usage and Desc

    if paras and para_is_args(paras[0]):
        paras = paras[1:]

    if paras and para_is_options(paras[0]):
        paras = paras[1:]

    if paras:
        epi = paras[0][0]

        return epi

    return None


def para_is_args(para):
    return para[0].startswith("positional arguments")


def para_is_options(para):
    return para[0].startswith("options") or para[0].startswith("optional arguments")


#
# Rip Add_Argument calls out from the Doc
#


def parser_adds_from_paras(parser, paras, usage):
    """Add the Positional Arguments and/or Options, as listed by the Doc"""

    groups = parser_groups_from_usage(parser, usage=usage)

    for para in paras:
        if para_is_args(para):
            for line in textwrap_para_unbreakdent_lines(para[1:]):
                parser_add_arg_line(parser, usage=usage, line=line)
        elif para_is_options(para):
            for line in textwrap_para_unbreakdent_lines(para[1:]):
                parser_add_option_line(parser, groups=groups, line=line)


def parser_groups_from_usage(parser, usage):
    """Form a Mutually Exclusive Group for each '[-a | -b]' of the Usage"""

    groups = dict()

    for alts in re.findall(r"\[([^\[\]]*\|[^\[\]]*)\]", string=usage):
        group = parser.add_mutually_exclusive_group()
        for alt in alts.split("|"):
            option = alt.split()[0]
            groups[option] = group

    return groups


def parser_add_arg_line(parser, usage, line):
    """Rip out one Add_Argument Call of a Positional Arg from one Doc Line"""

    words = line.split()
    if not words:

        return

    # Divide the Line into Metavar and Help

    metavar = words[0]
    help_tail = line.strip()[len(metavar) :].strip()

    dest = metavar.lower()

    # Take mentions of NArgs ? or NArgs * or NArgs + from Usage

    nargs = None
    if "[{}]".format(metavar) in usage:
        nargs = "?"  # argparse.OPTIONAL
    elif " {} [{} ...]".format(metavar, metavar) in usage:
        dest = plural_en(dest)
        nargs = "+"  # argparse.ONE_OR_MORE
    elif "[{} ...]".format(metavar) in usage:
        dest = plural_en(dest)
        nargs = "*"  # argparse.ZERO_OR_MORE

    alt_help_tail = help_tail.replace("%", "%%") if help_tail else None
    parser.add_argument(dest, metavar=metavar, nargs=nargs, help=alt_help_tail)


def parser_add_option_line(parser, groups, line):
    """Rip one Add_Argument Call of an Option or two from one Doc Line"""

    # Split the Option Strings from the Help at the first run of two or more Blanks

    splits = re.split(r"  +", string=line.strip(), maxsplit=1)
    head = splits[0]
    help_tail = splits[-1] if splits[1:] else None

    dests = list()
    metavar = None
    for word in head.replace(",", " ").split():
        if word.startswith("-"):
            dests.append(word)
        else:
            metavar = word

    assert len(dests) in (1, 2), repr(line)

    # Call victory when Parser Add_Help already did add this Option

    if dests == ["-h", "--help"]:
        if parser.add_help:

            return

    # Add the Option to its Group, if it excludes others

    adder = groups.get(dests[0], parser)
    alt_help_tail = help_tail.replace("%", "%%") if help_tail else None

    if metavar is None:
        adder.add_argument(*dests, action="count", default=0, help=alt_help_tail)
    else:
        adder.add_argument(*dests, metavar=metavar, help=alt_help_tail)


# deffed in many files  # missing from docs.python.org
def plural_en(word):
    """Guess the English plural of a word"""

    consonants = "bcdfghjklmnpqrstvwxz"  # without "y"

    if re.match(r"^.*ex$", string=word):
        plural = word[: -len("ex")] + "ices"  # vortex, vortices
    elif re.match(r"^.*f$", string=word):
        plural = word[: -len("f")] + "ves"  # leaf, leaves
    elif re.match(r"^.*is$", string=word):
        plural = word[: -len("is")] + "es"  # basis, bases
    elif re.match(r"^.*ix$", string=word):
        plural = word[: -len("ix")] + "ices"  # appendix, appendices
    elif re.match(r"^.*o$", string=word):
        plural = word + "es"  # tomato, tomatoes
    elif re.match(r"^.*on$", string=word):
        plural = word[: -len("on")] + "a"  # criterion, criteria
    elif re.match(r"^.*[{}]y$".format(consonants), string=word):
        plural = word[: -len("y")] + "ies"  # lorry, lorries
    elif re.match(r"^.*(ch|s|sh|x|z)$", string=word):
        plural = word + "es"  # stitch bus ash box lutz
    else:
        plural = word + "s"  # word, words

    return plural


def _plural_en_test():

    singulars = "vortex leaf basis appendix tomato criterion lorry lutz".split()
    plurals = "vortices leaves bases appendices tomatoes criteria lorries lutzes"

    singulars.extend("file word in_file".split())
    plurals += " files words in_files"

    guesses = " ".join(plural_en(_) for _ in singulars)
    assert guesses == plurals, (guesses, plurals)


# deffed in many files  # missing from docs.python.org
def textwrap_split_paras(text):
    """Divide the Chars into a List of non-empty Lists of possibly dented Lines"""

    if text is None:

        return None

    paras = list()

    para = None
    for line in (text + "\n\n").splitlines():
        if not line.strip():
            if para is not None:
                paras.append(para)
            para = None
        elif not para:
            para = [line]
        else:
            para.append(line)

    return paras


def _textwrap_split_paras_test():

    paras = textwrap_split_paras("\n  a\n    b\n\n\n  c\n")
    assert paras == [["  a", "    b"], ["  c"]], paras


def textwrap_para_unbreakdent_lines(para):
    """Join the continuation lines dented beneath each leading line"""

    above_dent = None

    lines = list()
    for line in para:
        lstripped = line.lstrip()
        dent = line[: -len(lstripped)] if (line != lstripped) else ""

        if lines and (len(dent) > len(above_dent)):
            lines[-1] += "  " + line.strip()

            continue

        lines.append(line)
        above_dent = dent

    return lines


def _textwrap_para_unbreakdent_lines_test():

    lines = textwrap_para_unbreakdent_lines([" a", "    b", " c"])
    assert lines == [" a  b", " c"], lines


# deffed in many files  # missing from docs.python.org
def stderr_print(*args):
    """Print the Args, but to Stderr, not to Stdout"""

    sys.stdout.flush()
    print(*args, file=sys.stderr)
    sys.stderr.flush()


if __name__ == "__main__":
    main(sys.argv)


# copied from:  git clone https://github.com/pelavarre/pybashish.git
