# -*- coding: utf-8 -*-
# vim: ts=4 sw=4 tw=100 et ai si
#
# Copyright (C) 2020-2025 Intel Corporation
# SPDX-License-Identifier: BSD-3-Clause

"""
Helpful classes extending 'argparse.ArgumentParser' class functionality.
"""

from __future__ import annotations # Remove when switching to Python 3.10+.

import re
import typing
import argparse
import argcomplete
from vcpusiglibs.helperlibs import DamerauLevenshtein
from vcpusiglibs.helperlibs.Exceptions import Error

if typing.TYPE_CHECKING:
    from typing import TypedDict, Iterable, Any

    class ArgKwargsTypedDict(TypedDict, total=False):
        """
        The keyword arguments of a command line argument, passed to 'argparse.add_argument()'.

        Attributes:
            dest: The 'argparse' attribute name where the option value will be stored. Must not be
                  used for positional arguments.
            metavar: The name of the argument in the help text.
            required: Whether the option is mandatory.
            help: A brief description of the argument.
        """

        dest: str
        metavar: str
        required: bool
        help: str

    class ArgTypedDict(TypedDict, total=False):
        """
        A command line argument definition.

        Attributes:
            names: The argument names, e.g., ("-f", "--family") for an option, or ("vcpu", ) for a
                   positional argument.
            completions: The values to offer for tab completion of the argument.
            kwargs: Additional keyword arguments for 'argparse.add_argument()'.
        """

        names: tuple[str, ...]
        completions: Iterable[str]
        kwargs: ArgKwargsTypedDict

# The "invalid choice" error message of 'argparse', e.g., "argument a command: invalid choice:
# 'sign' (choose from 'list', 'sig')". Newer python versions do not quote the choices.
_INVALID_CHOICE_REGEX = re.compile(r"invalid choice: '?(?P<offending>[^' ]*)'? \(choose from "
                                   r"(?P<choices>.*)\)$")

def add_arguments(parser: argparse.ArgumentParser, arguments: Iterable[ArgTypedDict]):
    """
    Add command line arguments to a parser.

    Args:
        parser: The argument parser object to add the arguments to.
        arguments: The argument definition dictionaries.
    """

    for argdef in arguments:
        arg = parser.add_argument(*argdef["names"], **argdef["kwargs"])

        completions = argdef.get("completions")
        if completions:
            completer = argcomplete.completers.ChoicesCompleter(list(completions))
            setattr(arg, "completer", completer)

class _SubParsersAction(argparse._SubParsersAction): # pylint: disable=protected-access
    """
    The sub-commands action which strips newlines and extra white-spaces from sub-command
    descriptions, so that triple-quoted descriptions are displayed correctly in help text.
    """

    def add_parser(self, name: str, **kwargs: Any) -> argparse.ArgumentParser:
        """Add a sub-command parser (same as 'argparse._SubParsersAction.add_parser()')."""

        if "description" in kwargs:
            kwargs["description"] = " ".join(kwargs["description"].split())

        return super().add_parser(name, **kwargs)

class ArgsParser(argparse.ArgumentParser):
    """
    Enhance 'argparse.ArgumentParser' with standard options and improved usability.
      - Add and validate the standard '-h', '-q', '-d', '--force-color', and '--version' options.
      - Tidy up sub-command descriptions.
      - Raise 'Error' instead of exiting on bad arguments, and suggest the closest sub-command.
    """

    def __init__(self, *args: Any, ver: str | None = None, **kwargs: Any):
        """
        Initialize the parser.

        Args:
            *args: Positional arguments for 'argparse.ArgumentParser'.
            ver: The tool version. Add the '--version' option if provided.
            **kwargs: Keyword arguments for 'argparse.ArgumentParser'.
        """

        kwargs["add_help"] = False
        super().__init__(*args, **kwargs)

        self.register("action", "parsers", _SubParsersAction)

        text = "Show this help message and exit."
        self.add_argument("-h", "--help", dest="help", action="help", help=text)

        text = "Be quiet (print only important messages like warnings)."
        self.add_argument("-q", "--quiet", dest="quiet", action="store_true", help=text)

        text = """Force colorized output even if the output stream is not a terminal (adds ANSI
                  escape codes)."""
        self.add_argument("--force-color", action="store_true", help=text)

        text = "Print debugging information."
        self.add_argument("-d", "--debug", dest="debug", action="store_true", help=text)

        if ver:
            text = "Print the version number and exit."
            self.add_argument("--version", action="version", help=text, version=ver)

    def parse_args(self, *args: Any, **kwargs: Any) -> argparse.Namespace: # type: ignore[override]
        """
        Parse command line arguments and validate the standard options.

        Args:
            *args: Positional arguments for 'ArgumentParser.parse_args()'.
            **kwargs: Keyword arguments for 'ArgumentParser.parse_args()'.

        Returns:
            The parsed arguments.
        """

        parsed = super().parse_args(*args, **kwargs)

        if getattr(parsed, "quiet", False) and getattr(parsed, "debug", False):
            raise Error("The '-q' and '-d' options cannot be used together")

        return parsed

    def error(self, message: str):
        """
        Raise an 'Error' with an improved error message instead of exiting the program.

        Args:
            message: The original 'argparse' error message.
        """

        mobj = _INVALID_CHOICE_REGEX.search(message)
        if not mobj:
            raise Error(f"{message}\nUse -h for help.")

        offending = mobj.group("offending")
        choices = [choice.strip("'") for choice in mobj.group("choices").split(", ")]

        suggestion = DamerauLevenshtein.closest_match(offending, choices)
        if suggestion:
            message = f"bad argument '{offending}', use '{self.prog} -h'.\n\nThe most similar " \
                      f"argument is\n  {suggestion}"

        raise Error(message)
