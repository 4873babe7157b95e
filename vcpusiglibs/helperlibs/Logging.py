# -*- coding: utf-8 -*-
# vim: ts=4 sw=4 tw=100 et ai si
#
# Copyright (C) 2020-2025 Intel Corporation
# SPDX-License-Identifier: BSD-3-Clause

"""
Logging helpers: a logger class with per-level prefixes, colors, and the 'NOTICE' and 'ERRINFO'
levels.
"""

from __future__ import annotations # Remove when switching to Python 3.10+.

import sys
import logging
import traceback
from typing import NoReturn, Any, IO, cast
import colorama

# Log levels.
#   * INFO: No prefixes, just the message.
#   * NOTICE: An INFO message, but with a prefix.
#   * DEBUG, WARNING, ERROR, CRITICAL: Also have the prefix.
#   * ERRINFO: An ERROR message, but without a prefix.
INFO = logging.INFO
NOTICE = logging.INFO + 1
DEBUG = logging.DEBUG
WARNING = logging.WARNING
ERROR = logging.ERROR
ERRINFO = logging.ERROR + 1
CRITICAL = logging.CRITICAL

# Name of the main logger instance. Other project loggers are supposed to be children of this one.
MAIN_LOGGER_NAME = "main"

# The default prefix for debug messages.
_DEFAULT_DBG_PREFIX = "[%(asctime)s] [%(module)s,%(lineno)d]"

class _MyFormatter(logging.Formatter):
    """A logging formatter that uses a different message format for every log level."""

    def __init__(self, prefix: str = "", colors: dict[int, str] | None = None):
        """
        Initialize the formatter.

        Args:
            prefix: Prefix for non-info and non-debug messages, usually the tool name. Info messages
                    go without any formatting.
            colors: A dictionary mapping log levels to colorama color codes.
        """

        logging.Formatter.__init__(self, "%(levelname)s: %(message)s", "%H:%M:%S")

        self._colors = colors if colors else {}
        self._myfmt: dict[int, str] = {}

        if prefix:
            prefix += ": "

        for lvl, pfx in ((WARNING, "warning"), (ERROR, "error"), (CRITICAL, "critical error"),
                         (NOTICE, "notice")):
            if not prefix:
                pfx = pfx.title()
            self._myfmt[lvl] = self._start(lvl) + prefix + pfx + self._end(lvl) + ": %(message)s"

        fmt = _DEFAULT_DBG_PREFIX + ": %(message)s"
        fmt = fmt.replace("[", "[" + self._start(DEBUG))
        self._myfmt[DEBUG] = fmt.replace("]", self._end(DEBUG) + "]")

        self._myfmt[ERRINFO] = self._myfmt[INFO] = "%(message)s"

    def _start(self, level: int) -> str:
        """Return the "start color output" code for log level 'level'."""
        return self._colors.get(level, "")

    def _end(self, level: int) -> str:
        """Return the "end color output" code for log level 'level'."""

        if level in self._colors:
            return str(colorama.Style.RESET_ALL)
        return ""

    def format(self, record: logging.LogRecord) -> str:
        """
        Format the log record using the format string of the record's log level.

        Args:
            record: The log record to format.

        Returns:
            str: The formatted log record.
        """

        # pylint: disable=protected-access
        self._style._fmt = self._myfmt[record.levelno]
        return logging.Formatter.format(self, record)

class _MyFilter(logging.Filter):
    """A logging filter which lets only certain log levels through."""

    def __init__(self, let_go: list[int]):
        """
        Initialize the logging filter.

        Args:
            let_go: The log levels to let through the filter.
        """

        logging.Filter.__init__(self)
        self._let_go = let_go

    def filter(self, record: logging.LogRecord) -> bool:
        """Return 'True' if the log level of 'record' is one of the allowed levels."""
        return record.levelno in self._let_go

class Logger(logging.Logger):
    """
    A custom logger class that provides the following functionality on top of the standard logger:
      * Message coloring.
      * Different prefixes for different log levels.
      * Debug messages with timestamps and file line numbers.
      * The NOTICE and ERRINFO log levels.
      * The 'error_out()' method.
    """

    def __init__(self, name: str | None = None):
        """
        Initialize the logger.

        Args:
            name: The name of the logger (same as in 'logging.Logger()').
        """

        self.prefix = ""
        self.colored = False

        if not name:
            name = "default"

        super().__init__(name)

    def configure(self,
                  prefix: str | None = None,
                  level: int | None = None,
                  colored: bool | None = None,
                  info_stream: IO[str] | None = None,
                  error_stream: IO[str] | None = None) -> Logger:
        """
        Configure the logger.

        Args:
            prefix: The prefix for log messages, used for all levels except 'INFO' and 'ERRINFO'.
            level: The log level. By default, detect it from the '-d' (debug) and '-q' (quiet)
                   command line options.
            colored: Whether to use colored output. By default, use colors for TTYs, unless the
                     '--force-color' command line option is specified, in which case colored output
                     is used for non-TTYs as well.
            info_stream: The stream for 'INFO' level messages. Default is 'sys.stdout'.
            error_stream: The stream for messages of all other levels. Default is 'sys.stderr'.

        Returns:
            Logger: The configured logger instance.
        """

        if info_stream is None:
            info_stream = sys.stdout
        if error_stream is None:
            error_stream = sys.stderr

        self.prefix = prefix if prefix else ""

        if not level:
            if "-q" in sys.argv:
                level = WARNING
            elif "-d" in sys.argv:
                level = DEBUG
            else:
                level = INFO

        self.setLevel(level)

        if colored is None:
            if "--force-color" in sys.argv:
                colored = True
            else:
                colored = info_stream.isatty() and error_stream.isatty()

        self.colored = colored

        colors: dict[int, str] = {}
        if colored:
            colors[DEBUG] = colorama.Fore.GREEN
            colors[WARNING] = colorama.Fore.YELLOW + colorama.Style.BRIGHT
            colors[NOTICE] = colorama.Fore.CYAN + colorama.Style.BRIGHT
            colors[ERROR] = colors[CRITICAL] = colorama.Fore.RED + colorama.Style.BRIGHT

        # Remove existing handlers.
        self.handlers = []

        formatter = _MyFormatter(prefix=self.prefix, colors=colors)

        stream_handler = logging.StreamHandler(info_stream)
        stream_handler.setFormatter(formatter)
        stream_handler.addFilter(_MyFilter([INFO]))
        self.addHandler(stream_handler)

        stream_handler = logging.StreamHandler(error_stream)
        stream_handler.setFormatter(formatter)
        stream_handler.addFilter(_MyFilter([DEBUG, WARNING, NOTICE, ERROR, ERRINFO, CRITICAL]))
        self.addHandler(stream_handler)

        return self

    def _print_traceback(self, level: int = ERROR):
        """Log the traceback of the exception being handled, or the current stack."""

        if sys.exc_info()[0]:
            lines = traceback.format_exc().splitlines()
        else:
            lines = [line.strip() for line in traceback.format_stack()]

        if lines:
            tb = "\n".join(lines)
            self.log(level, "--- Debug trace starts here ---")
            self.log(level, "%sAn error occurred, here is the traceback:\n%s%s",
                     colorama.Style.DIM, tb, colorama.Style.RESET_ALL)
            self.log(level, "--- Debug trace ends here ---\n")

    def error_out(self, fmt: Any, *args: Any, print_tb: bool = False) -> NoReturn:
        """
        Print an error message and terminate program execution.

        Args:
            fmt: The error message format string, or an exception object.
            *args: The arguments to format the error message.
            print_tb: If True, print the stack trace. The stack trace is always printed in debug
                      mode.

        Raises:
            SystemExit: Terminates the program with exit code 1.
        """

        if args:
            errmsg = fmt % args
        else:
            errmsg = str(fmt)

        if print_tb or self.getEffectiveLevel() == DEBUG:
            self._print_traceback(level=ERRINFO)

        self.error(errmsg)

        raise SystemExit(1)

    def notice(self, fmt: str, *args: Any):
        """Log a message with level 'NOTICE'."""
        self.log(NOTICE, fmt, *args)

logging.setLoggerClass(Logger)

def getLogger(name: str | None = None) -> Logger:
    """
    Get a logger by name (similar to 'logging.getLogger()').

    Args:
        name: The name of the logger.

    Returns:
        Logger: The logger instance.
    """

    # Because of 'setLoggerClass()', this returns a 'Logger' instance (except for the root logger).
    return cast(Logger, logging.getLogger(name=name))
