# -*- coding: utf-8 -*-
# vim: ts=4 sw=4 tw=100 et ai si
#
# Copyright (C) 2020-2025 Intel Corporation
# SPDX-License-Identifier: BSD-3-Clause

"""
Common trivial helpers.
"""

from __future__ import annotations # Remove when switching to Python 3.10+.

from vcpusiglibs.helperlibs.Exceptions import ErrorBadFormat

def str_to_int(snum: str | int, base: int = 0, what: str = "") -> int:
    """
    Convert a string to an integer value.

    Args:
        snum: The value to convert to 'int'.
        base: Base of 'snum'. Defaults to auto-detect based on the prefix, e.g., '0x' for
              hexadecimal numbers.
        what: A string describing the value to convert, for the possible error message.

    Returns:
        int: The converted integer value.

    Raises:
        ErrorBadFormat: If 'snum' cannot be converted to an integer.
    """

    try:
        return int(str(snum), base)
    except (ValueError, TypeError):
        if not what:
            what = "value"

        if base:
            errmsg = f"a base {base} integer"
        else:
            errmsg = "an integer"
        raise ErrorBadFormat(f"Bad {what} '{snum}': should be {errmsg}") from None

def validate_value_in_range(value: int, minval: int, maxval: int, what: str = ""):
    """
    Validate that 'value' is in the ['minval', 'maxval'] range.

    Args:
        value: The value to validate.
        minval: The minimum allowed value for 'value'.
        maxval: The maximum allowed value for 'value'.
        what: A string describing the value that is being validated, for the possible error message.

    Raises:
        ErrorBadFormat: If 'value' is out of range.
    """

    if value < minval or value > maxval:
        if not what:
            what = "value"
        raise ErrorBadFormat(f"Bad {what} '{value:#x}': out of range, should be within "
                             f"[{minval:#x},{maxval:#x}]")
