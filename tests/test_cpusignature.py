# -*- coding: utf-8 -*-
# vim: ts=4 sw=4 tw=100 et ai si
#
# Copyright (C) 2025 Intel Corporation
# SPDX-License-Identifier: BSD-3-Clause

"""
Tests for the 'CPUSignature' module.
"""

from  __future__ import annotations # Remove when switching to Python 3.10+.

from typing import TypedDict
from vcpusiglibs import CPUSignature

class _EncodeTestDataType(TypedDict):
    """Type for the '_ENCODE_TEST_DATA' list."""
    family: int
    model: int
    stepping: int
    result: int

_ENCODE_TEST_DATA: list[_EncodeTestDataType] = [
    # AMD Naples, Rome, Milan, and Genoa.
    {"family": 23, "model": 1, "stepping": 2, "result": 0x00800F12},
    {"family": 23, "model": 49, "stepping": 0, "result": 0x00830F10},
    {"family": 25, "model": 1, "stepping": 1, "result": 0x00A00F11},
    {"family": 25, "model": 0x11, "stepping": 1, "result": 0x00A10F11},
    # Families that fit the base family field.
    {"family": 0xF, "model": 0, "stepping": 0, "result": 0x00000F00},
    {"family": 6, "model": 0x8F, "stepping": 8, "result": 0x000806F8},
    {"family": 0, "model": 0, "stepping": 0, "result": 0},
    # Out of range model and stepping values are masked.
    {"family": 23, "model": 0x131, "stepping": 0x12, "result": 0x00830F12},
    {"family": 0xF + 0x1FF, "model": 0, "stepping": 0, "result": 0x0FF00F00},
]

def test_encode():
    """Test the 'encode()' function."""

    for entry in _ENCODE_TEST_DATA:
        family = entry["family"]
        model = entry["model"]
        stepping = entry["stepping"]
        expected = entry["result"]

        result = CPUSignature.encode(family, model, stepping)

        assert result == expected, \
               f"Bad result of encode({family}, {model}, {stepping}):\n" \
               f"expected '{expected:#x}', got '{result:#x}'"

def test_encode_never_fails():
    """Test that 'encode()' returns an unsigned 32-bit value for any integer inputs."""

    values = (-(2**40), -256, -1, 0, 1, 0xF, 0x10, 0xFF, 0x100, 2**31, 2**64 + 3)
    for family in values:
        for model in values:
            for stepping in values:
                result = CPUSignature.encode(family, model, stepping)
                assert 0 <= result <= 0xFFFFFFFF, \
                       f"Bad result of encode({family}, {model}, {stepping}): '{result}' is not " \
                       f"an unsigned 32-bit value"

_DECODE_TEST_DATA = [
    {"sig": 0x00800F12, "result": (23, 1, 2)},
    {"sig": 0x00830F10, "result": (23, 49, 0)},
    {"sig": 0x00A00F11, "result": (25, 1, 1)},
    {"sig": 0x00000F00, "result": (15, 0, 0)},
    # The extended fields are ignored unless the base family is 0xF.
    {"sig": 0x00080688, "result": (6, 8, 8)},
    {"sig": 0x0FF00612, "result": (6, 1, 2)},
]

def test_decode():
    """Test the 'decode()' function."""

    for entry in _DECODE_TEST_DATA:
        sig = entry["sig"]
        expected = entry["result"]

        result = CPUSignature.decode(sig)

        assert result == expected, \
               f"Bad result of decode({sig:#x}):\nexpected '{expected}', got '{result}'"

_FORMAT_SIG_TEST_DATA = [
    {"sig": 0x00800F12, "result": "0x00800F12"},
    {"sig": 0xA00F11, "result": "0x00A00F11"},
    {"sig": 0, "result": "0x00000000"},
    {"sig": 0xFFFFFFFF, "result": "0xFFFFFFFF"},
    # Values outside of the 32-bit range are not truncated.
    {"sig": 0x100800F12, "result": "0x100800F12"},
    {"sig": -1, "result": "-0x00000001"},
]

def test_format_sig():
    """Test the 'format_sig()' function."""

    for entry in _FORMAT_SIG_TEST_DATA:
        sig = entry["sig"]
        expected = entry["result"]

        result = CPUSignature.format_sig(sig)

        assert result == expected, \
               f"Bad result of format_sig({sig:#x}):\nexpected '{expected}', got '{result}'"
