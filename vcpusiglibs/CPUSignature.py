# -*- coding: utf-8 -*-
# vim: ts=4 sw=4 tw=100 et ai si
#
# Copyright (C) 2025 Intel Corporation
# SPDX-License-Identifier: BSD-3-Clause

"""
Pack and unpack the x86 CPUID signature - the value the CPUID instruction returns in EAX for leaf 1.

The layout is described in AMD's CPUID Specification, publication #25481, section "CPUID
Fn0000_0001_EAX Family, Model, Stepping Identifiers":

    bits 31:28 - reserved
    bits 27:20 - extended family
    bits 19:16 - extended model
    bits 15:12 - reserved
    bits 11:8  - base family
    bits 7:4   - base model
    bits 3:0   - stepping

The family is the sum of the base and extended families, but the extended family is used only when
the base family is 0xF. The same applies to the extended model, which forms the upper nibble of the
model.
"""

from __future__ import annotations # Remove when switching to Python 3.10+.

from typing import Final

# The largest base family value, the rest of the family goes to the extended family field.
_FAMILY_BASE_MAX: Final[int] = 0xF

# The largest CPUID signature, it is a 32-bit value.
SIG_MAX: Final[int] = 0xFFFFFFFF

def encode(family: int, model: int, stepping: int) -> int:
    """
    Compute the 32-bit CPUID signature from CPU family, model, and stepping.

    Args:
        family: The CPU family, e.g., 25 for AMD Milan.
        model: The CPU model. Only the low byte is used.
        stepping: The CPU stepping. Only the low 4 bits are used.

    Returns:
        The CPUID signature, an unsigned 32-bit integer.

    Notes:
        - Out of range values are masked, not rejected, so this function never fails.
    """

    if family > _FAMILY_BASE_MAX:
        family_low = _FAMILY_BASE_MAX
        family_high = (family - _FAMILY_BASE_MAX) & 0xFF
    else:
        family_low = family
        family_high = 0

    model_low = model & 0xF
    model_high = (model >> 4) & 0xF

    stepping_low = stepping & 0xF

    sig = (family_high << 20) | \
          (model_high << 16) | \
          (family_low << 8) | \
          (model_low << 4) | \
          stepping_low

    return sig & SIG_MAX

def decode(sig: int) -> tuple[int, int, int]:
    """
    Extract CPU family, model, and stepping from a CPUID signature.

    Args:
        sig: The CPUID signature.

    Returns:
        A '(family, model, stepping)' tuple.
    """

    stepping = sig & 0xF
    model = (sig >> 4) & 0xF
    family = (sig >> 8) & 0xF

    if family == _FAMILY_BASE_MAX:
        family += (sig >> 20) & 0xFF
        model |= ((sig >> 16) & 0xF) << 4

    return family, model, stepping

def format_sig(sig: int) -> str:
    """
    Format a CPUID signature as a string, e.g., '0x00A00F11'.

    Args:
        sig: The CPUID signature to format.

    Returns:
        The formatted CPUID signature.

    Notes:
        - Values outside of the 32-bit range are formatted as is, without truncation.
    """

    if sig < 0:
        return f"-0x{-sig:08X}"
    return f"0x{sig:08X}"
