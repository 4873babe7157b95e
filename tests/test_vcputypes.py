# -*- coding: utf-8 -*-
# vim: ts=4 sw=4 tw=100 et ai si
#
# Copyright (C) 2025 Intel Corporation
# SPDX-License-Identifier: BSD-3-Clause

"""
Tests for the 'VCPUTypes' module.
"""

from  __future__ import annotations # Remove when switching to Python 3.10+.

from concurrent.futures import ThreadPoolExecutor
import pytest
from vcpusiglibs import CPUSignature, VCPUTypes
from vcpusiglibs.VCPUTypes import VCPUType
from vcpusiglibs.helperlibs.Exceptions import ErrorBadFormat, ErrorInvalidVCPUType
from vcpusiglibs.helperlibs.Exceptions import ErrorVerifyFailed

_CANONICAL_NAMES = ["EPYC", "EPYC-v1", "EPYC-v2", "EPYC-IBPB", "EPYC-v3", "EPYC-v4",
                    "EPYC-Rome", "EPYC-Rome-v1", "EPYC-Rome-v2", "EPYC-Rome-v3",
                    "EPYC-Milan", "EPYC-Milan-v1", "EPYC-Milan-v2"]

# The vCPU type name aliases, grouped by the family, model, and stepping they share.
_ALIAS_GROUPS = [
    {"names": ["EPYC", "EPYC-v1", "EPYC-v2", "EPYC-IBPB", "EPYC-v3", "EPYC-v4"],
     "triplet": (23, 1, 2), "sig": 0x00800F12},
    {"names": ["EPYC-Rome", "EPYC-Rome-v1", "EPYC-Rome-v2", "EPYC-Rome-v3"],
     "triplet": (23, 49, 0), "sig": 0x00830F10},
    {"names": ["EPYC-Milan", "EPYC-Milan-v1", "EPYC-Milan-v2"],
     "triplet": (25, 1, 1), "sig": 0x00A00F11},
]

_BAD_NAMES = ["EPYC-v5", "", "epyc", "Epyc-Rome", "EPYC-MILAN", " EPYC", "EPYC ", "EPYC\n",
              "EPYC-Rome-v", "EPYC_ROME", "EPYC-Genoa", "Milan"]

def test_names():
    """Test that the catalog contains exactly the canonical names, in order."""

    assert VCPUTypes.get_names() == _CANONICAL_NAMES
    assert list(VCPUTypes.VCPU_TYPES) == list(VCPUType)
    assert list(VCPUTypes.CPU_SIGS) == _CANONICAL_NAMES

def test_round_trip():
    """Test that 'display()' returns the name that 'parse()' was given."""

    for name in _CANONICAL_NAMES:
        vcpu = VCPUTypes.parse(name)
        result = VCPUTypes.display(vcpu)

        assert result == name, \
               f"Bad result of display(parse('{name}')):\nexpected '{name}', got '{result}'"
        assert str(vcpu) == name

def test_parse_bad_names():
    """Test that 'parse()' rejects anything but the exact canonical names."""

    for name in _BAD_NAMES:
        with pytest.raises(ErrorInvalidVCPUType) as excinfo:
            VCPUTypes.parse(name)

        assert excinfo.value.name == name, \
               f"Bad 'name' attribute of the exception for '{name}': got '{excinfo.value.name}'"
        assert f"'{name}'" in str(excinfo.value)

def test_parse_non_string():
    """Test that 'parse()' accepts only strings."""

    for value in (None, 23, VCPUType.EPYC, b"EPYC"):
        with pytest.raises(ErrorInvalidVCPUType):
            VCPUTypes.parse(value) # type: ignore[arg-type]

def test_invalid_name_is_bad_format():
    """Test that the invalid vCPU type name error is a bad format error."""

    with pytest.raises(ErrorBadFormat):
        VCPUTypes.parse("EPYC-v5")

def test_aliases():
    """Test that aliases share the family, model, stepping, and signature."""

    for group in _ALIAS_GROUPS:
        for name in group["names"]:
            vcpu = VCPUTypes.parse(name)
            triplet = VCPUTypes.get_triplet(vcpu)
            sig = VCPUTypes.signature(vcpu)

            assert triplet == group["triplet"], \
                   f"Bad family, model, stepping of '{name}':\n" \
                   f"expected '{group['triplet']}', got '{triplet}'"
            assert sig == group["sig"], \
                   f"Bad signature of '{name}':\nexpected '{group['sig']:#x}', got '{sig:#x}'"
            assert VCPUTypes.CPU_SIGS[name] == sig

def test_signature_matches_encode():
    """Test that 'signature()' is the encoded family, model, and stepping."""

    for vcpu in VCPUType:
        assert VCPUTypes.signature(vcpu) == CPUSignature.encode(*VCPUTypes.get_triplet(vcpu))
        assert CPUSignature.decode(VCPUTypes.signature(vcpu)) == VCPUTypes.get_triplet(vcpu)

def test_signature_deterministic():
    """Test that concurrent 'signature()' calls return the same value."""

    vcpus = list(VCPUType) * 50
    with ThreadPoolExecutor(max_workers=8) as executor:
        results = list(executor.map(VCPUTypes.signature, vcpus))

    for vcpu, sig in zip(vcpus, results):
        assert sig == VCPUTypes.CPU_SIGS[vcpu.value]

def test_find_by_signature():
    """Test the 'find_by_signature()' function."""

    for group in _ALIAS_GROUPS:
        names = [vcpu.value for vcpu in VCPUTypes.find_by_signature(group["sig"])]
        assert names == group["names"], \
               f"Bad result of find_by_signature({group['sig']:#x}):\n" \
               f"expected '{group['names']}', got '{names}'"

    for sig in (0, 0x00A10F11, 0x000806F8, 0xFFFFFFFF):
        assert VCPUTypes.find_by_signature(sig) == []

def test_verify_signature():
    """Test the 'verify_signature()' function."""

    VCPUTypes.verify_signature(VCPUType.EPYC_ROME_V2, 0x00830F10)

    with pytest.raises(ErrorVerifyFailed) as excinfo:
        VCPUTypes.verify_signature(VCPUType.EPYC_MILAN, 0x00830F10)

    assert excinfo.value.expected == 0x00A00F11
    assert excinfo.value.actual == 0x00830F10
    assert "0x00830F10" in str(excinfo.value)

    # The high bits of a wide value are not dropped, so it does not match 0x00800F12.
    with pytest.raises(ErrorVerifyFailed) as excinfo:
        VCPUTypes.verify_signature(VCPUType.EPYC, 0x100800F12)

    assert excinfo.value.actual == 0x100800F12
    assert "0x100800F12" in str(excinfo.value)
