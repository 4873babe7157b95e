# -*- coding: utf-8 -*-
# vim: ts=4 sw=4 tw=100 et ai si
#
# Copyright (C) 2025 Intel Corporation
# SPDX-License-Identifier: BSD-3-Clause

"""
Provide the catalog of vCPU types a confidential VM guest can be launched with, and their CPUID
signatures.

Every vCPU type has a canonical name (the name hypervisors use, e.g., "EPYC-Milan-v2") and is bound
to a CPU family, model, and stepping. Several vCPU types may share the same family, model, and
stepping, and therefore the same CPUID signature. The catalog is fixed and cannot be extended.
"""

from __future__ import annotations # Remove when switching to Python 3.10+.

import enum
import typing
from vcpusiglibs import CPUSignature
from vcpusiglibs.helperlibs import Logging
from vcpusiglibs.helperlibs.Exceptions import ErrorInvalidVCPUType, ErrorVerifyFailed

if typing.TYPE_CHECKING:
    from typing import TypedDict, Final

    class VCPUTypeInfoTypedDict(TypedDict):
        """
        vCPU type information.

        Attributes:
            name: The canonical name of the vCPU type.
            family: The CPU family.
            model: The CPU model.
            stepping: The CPU stepping.
            codename: The codename of the CPU generation.
        """

        name: str
        family: int
        model: int
        stepping: int
        codename: str

_LOG = Logging.getLogger(f"{Logging.MAIN_LOGGER_NAME}.vcpusig.{__name__}")

class VCPUType(enum.Enum):
    """The supported vCPU types. The value of a member is its canonical name."""

    EPYC = "EPYC"
    EPYC_V1 = "EPYC-v1"
    EPYC_V2 = "EPYC-v2"
    EPYC_IBPB = "EPYC-IBPB"
    EPYC_V3 = "EPYC-v3"
    EPYC_V4 = "EPYC-v4"
    EPYC_ROME = "EPYC-Rome"
    EPYC_ROME_V1 = "EPYC-Rome-v1"
    EPYC_ROME_V2 = "EPYC-Rome-v2"
    EPYC_ROME_V3 = "EPYC-Rome-v3"
    EPYC_MILAN = "EPYC-Milan"
    EPYC_MILAN_V1 = "EPYC-Milan-v1"
    EPYC_MILAN_V2 = "EPYC-Milan-v2"

    def __str__(self):
        """Return the canonical name of the vCPU type."""
        return display(self)

def _make_info(vcpu: VCPUType, family: int, model: int, stepping: int,
               codename: str) -> VCPUTypeInfoTypedDict:
    """Build and return the information dictionary for the 'vcpu' vCPU type."""

    return {"name": vcpu.value, "family": family, "model": model, "stepping": stepping,
            "codename": codename}

VCPU_TYPES: Final[dict[VCPUType, VCPUTypeInfoTypedDict]] = {
    # Family 17h, model 01h (Naples).
    VCPUType.EPYC: _make_info(VCPUType.EPYC, 23, 1, 2, "Naples"),
    VCPUType.EPYC_V1: _make_info(VCPUType.EPYC_V1, 23, 1, 2, "Naples"),
    VCPUType.EPYC_V2: _make_info(VCPUType.EPYC_V2, 23, 1, 2, "Naples"),
    VCPUType.EPYC_IBPB: _make_info(VCPUType.EPYC_IBPB, 23, 1, 2, "Naples"),
    VCPUType.EPYC_V3: _make_info(VCPUType.EPYC_V3, 23, 1, 2, "Naples"),
    VCPUType.EPYC_V4: _make_info(VCPUType.EPYC_V4, 23, 1, 2, "Naples"),
    # Family 17h, model 31h (Rome).
    VCPUType.EPYC_ROME: _make_info(VCPUType.EPYC_ROME, 23, 49, 0, "Rome"),
    VCPUType.EPYC_ROME_V1: _make_info(VCPUType.EPYC_ROME_V1, 23, 49, 0, "Rome"),
    VCPUType.EPYC_ROME_V2: _make_info(VCPUType.EPYC_ROME_V2, 23, 49, 0, "Rome"),
    VCPUType.EPYC_ROME_V3: _make_info(VCPUType.EPYC_ROME_V3, 23, 49, 0, "Rome"),
    # Family 19h, model 01h (Milan).
    VCPUType.EPYC_MILAN: _make_info(VCPUType.EPYC_MILAN, 25, 1, 1, "Milan"),
    VCPUType.EPYC_MILAN_V1: _make_info(VCPUType.EPYC_MILAN_V1, 25, 1, 1, "Milan"),
    VCPUType.EPYC_MILAN_V2: _make_info(VCPUType.EPYC_MILAN_V2, 25, 1, 1, "Milan"),
}

def get_triplet(vcpu: VCPUType) -> tuple[int, int, int]:
    """
    Return the CPU family, model, and stepping of a vCPU type.

    Args:
        vcpu: The vCPU type.

    Returns:
        A '(family, model, stepping)' tuple.
    """

    info = VCPU_TYPES[vcpu]
    return info["family"], info["model"], info["stepping"]

def get_names() -> list[str]:
    """Return the canonical names of all the vCPU types."""
    return [vcpu.value for vcpu in VCPUType]

def parse(name: str) -> VCPUType:
    """
    Find the vCPU type by its canonical name.

    Args:
        name: The canonical vCPU type name, e.g., "EPYC-Rome-v2". Matched exactly: case-sensitive,
              no white-space stripping.

    Returns:
        The vCPU type.

    Raises:
        ErrorInvalidVCPUType: If 'name' is not a canonical vCPU type name.
    """

    if isinstance(name, str):
        for vcpu in VCPUType:
            if vcpu.value == name:
                return vcpu

    names = ", ".join(get_names())
    raise ErrorInvalidVCPUType(f"Bad vCPU type name '{name}', use one of: {names}", name=name)

def display(vcpu: VCPUType) -> str:
    """
    Return the canonical name of a vCPU type.

    Args:
        vcpu: The vCPU type.

    Returns:
        The canonical name of the vCPU type, e.g., "EPYC-Milan".
    """

    return VCPU_TYPES[vcpu]["name"]

def signature(vcpu: VCPUType) -> int:
    """
    Return the CPUID signature of a vCPU type.

    Args:
        vcpu: The vCPU type.

    Returns:
        The 32-bit CPUID signature the vCPU reports in EAX for CPUID leaf 1.
    """

    return CPUSignature.encode(*get_triplet(vcpu))

def find_by_signature(sig: int) -> list[VCPUType]:
    """
    Find all the vCPU types with a given CPUID signature.

    Args:
        sig: The CPUID signature to look for.

    Returns:
        The list of matching vCPU types, may be empty.
    """

    vcpus = [vcpu for vcpu in VCPUType if signature(vcpu) == sig]
    if not vcpus:
        _LOG.debug("no vCPU type has signature %s", CPUSignature.format_sig(sig))

    return vcpus

def verify_signature(vcpu: VCPUType, sig: int):
    """
    Verify that a CPUID signature matches a vCPU type.

    Args:
        vcpu: The expected vCPU type.
        sig: The CPUID signature to verify, e.g., a value observed in a guest.

    Raises:
        ErrorVerifyFailed: If 'sig' is not the CPUID signature of 'vcpu'.
    """

    expected = signature(vcpu)
    if expected == sig:
        _LOG.debug("signature %s matches vCPU type '%s'", CPUSignature.format_sig(sig), vcpu.value)
        return

    raise ErrorVerifyFailed(f"CPUID signature {CPUSignature.format_sig(sig)} does not match vCPU "
                            f"type '{vcpu.value}', expected {CPUSignature.format_sig(expected)}",
                            expected=expected, actual=sig)

# CPUID signatures of all the vCPU types, indexed by the canonical name.
CPU_SIGS: Final[dict[str, int]] = {vcpu.value: signature(vcpu) for vcpu in VCPUType}
