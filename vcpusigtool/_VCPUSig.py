# -*- coding: utf-8 -*-
# vim: ts=4 sw=4 tw=100 et ai si
#
# Copyright (C) 2025 Intel Corporation
# SPDX-License-Identifier: BSD-3-Clause

"""
vcpusig - print and verify CPUID signatures of confidential VM guest vCPU types.
"""

import sys
import argcomplete
from vcpusiglibs import CPUSignature, VCPUTypes
from vcpusiglibs.helperlibs import ArgParse, DamerauLevenshtein, Logging, Trivial, YAML
from vcpusiglibs.helperlibs.Exceptions import Error, ErrorInvalidVCPUType

if sys.version_info < (3, 8):
    raise SystemExit("this tool requires python version 3.8 or higher")

_VERSION = "1.0.0"
TOOLNAME = "vcpusig"

_LOG = Logging.getLogger(f"{Logging.MAIN_LOGGER_NAME}.vcpusig").configure(prefix=TOOLNAME)

_ENCODE_ARGS = [
    {
        "names": ("-f", "--family"),
        "kwargs": {
            "dest": "family",
            "required": True,
            "help": """The CPU family, for example 25 or 0x19.""",
        },
    },
    {
        "names": ("-m", "--model"),
        "kwargs": {
            "dest": "model",
            "required": True,
            "help": """The CPU model, for example 49 or 0x31.""",
        },
    },
    {
        "names": ("-s", "--stepping"),
        "kwargs": {
            "dest": "stepping",
            "required": True,
            "help": """The CPU stepping, for example 2.""",
        },
    },
]

def _get_vcpu_arg(help_text):
    """Return the definition of the positional vCPU type name argument."""

    return {
        "names": ("vcpu",),
        "completions": VCPUTypes.get_names(),
        "kwargs": {
            "metavar": "VCPU_TYPE",
            "help": help_text,
        },
    }

def build_arguments_parser():
    """Build and return the the command-line arguments parser object."""

    text = f"{TOOLNAME} - print and verify CPUID signatures of confidential VM vCPU types."
    parser = ArgParse.ArgsParser(description=text, prog=TOOLNAME, ver=_VERSION)

    subparsers = parser.add_subparsers(title="commands", dest="a command")
    subparsers.required = True

    #
    # Create parser for the 'list' command.
    #
    text = "List the supported vCPU types."
    descr = """List the supported vCPU types along with their CPU family, model, stepping, and
               CPUID signature."""
    subpars = subparsers.add_parser("list", help=text, description=descr)
    subpars.set_defaults(func=_list_command)

    text = "Print the information in YAML format."
    subpars.add_argument("--yaml", action="store_true", help=text)

    #
    # Create parser for the 'sig' command.
    #
    text = "Print the CPUID signature of a vCPU type."
    descr = """Print the CPUID signature (the value of EAX for CPUID leaf 1) of a vCPU type."""
    subpars = subparsers.add_parser("sig", help=text, description=descr)
    subpars.set_defaults(func=_sig_command)
    text = "The vCPU type name, for example 'EPYC-Milan'."
    ArgParse.add_arguments(subpars, [_get_vcpu_arg(text)])

    #
    # Create parser for the 'encode' command.
    #
    text = "Compute the CPUID signature from CPU family, model, and stepping."
    descr = """Compute the CPUID signature from CPU family, model, and stepping. Out of range
               model and stepping values are truncated."""
    subpars = subparsers.add_parser("encode", help=text, description=descr)
    subpars.set_defaults(func=_encode_command)
    ArgParse.add_arguments(subpars, _ENCODE_ARGS)

    #
    # Create parser for the 'decode' command.
    #
    text = "Extract CPU family, model, and stepping from a CPUID signature."
    descr = """Extract CPU family, model, and stepping from a CPUID signature, and print the vCPU
               types with this signature."""
    subpars = subparsers.add_parser("decode", help=text, description=descr)
    subpars.set_defaults(func=_decode_command)
    subpars.add_argument("sig", metavar="SIGNATURE", help="The CPUID signature, e.g., 0x00A00F11.")

    #
    # Create parser for the 'verify' command.
    #
    text = "Verify that a CPUID signature matches a vCPU type."
    descr = """Verify that a CPUID signature, for example the one observed in a guest, matches a
               vCPU type. Exit with an error if it does not."""
    subpars = subparsers.add_parser("verify", help=text, description=descr)
    subpars.set_defaults(func=_verify_command)
    ArgParse.add_arguments(subpars, [_get_vcpu_arg("The expected vCPU type name.")])
    subpars.add_argument("sig", metavar="SIGNATURE", help="The CPUID signature to verify.")

    argcomplete.autocomplete(parser)

    return parser

def parse_arguments():
    """Parse command-line arguments."""

    parser = build_arguments_parser()
    return parser.parse_args()

def _parse_vcpu(name):
    """
    Parse vCPU type name 'name' and return the 'VCPUType' object. Add a suggestion to the error
    message if 'name' looks like a typo.
    """

    try:
        return VCPUTypes.parse(name)
    except ErrorInvalidVCPUType as err:
        suggestion = DamerauLevenshtein.closest_match(name, VCPUTypes.get_names())
        if not suggestion:
            raise
        raise ErrorInvalidVCPUType(f"{err}\n\nThe most similar vCPU type name is\n  {suggestion}",
                                   name=name) from err

def _parse_sig(ssig):
    """Parse CPUID signature string 'ssig' and return it as an unsigned 32-bit integer."""

    sig = Trivial.str_to_int(ssig, what="CPUID signature")
    Trivial.validate_value_in_range(sig, 0, CPUSignature.SIG_MAX, what="CPUID signature")
    return sig

def _list_command(args):
    """Implement the 'list' command."""

    info = []
    for vcpu, vinfo in VCPUTypes.VCPU_TYPES.items():
        entry = dict(vinfo)
        entry["signature"] = CPUSignature.format_sig(VCPUTypes.signature(vcpu))
        info.append(entry)

    if args.yaml:
        YAML.dump(info, sys.stdout)
        return

    width = max(len(name) for name in VCPUTypes.get_names())
    _LOG.info("%-*s  Family  Model  Stepping  Signature   Codename", width, "Name")
    for entry in info:
        _LOG.info("%-*s  %-6d  %-5d  %-8d  %s  %s", width, entry["name"], entry["family"],
                  entry["model"], entry["stepping"], entry["signature"], entry["codename"])

def _sig_command(args):
    """Implement the 'sig' command."""

    vcpu = _parse_vcpu(args.vcpu)
    _LOG.info("%s", CPUSignature.format_sig(VCPUTypes.signature(vcpu)))

def _encode_command(args):
    """Implement the 'encode' command."""

    family = Trivial.str_to_int(args.family, what="CPU family")
    model = Trivial.str_to_int(args.model, what="CPU model")
    stepping = Trivial.str_to_int(args.stepping, what="CPU stepping")

    if model < 0 or model > 0xFF:
        _LOG.warning("CPU model %d is out of the 0-255 range, using the low byte only", model)
    if stepping < 0 or stepping > 0xF:
        _LOG.warning("CPU stepping %d is out of the 0-15 range, using the low 4 bits only",
                     stepping)

    _LOG.info("%s", CPUSignature.format_sig(CPUSignature.encode(family, model, stepping)))

def _decode_command(args):
    """Implement the 'decode' command."""

    sig = _parse_sig(args.sig)
    family, model, stepping = CPUSignature.decode(sig)

    _LOG.info("Family: %d (%#x)", family, family)
    _LOG.info("Model: %d (%#x)", model, model)
    _LOG.info("Stepping: %d", stepping)

    vcpus = VCPUTypes.find_by_signature(sig)
    if vcpus:
        _LOG.info("vCPU types: %s", ", ".join(vcpu.value for vcpu in vcpus))
    else:
        _LOG.notice("no supported vCPU type has CPUID signature %s", CPUSignature.format_sig(sig))

def _verify_command(args):
    """Implement the 'verify' command."""

    vcpu = _parse_vcpu(args.vcpu)
    sig = _parse_sig(args.sig)

    VCPUTypes.verify_signature(vcpu, sig)
    _LOG.info("CPUID signature %s matches vCPU type '%s'", CPUSignature.format_sig(sig), vcpu.value)

def main():
    """Script entry point."""

    try:
        args = parse_arguments()

        if not getattr(args, "func", None):
            _LOG.error("please, run '%s -h' for help", TOOLNAME)
            return -1

        args.func(args)
    except KeyboardInterrupt:
        _LOG.info("\nInterrupted, exiting")
        return -1
    except Error as err:
        _LOG.error_out(err)

    return 0

if __name__ == "__main__":
    sys.exit(main())
