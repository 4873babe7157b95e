# -*- coding: utf-8 -*-
# vim: ts=4 sw=4 tw=100 et ai si
#
# Copyright (C) 2023-2025 Intel Corporation
# SPDX-License-Identifier: BSD-3-Clause

"""This module contains helper functions for test runners."""

import sys
import shlex
from vcpusiglibs.helperlibs import Logging

_LOG = Logging.getLogger(f"{Logging.MAIN_LOGGER_NAME}.vcpusig.{__name__}")

def run_tool(tool, toolname, arguments, exp_exc=None):
    """
    Run a tool command and verify the outcome. The arguments are as follows.
    * tool - the main Python module of the tool to run.
    * toolname - the name of the tool to run, used in error messages.
    * arguments - the arguments to run the command with, e.g. 'sig EPYC-Rome'.
    * exp_exc - the expected exception, by default, any exception is considered to be a failure.
                But when set if the command did not raise the expected exception then the test is
                considered to be a failure.
    """

    cmd = f"{tool.__file__} {arguments}"
    _LOG.debug("running: %s", cmd)
    sys.argv = shlex.split(cmd)
    try:
        args = tool.parse_arguments()
        ret = args.func(args)
    except Exception as err: # pylint: disable=broad-except
        if exp_exc is None:
            assert False, f"command '{toolname} {arguments}' raised the following exception:\n" \
                          f"- {type(err).__name__}({err})"

        if isinstance(err, exp_exc):
            return None

        assert False, f"command '{toolname} {arguments}' raised the following exception:\n" \
                      f"- {type(err).__name__}({err})\nbut it was expected to raise the " \
                      f"following exception:\n- {exp_exc.__name__}"

    if exp_exc is not None:
        assert False, f"command '{toolname} {arguments}' did not raise the following " \
                      f"exception type:\n- {exp_exc.__name__}"

    return ret
