#!/usr/bin/python
#
# Copyright (C) 2020-2025 Intel Corporation
# SPDX-License-Identifier: BSD-3-Clause
#
# -*- coding: utf-8 -*-
# vim: ts=4 sw=4 tw=100 et ai si

"""
The main entry point for the 'vcpusig' tool.
"""

import sys
from vcpusigtool._VCPUSig import main

if __name__ == "__main__":
    sys.exit(main())
