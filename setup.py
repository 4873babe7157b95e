#!/usr/bin/python3
#
# -*- coding: utf-8 -*-
# vim: ts=4 sw=4 tw=100 et ai si
#
# Copyright (C) 2020-2025 Intel Corporation
# SPDX-License-Identifier: BSD-3-Clause

"""The standard python packaging script."""

import re
from setuptools import setup, find_namespace_packages

def get_version(filename):
    """Fetch the project version number."""

    with open(filename, "r", encoding="utf-8") as fobj:
        for line in fobj:
            matchobj = re.match(r'^_VERSION = "(\d+.\d+.\d+)"$', line)
            if matchobj:
                return matchobj.group(1)
    return None

setup(
    name="vcpusig",
    description="""CPUID signatures of confidential VM guest vCPU types""",
    python_requires=">=3.8",
    version=get_version("vcpusigtool/_VCPUSig.py"),
    packages=find_namespace_packages(include=["vcpusiglibs", "vcpusiglibs.*",
                                              "vcpusigtool", "vcpusigtool.*"]),
    entry_points={
        "console_scripts": ["vcpusig=vcpusigtool._VCPUSig:main"],
    },
    long_description="""A library and a tool for mapping confidential VM guest vCPU type names to
                        the CPUID signatures used in launch measurements.""",
    install_requires=["pyyaml", "colorama", "argcomplete"],
    extras_require={
        "test": ["pytest"],
    },
    classifiers=[
        "Intended Audience :: Developers",
        "Topic :: System :: Hardware",
        "Topic :: Security",
        "License :: OSI Approved :: BSD License",
        "Programming Language :: Python :: 3 :: Only",
        "Development Status :: 4 - Beta",
    ],
)
