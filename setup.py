#!/usr/bin/env python
# emacs: -*- mode: python-mode; py-indent-offset: 4; indent-tabs-mode: nil -*-
# vi: set ft=python sts=4 ts=4 sw=4 et:
# ## ### ### ### ### ### ### ### ### ### ### ### ### ### ### ### ### ### ### ##
#
#   See LICENSE file distributed along with the goldtree package for the
#   copyright and license terms.
#
# ## ### ### ### ### ### ### ### ### ### ### ### ### ### ### ### ### ### ### ##
"""Build helper."""

import sys

from setuptools import find_packages, setup

if sys.version_info < (3,):
    raise RuntimeError(
        "goldtree's setup.py requires python 3 or later. "
        "You are using %s" % sys.version
    )

if __name__ == "__main__":
    setup(
        name="goldtree",
        version="0.1.0",
        description="Compare generated directory trees against golden ones in pytest",
        packages=find_packages(include=["goldtree", "goldtree.*"]),
        python_requires=">=3.9",
        install_requires=[
            "pytest >= 7.0",
        ],
        extras_require={
            "test": [
                "pytest-mock",
            ],
        },
        cmdclass={},
    )
