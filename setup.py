# SPDX-FileCopyrightText: 2025 ModelCloud.ai
# SPDX-FileCopyrightText: 2025 qubitium@modelcloud.ai
# SPDX-License-Identifier: Apache-2.0
# Contact: qubitium@modelcloud.ai, x.com/qubitium

from __future__ import annotations

from setuptools import find_packages, setup


setup(
    name="xsbuild",
    version="0.1.0",
    description="Boost discovery and compiler/linker flag assembly for the Slic3r XS extension",
    license="Apache-2.0",
    python_requires=">=3.10",
    packages=find_packages(include=["xsbuild", "xsbuild.*"]),
    install_requires=[
        # setuptools._distutils provides the CCompiler used for link probes.
        "setuptools>=64",
    ],
    extras_require={
        "test": ["pytest"],
    },
    entry_points={
        "console_scripts": [
            "xsbuild = xsbuild.__main__:main",
        ],
    },
)
