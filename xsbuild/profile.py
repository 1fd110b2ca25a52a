# SPDX-FileCopyrightText: 2025 ModelCloud.ai
# SPDX-FileCopyrightText: 2025 qubitium@modelcloud.ai
# SPDX-License-Identifier: Apache-2.0
# Contact: qubitium@modelcloud.ai, x.com/qubitium

"""Static facts about the host OS and the compiler that will build the extension."""

from __future__ import annotations

import sys
from dataclasses import dataclass
from enum import Enum

from setuptools._distutils.ccompiler import CCompiler

from .probe import get_test_compiler, run_command


class OsFamily(str, Enum):
    WINDOWS = "windows"
    MACOS = "macos"
    UNIX = "unix"


class CompilerFamily(str, Enum):
    MSVC = "msvc"
    GCC = "gcc"


@dataclass(frozen=True)
class PlatformProfile:
    os_family: OsFamily
    compiler_family: CompilerFamily
    # First line of ``cc --version`` on gcc-like toolchains.
    compiler_version: str | None = None

    @property
    def is_windows(self) -> bool:
        return self.os_family is OsFamily.WINDOWS

    @property
    def is_macos(self) -> bool:
        return self.os_family is OsFamily.MACOS

    @property
    def is_msvc(self) -> bool:
        return self.compiler_family is CompilerFamily.MSVC

    def library_extension(self, static: bool) -> str:
        if self.is_msvc:
            return ".lib"
        if static or self.is_windows:
            return ".a"
        if self.is_macos:
            return ".dylib"
        return ".so"


def _os_family(platform_name: str) -> OsFamily:
    if platform_name.startswith("win"):
        return OsFamily.WINDOWS
    if platform_name == "darwin":
        return OsFamily.MACOS
    return OsFamily.UNIX


def detect_platform(
    compiler: CCompiler | None = None,
    platform_name: str | None = None,
) -> PlatformProfile:
    os_family = _os_family(platform_name or sys.platform)
    if compiler is None:
        compiler = get_test_compiler()

    if compiler is not None:
        is_msvc = getattr(compiler, "compiler_type", None) == "msvc"
    else:
        is_msvc = os_family is OsFamily.WINDOWS

    if is_msvc:
        return PlatformProfile(os_family, CompilerFamily.MSVC)

    version_output = run_command(["cc", "--version"])
    version = version_output.splitlines()[0] if version_output else None
    return PlatformProfile(os_family, CompilerFamily.GCC, version)
