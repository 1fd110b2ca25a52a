# SPDX-FileCopyrightText: 2025 ModelCloud.ai
# SPDX-FileCopyrightText: 2025 qubitium@modelcloud.ai
# SPDX-License-Identifier: Apache-2.0
# Contact: qubitium@modelcloud.ai, x.com/qubitium

"""Toolchain probes: external commands and trial links against libraries."""

from __future__ import annotations

import logging
import subprocess
import tempfile
from collections.abc import Iterable
from pathlib import Path

from setuptools._distutils.ccompiler import CCompiler, new_compiler
from setuptools._distutils.errors import CCompilerError, DistutilsExecError
from setuptools._distutils.sysconfig import customize_compiler


logger = logging.getLogger(__name__)

PROBE_SOURCE = "int main(void) { return 0; }\n"

_COMPILER_INITIALIZED = False
_COMPILER_INSTANCE: CCompiler | None = None


def run_command(command: list[str]) -> str | None:
    try:
        result = subprocess.run(
            command,
            check=True,
            stdout=subprocess.PIPE,
            stderr=subprocess.PIPE,
            text=True,
        )
    except (FileNotFoundError, subprocess.CalledProcessError):
        return None
    return result.stdout.strip() or None


def get_test_compiler() -> CCompiler | None:
    global _COMPILER_INITIALIZED, _COMPILER_INSTANCE
    if _COMPILER_INITIALIZED:
        return _COMPILER_INSTANCE
    _COMPILER_INITIALIZED = True
    try:
        compiler = new_compiler()
        customize_compiler(compiler)
    except Exception:
        _COMPILER_INSTANCE = None
    else:
        _COMPILER_INSTANCE = compiler
    return _COMPILER_INSTANCE


def check_lib(
    libraries: Iterable[str],
    include_dirs: Iterable[str] = (),
    library_dirs: Iterable[str] = (),
) -> bool:
    """Compile and link a trivial program against *libraries*.

    Returns ``True`` only when both steps succeed. A missing compiler counts
    as failure so callers fall through to their next strategy.
    """

    libraries = list(libraries)
    compiler = get_test_compiler()
    if compiler is None:
        logger.debug("No C compiler available to probe %s", libraries)
        return False

    with tempfile.TemporaryDirectory() as tmpdir:
        source = Path(tmpdir) / "check_lib.c"
        source.write_text(PROBE_SOURCE, encoding="utf-8")
        try:
            objects = compiler.compile(
                [str(source)],
                output_dir=tmpdir,
                include_dirs=list(include_dirs),
            )
            compiler.link_executable(
                objects,
                "check_lib",
                output_dir=tmpdir,
                libraries=libraries,
                library_dirs=list(library_dirs),
            )
        except (CCompilerError, DistutilsExecError, OSError) as exc:
            logger.debug("Probe link against %s failed: %s", libraries, exc)
            return False
    return True
