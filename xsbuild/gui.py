# SPDX-FileCopyrightText: 2025 ModelCloud.ai
# SPDX-FileCopyrightText: 2025 qubitium@modelcloud.ai
# SPDX-License-Identifier: Apache-2.0
# Contact: qubitium@modelcloud.ai, x.com/qubitium

"""wxWidgets compile and link flags, as reported by ``wx-config``."""

from __future__ import annotations

import logging
import os
import shlex
from collections.abc import Mapping
from dataclasses import dataclass

from .probe import run_command


logger = logging.getLogger(__name__)

WX_COMPONENTS = "gl,html"


class GuiToolkitNotFound(RuntimeError):
    pass


@dataclass(frozen=True)
class GuiToolkitFlags:
    include_paths: tuple[str, ...] = ()
    defines: tuple[str, ...] = ()
    compile_args: tuple[str, ...] = ()
    link_args: tuple[str, ...] = ()

    @classmethod
    def from_tool_output(cls, cxxflags: str, libs: str) -> GuiToolkitFlags:
        include_paths: list[str] = []
        defines: list[str] = []
        compile_args: list[str] = []
        for flag in shlex.split(cxxflags):
            if flag.startswith("-I") and len(flag) > 2:
                include_paths.append(flag[2:])
            elif flag.startswith("-D") and len(flag) > 2:
                defines.append(flag[2:])
            else:
                compile_args.append(flag)
        return cls(
            include_paths=tuple(include_paths),
            defines=tuple(defines),
            compile_args=tuple(compile_args),
            link_args=tuple(shlex.split(libs)),
        )


def discover_wx_flags(environ: Mapping[str, str] | None = None) -> GuiToolkitFlags:
    if environ is None:
        environ = os.environ
    wx_config = environ.get("WX_CONFIG") or "wx-config"

    cxxflags = run_command([wx_config, "--cxxflags"])
    libs = run_command([wx_config, "--libs", WX_COMPONENTS])
    if cxxflags is None or libs is None:
        raise GuiToolkitNotFound(
            f"GUI support requires wxWidgets, but `{wx_config}` could not report its flags. "
            "Install the wxWidgets development files or point WX_CONFIG at wx-config."
        )
    logger.debug("wx-config --cxxflags: %s", cxxflags)
    logger.debug("wx-config --libs %s: %s", WX_COMPONENTS, libs)
    return GuiToolkitFlags.from_tool_output(cxxflags, libs)
