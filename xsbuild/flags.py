# SPDX-FileCopyrightText: 2025 ModelCloud.ai
# SPDX-FileCopyrightText: 2025 qubitium@modelcloud.ai
# SPDX-License-Identifier: Apache-2.0
# Contact: qubitium@modelcloud.ai, x.com/qubitium

"""Turn a resolved Boost group and the build options into compiler/linker flags."""

from __future__ import annotations

import re
from collections.abc import Sequence
from dataclasses import dataclass

from .gui import GuiToolkitFlags
from .options import FeatureToggleSet
from .profile import PlatformProfile
from .resolver import BOOST_LIBRARIES, BOOST_PREFIX, ResolvedLibraryGroup


# _GLIBCXX_USE_C99 : long long support for g++
# HAS_BOOL         : stops perl's handy.h from doing "#define bool char" under MSVC
# NOGDI            : keeps wingdi.h from declaring Polygon() and Polyline() globally
# BOOST_ASIO_DISABLE_KQUEUE : Boost ASIO bug on OS X, https://svn.boost.org/trac/boost/ticket/5339
BASE_DEFINES = (
    "_GLIBCXX_USE_C99",
    "HAS_BOOL",
    "NOGDI",
    "SLIC3RXS",
    "BOOST_ASIO_DISABLE_KQUEUE",
    "GLEW_STATIC",
)
# No min/max macros from windows.h; M_PI and friends from math.h.
WINDOWS_DEFINES = ("_WIN32", "NOMINMAX", "_USE_MATH_DEFINES")
GUI_DEFINES = ("SLIC3R_GUI", "UNICODE")
MACOS_LINK_ARGS = ("-framework", "IOKit", "-framework", "CoreFoundation")

# https://svn.boost.org/trac/boost/ticket/8695
_BUGGY_GCC_RE = re.compile(r" 4\.7\.[012]")


class PosixDialect:
    std_flag: str | None = "-std=c++11"
    debug_flag = "-g"
    opengl_libraries: tuple[str, ...] = ("-lGL", "-lGLU")

    def define(self, name: str) -> str:
        return f"-D{name}"

    def library_path(self, directory: str) -> str:
        return f"-L{directory}"

    def link_library(self, name: str) -> str:
        return f"-l{name}"

    def translate_link_arg(self, arg: str) -> str:
        return arg


class MinGWDialect(PosixDialect):
    opengl_libraries = ("-lopengl32",)


class MsvcDialect(PosixDialect):
    # MSVC only learned -std= in 2015 and spells it differently.
    std_flag = None
    debug_flag = "-Gd"
    opengl_libraries = ("OpenGL32.Lib", "GlU32.Lib")

    def library_path(self, directory: str) -> str:
        return f"-LIBPATH:{directory}"

    def link_library(self, name: str) -> str:
        return f"{name}.lib"

    def translate_link_arg(self, arg: str) -> str:
        if arg.startswith("-L") and not arg.startswith("-LIBPATH:"):
            return "-LIBPATH:" + arg[2:]
        return arg


def dialect_for(profile: PlatformProfile) -> PosixDialect:
    if profile.is_msvc:
        return MsvcDialect()
    if profile.is_windows:
        return MinGWDialect()
    return PosixDialect()


def _unique(values: Sequence[str]) -> tuple[str, ...]:
    seen: set[str] = set()
    ordered: list[str] = []
    for value in values:
        if value and value not in seen:
            ordered.append(value)
            seen.add(value)
    return tuple(ordered)


@dataclass(frozen=True)
class LinkConfiguration:
    include_paths: tuple[str, ...] = ()
    compile_defines: tuple[str, ...] = ()
    linker_args: tuple[str, ...] = ()
    compile_args: tuple[str, ...] = ()

    def define_macros(self) -> list[tuple[str, str | None]]:
        macros: list[tuple[str, str | None]] = []
        for token in self.compile_defines:
            name_value = token[2:].split("=", 1)
            macros.append((name_value[0], name_value[1] if len(name_value) > 1 else None))
        return macros

    def as_extension_kwargs(self) -> dict[str, list[str] | list[tuple[str, str | None]]]:
        return {
            "include_dirs": list(self.include_paths),
            "define_macros": self.define_macros(),
            "extra_compile_args": list(self.compile_args),
            "extra_link_args": list(self.linker_args),
        }


class FlagAssembler:
    def __init__(
        self,
        profile: PlatformProfile,
        toggles: FeatureToggleSet,
        libraries: Sequence[str] = BOOST_LIBRARIES,
    ) -> None:
        self.profile = profile
        self.toggles = toggles
        self.libraries = tuple(libraries)
        self.dialect = dialect_for(profile)

    def _gui(self, gui: GuiToolkitFlags | None) -> GuiToolkitFlags | None:
        if not self.toggles.gui_enabled:
            return None
        return gui or GuiToolkitFlags()

    def _include_paths(
        self,
        group: ResolvedLibraryGroup,
        include_paths: Sequence[str],
        boost_include_dirs: Sequence[str],
        gui: GuiToolkitFlags | None,
    ) -> tuple[str, ...]:
        found: list[str] = []
        if gui is not None:
            found.extend(gui.include_paths)
        if not group.dynamically_linked:
            found.extend(boost_include_dirs)
        caller = tuple(include_paths)
        return caller + tuple(path for path in _unique(found) if path not in caller)

    def _compile_defines(self, gui: GuiToolkitFlags | None) -> tuple[str, ...]:
        names = list(BASE_DEFINES)
        if self.profile.is_windows:
            names.extend(WINDOWS_DEFINES)
        if gui is not None:
            names.extend(GUI_DEFINES)
            names.extend(gui.defines)
        if self.toggles.profiling_enabled:
            names.append("SLIC3R_PROFILE")
        if self.toggles.broken_croak_workaround:
            names.append("SLIC3R_HAS_BROKEN_CROAK")
        if not self.toggles.static_linking:
            names.append("BOOST_LOG_DYN_LINK")
        names.append("BOOST_LIBS")
        names.append("SLIC3R_DEBUG" if self.toggles.debug_build else "NDEBUG")
        return tuple(self.dialect.define(name) for name in _unique(names))

    def _compile_args(self, gui: GuiToolkitFlags | None) -> tuple[str, ...]:
        args: list[str] = []
        if self.dialect.std_flag:
            args.append(self.dialect.std_flag)
        if gui is not None:
            args.extend(gui.compile_args)
        if self.toggles.debug_build:
            args.append(self.dialect.debug_flag)
        version = self.profile.compiler_version
        if not self.profile.is_msvc and version and _BUGGY_GCC_RE.search(version):
            args.append("-fno-inline-small-functions")
        return tuple(args)

    def _boost_link_args(self, group: ResolvedLibraryGroup) -> list[str]:
        if group.dynamically_linked:
            return [self.dialect.link_library(f"{BOOST_PREFIX}{name}") for name in self.libraries]
        if group.directory is None:
            raise ValueError("library group has neither a directory nor a dynamic link")
        if self.toggles.static_linking or self.profile.is_msvc:
            return group.file_paths(self.libraries)
        return [
            self.dialect.library_path(group.directory),
            *(self.dialect.link_library(name) for name in group.link_names(self.libraries)),
        ]

    def _linker_args(
        self,
        group: ResolvedLibraryGroup,
        library_args: Sequence[str],
        gui: GuiToolkitFlags | None,
    ) -> tuple[str, ...]:
        args = list(library_args)
        args.extend(self._boost_link_args(group))
        if gui is not None:
            args.extend(self.dialect.opengl_libraries)
        if self.profile.is_macos:
            args.extend(MACOS_LINK_ARGS)
        if gui is not None:
            args.extend(self.dialect.translate_link_arg(arg) for arg in gui.link_args)
        return tuple(args)

    def assemble(
        self,
        group: ResolvedLibraryGroup,
        include_paths: Sequence[str] = (),
        library_args: Sequence[str] = (),
        boost_include_dirs: Sequence[str] = (),
        gui: GuiToolkitFlags | None = None,
    ) -> LinkConfiguration:
        gui = self._gui(gui)
        return LinkConfiguration(
            include_paths=self._include_paths(group, include_paths, boost_include_dirs, gui),
            compile_defines=self._compile_defines(gui),
            linker_args=self._linker_args(group, library_args, gui),
            compile_args=self._compile_args(gui),
        )
