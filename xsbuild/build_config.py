# SPDX-FileCopyrightText: 2025 ModelCloud.ai
# SPDX-FileCopyrightText: 2025 qubitium@modelcloud.ai
# SPDX-License-Identifier: Apache-2.0
# Contact: qubitium@modelcloud.ai, x.com/qubitium

from __future__ import annotations

import logging
import os
from collections.abc import Callable, Mapping
from typing import Any

from .flags import FlagAssembler, LinkConfiguration, dialect_for
from .gui import GuiToolkitFlags, discover_wx_flags
from .options import FeatureToggleSet, SearchOverrides
from .paths import PathCandidateGenerator
from .probe import check_lib
from .profile import PlatformProfile, detect_platform
from .resolver import BOOST_LIBRARIES, LibraryGroupResolver, LinkChecker


logger = logging.getLogger(__name__)

SOURCE_INCLUDE_DIRS = ("src/libslic3r", "src/glew/include")
SOURCE_LIBRARY_DIR = "src/libslic3r"

__all__ = ["SOURCE_INCLUDE_DIRS", "collect_build_config", "format_report", "resolve_link_configuration"]


def resolve_link_configuration(
    environ: Mapping[str, str] | None = None,
    *,
    profile: PlatformProfile | None = None,
    link_checker: LinkChecker = check_lib,
    gui_flags: Callable[[Mapping[str, str]], GuiToolkitFlags] = discover_wx_flags,
) -> LinkConfiguration:
    if environ is None:
        environ = os.environ
    if profile is None:
        profile = detect_platform()

    toggles = FeatureToggleSet.from_environ(environ)
    overrides = SearchOverrides.from_environ(environ).validated()
    candidates = PathCandidateGenerator(profile, overrides)
    boost_include_dirs = candidates.include_dirs()
    boost_library_dirs = candidates.library_dirs()

    gui: GuiToolkitFlags | None = None
    if toggles.gui_enabled:
        logger.info("Slic3r will be built with GUI support")
        gui = gui_flags(environ)
    if toggles.profiling_enabled:
        logger.info("Slic3r will be built with a Shiny invasive profiler")

    resolver = LibraryGroupResolver(
        profile,
        toggles,
        libraries=BOOST_LIBRARIES,
        include_dirs=[*SOURCE_INCLUDE_DIRS, *boost_include_dirs],
        link_checker=link_checker,
    )
    group = resolver.resolve(boost_library_dirs)

    return FlagAssembler(profile, toggles, BOOST_LIBRARIES).assemble(
        group,
        include_paths=SOURCE_INCLUDE_DIRS,
        library_args=[dialect_for(profile).library_path(SOURCE_LIBRARY_DIR)],
        boost_include_dirs=boost_include_dirs,
        gui=gui,
    )


def collect_build_config(
    environ: Mapping[str, str] | None = None,
    **options: Any,
) -> dict[str, list[str] | list[tuple[str, str | None]]]:
    """Keyword arguments for ``setuptools.Extension``; *options* go to the resolver."""

    return resolve_link_configuration(environ, **options).as_extension_kwargs()


def format_report(config: LinkConfiguration) -> str:
    def quoted(values: tuple[str, ...]) -> str:
        return ", ".join(f'"{value}"' for value in values)

    return "\n".join(
        [
            f"With INC: {quoted(config.include_paths)}",
            f"With DEFINES: {quoted(config.compile_defines)}",
            f"With CFLAGS: {quoted(config.compile_args)}",
            f"With LIBS: {quoted(config.linker_args)}",
        ]
    )
