# SPDX-FileCopyrightText: 2025 ModelCloud.ai
# SPDX-FileCopyrightText: 2025 qubitium@modelcloud.ai
# SPDX-License-Identifier: Apache-2.0
# Contact: qubitium@modelcloud.ai, x.com/qubitium

"""Build configuration for the Slic3r XS C++ extension.

The package locates a matched set of Boost libraries (``system``, ``thread``
and ``log``), optionally proves it links, and assembles the include paths,
preprocessor defines and linker arguments for the extension build in the
syntax of the active compiler family.
"""

from __future__ import annotations

from .build_config import collect_build_config, format_report, resolve_link_configuration
from .flags import FlagAssembler, LinkConfiguration, MsvcDialect, PosixDialect, dialect_for
from .gui import GuiToolkitFlags, GuiToolkitNotFound, discover_wx_flags
from .options import FeatureToggleSet, SearchOverrides
from .paths import PathCandidateGenerator
from .profile import CompilerFamily, OsFamily, PlatformProfile, detect_platform
from .resolver import (
    BOOST_LIBRARIES,
    CandidateRejected,
    LibraryGroupResolver,
    LinkValidationFailure,
    MissingCandidate,
    ResolutionExhausted,
    ResolvedLibraryGroup,
)


__version__ = "0.1.0"

__all__ = [
    "BOOST_LIBRARIES",
    "CandidateRejected",
    "CompilerFamily",
    "FeatureToggleSet",
    "FlagAssembler",
    "GuiToolkitFlags",
    "GuiToolkitNotFound",
    "LibraryGroupResolver",
    "LinkConfiguration",
    "LinkValidationFailure",
    "MissingCandidate",
    "MsvcDialect",
    "OsFamily",
    "PathCandidateGenerator",
    "PlatformProfile",
    "PosixDialect",
    "ResolutionExhausted",
    "ResolvedLibraryGroup",
    "SearchOverrides",
    "collect_build_config",
    "detect_platform",
    "discover_wx_flags",
    "format_report",
    "resolve_link_configuration",
]
