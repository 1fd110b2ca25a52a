# SPDX-FileCopyrightText: 2025 ModelCloud.ai
# SPDX-FileCopyrightText: 2025 qubitium@modelcloud.ai
# SPDX-License-Identifier: Apache-2.0
# Contact: qubitium@modelcloud.ai, x.com/qubitium

"""Locate one consistent set of Boost libraries.

Boost publishes each component as a separate file whose name carries the
toolset, threading model and version tags, e.g. ``libboost_system-mt-x64.so``.
The resolver harvests that tag string (the *suffix*) from the first required
library found in a directory and then insists that every other required
library exists in the same directory with the identical suffix. On gcc-like
toolchains the set is additionally verified by linking a probe program.
"""

from __future__ import annotations

import logging
import re
from collections.abc import Callable, Iterable, Mapping, Sequence
from dataclasses import dataclass, field
from pathlib import Path
from types import MappingProxyType

from .options import FeatureToggleSet
from .probe import check_lib
from .profile import PlatformProfile


logger = logging.getLogger(__name__)

BOOST_LIBRARIES = ("system", "thread", "log")
LIBRARY_PREFIX = "lib"
BOOST_PREFIX = "boost_"

LinkChecker = Callable[..., bool]


class CandidateRejected(Exception):
    """A search directory cannot provide the required library set."""

    def __init__(self, directory: str, reason: str) -> None:
        super().__init__(f"{directory}: {reason}")
        self.directory = directory
        self.reason = reason


class MissingCandidate(CandidateRejected):
    pass


class LinkValidationFailure(CandidateRejected):
    pass


class ResolutionExhausted(RuntimeError):
    def __init__(self, libraries: Sequence[str], searched: Sequence[str]) -> None:
        self.libraries = tuple(libraries)
        self.searched = tuple(searched)
        super().__init__(self._render())

    def _render(self) -> str:
        names = ", ".join(f"{BOOST_PREFIX}{name}" for name in self.libraries)
        if self.searched:
            locations = "\n".join(f"    {path}" for path in self.searched)
        else:
            locations = "    (no candidate directories exist)"
        return (
            f"Slic3r requires the Boost libraries ({names}). "
            "Please make sure they are installed.\n"
            "\n"
            f"{BOOST_PREFIX}{self.libraries[0]} could not be resolved in any of:\n"
            f"{locations}\n"
            "\n"
            "If they are installed elsewhere, supply their path through the\n"
            "BOOST_DIR environment variable:\n"
            "\n"
            "    BOOST_DIR=/path/to/boost python -m xsbuild\n"
            "\n"
            "Or specify BOOST_INCLUDEDIR and BOOST_LIBRARYDIR separately, which\n"
            "is handy if you have built Boost libraries with multiple settings.\n"
        )


@dataclass(frozen=True)
class ResolvedLibraryGroup:
    # None when the platform linker found the libraries on its default path.
    directory: str | None
    suffix: str
    files: Mapping[str, str] = field(default_factory=dict)
    dynamically_linked: bool = False

    def __post_init__(self) -> None:
        object.__setattr__(self, "files", MappingProxyType(dict(self.files)))

    def link_names(self, libraries: Iterable[str]) -> list[str]:
        return [f"{BOOST_PREFIX}{name}{self.suffix}" for name in libraries]

    def file_paths(self, libraries: Iterable[str]) -> list[str]:
        if self.directory is None:
            raise ValueError("library group was resolved without a directory")
        return [str(Path(self.directory) / self.files[name]) for name in libraries]


class LibraryGroupResolver:
    def __init__(
        self,
        profile: PlatformProfile,
        toggles: FeatureToggleSet,
        libraries: Sequence[str] = BOOST_LIBRARIES,
        include_dirs: Sequence[str] = (),
        link_checker: LinkChecker = check_lib,
    ) -> None:
        if not libraries:
            raise ValueError("at least one library is required")
        self.profile = profile
        self.toggles = toggles
        self.libraries = tuple(libraries)
        self.include_dirs = tuple(include_dirs)
        self.link_checker = link_checker
        self.extension = profile.library_extension(toggles.static_linking)

    @property
    def pivot(self) -> str:
        return self.libraries[0]

    def library_filename(self, name: str, suffix: str) -> str:
        return f"{LIBRARY_PREFIX}{BOOST_PREFIX}{name}{suffix}{self.extension}"

    def _fast_path(self) -> ResolvedLibraryGroup | None:
        if self.toggles.static_linking or self.profile.is_windows:
            return None
        names = [f"{BOOST_PREFIX}{name}" for name in self.libraries]
        if not self.link_checker(names):
            return None
        logger.info("Boost found on the default linker search path")
        return ResolvedLibraryGroup(
            directory=None,
            suffix="",
            files=dict(zip(self.libraries, names)),
            dynamically_linked=True,
        )

    def _discover_suffix(self, directory: str) -> str:
        stem = f"{LIBRARY_PREFIX}{BOOST_PREFIX}{self.pivot}"
        matches = sorted(
            match for match in Path(directory).glob(f"{stem}*{self.extension}") if match.is_file()
        )
        if not matches:
            raise MissingCandidate(directory, f"no {stem}*{self.extension}")

        pattern = re.compile(rf"^{re.escape(stem)}([^.]*){re.escape(self.extension)}$")
        found = pattern.match(matches[0].name)
        if found is None:
            raise MissingCandidate(directory, f"cannot parse suffix of {matches[0].name}")
        return found.group(1)

    def _inspect(self, directory: str) -> ResolvedLibraryGroup:
        suffix = self._discover_suffix(directory)

        files: dict[str, str] = {}
        for name in self.libraries:
            filename = self.library_filename(name, suffix)
            if not (Path(directory) / filename).is_file():
                raise MissingCandidate(directory, f"{filename} is missing")
            files[name] = filename

        if not self.profile.is_msvc:
            names = [f"{BOOST_PREFIX}{name}{suffix}" for name in self.libraries]
            linked = self.link_checker(
                names,
                include_dirs=list(self.include_dirs),
                library_dirs=[directory],
            )
            if not linked:
                raise LinkValidationFailure(directory, f"probe link against {names} failed")

        return ResolvedLibraryGroup(directory=directory, suffix=suffix, files=files)

    def resolve(self, candidate_dirs: Iterable[str]) -> ResolvedLibraryGroup:
        group = self._fast_path()
        if group is not None:
            return group

        searched: list[str] = []
        for directory in candidate_dirs:
            searched.append(directory)
            try:
                group = self._inspect(directory)
            except CandidateRejected as exc:
                logger.debug("Skipping Boost candidate %s", exc)
                continue
            logger.info("Using Boost libraries from %s (suffix %r)", directory, group.suffix)
            return group

        raise ResolutionExhausted(self.libraries, searched)
