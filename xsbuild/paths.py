# SPDX-FileCopyrightText: 2025 ModelCloud.ai
# SPDX-FileCopyrightText: 2025 qubitium@modelcloud.ai
# SPDX-License-Identifier: Apache-2.0
# Contact: qubitium@modelcloud.ai, x.com/qubitium

"""Candidate Boost include and library directories, in preference order."""

from __future__ import annotations

import platform
import re
import sys
from pathlib import Path

from .options import SearchOverrides
from .profile import PlatformProfile


WINDOWS_ROOTS = ("C:\\dev", "C:\\")

POSIX_INCLUDE_DIRS = ("/opt/local/include", "/usr/local/include", "/opt/include", "/usr/include")
POSIX_LIBRARY_DIRS = ("/opt/local/lib", "/usr/local/lib", "/opt/lib", "/usr/lib", "/lib")

HOMEBREW_PREFIX = "/opt/homebrew"

_NUMBER_RE = re.compile(r"(\d+)")


def _is_linux() -> bool:
    return sys.platform.startswith("linux")


def _linux_multiarch_dirs() -> list[str]:
    arch = platform.machine()
    mapping = {
        "x86_64": ["x86_64-linux-gnu"],
        "aarch64": ["aarch64-linux-gnu"],
        "arm64": ["aarch64-linux-gnu"],
        "armv7l": ["arm-linux-gnueabihf"],
        "armv6l": ["arm-linux-gnueabihf"],
        "armv8l": ["arm-linux-gnueabihf"],
        "i686": ["i386-linux-gnu"],
        "i386": ["i386-linux-gnu"],
        "ppc64le": ["powerpc64le-linux-gnu"],
        "s390x": ["s390x-linux-gnu"],
    }
    return mapping.get(arch, [])


def _natural_key(path: Path) -> list[tuple[int, int | str]]:
    # Ints sort against ints, strings against strings.
    return [
        (0, int(part)) if part.isdigit() else (1, part)
        for part in _NUMBER_RE.split(path.as_posix())
    ]


def _glob_newest_first(root: str, pattern: str) -> list[str]:
    base = Path(root)
    if not base.is_dir():
        return []
    matches = [match for match in base.glob(pattern) if match.is_dir()]
    return [str(match) for match in sorted(matches, key=_natural_key, reverse=True)]


def _extend_unique(target: list[str], value: str) -> None:
    if value and value not in target:
        target.append(value)


def _existing_dirs(candidates: list[str]) -> list[str]:
    result: list[str] = []
    for candidate in candidates:
        if Path(candidate).is_dir():
            _extend_unique(result, candidate)
    return result


class PathCandidateGenerator:
    def __init__(
        self,
        profile: PlatformProfile,
        overrides: SearchOverrides | None = None,
        windows_roots: tuple[str, ...] = WINDOWS_ROOTS,
    ) -> None:
        self.profile = profile
        self.overrides = overrides or SearchOverrides()
        self.windows_roots = windows_roots

    def _boost_dir_subdir(self, boost_dir: str, *parts: str) -> list[str]:
        subdir = Path(boost_dir).joinpath(*parts)
        if subdir.is_dir():
            return [str(subdir)]
        return [boost_dir]

    def _windows_globs(self, *patterns: str) -> list[str]:
        found: list[str] = []
        for pattern in patterns:
            for root in self.windows_roots:
                for match in _glob_newest_first(root, pattern):
                    _extend_unique(found, match)
        return found

    def _posix_defaults(self, defaults: tuple[str, ...], kind: str) -> list[str]:
        candidates = list(defaults)
        if self.profile.is_macos:
            # Ahead of /opt/<kind>, after the MacPorts and /usr/local prefixes.
            candidates.insert(2, f"{HOMEBREW_PREFIX}/{kind}")
        elif kind == "lib" and _is_linux() and "/usr/lib" in candidates:
            position = candidates.index("/usr/lib") + 1
            for offset, multiarch in enumerate(_linux_multiarch_dirs()):
                candidates.insert(position + offset, f"/usr/lib/{multiarch}")
        return _existing_dirs(candidates)

    def include_dirs(self) -> list[str]:
        if self.overrides.include_dir:
            return [self.overrides.include_dir]
        if self.overrides.boost_dir:
            return self._boost_dir_subdir(self.overrides.boost_dir, "include")
        if self.profile.is_windows:
            found = self._windows_globs("boost*/include")
            if not found:
                # No boost\include; the headers may sit in the boost root itself.
                found = self._windows_globs("boost*")
            return found
        return self._posix_defaults(POSIX_INCLUDE_DIRS, "include")

    def library_dirs(self) -> list[str]:
        if self.overrides.library_dir:
            return [self.overrides.library_dir]
        if self.overrides.boost_dir:
            return self._boost_dir_subdir(self.overrides.boost_dir, "stage", "lib")
        if self.profile.is_windows:
            return self._windows_globs("boost*/lib", "boost*/stage/lib")
        return self._posix_defaults(POSIX_LIBRARY_DIRS, "lib")
