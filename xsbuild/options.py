# SPDX-FileCopyrightText: 2025 ModelCloud.ai
# SPDX-FileCopyrightText: 2025 qubitium@modelcloud.ai
# SPDX-License-Identifier: Apache-2.0
# Contact: qubitium@modelcloud.ai, x.com/qubitium

"""Build options read from the environment.

Two snapshots are taken once per run: the feature toggles that switch defines
and libraries on or off, and the explicit Boost search overrides.
"""

from __future__ import annotations

import logging
import os
from collections.abc import Mapping
from dataclasses import dataclass, fields, replace
from pathlib import Path
from typing import Any


logger = logging.getLogger(__name__)

_TRUTHY_VALUES = {"1", "true", "yes", "on"}

TOGGLE_ENVIRONMENT = {
    "gui_enabled": "SLIC3R_GUI",
    "profiling_enabled": "SLIC3R_PROFILE",
    "static_linking": "SLIC3R_STATIC",
    "debug_build": "SLIC3R_DEBUG",
    "broken_croak_workaround": "SLIC3R_HAS_BROKEN_CROAK",
}

OVERRIDE_ENVIRONMENT = {
    "boost_dir": "BOOST_DIR",
    "include_dir": "BOOST_INCLUDEDIR",
    "library_dir": "BOOST_LIBRARYDIR",
}


def is_truthy(value: Any) -> bool:
    if isinstance(value, bool):
        return value
    if isinstance(value, int):
        return value != 0
    if isinstance(value, str):
        return value.strip().lower() in _TRUTHY_VALUES
    return False


@dataclass(frozen=True)
class FeatureToggleSet:
    gui_enabled: bool = False
    profiling_enabled: bool = False
    static_linking: bool = False
    debug_build: bool = False
    broken_croak_workaround: bool = False

    @classmethod
    def from_mapping(cls, mapping: Mapping[str, Any]) -> FeatureToggleSet:
        values = {
            field.name: is_truthy(mapping[field.name])
            for field in fields(cls)
            if field.name in mapping
        }
        return cls(**values)

    @classmethod
    def from_environ(cls, environ: Mapping[str, str] | None = None) -> FeatureToggleSet:
        if environ is None:
            environ = os.environ
        return cls.from_mapping(
            {
                name: environ[variable]
                for name, variable in TOGGLE_ENVIRONMENT.items()
                if variable in environ
            }
        )


@dataclass(frozen=True)
class SearchOverrides:
    boost_dir: str | None = None
    include_dir: str | None = None
    library_dir: str | None = None

    @classmethod
    def from_environ(cls, environ: Mapping[str, str] | None = None) -> SearchOverrides:
        if environ is None:
            environ = os.environ
        values: dict[str, str] = {}
        for name, variable in OVERRIDE_ENVIRONMENT.items():
            value = environ.get(variable, "").strip()
            if value:
                values[name] = value
        return cls(**values)

    def validated(self) -> SearchOverrides:
        """Drop overrides that do not name an existing directory."""

        cleared: dict[str, None] = {}
        for name, variable in OVERRIDE_ENVIRONMENT.items():
            value = getattr(self, name)
            if value is not None and not Path(value).is_dir():
                logger.warning(
                    "Ignoring %s=%s: not a directory, falling back to default search paths",
                    variable,
                    value,
                )
                cleared[name] = None
        if not cleared:
            return self
        return replace(self, **cleared)
