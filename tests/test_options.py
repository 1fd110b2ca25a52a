from __future__ import annotations

import logging

import pytest

from xsbuild.options import FeatureToggleSet, SearchOverrides, is_truthy


@pytest.mark.parametrize(
    ("value", "expected"),
    [
        (True, True),
        (False, False),
        (1, True),
        (0, False),
        ("1", True),
        (" Yes ", True),
        ("on", True),
        ("TRUE", True),
        ("0", False),
        ("", False),
        ("enabled", False),
        (None, False),
        (["1"], False),
    ],
)
def test_is_truthy(value, expected):
    assert is_truthy(value) is expected


def test_from_mapping_ignores_unknown_and_defaults_false():
    toggles = FeatureToggleSet.from_mapping({"gui_enabled": "1", "colour": True})

    assert toggles == FeatureToggleSet(gui_enabled=True)


def test_from_environ_reads_slic3r_variables():
    environ = {
        "SLIC3R_GUI": "1",
        "SLIC3R_PROFILE": "yes",
        "SLIC3R_STATIC": "0",
        "SLIC3R_DEBUG": "on",
        "SLIC3R_HAS_BROKEN_CROAK": "true",
        "PATH": "/usr/bin",
    }

    assert FeatureToggleSet.from_environ(environ) == FeatureToggleSet(
        gui_enabled=True,
        profiling_enabled=True,
        static_linking=False,
        debug_build=True,
        broken_croak_workaround=True,
    )


def test_from_environ_defaults_to_process_environment(monkeypatch):
    monkeypatch.setenv("SLIC3R_STATIC", "1")

    assert FeatureToggleSet.from_environ().static_linking is True


def test_overrides_from_environ_ignore_blank_values():
    overrides = SearchOverrides.from_environ({"BOOST_DIR": "  ", "BOOST_LIBRARYDIR": "/opt/lib"})

    assert overrides == SearchOverrides(library_dir="/opt/lib")


def test_validated_drops_missing_directories(tmp_path, caplog):
    overrides = SearchOverrides(
        boost_dir=str(tmp_path),
        include_dir=str(tmp_path / "missing"),
        library_dir=str(tmp_path / "also-missing"),
    )

    with caplog.at_level(logging.WARNING, logger="xsbuild.options"):
        validated = overrides.validated()

    assert validated == SearchOverrides(boost_dir=str(tmp_path))
    assert "BOOST_INCLUDEDIR" in caplog.text
    assert "BOOST_LIBRARYDIR" in caplog.text


def test_validated_keeps_valid_overrides(tmp_path):
    overrides = SearchOverrides(include_dir=str(tmp_path))

    assert overrides.validated() is overrides
