# SPDX-FileCopyrightText: 2025 ModelCloud.ai
# SPDX-FileCopyrightText: 2025 qubitium@modelcloud.ai
# SPDX-License-Identifier: Apache-2.0
# Contact: qubitium@modelcloud.ai, x.com/qubitium

from __future__ import annotations

import json
from pathlib import Path

import pytest

import xsbuild.__main__ as cli_mod
import xsbuild.build_config as build_config_mod
from xsbuild.build_config import collect_build_config, format_report, resolve_link_configuration
from xsbuild.gui import GuiToolkitFlags, GuiToolkitNotFound
from xsbuild.profile import CompilerFamily, OsFamily, PlatformProfile
from xsbuild.resolver import ResolutionExhausted


UNIX_GCC = PlatformProfile(OsFamily.UNIX, CompilerFamily.GCC)


def _no_fast_path(libraries, include_dirs=(), library_dirs=()):
    return bool(list(library_dirs))


def _boost_tree(root: Path, suffix: str = "-mt-x64") -> Path:
    (root / "include" / "boost").mkdir(parents=True)
    libdir = root / "stage" / "lib"
    libdir.mkdir(parents=True)
    for name in ("system", "thread", "log"):
        (libdir / f"libboost_{name}{suffix}.so").write_bytes(b"")
    return libdir


def test_boost_dir_resolution_end_to_end(tmp_path):
    libdir = _boost_tree(tmp_path)

    config = resolve_link_configuration(
        {"BOOST_DIR": str(tmp_path)},
        profile=UNIX_GCC,
        link_checker=_no_fast_path,
    )

    assert config.include_paths == ("src/libslic3r", "src/glew/include", str(tmp_path / "include"))
    assert config.linker_args == (
        "-Lsrc/libslic3r",
        f"-L{libdir}",
        "-lboost_system-mt-x64",
        "-lboost_thread-mt-x64",
        "-lboost_log-mt-x64",
    )
    assert "-DBOOST_LOG_DYN_LINK" in config.compile_defines
    assert config.compile_args == ("-std=c++11",)


def test_link_probe_sees_source_and_boost_includes(tmp_path):
    _boost_tree(tmp_path)
    seen = []

    def checker(libraries, include_dirs=(), library_dirs=()):
        seen.append(list(include_dirs))
        return bool(list(library_dirs))

    resolve_link_configuration({"BOOST_DIR": str(tmp_path)}, profile=UNIX_GCC, link_checker=checker)

    assert seen[-1] == ["src/libslic3r", "src/glew/include", str(tmp_path / "include")]


def test_gui_flags_requested_only_when_enabled(tmp_path):
    _boost_tree(tmp_path)
    requested = []

    def provider(environ):
        requested.append(environ)
        return GuiToolkitFlags(include_paths=("/wx",), link_args=("-lwx_core",))

    plain = resolve_link_configuration(
        {"BOOST_DIR": str(tmp_path)}, profile=UNIX_GCC, link_checker=_no_fast_path, gui_flags=provider
    )
    assert requested == []
    assert "-lwx_core" not in plain.linker_args

    gui = resolve_link_configuration(
        {"BOOST_DIR": str(tmp_path), "SLIC3R_GUI": "1"},
        profile=UNIX_GCC,
        link_checker=_no_fast_path,
        gui_flags=provider,
    )
    assert len(requested) == 1
    assert gui.linker_args[-3:] == ("-lGL", "-lGLU", "-lwx_core")
    assert "/wx" in gui.include_paths


def test_invalid_override_falls_back_to_defaults(tmp_path, monkeypatch):
    libdir = _boost_tree(tmp_path / "fallback")
    monkeypatch.setattr(build_config_mod.PathCandidateGenerator, "library_dirs", lambda self: [str(libdir)])

    config = resolve_link_configuration(
        {"BOOST_LIBRARYDIR": str(tmp_path / "does-not-exist")},
        profile=UNIX_GCC,
        link_checker=_no_fast_path,
    )

    assert f"-L{libdir}" in config.linker_args


def test_exhaustion_produces_no_configuration(tmp_path):
    empty = tmp_path / "empty"
    empty.mkdir()

    with pytest.raises(ResolutionExhausted) as excinfo:
        resolve_link_configuration(
            {"BOOST_LIBRARYDIR": str(empty), "BOOST_INCLUDEDIR": str(empty)},
            profile=UNIX_GCC,
            link_checker=lambda *args, **kwargs: False,
        )

    assert excinfo.value.searched == (str(empty),)


def test_collect_build_config_returns_extension_kwargs():
    kwargs = collect_build_config({}, profile=UNIX_GCC, link_checker=lambda *args, **kwargs: True)

    assert set(kwargs) == {"include_dirs", "define_macros", "extra_compile_args", "extra_link_args"}
    assert kwargs["extra_link_args"] == ["-Lsrc/libslic3r", "-lboost_system", "-lboost_thread", "-lboost_log"]
    assert ("BOOST_LIBS", None) in kwargs["define_macros"]


def test_format_report_quotes_values():
    config = build_config_mod.LinkConfiguration(
        include_paths=("a", "b"), compile_defines=("-DX",), linker_args=("-lz",)
    )

    assert format_report(config).splitlines() == [
        'With INC: "a", "b"',
        'With DEFINES: "-DX"',
        "With CFLAGS: ",
        'With LIBS: "-lz"',
    ]


def test_cli_reports_fatal_error(monkeypatch, capsys):
    def exhausted():
        raise ResolutionExhausted(("system", "thread", "log"), ["/usr/lib"])

    monkeypatch.setattr(cli_mod, "resolve_link_configuration", exhausted)

    assert cli_mod.main([]) == 1
    assert "BOOST_DIR" in capsys.readouterr().err


def test_cli_prints_json(monkeypatch, capsys):
    config = build_config_mod.LinkConfiguration(compile_defines=("-DNDEBUG",), linker_args=("-lboost_system",))
    monkeypatch.setattr(cli_mod, "resolve_link_configuration", lambda: config)

    assert cli_mod.main(["--json"]) == 0
    payload = json.loads(capsys.readouterr().out)
    assert payload["define_macros"] == [["NDEBUG", None]]
    assert payload["extra_link_args"] == ["-lboost_system"]


def test_cli_reports_missing_gui_toolkit(monkeypatch, capsys):
    def missing_toolkit():
        raise GuiToolkitNotFound("GUI support requires wxWidgets, but `wx-config` could not report its flags.")

    monkeypatch.setattr(cli_mod, "resolve_link_configuration", missing_toolkit)

    assert cli_mod.main([]) == 1
    captured = capsys.readouterr()
    assert "wx-config" in captured.err
    assert captured.out == ""
