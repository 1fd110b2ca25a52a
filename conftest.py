"""Project-wide pytest configuration.

Resolution reads ``SLIC3R_*``, ``BOOST_*`` and ``WX_CONFIG`` from the
environment; strip them so a developer's shell cannot steer the tests.
"""

import os

import pytest

_ENV_PREFIXES = ("SLIC3R_", "BOOST_")


@pytest.fixture(autouse=True)
def _clean_build_environment(monkeypatch):
    for name in list(os.environ):
        if name.startswith(_ENV_PREFIXES) or name == "WX_CONFIG":
            monkeypatch.delenv(name, raising=False)
    yield
