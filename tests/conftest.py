"""
Global test configuration.
"""

import os

import pytest

from conversion_gen.catalog import default_catalog
from conversion_gen.config import FrozenConfig


# --- Environment Isolation (Autouse) ---
@pytest.fixture(autouse=True)
def isolate_conversion_gen_env(request, monkeypatch):
    """Ensure a clean CONVERSION_GEN_* environment for each test.

    Escape hatch: mark a test with @pytest.mark.allow_env_pollution to keep
    the current environment unchanged.
    """
    if request.node.get_closest_marker("allow_env_pollution"):
        return

    for key in list(os.environ.keys()):
        if key.startswith("CONVERSION_GEN_"):
            monkeypatch.delenv(key, raising=False)


@pytest.fixture
def isolated_project(tmp_path, monkeypatch):
    """Run the test from an empty directory with no pyproject.toml."""
    monkeypatch.chdir(tmp_path)
    return tmp_path


# --- Test Environment Markers ---
def pytest_configure(config):
    """Configure custom markers for test organization."""
    markers = [
        "unit: Fast, isolated unit tests",
        "contract: Stage contract tests",
        "characterization: Golden master tests to detect behavior changes.",
        "allow_env_pollution: Keep CONVERSION_GEN_* variables for this test",
    ]
    for marker in markers:
        config.addinivalue_line("markers", marker)


# --- Core Fixtures ---


@pytest.fixture
def catalog():
    """The built-in catalog."""
    return default_catalog()


@pytest.fixture
def frozen_config():
    """Default configuration without touching any config source."""
    return FrozenConfig()
