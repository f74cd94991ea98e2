"""
Global test configuration.
"""

import os

import pytest

from openai_engines.config import FrozenConfig


# --- Environment Isolation (Autouse) ---
@pytest.fixture(autouse=True)
def isolate_openai_env(request, monkeypatch):
    """Ensure a clean OPENAI_* environment for each test.

    Escape hatch: @pytest.mark.allow_env_pollution keeps the current env.
    Tests marked with @pytest.mark.api also bypass isolation so real
    credentials can be used when explicitly running API tests.
    """
    if request.node.get_closest_marker("allow_env_pollution") or (
        "api" in request.node.keywords
    ):
        return

    for key in list(os.environ.keys()):
        if key.startswith("OPENAI_"):
            monkeypatch.delenv(key, raising=False)


@pytest.fixture(autouse=True)
def neutral_working_directory(monkeypatch, tmp_path):
    """Run each test from an empty directory.

    Prevents a developer's pyproject.toml from leaking into config resolution.
    """
    monkeypatch.chdir(tmp_path)


def pytest_configure(config):
    """Configure custom markers for test organization."""
    markers = [
        "unit: Fast, isolated unit tests",
        "contract: Invariants the decoding and configuration layers must keep",
        "integration: Client tests against a mocked HTTP backend",
        "api: Real API integration tests (requires API key)",
        "allow_env_pollution: Keep the real OPENAI_* environment",
    ]
    for marker in markers:
        config.addinivalue_line("markers", marker)


def pytest_collection_modifyitems(config, items):  # noqa: ARG001
    """Automatically skip API tests when API key is unavailable."""
    if not (os.getenv("OPENAI_API_KEY") and os.getenv("ENABLE_API_TESTS")):
        skip_api = pytest.mark.skip(
            reason="API tests require OPENAI_API_KEY and ENABLE_API_TESTS=1",
        )
        for item in items:
            if "api" in item.keywords:
                item.add_marker(skip_api)


# --- Core Fixtures ---


@pytest.fixture
def frozen_config():
    """A complete configuration that never reaches a real backend."""
    return FrozenConfig(
        api_key="sk-test-1234567890",
        organization="org-test",
        base_url="https://api.openai.com/v1",
        timeout_seconds=5.0,
    )
