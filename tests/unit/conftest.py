"""
Pytest configuration for unit tests.

Keeps the developer's environment from leaking into configuration tests.
"""

import pytest


@pytest.fixture(autouse=True)
def _isolate_environment(monkeypatch):
    """Drop OWNERS_COUNT_* and GITHUB_TOKEN variables for every unit test."""
    import os

    for name in list(os.environ):
        if name.startswith("OWNERS_COUNT_") or name == "GITHUB_TOKEN":
            monkeypatch.delenv(name, raising=False)
