"""Shared fixtures for OWNERS count tests."""

from __future__ import annotations

from collections.abc import Callable
from pathlib import Path

import pytest


class FakeValidator:
    """In-memory identity validator that records every call."""

    def __init__(self, valid: set[str] | None = None):
        self.valid = set(valid or ())
        self.calls: list[str] = []

    def is_valid(self, name: str) -> bool:
        self.calls.append(name)
        return name in self.valid


@pytest.fixture
def make_validator() -> Callable[..., FakeValidator]:
    """Factory for validators accepting a fixed set of account names."""

    def _make(*valid: str) -> FakeValidator:
        return FakeValidator(set(valid))

    return _make


@pytest.fixture
def write_file() -> Callable[[Path, str], Path]:
    """Write a file, creating parent directories."""

    def _write(path: Path, content: str) -> Path:
        path.parent.mkdir(parents=True, exist_ok=True)
        path.write_text(content, encoding="utf-8")
        return path

    return _write
