"""Pytest configuration and fixtures for go-bootstrap tests."""

from __future__ import annotations

import os
from collections.abc import Generator

import pytest

# Set a fixed terminal width to prevent line wrapping issues in CI
# This must be set before any Rich imports
os.environ.setdefault("COLUMNS", "200")
os.environ.setdefault("LINES", "50")
# Disable Rich's terminal detection to ensure consistent output
os.environ.setdefault("TERM", "dumb")


@pytest.fixture(autouse=True)
def clean_env(monkeypatch: pytest.MonkeyPatch) -> Generator[None, None, None]:
    """Remove GOPATH and GO_BOOTSTRAP_* settings leaking in from the shell."""
    monkeypatch.delenv("GOPATH", raising=False)
    for var in list(os.environ):
        if var.startswith("GO_BOOTSTRAP_"):
            monkeypatch.delenv(var, raising=False)
    yield
