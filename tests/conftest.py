"""Shared pytest fixtures for flux_bootstrap tests."""

from __future__ import annotations

import os

import pytest


@pytest.fixture(autouse=True)
def reset_environment(monkeypatch: pytest.MonkeyPatch) -> None:
    """Reset environment variables for each test."""
    # Clear any OPS_ prefixed environment variables
    for key in list(os.environ.keys()):
        if key.startswith("OPS_"):
            monkeypatch.delenv(key, raising=False)
