"""Shared fixtures: isolate global logging and settings state per test."""

from __future__ import annotations

import io
from collections.abc import Iterator

import pytest

from resultcase.observability import configure_logging
from resultcase.settings import clear_settings_cache


@pytest.fixture(autouse=True)
def reset_logging() -> Iterator[None]:
    """Silence logging before and after each test."""
    configure_logging("none")
    yield
    configure_logging("none")


@pytest.fixture(autouse=True)
def clean_settings(monkeypatch: pytest.MonkeyPatch, tmp_path: object) -> Iterator[None]:
    """Run each test away from any local .env with a fresh settings cache."""
    monkeypatch.chdir(tmp_path)
    clear_settings_cache()
    yield
    clear_settings_cache()


@pytest.fixture
def log_output() -> io.StringIO:
    return io.StringIO()
