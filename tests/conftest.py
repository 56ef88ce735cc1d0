"""Shared fixtures."""

from __future__ import annotations

import pytest

from tests.fakes import FakeBackend


@pytest.fixture
def backend() -> FakeBackend:
    return FakeBackend()
