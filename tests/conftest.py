"""Shared fixtures for nugettree tests."""

from __future__ import annotations

from collections.abc import Iterator
from unittest.mock import AsyncMock, patch

import pytest

from tests.helpers import FakeRegistry


@pytest.fixture
def fake_registry() -> Iterator[FakeRegistry]:
    """Patch the registry client's ``fetch_json`` with an in-memory registry."""
    registry = FakeRegistry()
    with patch(
        "nugettree.registry.client.fetch_json",
        new=AsyncMock(side_effect=registry.fetch),
    ):
        yield registry
