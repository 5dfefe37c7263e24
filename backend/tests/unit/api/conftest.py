"""Fixtures for API route tests with mocked services."""

from collections.abc import Callable, Generator
from typing import Any
from unittest.mock import MagicMock

import pytest
from fastapi.testclient import TestClient

from rvstay_api.main import app


@pytest.fixture
def client() -> Generator[TestClient, None, None]:
    """Test client; dependency overrides are cleared afterwards."""
    yield TestClient(app)
    app.dependency_overrides.clear()


@pytest.fixture
def override() -> Callable[[Callable[..., Any]], MagicMock]:
    """Replace a service dependency with a MagicMock and return the mock."""

    def _override(dependency: Callable[..., Any]) -> MagicMock:
        mock = MagicMock()
        app.dependency_overrides[dependency] = lambda: mock
        return mock

    return _override
