"""Shared pytest fixtures for hub proxy test suites."""

from collections.abc import Callable
from collections.abc import Generator
from pathlib import Path
from typing import Any
import sys

import pytest
from fastapi.testclient import TestClient

PROJECT_ROOT = Path(__file__).resolve().parents[1]
if str(PROJECT_ROOT) not in sys.path:
    sys.path.insert(0, str(PROJECT_ROOT))

from hub_proxy.hub.result import HubResult  # noqa: E402


class RecordingHubClient:
    """Hub double that records every call and returns configurable results."""

    def __init__(self) -> None:
        self.calls: list[tuple[str, dict[str, Any]]] = []
        self.results: dict[str, HubResult[Any]] = {}
        self.failures: dict[str, Exception] = {}

    def __getattr__(self, name: str) -> Callable[..., HubResult[Any]]:
        if not name.startswith("get_"):
            raise AttributeError(name)

        def call(**kwargs: Any) -> HubResult[Any]:
            self.calls.append((name, kwargs))
            if name in self.failures:
                raise self.failures[name]
            return self.results.get(name, HubResult.ok({"method": name}))

        return call


@pytest.fixture
def fake_hub() -> RecordingHubClient:
    return RecordingHubClient()


@pytest.fixture
def client(fake_hub: RecordingHubClient) -> Generator[TestClient, None, None]:
    """Provide an API test client with the hub replaced by a recording double."""
    from hub_proxy.hub.client import get_hub_client
    from hub_proxy.main import app

    app.dependency_overrides[get_hub_client] = lambda: fake_hub
    try:
        with TestClient(app) as test_client:
            yield test_client
    finally:
        app.dependency_overrides.clear()
