"""Shared pytest fixtures for unit tests.

This module provides reusable fixtures for all unit test modules, including:
- Core fixtures (MockFastMCP, registered documentation tools)
- Configuration fixtures (stub and completion configs)
- Completion fixtures (httpx mock transports, fake clients)
"""

from typing import Any, Callable, Dict, List, Optional
from unittest.mock import MagicMock

import httpx
import pytest

from docgen_mcp.models.config import DocGenConfig
from docgen_mcp.models.documentation import CompletionChoice, CompletionResponse


class MockFastMCP:
    """Mock FastMCP class for testing."""

    def __init__(self, name: str) -> None:
        self.name = name
        self.tools: Dict[str, Any] = {}

    def tool(self, **kwargs: Any) -> Any:
        def decorator(func: Any) -> Any:
            self.tools[func.__name__] = func
            return func
        return decorator

    def run(self, **kwargs: Any) -> None:
        pass


# Tool Access Fixtures

@pytest.fixture
def mock_mcp() -> MockFastMCP:
    """MockFastMCP with the documentation tools registered."""
    from docgen_mcp.server.registry import register_all_tools

    mcp = MockFastMCP("docgen")
    register_all_tools(mcp)
    return mcp


# Configuration Fixtures

@pytest.fixture
def stub_config() -> DocGenConfig:
    return DocGenConfig(enabled=False)


@pytest.fixture
def completion_config() -> DocGenConfig:
    return DocGenConfig(enabled=True, credential="sk-test", model="test-model", timeout_seconds=5.0)


# Completion Fixtures

@pytest.fixture
def completion_transport_factory() -> Callable[..., Any]:
    """Factory for httpx.MockTransport answering every request with ``body``.

    The returned transport records requests in its ``requests`` attribute.
    """
    def _factory(body: Any = None, status_code: int = 200, raw: Optional[str] = None) -> httpx.MockTransport:
        seen: List[httpx.Request] = []

        def handler(request: httpx.Request) -> httpx.Response:
            seen.append(request)
            if raw is not None:
                return httpx.Response(status_code, text=raw)
            return httpx.Response(status_code, json=body)

        transport = httpx.MockTransport(handler)
        transport.requests = seen  # type: ignore[attr-defined]
        return transport

    return _factory


@pytest.fixture
def fake_completion_client() -> Callable[[str], MagicMock]:
    """Factory for a MagicMock CompletionClient whose ``complete`` returns ``text``."""
    def _factory(text: str) -> MagicMock:
        client = MagicMock()
        client.model = "test-model"
        client.complete.return_value = CompletionResponse(choices=[CompletionChoice(text=text)])
        return client

    return _factory
