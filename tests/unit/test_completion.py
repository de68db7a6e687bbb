"""Tests for the completion request builder and client."""

import asyncio
import json
import threading

import httpx
import pytest

from docgen_mcp.core.exceptions import (
    CompletionCancelledError,
    CompletionError,
    CompletionTimeoutError,
    MissingCredentialError,
)
from docgen_mcp.features.documentation.completion import (
    CompletionClient,
    build_completion_request,
    documentation_dialect,
)
from docgen_mcp.models.config import DocGenConfig


class TestBuildCompletionRequest:
    """Tests for prompt and parameter construction."""

    def test_dialects(self):
        assert documentation_dialect("Java") == "JavaDoc"
        assert documentation_dialect("kotlin") == "KDoc"
        assert documentation_dialect("Rust") == "documentation"

    def test_kotlin_prompt(self):
        source = "fun greet(name: String): String = \"Hi $name\""
        request = build_completion_request(source, "Kotlin", model="m")
        assert "KDoc" in request.prompt
        assert "written in Kotlin" in request.prompt
        assert f"```Kotlin\n{source}\n```" in request.prompt

    def test_java_prompt(self):
        request = build_completion_request("int add(int a, int b) { return a + b; }", "java")
        assert request.prompt.startswith("Return only the JavaDoc for the function below")
        assert "```Java\n" in request.prompt

    def test_unknown_language_keeps_its_name(self):
        request = build_completion_request("fn x() {}", "Rust")
        assert "Return only the documentation" in request.prompt
        assert "```Rust\n" in request.prompt

    def test_fixed_sampling_parameters(self):
        request = build_completion_request("x", "Java", model="code-model")
        assert request.model == "code-model"
        assert request.temperature == 0.7
        assert request.max_tokens == 256
        assert request.top_p == 1.0
        assert request.frequency_penalty == 0.0
        assert request.presence_penalty == 0.0

    def test_payload(self):
        payload = build_completion_request("x", "Java", model="m").to_payload()
        assert set(payload) == {
            "model", "prompt", "temperature", "max_tokens", "top_p", "frequency_penalty", "presence_penalty",
        }


class TestCompletionClientConstruction:
    """Tests for client credential handling."""

    @pytest.mark.parametrize("credential", ["", "   "])
    def test_missing_credential(self, credential):
        with pytest.raises(MissingCredentialError, match="OPENAI_API_KEY"):
            CompletionClient(credential=credential)

    def test_from_config(self):
        config = DocGenConfig(enabled=True, credential="sk-x", model="m", base_url="http://llm/v1/", timeout_seconds=3)
        client = CompletionClient.from_config(config)
        assert client.model == "m"
        assert client.base_url == "http://llm/v1"
        assert client.timeout_seconds == 3

    def test_from_config_without_credential(self):
        with pytest.raises(MissingCredentialError):
            CompletionClient.from_config(DocGenConfig(enabled=True))


class TestCompletionClientCalls:
    """Tests for the HTTP call and its synchronous bridge."""

    def test_success(self, completion_transport_factory):
        transport = completion_transport_factory({"choices": [{"text": "/** Adds. */"}, {"text": "ignored"}]})
        client = CompletionClient("sk-test", model="m", base_url="http://llm/v1", transport=transport)

        response = client.complete(build_completion_request("int add() {}", "Java", model="m"))

        assert response.first_text == "/** Adds. */"
        sent = transport.requests[0]
        assert sent.url == "http://llm/v1/completions"
        assert sent.headers["Authorization"] == "Bearer sk-test"
        body = json.loads(sent.content)
        assert body["model"] == "m"
        assert body["max_tokens"] == 256

    def test_empty_choices(self, completion_transport_factory):
        client = CompletionClient("sk-test", transport=completion_transport_factory({"choices": []}))
        assert client.complete(build_completion_request("x", "Java")).first_text == ""

    def test_http_error(self, completion_transport_factory):
        transport = completion_transport_factory({"error": {"message": "bad key"}}, status_code=401)
        client = CompletionClient("sk-test", transport=transport)
        with pytest.raises(CompletionError, match="HTTP 401"):
            client.complete(build_completion_request("x", "Java"))

    def test_malformed_body(self, completion_transport_factory):
        client = CompletionClient("sk-test", transport=completion_transport_factory({"result": "x"}))
        with pytest.raises(CompletionError, match="choices"):
            client.complete(build_completion_request("x", "Java"))

    def test_invalid_json(self, completion_transport_factory):
        client = CompletionClient("sk-test", transport=completion_transport_factory(raw="<html>oops</html>"))
        with pytest.raises(CompletionError, match="not valid JSON"):
            client.complete(build_completion_request("x", "Java"))

    def test_network_error(self):
        def handler(request):
            raise httpx.ConnectError("connection refused", request=request)

        client = CompletionClient("sk-test", transport=httpx.MockTransport(handler))
        with pytest.raises(CompletionError, match="connection refused"):
            client.complete(build_completion_request("x", "Java"))

    def test_timeout(self):
        async def handler(request):
            await asyncio.sleep(2)
            return httpx.Response(200, json={"choices": [{"text": "late"}]})

        client = CompletionClient("sk-test", transport=httpx.MockTransport(handler))
        with pytest.raises(CompletionTimeoutError):
            client.complete(build_completion_request("x", "Java"), timeout=0.05)

    def test_cancelled_before_send(self, completion_transport_factory):
        transport = completion_transport_factory({"choices": [{"text": "x"}]})
        client = CompletionClient("sk-test", transport=transport)
        event = threading.Event()
        event.set()
        with pytest.raises(CompletionCancelledError):
            client.complete(build_completion_request("x", "Java"), cancel_event=event)
        assert transport.requests == []

    def test_cancelled_in_flight(self):
        async def handler(request):
            await asyncio.sleep(2)
            return httpx.Response(200, json={"choices": [{"text": "late"}]})

        client = CompletionClient("sk-test", transport=httpx.MockTransport(handler))
        event = threading.Event()
        timer = threading.Timer(0.05, event.set)
        timer.start()
        try:
            with pytest.raises(CompletionCancelledError):
                client.complete(build_completion_request("x", "Java"), timeout=5, cancel_event=event)
        finally:
            timer.cancel()

    def test_complete_inside_running_loop(self, completion_transport_factory):
        """Test the sync bridge works when called from async code."""
        transport = completion_transport_factory({"choices": [{"text": "/** ok */"}]})
        client = CompletionClient("sk-test", transport=transport)

        async def caller():
            return client.complete(build_completion_request("x", "Java"))

        assert asyncio.run(caller()).first_text == "/** ok */"

    def test_acomplete(self, completion_transport_factory):
        client = CompletionClient("sk-test", transport=completion_transport_factory({"choices": [{"text": "t"}]}))
        response = asyncio.run(client.acomplete(build_completion_request("x", "Java")))
        assert response.first_text == "t"
