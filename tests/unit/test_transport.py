"""Unit tests for the HTTP transport and the Tavily search client."""

import asyncio
import json

import httpx
import pytest

from coeditor.core.errors import TransportError
from coeditor.core.models import ApiKeys, ChatMessage, Instruction, Provider
from coeditor.editing.transport import AiTransport
from coeditor.strategies.search import TavilySearchClient

from .fakes import make_settings


class Recorder:
    """httpx MockTransport handler that records requests and replays one response."""

    def __init__(self, response: httpx.Response | Exception) -> None:
        self.response = response
        self.requests: list[httpx.Request] = []

    def __call__(self, request: httpx.Request) -> httpx.Response:
        self.requests.append(request)
        if isinstance(self.response, Exception):
            raise self.response
        return self.response

    @property
    def last_body(self) -> dict:
        return json.loads(self.requests[-1].content)


def _transport(handler: Recorder) -> AiTransport:
    client = httpx.AsyncClient(
        transport=httpx.MockTransport(handler),
        base_url="http://assistant.test",
    )
    return AiTransport(client=client)


class TestAiTransport:
    """Test suite for AiTransport."""

    def test_suggest_edit_body(self):
        """Test the edit request body and response parsing."""
        handler = Recorder(httpx.Response(200, json={"suggestion": " Short. ", "text": " Short. "}))

        result = asyncio.run(
            _transport(handler).suggest_edit("Long text here", Instruction.SHORTEN)
        )

        assert result == "Short."
        assert handler.requests[0].url.path == "/api/ai"
        assert handler.last_body == {
            "action": "edit",
            "selection": "Long text here",
            "instruction": "shorten",
        }

    def test_routing_fields(self):
        """Test that provider and only the present keys are sent."""
        handler = Recorder(httpx.Response(200, json={"suggestion": "ok"}))

        asyncio.run(
            _transport(handler).suggest_edit(
                "Long text here",
                Instruction.EXPAND,
                api_keys=ApiKeys(groq="gsk-1"),
                provider=Provider.GROQ,
            )
        )

        body = handler.last_body
        assert body["provider"] == "groq"
        assert body["apiKeys"] == {"groq": "gsk-1"}

    def test_chat_prefers_html(self):
        """Test that chat returns the html field and sends role/content pairs."""
        handler = Recorder(httpx.Response(200, json={"text": "plain", "html": "<p>rich</p>"}))

        reply = asyncio.run(
            _transport(handler).chat([ChatMessage(role="user", content="hello")])
        )

        assert reply == "<p>rich</p>"
        assert handler.last_body == {
            "action": "chat",
            "messages": [{"role": "user", "content": "hello"}],
        }

    def test_error_json_raises_with_status(self):
        """Test that the server's error message and status reach the caller."""
        handler = Recorder(
            httpx.Response(401, json={"error": "Unable to authenticate", "error_code": "AUTH_FAILURE"})
        )

        with pytest.raises(TransportError) as exc_info:
            asyncio.run(_transport(handler).suggest_edit("Some text", Instruction.SHORTEN))

        assert str(exc_info.value) == "Unable to authenticate"
        assert exc_info.value.status_code == 401

    def test_error_text_body(self):
        """Test that non-JSON error bodies are used verbatim."""
        handler = Recorder(httpx.Response(502, text="Bad gateway"))

        with pytest.raises(TransportError, match="Bad gateway") as exc_info:
            asyncio.run(_transport(handler).suggest_edit("Some text", Instruction.SHORTEN))

        assert exc_info.value.status_code == 502

    def test_connection_failure(self):
        """Test that network errors become TransportError."""
        handler = Recorder(httpx.ConnectError("connection refused"))

        with pytest.raises(TransportError, match="failed"):
            asyncio.run(_transport(handler).chat([ChatMessage(role="user", content="hi")]))

    def test_search_parses_response(self):
        """Test that a search body with an error field is returned, not raised."""
        handler = Recorder(
            httpx.Response(200, json={"summary": "", "results": [], "error": "Tavily error: 500"})
        )

        result = asyncio.run(_transport(handler).search("next.js"))

        assert handler.requests[0].url.path == "/api/agent/search"
        assert handler.last_body == {"query": "next.js"}
        assert result.error == "Tavily error: 500"
        assert result.results == []


class TestTavilySearchClient:
    """Test suite for TavilySearchClient."""

    def _client(self, handler: Recorder) -> TavilySearchClient:
        return TavilySearchClient(
            api_key="tvly-test",
            url="https://tavily.test/search",
            max_results=3,
            client=httpx.AsyncClient(transport=httpx.MockTransport(handler)),
        )

    def test_request_and_mapping(self):
        """Test the outgoing request and the answer/results mapping."""
        handler = Recorder(
            httpx.Response(
                200,
                json={
                    "answer": "Next.js is a React framework.",
                    "results": [
                        {"title": "Next.js", "url": "https://nextjs.org", "content": "..."},
                        {"url": "https://example.com"},
                    ],
                },
            )
        )

        result = asyncio.run(self._client(handler).search("what is next.js"))

        request = handler.requests[0]
        assert request.headers["Authorization"] == "Bearer tvly-test"
        assert handler.last_body == {
            "query": "what is next.js",
            "search_depth": "basic",
            "include_answer": True,
            "max_results": 3,
        }
        assert result.summary == "Next.js is a React framework."
        assert [(r.title, r.url) for r in result.results] == [
            ("Next.js", "https://nextjs.org"),
            ("", "https://example.com"),
        ]
        assert result.error is None

    def test_error_status_raises(self):
        """Test that a provider error raises with the body text."""
        handler = Recorder(httpx.Response(401, text="invalid key"))

        with pytest.raises(httpx.HTTPStatusError, match="Tavily error: invalid key"):
            asyncio.run(self._client(handler).search("anything"))


class TestAiTransportFromSettings:
    def test_uses_configured_base_url(self):
        """Test that the transport targets the configured API base URL."""
        transport = AiTransport.from_settings(
            make_settings(api_base_url="http://assistant.internal:9000/", request_timeout_seconds=5)
        )

        assert str(transport._client.base_url).rstrip("/") == "http://assistant.internal:9000"
        assert transport._client.timeout == httpx.Timeout(5)
