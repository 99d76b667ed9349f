"""HTTP transport from the editing client to the assistant API."""

import logging
from typing import Any

import httpx

from coeditor.core.config import Settings
from coeditor.core.errors import TransportError
from coeditor.core.models import ApiKeys, ChatMessage, Instruction, Provider, SearchResponse

logger = logging.getLogger(__name__)


def _error_detail(response: httpx.Response) -> str:
    try:
        data = response.json()
    except ValueError:
        data = None

    detail = ""
    if isinstance(data, dict):
        detail = data.get("error") or data.get("detail") or response.reason_phrase
    else:
        detail = response.text
    return detail or f"Request failed with {response.status_code}"


class AiTransport:
    """Client for `/api/ai` and `/api/agent/search`.

    Implements the EditBackend, ChatBackend and SearchBackend protocols.
    """

    def __init__(
        self,
        base_url: str = "http://localhost:8000",
        timeout: float = 30.0,
        client: httpx.AsyncClient | None = None,
    ) -> None:
        """Initialize the transport.

        Args:
            base_url: Base URL of the assistant API.
            timeout: Seconds before a request is abandoned.
            client: Pre-built HTTP client, mainly for tests.
        """
        self._client = client or httpx.AsyncClient(
            base_url=base_url.rstrip("/"),
            timeout=timeout,
        )

    @classmethod
    def from_settings(cls, settings: Settings) -> "AiTransport":
        """Build a transport for the configured API base URL and timeout."""
        return cls(
            base_url=settings.api_base_url,
            timeout=settings.request_timeout_seconds,
        )

    async def suggest_edit(
        self,
        selection: str,
        instruction: Instruction,
        api_keys: ApiKeys | None = None,
        provider: Provider | None = None,
    ) -> str:
        body: dict[str, Any] = {
            "action": "edit",
            "selection": selection,
            "instruction": instruction.value,
        }
        self._add_routing(body, api_keys, provider)

        data = await self._post("/api/ai", body)
        return (data.get("suggestion") or data.get("text") or "").strip()

    async def chat(
        self,
        messages: list[ChatMessage],
        provider: Provider | None = None,
        api_keys: ApiKeys | None = None,
    ) -> str:
        body: dict[str, Any] = {
            "action": "chat",
            "messages": [{"role": m.role, "content": m.content} for m in messages],
        }
        self._add_routing(body, api_keys, provider)

        data = await self._post("/api/ai", body)
        return (data.get("html") or data.get("text") or "").strip()

    async def search(self, query: str) -> SearchResponse:
        data = await self._post("/api/agent/search", {"query": query})
        return SearchResponse.model_validate(data)

    async def aclose(self) -> None:
        await self._client.aclose()

    @staticmethod
    def _add_routing(
        body: dict[str, Any],
        api_keys: ApiKeys | None,
        provider: Provider | None,
    ) -> None:
        if provider is not None:
            body["provider"] = provider.value
        if api_keys is not None:
            keys = api_keys.model_dump(exclude_none=True)
            if keys:
                body["apiKeys"] = keys

    async def _post(self, path: str, body: dict[str, Any]) -> dict[str, Any]:
        try:
            response = await self._client.post(path, json=body)
        except httpx.TimeoutException as e:
            raise TransportError(f"Request to {path} timed out") from e
        except httpx.HTTPError as e:
            raise TransportError(f"Request to {path} failed: {e}") from e

        logger.debug(f"{path} response status: {response.status_code}")

        if response.is_error:
            raise TransportError(_error_detail(response), status_code=response.status_code)

        try:
            return response.json()
        except ValueError as e:
            raise TransportError(f"Malformed response from {path}") from e
