"""Tavily web search client."""

import logging
from typing import Any

import httpx

from coeditor.core.models import SearchResponse, SearchResult
from coeditor.interfaces.search import BaseSearchClient

logger = logging.getLogger(__name__)


class TavilySearchClient(BaseSearchClient):
    """Search client for the Tavily search API."""

    def __init__(
        self,
        api_key: str,
        url: str = "https://api.tavily.com/search",
        max_results: int = 5,
        timeout: float = 30.0,
        client: httpx.AsyncClient | None = None,
    ) -> None:
        """Initialize the client.

        Args:
            api_key: Tavily API key.
            url: Tavily search endpoint.
            max_results: Maximum number of results to request.
            timeout: Seconds before the request is abandoned.
            client: Pre-built HTTP client, mainly for tests.
        """
        self._api_key = api_key
        self._url = url
        self._max_results = max_results
        self._client = client or httpx.AsyncClient(timeout=timeout)

    async def search(self, query: str) -> SearchResponse:
        logger.info(f"Tavily search: {query[:80]!r}")

        response = await self._client.post(
            self._url,
            headers={"Authorization": f"Bearer {self._api_key}"},
            json={
                "query": query,
                "search_depth": "basic",
                "include_answer": True,
                "max_results": self._max_results,
            },
        )
        if response.is_error:
            raise httpx.HTTPStatusError(
                f"Tavily error: {response.text}",
                request=response.request,
                response=response,
            )

        data: dict[str, Any] = response.json()
        results = [
            SearchResult(title=r.get("title") or "", url=r.get("url") or "")
            for r in data.get("results") or []
        ]
        logger.info(f"Tavily returned {len(results)} result(s)")
        return SearchResponse(summary=data.get("answer"), results=results)

    async def aclose(self) -> None:
        await self._client.aclose()
