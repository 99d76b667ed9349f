"""Abstract base class for web search strategies."""

from abc import ABC, abstractmethod

from coeditor.core.models import SearchResponse


class BaseSearchClient(ABC):
    """Abstract base class for web search providers."""

    @abstractmethod
    async def search(self, query: str) -> SearchResponse:
        """Run a web search.

        Args:
            query: Free-text search query.

        Returns:
            A SearchResponse with an optional summary and result links.

        Raises:
            httpx.HTTPError: If the upstream call fails.
        """
        ...

    async def aclose(self) -> None:
        """Release network resources held by the client."""
        return None
