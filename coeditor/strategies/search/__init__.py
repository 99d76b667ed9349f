"""Concrete web search implementations."""

from coeditor.strategies.search.tavily import TavilySearchClient

__all__ = [
    "TavilySearchClient",
]
