"""Concrete strategy implementations."""

from coeditor.strategies.completions import (
    OpenAICompatibleClient,
)
from coeditor.strategies.search import (
    TavilySearchClient,
)

__all__ = [
    "OpenAICompatibleClient",
    "TavilySearchClient",
]
