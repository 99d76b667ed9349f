"""FastAPI dependencies for dependency injection.

Provides reusable dependencies for routes including:
- The component factory
- The assistant service
- The web search client
"""

import logging

from fastapi import Depends, Request

from coeditor.core.factory import ComponentFactory
from coeditor.core.service import AssistantService
from coeditor.interfaces.search import BaseSearchClient

logger = logging.getLogger(__name__)


def get_factory(request: Request) -> ComponentFactory:
    """Dependency returning the application's component factory."""
    return request.app.state.factory


def get_assistant_service(request: Request) -> AssistantService:
    """Dependency returning the application's assistant service."""
    return request.app.state.assistant


def get_search_client(
    factory: ComponentFactory = Depends(get_factory),
) -> BaseSearchClient | None:
    """Dependency returning the search client.

    Returns:
        The configured search client, or None when web search is not configured.
    """
    client = factory.get_search_client()
    if client is None:
        logger.debug("Web search requested but TAVILY_API_KEY is not set")
    return client
