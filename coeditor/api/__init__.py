"""FastAPI routers and dependencies."""

from coeditor.api.ai import router as ai_router
from coeditor.api.deps import (
    get_assistant_service,
    get_factory,
    get_search_client,
)
from coeditor.api.search import router as search_router

__all__ = [
    "get_assistant_service",
    "get_factory",
    "get_search_client",
    "ai_router",
    "search_router",
]
