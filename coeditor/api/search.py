"""Web search agent routes.

A thin proxy to the search provider. It always answers 200 and reports
failures in the `error` field of the body.
"""

import logging

from fastapi import APIRouter, Depends

from coeditor.api.deps import get_search_client
from coeditor.api.schemas import SearchRequest, SearchResponse
from coeditor.interfaces.search import BaseSearchClient

logger = logging.getLogger(__name__)

NOT_CONFIGURED_SUMMARY = "Tavily is not configured. Set TAVILY_API_KEY to enable web search."

router = APIRouter(prefix="/api/agent", tags=["agent"])


@router.post(
    "/search",
    response_model=SearchResponse,
    response_model_exclude_none=True,
)
async def web_search(
    body: SearchRequest,
    search_client: BaseSearchClient | None = Depends(get_search_client),
) -> SearchResponse:
    """Search the web and return a summary with result links."""
    if search_client is None:
        return SearchResponse(summary=NOT_CONFIGURED_SUMMARY, results=[])

    try:
        return await search_client.search(body.query)
    except Exception as e:
        logger.error(f"/api/agent/search error: {e}")
        return SearchResponse(error=str(e), summary="", results=[])
