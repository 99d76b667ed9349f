"""Web search agent for the chat sidebar."""

import logging

from coeditor.core.models import SearchResponse
from coeditor.editing.apply import InsertPayload
from coeditor.editing.chat import InsertHandler
from coeditor.interfaces.backends import SearchBackend

logger = logging.getLogger(__name__)


class WebSearchAgent:
    """Runs web searches and drops the summary into the document."""

    def __init__(self, backend: SearchBackend, insert: InsertHandler) -> None:
        self._backend = backend
        self._insert = insert

    async def web_search(self, query: str) -> SearchResponse:
        """Search the web and insert the summary when there is one.

        The search endpoint reports failures in the body, so callers must
        check `error` on the returned response.
        """
        data = await self._backend.search(query)
        if data.error:
            logger.warning(f"Web search reported an error: {data.error}")

        summary = (data.summary or "").strip()
        if summary:
            self._insert(InsertPayload(text=summary, html=False))

        return data
