"""Chat session for the assistant sidebar.

Holds the message log and at most one outstanding request. Sending a new
message cancels the previous request; the cancelled request is not retried.
Replies are inserted into the document through the insert channel.
"""

import asyncio
import html
import logging
import re
from collections.abc import Callable

from coeditor.core.models import ApiKeys, ChatMessage, MessageMeta, Provider
from coeditor.editing.apply import InsertPayload
from coeditor.interfaces.backends import ChatBackend

logger = logging.getLogger(__name__)

InsertHandler = Callable[[InsertPayload], None]

DEFAULT_GREETING = ChatMessage(
    role="assistant",
    content=(
        "Hi! I'm your AI assistant. Ask me to edit text, summarize links, or search "
        "the web. I can also insert content into the editor."
    ),
)

_BLOCK_TAG = re.compile(r"<(p|ul|ol|li|h\d|table|section|article|div)\b", re.IGNORECASE)


def normalize_assistant_html(text: str) -> str:
    """Make sure a reply is HTML.

    Replies that already contain block-level tags are returned as-is.
    Otherwise each non-empty line becomes an escaped `<p>` paragraph.
    """
    if not text or _BLOCK_TAG.search(text):
        return text

    parts = [p.strip() for p in re.split(r"\r?\n", text)]
    parts = [p for p in parts if p]
    if not parts:
        return text
    return "".join(f"<p>{html.escape(p)}</p>" for p in parts)


class ChatSession:
    """Message log plus the send/cancel flow of the chat sidebar."""

    def __init__(
        self,
        backend: ChatBackend,
        insert: InsertHandler,
        initial_messages: list[ChatMessage] | None = None,
        provider: Provider | None = None,
        api_keys: ApiKeys | None = None,
    ) -> None:
        """Initialize the session.

        Args:
            backend: Produces assistant replies.
            insert: Receives reply content for the document surface.
            initial_messages: Starting log. Defaults to the greeting.
            provider: Default preferred provider for every send.
            api_keys: Default credential override for every send.
        """
        self._backend = backend
        self._insert = insert
        self._provider = provider
        self._api_keys = api_keys
        self._messages: list[ChatMessage] = list(initial_messages or [DEFAULT_GREETING])
        self._inflight: asyncio.Task[str] | None = None

    @property
    def messages(self) -> list[ChatMessage]:
        return list(self._messages)

    @property
    def busy(self) -> bool:
        return self._inflight is not None and not self._inflight.done()

    def can_send(self, content: str) -> bool:
        return bool(content.strip()) and not self.busy

    async def send(
        self,
        content: str,
        provider: Provider | None = None,
        api_keys: ApiKeys | None = None,
    ) -> None:
        """Send a user message and insert the reply into the document.

        Failures are appended to the log as a system message. A send that gets
        superseded by a newer one returns without touching the log.
        """
        content = content.strip()
        if not content:
            return

        self._messages.append(ChatMessage(role="user", content=content))
        history = [ChatMessage(role=m.role, content=m.content) for m in self._messages]

        if self._inflight is not None and not self._inflight.done():
            logger.info("Cancelling previous chat request")
            self._inflight.cancel()

        task = asyncio.ensure_future(
            self._backend.chat(
                history,
                provider=provider or self._provider,
                api_keys=api_keys or self._api_keys,
            )
        )
        self._inflight = task

        try:
            raw = (await task or "").strip()
        except asyncio.CancelledError:
            if self._inflight is not task:
                logger.debug("Chat request superseded")
                return
            raise
        except Exception as e:
            logger.error(f"Chat error: {e}")
            self._messages.append(
                ChatMessage(role="system", content=f"Sorry, there was an error: {e}")
            )
            return
        finally:
            if self._inflight is task:
                self._inflight = None

        logger.info(f"Chat response length: {len(raw)}")
        if not raw:
            return

        reply = normalize_assistant_html(raw)
        self._messages.append(
            ChatMessage(
                role="assistant",
                content=reply,
                meta=MessageMeta(tool="chat", action="insert", summary=reply),
            )
        )
        self._insert(InsertPayload(text=reply, html=True))

    def insert_from_message(self, message: ChatMessage) -> None:
        """Insert a logged assistant message into the document again."""
        content = (message.meta.summary if message.meta else None) or message.content
        if content:
            self._insert(InsertPayload(text=content, html=True))

    def reset(self) -> None:
        """Cancel the outstanding request and restore the greeting."""
        if self._inflight is not None:
            self._inflight.cancel()
            self._inflight = None
        self._messages = [DEFAULT_GREETING]
