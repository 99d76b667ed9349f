"""Backend protocols used by the editing core.

The editing core never talks to providers directly. It calls one of these
backends, which is either the HTTP transport (`AiTransport`) or the
in-process `AssistantService`.
"""

from typing import Protocol

from coeditor.core.models import ApiKeys, ChatMessage, Instruction, Provider, SearchResponse


class EditBackend(Protocol):
    """Produces a suggestion for a selection edit."""

    async def suggest_edit(
        self,
        selection: str,
        instruction: Instruction,
        api_keys: ApiKeys | None = None,
        provider: Provider | None = None,
    ) -> str:
        ...


class ChatBackend(Protocol):
    """Produces the assistant reply for a conversation."""

    async def chat(
        self,
        messages: list[ChatMessage],
        provider: Provider | None = None,
        api_keys: ApiKeys | None = None,
    ) -> str:
        ...


class SearchBackend(Protocol):
    """Runs a web search on behalf of the agent."""

    async def search(self, query: str) -> SearchResponse:
        ...
