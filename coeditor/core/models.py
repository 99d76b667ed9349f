"""Domain models shared by the API, the service and the editing core.

Pydantic models and enums kept here to avoid circular imports between
the API layer and the editing core.
"""

from enum import Enum
from typing import Literal

from pydantic import BaseModel, Field


class Provider(str, Enum):
    """LLM providers the assistant can route to."""

    OPENAI = "openai"
    GROQ = "groq"


class Instruction(str, Enum):
    """Selection transforms offered by the editor toolbar."""

    SHORTEN = "shorten"
    EXPAND = "expand"
    PARAPHRASE = "paraphrase"
    TABLE = "table"


Role = Literal["user", "assistant", "system"]


class ApiKeys(BaseModel):
    """Per-request credential override, one optional key per provider."""

    openai: str | None = None
    groq: str | None = None

    def for_provider(self, provider: Provider) -> str | None:
        """Return the non-blank key for a provider, if any."""
        key = getattr(self, provider.value)
        return key.strip() if key and key.strip() else None


class MessageMeta(BaseModel):
    """Optional annotations on a chat message."""

    tool: str | None = None
    action: str | None = None
    summary: str | None = None


class ChatMessage(BaseModel):
    """A single chat turn."""

    role: Role
    content: str
    meta: MessageMeta | None = None


class SearchResult(BaseModel):
    """A single web search hit."""

    title: str = ""
    url: str = ""


class SearchResponse(BaseModel):
    """Search outcome. Callers must check `error` regardless of HTTP status."""

    summary: str | None = None
    results: list[SearchResult] = Field(default_factory=list)
    error: str | None = None
