"""API request and response schemas.

Pydantic v2 models for API serialization/deserialization.
"""

from typing import Any, Literal

from pydantic import BaseModel, ConfigDict, Field

from coeditor.core.models import ApiKeys, ChatMessage, Instruction, Provider

# Re-export search models used by the agent routes
from coeditor.core.models import SearchResponse, SearchResult  # noqa: F401


# =============================================================================
# AI Schemas
# =============================================================================


class AiRequest(BaseModel):
    """Request body for the `/api/ai` endpoint."""

    model_config = ConfigDict(
        populate_by_name=True,
        json_schema_extra={
            "example": {
                "action": "edit",
                "selection": "The quick brown fox jumps over the lazy dog.",
                "instruction": "shorten",
            }
        },
    )

    action: Literal["chat", "edit"] | None = Field(
        default=None, description="Which operation to run"
    )
    provider: Provider | None = Field(default=None, description="Preferred provider")
    messages: list[ChatMessage] | None = Field(
        default=None, description="Conversation so far (chat only)"
    )
    selection: str | None = Field(default=None, description="Selected text (edit only)")
    instruction: Instruction | None = Field(
        default=None, description="Transform to apply (edit only)"
    )
    api_keys: ApiKeys | None = Field(
        default=None,
        alias="apiKeys",
        description="Per-request credential override",
    )


class ChatResponse(BaseModel):
    """Assistant reply for a chat request."""

    text: str
    html: str


class EditResponse(BaseModel):
    """Suggestion for an edit request."""

    suggestion: str
    text: str


# =============================================================================
# Agent Schemas
# =============================================================================


class SearchRequest(BaseModel):
    """Request body for the web search endpoint."""

    query: str = Field(default="", description="Free-text search query")


# =============================================================================
# Error Schemas
# =============================================================================


class ErrorResponse(BaseModel):
    """Standard error response."""

    error: str = Field(description="Error message")
    error_code: str | None = Field(default=None, description="Application-specific error code")
    extra: dict[str, Any] | None = Field(default=None, description="Additional error context")
