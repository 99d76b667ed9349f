"""AI completion routes.

Handles chat replies and selection edits, both routed through the
provider fallback in the assistant service.
"""

import logging

from fastapi import APIRouter, Depends, status

from coeditor.api.deps import get_assistant_service
from coeditor.api.schemas import AiRequest, ChatResponse, EditResponse, ErrorResponse
from coeditor.core.errors import AssistantError, EditValidationError
from coeditor.core.service import AssistantService

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api", tags=["ai"])


@router.post(
    "/ai",
    status_code=status.HTTP_200_OK,
    responses={
        status.HTTP_400_BAD_REQUEST: {"model": ErrorResponse},
        status.HTTP_401_UNAUTHORIZED: {"model": ErrorResponse},
        status.HTTP_500_INTERNAL_SERVER_ERROR: {"model": ErrorResponse},
    },
)
async def run_ai(
    body: AiRequest,
    service: AssistantService = Depends(get_assistant_service),
) -> ChatResponse | EditResponse:
    """Run a chat turn or a selection edit.

    Args:
        body: The request payload.
        service: The assistant service.

    Returns:
        ChatResponse for `chat`, EditResponse for `edit`.

    Raises:
        EditValidationError: If action, selection or instruction is missing (400).
        AuthFailure: If no provider accepted its credential (401).
        ConfigurationError: If no provider is configured (500).
        ProviderError: If a provider failed (500).
    """
    logger.info("/api/ai request received")

    if body.action is None:
        raise EditValidationError("Missing action")

    logger.info(f"/api/ai action: {body.action}")

    try:
        if body.action == "chat":
            text = await service.chat(
                body.messages or [],
                provider=body.provider,
                api_keys=body.api_keys,
            )
            return ChatResponse(text=text, html=text)

        suggestion = await service.suggest_edit(
            body.selection or "",
            body.instruction,
            api_keys=body.api_keys,
            provider=body.provider,
        )
        return EditResponse(suggestion=suggestion, text=suggestion)

    except AssistantError as e:
        logger.error(f"/api/ai error: {e.message}")
        raise
