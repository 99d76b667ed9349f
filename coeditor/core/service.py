"""In-process assistant service.

Composes provider order resolution, the fallback orchestrator and the
completion clients into the two operations the API exposes: selection edits
and chat replies.
"""

import logging

from coeditor.core.config import Settings
from coeditor.core.errors import AuthFailure, ConfigurationError, EditValidationError
from coeditor.core.factory import ComponentFactory
from coeditor.core.fallback import run_with_fallback
from coeditor.core.models import ApiKeys, ChatMessage, Instruction, Provider
from coeditor.core.prompts import (
    CHAT_SYSTEM_PROMPT,
    EDIT_SYSTEM_PROMPTS,
    build_chat_prompt,
    build_edit_prompt,
)
from coeditor.core.providers import resolve_credentials, resolve_provider_order

logger = logging.getLogger(__name__)

NOT_CONFIGURED_MESSAGE = (
    "No AI provider configured. Add GROQ_API_KEY or OPENAI_API_KEY in Project Settings."
)


class AssistantService:
    """Runs edits and chat against the configured providers.

    Implements both the EditBackend and ChatBackend protocols, so the editing
    core can use it directly instead of going through HTTP.
    """

    def __init__(
        self,
        settings: Settings,
        factory: ComponentFactory | None = None,
    ) -> None:
        self._settings = settings
        self._factory = factory or ComponentFactory(settings)

    def provider_order(
        self,
        preferred: Provider | None = None,
        api_keys: ApiKeys | None = None,
    ) -> tuple[list[Provider], dict[Provider, str]]:
        """Compute the provider order and the credential for each provider."""
        credentials = resolve_credentials(self._settings, api_keys)
        order = resolve_provider_order(preferred, credentials.keys())
        return order, credentials

    async def suggest_edit(
        self,
        selection: str,
        instruction: Instruction | None,
        api_keys: ApiKeys | None = None,
        provider: Provider | None = None,
    ) -> str:
        """Produce a rewritten version of a selection.

        Args:
            selection: The selected text.
            instruction: The transform to apply.
            api_keys: Optional per-request credential override.
            provider: Optional preferred provider.

        Returns:
            The suggestion text.

        Raises:
            EditValidationError: If selection or instruction is missing.
            ConfigurationError: If no provider is credentialed.
            CompletionError: If the providers failed.
        """
        selection = (selection or "").strip()
        if not selection or instruction is None:
            raise EditValidationError("Missing selection or instruction")

        logger.info(f"Edit: {instruction.value} on selection length: {len(selection)}")

        suggestion = await self._complete(
            system_instruction=EDIT_SYSTEM_PROMPTS[instruction],
            user_prompt=build_edit_prompt(selection, instruction),
            max_tokens=self._settings.edit_max_tokens,
            preferred=provider,
            api_keys=api_keys,
        )

        logger.info(f"Edit result length: {len(suggestion)}")
        return suggestion

    async def chat(
        self,
        messages: list[ChatMessage],
        provider: Provider | None = None,
        api_keys: ApiKeys | None = None,
    ) -> str:
        """Produce the assistant's HTML reply to a conversation.

        Raises:
            ConfigurationError: If no provider is credentialed.
            CompletionError: If the providers failed.
        """
        text = await self._complete(
            system_instruction=CHAT_SYSTEM_PROMPT,
            user_prompt=build_chat_prompt(messages),
            max_tokens=self._settings.chat_max_tokens,
            preferred=provider,
            api_keys=api_keys,
        )

        logger.info(f"Chat response length: {len(text)}")
        return text

    async def _complete(
        self,
        system_instruction: str,
        user_prompt: str,
        max_tokens: int,
        preferred: Provider | None,
        api_keys: ApiKeys | None,
    ) -> str:
        order, credentials = self.provider_order(preferred, api_keys)
        if not order:
            logger.error("No AI provider configured")
            raise ConfigurationError(NOT_CONFIGURED_MESSAGE)

        async def call(provider: Provider) -> str:
            api_key = credentials[provider]
            async with self._factory.completion_client(provider, api_key) as client:
                return await client.complete(system_instruction, user_prompt, max_tokens)

        try:
            return await run_with_fallback(order, call)
        except AuthFailure as e:
            names = ", ".join(p.value for p in order)
            raise AuthFailure(
                f"Unable to authenticate with any configured AI provider ({names}). "
                f"Verify the API keys. Last error: {e.message}",
                provider=e.provider,
            ) from e
