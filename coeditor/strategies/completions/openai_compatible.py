"""OpenAI-compatible completion client.

Uses the OpenAI SDK's chat completions API. Groq exposes the same API under
its own base URL, so one client class serves every registered provider.
"""

import asyncio
import logging

from openai import APIStatusError, AsyncOpenAI, OpenAIError

from coeditor.core.errors import AuthFailure, CompletionError, ProviderError, is_auth_error
from coeditor.core.models import Provider
from coeditor.interfaces.completion import BaseCompletionClient

logger = logging.getLogger(__name__)


def classify_provider_error(error: Exception, provider: Provider) -> CompletionError:
    """Convert an SDK exception into an AuthFailure or ProviderError.

    Args:
        error: The exception raised by the OpenAI SDK.
        provider: The provider that was called.

    Returns:
        AuthFailure for HTTP 401 or auth-like messages, ProviderError otherwise.
    """
    status_code = error.status_code if isinstance(error, APIStatusError) else None
    message = getattr(error, "message", None) or str(error)

    if is_auth_error(status_code, message):
        return AuthFailure(message, provider=provider.value)
    return ProviderError(message, provider=provider.value)


class OpenAICompatibleClient(BaseCompletionClient):
    """Completion client for any OpenAI-compatible chat completions endpoint.

    Attributes:
        provider: The provider this client is bound to.
        model: The chat model to request.
    """

    def __init__(
        self,
        provider: Provider,
        api_key: str,
        model: str,
        base_url: str | None = None,
        timeout: float = 30.0,
        client: AsyncOpenAI | None = None,
    ) -> None:
        """Initialize the client.

        Args:
            provider: The provider this client is bound to.
            api_key: Credential for the provider.
            model: The chat model to request.
            base_url: Optional custom base URL for the API.
            timeout: Seconds before a call is abandoned.
            client: Pre-built SDK client, mainly for tests.
        """
        self._provider = provider
        self._model = model
        self._timeout = timeout
        self._client = client or AsyncOpenAI(
            api_key=api_key,
            base_url=base_url,
            timeout=timeout,
        )

    @property
    def provider(self) -> Provider:
        return self._provider

    @property
    def model(self) -> str:
        return self._model

    async def complete(
        self,
        system_instruction: str,
        user_prompt: str,
        max_tokens: int,
    ) -> str:
        """Run one chat completion.

        Args:
            system_instruction: The fixed system instruction.
            user_prompt: The prompt built from the user's input.
            max_tokens: Token budget for the generated text.

        Returns:
            The generated text, trimmed.

        Raises:
            AuthFailure: If the provider rejected the credential.
            ProviderError: On timeout, API errors or an empty response.
        """
        logger.debug(
            f"Requesting completion from {self._provider.value} "
            f"(model={self._model}, max_tokens={max_tokens})"
        )

        try:
            async with asyncio.timeout(self._timeout):
                response = await self._client.chat.completions.create(
                    model=self._model,
                    messages=[
                        {"role": "system", "content": system_instruction},
                        {"role": "user", "content": user_prompt},
                    ],
                    max_tokens=max_tokens,
                )
        except asyncio.TimeoutError as e:
            logger.warning(f"{self._provider.value} timed out after {self._timeout}s")
            raise ProviderError(
                f"{self._provider.value} request timed out after {self._timeout:g}s",
                provider=self._provider.value,
            ) from e
        except OpenAIError as e:
            logger.error(f"{self._provider.value} API error: {e}")
            raise classify_provider_error(e, self._provider) from e

        choices = getattr(response, "choices", None) or []
        content = choices[0].message.content if choices else None
        if content is None:
            raise ProviderError(
                f"Malformed response from {self._provider.value}: no message content",
                provider=self._provider.value,
            )

        text = content.strip()
        logger.info(f"{self._provider.value} returned {len(text)} chars")
        return text

    async def aclose(self) -> None:
        await self._client.close()
