"""Abstract base class for text completion strategies.

The Strategy Pattern allows different LLM providers
to be used interchangeably by the fallback orchestrator.
"""

from abc import ABC, abstractmethod

from coeditor.core.models import Provider


class BaseCompletionClient(ABC):
    """Abstract base class for provider completion clients.

    All concrete completion clients must inherit from this class
    and implement the required methods.

    Example:
        ```python
        class EchoClient(BaseCompletionClient):
            async def complete(self, system_instruction, user_prompt, max_tokens):
                return user_prompt.strip()

            @property
            def provider(self) -> Provider:
                return Provider.OPENAI
        ```
    """

    @abstractmethod
    async def complete(
        self,
        system_instruction: str,
        user_prompt: str,
        max_tokens: int,
    ) -> str:
        """Generate text for a system instruction and user prompt.

        Args:
            system_instruction: The fixed system instruction.
            user_prompt: The prompt built from the user's input.
            max_tokens: Token budget for the generated text.

        Returns:
            The generated text, trimmed of surrounding whitespace.

        Raises:
            AuthFailure: If the provider rejected the credential.
            ProviderError: For any other provider-side failure.
        """
        ...

    @property
    @abstractmethod
    def provider(self) -> Provider:
        """Return the provider this client talks to."""
        ...

    async def aclose(self) -> None:
        """Release network resources held by the client."""
        return None
