"""Component Factory for strategy instantiation.

The Factory Pattern lets the service obtain completion and search clients
without knowing which concrete strategy backs each provider.
"""

import logging
from collections.abc import AsyncIterator
from contextlib import asynccontextmanager

from coeditor.core.config import Settings, get_settings
from coeditor.core.models import Provider
from coeditor.core.providers import PROVIDER_REGISTRY, ProviderProfile
from coeditor.interfaces.completion import BaseCompletionClient
from coeditor.interfaces.search import BaseSearchClient
from coeditor.strategies.completions import OpenAICompatibleClient
from coeditor.strategies.search import TavilySearchClient

logger = logging.getLogger(__name__)


class ComponentFactory:
    """Factory for creating client instances based on configuration.

    Clients for the process-level keys are cached for the life of the factory.
    Clients for per-request key overrides are built for one call and closed
    afterwards, so client-supplied keys never accumulate.

    Example:
        ```python
        factory = ComponentFactory(get_settings())
        async with factory.completion_client(Provider.GROQ, api_key="gsk-...") as client:
            text = await client.complete(system, prompt, max_tokens=800)
        ```
    """

    def __init__(self, settings: Settings | None = None) -> None:
        """Initialize the factory with optional settings.

        Args:
            settings: Application settings. If None, uses global settings.
        """
        self._settings = settings or get_settings()
        self._completion_cache: dict[Provider, BaseCompletionClient] = {}
        self._search_cache: BaseSearchClient | None = None

    @property
    def settings(self) -> Settings:
        return self._settings

    @asynccontextmanager
    async def completion_client(
        self,
        provider: Provider,
        api_key: str,
    ) -> AsyncIterator[BaseCompletionClient]:
        """Lend a completion client for one call.

        The shared client is used when api_key is the configured key for the
        provider. Any other key gets a dedicated client closed on exit.

        Args:
            provider: The provider to talk to.
            api_key: The resolved credential for this request.

        Yields:
            A BaseCompletionClient implementation instance.

        Raises:
            ValueError: If the provider is not registered.
        """
        profile = self._profile(provider)
        if api_key == profile.configured_key(self._settings):
            yield self.get_completion_client(provider)
            return

        logger.debug(f"Using a per-request client for {provider.value}")
        client = self.create_completion_client(provider, api_key)
        try:
            yield client
        finally:
            await client.aclose()

    def get_completion_client(self, provider: Provider) -> BaseCompletionClient:
        """Get the shared completion client for a provider's configured key.

        Args:
            provider: The provider to talk to.

        Returns:
            A BaseCompletionClient implementation instance.

        Raises:
            ValueError: If the provider is unknown or has no configured key.
        """
        if provider not in self._completion_cache:
            api_key = self._profile(provider).configured_key(self._settings)
            if api_key is None:
                raise ValueError(f"No API key configured for provider: {provider.value}")
            self._completion_cache[provider] = self.create_completion_client(provider, api_key)

        return self._completion_cache[provider]

    def create_completion_client(self, provider: Provider, api_key: str) -> BaseCompletionClient:
        """Build a new, uncached completion client. The caller owns and closes it."""
        profile = self._profile(provider)

        logger.info(f"Instantiating completion client: {provider.value}")

        return OpenAICompatibleClient(
            provider=provider,
            api_key=api_key,
            model=profile.model(self._settings),
            base_url=profile.base_url(self._settings),
            timeout=self._settings.request_timeout_seconds,
        )

    def get_search_client(self) -> BaseSearchClient | None:
        """Get the web search client.

        Returns:
            A BaseSearchClient instance, or None when TAVILY_API_KEY is unset.
        """
        if self._search_cache is None and self._settings.tavily_api_key:
            logger.info("Instantiating search client: tavily")

            self._search_cache = TavilySearchClient(
                api_key=self._settings.tavily_api_key,
                url=self._settings.tavily_search_url,
                max_results=self._settings.search_max_results,
                timeout=self._settings.request_timeout_seconds,
            )

        return self._search_cache

    async def aclose(self) -> None:
        """Close every cached client and empty the cache.

        New instances are created on next access.
        """
        completion_clients = list(self._completion_cache.values())
        search_client = self._search_cache
        self._completion_cache.clear()
        self._search_cache = None

        for client in completion_clients:
            await client.aclose()
        if search_client is not None:
            await search_client.aclose()

        logger.debug(f"Closed {len(completion_clients)} completion client(s)")

    @staticmethod
    def _profile(provider: Provider) -> ProviderProfile:
        profile = PROVIDER_REGISTRY.get(provider)
        if profile is None:
            raise ValueError(
                f"Unknown provider: {provider}. "
                f"Valid options: {[p.value for p in PROVIDER_REGISTRY]}"
            )
        return profile
