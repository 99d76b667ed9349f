"""Provider registry and provider order resolution.

Adding a provider is a data change: a new `Provider` member plus a registry
entry naming the settings that hold its credential, model and base URL.
"""

import logging
from collections.abc import Iterable
from dataclasses import dataclass

from coeditor.core.config import Settings
from coeditor.core.models import ApiKeys, Provider

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class ProviderProfile:
    """Where a provider's configuration lives in Settings."""

    provider: Provider
    api_key_setting: str
    model_setting: str
    base_url_setting: str

    def configured_key(self, settings: Settings) -> str | None:
        key = getattr(settings, self.api_key_setting) or ""
        return key.strip() or None

    def model(self, settings: Settings) -> str:
        return getattr(settings, self.model_setting)

    def base_url(self, settings: Settings) -> str | None:
        return getattr(settings, self.base_url_setting)


PROVIDER_REGISTRY: dict[Provider, ProviderProfile] = {
    Provider.GROQ: ProviderProfile(
        provider=Provider.GROQ,
        api_key_setting="groq_api_key",
        model_setting="groq_model",
        base_url_setting="groq_base_url",
    ),
    Provider.OPENAI: ProviderProfile(
        provider=Provider.OPENAI,
        api_key_setting="openai_api_key",
        model_setting="openai_model",
        base_url_setting="openai_base_url",
    ),
}

# Groq first when available, then OpenAI.
DEFAULT_PROVIDER_PRIORITY: tuple[Provider, ...] = (Provider.GROQ, Provider.OPENAI)


def resolve_credentials(
    settings: Settings,
    api_keys: ApiKeys | None = None,
) -> dict[Provider, str]:
    """Resolve the credential for every registered provider.

    A per-request key wins over the process-level key. Providers with
    neither are left out.

    Args:
        settings: Application settings holding process-level keys.
        api_keys: Optional per-request override.

    Returns:
        Mapping of credentialed providers to the key to use.
    """
    credentials: dict[Provider, str] = {}
    for provider, profile in PROVIDER_REGISTRY.items():
        key = (api_keys.for_provider(provider) if api_keys else None) or profile.configured_key(
            settings
        )
        if key:
            credentials[provider] = key
    return credentials


def resolve_provider_order(
    preferred: Provider | None,
    credentialed: Iterable[Provider],
) -> list[Provider]:
    """Order the providers to try for one request.

    The preferred provider comes first when it is credentialed, followed by
    the remaining credentialed providers in default priority.

    Args:
        preferred: Caller's preferred provider, if any.
        credentialed: Providers that have a credential.

    Returns:
        Deduplicated provider order. Empty when nothing is credentialed.
    """
    available = set(credentialed)
    order: list[Provider] = []

    if preferred is not None and preferred in available:
        order.append(preferred)

    for provider in DEFAULT_PROVIDER_PRIORITY:
        if provider in available and provider not in order:
            order.append(provider)

    return order
