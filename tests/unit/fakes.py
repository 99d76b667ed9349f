"""Fakes and helpers shared by unit tests."""

import asyncio

from coeditor.core.config import Settings
from coeditor.core.factory import ComponentFactory
from coeditor.core.models import Provider
from coeditor.interfaces.completion import BaseCompletionClient


def make_settings(**overrides) -> Settings:
    """Build settings isolated from the environment and any .env file."""
    values = {
        "openai_api_key": "",
        "groq_api_key": "",
        "tavily_api_key": "",
    }
    values.update(overrides)
    return Settings(_env_file=None, **values)


class FakeCompletionClient(BaseCompletionClient):
    """Completion client returning a canned result or raising a canned error."""

    def __init__(self, provider: Provider, outcome: str | Exception) -> None:
        self._provider = provider
        self._outcome = outcome
        self.calls: list[tuple[str, str, int]] = []
        self.close_count = 0

    @property
    def provider(self) -> Provider:
        return self._provider

    async def complete(self, system_instruction: str, user_prompt: str, max_tokens: int) -> str:
        self.calls.append((system_instruction, user_prompt, max_tokens))
        if isinstance(self._outcome, Exception):
            raise self._outcome
        return self._outcome

    async def aclose(self) -> None:
        self.close_count += 1


class FakeFactory(ComponentFactory):
    """Factory handing out one FakeCompletionClient per provider and recording credentials."""

    def __init__(self, settings: Settings, outcomes: dict[Provider, str | Exception]) -> None:
        super().__init__(settings)
        self.outcomes = outcomes
        self.clients: dict[Provider, FakeCompletionClient] = {}
        self.requested: list[tuple[Provider, str]] = []

    def create_completion_client(self, provider: Provider, api_key: str) -> BaseCompletionClient:
        self.requested.append((provider, api_key))
        if provider not in self.clients:
            self.clients[provider] = FakeCompletionClient(provider, self.outcomes[provider])
        return self.clients[provider]


class ControlledEditBackend:
    """Edit backend whose calls stay pending until the test resolves them."""

    def __init__(self) -> None:
        self.calls: list[dict] = []
        self.futures: list[asyncio.Future] = []

    async def suggest_edit(self, selection, instruction, api_keys=None, provider=None) -> str:
        future = asyncio.get_running_loop().create_future()
        self.calls.append(
            {
                "selection": selection,
                "instruction": instruction,
                "api_keys": api_keys,
                "provider": provider,
            }
        )
        self.futures.append(future)
        return await future

    def resolve(self, index: int, value: str) -> None:
        self.futures[index].set_result(value)

    def fail(self, index: int, error: Exception) -> None:
        self.futures[index].set_exception(error)


async def wait_for_calls(backend, count: int) -> None:
    """Yield to the event loop until the backend has seen `count` calls."""
    for _ in range(100):
        if len(backend.calls) >= count:
            return
        await asyncio.sleep(0)
    raise AssertionError(f"backend saw {len(backend.calls)} call(s), expected {count}")


class ControlledChatBackend:
    """Chat backend whose replies stay pending until the test resolves them."""

    def __init__(self) -> None:
        self.calls: list[dict] = []
        self.futures: list[asyncio.Future] = []

    async def chat(self, messages, provider=None, api_keys=None) -> str:
        future = asyncio.get_running_loop().create_future()
        self.calls.append({"messages": messages, "provider": provider, "api_keys": api_keys})
        self.futures.append(future)
        return await future

    def resolve(self, index: int, value: str) -> None:
        self.futures[index].set_result(value)

    def fail(self, index: int, error: Exception) -> None:
        self.futures[index].set_exception(error)
