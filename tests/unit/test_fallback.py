"""Unit tests for the sequential provider fallback."""

import asyncio

import pytest

from coeditor.core.errors import AuthFailure, ProviderError
from coeditor.core.fallback import run_with_fallback
from coeditor.core.models import Provider


class ScriptedCall:
    """Callable returning or raising a scripted outcome per provider."""

    def __init__(self, outcomes):
        self.outcomes = outcomes
        self.attempted: list[Provider] = []

    async def __call__(self, provider: Provider) -> str:
        self.attempted.append(provider)
        outcome = self.outcomes[provider]
        if isinstance(outcome, Exception):
            raise outcome
        return outcome


class TestRunWithFallback:
    """Test suite for run_with_fallback."""

    def test_first_success_wins(self):
        """Test that the first provider's success ends the run."""
        call = ScriptedCall({Provider.GROQ: "groq text", Provider.OPENAI: "openai text"})

        result = asyncio.run(run_with_fallback([Provider.GROQ, Provider.OPENAI], call))

        assert result == "groq text"
        assert call.attempted == [Provider.GROQ]

    def test_auth_failure_falls_through_to_next(self):
        """Test that an auth failure moves on and a success stops the run."""
        call = ScriptedCall(
            {
                Provider.GROQ: AuthFailure("Invalid API Key", provider="groq"),
                Provider.OPENAI: "openai text",
            }
        )

        result = asyncio.run(run_with_fallback([Provider.GROQ, Provider.OPENAI], call))

        assert result == "openai text"
        assert call.attempted == [Provider.GROQ, Provider.OPENAI]

    def test_non_auth_failure_stops_immediately(self):
        """Test that a non-auth failure is raised without trying other providers."""
        outage = ProviderError("503 Service Unavailable", provider="groq")
        call = ScriptedCall({Provider.GROQ: outage, Provider.OPENAI: "openai text"})

        with pytest.raises(ProviderError) as exc_info:
            asyncio.run(run_with_fallback([Provider.GROQ, Provider.OPENAI], call))

        assert exc_info.value is outage
        assert call.attempted == [Provider.GROQ]

    def test_exhausted_auth_failures_raise_last(self):
        """Test that the last auth failure is raised once every provider failed."""
        last = AuthFailure("Incorrect API key provided", provider="openai")
        call = ScriptedCall(
            {
                Provider.GROQ: AuthFailure("Invalid API Key", provider="groq"),
                Provider.OPENAI: last,
            }
        )

        with pytest.raises(AuthFailure) as exc_info:
            asyncio.run(run_with_fallback([Provider.GROQ, Provider.OPENAI], call))

        assert exc_info.value is last
        assert call.attempted == [Provider.GROQ, Provider.OPENAI]

    def test_empty_order_is_rejected(self):
        """Test that an empty order is a caller error."""
        call = ScriptedCall({})

        with pytest.raises(ValueError):
            asyncio.run(run_with_fallback([], call))

        assert call.attempted == []

    def test_attempts_are_sequential(self):
        """Test that a provider starts only after the previous one finished."""
        events: list[str] = []

        async def call(provider: Provider) -> str:
            events.append(f"start:{provider.value}")
            await asyncio.sleep(0)
            events.append(f"end:{provider.value}")
            if provider is Provider.GROQ:
                raise AuthFailure("unauthorized", provider="groq")
            return "ok"

        asyncio.run(run_with_fallback([Provider.GROQ, Provider.OPENAI], call))

        assert events == ["start:groq", "end:groq", "start:openai", "end:openai"]
