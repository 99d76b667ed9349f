"""Unit tests for the in-process assistant service."""

import asyncio
from unittest.mock import patch

import pytest

from coeditor.core.errors import AuthFailure, ConfigurationError, EditValidationError, ProviderError
from coeditor.core.models import ApiKeys, ChatMessage, Instruction, Provider
from coeditor.core.prompts import CHAT_SYSTEM_PROMPT, EDIT_SYSTEM_PROMPTS
from coeditor.core.service import NOT_CONFIGURED_MESSAGE, AssistantService

from .fakes import FakeFactory, make_settings


class TestSuggestEdit:
    """Test suite for AssistantService.suggest_edit."""

    def test_uses_instruction_prompt_and_budget(self, settings):
        """Test that the edit reaches the first provider with the right prompts."""
        factory = FakeFactory(settings, {Provider.GROQ: "Short.", Provider.OPENAI: "unused"})
        service = AssistantService(settings, factory)

        result = asyncio.run(
            service.suggest_edit("  A long sentence here.  ", Instruction.SHORTEN)
        )

        assert result == "Short."
        system, prompt, max_tokens = factory.clients[Provider.GROQ].calls[0]
        assert system == EDIT_SYSTEM_PROMPTS[Instruction.SHORTEN]
        assert prompt == 'Selection:\n"""A long sentence here."""\n\nInstruction: shorten'
        assert max_tokens == settings.edit_max_tokens
        assert Provider.OPENAI not in factory.clients

    def test_preferred_provider_goes_first(self, settings):
        """Test that the caller's preference is honoured when credentialed."""
        factory = FakeFactory(settings, {Provider.GROQ: "groq", Provider.OPENAI: "openai"})
        service = AssistantService(settings, factory)

        result = asyncio.run(
            service.suggest_edit("Some text", Instruction.EXPAND, provider=Provider.OPENAI)
        )

        assert result == "openai"

    def test_auth_failure_falls_back(self, settings):
        """Test that an auth failure on the first provider tries the next."""
        factory = FakeFactory(
            settings,
            {
                Provider.GROQ: AuthFailure("Invalid API Key", provider="groq"),
                Provider.OPENAI: "from openai",
            },
        )
        service = AssistantService(settings, factory)

        result = asyncio.run(service.suggest_edit("Some text", Instruction.PARAPHRASE))

        assert result == "from openai"

    def test_non_auth_failure_does_not_fall_back(self, settings):
        """Test that a provider outage is surfaced without trying OpenAI."""
        factory = FakeFactory(
            settings,
            {
                Provider.GROQ: ProviderError("Rate limit reached", provider="groq"),
                Provider.OPENAI: "never",
            },
        )
        service = AssistantService(settings, factory)

        with pytest.raises(ProviderError, match="Rate limit reached"):
            asyncio.run(service.suggest_edit("Some text", Instruction.SHORTEN))

        assert Provider.OPENAI not in factory.clients

    def test_all_auth_failures_mention_authentication(self, settings):
        """Test the final message when no provider accepts its key."""
        factory = FakeFactory(
            settings,
            {
                Provider.GROQ: AuthFailure("Invalid API Key", provider="groq"),
                Provider.OPENAI: AuthFailure("Incorrect API key provided", provider="openai"),
            },
        )
        service = AssistantService(settings, factory)

        with pytest.raises(AuthFailure) as exc_info:
            asyncio.run(service.suggest_edit("Some text", Instruction.SHORTEN))

        message = exc_info.value.message
        assert "Unable to authenticate with any configured AI provider (groq, openai)" in message
        assert "Incorrect API key provided" in message
        assert exc_info.value.status_code == 401

    def test_not_configured_fails_before_orchestrator(self):
        """Test that no credentials raise ConfigurationError without provider calls."""
        settings = make_settings()
        factory = FakeFactory(settings, {})
        service = AssistantService(settings, factory)

        with patch("coeditor.core.service.run_with_fallback") as orchestrator:
            with pytest.raises(ConfigurationError) as exc_info:
                asyncio.run(service.suggest_edit("Some text", Instruction.SHORTEN))

        assert exc_info.value.message == NOT_CONFIGURED_MESSAGE
        orchestrator.assert_not_called()
        assert factory.requested == []

    def test_request_keys_are_used(self):
        """Test that per-request keys credential providers and reach the client."""
        settings = make_settings(openai_api_key="sk-env")
        factory = FakeFactory(settings, {Provider.OPENAI: "ok"})
        service = AssistantService(settings, factory)

        asyncio.run(
            service.suggest_edit(
                "Some text", Instruction.SHORTEN, api_keys=ApiKeys(openai="sk-request")
            )
        )

        assert factory.requested == [(Provider.OPENAI, "sk-request")]
        assert factory.clients[Provider.OPENAI].close_count == 1

    @pytest.mark.parametrize(
        "selection, instruction",
        [("", Instruction.SHORTEN), ("   ", Instruction.EXPAND), ("Some text", None)],
    )
    def test_missing_selection_or_instruction(self, settings, selection, instruction):
        """Test that invalid edits are rejected before any provider call."""
        factory = FakeFactory(settings, {})
        service = AssistantService(settings, factory)

        with pytest.raises(EditValidationError, match="Missing selection or instruction"):
            asyncio.run(service.suggest_edit(selection, instruction))

        assert factory.requested == []


class TestChat:
    """Test suite for AssistantService.chat."""

    def test_renders_conversation(self, settings):
        """Test the chat prompt and budget."""
        factory = FakeFactory(settings, {Provider.GROQ: "<p>Hello!</p>"})
        service = AssistantService(settings, factory)
        messages = [
            ChatMessage(role="assistant", content="Hi there"),
            ChatMessage(role="user", content="Tell me about Next.js"),
        ]

        reply = asyncio.run(service.chat(messages))

        assert reply == "<p>Hello!</p>"
        system, prompt, max_tokens = factory.clients[Provider.GROQ].calls[0]
        assert system == CHAT_SYSTEM_PROMPT
        assert "Assistant: Hi there\nUser: Tell me about Next.js" in prompt
        assert max_tokens == settings.chat_max_tokens

    def test_not_configured(self):
        """Test that chat also needs a configured provider."""
        service = AssistantService(make_settings(), FakeFactory(make_settings(), {}))

        with pytest.raises(ConfigurationError):
            asyncio.run(service.chat([ChatMessage(role="user", content="hi")]))
