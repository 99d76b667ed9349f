"""Shared fixtures for unit tests."""

import pytest

from coeditor.core.config import Settings

from .fakes import make_settings


@pytest.fixture
def settings() -> Settings:
    """Settings with both providers configured."""
    return make_settings(openai_api_key="sk-openai", groq_api_key="gsk-groq")
