"""Concrete completion client implementations."""

from coeditor.strategies.completions.openai_compatible import (
    OpenAICompatibleClient,
    classify_provider_error,
)

__all__ = [
    "OpenAICompatibleClient",
    "classify_provider_error",
]
