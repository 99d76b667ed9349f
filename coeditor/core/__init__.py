"""Core configuration, provider routing and service components."""

from coeditor.core.config import Settings, get_settings
from coeditor.core.factory import ComponentFactory
from coeditor.core.service import AssistantService

__all__ = [
    "Settings",
    "get_settings",
    "ComponentFactory",
    "AssistantService",
]
