"""Abstract base classes and protocols for the assistant's seams."""

from coeditor.interfaces.backends import ChatBackend, EditBackend, SearchBackend
from coeditor.interfaces.completion import BaseCompletionClient
from coeditor.interfaces.document import DocumentSurface, TextRange
from coeditor.interfaces.search import BaseSearchClient

__all__ = [
    "BaseCompletionClient",
    "BaseSearchClient",
    "ChatBackend",
    "DocumentSurface",
    "EditBackend",
    "SearchBackend",
    "TextRange",
]
