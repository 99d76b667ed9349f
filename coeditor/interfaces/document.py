"""Abstract document surface consumed by the editing core.

The rich-text widget itself lives outside this package. The editing core only
needs to read plain text for a range, replace a range, insert at the cursor,
replace the whole document and move focus.
"""

from abc import ABC, abstractmethod
from dataclasses import dataclass


@dataclass(frozen=True)
class TextRange:
    """A half-open span of document positions.

    Attributes:
        start: First position of the span.
        end: Position just past the span. Equal to start for a bare cursor.
    """

    start: int
    end: int

    def __post_init__(self) -> None:
        if self.start < 0 or self.end < self.start:
            raise ValueError(f"Invalid text range: {self.start}..{self.end}")

    @property
    def is_empty(self) -> bool:
        return self.end <= self.start


class DocumentSurface(ABC):
    """Abstract base class for an editable document view.

    Implementations wrap whatever editing widget hosts the document and
    translate these calls to its command API.
    """

    @property
    @abstractmethod
    def selection(self) -> TextRange:
        """Return the live selection (a collapsed range for a bare cursor)."""
        ...

    @abstractmethod
    def text_between(self, start: int, end: int) -> str:
        """Return the plain text between two positions."""
        ...

    @abstractmethod
    def plain_text(self) -> str:
        """Return the plain text of the whole document."""
        ...

    @abstractmethod
    def replace_range(self, start: int, end: int, content: str) -> None:
        """Replace the span start..end with content."""
        ...

    @abstractmethod
    def insert_at_cursor(self, content: str) -> None:
        """Insert content at the live cursor, replacing any live selection."""
        ...

    @abstractmethod
    def set_content(self, content: str) -> None:
        """Replace the entire document with content."""
        ...

    @abstractmethod
    def focus(self, at_end: bool = False) -> None:
        """Give the surface keyboard focus, optionally moving the cursor to the end."""
        ...
