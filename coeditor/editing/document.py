"""In-memory document surface.

A plain string buffer with a selection. Content is stored verbatim, HTML
included, and positions are character offsets into that string.
`plain_text()` strips the markup.
"""

import html
import re

from coeditor.interfaces.document import DocumentSurface, TextRange

ONBOARDING_TEXT = (
    "Welcome 👋 "
    "Type here, select text, and try the floating toolbar to apply AI edits "
    "(Shorten, Expand, Paraphrase, Convert to Table). "
    "You can also chat with the assistant on the right and ask it to insert "
    "summaries or ideas into the editor."
)

_BLOCK_BREAK = re.compile(r"<br\s*/?>|</(p|div|li|h\d|tr|table|ul|ol)>", re.IGNORECASE)
_TAG = re.compile(r"<[^>]+>")


class InMemoryDocument(DocumentSurface):
    """String-backed DocumentSurface."""

    def __init__(self, text: str = ONBOARDING_TEXT, selection: tuple[int, int] | None = None):
        self._text = text
        self._selection = TextRange(len(text), len(text))
        self.focused = False
        if selection is not None:
            self.select(*selection)

    @property
    def text(self) -> str:
        return self._text

    @property
    def selection(self) -> TextRange:
        return self._selection

    def select(self, start: int, end: int | None = None) -> None:
        """Move the live selection. A single position places a bare cursor."""
        end = start if end is None else end
        if end > len(self._text):
            raise ValueError(f"Selection {start}..{end} is outside the document")
        self._selection = TextRange(start, end)

    def text_between(self, start: int, end: int) -> str:
        return self._text[start:end]

    def plain_text(self) -> str:
        text = _BLOCK_BREAK.sub("\n", self._text)
        return html.unescape(_TAG.sub("", text))

    def replace_range(self, start: int, end: int, content: str) -> None:
        if end > len(self._text):
            raise ValueError(f"Range {start}..{end} is outside the document")
        self._text = self._text[:start] + content + self._text[end:]
        cursor = start + len(content)
        self._selection = TextRange(cursor, cursor)

    def insert_at_cursor(self, content: str) -> None:
        self.replace_range(self._selection.start, self._selection.end, content)

    def set_content(self, content: str) -> None:
        self._text = content
        self._selection = TextRange(0, 0)

    def focus(self, at_end: bool = False) -> None:
        self.focused = True
        if at_end:
            self._selection = TextRange(len(self._text), len(self._text))
