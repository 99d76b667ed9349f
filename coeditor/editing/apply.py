"""Apply confirmed suggestions and assistant content to a document surface."""

import html
import logging
import re
from dataclasses import dataclass

from coeditor.interfaces.document import DocumentSurface, TextRange

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class InsertPayload:
    """Content the chat or agent hands to the document surface."""

    text: str
    html: bool = False


def is_onboarding_text(text: str) -> bool:
    """Return True if the document still holds only the welcome content."""
    t = re.sub(r"\s+", " ", text).strip().lower()
    return (
        t.startswith("welcome")
        and "select text" in t
        and ("floating toolbar" in t or "convert to table" in t)
    )


def apply_suggestion(
    surface: DocumentSurface,
    suggestion: str,
    target_range: TextRange | None,
) -> None:
    """Write a confirmed suggestion into the document.

    The captured range wins over the live selection, so the edit lands where it
    was requested even if the user clicked elsewhere while it was generating.

    Args:
        surface: The document to mutate.
        suggestion: The confirmed text.
        target_range: Range captured when the edit was requested, if any.
    """
    surface.focus()
    if target_range is not None:
        logger.debug(f"Applying suggestion at {target_range.start}..{target_range.end}")
        surface.replace_range(target_range.start, target_range.end, suggestion)
    else:
        logger.warning("No captured range, inserting suggestion at the cursor")
        surface.insert_at_cursor(suggestion)


def apply_raw_insert(surface: DocumentSurface, payload: InsertPayload) -> None:
    """Insert chat or agent content at the live selection.

    The first real content replaces the onboarding document entirely.
    Otherwise a non-empty selection is replaced, or content goes in at the cursor.
    """
    if not payload.text:
        return

    if is_onboarding_text(surface.plain_text()):
        logger.info("Replacing onboarding document with assistant content")
        content = payload.text if payload.html else f"<p>{html.escape(payload.text)}</p>"
        surface.set_content(content)
        surface.focus(at_end=True)
        return

    selection = surface.selection
    surface.focus()
    if not selection.is_empty:
        surface.replace_range(selection.start, selection.end, payload.text)
    else:
        surface.insert_at_cursor(payload.text)


class EditorInsertBridge:
    """Callable insert channel bound to one document surface.

    Handed to the chat session and the web search agent at construction time.
    """

    def __init__(self, surface: DocumentSurface) -> None:
        self._surface = surface

    @property
    def surface(self) -> DocumentSurface:
        return self._surface

    def __call__(self, payload: InsertPayload) -> None:
        apply_raw_insert(self._surface, payload)
