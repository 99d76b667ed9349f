"""Client-side editing core: edit lifecycle, inserts, chat and transport."""

from coeditor.editing.agent import WebSearchAgent
from coeditor.editing.apply import (
    EditorInsertBridge,
    InsertPayload,
    apply_raw_insert,
    apply_suggestion,
)
from coeditor.editing.chat import ChatSession
from coeditor.editing.document import InMemoryDocument
from coeditor.editing.lifecycle import (
    EditOutcome,
    EditRequestLifecycle,
    EditState,
    PendingSuggestion,
    SelectionSnapshot,
)
from coeditor.editing.table import TableNode, build_table_from_csv
from coeditor.editing.transport import AiTransport

__all__ = [
    "AiTransport",
    "ChatSession",
    "EditOutcome",
    "EditRequestLifecycle",
    "EditState",
    "EditorInsertBridge",
    "InMemoryDocument",
    "InsertPayload",
    "PendingSuggestion",
    "SelectionSnapshot",
    "TableNode",
    "WebSearchAgent",
    "apply_raw_insert",
    "apply_suggestion",
    "build_table_from_csv",
]
