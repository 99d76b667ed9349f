"""Edit request lifecycle for "transform selection" actions.

One lifecycle instance owns the pending-suggestion slot of one document view.
A request captures the selection up front, shows a placeholder preview, asks
the edit backend for a suggestion and parks the result until the user
confirms or cancels.

Requests supersede each other. Each one gets a fresh request id and a result
is only committed while its id is still current, so a slow earlier request
can never overwrite the slot after a newer one has started.
"""

import asyncio
import itertools
from collections.abc import Callable
from dataclasses import dataclass, replace
from enum import Enum

import structlog

from coeditor.core.config import Settings
from coeditor.core.errors import ProviderError
from coeditor.core.models import ApiKeys, Instruction, Provider
from coeditor.editing.apply import apply_suggestion
from coeditor.editing.table import build_table_from_csv
from coeditor.interfaces.backends import EditBackend
from coeditor.interfaces.document import DocumentSurface, TextRange

logger = structlog.get_logger(__name__)

GENERATING = "Generating…"

PreviewCallback = Callable[[str, str], None]
AlertCallback = Callable[[str], None]


class EditState(str, Enum):
    IDLE = "idle"
    CAPTURING = "capturing"
    REQUESTING = "requesting"
    PENDING_CONFIRMATION = "pending_confirmation"


class EditOutcome(str, Enum):
    GENERATING = "generating"
    SUCCEEDED = "succeeded"
    FAILED = "failed"


@dataclass(frozen=True)
class SelectionSnapshot:
    """Selection text and position captured before any network I/O."""

    text: str
    range_start: int
    range_end: int

    @property
    def range(self) -> TextRange:
        return TextRange(self.range_start, self.range_end)


@dataclass(frozen=True)
class PendingSuggestion:
    """The single suggestion awaiting user confirmation."""

    original_text: str
    suggestion_text: str
    target_range: TextRange | None
    outcome: EditOutcome = EditOutcome.GENERATING


def _noop_preview(original: str, suggestion: str) -> None:
    return None


def _noop_alert(message: str) -> None:
    return None


class EditRequestLifecycle:
    """State machine behind the selection toolbar's AI actions.

    Example:
        ```python
        lifecycle = EditRequestLifecycle(transport, on_preview=modal.show, on_alert=ui.alert)
        await lifecycle.request(selected_text, Instruction.SHORTEN, surface)
        # ... user reviews the preview ...
        lifecycle.confirm(True)
        ```
    """

    def __init__(
        self,
        backend: EditBackend,
        on_preview: PreviewCallback | None = None,
        on_alert: AlertCallback | None = None,
        min_selection_length: int = 3,
        api_keys: ApiKeys | None = None,
        provider: Provider | None = None,
    ) -> None:
        """Initialize the lifecycle.

        Args:
            backend: Produces suggestions (HTTP transport or in-process service).
            on_preview: Called with (original, suggestion) whenever the preview changes.
            on_alert: Called with a message when an edit fails.
            min_selection_length: Shortest trimmed selection that is sent.
            api_keys: Credential override forwarded with every request.
            provider: Preferred provider forwarded with every request.
        """
        self._backend = backend
        self._on_preview = on_preview or _noop_preview
        self._on_alert = on_alert or _noop_alert
        self._min_selection_length = min_selection_length
        self._api_keys = api_keys
        self._provider = provider

        self._request_ids = itertools.count(1)
        self._current_request_id: int | None = None
        self._state = EditState.IDLE
        self._pending: PendingSuggestion | None = None
        self._snapshot: SelectionSnapshot | None = None
        self._surface: DocumentSurface | None = None

    @classmethod
    def from_settings(
        cls,
        backend: EditBackend,
        settings: Settings,
        on_preview: PreviewCallback | None = None,
        on_alert: AlertCallback | None = None,
        api_keys: ApiKeys | None = None,
        provider: Provider | None = None,
    ) -> "EditRequestLifecycle":
        """Build a lifecycle using the configured minimum selection length."""
        return cls(
            backend,
            on_preview=on_preview,
            on_alert=on_alert,
            min_selection_length=settings.min_selection_length,
            api_keys=api_keys,
            provider=provider,
        )

    @property
    def state(self) -> EditState:
        return self._state

    @property
    def pending(self) -> PendingSuggestion | None:
        return self._pending

    @property
    def snapshot(self) -> SelectionSnapshot | None:
        return self._snapshot

    @property
    def loading(self) -> bool:
        return self._state in (EditState.CAPTURING, EditState.REQUESTING)

    async def request(
        self,
        selection_text: str,
        instruction: Instruction,
        surface: DocumentSurface,
    ) -> bool:
        """Request an AI edit of the current selection.

        Args:
            selection_text: Text of the live selection.
            instruction: The transform to apply.
            surface: The document the selection belongs to.

        Returns:
            True if a suggestion was committed to the pending slot (or a table
            was inserted), False if the request was skipped, failed or superseded.
        """
        trimmed = (selection_text or "").strip()
        if not trimmed:
            logger.info("AI edit skipped: empty selection")
            return False

        if instruction is Instruction.TABLE:
            self._insert_table(trimmed, surface)
            return True

        if len(trimmed) < self._min_selection_length:
            logger.info("AI edit skipped: selection too short", length=len(trimmed))
            return False

        if self.loading:
            logger.info("Superseding in-flight AI edit", previous=self._current_request_id)

        request_id = next(self._request_ids)
        self._current_request_id = request_id
        log = logger.bind(request_id=request_id, instruction=instruction.value)

        self._state = EditState.CAPTURING
        live = surface.selection
        self._snapshot = SelectionSnapshot(
            text=trimmed, range_start=live.start, range_end=live.end
        )
        self._surface = surface
        self._pending = PendingSuggestion(
            original_text=trimmed,
            suggestion_text=GENERATING,
            target_range=self._snapshot.range,
        )
        self._state = EditState.REQUESTING

        log.info("AI edit starting", preview=trimmed[:50])
        self._on_preview(trimmed, GENERATING)
        surface.focus()

        try:
            suggestion = await self._backend.suggest_edit(
                trimmed,
                instruction,
                api_keys=self._api_keys,
                provider=self._provider,
            )
            suggestion = (suggestion or "").strip()
            if not suggestion:
                raise ProviderError("Empty suggestion from AI")
        except asyncio.CancelledError:
            if request_id == self._current_request_id:
                log.info("AI edit cancelled")
                self._reset()
            raise
        except Exception as e:
            if request_id != self._current_request_id:
                log.debug("Discarding stale AI edit failure", error=str(e))
                return False
            message = f"AI edit failed: {e}"
            log.error("AI edit error", error=str(e))
            self._commit(EditOutcome.FAILED, message)
            self._on_alert(message)
            return False

        if request_id != self._current_request_id:
            log.debug("Discarding stale AI edit result")
            return False

        log.info("AI edit success", suggestion_length=len(suggestion))
        self._commit(EditOutcome.SUCCEEDED, suggestion)
        return True

    def confirm(self, confirmed: bool) -> bool:
        """Resolve the pending suggestion and return to idle.

        Args:
            confirmed: True to apply the suggestion, False to discard it.

        Returns:
            True if the suggestion was written to the document.
        """
        pending = self._pending
        surface = self._surface
        logger.info(
            "Preview confirm",
            confirmed=confirmed,
            outcome=pending.outcome.value if pending else None,
        )

        applied = False
        if (
            confirmed
            and pending is not None
            and surface is not None
            and pending.outcome is EditOutcome.SUCCEEDED
        ):
            apply_suggestion(surface, pending.suggestion_text, pending.target_range)
            applied = True

        self._reset()
        return applied

    def cancel(self) -> None:
        """Discard the pending suggestion. A late result for it is dropped."""
        self.confirm(False)

    def _commit(self, outcome: EditOutcome, text: str) -> None:
        if self._pending is None:
            raise RuntimeError("No pending suggestion to update")
        self._pending = replace(self._pending, suggestion_text=text, outcome=outcome)
        self._state = EditState.PENDING_CONFIRMATION
        self._on_preview(self._pending.original_text, text)

    def _reset(self) -> None:
        self._current_request_id = None
        self._pending = None
        self._snapshot = None
        self._surface = None
        self._state = EditState.IDLE

    def _insert_table(self, text: str, surface: DocumentSurface) -> None:
        table = build_table_from_csv(text)
        logger.info(
            "Converting selection to table",
            rows=len(table.rows),
            columns=table.column_count,
        )
        apply_suggestion(surface, table.to_html(), surface.selection)
