"""Add/edit/remove/reorder entries of a document's list field through dialogs."""

from __future__ import annotations

import copy
import logging
from typing import TYPE_CHECKING, Any, Callable

from controller.errors import DocumentValidationError
from controller.modal import ModalAction, ModalRequest
from model.document import Entry

if TYPE_CHECKING:
    from controller.session import EditorSession

log = logging.getLogger(__name__)

DEFAULT_REMOVE_PROMPT = "Delete this entry?"


class CollectionMutator:
    """Edits one list-valued field of a session's document.

    Entries are matched by their stable key. By default the document is
    marked dirty as soon as an add or edit dialog opens, even if the dialog
    is then cancelled; pass ``mark_dirty_on_open=False`` to mark it only
    when a change is confirmed.
    """

    def __init__(
        self,
        session: EditorSession,
        field_name: str,
        kind: str,
        target: Callable[[], Any] | None = None,
        allowed_kinds: tuple[str, ...] = (),
        context: Callable[[], dict[str, Any]] | None = None,
        mark_dirty_on_open: bool = True,
        on_change: Callable[[], None] | None = None,
        on_remove: Callable[[], None] | None = None,
        remove_prompt: Callable[[Entry], str] | None = None,
    ) -> None:
        """Initialize the mutator.

        Args:
            session: Owning session (dirty flag, modal channel, confirmation)
            field_name: Attribute name of the list field on the target document
            kind: Dialog kind passed to the modal channel
            target: Returns the document holding the field (default: session.document)
            allowed_kinds: Entry kinds the dialog may offer
            context: Returns cross references passed to the dialog
            mark_dirty_on_open: Mark dirty when the dialog opens rather than on confirm
            on_change: Called after every change (and on dialog open when
                mark_dirty_on_open is set)
            on_remove: Called after a confirmed remove
            remove_prompt: Builds the confirmation text for remove()
        """
        self.session = session
        self.field_name = field_name
        self.kind = kind
        self._target = target or (lambda: session.document)
        self.allowed_kinds = tuple(allowed_kinds)
        self._context = context
        self.mark_dirty_on_open = mark_dirty_on_open
        self._on_change = on_change
        self._on_remove = on_remove
        self._remove_prompt = remove_prompt or (lambda entry: DEFAULT_REMOVE_PROMPT)

    def _document(self) -> Any:
        document = self._target()
        if document is None:
            raise DocumentValidationError("No document loaded")
        return document

    @property
    def entries(self) -> list[Entry]:
        """The current list (empty if the document has none yet)."""
        document = self._target()
        if document is None:
            return []
        return getattr(document, self.field_name, None) or []

    def _ensure_list(self) -> list[Entry]:
        document = self._document()
        entries = getattr(document, self.field_name, None)
        if entries is None:
            entries = []
            setattr(document, self.field_name, entries)
        return entries

    def _changed(self) -> None:
        self.session.mark_dirty()
        if self._on_change:
            self._on_change()

    def _request(self, entry: Entry | None) -> ModalRequest:
        return ModalRequest(
            kind=self.kind,
            is_new=entry is None,
            entry=entry,
            allowed_kinds=self.allowed_kinds,
            context=self._context() if self._context else {},
        )

    def index_of(self, entry: Entry) -> int:
        """Position of the entry with the same key, or -1."""
        for i, candidate in enumerate(self.entries):
            if candidate.key == entry.key:
                return i
        return -1

    async def add(self) -> Entry | None:
        """Open the dialog for a new entry and append the result.

        Returns:
            The appended entry, or None if the dialog was cancelled
        """
        self._document()
        if self.mark_dirty_on_open:
            self._changed()
        outcome = await self.session.channel.open(self._request(None))
        if outcome.action is not ModalAction.ADD or outcome.payload is None:
            return None
        self._ensure_list().append(outcome.payload)
        log.debug(f"Added entry {outcome.payload.key} to {self.field_name}")
        if not self.mark_dirty_on_open:
            self._changed()
        return outcome.payload

    async def edit(self, entry: Entry) -> None:
        """Open the dialog for an existing entry.

        The dialog may change the entry in place, or answer with an UPDATE
        whose payload replaces the entry carrying the same key.
        """
        self._document()
        before = copy.deepcopy(entry.data)
        if self.mark_dirty_on_open:
            self._changed()
        outcome = await self.session.channel.open(self._request(entry))
        changed = entry.data != before
        if outcome.action is ModalAction.UPDATE and outcome.payload is not None:
            changed = self._replace(outcome.payload) or changed
        if changed and not self.mark_dirty_on_open:
            self._changed()

    def _replace(self, replacement: Entry) -> bool:
        entries = self._ensure_list()
        for i, candidate in enumerate(entries):
            if candidate.key == replacement.key:
                entries[i] = replacement
                return True
        log.debug(f"No entry with key {replacement.key} in {self.field_name}")
        return False

    async def remove(self, entry: Entry) -> bool:
        """Remove the entry after confirmation.

        Only the first entry with a matching key is removed. A missing entry
        is not an error.

        Returns:
            True if an entry was removed
        """
        self._document()
        if not await self.session.confirm(self._remove_prompt(entry)):
            return False
        entries = self.entries
        removed = False
        for i, candidate in enumerate(entries):
            if candidate.key == entry.key:
                del entries[i]
                removed = True
                break
        self._changed()
        if self._on_remove:
            self._on_remove()
        return removed

    def reorder(self, from_index: int, to_index: int) -> None:
        """Move one entry to a new position, keeping the others in order.

        Indices are clamped into the list range, like a drag-and-drop list.
        A move that clamps to the same position leaves the document clean.
        """
        self._document()
        entries = self.entries
        if not entries:
            return
        last = len(entries) - 1
        from_index = max(0, min(from_index, last))
        to_index = max(0, min(to_index, last))
        if from_index == to_index:
            return
        entries.insert(to_index, entries.pop(from_index))
        self._changed()
