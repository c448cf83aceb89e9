"""Editor sessions: the lifecycle of one document bound to one tab.

State machine::

    LOADING -> READY
    READY -> SAVING -> READY
    READY -> DELETING -> CLOSED   (back to READY when the delete fails)

A save or delete is only accepted in READY; a second request while one is
in flight raises OperationInProgressError. Transport failures and malformed
payloads are reported through the tab coordinator and never leave the
session stuck: the loading flag is cleared and the session returns to
READY with the state it had before the call.
"""

from __future__ import annotations

import logging
from enum import Enum
from typing import TYPE_CHECKING, Any

from backend import TransportError
from controller.collection import CollectionMutator
from controller.dirty import DirtyTracker
from controller.errors import DocumentValidationError, OperationInProgressError
from controller.modal import ModalKind
from controller.tabs import LAYOUTS_TAB_ID, layout_tab_id
from controller.validators import validate_key_name
from model import FIELD_KINDS, NEW_DOCUMENT_ID, Entry, Layout, from_wire, to_wire

if TYPE_CHECKING:
    from backend import PersistenceClient
    from controller.modal import ModalResultChannel
    from controller.tabs import TabCoordinator

log = logging.getLogger(__name__)


class SessionState(Enum):
    LOADING = "loading"
    READY = "ready"
    SAVING = "saving"
    DELETING = "deleting"
    CLOSED = "closed"


class EditorSession:
    """State shared by every kind of editor session.

    All collaborators are passed in; nothing is looked up globally.
    """

    def __init__(
        self,
        client: PersistenceClient,
        tabs: TabCoordinator,
        channel: ModalResultChannel,
        tab_id: str,
    ) -> None:
        self.client = client
        self.tabs = tabs
        self.channel = channel
        self.tab_id = tab_id
        self.state = SessionState.LOADING
        self.document: Any = None
        self._dirty = DirtyTracker(tabs, lambda: self.tab_id)

    # =========================================================================
    # Dirty tracking
    # =========================================================================

    @property
    def dirty(self) -> bool:
        return self._dirty.dirty

    def set_dirty(self, dirty: bool) -> None:
        self._dirty.set(dirty)

    def mark_dirty(self) -> None:
        """Record a local change (scalar field edits call this directly)."""
        self._dirty.set(True)

    # =========================================================================
    # State machine helpers
    # =========================================================================

    @property
    def busy(self) -> bool:
        return self.state in (SessionState.LOADING, SessionState.SAVING, SessionState.DELETING)

    def _set_loading(self, loading: bool) -> None:
        self.tabs.set_loading(self.tab_id, loading)

    def _begin(self, state: SessionState, *allowed: SessionState) -> None:
        """Enter a working state, or refuse if another operation is running."""
        allowed = allowed or (SessionState.READY,)
        if self.state not in allowed:
            raise OperationInProgressError(
                f"Cannot start {state.value} while session is {self.state.value}"
            )
        self.state = state
        self._set_loading(True)

    def _finish(self) -> None:
        self._set_loading(False)
        self.state = SessionState.READY

    async def confirm(self, message: str) -> bool:
        """Interactive confirmation gate for destructive operations."""
        return await self.channel.confirm(message)

    def navigate_to(self, path: str) -> None:
        self.tabs.navigate_to(path)

    def close(self) -> None:
        """End the session (tab closed or navigated away). Nothing is saved."""
        self.state = SessionState.CLOSED


class DocumentSession(EditorSession):
    """Load, edit, save and delete one layout document."""

    NEW_TITLE = "New Layout"
    UNTITLED_TITLE = "Untitled Layout"

    def __init__(
        self,
        client: PersistenceClient,
        tabs: TabCoordinator,
        channel: ModalResultChannel,
        doc_id: str,
        tab_id: str | None = None,
        list_tab_id: str = LAYOUTS_TAB_ID,
        mark_dirty_on_open: bool = True,
    ) -> None:
        """Initialize the session.

        Args:
            client: Persistence client
            tabs: Tab coordinator owning the session's tab
            channel: Modal channel for field dialogs and confirmations
            doc_id: Document id, or NEW_DOCUMENT_ID for a new layout
            tab_id: Tab id (defaults to the id derived from doc_id)
            list_tab_id: Tab id of the layout list marked stale on save/delete
            mark_dirty_on_open: Passed to the custom field mutator
        """
        super().__init__(client, tabs, channel, tab_id or layout_tab_id(doc_id))
        self.doc_id = doc_id
        self.list_tab_id = list_tab_id
        self.document: Layout | None = None
        self.fields = CollectionMutator(
            self,
            "custom_fields",
            ModalKind.LAYOUT_FIELD,
            allowed_kinds=FIELD_KINDS,
            mark_dirty_on_open=mark_dirty_on_open,
            remove_prompt=_field_remove_prompt,
        )

    async def initialize(self) -> None:
        """Create a new layout or fetch the existing one (one request, no retry)."""
        self._begin(SessionState.LOADING, SessionState.LOADING, SessionState.READY)

        if self.doc_id == NEW_DOCUMENT_ID:
            self.document = Layout()
            self.tabs.set_title(self.tab_id, self.NEW_TITLE)
            self.set_dirty(False)
            self._finish()
            return

        try:
            result = await self.client.fetch_item(self.doc_id)
            if result.item:
                self.document = from_wire(Layout, result.item)
                self.tabs.set_title(self.tab_id, self.document.title or self.UNTITLED_TITLE)
                self.set_dirty(False)
            else:
                log.info(f"Layout {self.doc_id} not found")
                self.tabs.notify("Layout not found")
        except (TransportError, ValueError) as e:
            log.warning(f"Loading layout {self.doc_id} failed: {e}")
            self.tabs.notify("Error while loading layout")
        finally:
            self._finish()

    async def save(self) -> bool:
        """Save the layout.

        Returns:
            True if the server confirmed the save

        Raises:
            OperationInProgressError: Another operation is running
            DocumentValidationError: The key name is missing (nothing is sent)
        """
        if self.state is not SessionState.READY:
            raise OperationInProgressError(f"Cannot save while session is {self.state.value}")
        layout = self.document
        validate_key_name(layout.okey if layout else None)

        self._begin(SessionState.SAVING)
        payload = to_wire(layout)
        if layout.is_new:
            payload.pop("id", None)
        try:
            result = await self.client.save_layout(payload)
        except TransportError as e:
            log.warning(f"Saving layout {layout.id} failed: {e}")
            self.tabs.notify("Error while saving layout")
            self._finish()
            return False

        if result.id is not None and result.id != layout.id:
            # First save of a new document: the tab follows the server id
            new_tab_id = layout_tab_id(result.id)
            self.tabs.change_tab_id(self.tab_id, new_tab_id, result.id)
            self.tab_id = new_tab_id
            self.doc_id = result.id
            layout.id = result.id
        self._finish()
        self.tabs.set_title(self.tab_id, layout.title or self.UNTITLED_TITLE)
        self.tabs.mark_data_stale(self.list_tab_id, True)
        if result.success:
            self.tabs.notify("Document saved")
            self.set_dirty(False)
        return result.success

    async def delete(self) -> bool:
        """Delete the layout after confirmation and close its tab.

        An unsaved new layout is discarded without a request.

        Returns:
            True if the document was deleted and the session closed
        """
        if self.state is not SessionState.READY:
            raise OperationInProgressError(f"Cannot delete while session is {self.state.value}")
        layout = self.document
        if layout is None:
            raise DocumentValidationError("No document loaded")
        if not await self.confirm("Do you really want to delete this object?"):
            return False

        if layout.is_new:
            self.tabs.close_tab(self.tab_id)
            self.close()
            return True

        self._begin(SessionState.DELETING)
        try:
            result = await self.client.delete_item(layout.id)
        except TransportError as e:
            log.warning(f"Deleting layout {layout.id} failed: {e}")
            result = None

        if result is None or not result.success:
            self.tabs.notify("Error while deleting")
            self._finish()
            return False

        self.tabs.notify("Document deleted")
        self.tabs.mark_data_stale(self.list_tab_id, True)
        self.tabs.close_tab(self.tab_id)
        self.close()
        return True


def _field_remove_prompt(entry: Entry) -> str:
    return f"Do you really want to delete the field '{entry.get('fldName', '')}'?"
