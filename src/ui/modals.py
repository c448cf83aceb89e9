"""Modal dialogs: confirmation and list-entry editors.

Entry dialogs always dismiss with a ModalOutcome; closing one with Cancel
or Escape yields ModalOutcome.cancelled(). Edits are made on a copy of the
entry and returned as an UPDATE, so a cancelled dialog leaves the entry
untouched.
"""

from __future__ import annotations

import json

from textual import on
from textual.app import ComposeResult
from textual.containers import Horizontal, Vertical
from textual.screen import ModalScreen
from textual.widgets import Button, Input, Label, Select, Static, TextArea

from controller.modal import ModalKind, ModalOutcome, ModalRequest
from controller.validators import parse_entry_json
from model import Entry
import ui.ids as ids
from ui.ids import css

MODAL_TITLES = {
    ModalKind.LAYOUT_FIELD: "Layout Field",
    ModalKind.BUCKET: "Bucket",
    ModalKind.CFDIST: "CloudFront Distribution",
    ModalKind.GLOBAL_SCRIPT: "Global Template Function",
    ModalKind.BOOKMARK: "Bookmark",
    ModalKind.FEED: "Feed",
    ModalKind.VARIABLE: "Variable",
    ModalKind.IMAGE_PROFILE: "Image Profile",
}


class ConfirmModal(ModalScreen[bool]):
    """Yes/No confirmation for destructive operations."""

    BINDINGS = [
        ("escape", "cancel", "Cancel"),
        ("y", "confirm", "Yes"),
        ("n", "cancel", "No"),
    ]

    def __init__(self, message: str) -> None:
        super().__init__()
        self.message = message

    def compose(self) -> ComposeResult:
        with Vertical(id="confirm-modal", classes="modal"):
            yield Static(self.message, id=ids.CONFIRM_MESSAGE)
            with Horizontal(id=ids.MODAL_BUTTONS):
                yield Button("No", id=ids.NO_BTN, variant="default")
                yield Button("Yes", id=ids.YES_BTN, variant="error")

    def action_cancel(self) -> None:
        self.dismiss(False)

    def action_confirm(self) -> None:
        self.dismiss(True)

    @on(Button.Pressed, css(ids.NO_BTN))
    def on_no(self, event: Button.Pressed) -> None:
        self.dismiss(False)

    @on(Button.Pressed, css(ids.YES_BTN))
    def on_yes(self, event: Button.Pressed) -> None:
        self.dismiss(True)


class EntryModal(ModalScreen[ModalOutcome]):
    """Edit an opaque list entry as a JSON object."""

    BINDINGS = [("escape", "cancel", "Cancel")]

    def __init__(self, request: ModalRequest) -> None:
        super().__init__()
        self.request = request

    @property
    def title_text(self) -> str:
        name = MODAL_TITLES.get(self.request.kind, "Entry")
        return f"New {name}" if self.request.is_new else f"Edit {name}"

    def compose(self) -> ComposeResult:
        data = self.request.entry.data if self.request.entry else {}
        with Vertical(id="entry-modal", classes="modal"):
            yield Label(self.title_text, id=ids.MODAL_TITLE)
            categories = self.request.context.get("categories")
            if categories:
                yield Static(f"Categories: {', '.join(categories)}", id=ids.ENTRY_HINT)
            yield TextArea(json.dumps(data, indent=2), id=ids.ENTRY_EDITOR)
            yield Static("", id=ids.MODAL_ERROR)
            with Horizontal(id=ids.MODAL_BUTTONS):
                yield Button("Cancel", id=ids.MODAL_CANCEL_BTN, variant="default")
                yield Button("Save", id=ids.MODAL_SAVE_BTN, variant="success")

    def on_mount(self) -> None:
        self.query_one(css(ids.ENTRY_EDITOR), TextArea).focus()

    def action_cancel(self) -> None:
        self.dismiss(ModalOutcome.cancelled())

    @on(Button.Pressed, css(ids.MODAL_CANCEL_BTN))
    def on_cancel(self, event: Button.Pressed) -> None:
        self.dismiss(ModalOutcome.cancelled())

    @on(Button.Pressed, css(ids.MODAL_SAVE_BTN))
    def on_save(self, event: Button.Pressed) -> None:
        data = parse_entry_json(self.query_one(css(ids.ENTRY_EDITOR), TextArea).text)
        if data is None:
            self.query_one(css(ids.MODAL_ERROR), Static).update("Enter a JSON object")
            return
        self.dismiss(_outcome(self.request, data))


class LayoutFieldModal(ModalScreen[ModalOutcome]):
    """Edit a layout custom field: name, title and field kind."""

    BINDINGS = [("escape", "cancel", "Cancel")]

    def __init__(self, request: ModalRequest) -> None:
        super().__init__()
        self.request = request

    def compose(self) -> ComposeResult:
        entry = self.request.entry
        kinds = self.request.allowed_kinds or ("text",)
        kind = entry.get("fldType") if entry else None
        with Vertical(id="field-modal", classes="modal"):
            yield Label("New Field" if self.request.is_new else "Edit Field", id=ids.MODAL_TITLE)
            yield Input(
                value=entry.get("fldName", "") if entry else "",
                placeholder="Field name...",
                id=ids.FIELD_NAME_INPUT,
            )
            yield Input(
                value=entry.get("fldTitle", "") if entry else "",
                placeholder="Field title...",
                id=ids.FIELD_TITLE_INPUT,
            )
            yield Select(
                [(k, k) for k in kinds],
                value=kind if kind in kinds else kinds[0],
                allow_blank=False,
                id=ids.FIELD_KIND_SELECT,
            )
            yield Static("", id=ids.MODAL_ERROR)
            with Horizontal(id=ids.MODAL_BUTTONS):
                yield Button("Cancel", id=ids.MODAL_CANCEL_BTN, variant="default")
                yield Button("Save", id=ids.MODAL_SAVE_BTN, variant="success")

    def on_mount(self) -> None:
        self.query_one(css(ids.FIELD_NAME_INPUT), Input).focus()

    def action_cancel(self) -> None:
        self.dismiss(ModalOutcome.cancelled())

    @on(Button.Pressed, css(ids.MODAL_CANCEL_BTN))
    def on_cancel(self, event: Button.Pressed) -> None:
        self.dismiss(ModalOutcome.cancelled())

    @on(Button.Pressed, css(ids.MODAL_SAVE_BTN))
    def on_save(self, event: Button.Pressed) -> None:
        name = self.query_one(css(ids.FIELD_NAME_INPUT), Input).value.strip()
        if not name:
            self.query_one(css(ids.MODAL_ERROR), Static).update("Field name is required")
            return
        data = dict(self.request.entry.data) if self.request.entry else {}
        data["fldName"] = name
        data["fldTitle"] = self.query_one(css(ids.FIELD_TITLE_INPUT), Input).value.strip()
        data["fldType"] = self.query_one(css(ids.FIELD_KIND_SELECT), Select).value
        self.dismiss(_outcome(self.request, data))


def _outcome(request: ModalRequest, data: dict) -> ModalOutcome:
    """ADD for a new entry, UPDATE (same key) for an edited one."""
    if request.entry is None:
        return ModalOutcome.added(Entry(data=data))
    return ModalOutcome.updated(Entry(data=data, key=request.entry.key))


def build_entry_modal(request: ModalRequest) -> ModalScreen[ModalOutcome]:
    """Pick the dialog for a request kind."""
    if request.kind == ModalKind.LAYOUT_FIELD:
        return LayoutFieldModal(request)
    return EntryModal(request)
