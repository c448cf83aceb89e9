"""Layout editor tab composition."""

from __future__ import annotations

from textual.app import ComposeResult
from textual.containers import Horizontal, Vertical, VerticalScroll
from textual.widgets import Button, Input, Label, Static, TextArea

import ui.ids as ids

TEMPLATE_HELP_TEXT = (
    "The template is rendered with the layout's custom fields.\n"
    "Reference a field by its name, e.g. #{title} or !{body} for unescaped HTML."
)


def compose_layout_tab() -> ComposeResult:
    """Compose the layout editor content.

    Values are filled in once the layout has loaded.

    Yields:
        Textual widgets for a layout editor tab
    """
    with VerticalScroll(classes="layout-tab-content"):
        with Horizontal(classes="editor-actions"):
            yield Button("Save", id=ids.SAVE_LAYOUT_BTN, variant="success")
            yield Button("Delete", id=ids.DELETE_LAYOUT_BTN, variant="error")
        yield Label("Key name", classes="section-label")
        yield Input(placeholder="Key name (required)...", id=ids.LAYOUT_KEY_INPUT)
        yield Label("Title", classes="section-label")
        yield Input(placeholder="Title...", id=ids.LAYOUT_TITLE_INPUT)
        with Horizontal(classes="section-header"):
            yield Label("Custom Fields", classes="section-label")
            yield Button("+ Add Field", id=ids.ADD_FIELD_BTN, variant="success")
        yield Vertical(id=ids.FIELDS_LIST, classes="entry-list")
        with Horizontal(classes="section-header"):
            yield Label("Template", classes="section-label")
            yield Button("?", id=ids.TEMPLATE_HELP_BTN, variant="default")
        yield Static(TEMPLATE_HELP_TEXT, id=ids.TEMPLATE_HELP, classes="hidden")
        yield TextArea("", id=ids.LAYOUT_TEMPLATE)
