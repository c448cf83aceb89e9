"""Layout list tab composition."""

from __future__ import annotations

from textual.app import ComposeResult
from textual.containers import Horizontal, Vertical, VerticalScroll
from textual.widgets import Button, Label, Static

import ui.ids as ids


def compose_layouts_tab() -> ComposeResult:
    """Compose the layout list content.

    Yields:
        Textual widgets for the layout list tab
    """
    with Vertical(classes="layouts-tab-content"):
        with Horizontal(classes="section-header"):
            yield Label("Layouts", classes="section-label")
            yield Button("Refresh", id=ids.REFRESH_LAYOUTS_BTN, variant="default")
        yield Static("No layouts", id=ids.LAYOUT_LIST_EMPTY, classes="hidden")
        yield VerticalScroll(id=ids.LAYOUT_LIST)
