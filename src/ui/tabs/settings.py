"""Settings tab composition."""

from __future__ import annotations

from textual.app import ComposeResult
from textual.containers import Horizontal, Vertical, VerticalScroll
from textual.widgets import Button, Input, Label, Log, Static

import ui.ids as ids


def compose_settings_tab() -> ComposeResult:
    """Compose the settings content: one section per entry list,
    categories, and the backup panel.

    Yields:
        Textual widgets for the settings tab
    """
    with VerticalScroll(classes="settings-tab-content"):
        with Horizontal(classes="editor-actions"):
            yield Button("Save", id=ids.SAVE_SETTINGS_BTN, variant="success")
            yield Static("", id=ids.RESTART_HINT)

        for field_name, title, _ in ids.SETTINGS_SECTIONS:
            with Horizontal(classes="section-header"):
                yield Label(title, classes="section-label")
                yield Button("+ Add", id=ids.section_add_btn(field_name), variant="success")
            yield Vertical(id=ids.section_list(field_name), classes="entry-list")

        yield Label("Categories", classes="section-label")
        with Horizontal(classes="category-input-row"):
            yield Input(placeholder="New category...", id=ids.CATEGORY_INPUT)
            yield Button("+", id=ids.ADD_CATEGORY_BTN, variant="success")
        yield Vertical(id=ids.CATEGORY_LIST, classes="entry-list")

        yield Label("Database Backup", classes="section-label")
        with Horizontal(classes="backup-row"):
            yield Input(placeholder="Target bucket name...", id=ids.BACKUP_TARGET)
            yield Button("Create Backup", id=ids.BACKUP_BTN, variant="warning")
        yield Log(id=ids.BACKUP_LOG)
