"""Custom Textual widgets for cmsedit.

This package contains the editor panes and the list rows they display.
"""

from ui.widgets.entries import CategoryItem, EntryItem, LayoutListItem
from ui.widgets.editors import EditorPane, LayoutEditor, LayoutListView, SettingsEditor

__all__ = [
    # List rows
    "CategoryItem",
    "EntryItem",
    "LayoutListItem",
    # Editor panes
    "EditorPane",
    "LayoutEditor",
    "LayoutListView",
    "SettingsEditor",
]
