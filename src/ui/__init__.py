"""UI module containing widgets, styles, dialogs and tab compositions."""

from ui.widgets import (
    CategoryItem,
    EditorPane,
    EntryItem,
    LayoutEditor,
    LayoutListItem,
    LayoutListView,
    SettingsEditor,
)
from ui.tabs import (
    compose_layout_tab,
    compose_layouts_tab,
    compose_settings_tab,
)
from ui import ids

__all__ = [
    # Widgets
    "CategoryItem",
    "EditorPane",
    "EntryItem",
    "LayoutEditor",
    "LayoutListItem",
    "LayoutListView",
    "SettingsEditor",
    # Tab composers
    "compose_layout_tab",
    "compose_layouts_tab",
    "compose_settings_tab",
]
