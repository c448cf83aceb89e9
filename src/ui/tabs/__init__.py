"""Tab modules for the cmsedit TUI."""

from ui.tabs.layout import compose_layout_tab
from ui.tabs.layouts import compose_layouts_tab
from ui.tabs.settings import compose_settings_tab

__all__ = [
    "compose_layout_tab",
    "compose_layouts_tab",
    "compose_settings_tab",
]
