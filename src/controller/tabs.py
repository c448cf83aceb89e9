"""Tab coordination: the registry of open editor tabs.

Sessions push titles, dirty and loading flags here; the UI observes the
registry through callbacks and redraws tab labels and spinners. Loading is
tracked per tab so one tab's request never shows a spinner on another.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Callable, Protocol

log = logging.getLogger(__name__)

LAYOUTS_TAB_ID = "tab-layouts"
SETTINGS_TAB_ID = "tab-settings"
LAYOUT_TAB_PREFIX = "tab-layout-"

# Tab kinds
KIND_LAYOUT = "layout"
KIND_LAYOUTS = "layouts"
KIND_SETTINGS = "settings"


def layout_tab_id(doc_id: str) -> str:
    """Tab id for the layout with the given document id."""
    return f"{LAYOUT_TAB_PREFIX}{doc_id}"


class TabCoordinator(Protocol):
    """What sessions need from the tab owner."""

    def set_title(self, tab_id: str, text: str) -> None: ...

    def set_dirty(self, tab_id: str, dirty: bool) -> None: ...

    def set_loading(self, tab_id: str, loading: bool) -> None: ...

    def change_tab_id(self, old_id: str, new_id: str, new_doc_id: str) -> None: ...

    def close_tab(self, tab_id: str) -> None: ...

    def mark_data_stale(self, list_tab_id: str, stale: bool) -> None: ...

    def navigate_to(self, path: str) -> None: ...

    def notify(self, message: str) -> None: ...


@dataclass
class TabState:
    """Display state of one open tab."""

    tab_id: str
    kind: str
    doc_id: str | None = None
    title: str = ""
    dirty: bool = False
    loading: bool = False

    @property
    def label(self) -> str:
        """Tab label with an unsaved-changes marker."""
        title = self.title or self.tab_id
        return f"{title} *" if self.dirty else title


class TabRegistry:
    """In-memory TabCoordinator.

    At most one tab exists per tab id, so a document id is never edited in
    two tabs at once.
    """

    def __init__(
        self,
        on_change: Callable[[TabState], None] | None = None,
        on_notify: Callable[[str], None] | None = None,
        on_navigate: Callable[[str], None] | None = None,
        on_close: Callable[[str], None] | None = None,
        on_rename: Callable[[str, str], None] | None = None,
    ) -> None:
        """Initialize the registry.

        Args:
            on_change: Called with the tab state after any display change
            on_notify: Called with user-visible notification text
            on_navigate: Called with a navigation path
            on_close: Called with the id of a closed tab
            on_rename: Called with (old_id, new_id) after a tab id change
        """
        self._tabs: dict[str, TabState] = {}
        self._stale: dict[str, bool] = {}
        self._on_change = on_change
        self._on_notify = on_notify
        self._on_navigate = on_navigate
        self._on_close = on_close
        self._on_rename = on_rename

    @property
    def tabs(self) -> list[TabState]:
        return list(self._tabs.values())

    def get(self, tab_id: str) -> TabState | None:
        return self._tabs.get(tab_id)

    def __contains__(self, tab_id: str) -> bool:
        return tab_id in self._tabs

    def open_tab(
        self, tab_id: str, kind: str, title: str = "", doc_id: str | None = None
    ) -> tuple[TabState, bool]:
        """Register a tab, or return the existing one with that id.

        Returns:
            Tuple of (tab state, created) where created is False if the tab
            was already open.
        """
        existing = self._tabs.get(tab_id)
        if existing is not None:
            return existing, False
        tab = TabState(tab_id=tab_id, kind=kind, doc_id=doc_id, title=title)
        self._tabs[tab_id] = tab
        log.debug(f"Opened tab {tab_id}")
        return tab, True

    def _update(self, tab_id: str, **changes) -> None:
        tab = self._tabs.get(tab_id)
        if tab is None:
            # A request can finish after its tab was closed
            log.debug(f"Ignoring update for unknown tab {tab_id}: {changes}")
            return
        for name, value in changes.items():
            setattr(tab, name, value)
        if self._on_change:
            self._on_change(tab)

    def set_title(self, tab_id: str, text: str) -> None:
        self._update(tab_id, title=text)

    def set_dirty(self, tab_id: str, dirty: bool) -> None:
        self._update(tab_id, dirty=dirty)

    def set_loading(self, tab_id: str, loading: bool) -> None:
        self._update(tab_id, loading=loading)

    def is_loading(self, tab_id: str) -> bool:
        tab = self._tabs.get(tab_id)
        return tab.loading if tab else False

    def change_tab_id(self, old_id: str, new_id: str, new_doc_id: str) -> None:
        """Re-key a tab (first save of a new document), keeping its position."""
        tab = self._tabs.get(old_id)
        if tab is None:
            log.warning(f"Cannot rename unknown tab {old_id}")
            return
        if new_id in self._tabs and new_id != old_id:
            log.warning(f"Tab {new_id} already open, replacing it with {old_id}")
        tab.tab_id = new_id
        tab.doc_id = new_doc_id
        self._tabs = {
            (new_id if key == old_id else key): value
            for key, value in self._tabs.items()
            if not (key == new_id and key != old_id)
        }
        log.debug(f"Renamed tab {old_id} -> {new_id}")
        if self._on_rename:
            self._on_rename(old_id, new_id)
        if self._on_change:
            self._on_change(tab)

    def close_tab(self, tab_id: str) -> None:
        if self._tabs.pop(tab_id, None) is None:
            return
        log.debug(f"Closed tab {tab_id}")
        if self._on_close:
            self._on_close(tab_id)

    def mark_data_stale(self, list_tab_id: str, stale: bool) -> None:
        self._stale[list_tab_id] = stale

    def is_stale(self, list_tab_id: str) -> bool:
        return self._stale.get(list_tab_id, False)

    def navigate_to(self, path: str) -> None:
        log.debug(f"Navigate to {path}")
        if self._on_navigate:
            self._on_navigate(path)

    def notify(self, message: str) -> None:
        log.info(message)
        if self._on_notify:
            self._on_notify(message)
