"""Main TUI application for cmsedit."""

from __future__ import annotations

import logging
from pathlib import Path
from typing import TYPE_CHECKING

from textual import on
from textual.app import App, ComposeResult
from textual.binding import Binding
from textual.containers import Horizontal
from textual.css.query import NoMatches
from textual.widgets import Button, Footer, Label, Static, TabbedContent, TabPane

from controller import (
    KIND_LAYOUT,
    KIND_LAYOUTS,
    KIND_SETTINGS,
    LAYOUTS_TAB_ID,
    SETTINGS_TAB_ID,
    ConfigSession,
    DocumentSession,
    TabRegistry,
    TabState,
    layout_tab_id,
)
from model import NEW_DOCUMENT_ID
from ui.channel import ScreenModalChannel
from ui.ids import css
from ui.widgets import EditorPane, LayoutEditor, LayoutListView, SettingsEditor
import ui.ids as ids

if TYPE_CHECKING:
    from backend import PersistenceClient

log = logging.getLogger(__name__)

APP_CSS = (Path(__file__).parent / "ui" / "styles.css").read_text()

# Exit result asking the CLI to launch the app again
RESTART = "restart"

DISCARD_PROMPT = "Discard unsaved changes?"


class CmsEditTUI(App):
    """TUI for editing CMS layouts and configuration."""

    TITLE = "cmsedit"
    ENABLE_COMMAND_PALETTE = False
    CSS = APP_CSS

    BINDINGS = [
        Binding("ctrl+s", "save", "Save", show=True),
        Binding("ctrl+n", "new_layout", "New Layout", show=True),
        Binding("ctrl+w", "close_tab", "Close Tab", show=True),
        Binding("ctrl+q", "quit", "Quit", show=True),
    ]

    def __init__(
        self,
        client: PersistenceClient,
        start_path: str = "/layouts",
        api_url: str = "",
        version: str = "0.0",
    ) -> None:
        super().__init__()
        self.client = client
        self.start_path = start_path
        self.api_url = api_url
        self.version = version
        self.tabs = TabRegistry(
            on_change=self._on_tab_changed,
            on_notify=self._show_notification,
            on_navigate=self.navigate_to,
            on_close=self._on_tab_closed,
            on_rename=self._on_tab_renamed,
        )
        self.channel = ScreenModalChannel(self)
        # Registry tab id -> TabPane id (widget ids cannot change after mount)
        self._panes: dict[str, str] = {}
        self._pane_counter = 0

    def compose(self) -> ComposeResult:
        with Horizontal(id=ids.HEADER_CONTAINER):
            yield Label(f"cmsedit v{self.version}  {self.api_url}", id=ids.HEADER_TITLE)
            yield Button("Layouts", id=ids.LAYOUTS_BTN, variant="default")
            yield Button("New Layout", id=ids.NEW_LAYOUT_BTN, variant="success")
            yield Button("Settings", id=ids.SETTINGS_BTN, variant="default")
        yield TabbedContent(id=ids.EDITOR_TABS)
        yield Static("", id=ids.STATUS_BAR)
        yield Footer()

    # =========================================================================
    # Lifecycle
    # =========================================================================

    def on_mount(self) -> None:
        """Called when the app is mounted."""
        self.navigate_to(self.start_path)

    # =========================================================================
    # Navigation
    # =========================================================================

    def navigate_to(self, path: str) -> None:
        """Open (or focus) the tab for a path once the current message is done."""
        self.call_later(self._open_path, path)

    async def _open_path(self, path: str) -> None:
        parts = [p for p in path.strip("/").split("/") if p]
        if parts == ["layouts"]:
            await self.open_layout_list()
        elif len(parts) == 2 and parts[0] == "layouts":
            await self.open_layout(parts[1])
        elif parts == ["settings"]:
            await self.open_settings()
        else:
            log.warning(f"Unknown navigation path: {path}")
            self.notify(f"Unknown location: {path}", severity="warning")

    async def open_layout_list(self) -> None:
        tab, created = self.tabs.open_tab(LAYOUTS_TAB_ID, KIND_LAYOUTS, title="Layouts")
        if created:
            await self._add_pane(tab, LayoutListView(self.client, self.tabs))
        else:
            self._activate(tab.tab_id)

    async def open_layout(self, doc_id: str) -> None:
        tab, created = self.tabs.open_tab(layout_tab_id(doc_id), KIND_LAYOUT, doc_id=doc_id)
        if not created:
            self._activate(tab.tab_id)
            return
        session = DocumentSession(self.client, self.tabs, self.channel, doc_id, tab_id=tab.tab_id)
        await self._add_pane(tab, LayoutEditor(session))

    async def open_settings(self) -> None:
        tab, created = self.tabs.open_tab(SETTINGS_TAB_ID, KIND_SETTINGS, title="Settings")
        if not created:
            self._activate(tab.tab_id)
            return
        session = ConfigSession(self.client, self.tabs, self.channel, on_restart=self.restart)
        await self._add_pane(tab, SettingsEditor(session))

    async def _add_pane(self, tab: TabState, content) -> None:
        self._pane_counter += 1
        pane_id = f"pane-{self._pane_counter}"
        self._panes[tab.tab_id] = pane_id
        tabbed = self.query_one(css(ids.EDITOR_TABS), TabbedContent)
        await tabbed.add_pane(TabPane(tab.label, content, id=pane_id))
        tabbed.active = pane_id
        # Updates made while the pane was mounting may not have reached it
        self._on_tab_changed(tab)

    def _activate(self, tab_id: str) -> None:
        pane_id = self._panes.get(tab_id)
        if pane_id is not None:
            self.query_one(css(ids.EDITOR_TABS), TabbedContent).active = pane_id

    def _tab_id_for_pane(self, pane_id: str | None) -> str | None:
        for tab_id, candidate in self._panes.items():
            if candidate == pane_id:
                return tab_id
        return None

    def restart(self) -> None:
        """Exit and ask the CLI to start a fresh app."""
        log.info("Restart requested")
        self.exit(RESTART)

    # =========================================================================
    # Tab registry callbacks
    # =========================================================================

    def _on_tab_changed(self, tab: TabState) -> None:
        pane_id = self._panes.get(tab.tab_id)
        if pane_id is None:
            return
        try:
            tabbed = self.query_one(css(ids.EDITOR_TABS), TabbedContent)
            tabbed.get_tab(pane_id).label = tab.label
            tabbed.get_pane(pane_id).loading = tab.loading
        except (NoMatches, ValueError):
            log.debug(f"Pane {pane_id} for {tab.tab_id} not mounted yet")

    def _on_tab_closed(self, tab_id: str) -> None:
        pane_id = self._panes.pop(tab_id, None)
        if pane_id is None:
            return
        self.query_one(css(ids.EDITOR_TABS), TabbedContent).remove_pane(pane_id)

    def _on_tab_renamed(self, old_id: str, new_id: str) -> None:
        pane_id = self._panes.pop(old_id, None)
        if pane_id is not None:
            self._panes[new_id] = pane_id

    def _show_notification(self, message: str) -> None:
        self.notify(message)
        try:
            self.query_one(css(ids.STATUS_BAR), Static).update(message)
        except NoMatches:
            pass

    @on(TabbedContent.TabActivated)
    def on_tab_activated(self, event: TabbedContent.TabActivated) -> None:
        """Reload the layout list when it is shown after a save or delete."""
        tab_id = self._tab_id_for_pane(event.pane.id)
        if tab_id == LAYOUTS_TAB_ID and self.tabs.is_stale(LAYOUTS_TAB_ID):
            event.pane.query_one(LayoutListView).reload()

    # =========================================================================
    # Header buttons and actions
    # =========================================================================

    @on(Button.Pressed, css(ids.LAYOUTS_BTN))
    def on_layouts_pressed(self, event: Button.Pressed) -> None:
        self.navigate_to("/layouts")

    @on(Button.Pressed, css(ids.NEW_LAYOUT_BTN))
    def on_new_layout_pressed(self, event: Button.Pressed) -> None:
        self.action_new_layout()

    @on(Button.Pressed, css(ids.SETTINGS_BTN))
    def on_settings_pressed(self, event: Button.Pressed) -> None:
        self.navigate_to("/settings")

    def action_new_layout(self) -> None:
        self.navigate_to(f"/layouts/{NEW_DOCUMENT_ID}")

    def _active_editor(self) -> tuple[str, EditorPane] | None:
        tabbed = self.query_one(css(ids.EDITOR_TABS), TabbedContent)
        tab_id = self._tab_id_for_pane(tabbed.active)
        if tab_id is None:
            return None
        try:
            return tab_id, tabbed.get_pane(tabbed.active).query_one(EditorPane)
        except NoMatches:
            return None

    def action_save(self) -> None:
        active = self._active_editor()
        if active is not None:
            active[1].request_save()

    def action_close_tab(self) -> None:
        """Close the active tab, asking first when it has unsaved changes."""
        tabbed = self.query_one(css(ids.EDITOR_TABS), TabbedContent)
        tab_id = self._tab_id_for_pane(tabbed.active)
        if tab_id is None:
            return
        active = self._active_editor()
        editor = active[1] if active else None
        self.run_worker(self._close_tab(tab_id, editor), group="close")

    async def _close_tab(self, tab_id: str, editor: EditorPane | None) -> None:
        if editor is not None:
            if editor.session.dirty and not await self.channel.confirm(DISCARD_PROMPT):
                return
            editor.session.close()
        self.tabs.close_tab(tab_id)
